"""Define the symmetric eigen-decomposition used to extract averaged quaternions."""

from __future__ import annotations

from typing import Protocol, Tuple

import numpy as np

from quaternion_averager.errors import EigenDecompositionError

EigenPairs = Tuple[np.ndarray, np.ndarray]  # (eigenvalues, eigenvectors as columns)


class SymmetricEigenSolver(Protocol):
    """A solver for the eigenvalues and eigenvectors of a real symmetric matrix."""

    def __call__(self, matrix: np.ndarray) -> EigenPairs:
        """Decompose the given symmetric matrix.

        :param matrix: Real symmetric (n, n) matrix
        :return: Pair of eigenvalues (n,) and eigenvectors (n, n), one eigenvector per column
        """
        ...


def numpy_symmetric_eigen(matrix: np.ndarray) -> EigenPairs:
    """Decompose a real symmetric matrix using NumPy's `eigh` (LAPACK syevd).

    :param matrix: Real symmetric (n, n) matrix
    :return: Eigenvalues in ascending order and the corresponding unit eigenvectors as columns
    :raises EigenDecompositionError: If the decomposition does not converge
    """
    try:
        eigenvalues, eigenvectors = np.linalg.eigh(matrix)
    except np.linalg.LinAlgError as error:
        raise EigenDecompositionError(f"Symmetric eigen-decomposition failed: {error}") from error

    return eigenvalues, eigenvectors


def dominant_eigenvector(
    matrix: np.ndarray,
    solver: SymmetricEigenSolver = numpy_symmetric_eigen,
) -> np.ndarray:
    """Compute the unit eigenvector associated with the largest eigenvalue of a symmetric matrix.

    If the largest eigenvalue is repeated, the returned eigenvector is whichever the solver
    reports first for that value; no tie-breaking is attempted.

    :param matrix: Real symmetric (n, n) matrix
    :param solver: Symmetric eigensolver used for the decomposition
    :return: Unit-norm eigenvector of shape (n,)
    :raises EigenDecompositionError: If the solver fails or returns malformed output
    """
    n = matrix.shape[0]
    eigenvalues, eigenvectors = solver(matrix)
    eigenvalues = np.asarray(eigenvalues, dtype=float)
    eigenvectors = np.asarray(eigenvectors, dtype=float)

    if eigenvalues.shape != (n,) or eigenvectors.shape != (n, n):
        shapes = f"{eigenvalues.shape} and {eigenvectors.shape}"
        raise EigenDecompositionError(f"Eigensolver returned unexpected shapes {shapes}.")
    if not (np.all(np.isfinite(eigenvalues)) and np.all(np.isfinite(eigenvectors))):
        raise EigenDecompositionError("Eigensolver returned non-finite values.")

    largest_idx = int(np.argmax(eigenvalues))
    principal = eigenvectors[:, largest_idx]

    # Eigenvectors are nominally unit-length, but rounding can leave the norm slightly off
    norm = float(np.linalg.norm(principal))
    if norm == 0:
        raise EigenDecompositionError("Eigensolver returned a zero-valued eigenvector.")
    return principal / norm
