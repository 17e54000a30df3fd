"""Define a stateful accumulator that averages weighted unit quaternions.

The average is the maximum-likelihood orientation described by Markley et al.:
    F. L. Markley, Y. Cheng, J. L. Crassidis, Y. Oshman, "Averaging Quaternions",
    Journal of Guidance, Control, and Dynamics, 30(4), 2007.

Each sample q with weight w contributes w * (q q^T) to a symmetric 4x4 matrix M. The average
is the unit eigenvector of M with the largest eigenvalue, i.e. the unit q maximizing q^T M q.
Because q q^T == (-q)(-q)^T, the sign chosen for each sample does not affect the result.
"""

from __future__ import annotations

import numpy as np

from quaternion_averager.eigen import (
    SymmetricEigenSolver,
    dominant_eigenvector,
    numpy_symmetric_eigen,
)
from quaternion_averager.errors import InvalidWeightError, NoSamplesError
from quaternion_averager.kinematics import QuaternionLike, UnitQuaternion, as_quaternion_array
from quaternion_averager.logging import log_debug


class QuaternionAverager:
    """Accumulate weighted unit quaternions and compute their average orientation.

    The returned average is either q or -q (both express the same rotation); its sign is not
    canonicalized. Use `UnitQuaternion.canonical()` if a non-negative scalar part is required.

    Instances are not thread-safe; concurrent producers must serialize access themselves.
    """

    def __init__(self, solver: SymmetricEigenSolver = numpy_symmetric_eigen) -> None:
        """Initialize an empty averager.

        :param solver: Symmetric eigensolver used when computing the average
        """
        self._solver = solver
        self._matrix = np.zeros((4, 4))
        self._weight_sum = 0.0
        self._num_samples = 0

    @property
    def matrix(self) -> np.ndarray:
        """Return a copy of the accumulated weighted sum of outer products."""
        return self._matrix.copy()

    @property
    def weight_sum(self) -> float:
        """Return the total weight accumulated so far."""
        return self._weight_sum

    @property
    def num_samples(self) -> int:
        """Return the number of samples added, including any with zero weight."""
        return self._num_samples

    @property
    def is_empty(self) -> bool:
        """Return True if no positively weighted sample has been added.

        Weights small enough to underflow the accumulated matrix to zero also count as empty.
        """
        return self._weight_sum <= 0.0 or not self._matrix.any()

    def add_quaternion(self, quaternion: QuaternionLike) -> None:
        """Add a unit quaternion with weight 1.0 to the averager.

        :param quaternion: Unit quaternion (or [w,x,y,z] array-like) to be accumulated
        """
        self.add_quaternion_weighted(quaternion, 1.0)

    def add_quaternion_weighted(self, quaternion: QuaternionLike, weight: float) -> None:
        """Add a unit quaternion with the given non-negative weight to the averager.

        The quaternion is assumed to be normalized already and is not re-normalized here.

        :param quaternion: Unit quaternion (or [w,x,y,z] array-like) to be accumulated
        :param weight: Non-negative weight of the sample
        :raises InvalidWeightError: If the weight is negative or not finite
        :raises ValueError: If the quaternion is not a finite four-element vector
        """
        weight = float(weight)
        if not np.isfinite(weight) or weight < 0.0:
            raise InvalidWeightError(weight)

        q = as_quaternion_array(quaternion)
        if weight == 0.0:
            log_debug(f"Zero-weight quaternion {q} does not change the average.")

        self._matrix += weight * np.outer(q, q)  # Rank-1 symmetric update
        self._weight_sum += weight
        self._num_samples += 1

    def calc_average(self) -> UnitQuaternion:
        """Compute the weighted average of all quaternions added so far.

        The accumulated state is not modified, so this may be called repeatedly as samples arrive.

        :return: Unit quaternion of the average orientation (sign not canonicalized)
        :raises NoSamplesError: If no positively weighted sample has been added
        :raises EigenDecompositionError: If the eigensolver fails
        """
        if self.is_empty:
            raise NoSamplesError(
                f"Cannot average quaternions with zero total weight ({self._num_samples} samples).",
            )

        # Scaling by the total weight leaves the eigenvectors unchanged
        scaled = self._matrix / self._weight_sum
        principal = dominant_eigenvector(scaled, self._solver)

        log_debug(f"Averaged {self._num_samples} quaternions (total weight {self._weight_sum}).")
        return UnitQuaternion.from_array(principal)

    def reset(self) -> None:
        """Discard all accumulated samples, returning the averager to its empty state."""
        self._matrix = np.zeros((4, 4))
        self._weight_sum = 0.0
        self._num_samples = 0
