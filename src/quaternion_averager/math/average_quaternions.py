"""Utility functions to compute weighted averages of collections of quaternions."""

from __future__ import annotations

from typing import Sequence

from quaternion_averager.averager import QuaternionAverager
from quaternion_averager.errors import NoSamplesError
from quaternion_averager.kinematics import QuaternionLike, UnitQuaternion


def compute_average_quaternion(
    quaternions: Sequence[QuaternionLike],
    weights: Sequence[float] | None = None,
) -> UnitQuaternion:
    """Compute a maximum-likelihood average of quaternions.

    Uses eigen-decomposition of the weighted sum of outer products.
        Reference: Method 2 from this answer: https://math.stackexchange.com/a/3435296/614782

    :param quaternions: Sequence of unit quaternions (non-empty)
    :param weights: Optional sequence of per-quaternion weights; defaults to uniform weighting
    :return: A UnitQuaternion corresponding to the principal eigenvector
    :raises NoSamplesError: If `quaternions` is empty or all weights are zero
    :raises ValueError: If `weights` length mismatches
    """
    if len(quaternions) == 0:
        raise NoSamplesError("Cannot compute average of zero quaternions.")

    n = len(quaternions)
    if weights is None:
        weights = [1.0] * n
    if len(weights) != n:
        lw = len(weights)
        raise ValueError(f"Quaternions and weights must have the same length, got {n} and {lw}.")

    averager = QuaternionAverager()
    for q, w in zip(quaternions, weights):
        averager.add_quaternion_weighted(q, w)

    return averager.calc_average()
