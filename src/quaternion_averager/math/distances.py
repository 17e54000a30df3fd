"""Define utility functions to compute distances between orientations."""

from __future__ import annotations

from collections.abc import Sequence

import numpy as np

from quaternion_averager.kinematics import QuaternionLike, as_quaternion_array


def angular_distance_rad(q_a: QuaternionLike, q_b: QuaternionLike) -> float:
    """Compute the angle (in radians) of the rotation taking one orientation to another.

    Note: The result is unaffected by the signs of the quaternions.

    :param q_a: First unit quaternion
    :param q_b: Second unit quaternion
    :return: Rotation angle (radians, between 0 and pi) separating the orientations
    """
    dot = abs(float(np.dot(as_quaternion_array(q_a), as_quaternion_array(q_b))))
    return 2.0 * float(np.arccos(min(dot, 1.0)))


def chordal_cost(
    average: QuaternionLike,
    quaternions: Sequence[QuaternionLike],
    weights: Sequence[float] | None = None,
) -> float:
    """Evaluate the weighted cost minimized by the eigenvector quaternion average.

    The cost is sum_i w_i * (1 - (q_i . q_avg)^2), which is zero only if every sample
    expresses the same rotation as the average.

    :param average: Candidate average orientation
    :param quaternions: Sequence of unit quaternions that were averaged
    :param weights: Optional sequence of per-quaternion weights; defaults to uniform weighting
    :return: Non-negative weighted cost of the candidate average
    :raises ValueError: If `weights` length mismatches
    """
    if weights is None:
        weights = [1.0] * len(quaternions)
    if len(weights) != len(quaternions):
        raise ValueError("Weights must have the same length as quaternions.")

    avg = as_quaternion_array(average)
    cost = 0.0
    for q, w in zip(quaternions, weights):
        dot = float(np.dot(as_quaternion_array(q), avg))
        cost += w * (1.0 - dot * dot)
    return cost


def compute_distances_to_others_rad(
    quaternion_idx: int,
    quaternions: Sequence[QuaternionLike],
) -> list[float]:
    """Compute angular distances (radians) from one orientation to all, itself included.

    :param quaternion_idx: Index of the reference orientation in `quaternions`
    :param quaternions: Sequence of unit quaternions (length > 1)
    :return: List of distances from `quaternions[quaternion_idx]` to each orientation
    :raises ValueError: If fewer than 2 quaternions are provided or the index is out of range
    """
    if len(quaternions) < 2:
        error_msg = f"Need at least 2 quaternions to compute distances, got {len(quaternions)}."
        raise ValueError(error_msg)

    if not (0 <= quaternion_idx < len(quaternions)):
        n = len(quaternions)
        error_msg = f"Index {quaternion_idx} out of range for sequence of length {n}."
        raise ValueError(error_msg)

    origin = quaternions[quaternion_idx]
    return [angular_distance_rad(origin, q) for q in quaternions]


def identify_worst_outlier(quaternions: Sequence[QuaternionLike]) -> int:
    """Identify the index of the orientation farthest (on average) from the others.

    :param quaternions: Sequence of unit quaternions (length > 1)
    :return: Index of the orientation with the largest mean angular distance to the others
    :raises ValueError: If fewer than 2 quaternions are provided
    """
    if len(quaternions) < 2:
        error_msg = f"Cannot identify an outlier from {len(quaternions)} quaternions."
        raise ValueError(error_msg)

    worst_idx = 0
    worst_avg_dist_rad = -1.0
    for idx in range(len(quaternions)):
        distances = compute_distances_to_others_rad(idx, quaternions)
        avg_dist_rad = float(np.mean(distances))
        if avg_dist_rad > worst_avg_dist_rad:
            worst_avg_dist_rad = avg_dist_rad
            worst_idx = idx

    return worst_idx
