"""Define a class to aggregate and average estimated orientations of named frames."""

from __future__ import annotations

from quaternion_averager.averager import QuaternionAverager
from quaternion_averager.kinematics import QuaternionLike, UnitQuaternion


class OrientationEstimateAverager:
    """Aggregate noisy orientation estimates per frame by weighted quaternion averaging.

    Estimates are only ever added; call `reset` to start over.
    """

    def __init__(self) -> None:
        """Initialize the averager without any frames."""
        self._averagers: dict[str, QuaternionAverager] = {}
        self._averages: dict[str, UnitQuaternion | None] = {}

    @property
    def frames(self) -> list[str]:
        """Retrieve the names of all frames that have received an estimate."""
        return list(self._averagers)

    def update(self, frame_name: str, orientation: QuaternionLike, weight: float = 1.0) -> None:
        """Add a new orientation estimate for the given frame.

        :param frame_name: Identifier of the relevant reference frame
        :param orientation: New noisy orientation estimate
        :param weight: Non-negative confidence weight of the estimate
        :raises InvalidWeightError: If the weight is negative or not finite
        """
        averager = self._averagers.get(frame_name, QuaternionAverager())
        averager.add_quaternion_weighted(orientation, weight)
        self._averagers[frame_name] = averager  # Only register frames after a valid estimate
        self._averages.pop(frame_name, None)  # Clear the cached average for this frame

    def get(self, frame_name: str) -> UnitQuaternion | None:
        """Retrieve, or compute and cache, the current averaged orientation for a frame.

        :param frame_name: Reference frame identifier
        :return: Averaged orientation, or None if the frame has no positively weighted estimates
        """
        if frame_name in self._averages:
            return self._averages[frame_name]  # Return the cached average if previously computed

        averager = self._averagers.get(frame_name)
        if averager is None or averager.is_empty:
            return None

        self._averages[frame_name] = averager.calc_average()
        return self._averages[frame_name]

    def compute_all_averages(self) -> dict[str, UnitQuaternion | None]:
        """Compute and return a map from each frame name to its averaged orientation."""
        return {frame: self.get(frame) for frame in self._averagers}

    def reset(self) -> None:
        """Clear all stored estimates and cached averages."""
        self._averagers.clear()
        self._averages.clear()
