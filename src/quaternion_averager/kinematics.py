"""Define a dataclass to represent 3D orientations as unit quaternions."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Sequence, Union

import numpy as np
from transforms3d.euler import euler2quat, quat2euler
from transforms3d.quaternions import axangle2quat, mat2quat, quat2mat


@dataclass
class UnitQuaternion:
    """A unit quaternion representing a 3D orientation."""

    w: float  # Scalar component of the quaternion
    x: float  # x-component of the quaternion vector
    y: float  # y-component of the quaternion vector
    z: float  # z-component of the quaternion vector

    def __post_init__(self) -> None:
        """Normalize the quaternion after it is initialized."""
        self.normalize()

    def normalize(self) -> None:
        """Normalize the quaternion to ensure that it is a unit quaternion."""
        norm = float(np.linalg.norm(self.to_array()))
        if not np.isfinite(norm) or norm == 0:
            raise ValueError(f"Cannot normalize a zero-valued or non-finite quaternion: {self}.")

        self.w /= norm
        self.x /= norm
        self.y /= norm
        self.z /= norm

    def __neg__(self) -> UnitQuaternion:
        """Return the negated quaternion, which expresses the same rotation."""
        return UnitQuaternion(-self.w, -self.x, -self.y, -self.z)

    @classmethod
    def identity(cls) -> UnitQuaternion:
        """Construct a quaternion corresponding to the identity rotation."""
        return UnitQuaternion(w=1, x=0, y=0, z=0)

    def to_array(self) -> np.ndarray:
        """Convert the quaternion to a NumPy array of the form [w,x,y,z]."""
        return np.array([self.w, self.x, self.y, self.z], dtype=float)

    @classmethod
    def from_array(cls, arr: np.ndarray) -> UnitQuaternion:
        """Construct a quaternion from a NumPy array of the form [w,x,y,z]."""
        arr = np.asarray(arr, dtype=float)
        if arr.shape != (4,):
            raise ValueError(f"Quaternion must be a four-element vector, got shape {arr.shape}.")
        return cls(float(arr[0]), float(arr[1]), float(arr[2]), float(arr[3]))

    @classmethod
    def from_axis_angle(cls, axis: Sequence[float], angle_rad: float) -> UnitQuaternion:
        """Construct a quaternion rotating by the given angle about the given axis.

        :param axis: Three-element rotation axis (need not be unit length)
        :param angle_rad: Rotation angle (radians) about the axis
        :return: Unit quaternion corresponding to the axis-angle rotation
        """
        axis_arr = np.asarray(axis, dtype=float)
        if axis_arr.shape != (3,) or np.linalg.norm(axis_arr) == 0:
            raise ValueError(f"Rotation axis must be a non-zero 3-vector, got {axis}.")
        return cls.from_array(axangle2quat(axis_arr, angle_rad))

    def canonical(self) -> UnitQuaternion:
        """Return whichever of q or -q has a non-negative scalar component."""
        return -self if self.w < 0 else UnitQuaternion(self.w, self.x, self.y, self.z)

    def to_euler_rpy(self) -> tuple[float, float, float]:
        """Convert the quaternion to Euler roll, pitch, and yaw angles.

        :return: Tuple of (roll, pitch, yaw) angles in radians
        """
        r, p, y = quat2euler(self.to_array(), axes="sxyz")
        return (r, p, y)

    @classmethod
    def from_euler_rpy(cls, roll_rad: float, pitch_rad: float, yaw_rad: float) -> UnitQuaternion:
        """Construct a quaternion from three fixed-frame Euler angles.

        Note: We use the axes "sxyz", meaning roll, then pitch, then yaw, all in a fixed frame.

        :param roll_rad: Roll angle about the x-axis (radians)
        :param pitch_rad: Pitch angle about the y-axis (radians)
        :param yaw_rad: Yaw angle about the z-axis (radians)
        :return: Unit quaternion corresponding to the Euler angles
        """
        return cls.from_array(euler2quat(roll_rad, pitch_rad, yaw_rad, axes="sxyz"))

    def to_rotation_matrix(self) -> np.ndarray:
        """Convert the quaternion to a 3x3 rotation matrix."""
        r_matrix = quat2mat(self.to_array())
        assert r_matrix.shape == (3, 3), f"Expected 3x3 rotation matrix but found {r_matrix.shape}."
        return r_matrix

    @classmethod
    def from_rotation_matrix(cls, r_matrix: np.ndarray) -> UnitQuaternion:
        """Construct a quaternion from a 3x3 rotation matrix."""
        if r_matrix.shape != (3, 3):
            raise ValueError(f"Expected a 3x3 matrix; received {r_matrix.shape}.")

        q_array = mat2quat(r_matrix)  # Form of transforms3d quaternions: [w, x, y, z]
        return cls.from_array(q_array)

    def approx_equal(self, other: UnitQuaternion, rtol: float = 1e-05, atol: float = 1e-08) -> bool:
        """Check whether another quaternion is approximately equal to this one.

        Note: A quaternion is considered equal to its negation, which expresses the same rotation.
        """
        self_array = self.to_array()
        other_array = other.to_array()

        pos_case = np.allclose(self_array, other_array, rtol=rtol, atol=atol)
        neg_case = np.allclose(-self_array, other_array, rtol=rtol, atol=atol)

        return pos_case or neg_case

    def to_yaml_dict(self) -> dict[str, list[float]]:
        """Convert the quaternion into a dictionary suitable for YAML export."""
        return {"wxyz": [float(v) for v in self.to_array()]}

    @classmethod
    def from_yaml(cls, data: Any) -> UnitQuaternion:
        """Construct a quaternion from data imported from YAML.

        Accepted forms are a `[w, x, y, z]` list, a dictionary with a `wxyz` list,
        or a dictionary with an `rpy` list of fixed-frame Euler angles (radians).

        :param data: Quaternion data imported from YAML
        :return: Unit quaternion constructed from the data
        """
        if isinstance(data, (list, tuple)):
            return cls.from_array(np.array(data, dtype=float))

        if isinstance(data, dict):
            if "wxyz" in data:
                return cls.from_array(np.array(data["wxyz"], dtype=float))
            if "rpy" in data:
                rpy = data["rpy"]
                if len(rpy) != 3:
                    raise ValueError(f"Expected three Euler angles, got {len(rpy)}: {rpy}.")
                return cls.from_euler_rpy(float(rpy[0]), float(rpy[1]), float(rpy[2]))

        raise ValueError(f"Cannot construct a UnitQuaternion from YAML data: {data}.")


QuaternionLike = Union[UnitQuaternion, Sequence[float], np.ndarray]


def as_quaternion_array(quaternion: QuaternionLike) -> np.ndarray:
    """Convert a quaternion (or a [w,x,y,z] array-like) into a float NumPy array.

    The values are copied but never re-normalized.

    :param quaternion: UnitQuaternion instance or four-element [w,x,y,z] sequence
    :return: New array of shape (4,)
    """
    if isinstance(quaternion, UnitQuaternion):
        return quaternion.to_array()

    arr = np.array(quaternion, dtype=float)
    if arr.shape != (4,):
        raise ValueError(f"Quaternion must be a four-element vector, got shape {arr.shape}.")
    if not np.all(np.isfinite(arr)):
        raise ValueError(f"Quaternion components must be finite, got {arr}.")
    return arr
