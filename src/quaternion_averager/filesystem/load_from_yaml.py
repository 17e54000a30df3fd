"""Define functions for loading weighted quaternion samples from YAML."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

import yaml

from quaternion_averager.averager import QuaternionAverager
from quaternion_averager.kinematics import UnitQuaternion
from quaternion_averager.logging import log_error, log_info

if TYPE_CHECKING:
    from pathlib import Path


@dataclass
class WeightedQuaternion:
    """A unit quaternion sample paired with its averaging weight."""

    quaternion: UnitQuaternion
    weight: float = 1.0

    @classmethod
    def from_yaml(cls, data: Any) -> WeightedQuaternion:
        """Construct a weighted sample from data imported from YAML.

        A bare list is read as a `[w, x, y, z]` quaternion with weight 1.0. A dictionary
        holds either `wxyz` or `rpy` data and an optional `weight`.

        :param data: Sample data imported from YAML
        :return: Weighted quaternion sample
        """
        weight = float(data.get("weight", 1.0)) if isinstance(data, dict) else 1.0
        return cls(UnitQuaternion.from_yaml(data), weight)


def load_yaml_into_dict(yaml_path: Path) -> dict[str, Any]:
    """Load data from a YAML file into a Python dictionary.

    :param yaml_path: Path to the YAML file to be imported
    :return: Dictionary mapping strings to values (empty if the YAML file is nonexistent/invalid)
    """
    if not yaml_path.exists():
        log_error(f"The YAML path {yaml_path} doesn't exist!")
        return {}

    try:
        with yaml_path.open() as yaml_file:
            yaml_data = yaml.safe_load(yaml_file)
            log_info(f"Loaded data from YAML file: {yaml_path}")

    except yaml.YAMLError as error:
        log_error(f"Failed to load YAML file: {yaml_path}\nError: {error}")
        return {}

    if not isinstance(yaml_data, dict):
        log_error(f"Expected a mapping at the top level of YAML file: {yaml_path}")
        return {}

    return yaml_data


def load_weighted_quaternions(yaml_path: Path) -> list[WeightedQuaternion]:
    """Load weighted quaternion samples from the given YAML file.

    :param yaml_path: Path to a YAML file containing a list under the key 'samples'
    :return: List of imported samples (empty if the file or key is missing)
    :raises ValueError: If any sample entry is malformed
    """
    yaml_data = load_yaml_into_dict(yaml_path)
    samples_data = yaml_data.get("samples", [])

    if not samples_data:
        log_error(f"Expected to find the key 'samples' in YAML file: {yaml_path}")
        return []

    if not isinstance(samples_data, list):
        kind = type(samples_data).__name__
        raise ValueError(f"Expected a list under 'samples' in YAML file {yaml_path}, got {kind}.")

    return [WeightedQuaternion.from_yaml(sample_data) for sample_data in samples_data]


def average_quaternions_from_yaml(yaml_path: Path) -> UnitQuaternion:
    """Average all weighted quaternion samples stored in the given YAML file.

    :param yaml_path: Path to a YAML file of weighted quaternion samples
    :return: Weighted average orientation of the samples
    :raises NoSamplesError: If the file provides no positively weighted samples
    """
    averager = QuaternionAverager()
    for sample in load_weighted_quaternions(yaml_path):
        averager.add_quaternion_weighted(sample.quaternion, sample.weight)

    return averager.calc_average()
