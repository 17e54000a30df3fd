"""Define functions for exporting averaged orientations to YAML."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml

from quaternion_averager.averager import QuaternionAverager


def output_average_to_yaml(averager: QuaternionAverager) -> str:
    """Convert the current average of the given averager into a YAML string.

    :param averager: Averager holding at least one positively weighted sample
    :return: String representation of the average orientation and its total weight in YAML
    :raises NoSamplesError: If the averager is empty
    """
    yaml_data: dict[str, Any] = {
        "average": averager.calc_average().to_yaml_dict(),
        "num_samples": averager.num_samples,
        "weight_sum": float(averager.weight_sum),
    }

    return yaml.dump(yaml_data, sort_keys=True, default_flow_style=True)


def output_yaml_data_to_path(data: dict[str, Any], yaml_path: Path) -> bool:
    """Output the given dictionary of YAML data to the given path.

    :param data: Dictionary of YAML data to be output to file
    :param yaml_path: Path to the created YAML file
    :return: True if output succeeded, else False
    """
    yaml_string = yaml.dump(data, sort_keys=True, default_flow_style=True)

    with yaml_path.open(mode="w") as yaml_file:
        yaml_file.write(yaml_string)

    return yaml_path.exists()
