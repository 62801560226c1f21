"""
Configuration loading for spin systems.

Supports YAML and JSON files (or an already loaded dictionary) in the layout
read by `SpinSystem.from_dict`.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Union

import yaml

logger = logging.getLogger(__name__)


class ConfigError(ValueError):
    """Raised when a configuration file cannot be used."""
    pass


def load_config(config_source: Union[str, Path, Dict[str, Any]]) -> Dict[str, Any]:
    """
    Load configuration from YAML file, JSON file, or dictionary.

    Parameters
    ----------
    config_source : str, Path, or dict
        Either a path to a YAML/JSON file or a configuration dictionary

    Returns
    -------
    dict
        Parsed configuration dictionary

    Raises
    ------
    FileNotFoundError
        If config file doesn't exist
    ConfigError
        If the file cannot be parsed or is not a mapping

    Examples
    --------
    >>> config = load_config('cu_chain.yaml')
    >>> system = SpinSystem.from_dict(config)
    """
    if isinstance(config_source, dict):
        return config_source

    config_path = Path(config_source)
    if not config_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    suffix = config_path.suffix.lower()
    if suffix not in ('.yaml', '.yml', '.json'):
        raise ConfigError(
            f"Unsupported config file format: {suffix}. Use .yaml, .yml, or .json"
        )

    try:
        with open(config_path, 'r') as f:
            if suffix == '.json':
                config = json.load(f)
            else:
                config = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Error parsing YAML file: {e}") from e
    except json.JSONDecodeError as e:
        raise ConfigError(f"Error parsing JSON file: {e}") from e

    if not isinstance(config, dict):
        raise ConfigError("Configuration must be a dictionary at the top level")

    logger.debug("Loaded configuration from %s", config_path)
    return config


def save_config(config: Dict[str, Any], output_path: Union[str, Path]) -> None:
    """
    Write a configuration dictionary (e.g. `SpinSystem.to_dict()`) as YAML.

    Parameters
    ----------
    config : dict
        Configuration to write
    output_path : str or Path
        Destination file, parent directories are created
    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    with open(output_path, 'w') as f:
        yaml.safe_dump(config, f, default_flow_style=None, sort_keys=False)
