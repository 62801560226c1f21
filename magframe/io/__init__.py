"""
Input/output: configuration files and optional table export.
"""

from .config import ConfigError, load_config, save_config
from .export import magtable_to_dataframe, save_magtable_json, atom_tooltip

__all__ = [
    'ConfigError',
    'load_config',
    'save_config',
    'magtable_to_dataframe',
    'save_magtable_json',
    'atom_tooltip',
]
