"""
Docstring for addonprofiles.config
"""

from .settings import StoreConfig, apply_env, config_from_mapping, dump_config, load_config

__all__ = [
    "StoreConfig",
    "apply_env",
    "config_from_mapping",
    "dump_config",
    "load_config",
]
