"""
Pool configuration — pydantic schema и YAML loader.
"""

from .loader import config_from_dict, load_config
from .schema import PoolConfig

__all__ = [
    "PoolConfig",
    "load_config",
    "config_from_dict",
]
