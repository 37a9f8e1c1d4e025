"""Configuration loader from YAML."""

from pathlib import Path
from typing import Any, Dict

import yaml

from .schema import PoolConfig


def load_config(yaml_path: str | Path | None = None) -> PoolConfig:
    """
    Загрузка конфигурации пула из YAML.

    Args:
        yaml_path: Путь к YAML (по умолчанию defaults.yaml рядом с модулем)

    Returns:
        PoolConfig
    """
    if yaml_path is None:
        yaml_path = Path(__file__).parent / "defaults.yaml"

    with open(yaml_path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f)

    return PoolConfig.from_dict(data)


def config_from_dict(data: Dict[str, Any]) -> PoolConfig:
    """Создание конфигурации из словаря."""
    return PoolConfig.from_dict(data)
