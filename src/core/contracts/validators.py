"""
Pool Event Contract Validators

Проверка уведомлений пула против JSON Schema контракта, который потребляет
внешний индексатор. Уведомление, не прошедшее проверку, не попадает в журнал:
ValidationError поднимается до фасада и откатывает весь вызов.

Контракт:
- contracts/schema/pool_event.json (конверт уведомления + payload по типу)
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, FrozenSet, List

import jsonschema
from jsonschema import Draft202012Validator

logger = logging.getLogger(__name__)

# <repo>/contracts/schema, считая от src/core/contracts/validators.py
DEFAULT_SCHEMA_DIR = Path(__file__).resolve().parents[3] / "contracts" / "schema"


# =============================================================================
# SCHEMA LOADER
# =============================================================================


class SchemaLoader:
    """
    Кэширующий загрузчик JSON Schema контрактов.

    Каждая схема проходит meta-validation (Draft 2020-12) при первой загрузке.
    """

    def __init__(self, schema_dir: Path | None = None):
        self._schema_dir = schema_dir if schema_dir is not None else DEFAULT_SCHEMA_DIR
        if not self._schema_dir.is_dir():
            raise RuntimeError(f"Contract directory missing: {self._schema_dir}")
        self._schemas: Dict[str, Dict[str, Any]] = {}

    @property
    def schema_dir(self) -> Path:
        return self._schema_dir

    def load_schema(self, schema_name: str) -> Dict[str, Any]:
        """
        Загрузка контракта по имени.

        Args:
            schema_name: Имя файла без расширения ('pool_event')

        Returns:
            Схема как dict

        Raises:
            FileNotFoundError: Файла контракта нет
            ValueError: Файл не является корректной Draft 2020-12 схемой
        """
        cached = self._schemas.get(schema_name)
        if cached is not None:
            return cached

        schema_path = self._schema_dir / f"{schema_name}.json"
        if not schema_path.is_file():
            raise FileNotFoundError(f"Contract not found: {schema_path}")

        schema = json.loads(schema_path.read_text(encoding="utf-8"))
        try:
            Draft202012Validator.check_schema(schema)
        except jsonschema.SchemaError as e:
            raise ValueError(f"Contract {schema_name}.json is not a valid schema: {e.message}") from e

        logger.debug("Loaded contract %s from %s", schema_name, schema_path)
        self._schemas[schema_name] = schema
        return schema


_SCHEMA_LOADER: SchemaLoader | None = None


def _loader() -> SchemaLoader:
    global _SCHEMA_LOADER
    if _SCHEMA_LOADER is None:
        _SCHEMA_LOADER = SchemaLoader()
    return _SCHEMA_LOADER


# =============================================================================
# CONTRACT VALIDATORS
# =============================================================================


class ContractValidator:
    """Валидатор сериализованных данных против одного контракта."""

    def __init__(self, schema_name: str, loader: SchemaLoader | None = None):
        self.schema_name = schema_name
        self.schema = (loader or _loader()).load_schema(schema_name)
        self.validator = Draft202012Validator(self.schema)

    def validate(self, data: Dict[str, Any]) -> None:
        """
        Raises:
            ValidationError: Данные не соответствуют контракту
        """
        self.validator.validate(data)

    def is_valid(self, data: Dict[str, Any]) -> bool:
        return self.validator.is_valid(data)

    def error_messages(self, data: Dict[str, Any]) -> List[str]:
        """Все нарушения контракта в виде '<json path>: <message>'."""
        return [
            f"{error.json_path}: {error.message}"
            for error in sorted(self.validator.iter_errors(data), key=lambda e: e.json_path)
        ]


class PoolEventValidator(ContractValidator):
    """Валидатор уведомлений пула."""

    def __init__(self, loader: SchemaLoader | None = None):
        super().__init__("pool_event", loader)

    def declared_event_types(self) -> FrozenSet[str]:
        """Типы уведомлений, перечисленные в контракте."""
        return frozenset(self.schema["properties"]["event_type"]["enum"])


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================

_POOL_EVENT_VALIDATOR: PoolEventValidator | None = None


def validate_pool_event(data: Dict[str, Any]) -> None:
    """
    Проверка уведомления перед записью в журнал пула.

    Args:
        data: PoolEvent.to_dict()

    Raises:
        ValidationError: Уведомление нарушает контракт
    """
    global _POOL_EVENT_VALIDATOR
    if _POOL_EVENT_VALIDATOR is None:
        _POOL_EVENT_VALIDATOR = PoolEventValidator()
    _POOL_EVENT_VALIDATOR.validate(data)
