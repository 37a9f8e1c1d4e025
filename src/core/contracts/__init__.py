"""
Contract Validation Module

Модуль для валидации JSON контрактов уведомлений пула.
"""

from .validators import (
    ContractValidator,
    PoolEventValidator,
    SchemaLoader,
    validate_pool_event,
)

__all__ = [
    # Classes
    "SchemaLoader",
    "ContractValidator",
    "PoolEventValidator",
    # Functions
    "validate_pool_event",
]
