"""Governance Gate — роли и timelock изменения swap fee."""

from .roles import Role, RoleRegistry
from .timelock import FeeTimelock

__all__ = [
    "Role",
    "RoleRegistry",
    "FeeTimelock",
]
