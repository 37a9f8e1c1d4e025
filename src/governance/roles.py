"""
Roles — capability set пула

Роли — перечисление плюс множество участников на каждую роль.
Проверка роли выполняется до любых вычислений в точке входа.
"""

import logging
from enum import Enum
from typing import Dict, Iterable, Set

from src.core.errors import InputValidationError, MissingRoleError

logger = logging.getLogger(__name__)


class Role(str, Enum):
    """Административные роли пула."""

    ADMIN = "ADMIN"  # grant/revoke ролей, передача admin
    PAUSER = "PAUSER"  # pause/unpause
    FEE_SETTER = "FEE_SETTER"  # propose/cancel изменения fee
    FEE_COLLECTOR = "FEE_COLLECTOR"  # сбор комиссии протокола
    EMERGENCY = "EMERGENCY"  # emergency unwind
    RECOVERY = "RECOVERY"  # возврат посторонних активов


class RoleRegistry:
    def __init__(self, members: Dict[Role, Iterable[str]] | None = None) -> None:
        self._members: Dict[Role, Set[str]] = {role: set() for role in Role}
        for role, accounts in (members or {}).items():
            for account in accounts:
                self.grant(role, account)

    def has_role(self, role: Role, account: str) -> bool:
        return account in self._members[role]

    def require(self, role: Role, account: str) -> None:
        """
        Raises:
            MissingRoleError: Если у account нет role
        """
        if not self.has_role(role, account):
            logger.warning("authorization denied: %s lacks %s", account, role.value)
            raise MissingRoleError("caller lacks required role", role=role.value, caller=account)

    def grant(self, role: Role, account: str) -> bool:
        """Выдать роль. Returns: True если членство изменилось."""
        if not account:
            raise InputValidationError("account must be non-empty", account=account)
        if account in self._members[role]:
            return False
        self._members[role].add(account)
        return True

    def revoke(self, role: Role, account: str) -> bool:
        """Отозвать роль. Returns: True если членство изменилось."""
        if account not in self._members[role]:
            return False
        self._members[role].discard(account)
        return True

    def members(self, role: Role) -> Set[str]:
        return set(self._members[role])
