"""
Reentrancy Guard — явная блокировка точек входа пула

Каждая мутирующая точка входа пула захватывает guard на всё время вызова.
Внешние леджеры могут попытаться вызвать пул повторно изнутри transfer:
такой вложенный вход отклоняется немедленно, до чтения состояния.

Guard — счётчик, а не флаг: depth > 0 означает, что вызов уже идёт.
"""

import logging
from contextlib import contextmanager
from typing import Iterator, Optional

from src.core.errors import ReentrancyError

logger = logging.getLogger(__name__)


class ReentrancyGuard:
    def __init__(self) -> None:
        self._depth = 0
        self._entry_point: Optional[str] = None

    @property
    def locked(self) -> bool:
        return self._depth > 0

    @property
    def entry_point(self) -> Optional[str]:
        """Имя точки входа, удерживающей guard (None если свободен)."""
        return self._entry_point

    @contextmanager
    def enter(self, entry_point: str) -> Iterator[None]:
        """
        Захват guard на время вызова.

        Args:
            entry_point: Имя вызываемой операции (для диагностики)

        Raises:
            ReentrancyError: Если guard уже захвачен
        """
        if self._depth > 0:
            logger.warning(
                "reentrant call rejected: %s while %s in progress",
                entry_point, self._entry_point,
            )
            raise ReentrancyError(
                "reentrant call rejected",
                entry_point=entry_point,
                active_entry_point=self._entry_point,
            )

        self._depth += 1
        self._entry_point = entry_point
        try:
            yield
        finally:
            self._depth -= 1
            self._entry_point = None
