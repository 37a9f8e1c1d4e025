"""
HostLedger — хостинг-леджер, сериализующий вызовы

Модель исполнения:
- Все вызовы выполняются строго последовательно в одном глобальном порядке
- Каждый вызов либо применяется целиком, либо целиком откатывается
- Время — монотонный целочисленный счётчик (секунды), а не wall-clock;
  deadline сравнивается только с ним

Откат реализован через checkpoint/restore всех зарегистрированных
участников (пулы, in-memory леджеры активов). Вложенные atomic()
создают собственные точки сохранения.
"""

import logging
from contextlib import contextmanager
from typing import Iterator, List

from src.ledger.interface import Checkpointable

logger = logging.getLogger(__name__)


class HostLedger:
    def __init__(self, start_timestamp: int = 0) -> None:
        if start_timestamp < 0:
            raise ValueError(f"start_timestamp must be non-negative, got {start_timestamp}")
        self._timestamp = start_timestamp
        self._participants: List[Checkpointable] = []
        self._depth = 0

    @property
    def timestamp(self) -> int:
        return self._timestamp

    @property
    def depth(self) -> int:
        """Текущая глубина вложенности atomic() (0 — вне вызова)."""
        return self._depth

    def advance(self, seconds: int) -> int:
        """
        Продвинуть время леджера.

        Raises:
            ValueError: Если seconds < 0 (время монотонно)
        """
        if seconds < 0:
            raise ValueError(f"time is monotonic, cannot advance by {seconds}")
        self._timestamp += seconds
        return self._timestamp

    def register(self, participant: Checkpointable) -> None:
        if participant not in self._participants:
            self._participants.append(participant)

    @contextmanager
    def atomic(self) -> Iterator[None]:
        """
        Всё-или-ничего для одного вызова.

        При любом исключении состояние всех участников восстанавливается
        к моменту входа, исключение пробрасывается дальше.
        """
        savepoint = [(p, p.checkpoint()) for p in self._participants]
        self._depth += 1
        try:
            yield
        except Exception as e:
            for participant, state in reversed(savepoint):
                participant.restore(state)
            logger.debug("call reverted at depth=%d: %s", self._depth, e)
            raise
        finally:
            self._depth -= 1
