"""
AssetLedger — интерфейс внешнего леджера fungible-активов

Пул не предполагает честного поведения леджера сверх объявленного
интерфейса: любой неуспех (False или исключение) — отказ всего вызова
с откатом его изменений. Балансы, которые сообщает леджер, используются
только Reconciliation Guard и Emergency Unwind, но не при расчёте цены.
"""

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class AssetLedger(Protocol):
    """Потребляемый интерфейс fungible-актива (ERC20-подобный)."""

    symbol: str

    def transfer(self, sender: str, to: str, amount: int) -> bool:
        ...

    def transfer_from(self, spender: str, owner: str, to: str, amount: int) -> bool:
        ...

    def balance_of(self, account: str) -> int:
        ...


@runtime_checkable
class Checkpointable(Protocol):
    """Участник, состояние которого HostLedger откатывает при отказе вызова."""

    def checkpoint(self) -> Any:
        ...

    def restore(self, state: Any) -> None:
        ...
