"""
In-memory ERC20-подобные леджеры активов

Эталонная реализация AssetLedger для тестов и симуляций:
- InMemoryAssetLedger: балансы, allowance, mint/burn для genesis
- FeeOnTransferLedger: удерживает комиссию с каждого перевода
  (баланс получателя меняется не на заявленную сумму)

Неуспешный перевод возвращает False, а не бросает исключение —
как большинство реальных токенов. Решение об отказе принимает пул.
"""

import logging
from typing import Dict, Optional, Tuple

from src.core.domain.units import apply_bps
from src.ledger.host import HostLedger

logger = logging.getLogger(__name__)


class InMemoryAssetLedger:
    def __init__(
        self,
        symbol: str,
        decimals: int = 18,
        host: Optional[HostLedger] = None,
    ) -> None:
        if not symbol:
            raise ValueError("symbol must be non-empty")
        self.symbol = symbol
        self.decimals = decimals
        self.total_supply = 0
        self.balances: Dict[str, int] = {}
        self.allowances: Dict[Tuple[str, str], int] = {}
        if host is not None:
            host.register(self)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.symbol!r})"

    # -------------------------------------------------------------------------
    # Checkpointable
    # -------------------------------------------------------------------------

    def checkpoint(self) -> tuple:
        return self.total_supply, dict(self.balances), dict(self.allowances)

    def restore(self, state: tuple) -> None:
        total_supply, balances, allowances = state
        self.total_supply = total_supply
        self.balances = dict(balances)
        self.allowances = dict(allowances)

    # -------------------------------------------------------------------------
    # Genesis
    # -------------------------------------------------------------------------

    def mint(self, to: str, amount: int) -> None:
        if amount < 0:
            raise ValueError(f"mint amount cannot be negative: {amount}")
        self.balances[to] = self.balance_of(to) + amount
        self.total_supply += amount

    def burn(self, account: str, amount: int) -> None:
        if amount < 0 or self.balance_of(account) < amount:
            raise ValueError(f"cannot burn {amount} from {account}")
        self._debit(account, amount)
        self.total_supply -= amount

    # -------------------------------------------------------------------------
    # AssetLedger
    # -------------------------------------------------------------------------

    def balance_of(self, account: str) -> int:
        return self.balances.get(account, 0)

    def allowance(self, owner: str, spender: str) -> int:
        return self.allowances.get((owner, spender), 0)

    def approve(self, owner: str, spender: str, amount: int) -> bool:
        if amount < 0:
            return False
        self.allowances[(owner, spender)] = amount
        return True

    def transfer(self, sender: str, to: str, amount: int) -> bool:
        if amount < 0 or self.balance_of(sender) < amount:
            logger.debug(
                "%s transfer rejected: sender=%s balance=%d amount=%d",
                self.symbol, sender, self.balance_of(sender), amount,
            )
            return False
        self._move(sender, to, amount)
        return True

    def transfer_from(self, spender: str, owner: str, to: str, amount: int) -> bool:
        allowed = self.allowance(owner, spender)
        if amount < 0 or allowed < amount or self.balance_of(owner) < amount:
            logger.debug(
                "%s transfer_from rejected: owner=%s spender=%s allowance=%d amount=%d",
                self.symbol, owner, spender, allowed, amount,
            )
            return False
        self.allowances[(owner, spender)] = allowed - amount
        self._move(owner, to, amount)
        return True

    # -------------------------------------------------------------------------
    # internals
    # -------------------------------------------------------------------------

    def _debit(self, account: str, amount: int) -> None:
        remaining = self.balance_of(account) - amount
        if remaining:
            self.balances[account] = remaining
        else:
            self.balances.pop(account, None)

    def _move(self, sender: str, to: str, amount: int) -> None:
        self._debit(sender, amount)
        self.balances[to] = self.balance_of(to) + amount


class FeeOnTransferLedger(InMemoryAssetLedger):
    """Актив, сжигающий transfer_fee_bps с каждого перевода."""

    def __init__(
        self,
        symbol: str,
        transfer_fee_bps: int,
        decimals: int = 18,
        host: Optional[HostLedger] = None,
    ) -> None:
        super().__init__(symbol, decimals=decimals, host=host)
        self.transfer_fee_bps = transfer_fee_bps

    def _move(self, sender: str, to: str, amount: int) -> None:
        fee = apply_bps(amount, self.transfer_fee_bps)
        self._debit(sender, amount)
        self.balances[to] = self.balance_of(to) + amount - fee
        self.total_supply -= fee
