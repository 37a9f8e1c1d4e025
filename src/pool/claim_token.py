"""
Claim Token — ERC20-подобная книга долей пула

Claim Position создаётся неявно при первом зачислении и удаляется из книги,
когда баланс возвращается к нулю. MINIMUM_LIQUIDITY при первом депозите
минтится на CLAIM_SINK — идентичность, от имени которой никто не может
действовать, поэтому эти токены не выкупаются никогда.
"""

from dataclasses import dataclass, field
from typing import Dict, Final, Tuple

from src.core.domain.units import validate_amount
from src.core.errors import InputValidationError, InsufficientBalanceError

# Неизымаемый держатель MINIMUM_LIQUIDITY
CLAIM_SINK: Final[str] = "0x000000000000000000000000000000000000dEaD"


@dataclass
class ClaimToken:
    name: str
    symbol: str
    decimals: int = 18
    total_supply: int = 0
    balances: Dict[str, int] = field(default_factory=dict)
    allowances: Dict[Tuple[str, str], int] = field(default_factory=dict)

    def balance_of(self, account: str) -> int:
        return self.balances.get(account, 0)

    def allowance(self, owner: str, spender: str) -> int:
        return self.allowances.get((owner, spender), 0)

    def holders(self) -> Dict[str, int]:
        """Снимок текущих держателей (включая sink)."""
        return dict(self.balances)

    def mint(self, to: str, amount: int) -> None:
        validate_amount("amount", amount)
        self.balances[to] = self.balance_of(to) + amount
        self.total_supply += amount

    def burn(self, account: str, amount: int) -> None:
        validate_amount("amount", amount)
        if account == CLAIM_SINK:
            raise InputValidationError("sink claim tokens cannot be burned", account=account)
        self._debit(account, amount)
        self.total_supply -= amount

    def transfer(self, sender: str, to: str, amount: int) -> None:
        validate_amount("amount", amount)
        self._check_counterparties(sender, to)
        self._debit(sender, amount)
        self.balances[to] = self.balance_of(to) + amount

    def approve(self, owner: str, spender: str, amount: int) -> None:
        if not isinstance(amount, int) or isinstance(amount, bool) or amount < 0:
            raise InputValidationError("allowance must be a non-negative int", amount=amount)
        self.allowances[(owner, spender)] = amount

    def transfer_from(self, spender: str, owner: str, to: str, amount: int) -> None:
        allowed = self.allowance(owner, spender)
        if allowed < amount:
            raise InsufficientBalanceError(
                "claim allowance exceeded",
                owner=owner,
                spender=spender,
                allowance=allowed,
                amount=amount,
            )
        self.transfer(owner, to, amount)
        self.allowances[(owner, spender)] = allowed - amount

    def _check_counterparties(self, sender: str, to: str) -> None:
        if sender == CLAIM_SINK:
            raise InputValidationError("sink claim tokens are not transferable", sender=sender)
        if not to:
            raise InputValidationError("recipient must be non-empty", to=to)

    def _debit(self, account: str, amount: int) -> None:
        balance = self.balance_of(account)
        if balance < amount:
            raise InsufficientBalanceError(
                "claim balance too low", account=account, balance=balance, amount=amount
            )
        remaining = balance - amount
        if remaining:
            self.balances[account] = remaining
        else:
            self.balances.pop(account, None)
