"""
Pool Errors — таксономия отказов пула

Каждый отказ атомарен: вызов откатывается целиком, частичного состояния нет.
Каждое исключение несёт ``context`` с конкретными значениями, по которым
вызывающая сторона может повторить вызов с исправленными параметрами.

Порядок проверок в точках входа:
1. AuthorizationError — до любых вычислений
2. InputValidationError — до чтения состояния
3. StaleDeadlineError — до расчёта цены
4. InvariantViolationError — после расчёта эффекта, до мутации

Автоматических повторов нет: повтор всегда на стороне вызывающего.
"""

from typing import Any


class PoolError(Exception):
    """Базовое исключение пула со структурированным контекстом."""

    def __init__(self, message: str, **context: Any) -> None:
        super().__init__(message)
        self.message = message
        self.context: dict[str, Any] = context

    def __str__(self) -> str:
        if not self.context:
            return self.message
        details = ", ".join(f"{k}={v!r}" for k, v in self.context.items())
        return f"{self.message} ({details})"


# =============================================================================
# INPUT VALIDATION
# =============================================================================


class InputValidationError(PoolError, ValueError):
    """Невалидные входные параметры (нулевые/переполняющие суммы, плохие активы)."""


class ZeroAmountError(InputValidationError):
    pass


class AmountTooLargeError(InputValidationError):
    pass


class InvalidAssetError(InputValidationError):
    pass


# =============================================================================
# INVARIANT VIOLATIONS
# =============================================================================


class InvariantViolationError(PoolError):
    """Вычисленный эффект нарушает инвариант пула; мутация не выполнялась."""


class RatioMismatchError(InvariantViolationError):
    """amount_b вне допустимой полосы вокруг ожидаемого по соотношению резервов."""


class InsufficientLiquidityError(InvariantViolationError):
    pass


class ReserveDriftError(InvariantViolationError):
    """Tracked резерв расходится с реальным балансом больше допуска."""


class SlippageError(InvariantViolationError):
    pass


class SwapTooLargeError(InvariantViolationError):
    pass


class InsufficientOutputError(InvariantViolationError):
    pass


class FeeBelowThresholdError(InvariantViolationError):
    pass


class InsufficientBalanceError(InvariantViolationError):
    pass


# =============================================================================
# AUTHORIZATION
# =============================================================================


class AuthorizationError(PoolError):
    """Вызывающий не имеет нужной роли."""


class MissingRoleError(AuthorizationError):
    pass


class NotTimelockExecutorError(AuthorizationError):
    pass


# =============================================================================
# STALENESS / STATE
# =============================================================================


class StaleDeadlineError(PoolError):
    """Текущий timestamp леджера превысил deadline вызывающего."""


class PoolPausedError(PoolError):
    pass


class PoolHaltedError(PoolError):
    """Пул в состоянии HALTED (emergency unwind), торговля запрещена навсегда."""


class PoolNotHaltedError(PoolError):
    """Emergency-выкуп до перехода пула в HALTED."""


class TimelockNotReadyError(PoolError):
    pass


class UnknownProposalError(PoolError):
    pass


class ReentrancyError(PoolError):
    """Вложенный вызов в тот же пул до завершения текущего."""


class TransferFailedError(PoolError):
    """Внешний леджер вернул неуспех или бросил исключение."""
