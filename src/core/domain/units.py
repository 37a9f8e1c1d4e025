"""
PoolUnits — Централизованный модуль целочисленных единиц пула

Единственный допустимый способ преобразований между:
- amount (целые наименьшие единицы актива)
- bps (basis points, знаменатель FEE_DENOMINATOR)
- fee units (дробные единицы комиссии: amount × FEE_SCALE)

ЗАПРЕЩЕНО смешивать единицы без явного конвертера из этого модуля.
Все деления — целочисленные с округлением вниз (floor), float не используется.
"""

from typing import Final

from src.core.errors import AmountTooLargeError, InputValidationError, ZeroAmountError


# =============================================================================
# КОНСТАНТЫ
# =============================================================================

# Знаменатель basis points: 10_000 bps = 100%
FEE_DENOMINATOR: Final[int] = 10_000

# Допустимый диапазон swap fee (bps), включительно
MIN_SWAP_FEE_BPS: Final[int] = 1
MAX_SWAP_FEE_BPS: Final[int] = 1_000

# Масштаб дробных единиц комиссии (fee units = amount × FEE_SCALE)
FEE_SCALE: Final[int] = FEE_DENOMINATOR

# Верхняя граница суммы за один вызов (uint112)
MAX_UINT112: Final[int] = 2**112 - 1


# =============================================================================
# КОНВЕРТЕРЫ
# =============================================================================


def apply_bps(amount: int, bps: int) -> int:
    """
    Доля amount в basis points с округлением вниз.

    apply_bps(amount, bps) = floor(amount * bps / FEE_DENOMINATOR)

    Args:
        amount: Сумма в наименьших единицах
        bps: Доля в basis points

    Returns:
        floor(amount * bps / 10_000)
    """
    return amount * bps // FEE_DENOMINATOR


def amount_after_fee(amount: int, fee_bps: int) -> int:
    """
    Эффективный вход после удержания комиссии.

    net = floor(amount * (FEE_DENOMINATOR - fee_bps) / FEE_DENOMINATOR)

    Комиссия всегда округляется в пользу пула: net никогда не больше
    теоретического значения.
    """
    return amount * (FEE_DENOMINATOR - fee_bps) // FEE_DENOMINATOR


def to_fee_units(amount: int) -> int:
    """Целая сумма → дробные fee units."""
    return amount * FEE_SCALE


def from_fee_units(units: int) -> int:
    """Дробные fee units → целая сумма, усечение к нулю."""
    return units // FEE_SCALE


# =============================================================================
# ВАЛИДАЦИЯ
# =============================================================================


def validate_amount(name: str, value: int, max_value: int | None = None) -> None:
    """
    Проверка целочисленной положительной суммы.

    Args:
        name: Имя параметра (для сообщения об ошибке)
        value: Проверяемое значение
        max_value: Верхняя граница (включительно), None — без границы

    Raises:
        InputValidationError: Если value не int (или bool) либо отрицательный
        ZeroAmountError: Если value == 0
        AmountTooLargeError: Если value > max_value
    """
    if not isinstance(value, int) or isinstance(value, bool):
        raise InputValidationError(f"{name} must be an int", **{name: value})

    if value < 0:
        raise InputValidationError(f"{name} cannot be negative", **{name: value})

    if value == 0:
        raise ZeroAmountError(f"{name} must be positive", **{name: value})

    if max_value is not None and value > max_value:
        raise AmountTooLargeError(
            f"{name} exceeds per-call ceiling", **{name: value, "max_value": max_value}
        )


def validate_non_negative_amount(name: str, value: int) -> None:
    """Проверка целочисленного неотрицательного значения (минимумы slippage и т.п.)."""
    if not isinstance(value, int) or isinstance(value, bool):
        raise InputValidationError(f"{name} must be an int", **{name: value})

    if value < 0:
        raise InputValidationError(f"{name} cannot be negative", **{name: value})


def validate_fee_bps(fee_bps: int) -> None:
    """
    Проверка swap fee в допустимом диапазоне [1, 1000] bps.

    Raises:
        InputValidationError: Если fee вне диапазона
    """
    if not isinstance(fee_bps, int) or isinstance(fee_bps, bool):
        raise InputValidationError("fee_bps must be an int", fee_bps=fee_bps)

    if not MIN_SWAP_FEE_BPS <= fee_bps <= MAX_SWAP_FEE_BPS:
        raise InputValidationError(
            "fee_bps out of range",
            fee_bps=fee_bps,
            min_fee_bps=MIN_SWAP_FEE_BPS,
            max_fee_bps=MAX_SWAP_FEE_BPS,
        )
