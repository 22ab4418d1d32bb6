# core/money.py

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

TWOPLACES = Decimal("0.01")
ZERO = Decimal("0.00")

# Largest value a max_digits=12, decimal_places=2 column can hold.
MAX_AMOUNT = Decimal("9999999999.99")


def to_decimal(value) -> Decimal:
    """
    Coerce user/DB input into a Decimal without float artifacts.

    Raises ValueError for anything that is not a finite number or whose
    magnitude exceeds MAX_AMOUNT.
    """
    if isinstance(value, bool):
        raise ValueError("amount must be a number")

    if isinstance(value, Decimal):
        result = value
    else:
        if value is None or (isinstance(value, str) and not value.strip()):
            raise ValueError("amount is required")
        try:
            result = Decimal(str(value).strip())
        except (InvalidOperation, TypeError) as exc:
            raise ValueError(f"invalid amount: {value!r}") from exc

    if not result.is_finite():
        raise ValueError(f"invalid amount: {value!r}")
    if abs(result) > MAX_AMOUNT:
        raise ValueError(f"amount out of range: {value!r}")
    return result


def money(value) -> Decimal:
    """Round to the currency minor unit (2dp, half-up). None/"" become 0.00."""
    if value is None or value == "":
        return ZERO
    try:
        rounded = to_decimal(value).quantize(TWOPLACES, rounding=ROUND_HALF_UP)
    except InvalidOperation as exc:
        raise ValueError(f"invalid amount: {value!r}") from exc
    if abs(rounded) > MAX_AMOUNT:
        raise ValueError(f"amount out of range: {value!r}")
    return rounded
