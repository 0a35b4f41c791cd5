"""
src/simplestocks/utils/numeric.py

Decimal conversion and rounding helpers shared by the models and metrics.

Every monetary amount and ratio in the package is a ``Decimal``. Floats are
converted through ``str`` so ``0.1`` becomes ``Decimal("0.1")`` rather than
its binary approximation.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation, localcontext

from simplestocks.utils.exceptions import ValidationError

Number = Decimal | int | float | str


def to_decimal(value: Number, name: str = "value") -> Decimal:
    """
    Convert a numeric input to a finite ``Decimal``.

    Args:
        value: Decimal, int, float or numeric string
        name: Field name used in the error message

    Raises:
        ValidationError: If the value is a bool, not numeric, NaN or infinite.
    """
    if isinstance(value, bool) or not isinstance(value, (Decimal, int, float, str)):
        raise ValidationError(f"{name} must be a number, got {value!r}")
    try:
        result = value if isinstance(value, Decimal) else Decimal(str(value))
    except InvalidOperation as exc:
        raise ValidationError(f"{name} must be a number, got {value!r}") from exc
    if not result.is_finite():
        raise ValidationError(f"{name} must be finite, got {value!r}")
    return result


def quantize(value: Decimal, places: int) -> Decimal:
    """
    Round ``value`` half-up to a fixed number of decimal places.

    A nonzero value too small to show at ``places`` keeps ``max(places, 1)``
    significant digits instead, so it never rounds to zero. Precision is
    widened as needed, so large values round without ``InvalidOperation``.
    """
    with localcontext() as ctx:
        ctx.prec = max(ctx.prec, value.adjusted() + places + 2)
        result = value.quantize(Decimal(1).scaleb(-places), rounding=ROUND_HALF_UP)
        if result.is_zero() and not value.is_zero():
            exponent = value.adjusted() - max(places, 1) + 1
            result = value.quantize(Decimal(1).scaleb(exponent), rounding=ROUND_HALF_UP)
    return result
