"""Fixed-point money arithmetic.

Every value flowing through the valuation code is a Decimal. Division always
rounds half-up to an explicit number of fractional digits, and division by
zero is reported as None instead of raising.
"""

from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable

from journal.utils.constants import HUNDRED, MONEY_PLACES, PERCENT_PLACES, RATIO_PLACES

ZERO = Decimal("0")
ONE = Decimal("1")


def to_decimal(value) -> Decimal:
    """Coerce int/str/Decimal to Decimal. Floats go through str() so no binary noise leaks in."""
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        return Decimal(str(value))
    return Decimal(value)


def quantize(value: Decimal, places: int) -> Decimal:
    """Round half-up to `places` fractional digits."""
    return value.quantize(Decimal(1).scaleb(-places), rounding=ROUND_HALF_UP)


def money(value: Decimal) -> Decimal:
    return quantize(value, MONEY_PLACES)


def divide(numerator: Decimal, denominator: Decimal, places: int = RATIO_PLACES) -> Decimal | None:
    """Half-up division to `places` digits. None when the denominator is zero."""
    if denominator == ZERO:
        return None
    return quantize(numerator / denominator, places)


def percentage(numerator: Decimal, denominator: Decimal, places: int = RATIO_PLACES) -> Decimal | None:
    """numerator / denominator as a percentage with 2 fractional digits.

    The ratio is rounded to `places` digits first, then scaled by 100.
    """
    ratio = divide(numerator, denominator, places)
    if ratio is None:
        return None
    return quantize(ratio * HUNDRED, PERCENT_PLACES)


def total(values: Iterable[Decimal | None]) -> Decimal:
    """Sum that skips None and yields zero for an empty input."""
    result = ZERO
    for value in values:
        if value is not None:
            result += value
    return result


def mean(values: Iterable[Decimal]) -> Decimal:
    """Average rounded to money precision. Zero for an empty input."""
    items = [v for v in values if v is not None]
    if not items:
        return money(ZERO)
    return money(total(items) / Decimal(len(items)))
