"""
Money rounding.

DESIGN DECISION: Amounts are carried at full precision through every
computation and rounded exactly once, at the aggregate/display boundary,
with round-half-to-even ("banker's rounding"). Rounding each line item
would let penny errors accumulate across a long session.

Intermediate values are exact rationals (fractions.Fraction): a three-way
equal split of 10.00 is exactly 10/3, not 3.3333333333333333333333333333.
Rounding also goes through Fraction, so it never depends on the active
decimal context and works for amounts of any size.
"""

from decimal import Decimal
from fractions import Fraction
from typing import Union

MONEY_PLACES = 2

MoneyLike = Union[Decimal, Fraction, int]


def round_money(value: MoneyLike, places: int = MONEY_PLACES) -> Decimal:
    """
    Round a money value half-to-even at `places` fractional digits.

    The result always has exactly `places` fractional digits
    (e.g. Decimal("10.00")).
    """
    # round() on a Fraction returns the half-even nearest int
    scaled = round(to_fraction(value) * 10 ** places)
    digits = tuple(int(d) for d in str(abs(scaled)))
    return Decimal((int(scaled < 0), digits, -places))


def to_fraction(value: MoneyLike) -> Fraction:
    """Exact rational view of a Decimal/int amount."""
    if isinstance(value, Fraction):
        return value
    return Fraction(value)
