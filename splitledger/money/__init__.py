"""Money value helpers: rounding, currencies, formatting."""

from splitledger.money.currency import (
    DEFAULT_CURRENCIES,
    CurrencyCatalog,
    CurrencyInfo,
    MoneyFormatter,
    UnknownCurrencyError,
)
from splitledger.money.rounding import (
    MONEY_PLACES,
    MoneyLike,
    round_money,
    to_fraction,
)

__all__ = [
    "DEFAULT_CURRENCIES",
    "CurrencyCatalog",
    "CurrencyInfo",
    "MoneyFormatter",
    "UnknownCurrencyError",
    "MONEY_PLACES",
    "MoneyLike",
    "round_money",
    "to_fraction",
]
