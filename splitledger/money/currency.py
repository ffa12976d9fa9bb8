"""
Currency catalog and money formatting.

DESIGN DECISION: There is no process-wide "selected currency". A
CurrencyCatalog is built explicitly (usually by the composition root from
settings) and a MoneyFormatter is obtained per session currency code.
Nothing here converts between currencies.
"""

from decimal import Decimal, InvalidOperation
from typing import Iterable, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from splitledger.money.rounding import MONEY_PLACES, MoneyLike, round_money


class UnknownCurrencyError(ValueError):
    """Currency code is not in the catalog."""

    def __init__(self, currency_code: str):
        super().__init__(f"Unknown currency code: {currency_code}")
        self.currency_code = currency_code


class CurrencyInfo(BaseModel):
    """A currency the app can display amounts in."""

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    code: str = Field(
        ...,
        min_length=3,
        max_length=3,
        description="ISO 4217 code"
    )
    symbol: str = Field(
        ...,
        min_length=1,
        description="Symbol shown in front of amounts"
    )
    name: str = Field(
        ...,
        description="Human-readable currency name"
    )

    @field_validator('code')
    @classmethod
    def uppercase_code(cls, v: str) -> str:
        return v.upper()


DEFAULT_CURRENCIES: tuple[CurrencyInfo, ...] = (
    CurrencyInfo(code="USD", symbol="$", name="US Dollar"),
    CurrencyInfo(code="EUR", symbol="€", name="Euro"),
    CurrencyInfo(code="GBP", symbol="£", name="Pound Sterling"),
    CurrencyInfo(code="JPY", symbol="¥", name="Japanese Yen"),
    CurrencyInfo(code="CHF", symbol="CHF", name="Swiss Franc"),
    CurrencyInfo(code="CAD", symbol="$", name="Canadian Dollar"),
    CurrencyInfo(code="AUD", symbol="$", name="Australian Dollar"),
)


class MoneyFormatter:
    """Formats and parses amounts for one currency."""

    def __init__(self, currency: CurrencyInfo, places: int = MONEY_PLACES):
        self.currency = currency
        self._places = places

    def format(self, value: MoneyLike) -> str:
        """
        Render an amount as "<symbol><grouped amount>".

        Negative amounts get a leading "-" (e.g. "-$3.33").
        """
        rounded = round_money(value, self._places)
        sign = "-" if rounded < 0 else ""
        return f"{sign}{self.currency.symbol}{abs(rounded):,.{self._places}f}"

    def parse(self, text: str) -> Decimal:
        """
        Parse user-entered text into an amount.

        Strips the currency symbol and whitespace and accepts "," as the
        decimal separator. Unparseable input yields 0; callers validate
        the result (the line item builder rejects non-positive totals).
        """
        clean = (
            text.replace(self.currency.symbol, "")
            .replace(",", ".")
            .strip()
        )
        try:
            value = Decimal(clean)
        except InvalidOperation:
            return Decimal(0)
        if not value.is_finite():
            return Decimal(0)
        return value


class CurrencyCatalog:
    """
    Lookup of known currencies.

    Usage:
        catalog = CurrencyCatalog(default_code="EUR")
        catalog.formatter_for(session.currency_code).format(balance.net)
    """

    def __init__(
        self,
        currencies: Iterable[CurrencyInfo] = DEFAULT_CURRENCIES,
        default_code: str = "USD",
        places: int = MONEY_PLACES,
    ):
        self._currencies = {c.code: c for c in currencies}
        self._places = places
        self._default = self.get(default_code)

    @property
    def default(self) -> CurrencyInfo:
        return self._default

    @property
    def codes(self) -> list[str]:
        return list(self._currencies)

    def get(self, code: str) -> CurrencyInfo:
        """Return the currency for `code` or raise UnknownCurrencyError."""
        try:
            return self._currencies[code.strip().upper()]
        except KeyError:
            raise UnknownCurrencyError(code) from None

    def find(self, code: str) -> Optional[CurrencyInfo]:
        return self._currencies.get(code.strip().upper())

    def formatter_for(self, code: str) -> MoneyFormatter:
        """Formatter for `code`, falling back to the default currency."""
        currency = self.find(code) or self._default
        return MoneyFormatter(currency, places=self._places)
