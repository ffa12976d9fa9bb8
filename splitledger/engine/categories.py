"""Category Aggregator: item totals grouped by expense category."""

from decimal import Decimal
from fractions import Fraction

from splitledger.models.expense import ExpenseCategory, ExpenseSession
from splitledger.money.rounding import MONEY_PLACES, round_money, to_fraction


class CategoryAggregator:
    """Sums item amounts per category, rounding once at output."""

    def __init__(self, places: int = MONEY_PLACES):
        self._places = places

    def totals_by_category(self, session: ExpenseSession) -> dict[ExpenseCategory, Decimal]:
        """
        Rounded total per category.

        Categories with no items are left out. Keys follow the
        ExpenseCategory declaration order.
        """
        buckets: dict[ExpenseCategory, Fraction] = {}
        for item in session.items:
            buckets[item.category] = buckets.get(item.category, Fraction(0)) + to_fraction(item.amount)

        return {
            category: round_money(buckets[category], self._places)
            for category in ExpenseCategory
            if category in buckets
        }
