"""
Cross-Session Statistics

Summaries over many saved sessions: overall spend, spend per category and
per-person totals. Every figure is derived from the per-session engine
results (BalanceAggregator, CategoryAggregator); nothing here re-implements
allocation.

Per-session values are already rounded, so cross-session sums add rounded
figures, the same way the numbers appear on each session's own screen.
"""

from datetime import date
from decimal import Decimal
from fractions import Fraction
from typing import Iterable, Optional, Sequence
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from splitledger.engine.allocation import ZERO
from splitledger.engine.balances import BalanceAggregator
from splitledger.engine.categories import CategoryAggregator
from splitledger.models.expense import ExpenseCategory, ExpenseSession
from splitledger.money.rounding import MONEY_PLACES, round_money, to_fraction


class Overview(BaseModel):
    """Headline numbers for a set of sessions."""
    model_config = ConfigDict(frozen=True)

    total_spent: Decimal
    session_count: int = Field(ge=0)
    average_per_session: Decimal


class PersonSummary(BaseModel):
    """One participant's totals across every session they joined."""
    model_config = ConfigDict(frozen=True)

    participant_id: UUID
    name: str
    paid: Decimal
    owed: Decimal
    net: Decimal
    sessions: int = Field(ge=0, description="Number of sessions joined")


class PeopleSummary(BaseModel):
    """Ranked per-person totals plus a couple of highlights."""
    model_config = ConfigDict(frozen=True)

    rows: list[PersonSummary] = Field(default_factory=list)
    top_payer: Optional[PersonSummary] = None
    most_active: Optional[PersonSummary] = None


class SessionStatistics:
    """
    Aggregates engine results over many sessions.

    Args:
        balances: Balance aggregator (a default one if omitted)
        categories: Category aggregator (a default one if omitted)
        places: Fractional digits of the rounded results
    """

    def __init__(
        self,
        balances: Optional[BalanceAggregator] = None,
        categories: Optional[CategoryAggregator] = None,
        places: int = MONEY_PLACES,
    ):
        self._places = places
        self._balances = balances or BalanceAggregator(places=places)
        self._categories = categories or CategoryAggregator(places=places)

    @staticmethod
    def filter_sessions(
        sessions: Iterable[ExpenseSession],
        since: Optional[date] = None,
        until: Optional[date] = None,
    ) -> list[ExpenseSession]:
        """Sessions whose date falls within [since, until] (both inclusive)."""
        selected = []
        for session in sessions:
            day = session.date.date()
            if since and day < since:
                continue
            if until and day > until:
                continue
            selected.append(session)
        return selected

    def overview(self, sessions: Sequence[ExpenseSession]) -> Overview:
        """Total spent, number of sessions and the average per session."""
        total = sum(
            (to_fraction(s.total_amount(self._places)) for s in sessions),
            ZERO,
        )
        average = total / len(sessions) if sessions else ZERO

        return Overview(
            total_spent=round_money(total, self._places),
            session_count=len(sessions),
            average_per_session=round_money(average, self._places),
        )

    def category_breakdown(
        self,
        sessions: Iterable[ExpenseSession],
    ) -> list[tuple[ExpenseCategory, Decimal]]:
        """
        Spend per category over all sessions, largest first.

        Categories with no spend are left out.
        """
        totals: dict[ExpenseCategory, Fraction] = {}
        for session in sessions:
            for category, amount in self._categories.totals_by_category(session).items():
                totals[category] = totals.get(category, ZERO) + to_fraction(amount)

        ordered = [
            (category, round_money(totals[category], self._places))
            for category in ExpenseCategory
            if totals.get(category, ZERO) > 0
        ]
        return sorted(ordered, key=lambda pair: pair[1], reverse=True)

    def people_summary(self, sessions: Iterable[ExpenseSession]) -> PeopleSummary:
        """
        Paid/owed/net per participant across sessions.

        Rows are sorted by net (highest first), then by paid.
        """
        names: dict[UUID, str] = {}
        paid: dict[UUID, Fraction] = {}
        owed: dict[UUID, Fraction] = {}
        joined: dict[UUID, int] = {}

        for session in sessions:
            details = self._balances.details(session)
            for person in session.participants:
                balance = details[person.id]
                names.setdefault(person.id, person.name)
                paid[person.id] = paid.get(person.id, ZERO) + to_fraction(balance.paid)
                owed[person.id] = owed.get(person.id, ZERO) + to_fraction(balance.owed)
                joined[person.id] = joined.get(person.id, 0) + 1

        rows = [
            PersonSummary(
                participant_id=pid,
                name=names[pid],
                paid=round_money(paid[pid], self._places),
                owed=round_money(owed[pid], self._places),
                net=round_money(paid[pid] - owed[pid], self._places),
                sessions=joined[pid],
            )
            for pid in names
        ]
        rows.sort(key=lambda row: (row.net, row.paid), reverse=True)

        return PeopleSummary(
            rows=rows,
            top_payer=max(rows, key=lambda row: row.paid, default=None),
            most_active=max(rows, key=lambda row: row.sessions, default=None),
        )
