"""
Balance Aggregator

For one participant across a whole session:
    paid = sum of amounts of items they paid for
    owed = sum of their shares over every item in the session
    net  = paid - owed   (positive: the others owe them money)

DESIGN DECISION: Sums are accumulated at full precision and the three
results are rounded once, at the end. Rounding per item would drift by a
cent every few items on long sessions.
"""

from decimal import Decimal
from fractions import Fraction
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict

from splitledger.engine.allocation import ZERO, AllocationResolver
from splitledger.models.expense import ExpenseSession, Participant
from splitledger.money.rounding import MONEY_PLACES, round_money, to_fraction


class ParticipantBalance(BaseModel):
    """Rounded paid/owed/net for one participant in one session."""
    model_config = ConfigDict(frozen=True)

    paid: Decimal
    owed: Decimal
    net: Decimal

    def as_tuple(self) -> tuple[Decimal, Decimal, Decimal]:
        return self.paid, self.owed, self.net


class BalanceAggregator:
    """
    Computes participant balances for a session snapshot.

    Args:
        resolver: Allocation resolver to use (a fresh one by default)
        places: Fractional digits of the rounded results
    """

    def __init__(
        self,
        resolver: Optional[AllocationResolver] = None,
        places: int = MONEY_PLACES,
    ):
        self._resolver = resolver or AllocationResolver()
        self._places = places

    def detail(self, participant: Participant, session: ExpenseSession) -> ParticipantBalance:
        """Paid, owed and net for `participant`. O(items)."""
        paid = ZERO
        owed = ZERO

        for item in session.items:
            if item.payer_id == participant.id:
                paid += to_fraction(item.amount)
            # non-consumers resolve to 0
            owed += self._resolver.share(item, participant.id)

        return self._rounded(paid, owed)

    def details(self, session: ExpenseSession) -> dict[UUID, ParticipantBalance]:
        """
        Balances for every participant of the session, keyed by ID.

        Each item's allocation is resolved once, so this is
        O(items x consumers) instead of O(participants x items).
        Payers and consumers who are not listed as participants are
        ignored, as detail() would never be asked about them.
        """
        paid: dict[UUID, Fraction] = {p.id: ZERO for p in session.participants}
        owed: dict[UUID, Fraction] = {p.id: ZERO for p in session.participants}

        for item in session.items:
            if item.payer_id in paid:
                paid[item.payer_id] += to_fraction(item.amount)
            for pid, share in self._resolver.shares(item).items():
                if pid in owed:
                    owed[pid] += share

        return {pid: self._rounded(paid[pid], owed[pid]) for pid in paid}

    def _rounded(self, paid: Fraction, owed: Fraction) -> ParticipantBalance:
        return ParticipantBalance(
            paid=round_money(paid, self._places),
            owed=round_money(owed, self._places),
            net=round_money(paid - owed, self._places),
        )
