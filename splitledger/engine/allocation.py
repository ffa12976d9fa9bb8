"""
Allocation Resolver

Computes how much of one line item a participant owes.

DESIGN DECISION: Shares are exact rationals (fractions.Fraction), never
rounded here. An equal three-way split of 10.00 yields exactly 10/3 per
consumer, so the shares of an Equal or fully-covered Weighted item always
sum back to the item amount. Rounding happens once, in the aggregators.

KNOWN RISK: Weighted and Exact maps are trusted as entered. A consumer
missing from the map owes nothing for that item, and Exact entries are not
compared with the item amount. Either case breaks balance closure for the
session. coverage_gaps() reports such items so a caller can warn the user.
"""

from decimal import Decimal
from fractions import Fraction
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from splitledger.models.expense import (
    EqualSplit,
    ExactSplit,
    LineItem,
    WeightedSplit,
)
from splitledger.money.rounding import to_fraction

ZERO = Fraction(0)


class CoverageReport(BaseModel):
    """Diagnostic for one line item's Weighted/Exact map."""
    model_config = ConfigDict(frozen=True)

    item_id: UUID
    missing_consumer_ids: tuple[UUID, ...] = Field(
        default_factory=tuple,
        description="Consumers with no entry (they will owe nothing)"
    )
    exact_total: Optional[Decimal] = Field(
        default=None,
        description="Sum of Exact entries for consumers, if the item is Exact"
    )
    exact_total_matches: bool = Field(
        default=True,
        description="Whether Exact entries sum to the item amount"
    )

    @property
    def is_complete(self) -> bool:
        return not self.missing_consumer_ids and self.exact_total_matches


class AllocationResolver:
    """
    Resolves a participant's share of a line item.

    Stateless; one instance can be shared freely between callers and threads.
    """

    def share(self, item: LineItem, participant_id: UUID) -> Fraction:
        """
        Exact share of `item` owed by `participant_id`.

        Returns 0 for anyone who is not a consumer of the item.
        """
        if participant_id not in item.consumer_ids:
            return ZERO

        match item.method:
            case EqualSplit():
                return to_fraction(item.amount) / len(item.consumer_ids)
            case WeightedSplit(map=weights):
                total_weight = sum((to_fraction(w) for w in weights.values()), ZERO)
                weight = weights.get(participant_id)
                if weight is None or total_weight <= 0:
                    return ZERO
                return to_fraction(item.amount) * (to_fraction(weight) / total_weight)
            case ExactSplit(map=amounts):
                amount = amounts.get(participant_id)
                return ZERO if amount is None else to_fraction(amount)
            case _:
                raise TypeError(f"Unsupported allocation method: {item.method!r}")

    def shares(self, item: LineItem) -> dict[UUID, Fraction]:
        """Share of every consumer of `item`, in consumer order."""
        return {pid: self.share(item, pid) for pid in item.consumer_ids}

    def coverage_gaps(self, item: LineItem) -> CoverageReport:
        """
        Report consumers without a Weighted/Exact entry and Exact totals
        that do not add up to the item amount. Never raises.
        """
        match item.method:
            case EqualSplit():
                return CoverageReport(item_id=item.id)
            case WeightedSplit(map=weights):
                return CoverageReport(
                    item_id=item.id,
                    missing_consumer_ids=self._missing(item, weights),
                )
            case ExactSplit(map=amounts):
                exact_total = sum(
                    (amounts[pid] for pid in item.consumer_ids if pid in amounts),
                    Decimal(0),
                )
                return CoverageReport(
                    item_id=item.id,
                    missing_consumer_ids=self._missing(item, amounts),
                    exact_total=exact_total,
                    exact_total_matches=exact_total == item.amount,
                )
            case _:
                raise TypeError(f"Unsupported allocation method: {item.method!r}")

    @staticmethod
    def _missing(item: LineItem, entries: dict[UUID, Decimal]) -> tuple[UUID, ...]:
        return tuple(pid for pid in item.consumer_ids if pid not in entries)
