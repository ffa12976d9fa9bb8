"""
Core Data Models for Split Ledger

These models define the schemas for everything the settlement engine reads.
They are designed to:
1. Be immutable value objects (frozen) so a snapshot cannot change mid-call
2. Provide clear validation error messages
3. Round-trip exactly through JSON for the storage layer

DESIGN DECISION: The allocation method is a closed tagged union
discriminated on a "type" field. The three variants are the only ones the
engine knows how to resolve, and the discriminator is what gets persisted.
"""

from datetime import datetime, timezone
from decimal import Decimal
from enum import Enum
from fractions import Fraction
from typing import Annotated, Literal, Optional, Union
from uuid import UUID, uuid4

from pydantic import BaseModel, ConfigDict, Field, field_validator

from splitledger.money.rounding import MONEY_PLACES, round_money, to_fraction


# =============================================================================
# ENUMS - Finite set of valid values
# =============================================================================

class ExpenseCategory(str, Enum):
    """
    Supported expense categories.

    Declaration order is the display order used by category summaries.
    """
    FOOD = "food"
    DRINKS = "drinks"
    RIDE = "ride"
    TICKETS = "tickets"
    MERCH = "merch"
    OTHER = "other"

    @property
    def title(self) -> str:
        return self.value.capitalize()


# =============================================================================
# PARTICIPANTS
# =============================================================================

class Participant(BaseModel):
    """
    A person taking part in a session.

    Created by the people-management layer; the id never changes.
    """
    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    id: UUID = Field(
        default_factory=uuid4,
        description="Unique participant ID"
    )
    name: str = Field(
        ...,
        max_length=100,
        description="Display name"
    )


# =============================================================================
# ALLOCATION METHODS
# =============================================================================

class EqualSplit(BaseModel):
    """Every consumer owes the same share of the total."""
    model_config = ConfigDict(frozen=True)

    type: Literal["equal"] = "equal"


class WeightedSplit(BaseModel):
    """
    Consumers owe in proportion to their weight.

    A consumer without a weight owes nothing for the item.
    """
    model_config = ConfigDict(frozen=True)

    type: Literal["weights"] = "weights"
    map: dict[UUID, Decimal] = Field(
        default_factory=dict,
        description="Participant ID -> positive weight"
    )


class ExactSplit(BaseModel):
    """
    Consumers owe the amount entered for them, verbatim.

    Entries are NOT checked against the item total.
    """
    model_config = ConfigDict(frozen=True)

    type: Literal["exact"] = "exact"
    map: dict[UUID, Decimal] = Field(
        default_factory=dict,
        description="Participant ID -> non-negative amount"
    )


SplitMethod = Annotated[
    Union[EqualSplit, WeightedSplit, ExactSplit],
    Field(discriminator="type"),
]


# =============================================================================
# LINE ITEMS AND SESSIONS
# =============================================================================

class LineItem(BaseModel):
    """
    One bill inside a session.

    Immutable after construction. An edit builds a replacement item
    (ExpenseSession.replace_item) rather than mutating this one.
    Payer and consumers are referenced by participant ID only.
    """
    model_config = ConfigDict(frozen=True)

    id: UUID = Field(
        default_factory=uuid4,
        description="Unique line item ID"
    )
    title: str = Field(
        default="",
        description="Free-text title (may be empty)"
    )
    amount: Decimal = Field(
        ...,
        gt=0,
        description="Total amount of the bill"
    )
    category: ExpenseCategory = Field(
        default=ExpenseCategory.OTHER,
        description="Expense category"
    )
    payer_id: UUID = Field(
        ...,
        description="Participant who paid the bill"
    )
    consumer_ids: tuple[UUID, ...] = Field(
        ...,
        min_length=1,
        description="Participants sharing the bill, in selection order"
    )
    method: SplitMethod = Field(
        default_factory=EqualSplit,
        description="How the amount is divided among consumers"
    )

    @field_validator('consumer_ids')
    @classmethod
    def collapse_duplicate_consumers(cls, v: tuple[UUID, ...]) -> tuple[UUID, ...]:
        """Consumers form an ordered set; keep the first occurrence."""
        return tuple(dict.fromkeys(v))


class ExpenseSession(BaseModel):
    """
    A group outing: who took part and what was bought.

    Owned by the storage layer. The engine only ever reads a snapshot.
    Items are kept newest first.
    """
    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    id: UUID = Field(
        default_factory=uuid4,
        description="Unique session ID"
    )
    title: str = Field(
        default="",
        max_length=200,
        description="Session title"
    )
    date: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="When the session took place"
    )
    currency_code: str = Field(
        default="USD",
        min_length=3,
        max_length=3,
        description="ISO 4217 code all amounts are expressed in"
    )
    participants: tuple[Participant, ...] = Field(default_factory=tuple)
    items: tuple[LineItem, ...] = Field(default_factory=tuple)

    @field_validator('currency_code')
    @classmethod
    def uppercase_currency(cls, v: str) -> str:
        return v.upper()

    @property
    def raw_total(self) -> Fraction:
        """Exact, unrounded sum of all item amounts."""
        return sum((to_fraction(item.amount) for item in self.items), Fraction(0))

    def total_amount(self, places: int = MONEY_PLACES) -> Decimal:
        """Sum of all item amounts, rounded once at `places` digits."""
        return round_money(self.raw_total, places)

    def participant(self, participant_id: UUID) -> Optional[Participant]:
        """Look up a participant by ID."""
        for person in self.participants:
            if person.id == participant_id:
                return person
        return None

    def with_item(self, item: LineItem) -> "ExpenseSession":
        """Return a copy with `item` added as the newest entry."""
        return self.model_copy(update={"items": (item,) + self.items})

    def without_item(self, item_id: UUID) -> "ExpenseSession":
        """Return a copy without the item with `item_id`."""
        return self.model_copy(
            update={"items": tuple(i for i in self.items if i.id != item_id)}
        )

    def replace_item(self, item: LineItem) -> "ExpenseSession":
        """Return a copy where the item sharing `item.id` is swapped wholesale."""
        return self.model_copy(
            update={
                "items": tuple(item if i.id == item.id else i for i in self.items)
            }
        )
