"""Shared fixtures: three participants and a helper to build line items."""

from decimal import Decimal

import pytest

from splitledger.models.expense import (
    EqualSplit,
    ExpenseCategory,
    ExpenseSession,
    LineItem,
    Participant,
)


@pytest.fixture
def alex() -> Participant:
    return Participant(name="Alex")


@pytest.fixture
def jamie() -> Participant:
    return Participant(name="Jamie")


@pytest.fixture
def taylor() -> Participant:
    return Participant(name="Taylor")


@pytest.fixture
def people(alex, jamie, taylor) -> tuple[Participant, Participant, Participant]:
    return alex, jamie, taylor


@pytest.fixture
def make_item():
    """Build a LineItem directly, bypassing the builder."""
    def _make(amount, payer, consumers, method=None, category=ExpenseCategory.FOOD, title="Item"):
        return LineItem(
            title=title,
            amount=Decimal(str(amount)),
            category=category,
            payer_id=payer.id,
            consumer_ids=tuple(p.id for p in consumers),
            method=method or EqualSplit(),
        )
    return _make


@pytest.fixture
def make_session(people):
    def _make(items=(), participants=None, **kwargs):
        return ExpenseSession(
            title=kwargs.pop("title", "Game night"),
            participants=tuple(participants if participants is not None else people),
            items=tuple(items),
            **kwargs,
        )
    return _make
