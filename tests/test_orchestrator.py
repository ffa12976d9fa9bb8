"""Tests for the SplitLedger facade and its factory."""

from decimal import Decimal

import pytest

from splitledger.config import Settings
from splitledger.engine import InvalidTotalError, NoConsumersError
from splitledger.models.expense import (
    ExpenseCategory,
    ExpenseSession,
    WeightedSplit,
)
from splitledger.orchestrator import SplitLedger, create_ledger
from splitledger.services.storage import (
    InMemorySessionStorage,
    JsonFileSessionStorage,
)


@pytest.fixture
def ledger() -> SplitLedger:
    return SplitLedger(storage=InMemorySessionStorage())


@pytest.fixture
def session(people) -> ExpenseSession:
    return ExpenseSession(title="Game night", participants=people)


class TestAddItem:
    """Tests for add_item()."""

    def test_item_is_prepended(self, ledger, session, people):
        """Test that new items go to the front of a new snapshot."""
        alex, jamie, _ = people
        first = ledger.add_item(session, "Pizza", "24.00", ExpenseCategory.FOOD, alex, people)
        second = ledger.add_item(first, " Cola ", "6", ExpenseCategory.DRINKS, jamie, [jamie])

        assert session.items == ()
        assert [item.title for item in second.items] == ["Cola", "Pizza"]
        assert second.items[0].amount == Decimal("6")

    def test_equal_split_by_default(self, ledger, session, people):
        """Test the default allocation method."""
        updated = ledger.add_item(session, "Pizza", "24.00", ExpenseCategory.FOOD, people[0], people)
        assert updated.items[0].method.type == "equal"

    def test_invalid_total_leaves_session_alone(self, ledger, session, people):
        """Test that a rejected item raises and nothing changes."""
        with pytest.raises(InvalidTotalError):
            ledger.add_item(session, "Free", "0", ExpenseCategory.OTHER, people[0], people)
        assert session.items == ()

    def test_no_consumers(self, ledger, session, people):
        """Test that an item needs someone to consume it."""
        with pytest.raises(NoConsumersError):
            ledger.add_item(session, "Nobody", "5", ExpenseCategory.OTHER, people[0], [])


class TestReport:
    """Tests for report()."""

    def test_three_way_dinner(self, ledger, session, people):
        """Test balances and category totals for one item."""
        alex, jamie, taylor = people
        session = ledger.add_item(session, "Dinner", "10.00", ExpenseCategory.FOOD, alex, people)

        report = ledger.report(session)

        assert report.total_amount == Decimal("10.00")
        assert [row.name for row in report.balances] == ["Alex", "Jamie", "Taylor"]
        assert report.balances[0].net == Decimal("6.67")
        assert report.balances[1].net == Decimal("-3.33")
        assert report.category_totals == {ExpenseCategory.FOOD: Decimal("10.00")}
        assert report.incomplete_items == []

    def test_incomplete_weights_are_reported(self, ledger, session, people):
        """Test that a consumer missing from the weight map is flagged."""
        alex, jamie, taylor = people
        session = ledger.add_item(
            session, "Tickets", "30.00", ExpenseCategory.TICKETS, alex, people,
            method=WeightedSplit(map={alex.id: Decimal("1"), jamie.id: Decimal("1")}),
        )

        report = ledger.report(session)

        (gap,) = report.incomplete_items
        assert gap.item_id == session.items[0].id
        assert gap.missing_consumer_ids == (taylor.id,)
        # taylor owes nothing, so the balances do not close
        assert report.balances[2].owed == Decimal("0.00")

    def test_total_follows_ledger_scale(self, people):
        """Test that the session total is rounded at the ledger's scale."""
        ledger = SplitLedger(places=0)
        session = ExpenseSession(title="Snacks", participants=people)
        session = ledger.add_item(session, "Chips", "2.50", ExpenseCategory.FOOD, people[0], people)

        assert ledger.report(session).total_amount == Decimal("2")
        assert SplitLedger().report(session).total_amount == Decimal("2.50")

    def test_formatter_uses_session_currency(self, ledger, people):
        """Test picking the formatter from the session currency."""
        session = ExpenseSession(title="Paris", participants=people, currency_code="eur")
        assert ledger.formatter_for(session).format(Decimal("3.5")) == "€3.50"


class TestPersistence:
    """Tests for save() and saved_sessions()."""

    def test_save_inserts_then_updates(self, ledger, session, people):
        """Test that saving twice keeps a single, updated copy."""
        ledger.save(session)
        updated = ledger.add_item(session, "Pizza", "24.00", ExpenseCategory.FOOD, people[0], people)
        ledger.save(updated)

        saved = ledger.saved_sessions()
        assert len(saved) == 1
        assert saved[0] == updated

    def test_requires_storage(self, session):
        """Test that a ledger without storage refuses to save."""
        with pytest.raises(RuntimeError):
            SplitLedger().save(session)


class TestCreateLedger:
    """Tests for the create_ledger() factory."""

    def test_without_storage(self):
        """Test building a ledger that only computes."""
        ledger = create_ledger(settings=Settings(), use_storage=False)
        assert ledger.storage is None

    def test_json_storage_from_settings(self, monkeypatch, tmp_path, session):
        """Test that the configured path is used for persistence."""
        path = tmp_path / "ledger.json"
        monkeypatch.setenv("SPLITLEDGER_STORAGE_PATH", str(path))
        monkeypatch.setenv("SPLITLEDGER_LOG_RENDER_JSON", "false")

        ledger = create_ledger(settings=Settings())
        ledger.save(session)

        assert isinstance(ledger.storage, JsonFileSessionStorage)
        assert ledger.storage.path == path
        assert path.exists()

    def test_explicit_storage_wins(self):
        """Test passing a storage backend directly."""
        storage = InMemorySessionStorage()
        ledger = create_ledger(settings=Settings(), storage=storage)
        assert ledger.storage is storage

    def test_money_scale_reaches_the_engine(self, monkeypatch, people):
        """Test that the configured scale is used for balances."""
        monkeypatch.setenv("SPLITLEDGER_MONEY_SCALE", "0")
        ledger = create_ledger(settings=Settings(), use_storage=False)
        session = ExpenseSession(title="Snacks", participants=people)
        session = ledger.add_item(session, "Chips", "10", ExpenseCategory.FOOD, people[0], people)

        assert ledger.report(session).balances[1].owed == Decimal("3")


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
