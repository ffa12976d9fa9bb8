"""
Main Orchestrator for Split Ledger

This module ties the components together for callers (a UI, a script):
1. Add an item (raw input -> validated LineItem -> new session snapshot)
2. Report on a session (balances, category totals, coverage warnings)
3. Save and load sessions through the storage interface

DESIGN DECISION: This is the only module that reads global settings.
Everything below it receives explicit arguments, so the settlement engine
has no singletons and can be used concurrently on any snapshot.
"""

from decimal import Decimal
from typing import Optional, Sequence, Union
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from splitledger.config import Settings, get_settings
from splitledger.engine import (
    AllocationResolver,
    BalanceAggregator,
    CategoryAggregator,
    CoverageReport,
    LineItemBuilder,
)
from splitledger.models.expense import (
    EqualSplit,
    ExpenseCategory,
    ExpenseSession,
    Participant,
    SplitMethod,
)
from splitledger.money import MONEY_PLACES, CurrencyCatalog, MoneyFormatter
from splitledger.observability import configure_logging, get_logger
from splitledger.services.storage import (
    JsonFileSessionStorage,
    SessionStorageInterface,
)
from splitledger.stats import SessionStatistics

logger = get_logger(__name__)


class BalanceRow(BaseModel):
    """A participant's balance with their display name."""
    model_config = ConfigDict(frozen=True)

    participant_id: UUID
    name: str
    paid: Decimal
    owed: Decimal
    net: Decimal


class SessionReport(BaseModel):
    """Everything a session screen shows, computed in one pass."""
    model_config = ConfigDict(frozen=True)

    session_id: UUID
    currency_code: str
    total_amount: Decimal
    balances: list[BalanceRow] = Field(default_factory=list)
    category_totals: dict[ExpenseCategory, Decimal] = Field(default_factory=dict)
    incomplete_items: list[CoverageReport] = Field(
        default_factory=list,
        description="Weighted/Exact items whose map does not cover every consumer "
                    "or whose Exact entries do not add up to the total"
    )


class SplitLedger:
    """
    Facade over the settlement engine, statistics and storage.

    Usage:
        ledger = create_ledger()
        session = ledger.add_item(session, "Pizza", "24.00", ExpenseCategory.FOOD,
                                  payer=alex, consumers=[alex, jamie])
        report = ledger.report(session)
    """

    def __init__(
        self,
        storage: Optional[SessionStorageInterface] = None,
        catalog: Optional[CurrencyCatalog] = None,
        places: int = MONEY_PLACES,
    ):
        self._resolver = AllocationResolver()
        self._builder = LineItemBuilder()
        self._balances = BalanceAggregator(self._resolver, places=places)
        self._categories = CategoryAggregator(places=places)
        self._statistics = SessionStatistics(self._balances, self._categories, places=places)
        self._catalog = catalog or CurrencyCatalog(places=places)
        self._storage = storage
        self._places = places

    @property
    def balances(self) -> BalanceAggregator:
        return self._balances

    @property
    def categories(self) -> CategoryAggregator:
        return self._categories

    @property
    def statistics(self) -> SessionStatistics:
        return self._statistics

    @property
    def storage(self) -> Optional[SessionStorageInterface]:
        return self._storage

    def formatter_for(self, session: ExpenseSession) -> MoneyFormatter:
        return self._catalog.formatter_for(session.currency_code)

    def add_item(
        self,
        session: ExpenseSession,
        title: str,
        total: Union[Decimal, int, str],
        category: ExpenseCategory,
        payer: Participant,
        consumers: Sequence[Participant],
        method: Optional[SplitMethod] = None,
    ) -> ExpenseSession:
        """
        Validate a new item and return the session with it prepended.

        Raises:
            InvalidTotalError, NoConsumersError: The item was rejected; the
                session is unchanged and nothing should be saved
        """
        item = self._builder.build(
            title=title.strip(),
            total=total,
            category=category,
            payer=payer,
            consumers=consumers,
            method=method or EqualSplit(),
        )
        return session.with_item(item)

    def report(self, session: ExpenseSession) -> SessionReport:
        """Balances, category totals and coverage warnings for one session."""
        details = self._balances.details(session)
        rows = [
            BalanceRow(
                participant_id=person.id,
                name=person.name,
                paid=details[person.id].paid,
                owed=details[person.id].owed,
                net=details[person.id].net,
            )
            for person in session.participants
        ]

        incomplete = [
            report
            for report in (self._resolver.coverage_gaps(item) for item in session.items)
            if not report.is_complete
        ]
        if incomplete:
            logger.warning(
                "incomplete_allocations",
                session_id=str(session.id),
                item_ids=[str(r.item_id) for r in incomplete],
            )

        return SessionReport(
            session_id=session.id,
            currency_code=session.currency_code,
            total_amount=session.total_amount(self._places),
            balances=rows,
            category_totals=self._categories.totals_by_category(session),
            incomplete_items=incomplete,
        )

    def save(self, session: ExpenseSession) -> None:
        """Insert or replace `session` in storage."""
        storage = self._require_storage()
        if storage.get_session(session.id) is None:
            storage.add_session(session)
        else:
            storage.update_session(session)

    def saved_sessions(self) -> list[ExpenseSession]:
        return self._require_storage().list_sessions()

    def _require_storage(self) -> SessionStorageInterface:
        if self._storage is None:
            raise RuntimeError("No session storage configured")
        return self._storage


def create_ledger(
    settings: Optional[Settings] = None,
    storage: Optional[SessionStorageInterface] = None,
    use_storage: bool = True,
) -> SplitLedger:
    """
    Factory function to create a fully wired ledger.

    Args:
        settings: Settings to use (the cached global settings by default)
        storage: Storage backend; defaults to the configured JSON file
        use_storage: Set to False for a ledger without persistence

    Returns:
        A SplitLedger instance
    """
    if settings is None:
        settings = get_settings()

    log_settings = settings.logging
    configure_logging(level=log_settings.level, render_json=log_settings.render_json)

    engine_settings = settings.engine
    catalog = CurrencyCatalog(
        default_code=engine_settings.default_currency,
        places=engine_settings.money_scale,
    )

    if storage is None and use_storage:
        storage_settings = settings.storage
        storage = JsonFileSessionStorage(
            storage_settings.path,
            write_attempts=storage_settings.write_attempts,
        )

    logger.info(
        "ledger_created",
        money_scale=engine_settings.money_scale,
        default_currency=engine_settings.default_currency,
        storage=type(storage).__name__ if storage else None,
    )

    return SplitLedger(
        storage=storage,
        catalog=catalog,
        places=engine_settings.money_scale,
    )
