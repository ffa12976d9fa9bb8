"""
Settlement Engine

Pure, stateless functions over an immutable session snapshot:
- AllocationResolver: one participant's share of one line item
- LineItemBuilder: validated construction of line items
- BalanceAggregator: paid/owed/net per participant
- CategoryAggregator: totals per expense category
"""

from splitledger.engine.allocation import AllocationResolver, CoverageReport
from splitledger.engine.balances import BalanceAggregator, ParticipantBalance
from splitledger.engine.builder import LineItemBuilder
from splitledger.engine.categories import CategoryAggregator
from splitledger.engine.errors import (
    InvalidTotalError,
    NoConsumersError,
    SplitError,
)

__all__ = [
    "AllocationResolver",
    "CoverageReport",
    "BalanceAggregator",
    "ParticipantBalance",
    "LineItemBuilder",
    "CategoryAggregator",
    "InvalidTotalError",
    "NoConsumersError",
    "SplitError",
]
