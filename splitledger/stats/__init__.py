"""Cross-session statistics package."""

from splitledger.stats.summary import (
    Overview,
    PeopleSummary,
    PersonSummary,
    SessionStatistics,
)

__all__ = ["Overview", "PeopleSummary", "PersonSummary", "SessionStatistics"]
