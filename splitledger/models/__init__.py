"""
Data Models Package

This package contains the Pydantic models the settlement engine reads.
"""

from splitledger.models.expense import (
    EqualSplit,
    ExactSplit,
    ExpenseCategory,
    ExpenseSession,
    LineItem,
    Participant,
    SplitMethod,
    WeightedSplit,
)

__all__ = [
    "EqualSplit",
    "ExactSplit",
    "ExpenseCategory",
    "ExpenseSession",
    "LineItem",
    "Participant",
    "SplitMethod",
    "WeightedSplit",
]
