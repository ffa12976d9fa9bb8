"""Errors raised by the settlement engine."""


class SplitError(Exception):
    """
    Base exception for line item validation.

    Each subclass carries a stable `code` the UI can map to its own copy.
    Rejected items must not be persisted.
    """
    code = "split_error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidTotalError(SplitError):
    """Line item total is not strictly positive."""
    code = "invalid_total"


class NoConsumersError(SplitError):
    """Line item has nobody to split the bill between."""
    code = "no_consumers"
