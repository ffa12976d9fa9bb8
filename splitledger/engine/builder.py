"""
Line Item Validator/Builder

Turns raw user input into an immutable LineItem, or rejects it.

Only two things are checked: the total must be strictly positive and at
least one consumer must be selected. Titles and categories pass through
untouched (an empty title is fine). Weighted/Exact maps are not checked
against the consumers; see AllocationResolver.coverage_gaps().
"""

from decimal import Decimal, InvalidOperation
from typing import Optional, Sequence, Union
from uuid import uuid4

from splitledger.engine.errors import InvalidTotalError, NoConsumersError
from splitledger.models.expense import (
    ExpenseCategory,
    LineItem,
    Participant,
    SplitMethod,
)
from splitledger.observability import get_logger

logger = get_logger(__name__)


class LineItemBuilder:
    """Validates and constructs line items."""

    def build(
        self,
        title: str,
        total: Union[Decimal, int, str],
        category: ExpenseCategory,
        payer: Participant,
        consumers: Sequence[Participant],
        method: SplitMethod,
    ) -> LineItem:
        """
        Build a new line item with a fresh ID.

        Raises:
            InvalidTotalError: total is not a number greater than zero
            NoConsumersError: no consumers were given
        """
        amount = self._to_decimal(total)

        if amount is None or not amount.is_finite() or amount <= 0:
            logger.warning("line_item_rejected", reason=InvalidTotalError.code, total=str(total))
            raise InvalidTotalError(f"Total must be greater than zero (got {total})")

        if not consumers:
            logger.warning("line_item_rejected", reason=NoConsumersError.code, total=str(amount))
            raise NoConsumersError("At least one consumer is required")

        item = LineItem(
            id=uuid4(),
            title=title,
            amount=amount,
            category=category,
            payer_id=payer.id,
            consumer_ids=tuple(person.id for person in consumers),
            method=method,
        )

        logger.debug(
            "line_item_built",
            item_id=str(item.id),
            amount=str(item.amount),
            category=item.category.value,
            method=item.method.type,
            consumers=len(item.consumer_ids),
        )
        return item

    @staticmethod
    def _to_decimal(total: Union[Decimal, int, str]) -> Optional[Decimal]:
        try:
            return Decimal(str(total).strip())
        except InvalidOperation:
            return None
