"""
Exceptions for Stockledger.

All errors are StockError with a structured code for programmatic handling.
"""

from decimal import Decimal
from typing import Any


class BaseError(Exception):
    """
    Structured exception: a machine-readable code, a message and context data.

    The message defaults to the subclass' entry in ``_default_messages``.
    """

    _default_messages: dict[str, str] = {}

    def __init__(self, code: str, message: str | None = None, **data: Any):
        self.code = code
        self.message = message or self._default_messages.get(code, code)
        self.data = data
        super().__init__(self.message)

    def __str__(self) -> str:
        return f"[{self.code}] {self.message}"

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.code!r}, {self.message!r}, **{self.data!r})"


class StockError(BaseError):
    """
    Structured exception for stock operations.

    Usage:
        try:
            ledger.record(product.pk, warehouse.pk, MovementType.SALE, sale_qty)
        except StockError as e:
            if e.code == 'INSUFFICIENT_QUANTITY':
                print(f"Only {e.available} on hand")

    Attributes:
        code: Error code for programmatic handling
        message: Human-readable message
        data: Additional context data
    """

    _default_messages = {
        'INVALID_ARGUMENT': 'Invalid argument',
        'INVALID_QUANTITY': 'Invalid quantity',
        'INVALID_MOVEMENT_TYPE': 'Unknown movement type',
        'SAME_WAREHOUSE': 'Source and destination warehouse are the same',
        'INSUFFICIENT_QUANTITY': 'Not enough stock on hand',
        'PRODUCT_NOT_FOUND': 'Product not found',
        'WAREHOUSE_NOT_FOUND': 'Warehouse not found',
        'POSITION_NOT_FOUND': 'Stock position not found',
        'STORAGE_ERROR': 'Stock transaction could not be committed',
    }

    @property
    def available(self) -> Decimal:
        """Shortcut for data['available']."""
        return self.data.get('available', Decimal('0'))

    @property
    def requested(self) -> Decimal:
        """Shortcut for data['requested']."""
        return self.data.get('requested', Decimal('0'))

    def as_dict(self) -> dict[str, Any]:
        """Serialize to dict (useful for APIs)."""
        return {
            'code': self.code,
            'message': self.message,
            'data': {
                k: str(v) if isinstance(v, Decimal) else v
                for k, v in self.data.items()
            }
        }


class InvalidArgument(StockError):
    """Missing, malformed or zero input. Raised before any write."""

    def __init__(self, code: str = 'INVALID_ARGUMENT', message: str | None = None, **data: Any):
        super().__init__(code, message, **data)


class NotFound(StockError):
    """Referenced product or warehouse does not exist."""


class StorageError(StockError):
    """The database transaction failed. Never retried by the ledger."""

    def __init__(self, code: str = 'STORAGE_ERROR', message: str | None = None, **data: Any):
        super().__init__(code, message, **data)
