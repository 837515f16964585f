"""
Stockledger configuration.

Usage in settings.py:
    STOCKLEDGER = {
        "ALLOW_NEGATIVE_STOCK": False,
        "ADJUSTMENT_REFERENCE": "MANUAL_ADJUST",
        "MOVEMENT_REPORT_LIMIT": 200,
        "LOW_STOCK_LIMIT": 1000,
    }
"""

from dataclasses import dataclass
from typing import Any

from django.conf import settings


@dataclass
class StockLedgerSettings:
    """Stockledger configuration settings."""

    # Allow movements that take on-hand quantity below zero (backorders)
    ALLOW_NEGATIVE_STOCK: bool = True

    # Reference tag written on manual adjustment movements
    ADJUSTMENT_REFERENCE: str = "MANUAL_ADJUST"

    # Max rows returned by the movement history report
    MOVEMENT_REPORT_LIMIT: int = 200

    # Max rows returned by the low stock report
    LOW_STOCK_LIMIT: int = 1000


def get_stockledger_settings() -> StockLedgerSettings:
    """Load settings from Django settings."""
    user_settings: dict[str, Any] = getattr(settings, "STOCKLEDGER", {})
    return StockLedgerSettings(**{
        k: v for k, v in user_settings.items()
        if k in StockLedgerSettings.__dataclass_fields__
    })


class _LazySettings:
    """Lazy proxy that re-reads settings on every attribute access."""

    def __getattr__(self, name):
        return getattr(get_stockledger_settings(), name)


stockledger_settings = _LazySettings()
