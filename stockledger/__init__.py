"""
Django Stockledger — per-warehouse stock positions with an append-only movement ledger.

Usage:
    from stockledger import ledger, StockError

    ledger.adjust(product.pk, warehouse.pk, Decimal('5'), reason='Recount')
    ledger.on_hand(product, warehouse)  # 5
"""


def __getattr__(name):
    """Lazy import to avoid circular imports during app loading."""
    if name == 'ledger':
        from stockledger.service import StockLedger
        return StockLedger
    elif name in ('StockError', 'InvalidArgument', 'NotFound', 'StorageError'):
        from stockledger import exceptions
        return getattr(exceptions, name)
    elif name in ('Product', 'Warehouse', 'StockPosition', 'StockMovement', 'MovementType'):
        from stockledger import models
        return getattr(models, name)
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = [
    'ledger',
    'StockError',
    'InvalidArgument',
    'NotFound',
    'StorageError',
    'Product',
    'Warehouse',
    'StockPosition',
    'StockMovement',
    'MovementType',
]

__version__ = '0.1.0'
