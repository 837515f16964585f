"""
Stock Ledger — The single public interface for all stock operations.

Usage:
    from stockledger import ledger, StockError

    ledger.adjust(product.pk, warehouse.pk, Decimal('-2'), reason='Broken bottles')
    ledger.record(product, warehouse, MovementType.PURCHASE, 24, reference='PO-0042')
    ledger.on_hand(product)
"""

from stockledger.services.movements import StockMovements
from stockledger.services.queries import StockQueries


class StockLedger(StockQueries, StockMovements):
    """
    Single interface for all stock operations.

    Parameter convention: (product, warehouse, quantity, ...)

    IMPORTANT: All state-changing methods use atomic transactions
    with the position row locked. See each method's docstring.
    """
