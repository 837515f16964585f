"""
Stock services — modular organization of stock operations.

    from stockledger.services import StockQueries, StockMovements
    from stockledger.services import reports
"""

from stockledger.services.movements import StockMovements
from stockledger.services.queries import StockQueries

__all__ = [
    'StockQueries',
    'StockMovements',
]
