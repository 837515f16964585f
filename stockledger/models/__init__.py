"""
Stockledger Models.

Core models for stock management:
- Product, Category, Unit: What is stocked
- Warehouse: Where stock is held
- StockPosition: On-hand quantity per (product, warehouse)
- StockMovement: Immutable ledger of changes
"""

from stockledger.models.catalog import Category, Product, Unit
from stockledger.models.enums import INBOUND_TYPES, MovementType
from stockledger.models.movement import StockMovement
from stockledger.models.position import StockPosition
from stockledger.models.warehouse import Warehouse

__all__ = [
    'MovementType',
    'INBOUND_TYPES',
    'Unit',
    'Category',
    'Product',
    'Warehouse',
    'StockPosition',
    'StockMovement',
]
