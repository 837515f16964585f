"""
Stock queries — read-only operations.

All methods are classmethod on StockLedger and use no locking.
"""

from decimal import Decimal

from stockledger.models.movement import StockMovement
from stockledger.models.position import StockPosition
from stockledger.models.warehouse import Warehouse


class StockQueries:
    """Read-only stock query methods."""

    @classmethod
    def get_position(cls, product, warehouse: Warehouse) -> StockPosition | None:
        """Get the position at (product, warehouse), if any movement created it."""
        return StockPosition.objects.for_product(product).at_warehouse(warehouse).first()

    @classmethod
    def on_hand(cls, product, warehouse: Warehouse | None = None) -> Decimal:
        """
        On-hand quantity of a product.

        Args:
            product: Product object or pk
            warehouse: Specific warehouse (None = all)

        Returns:
            Decimal with the summed quantity (0 when no position exists)
        """
        qs = StockPosition.objects.for_product(product)
        if warehouse is not None:
            qs = qs.at_warehouse(warehouse)
        return qs.total()

    @classmethod
    def history(cls, product, warehouse: Warehouse | None = None):
        """Movements of a product, oldest first."""
        qs = StockMovement.objects.filter(product=product)
        if warehouse is not None:
            qs = qs.filter(warehouse=warehouse)
        return qs.order_by('id')

    @classmethod
    def recalculate(cls, position: StockPosition) -> Decimal:
        """Rebuild a position's quantity from its movements. See StockPosition.recalculate()."""
        return position.recalculate()
