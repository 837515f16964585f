"""
StockPosition model — on-hand quantity per (product, warehouse).
"""

import logging
from decimal import Decimal

from django.db import models, transaction
from django.db.models import Sum
from django.db.models.functions import Coalesce
from django.utils.translation import gettext_lazy as _

logger = logging.getLogger('stockledger')


class StockPositionQuerySet(models.QuerySet):
    """QuerySet with helper methods for position queries."""

    def for_product(self, product):
        """Filter positions for a specific product."""
        return self.filter(product=product)

    def at_warehouse(self, warehouse):
        """Filter by warehouse."""
        return self.filter(warehouse=warehouse)

    def total(self) -> Decimal:
        """Sum of quantities in this queryset."""
        return self.aggregate(
            t=Coalesce(Sum('quantity'), Decimal('0'))
        )['t']


class StockPosition(models.Model):
    """
    Quantity of a product at a warehouse.

    - At most one row per (product, warehouse)
    - Created lazily by the ledger on the first movement
    - quantity is a cache of the sum of movement deltas, updated
      atomically by StockMovement.save()
    - Use recalculate() for audit/correction
    """

    product = models.ForeignKey(
        'stockledger.Product',
        on_delete=models.CASCADE,
        related_name='stock_positions',
        verbose_name=_('Product'),
    )
    warehouse = models.ForeignKey(
        'stockledger.Warehouse',
        on_delete=models.CASCADE,
        related_name='stock_positions',
        verbose_name=_('Warehouse'),
    )
    quantity = models.DecimalField(
        max_digits=12,
        decimal_places=3,
        default=Decimal('0'),
        verbose_name=_('Quantity'),
    )
    cost_average = models.DecimalField(
        max_digits=12,
        decimal_places=4,
        null=True,
        blank=True,
        verbose_name=_('Average cost'),
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = StockPositionQuerySet.as_manager()

    class Meta:
        verbose_name = _('Stock position')
        verbose_name_plural = _('Stock positions')
        constraints = [
            models.UniqueConstraint(
                fields=['product', 'warehouse'],
                name='unique_stock_position',
            )
        ]
        indexes = [
            models.Index(fields=['warehouse', 'product'], name='stockledger_pos_wh_prod_idx'),
        ]

    def movements(self):
        """Movements that justify this position."""
        from stockledger.models.movement import StockMovement
        return StockMovement.objects.for_position(self)

    def recalculate(self) -> Decimal:
        """
        Recalculate quantity from movements.

        Use for:
        - Integrity audit
        - Correction after detected inconsistency

        The row is re-read under select_for_update() so that a movement
        committed meanwhile is neither missed nor overwritten.

        Returns:
            New calculated quantity
        """
        with transaction.atomic():
            locked = type(self).objects.select_for_update().get(pk=self.pk)
            total = locked.movements().aggregate(
                t=Coalesce(Sum('quantity'), Decimal('0'))
            )['t']

            if total != locked.quantity:
                old = locked.quantity
                locked.quantity = total
                locked.save(update_fields=['quantity', 'updated_at'])

                logger.warning(
                    "stock.recalculated",
                    extra={
                        "position_id": self.pk,
                        "old": str(old),
                        "new": str(total),
                        "diff": str(total - old),
                    },
                )

        self.quantity = total
        self.updated_at = locked.updated_at
        return total

    def __str__(self) -> str:
        return f"{self.product} [{self.warehouse}]: {self.quantity}"
