"""
StockMovement model — Immutable ledger of quantity changes.
"""

from django.conf import settings
from django.db import models, transaction
from django.db.models import F
from django.utils import timezone
from django.utils.translation import gettext_lazy as _

from stockledger.models.enums import MovementType


class StockMovementQuerySet(models.QuerySet):

    def for_position(self, position):
        return self.filter(
            product_id=position.product_id,
            warehouse_id=position.warehouse_id,
        )

    def of_type(self, movement_type):
        return self.filter(type=movement_type)


class StockMovement(models.Model):
    """
    Immutable record of a quantity change.

    Rules:
    - NEVER update() or delete()
    - Corrections are new movements with inverse quantity
    - Updates StockPosition.quantity atomically on save()

    This is the ONLY model that changes on-hand quantity.
    """

    product = models.ForeignKey(
        'stockledger.Product',
        on_delete=models.PROTECT,
        related_name='stock_movements',
        verbose_name=_('Product'),
    )
    warehouse = models.ForeignKey(
        'stockledger.Warehouse',
        on_delete=models.PROTECT,
        related_name='stock_movements',
        verbose_name=_('Warehouse'),
    )
    type = models.CharField(
        max_length=20,
        choices=MovementType.choices,
        db_index=True,
        verbose_name=_('Type'),
    )
    quantity = models.DecimalField(
        max_digits=12,
        decimal_places=3,
        verbose_name=_('Quantity'),
        help_text=_('Positive = in, Negative = out'),
    )
    unit_cost = models.DecimalField(
        max_digits=12,
        decimal_places=4,
        null=True,
        blank=True,
        verbose_name=_('Unit cost'),
    )
    reference = models.CharField(
        max_length=100,
        blank=True,
        default='',
        verbose_name=_('Reference'),
        help_text=_('Provenance tag. Ex: "MANUAL_ADJUST", "PO-0042"'),
    )
    notes = models.TextField(null=True, blank=True, verbose_name=_('Notes'))

    created_at = models.DateTimeField(default=timezone.now, db_index=True, verbose_name=_('Date/Time'))
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='+',
        verbose_name=_('User'),
    )

    objects = StockMovementQuerySet.as_manager()

    class Meta:
        verbose_name = _('Stock movement')
        verbose_name_plural = _('Stock movements')
        ordering = ['id']
        indexes = [
            models.Index(fields=['product', 'warehouse', 'id'], name='stockledger_mov_prod_wh_idx'),
        ]

    def save(self, *args, **kwargs):
        """Save movement and update position quantity atomically."""
        # Immutability check
        if self.pk:
            raise ValueError(
                "Stock movements are immutable. "
                "To correct one, record a new movement with the inverse quantity."
            )

        if not self.quantity:
            raise ValueError("Movement quantity must be non-zero")

        with transaction.atomic():
            super().save(*args, **kwargs)

            # Import here to avoid circular import
            from stockledger.models.position import StockPosition

            updated = StockPosition.objects.filter(
                product_id=self.product_id,
                warehouse_id=self.warehouse_id,
            ).update(
                quantity=F('quantity') + self.quantity,
                updated_at=timezone.now(),
            )
            if not updated:
                from stockledger.exceptions import StockError
                raise StockError(
                    'POSITION_NOT_FOUND',
                    product_id=self.product_id,
                    warehouse_id=self.warehouse_id,
                )

    def delete(self, *args, **kwargs):
        """Prevent deletion. Movements are immutable."""
        raise ValueError(
            "Stock movements are immutable. "
            "To reverse one, record a new movement with the inverse quantity."
        )

    def __str__(self) -> str:
        signal = '+' if self.quantity > 0 else ''
        return f"{self.type} {signal}{self.quantity} | {self.reference}"
