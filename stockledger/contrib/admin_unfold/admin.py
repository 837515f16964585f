"""
Stockledger Admin with Unfold theme.

To use, add 'unfold' before 'django.contrib.admin' and
'stockledger.contrib.admin_unfold' after 'stockledger' in INSTALLED_APPS.
"""

from django.contrib import admin
from django.utils.translation import gettext_lazy as _
from unfold.decorators import display

from stockledger.contrib.admin_unfold.base import BaseModelAdmin, BaseTabularInline, format_quantity
from stockledger.models import (
    Category,
    MovementType,
    Product,
    StockMovement,
    StockPosition,
    Unit,
    Warehouse,
)

MOVEMENT_TYPE_COLORS = {
    MovementType.ADJUSTMENT.value: 'warning',
    MovementType.PURCHASE.value: 'success',
    MovementType.OPENING.value: 'info',
    MovementType.SALE.value: 'danger',
    MovementType.TRANSFER_IN.value: 'info',
    MovementType.TRANSFER_OUT.value: 'info',
    MovementType.RETURN_IN.value: 'success',
    MovementType.RETURN_OUT.value: 'danger',
}


def _format_datetime(dt):
    """Format datetime as YYYY-MM-DD · HH:MM."""
    if dt:
        return dt.strftime('%Y-%m-%d · %H:%M')
    return '-'


# =============================================================================
# CATALOG ADMIN
# =============================================================================


@admin.register(Unit)
class UnitAdmin(BaseModelAdmin):
    list_display = ['name', 'symbol', 'precision']
    search_fields = ['name', 'symbol']


@admin.register(Category)
class CategoryAdmin(BaseModelAdmin):
    list_display = ['name', 'parent']
    search_fields = ['name']


class StockPositionInline(BaseTabularInline):
    """On-hand quantity per warehouse, shown on the product page."""

    model = StockPosition
    fields = ['warehouse', 'quantity', 'cost_average', 'updated_at']
    readonly_fields = fields
    extra = 0

    def has_add_permission(self, request, obj=None):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False


@admin.register(Product)
class ProductAdmin(BaseModelAdmin):
    """Admin for Product. Stock is read-only here and changes via the ledger."""

    list_display = ['sku', 'name', 'category', 'unit', 'min_stock_display', 'is_active_display']
    list_filter = ['is_active', 'category']
    search_fields = ['sku', 'name', 'barcode']
    readonly_fields = ['created_at', 'updated_at']
    inlines = [StockPositionInline]
    warn_unsaved_form = True

    @display(description=_('Min stock'))
    def min_stock_display(self, obj):
        return format_quantity(obj.min_stock)

    @display(description=_('Active'), boolean=True)
    def is_active_display(self, obj):
        return obj.is_active


@admin.register(Warehouse)
class WarehouseAdmin(BaseModelAdmin):
    list_display = ['name', 'code', 'is_active']
    list_filter = ['is_active']
    search_fields = ['name', 'code']
    readonly_fields = ['created_at', 'updated_at']
    warn_unsaved_form = True


# =============================================================================
# STOCK POSITION ADMIN
# =============================================================================


@admin.register(StockPosition)
class StockPositionAdmin(BaseModelAdmin):
    """Admin for StockPosition (read-only).

    Positions only change through ledger movements, which keeps the
    audit trail complete.
    """

    list_display = ['product', 'warehouse', 'quantity_display', 'cost_average', 'updated_at']
    list_filter = ['warehouse']
    search_fields = ['product__sku', 'product__name']
    readonly_fields = ['product', 'warehouse', 'quantity', 'cost_average', 'created_at', 'updated_at']
    actions = ['recalculate_positions']

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False

    @display(description=_('On hand'))
    def quantity_display(self, obj):
        return format_quantity(obj.quantity)

    @admin.action(description=_('Recalculate from movements'))
    def recalculate_positions(self, request, queryset):
        count = 0
        for position in queryset:
            old = position.quantity
            if position.recalculate() != old:
                count += 1
        self.message_user(request, _('{count} position(s) corrected.').format(count=count))


# =============================================================================
# STOCK MOVEMENT ADMIN
# =============================================================================


@admin.register(StockMovement)
class StockMovementAdmin(BaseModelAdmin):
    """Admin for StockMovement (read-only audit trail)."""

    list_display = ['id', 'created_at_display', 'type_display', 'product', 'warehouse',
                    'quantity_display', 'reference', 'user']
    list_filter = ['type', 'warehouse', 'created_at']
    search_fields = ['product__sku', 'product__name', 'reference', 'notes']
    readonly_fields = ['product', 'warehouse', 'type', 'quantity', 'unit_cost',
                       'reference', 'notes', 'created_at', 'user']
    date_hierarchy = 'created_at'

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False

    @display(description=_('Date/Time'))
    def created_at_display(self, obj):
        return _format_datetime(obj.created_at)

    @display(description=_('Type'), label=MOVEMENT_TYPE_COLORS)
    def type_display(self, obj):
        return obj.type

    @display(description=_('Quantity'))
    def quantity_display(self, obj):
        formatted = format_quantity(obj.quantity)
        return f'+{formatted}' if obj.quantity > 0 else formatted
