"""
Stockledger Admin — basic fallback (works without Unfold).

For the Unfold-styled version, add 'stockledger.contrib.admin_unfold' to INSTALLED_APPS.
When the Unfold contrib is loaded, this module does nothing (avoids double registration).

- Unit, Category, Product, Warehouse: list + edit
- StockPosition: read-only with "recalculate" action
- StockMovement: read-only audit trail
"""

from django.apps import apps
from django.contrib import admin
from django.utils.translation import gettext_lazy as _

# Skip registration if the Unfold contrib is installed (it will register its own admins)
if not apps.is_installed('stockledger.contrib.admin_unfold'):
    from stockledger.models import Category, Product, StockMovement, StockPosition, Unit, Warehouse

    # =========================================================================
    # CATALOG ADMIN
    # =========================================================================

    @admin.register(Unit)
    class UnitAdmin(admin.ModelAdmin):
        list_display = ['name', 'symbol', 'precision']
        search_fields = ['name', 'symbol']

    @admin.register(Category)
    class CategoryAdmin(admin.ModelAdmin):
        list_display = ['name', 'parent']
        search_fields = ['name']

    @admin.register(Product)
    class ProductAdmin(admin.ModelAdmin):
        """Product admin. Stock is not edited here."""

        list_display = ['sku', 'name', 'category', 'unit', 'min_stock', 'is_active']
        list_filter = ['is_active', 'category']
        search_fields = ['sku', 'name', 'barcode']
        readonly_fields = ['created_at', 'updated_at']

    @admin.register(Warehouse)
    class WarehouseAdmin(admin.ModelAdmin):
        list_display = ['name', 'code', 'is_active']
        list_filter = ['is_active']
        search_fields = ['name', 'code']
        readonly_fields = ['created_at', 'updated_at']

    # =========================================================================
    # STOCK POSITION ADMIN (read-only)
    # =========================================================================

    @admin.register(StockPosition)
    class StockPositionAdmin(admin.ModelAdmin):
        """StockPosition admin (read-only). Stock only changes via the ledger."""

        list_display = ['product', 'warehouse', 'quantity', 'cost_average', 'updated_at']
        list_filter = ['warehouse']
        search_fields = ['product__sku', 'product__name']
        readonly_fields = ['product', 'warehouse', 'quantity', 'cost_average',
                           'created_at', 'updated_at']
        actions = ['recalculate_positions']

        def has_add_permission(self, request):
            return False

        def has_change_permission(self, request, obj=None):
            return False

        def has_delete_permission(self, request, obj=None):
            return False

        @admin.action(description=_('Recalculate from movements'))
        def recalculate_positions(self, request, queryset):
            count = 0
            for position in queryset:
                old = position.quantity
                if position.recalculate() != old:
                    count += 1
            self.message_user(request, _('{count} position(s) corrected.').format(count=count))

    # =========================================================================
    # STOCK MOVEMENT ADMIN (read-only audit trail)
    # =========================================================================

    @admin.register(StockMovement)
    class StockMovementAdmin(admin.ModelAdmin):
        """StockMovement admin (read-only). Immutable audit trail."""

        list_display = ['id', 'created_at', 'type', 'product', 'warehouse',
                        'quantity', 'reference', 'user']
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
