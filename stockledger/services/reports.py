"""
Stock reports — read-only aggregation over positions and movements.

Usage:
    from stockledger.services.reports import low_stock, movement_history

    for row in low_stock():
        print(row.sku, row.on_hand, row.min_stock)

    movement_history(date_from=date(2024, 1, 1), movement_type='SALE')
"""

import logging
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from decimal import Decimal

from django.conf import settings
from django.db.models import DecimalField, Q, Sum
from django.db.models.functions import Coalesce
from django.utils import timezone
from django.utils.dateparse import parse_date

from stockledger.conf import stockledger_settings
from stockledger.exceptions import InvalidArgument
from stockledger.models.catalog import Product
from stockledger.models.enums import MovementType
from stockledger.models.movement import StockMovement
from stockledger.models.position import StockPosition

logger = logging.getLogger('stockledger')


@dataclass(frozen=True)
class LowStockRow:
    """A product below its minimum stock level."""

    id: int
    sku: str
    name: str
    unit: str
    on_hand: Decimal
    min_stock: Decimal


def _on_hand_expression():
    return Coalesce(
        Sum('stock_positions__quantity'),
        Decimal('0'),
        output_field=DecimalField(max_digits=14, decimal_places=3),
    )


def _unit_label(product: Product) -> str:
    if product.unit is None:
        return ''
    return product.unit.symbol or product.unit.name


def product_on_hand():
    """All products annotated with `on_hand` (sum over warehouses), by id."""
    return Product.objects.select_related('category', 'unit').annotate(
        on_hand=_on_hand_expression(),
    ).order_by('id')


def low_stock(limit: int | None = None) -> list[LowStockRow]:
    """
    Active products whose on-hand total is below min_stock.

    Products without a positive min_stock are never listed.

    Args:
        limit: Max rows (None = LOW_STOCK_LIMIT setting).

    Returns:
        LowStockRow list ordered by product name.
    """
    limit = limit or stockledger_settings.LOW_STOCK_LIMIT
    products = Product.objects.filter(
        is_active=True,
        min_stock__gt=0,
    ).select_related('unit').annotate(
        on_hand=_on_hand_expression(),
    ).order_by('name', 'id')

    rows = []
    for product in products:
        if product.on_hand >= product.min_stock:
            continue
        rows.append(LowStockRow(
            id=product.pk,
            sku=product.sku,
            name=product.name,
            unit=_unit_label(product),
            on_hand=product.on_hand,
            min_stock=product.min_stock,
        ))
        logger.warning(
            "stock.low_stock",
            extra={
                "product_id": product.pk,
                "min_stock": str(product.min_stock),
                "on_hand": str(product.on_hand),
            },
        )
        if len(rows) >= limit:
            break

    return rows


def _as_date(value, field: str) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        parsed = parse_date(str(value).strip())
    except ValueError:
        parsed = None
    if parsed is None:
        raise InvalidArgument(message=f"{field} must be a YYYY-MM-DD date", field=field, value=value)
    return parsed


def _day_start(day: date) -> datetime:
    start = datetime.combine(day, time.min)
    if settings.USE_TZ:
        return timezone.make_aware(start)
    return start


def movement_history(date_from=None, date_to=None, search: str | None = None,
                     warehouse=None, movement_type=None, limit: int | None = None):
    """
    Movements in a date range, newest first.

    The range is whole days: [date_from 00:00, date_to + 1 day 00:00),
    in the current timezone. Both bounds default to today.

    Args:
        date_from: First day (date or 'YYYY-MM-DD'), default today
        date_to: Last day, inclusive, default today
        search: Substring of product SKU or name
        warehouse: Warehouse (or pk) filter
        movement_type: MovementType filter
        limit: Max rows (None = MOVEMENT_REPORT_LIMIT setting)
    """
    today = timezone.localdate() if settings.USE_TZ else date.today()
    first = _as_date(date_from, 'date_from') if date_from else today
    last = _as_date(date_to, 'date_to') if date_to else today

    qs = StockMovement.objects.filter(
        created_at__gte=_day_start(first),
        created_at__lt=_day_start(last + timedelta(days=1)),
    )

    if movement_type:
        try:
            movement_type = MovementType(movement_type)
        except ValueError:
            raise InvalidArgument('INVALID_MOVEMENT_TYPE', movement_type=movement_type) from None
        qs = qs.of_type(movement_type)

    if warehouse:
        qs = qs.filter(warehouse=warehouse)

    needle = (search or '').strip()
    if needle:
        qs = qs.filter(Q(product__sku__icontains=needle) | Q(product__name__icontains=needle))

    limit = limit or stockledger_settings.MOVEMENT_REPORT_LIMIT
    return list(qs.select_related('product', 'warehouse').order_by('-id')[:limit])


def inventory_value() -> Decimal:
    """
    Stock valuation: sum of quantity × unit cost over all positions.

    Unit cost is the position's average cost, falling back to the
    product's default cost, then zero.
    """
    total = Decimal('0')
    for position in StockPosition.objects.select_related('product'):
        if position.cost_average is not None:
            cost = position.cost_average
        elif position.product.default_cost is not None:
            cost = position.product.default_cost
        else:
            continue
        total += position.quantity * cost
    return total
