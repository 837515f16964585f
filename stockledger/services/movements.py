"""
Stock movements — state-changing operations (adjust, record, transfer).

All methods run under transaction.atomic() with the position row locked
(select_for_update) and apply quantities as database-side increments,
so concurrent movements on the same position never lose an update.
"""

import logging
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from django.db import DatabaseError, IntegrityError, transaction

from stockledger.conf import stockledger_settings
from stockledger.exceptions import InvalidArgument, NotFound, StockError, StorageError
from stockledger.models.catalog import Product
from stockledger.models.enums import INBOUND_TYPES, MovementType
from stockledger.models.movement import StockMovement
from stockledger.models.position import StockPosition
from stockledger.models.warehouse import Warehouse

logger = logging.getLogger('stockledger')

QUANTITY_STEP = Decimal('0.001')
COST_STEP = Decimal('0.0001')
# DecimalField(max_digits=12, decimal_places=3)
QUANTITY_LIMIT = Decimal('1e9')
# DecimalField(max_digits=12, decimal_places=4)
COST_LIMIT = Decimal('1e8')


def _coerce_id(value, field: str) -> int:
    """Accept a model instance, an int or a numeric string; return a positive pk."""
    value = getattr(value, 'pk', value)
    if value is None or isinstance(value, bool) or str(value).strip() == '':
        raise InvalidArgument(message=f"{field} is required", field=field)
    try:
        number = Decimal(str(value).strip())
    except InvalidOperation:
        raise InvalidArgument(
            message=f"{field} must be an integer", field=field, value=value
        ) from None
    if not number.is_finite() or number != number.to_integral_value() or number <= 0:
        raise InvalidArgument(message=f"{field} must be a positive integer", field=field, value=value)
    return int(number)


def _coerce_quantity(value, field: str = 'quantity') -> Decimal:
    """Parse a non-zero decimal with at most three decimal places."""
    if value is None or isinstance(value, bool) or str(value).strip() == '':
        raise InvalidArgument('INVALID_QUANTITY', f"{field} is required", field=field)
    try:
        quantity = value if isinstance(value, Decimal) else Decimal(str(value).strip())
    except InvalidOperation:
        raise InvalidArgument(
            'INVALID_QUANTITY', f"{field} must be numeric", field=field, value=value
        ) from None
    if not quantity.is_finite() or abs(quantity) >= QUANTITY_LIMIT:
        raise InvalidArgument('INVALID_QUANTITY', field=field, value=value)
    if quantity != quantity.quantize(QUANTITY_STEP):
        raise InvalidArgument(
            'INVALID_QUANTITY', f"{field} allows at most 3 decimal places", field=field, value=value
        )
    if quantity == 0:
        raise InvalidArgument('INVALID_QUANTITY', f"{field} must be non-zero", field=field, requested=quantity)
    return quantity


def _coerce_cost(value) -> Decimal | None:
    if value is None or value == '':
        return None
    try:
        cost = value if isinstance(value, Decimal) else Decimal(str(value).strip())
    except InvalidOperation:
        raise InvalidArgument(message="unit_cost must be numeric", field='unit_cost', value=value) from None
    if not cost.is_finite() or cost < 0:
        raise InvalidArgument(message="unit_cost must be non-negative", field='unit_cost', value=value)
    cost = cost.quantize(COST_STEP, rounding=ROUND_HALF_UP)
    if cost >= COST_LIMIT:
        raise InvalidArgument(message="unit_cost is out of range", field='unit_cost', value=value)
    return cost


def _weighted_average(on_hand: Decimal, current: Decimal | None,
                      received: Decimal, unit_cost: Decimal) -> Decimal:
    """Average cost after receiving `received` units at `unit_cost`."""
    base = max(on_hand, Decimal('0'))
    if current is None or base == 0:
        return unit_cost.quantize(COST_STEP, rounding=ROUND_HALF_UP)
    total = base * current + received * unit_cost
    return (total / (base + received)).quantize(COST_STEP, rounding=ROUND_HALF_UP)


class StockMovements:
    """State-changing stock movement methods."""

    @classmethod
    def adjust(cls, product_id, warehouse_id, delta, reason=None, user=None) -> StockMovement:
        """
        Manual stock adjustment.

        Applies a signed delta to the (product, warehouse) position and
        records one ADJUSTMENT movement, both in one transaction.

        Args:
            product_id: Product pk (or instance)
            warehouse_id: Warehouse pk (or instance)
            delta: Non-zero signed quantity
            reason: Optional free text, stored as movement notes
            user: Operator, optional

        Returns:
            The created StockMovement

        Raises:
            InvalidArgument: Missing/non-numeric ids or zero/non-numeric delta
            NotFound: Unknown product or warehouse
            StockError('INSUFFICIENT_QUANTITY'): Negative stock disallowed by settings
            StorageError: The transaction could not be committed

        Concurrency:
            - Runs under transaction.atomic()
            - Position row locked with select_for_update()
            - StockMovement.save() applies the delta with an F() increment
        """
        product_pk = _coerce_id(product_id, 'product_id')
        warehouse_pk = _coerce_id(warehouse_id, 'warehouse_id')
        quantity = _coerce_quantity(delta, 'delta')
        if reason is not None and not isinstance(reason, str):
            raise InvalidArgument(message="reason must be text", field='reason', value=reason)
        notes = (reason or '').strip() or None

        movement = cls._post(
            product_pk, warehouse_pk, MovementType.ADJUSTMENT, quantity,
            reference=stockledger_settings.ADJUSTMENT_REFERENCE,
            notes=notes,
            user=user,
        )
        logger.info(
            "stock.adjust",
            extra={
                "product_id": product_pk,
                "warehouse_id": warehouse_pk,
                "delta": str(quantity),
                "reason": notes,
                "movement_id": movement.pk,
            },
        )
        return movement

    @classmethod
    def record(cls, product_id, warehouse_id, movement_type, quantity,
               reference='', notes=None, unit_cost=None, user=None) -> StockMovement:
        """
        Record a typed movement (purchase, sale, opening, return, ...).

        Inbound types add a positive quantity, outbound types subtract it.
        ADJUSTMENT takes a signed delta, as in adjust().

        Inbound movements with a unit_cost update the position's
        weighted average cost.
        """
        try:
            movement_type = MovementType(movement_type)
        except ValueError:
            raise InvalidArgument('INVALID_MOVEMENT_TYPE', movement_type=movement_type) from None

        product_pk = _coerce_id(product_id, 'product_id')
        warehouse_pk = _coerce_id(warehouse_id, 'warehouse_id')
        quantity = _coerce_quantity(quantity)
        cost = _coerce_cost(unit_cost)

        if movement_type == MovementType.ADJUSTMENT:
            delta = quantity
        else:
            if quantity < 0:
                raise InvalidArgument(
                    'INVALID_QUANTITY',
                    f"quantity must be positive for {movement_type.value}",
                    requested=quantity,
                )
            delta = quantity if movement_type in INBOUND_TYPES else -quantity

        movement = cls._post(
            product_pk, warehouse_pk, movement_type, delta,
            reference=reference, notes=notes, unit_cost=cost, user=user,
        )
        logger.info(
            "stock.record",
            extra={
                "product_id": product_pk,
                "warehouse_id": warehouse_pk,
                "type": movement_type.value,
                "delta": str(delta),
                "reference": reference,
                "movement_id": movement.pk,
            },
        )
        return movement

    @classmethod
    def transfer(cls, product_id, from_warehouse_id, to_warehouse_id, quantity,
                 reference='TRANSFER', notes=None, user=None) -> tuple[StockMovement, StockMovement]:
        """
        Move stock between warehouses.

        Records TRANSFER_OUT at the source and TRANSFER_IN at the
        destination in one transaction. The source's average cost
        travels with the goods.

        Returns:
            (out_movement, in_movement)
        """
        product_pk = _coerce_id(product_id, 'product_id')
        source_pk = _coerce_id(from_warehouse_id, 'from_warehouse_id')
        target_pk = _coerce_id(to_warehouse_id, 'to_warehouse_id')
        quantity = _coerce_quantity(quantity)

        if quantity < 0:
            raise InvalidArgument('INVALID_QUANTITY', "quantity must be positive", requested=quantity)
        if source_pk == target_pk:
            raise InvalidArgument('SAME_WAREHOUSE', warehouse_id=source_pk)

        try:
            with transaction.atomic():
                product = cls._get_product(product_pk)
                source = cls._get_warehouse(source_pk)
                target = cls._get_warehouse(target_pk)

                # Lock in pk order so opposite transfers cannot deadlock
                positions = {}
                for warehouse in sorted((source, target), key=lambda w: w.pk):
                    positions[warehouse.pk] = cls._locate_position(product, warehouse)

                out_move = cls._apply(
                    positions[source.pk], MovementType.TRANSFER_OUT, -quantity,
                    reference=reference, notes=notes, user=user,
                )
                in_move = cls._apply(
                    positions[target.pk], MovementType.TRANSFER_IN, quantity,
                    reference=reference, notes=notes, user=user,
                    unit_cost=positions[source.pk].cost_average,
                )
        except DatabaseError as exc:
            raise StorageError(product_id=product_pk, error=str(exc)) from exc

        logger.info(
            "stock.transfer",
            extra={
                "product_id": product_pk,
                "from_warehouse_id": source_pk,
                "to_warehouse_id": target_pk,
                "qty": str(quantity),
                "reference": reference,
            },
        )
        return out_move, in_move

    # ══════════════════════════════════════════════════════════════
    # INTERNALS
    # ══════════════════════════════════════════════════════════════

    @classmethod
    def _post(cls, product_pk: int, warehouse_pk: int, movement_type, delta: Decimal,
              reference='', notes=None, unit_cost=None, user=None) -> StockMovement:
        """Single-position movement: load, lock-or-create, apply."""
        try:
            with transaction.atomic():
                product = cls._get_product(product_pk)
                warehouse = cls._get_warehouse(warehouse_pk)
                position = cls._locate_position(product, warehouse)
                return cls._apply(
                    position, movement_type, delta,
                    reference=reference, notes=notes, unit_cost=unit_cost, user=user,
                )
        except DatabaseError as exc:
            raise StorageError(
                product_id=product_pk,
                warehouse_id=warehouse_pk,
                error=str(exc),
            ) from exc

    @classmethod
    def _get_product(cls, pk: int) -> Product:
        product = Product.objects.filter(pk=pk).first()
        if product is None:
            raise NotFound('PRODUCT_NOT_FOUND', product_id=pk)
        return product

    @classmethod
    def _get_warehouse(cls, pk: int) -> Warehouse:
        warehouse = Warehouse.objects.filter(pk=pk).first()
        if warehouse is None:
            raise NotFound('WAREHOUSE_NOT_FOUND', warehouse_id=pk)
        return warehouse

    @classmethod
    def _locate_position(cls, product, warehouse) -> StockPosition:
        """
        Find the position under row lock, or create it with quantity 0.

        Must run inside transaction.atomic().
        """
        position = StockPosition.objects.select_for_update().filter(
            product=product,
            warehouse=warehouse,
        ).first()
        if position is not None:
            return position

        try:
            with transaction.atomic():
                return StockPosition.objects.create(product=product, warehouse=warehouse)
        except IntegrityError:
            # Created by a concurrent transaction after our read
            return StockPosition.objects.select_for_update().get(
                product=product,
                warehouse=warehouse,
            )

    @classmethod
    def _apply(cls, position: StockPosition, movement_type, delta: Decimal,
               reference='', notes=None, unit_cost=None, user=None) -> StockMovement:
        """Write one movement against a locked position."""
        if delta < 0 and not stockledger_settings.ALLOW_NEGATIVE_STOCK:
            if position.quantity + delta < 0:
                raise StockError(
                    'INSUFFICIENT_QUANTITY',
                    available=position.quantity,
                    requested=-delta,
                )

        if abs(position.quantity + delta) >= QUANTITY_LIMIT:
            raise InvalidArgument(
                'INVALID_QUANTITY',
                "resulting quantity is out of range",
                available=position.quantity,
                requested=delta,
            )

        average = None
        if unit_cost is not None and delta > 0:
            average = _weighted_average(position.quantity, position.cost_average, delta, unit_cost)
            if average >= COST_LIMIT:
                raise InvalidArgument(
                    message="average cost is out of range",
                    field='unit_cost',
                    value=unit_cost,
                )

        movement = StockMovement.objects.create(
            product_id=position.product_id,
            warehouse_id=position.warehouse_id,
            type=movement_type,
            quantity=delta,
            unit_cost=unit_cost,
            reference=reference or '',
            notes=notes,
            user=user,
        )

        if average is not None:
            StockPosition.objects.filter(pk=position.pk).update(cost_average=average)

        return movement
