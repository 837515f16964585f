"""
Management command to verify stock positions against the movement ledger.

Usage:
    python manage.py verify_stock_ledger
    python manage.py verify_stock_ledger --fix
"""

from decimal import Decimal

from django.core.management.base import BaseCommand
from django.db.models import DecimalField, OuterRef, Subquery, Sum
from django.db.models.functions import Coalesce

from stockledger.models import StockMovement, StockPosition


class Command(BaseCommand):
    """Verify (and optionally repair) cached on-hand quantities."""

    help = 'Compares each stock position with the sum of its movements'

    def add_arguments(self, parser):
        parser.add_argument(
            '--fix',
            action='store_true',
            help='Rewrite mismatched positions from their movements'
        )

    def handle(self, *args, **options):
        ledger_total = StockMovement.objects.filter(
            product_id=OuterRef('product_id'),
            warehouse_id=OuterRef('warehouse_id'),
        ).order_by().values('product_id', 'warehouse_id').annotate(
            t=Sum('quantity')
        ).values('t')

        positions = StockPosition.objects.annotate(
            ledger_quantity=Coalesce(
                Subquery(ledger_total),
                Decimal('0'),
                output_field=DecimalField(max_digits=14, decimal_places=3),
            ),
        ).select_related('product', 'warehouse').order_by('pk')

        mismatched = [p for p in positions if p.quantity != p.ledger_quantity]

        for position in mismatched:
            self.stdout.write(
                f'{position.product} @ {position.warehouse}: '
                f'position={position.quantity} ledger={position.ledger_quantity}'
            )
            if options['fix']:
                position.recalculate()

        if not mismatched:
            self.stdout.write(self.style.SUCCESS('All stock positions match the ledger'))
        elif options['fix']:
            self.stdout.write(
                self.style.SUCCESS(f'{len(mismatched)} position(s) recalculated')
            )
        else:
            self.stdout.write(
                self.style.WARNING(f'{len(mismatched)} position(s) out of balance')
            )
