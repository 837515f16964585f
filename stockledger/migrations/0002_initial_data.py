"""
Seed the default units and the main warehouse.
"""

from django.db import migrations

UNITS = [
    {'symbol': 'ea', 'name': 'Each', 'precision': 0},
    {'symbol': 'ml', 'name': 'Milliliter', 'precision': 2},
]


def create_initial_data(apps, schema_editor):
    """Create units and the MAIN warehouse, updating them if present."""
    Unit = apps.get_model('stockledger', 'Unit')
    Warehouse = apps.get_model('stockledger', 'Warehouse')

    for unit_data in UNITS:
        Unit.objects.update_or_create(
            symbol=unit_data['symbol'],
            defaults=unit_data,
        )

    Warehouse.objects.update_or_create(
        code='MAIN',
        defaults={'name': 'Main Warehouse', 'is_active': True},
    )


def remove_initial_data(apps, schema_editor):
    """Remove seeded rows (for reverse migration). A warehouse with movements is kept."""
    Unit = apps.get_model('stockledger', 'Unit')
    Warehouse = apps.get_model('stockledger', 'Warehouse')
    Unit.objects.filter(symbol__in=[u['symbol'] for u in UNITS]).delete()
    Warehouse.objects.filter(code='MAIN', stock_movements__isnull=True).delete()


class Migration(migrations.Migration):

    dependencies = [
        ('stockledger', '0001_initial'),
    ]

    operations = [
        migrations.RunPython(create_initial_data, remove_initial_data),
    ]
