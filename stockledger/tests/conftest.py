"""
Pytest fixtures for Stockledger tests.
"""

from decimal import Decimal

import pytest
from django.contrib.auth import get_user_model

from stockledger.models import Category, Product, Unit, Warehouse


User = get_user_model()


@pytest.fixture
def user(db):
    """Create a test user."""
    return User.objects.create_user(
        username='testuser',
        password='testpass123'
    )


@pytest.fixture
def each(db):
    """The 'Each' unit (seeded by migration)."""
    unit, _ = Unit.objects.get_or_create(
        symbol='ea',
        defaults={'name': 'Each', 'precision': 0}
    )
    return unit


@pytest.fixture
def category(db):
    """Create a test category."""
    return Category.objects.create(
        name='Fragrances',
        description='Fragrance and perfume catalog'
    )


@pytest.fixture
def product(db, category, each):
    """Create a test product."""
    return Product.objects.create(
        sku='EDP-050',
        name='Eau de Parfum 50ml',
        category=category,
        unit=each,
        default_cost=Decimal('12.50'),
        default_price=Decimal('39.90'),
        min_stock=Decimal('10'),
    )


@pytest.fixture
def other_product(db, category, each):
    """Create a second product."""
    return Product.objects.create(
        sku='EDT-100',
        name='Eau de Toilette 100ml',
        category=category,
        unit=each,
    )


@pytest.fixture
def main(db):
    """Get or create the main warehouse."""
    warehouse, _ = Warehouse.objects.get_or_create(
        code='MAIN',
        defaults={'name': 'Main Warehouse'}
    )
    return warehouse


@pytest.fixture
def store(db):
    """Create a second warehouse."""
    return Warehouse.objects.create(code='STORE', name='Store Front')
