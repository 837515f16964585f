"""
Tests for input validation forms.
"""

from decimal import Decimal

import pytest

from stockledger import ledger
from stockledger.forms import ProductForm, StockAdjustmentForm, WarehouseForm
from stockledger.models import MovementType, Warehouse


pytestmark = pytest.mark.django_db


class TestProductForm:

    def test_valid_product_is_trimmed(self, category, each):
        form = ProductForm(data={
            'sku': '  PF-001 ',
            'name': ' Parfum ',
            'description': '   ',
            'barcode': ' 7891234 ',
            'category': str(category.pk),
            'unit': str(each.pk),
            'default_cost': '10.00',
            'min_stock': '5',
        })

        assert form.is_valid(), form.errors
        product = form.save()
        assert product.sku == 'PF-001'
        assert product.name == 'Parfum'
        assert product.description is None
        assert product.barcode == '7891234'
        assert product.category == category
        assert product.is_active is True

    def test_sku_and_name_required(self):
        form = ProductForm(data={'sku': '  ', 'name': ''})

        assert not form.is_valid()
        assert form.errors['sku'] == ['SKU is required']
        assert form.errors['name'] == ['Name is required']

    def test_zero_select_means_no_category(self):
        form = ProductForm(data={'sku': 'PF-002', 'name': 'Body Mist', 'category': '0', 'unit': '0'})

        assert form.is_valid(), form.errors
        product = form.save()
        assert product.category is None
        assert product.unit is None

    @pytest.mark.parametrize('field', ['default_cost', 'default_price', 'min_stock'])
    def test_negative_amounts_rejected(self, field):
        form = ProductForm(data={'sku': 'PF-003', 'name': 'Soap', field: '-1'})

        assert not form.is_valid()
        assert field in form.errors

    def test_unchecked_is_active(self):
        form = ProductForm(data={'sku': 'PF-004', 'name': 'Candle', 'is_active': 'false'})

        assert form.is_valid(), form.errors
        assert form.save().is_active is False

    def test_duplicate_sku(self, product):
        form = ProductForm(data={'sku': product.sku, 'name': 'Copy'})

        assert not form.is_valid()
        assert 'sku' in form.errors


class TestWarehouseForm:

    def test_blank_code_stored_as_null(self):
        for name in ('Overflow', 'Back Room'):
            form = WarehouseForm(data={'name': name, 'code': '  '})
            assert form.is_valid(), form.errors
            form.save()

        assert Warehouse.objects.filter(code__isnull=True).count() == 2

    def test_name_required(self):
        form = WarehouseForm(data={'name': '', 'code': 'X'})

        assert not form.is_valid()
        assert 'name' in form.errors


class TestStockAdjustmentForm:

    def test_save_adjusts_stock(self, product, main, user):
        form = StockAdjustmentForm(data={
            'product': str(product.pk),
            'warehouse': str(main.pk),
            'quantity': '-1.5',
            'reason': 'Damaged in transit',
        })

        assert form.is_valid(), form.errors
        movement = form.save(user=user)

        assert movement.type == MovementType.ADJUSTMENT
        assert movement.quantity == Decimal('-1.5')
        assert movement.notes == 'Damaged in transit'
        assert movement.user == user
        assert ledger.on_hand(product, main) == Decimal('-1.5')

    def test_zero_quantity_rejected(self, product, main):
        form = StockAdjustmentForm(data={
            'product': str(product.pk),
            'warehouse': str(main.pk),
            'quantity': '0',
        })

        assert not form.is_valid()
        assert form.errors['quantity'] == ['Quantity must be non-zero']

    @pytest.mark.parametrize('quantity', ['', 'abc', '1.0001'])
    def test_non_numeric_quantity_rejected(self, product, main, quantity):
        form = StockAdjustmentForm(data={
            'product': str(product.pk),
            'warehouse': str(main.pk),
            'quantity': quantity,
        })

        assert not form.is_valid()
        assert 'quantity' in form.errors

    def test_unknown_product_rejected(self, main):
        form = StockAdjustmentForm(data={'product': '999999', 'warehouse': str(main.pk), 'quantity': '1'})

        assert not form.is_valid()
        assert 'product' in form.errors

    def test_inactive_warehouse_rejected(self, product):
        closed = Warehouse.objects.create(name='Closed', is_active=False)
        form = StockAdjustmentForm(data={'product': str(product.pk), 'warehouse': str(closed.pk), 'quantity': '1'})

        assert not form.is_valid()
        assert 'warehouse' in form.errors
