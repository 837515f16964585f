"""
Tests for the Unfold admin registration.
"""

from decimal import Decimal
from unittest import mock

import pytest
from django.contrib import admin
from django.test import RequestFactory

from stockledger import ledger
from stockledger.contrib.admin_unfold.base import BaseModelAdmin, format_quantity
from stockledger.models import Product, StockMovement, StockPosition, Warehouse


pytestmark = pytest.mark.django_db


@pytest.fixture
def request_(user):
    request = RequestFactory().get('/admin/')
    request.user = user
    return request


class TestFormatQuantity:

    @pytest.mark.parametrize('value, expected', [
        (Decimal('10.5'), '10.500'),
        (Decimal('-2'), '-2.000'),
        (None, '-'),
    ])
    def test_format(self, value, expected):
        assert format_quantity(value) == expected

    def test_decimal_places(self):
        assert format_quantity(Decimal('1.23456'), decimal_places=2) == '1.23'


class TestRegistration:

    @pytest.mark.parametrize('model', [Product, Warehouse, StockPosition, StockMovement])
    def test_models_use_unfold_admin(self, model):
        assert isinstance(admin.site._registry[model], BaseModelAdmin)

    @pytest.mark.parametrize('model', [StockPosition, StockMovement])
    def test_ledger_admins_are_read_only(self, model, request_):
        model_admin = admin.site._registry[model]

        assert not model_admin.has_add_permission(request_)
        assert not model_admin.has_change_permission(request_)
        assert not model_admin.has_delete_permission(request_)


class TestStockPositionAdmin:

    def test_recalculate_action(self, product, main, request_):
        ledger.adjust(product.pk, main.pk, Decimal('5'))
        StockPosition.objects.update(quantity=Decimal('1'))
        model_admin = admin.site._registry[StockPosition]

        with mock.patch.object(model_admin, 'message_user') as message_user:
            model_admin.recalculate_positions(request_, StockPosition.objects.all())

        assert ledger.on_hand(product, main) == Decimal('5')
        assert '1 position(s) corrected.' in str(message_user.call_args.args[1])


class TestStockMovementAdmin:

    def test_quantity_display_is_signed(self, product, main):
        model_admin = admin.site._registry[StockMovement]
        incoming = ledger.adjust(product.pk, main.pk, Decimal('3'))
        outgoing = ledger.adjust(product.pk, main.pk, Decimal('-1'))

        assert model_admin.quantity_display(incoming) == '+3.000'
        assert model_admin.quantity_display(outgoing) == '-1.000'

    def test_type_display(self, product, main):
        model_admin = admin.site._registry[StockMovement]
        movement = ledger.adjust(product.pk, main.pk, Decimal('3'))

        assert model_admin.type_display(movement) == 'ADJUSTMENT'
