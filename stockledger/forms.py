"""
Forms — validate operator input before anything is written.

    form = StockAdjustmentForm(request.POST)
    if form.is_valid():
        movement = form.save(user=request.user)
"""

from django import forms
from django.utils.translation import gettext_lazy as _

from stockledger.models import Category, Product, Unit, Warehouse


class OptionalModelChoiceField(forms.ModelChoiceField):
    """ModelChoiceField where "0" means no selection, as select widgets post it."""

    def to_python(self, value):
        if value in ('0', 0):
            return None
        return super().to_python(value)


class ProductForm(forms.ModelForm):
    """
    Product create/edit form.

    - sku and name are required and trimmed
    - description and barcode are trimmed, blank becomes None
    - category and unit are optional ("0" or blank = none)
    - costs, price and min_stock must be non-negative
    - is_active defaults to True when the field is not posted at all
    """

    category = OptionalModelChoiceField(
        queryset=Category.objects.all(),
        required=False,
        label=_('Category'),
    )
    unit = OptionalModelChoiceField(
        queryset=Unit.objects.all(),
        required=False,
        label=_('Unit'),
    )

    class Meta:
        model = Product
        fields = [
            'sku', 'name', 'description', 'barcode', 'category', 'unit',
            'default_cost', 'default_price', 'min_stock', 'is_active',
        ]
        error_messages = {
            'sku': {'required': _('SKU is required')},
            'name': {'required': _('Name is required')},
        }

    def clean_description(self):
        return (self.cleaned_data.get('description') or '').strip() or None

    def clean_barcode(self):
        return (self.cleaned_data.get('barcode') or '').strip() or None

    def clean_is_active(self):
        if 'is_active' not in self.data:
            return True
        return self.cleaned_data['is_active']


class WarehouseForm(forms.ModelForm):
    """Warehouse form. Name is required; a blank code is stored as NULL."""

    class Meta:
        model = Warehouse
        fields = ['name', 'code', 'is_active']

    def clean_code(self):
        return (self.cleaned_data.get('code') or '').strip() or None

    def clean_is_active(self):
        if 'is_active' not in self.data:
            return True
        return self.cleaned_data['is_active']


class StockAdjustmentForm(forms.Form):
    """Manual stock adjustment: a signed quantity for a product at a warehouse."""

    product = forms.ModelChoiceField(
        queryset=Product.objects.all(),
        label=_('Product'),
    )
    warehouse = forms.ModelChoiceField(
        queryset=Warehouse.objects.filter(is_active=True),
        label=_('Warehouse'),
    )
    quantity = forms.DecimalField(
        max_digits=12,
        decimal_places=3,
        label=_('Quantity'),
        help_text=_('Positive adds stock, negative removes it'),
    )
    reason = forms.CharField(
        max_length=500,
        required=False,
        label=_('Reason'),
    )

    def clean_quantity(self):
        quantity = self.cleaned_data['quantity']
        if not quantity:
            raise forms.ValidationError(_('Quantity must be non-zero'), code='zero_quantity')
        return quantity

    def save(self, user=None):
        """
        Apply the adjustment through the ledger.

        Raises:
            StockError: Propagated from ledger.adjust()
        """
        from stockledger.service import StockLedger

        data = self.cleaned_data
        return StockLedger.adjust(
            data['product'].pk,
            data['warehouse'].pk,
            data['quantity'],
            reason=data.get('reason'),
            user=user,
        )
