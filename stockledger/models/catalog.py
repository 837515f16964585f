"""
Catalog models — what is stocked.
"""

from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models
from django.utils.translation import gettext_lazy as _


class Unit(models.Model):
    """Unit of measure (Each, Milliliter, ...)."""

    name = models.CharField(max_length=50, verbose_name=_('Name'))
    symbol = models.CharField(
        max_length=10,
        unique=True,
        verbose_name=_('Symbol'),
    )
    precision = models.PositiveSmallIntegerField(
        default=0,
        validators=[MaxValueValidator(6)],
        verbose_name=_('Decimal places'),
    )

    class Meta:
        verbose_name = _('Unit')
        verbose_name_plural = _('Units')
        ordering = ['name']

    def __str__(self) -> str:
        return self.symbol or self.name


class Category(models.Model):
    """Product category, optionally nested."""

    name = models.CharField(max_length=100, verbose_name=_('Name'))
    description = models.TextField(blank=True, default='', verbose_name=_('Description'))
    parent = models.ForeignKey(
        'self',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='children',
        verbose_name=_('Parent'),
    )

    class Meta:
        verbose_name = _('Category')
        verbose_name_plural = _('Categories')
        ordering = ['name']

    def __str__(self) -> str:
        return self.name


class Product(models.Model):
    """
    Stocked product.

    On-hand quantity is not stored here: it is the sum of the product's
    StockPosition rows, one per warehouse.
    """

    sku = models.CharField(max_length=64, unique=True, verbose_name=_('SKU'))
    name = models.CharField(max_length=200, verbose_name=_('Name'))
    description = models.TextField(null=True, blank=True, verbose_name=_('Description'))
    barcode = models.CharField(max_length=64, null=True, blank=True, verbose_name=_('Barcode'))
    category = models.ForeignKey(
        Category,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='products',
        verbose_name=_('Category'),
    )
    unit = models.ForeignKey(
        Unit,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='products',
        verbose_name=_('Unit'),
    )
    default_cost = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        null=True,
        blank=True,
        validators=[MinValueValidator(0)],
        verbose_name=_('Default cost'),
    )
    default_price = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        null=True,
        blank=True,
        validators=[MinValueValidator(0)],
        verbose_name=_('Default price'),
    )
    min_stock = models.DecimalField(
        max_digits=12,
        decimal_places=3,
        null=True,
        blank=True,
        validators=[MinValueValidator(0)],
        verbose_name=_('Minimum stock'),
        help_text=_('Low stock report lists the product below this level.'),
    )
    is_active = models.BooleanField(default=True, verbose_name=_('Active'))

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _('Product')
        verbose_name_plural = _('Products')
        ordering = ['name']

    def __str__(self) -> str:
        return f"{self.sku} · {self.name}"
