"""
Warehouse model — Where stock is held.
"""

from django.db import models
from django.utils.translation import gettext_lazy as _


class Warehouse(models.Model):
    """
    Location where stock is held.

    Examples:
        Warehouse.objects.create(code='MAIN', name='Main Warehouse')
    """

    name = models.CharField(max_length=100, verbose_name=_('Name'))
    code = models.CharField(
        max_length=50,
        unique=True,
        null=True,
        blank=True,
        verbose_name=_('Code'),
        help_text=_('Optional short identifier (e.g. MAIN)'),
    )
    is_active = models.BooleanField(default=True, verbose_name=_('Active'))

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _('Warehouse')
        verbose_name_plural = _('Warehouses')
        ordering = ['name']

    def __str__(self) -> str:
        return self.name
