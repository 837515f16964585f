"""
Enums for Stockledger models.
"""

from django.db import models
from django.utils.translation import gettext_lazy as _


class MovementType(models.TextChoices):
    """
    Cause of a stock movement.

    ADJUSTMENT is a manual, operator-initiated correction and carries a
    signed delta. Every other type has a fixed direction: callers pass a
    positive quantity and the ledger applies the sign.
    """
    ADJUSTMENT = 'ADJUSTMENT', _('Adjustment')
    PURCHASE = 'PURCHASE', _('Purchase')
    SALE = 'SALE', _('Sale')
    OPENING = 'OPENING', _('Opening')
    TRANSFER_IN = 'TRANSFER_IN', _('Transfer In')
    TRANSFER_OUT = 'TRANSFER_OUT', _('Transfer Out')
    RETURN_IN = 'RETURN_IN', _('Return In')
    RETURN_OUT = 'RETURN_OUT', _('Return Out')


INBOUND_TYPES = frozenset({
    MovementType.PURCHASE,
    MovementType.OPENING,
    MovementType.TRANSFER_IN,
    MovementType.RETURN_IN,
})
