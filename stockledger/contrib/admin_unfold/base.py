"""
Base classes for Unfold admin in Stockledger.

Provides BaseModelAdmin and BaseTabularInline with compact textareas
(product description, movement notes) and quantity formatting.
"""

from decimal import Decimal

from django import forms
from django.contrib.admin.widgets import AdminTextareaWidget
from unfold.admin import ModelAdmin, TabularInline
from unfold.widgets import UnfoldAdminTextareaWidget

TEXTAREA_WIDGETS = (forms.Textarea, AdminTextareaWidget, UnfoldAdminTextareaWidget)


def format_quantity(value: Decimal | None, decimal_places: int = 3) -> str:
    """
    Format a quantity with a fixed number of decimals, trailing zeros kept.

    Args:
        value: Decimal value to format (None renders as "-")
        decimal_places: Number of decimal places (default: 3)

    Returns:
        Formatted string (e.g., "10.500", "-2.000")
    """
    if value is None:
        return "-"
    return f"{value:.{decimal_places}f}"


def _halve_rows(widget) -> None:
    if "rows" in widget.attrs:
        try:
            widget.attrs["rows"] = max(1, int(widget.attrs["rows"]) // 2)
        except (ValueError, TypeError):
            widget.attrs["rows"] = 2
    elif isinstance(widget, forms.Textarea):
        widget.attrs["rows"] = 2


class BaseTabularInline(TabularInline):
    """TabularInline base with half-height textareas."""

    def get_formset(self, request, obj=None, **kwargs):
        formset = super().get_formset(request, obj, **kwargs)
        for field in formset.form.base_fields.values():
            if isinstance(field.widget, TEXTAREA_WIDGETS):
                _halve_rows(field.widget)
        return formset


class BaseModelAdmin(ModelAdmin):
    """
    ModelAdmin base with sensible defaults.

    Textareas get half height and a max width of 42rem, aligned with
    the other form fields.
    """

    compressed_fields = True

    def get_form(self, request, obj=None, **kwargs):
        form = super().get_form(request, obj, **kwargs)

        for field in form.base_fields.values():
            widget = field.widget
            if not isinstance(widget, TEXTAREA_WIDGETS):
                continue

            style_parts = [
                s for s in widget.attrs.get("style", "").split(";")
                if s.strip() and "height" not in s.lower() and "width" not in s.lower()
            ]
            style_parts.append("height: 50%; max-height: 50%")
            style_parts.append("width: 100%; max-width: 42rem")
            widget.attrs["style"] = "; ".join(s.strip() for s in style_parts)

            _halve_rows(widget)

        return form
