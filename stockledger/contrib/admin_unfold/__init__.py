"""Stockledger Admin with Unfold theme."""

# Lazy imports to avoid importing unfold before the app registry is ready

__all__ = [
    "BaseModelAdmin",
    "format_quantity",
]


def __getattr__(name):
    """Lazy import to avoid circular imports during app loading."""
    if name in ("BaseModelAdmin", "format_quantity"):
        from stockledger.contrib.admin_unfold import base
        return getattr(base, name)
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
