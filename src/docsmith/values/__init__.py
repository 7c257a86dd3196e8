"""Binding values and their rendering into document content."""

from .html import strip_tables, wrap_fragment
from .loader import coerce_bindings, coerce_value, load_bindings
from .models import FragmentValue, ImageValue, TextValue, Value, ValueKind
from .renderer import RenderedContent, ValueRenderer

__all__ = [
    "FragmentValue",
    "ImageValue",
    "TextValue",
    "Value",
    "ValueKind",
    "RenderedContent",
    "ValueRenderer",
    "coerce_bindings",
    "coerce_value",
    "load_bindings",
    "strip_tables",
    "wrap_fragment",
]
