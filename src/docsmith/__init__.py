"""docsmith - fill {{token}} placeholders in Word documents without losing formatting."""

from .document import TemplateDocument
from .errors import (
    DocsmithError,
    MissingTemplateRowError,
    StyleNotFoundError,
    UnsupportedValueKindError,
)
from .values import FragmentValue, ImageValue, TextValue, Value, ValueKind

__version__ = "0.1.0"

__all__ = [
    "TemplateDocument",
    "DocsmithError",
    "MissingTemplateRowError",
    "StyleNotFoundError",
    "UnsupportedValueKindError",
    "FragmentValue",
    "ImageValue",
    "TextValue",
    "Value",
    "ValueKind",
]
