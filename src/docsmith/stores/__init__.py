"""Media and alternate-content stores."""

from .base import ContentStores
from .memory import InMemoryStores
from .models import FragmentEntry, MediaEntry, Registrations
from .package import DocxPackageStores

__all__ = [
    "ContentStores",
    "InMemoryStores",
    "DocxPackageStores",
    "FragmentEntry",
    "MediaEntry",
    "Registrations",
]
