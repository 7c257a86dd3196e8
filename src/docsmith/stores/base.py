"""Store interface used by the value renderer."""

from abc import ABC, abstractmethod
from typing import BinaryIO

from .models import FragmentEntry, MediaEntry, Registrations


class ContentStores(ABC):
    """
    Media and alternate-content stores for one document.

    Subclasses persist blobs; this base records what was registered so
    callers can inspect the side-channel output of a substitution run.
    """

    def __init__(self):
        self.registrations = Registrations()

    def add_image(self, stream: BinaryIO, filename: str) -> MediaEntry:
        entry = self._store_image(stream, filename)
        self.registrations.media.append(entry)
        return entry

    def add_fragment(self, blob: bytes) -> FragmentEntry:
        entry = self._store_fragment(blob)
        self.registrations.fragments.append(entry)
        return entry

    def for_part(self, part) -> "ContentStores":
        """Stores for content placed in ``part``; the same stores unless parts differ."""
        return self

    @abstractmethod
    def next_shape_id(self) -> int:
        """Return an unused drawing object id."""
        pass

    @abstractmethod
    def _store_image(self, stream: BinaryIO, filename: str) -> MediaEntry:
        """Persist an image and return its reference."""
        pass

    @abstractmethod
    def _store_fragment(self, blob: bytes) -> FragmentEntry:
        """Persist an HTML page and return its reference."""
        pass
