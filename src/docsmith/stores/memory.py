"""In-memory stores for element trees that are not attached to a package."""

import uuid
from typing import BinaryIO, Optional

from ..config import Settings, settings as default_settings
from .base import ContentStores
from .models import FragmentEntry, MediaEntry


class InMemoryStores(ContentStores):
    """Keep registered blobs in dictionaries keyed by their reference id."""

    def __init__(self, settings: Optional[Settings] = None):
        super().__init__()
        self.settings = settings or default_settings
        self.media: dict[str, bytes] = {}
        self.fragments: dict[str, bytes] = {}
        self._shape_id = 0

    def next_shape_id(self) -> int:
        self._shape_id += 1
        return self._shape_id

    def _store_image(self, stream: BinaryIO, filename: str) -> MediaEntry:
        blob = stream.read()
        rel_id = f"rIdImg{len(self.media) + 1}"
        self.media[rel_id] = blob
        return MediaEntry(rel_id=rel_id, filename=filename, size=len(blob))

    def _store_fragment(self, blob: bytes) -> FragmentEntry:
        rel_id = f"{self.settings.fragment_id_prefix}{uuid.uuid4().hex}"
        self.fragments[rel_id] = blob
        return FragmentEntry(rel_id=rel_id, partname=f"/word/{rel_id}.html", size=len(blob))
