"""Stores backed by a python-docx package."""

import logging
from typing import BinaryIO

from docx.opc.constants import RELATIONSHIP_TYPE as RT
from docx.opc.part import Part

from .base import ContentStores
from .models import FragmentEntry, MediaEntry

logger = logging.getLogger(__name__)

HTML_CONTENT_TYPE = "text/html"
FRAGMENT_PARTNAME_TEMPLATE = "/word/afchunk%d.html"


class DocxPackageStores(ContentStores):
    """
    Register images and HTML fragments as parts of an open document.

    Relationships are created on the story part that holds the XML being
    edited: the main document part by default, or a header or footer part
    for stores obtained through ``for_part``.
    """

    def __init__(self, document, part=None):
        super().__init__()
        self.document = document
        self.part = part

    @property
    def story_part(self):
        return self.part if self.part is not None else self.document.part

    def for_part(self, part) -> "DocxPackageStores":
        if part is self.story_part:
            return self
        stores = DocxPackageStores(self.document, part)
        stores.registrations = self.registrations
        return stores

    def next_shape_id(self) -> int:
        return self.story_part.next_id

    def _store_image(self, stream: BinaryIO, filename: str) -> MediaEntry:
        rel_id, image = self.story_part.get_or_add_image(stream)
        logger.debug(f"Registered image {image.filename} as {rel_id} on {self.story_part.partname}")
        return MediaEntry(rel_id=rel_id, filename=image.filename or filename, size=len(image.blob))

    def _store_fragment(self, blob: bytes) -> FragmentEntry:
        package = self.story_part.package
        partname = package.next_partname(FRAGMENT_PARTNAME_TEMPLATE)
        part = Part(partname, HTML_CONTENT_TYPE, blob, package)
        rel_id = self.story_part.relate_to(part, RT.A_F_CHUNK)
        logger.debug(f"Registered HTML fragment {partname} as {rel_id} on {self.story_part.partname}")
        return FragmentEntry(rel_id=rel_id, partname=str(partname), size=len(blob))
