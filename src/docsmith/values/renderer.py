"""Turn binding values into WordprocessingML content nodes."""

import logging
from dataclasses import dataclass, field
from typing import Any, Optional

from docx.oxml import OxmlElement
from docx.oxml.ns import qn
from docx.oxml.shape import CT_Inline
from docx.shared import Emu

from ..config import Settings, settings as default_settings
from ..errors import UnsupportedValueKindError
from ..oxml import new_text_run
from ..stores import ContentStores
from ..tokens import TokenMatch, modifier_width
from .html import wrap_fragment
from .models import FragmentValue, ImageValue, TextValue, ValueKind

logger = logging.getLogger(__name__)


@dataclass
class RenderedContent:
    """Nodes produced for one token occurrence."""

    kind: ValueKind
    nodes: list[Any] = field(default_factory=list)

    @property
    def replaces_paragraph(self) -> bool:
        """Fragments take the place of the whole enclosing paragraph."""
        return self.kind == ValueKind.FRAGMENT


class ValueRenderer:
    """Render text, image and fragment values through the document's stores."""

    def __init__(self, stores: ContentStores, settings: Optional[Settings] = None):
        self.stores = stores
        self.settings = settings or default_settings

    def for_part(self, part) -> "ValueRenderer":
        """Renderer registering media and fragments on ``part``."""
        stores = self.stores.for_part(part)
        if stores is self.stores:
            return self
        return ValueRenderer(stores, self.settings)

    def render(self, value, match: Optional[TokenMatch] = None) -> RenderedContent:
        """
        Render a value for the token occurrence ``match``.

        Args:
            value: TextValue, ImageValue or FragmentValue
            match: The occurrence being replaced; its modifier sizes images

        Returns:
            RenderedContent with the nodes to insert

        Raises:
            UnsupportedValueKindError: If the value is not one of the known kinds
        """
        kind = getattr(value, "kind", None)

        if kind == ValueKind.TEXT:
            return self._render_text(value)

        elif kind == ValueKind.IMAGE:
            return self._render_image(value, match)

        elif kind == ValueKind.FRAGMENT:
            return self._render_fragment(value)

        else:
            raise UnsupportedValueKindError(str(kind) if kind else type(value).__name__)

    def _render_text(self, value: TextValue) -> RenderedContent:
        return RenderedContent(kind=ValueKind.TEXT, nodes=[new_text_run(value.text)])

    def _render_image(self, value: ImageValue, match: Optional[TokenMatch]) -> RenderedContent:
        width = modifier_width(match.modifier) if match else None
        width = width or value.target_width
        image = value.resized(width) if width else value

        with image.open() as stream:
            entry = self.stores.add_image(stream, image.filename)

        cx = Emu(image.width * self.settings.emu_per_pixel)
        cy = Emu(image.height * self.settings.emu_per_pixel)
        inline = CT_Inline.new_pic_inline(
            self.stores.next_shape_id(), entry.rel_id, entry.filename, cx, cy
        )

        drawing = OxmlElement("w:drawing")
        drawing.append(inline)
        run = OxmlElement("w:r")
        run.append(drawing)

        logger.debug(f"Rendered image {entry.filename} ({image.width}x{image.height}px)")
        return RenderedContent(kind=ValueKind.IMAGE, nodes=[run])

    def _render_fragment(self, value: FragmentValue) -> RenderedContent:
        page = wrap_fragment(value.markup, self.settings.fragment_charset)
        entry = self.stores.add_fragment(page.encode(self.settings.fragment_charset))

        chunk = OxmlElement("w:altChunk")
        chunk.set(qn("r:id"), entry.rel_id)

        logger.debug(f"Rendered HTML fragment as altChunk {entry.rel_id}")
        return RenderedContent(kind=ValueKind.FRAGMENT, nodes=[chunk])
