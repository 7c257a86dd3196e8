"""Template document: token substitution and table filling on a .docx file."""

import logging
from pathlib import Path
from typing import Any, Iterable, Mapping, Optional, Sequence, Union

import docx
from docx.enum.style import WD_STYLE_TYPE
from docx.shared import Pt

from .config import Settings, settings as default_settings
from .engine import (
    StyleCache,
    SubstitutionResult,
    TableReplicator,
    TokenSubstituter,
    find_table,
    header_footer_parts,
)
from .oxml import W_P
from .stores import DocxPackageStores, Registrations
from .tokens import TokenScanner
from .values import FragmentValue, ValueRenderer

logger = logging.getLogger(__name__)


class TemplateDocument:
    """
    A Word document used as a merge template.

    Wraps a python-docx ``Document`` and wires the scanner, renderer, splicer
    and table replicator to stores that write into its package. Mutating
    methods return ``self`` so calls can be chained.
    """

    def __init__(self, document, settings: Optional[Settings] = None):
        self.document = document
        self.settings = settings or default_settings
        self.stores = DocxPackageStores(document)
        self.renderer = ValueRenderer(self.stores, self.settings)
        self.substituter = TokenSubstituter(self.renderer)
        self.tables = TableReplicator(self.substituter, self.settings)
        self.style_cache = StyleCache(document.styles.element)
        self.last_result = SubstitutionResult()

    @classmethod
    def open(cls, path: Union[str, Path], settings: Optional[Settings] = None) -> "TemplateDocument":
        """Open an existing .docx file."""
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Template {path} does not exist")
        logger.info(f"Opening template {path}")
        return cls(docx.Document(str(path)), settings)

    @classmethod
    def new(cls, settings: Optional[Settings] = None) -> "TemplateDocument":
        """Create an empty document from python-docx's default template."""
        return cls(docx.Document(), settings)

    @property
    def body(self):
        return self.document.element.body

    @property
    def registrations(self) -> Registrations:
        """Media and fragment blobs added to the package so far."""
        return self.stores.registrations

    def save(self, path: Union[str, Path]) -> Path:
        path = Path(path)
        self.document.save(str(path))
        logger.info(
            f"Saved {path} ({len(self.registrations.media)} images, "
            f"{len(self.registrations.fragments)} fragments)"
        )
        return path

    # Substitution

    def substitute_tokens(self, bindings: Mapping[str, Any]) -> "TemplateDocument":
        """Replace bound tokens in the body, headers and footers."""
        self.last_result = self.substituter.substitute_document(self.document, bindings)
        return self

    def find_tokens(self) -> list[str]:
        """List the token names in the body, headers and footers, in order of appearance."""
        roots = [self.body] + [part.element for part in header_footer_parts(self.document)]
        names = []
        seen = set()
        for paragraph in (p for root in roots for p in root.iter(W_P)):
            for name in TokenScanner.find_all_names(TokenScanner.paragraph_text(paragraph)):
                if name.lower() not in seen:
                    seen.add(name.lower())
                    names.append(name)
        return names

    # Tables

    def fill_table(
        self,
        skip_header: bool,
        records: Iterable[Sequence[Any]],
        table_index: int = 0,
    ) -> "TemplateDocument":
        """Fill a table positionally; a no-op when the document has no table."""
        self.tables.fill_table(find_table(self.body, table_index), skip_header, records)
        return self

    def fill_composite_table(
        self,
        skip_header: bool,
        records: Iterable[Mapping[str, Any]],
        table_index: int = 0,
        strict: bool = False,
    ) -> "TemplateDocument":
        """Fill a table by substituting each record into a clone of its template row."""
        self.last_result = self.tables.fill_composite_table(
            find_table(self.body, table_index), skip_header, records, strict=strict
        )
        return self

    # Content helpers

    def add_paragraph_style(
        self,
        name: str,
        bold: bool = False,
        font_size: Optional[float] = None,
        base_style: str = "Normal",
    ) -> str:
        """
        Add a custom paragraph style and return its id.

        Args:
            name: Style name shown in Word
            bold: Bold run formatting
            font_size: Size in points
            base_style: Name of the style this one is based on

        Returns:
            The new style's id
        """
        style = self.document.styles.add_style(name, WD_STYLE_TYPE.PARAGRAPH)
        style.base_style = self.document.styles[base_style]
        style.font.bold = bold
        if font_size:
            style.font.size = Pt(font_size)
        self.style_cache.invalidate()
        return style.style_id

    def append_paragraph(self, text: str, style_name: Optional[str] = None) -> "TemplateDocument":
        """Append a paragraph, styled by name through the style cache."""
        style_id = self.style_cache.style_id(style_name) if style_name else None
        paragraph = self.document.add_paragraph(text)
        if style_id:
            paragraph._p.style = style_id
        return self

    def append_fragment(self, markup: str, after=None) -> "TemplateDocument":
        """
        Insert an HTML fragment as an altChunk.

        Args:
            markup: HTML body content
            after: Element to insert after; defaults to the end of the body
        """
        content = self.renderer.render(FragmentValue(markup=markup))
        chunk = content.nodes[0]
        if after is not None:
            after.addnext(chunk)
        else:
            sect_pr = self.body.sectPr
            if sect_pr is not None:
                sect_pr.addprevious(chunk)
            else:
                self.body.append(chunk)
        return self
