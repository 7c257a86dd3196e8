"""Token substitution over paragraphs and whole documents."""

import logging
from dataclasses import dataclass, field
from typing import Any, Iterable, Mapping, Optional

from ..oxml import W_P
from ..tokens import TokenScanner, strip_markers
from ..values import ValueRenderer, coerce_bindings
from .splicer import RunSplicer

logger = logging.getLogger(__name__)


def header_footer_parts(document) -> list:
    """Header and footer parts of a python-docx Document, collected before any edit."""
    from docx.parts.hdrftr import FooterPart, HeaderPart

    # Rendering adds relationships, so the package walk must finish first.
    return [
        part
        for part in document.part.package.iter_parts()
        if isinstance(part, (HeaderPart, FooterPart))
    ]


@dataclass
class SubstitutionResult:
    """Summary of a substitution pass."""

    replacements: int = 0
    paragraphs_replaced: int = 0  # Paragraphs swapped for an HTML fragment
    unresolved_tokens: list[str] = field(default_factory=list)  # Tokens left verbatim

    def merge(self, other: "SubstitutionResult") -> "SubstitutionResult":
        self.replacements += other.replacements
        self.paragraphs_replaced += other.paragraphs_replaced
        for name in other.unresolved_tokens:
            if name not in self.unresolved_tokens:
                self.unresolved_tokens.append(name)
        return self


class TokenSubstituter:
    """
    Replace bound tokens in paragraphs.

    For each paragraph and each binding, the scanner finds the next occurrence
    against the current runs, the renderer builds the content and the splicer
    edits the runs; this repeats until the token no longer occurs.
    """

    def __init__(
        self,
        renderer: ValueRenderer,
        scanner: Optional[TokenScanner] = None,
        splicer: Optional[RunSplicer] = None,
    ):
        self.renderer = renderer
        self.scanner = scanner or TokenScanner()
        self.splicer = splicer or RunSplicer()

    def substitute_paragraphs(
        self, paragraphs: Iterable[Any], bindings: Mapping[str, Any]
    ) -> SubstitutionResult:
        """
        Substitute bindings into every paragraph.

        Args:
            paragraphs: ``w:p`` elements; materialized before any edit
            bindings: Token name to Value (plain strings are accepted as text)

        Returns:
            SubstitutionResult with counts and tokens left unbound
        """
        values = {strip_markers(name): value for name, value in coerce_bindings(bindings).items()}
        result = SubstitutionResult()

        for paragraph in list(paragraphs):
            result.merge(self._substitute_paragraph(paragraph, values))

        return result

    def _substitute_paragraph(self, paragraph, values: dict) -> SubstitutionResult:
        result = SubstitutionResult()

        for name, value in values.items():
            # Rescan resumes after the inserted text; nothing before it can match.
            offset = 0
            while True:
                match = self.scanner.find(paragraph, name, offset)
                if match is None:
                    break

                content = self.renderer.render(value, match)
                outcome = self.splicer.splice(paragraph, match, content)
                result.replacements += 1

                if outcome.paragraph_replaced:
                    result.paragraphs_replaced += 1
                    return result

                offset = match.start + len(getattr(value, "text", ""))

        bound = {name.lower() for name in values}
        for name in self.scanner.find_all_names(self.scanner.paragraph_text(paragraph)):
            if name.lower() not in bound and name not in result.unresolved_tokens:
                logger.debug(f"No binding for token '{name}', left verbatim")
                result.unresolved_tokens.append(name)

        return result

    def substitute_document(self, document, bindings: Mapping[str, Any]) -> SubstitutionResult:
        """
        Substitute bindings in the body, headers and footers of a python-docx Document.

        Args:
            document: ``docx.document.Document``
            bindings: Token name to Value

        Returns:
            Combined SubstitutionResult
        """
        result = self.substitute_paragraphs(document.element.body.iter(W_P), bindings)

        for part in header_footer_parts(document):
            part_substituter = TokenSubstituter(
                self.renderer.for_part(part), self.scanner, self.splicer
            )
            result.merge(part_substituter.substitute_paragraphs(part.element.iter(W_P), bindings))

        logger.info(
            f"Substituted {result.replacements} tokens "
            f"({result.paragraphs_replaced} paragraphs replaced by fragments, "
            f"{len(result.unresolved_tokens)} unresolved)"
        )
        return result
