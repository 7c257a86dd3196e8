"""Locate tokens in a paragraph whose text is split across runs."""

import logging
from typing import Optional

from ..oxml import has_text, paragraph_runs, run_text
from .models import RunSpan, TokenMatch
from .syntax import ANY_TOKEN_PATTERN, build_token_pattern, strip_markers

logger = logging.getLogger(__name__)


def index_runs(paragraph) -> list[RunSpan]:
    """
    Map flattened character offsets back to the runs they come from.

    Runs without a text node (drawings, breaks, field characters) carry no
    characters and are left out so they can never be selected for removal.
    The result is ordered, gap-free and non-overlapping.
    """
    spans = []
    position = 0
    for run in paragraph_runs(paragraph):
        if not has_text(run):
            continue
        text = run_text(run)
        spans.append(RunSpan(run=run, start=position, end=position + len(text), text=text))
        position += len(text)
    return spans


def flatten(spans: list[RunSpan]) -> str:
    """Join run texts in run order."""
    return "".join(span.text for span in spans)


class TokenScanner:
    """Find token occurrences against the current run layout of a paragraph."""

    def __init__(self):
        self._patterns: dict[str, object] = {}

    def _pattern(self, name: str):
        key = strip_markers(name).lower()
        if key not in self._patterns:
            self._patterns[key] = build_token_pattern(name)
        return self._patterns[key]

    def find(self, paragraph, name: str, offset: int = 0) -> Optional[TokenMatch]:
        """
        Find the first occurrence of ``name`` in the paragraph.

        The paragraph is re-flattened and re-indexed on every call because each
        substitution changes the run boundaries.

        Args:
            paragraph: A ``w:p`` element
            name: Token name, with or without markers
            offset: Flattened position to start searching from

        Returns:
            TokenMatch carrying the run index it was computed from, or None
        """
        spans = index_runs(paragraph)
        text = flatten(spans)
        match = self._pattern(name).search(text, offset)
        if match is None:
            return None

        logger.debug(f"Found token {match.group(0)} at [{match.start()}, {match.end()})")
        return TokenMatch(
            name=strip_markers(name),
            text=match.group(0),
            start=match.start(),
            end=match.end(),
            modifier=match.group(1),
            spans=spans,
        )

    @staticmethod
    def find_all_names(text: str) -> list[str]:
        """Return every token name in ``text`` in order of first appearance."""
        names = []
        for match in ANY_TOKEN_PATTERN.finditer(text):
            name = match.group(1).strip()
            if name not in names:
                names.append(name)
        return names

    @staticmethod
    def paragraph_text(paragraph) -> str:
        return flatten(index_runs(paragraph))
