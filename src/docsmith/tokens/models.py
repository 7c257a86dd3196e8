"""Data models for token scanning."""

from dataclasses import dataclass, field
from typing import Any, Optional


@dataclass
class RunSpan:
    """A run and the half-open range ``[start, end)`` it covers in the flattened text."""

    run: Any  # lxml w:r element
    start: int
    end: int
    text: str = ""

    @property
    def length(self) -> int:
        return self.end - self.start


@dataclass
class TokenMatch:
    """One occurrence of a token in a paragraph's flattened text."""

    name: str
    text: str  # Matched text, e.g. "{{logo:200}}"
    start: int
    end: int
    modifier: Optional[str] = None
    spans: list[RunSpan] = field(default_factory=list)  # Run index the match was found in
