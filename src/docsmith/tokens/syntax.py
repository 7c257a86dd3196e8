"""Token syntax definitions and patterns."""

import re
from typing import Optional, Pattern

OPEN_MARKER = "{{"
CLOSE_MARKER = "}}"

# {{name}} or {{name:modifier}} - modifier restricted to [0-9a-zA-Z_-]
MODIFIER_CLASS = r"[0-9a-zA-Z_-]*"

# Any token, used for discovery and reporting
ANY_TOKEN_PATTERN: Pattern = re.compile(
    r"\{\{([^{}:]+?)(?::(" + MODIFIER_CLASS + r"))?\}\}"
)


def strip_markers(name: str) -> str:
    """Remove surrounding braces so ``{{name}}`` and ``name`` are equivalent."""
    return name.strip().strip("{}")


def build_token_pattern(name: str) -> Pattern:
    """
    Build the case-insensitive search pattern for one token name.

    The name is escaped literally; an optional ``:modifier`` may follow it
    before the closing marker.

    Args:
        name: Token name, with or without the surrounding markers

    Returns:
        Compiled pattern whose group 1 captures the modifier (or None)
    """
    return re.compile(
        r"\{\{" + re.escape(strip_markers(name)) + r"(?::(" + MODIFIER_CLASS + r"))?\}\}",
        re.IGNORECASE,
    )


def make_token(name: str, modifier: Optional[str] = None) -> str:
    """Render a token back to its textual form."""
    name = strip_markers(name)
    if modifier:
        return f"{OPEN_MARKER}{name}:{modifier}{CLOSE_MARKER}"
    return f"{OPEN_MARKER}{name}{CLOSE_MARKER}"


def parse_token(text: str) -> tuple[str, Optional[str]]:
    """
    Split a token's text into name and modifier.

    Args:
        text: Matched token text, e.g. ``{{logo:200}}``

    Returns:
        Tuple of (name, modifier or None)
    """
    inner = text.strip()
    if inner.startswith(OPEN_MARKER):
        inner = inner[len(OPEN_MARKER):]
    if inner.endswith(CLOSE_MARKER):
        inner = inner[: -len(CLOSE_MARKER)]
    name, sep, modifier = inner.partition(":")
    return name, (modifier if sep else None)


def modifier_width(modifier: Optional[str]) -> Optional[int]:
    """Interpret a modifier as a pixel width; non-numeric modifiers are ignored."""
    if modifier and modifier.isdigit():
        width = int(modifier)
        return width if width > 0 else None
    return None
