"""Token scanning: find {{name[:modifier]}} placeholders across split runs."""

from .models import RunSpan, TokenMatch
from .scanner import TokenScanner, flatten, index_runs
from .syntax import (
    ANY_TOKEN_PATTERN,
    build_token_pattern,
    make_token,
    modifier_width,
    parse_token,
    strip_markers,
)

__all__ = [
    "RunSpan",
    "TokenMatch",
    "TokenScanner",
    "flatten",
    "index_runs",
    "ANY_TOKEN_PATTERN",
    "build_token_pattern",
    "make_token",
    "modifier_width",
    "parse_token",
    "strip_markers",
]
