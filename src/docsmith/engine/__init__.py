"""Substitution engine: splice tokens, replicate table rows, resolve styles."""

from .splicer import RunSplicer, SpliceResult, select_runs
from .styles import StyleCache
from .substitute import SubstitutionResult, TokenSubstituter, header_footer_parts
from .tables import TableReplicator, find_table, table_rows

__all__ = [
    "RunSplicer",
    "SpliceResult",
    "select_runs",
    "StyleCache",
    "SubstitutionResult",
    "TokenSubstituter",
    "header_footer_parts",
    "TableReplicator",
    "find_table",
    "table_rows",
]
