"""Replicate a template table row once per input record."""

import logging
from copy import deepcopy
from typing import Any, Iterable, Mapping, Optional, Sequence

from docx.oxml import OxmlElement

from ..config import Settings, settings as default_settings
from ..errors import MissingTemplateRowError
from ..oxml import W_P, W_R, W_TBL, W_TC, W_TR, new_paragraph, new_text_run
from ..values import FragmentValue, ValueKind, coerce_bindings, strip_tables
from .substitute import SubstitutionResult, TokenSubstituter

logger = logging.getLogger(__name__)


def find_table(root, index: int = 0):
    """Return the ``index``-th table under ``root`` in document order, or None."""
    for position, table in enumerate(root.iter(W_TBL)):
        if position == index:
            return table
    return None


def table_rows(table) -> list:
    return table.findall(W_TR)


def _cell_text(value: Any) -> str:
    return "" if value is None else str(value)


class TableReplicator:
    """Fill a table by cloning a formatted template row for every record."""

    def __init__(self, substituter: TokenSubstituter, settings: Optional[Settings] = None):
        self.substituter = substituter
        self.settings = settings or default_settings

    def fill_table(
        self,
        table,
        skip_header: bool,
        records: Iterable[Sequence[Any]],
    ) -> int:
        """
        Fill a table positionally from rows of values.

        Every row after the optional header is removed. The row following the
        header (or, without a header, row 0 for the first record and row 1 for
        the rest) is cloned per record; each cell gets one run holding the
        stringified value, formatted like the first run of the template cell.

        Args:
            table: ``w:tbl`` element, or None for a document without tables
            skip_header: Keep the first row as a header
            records: Ordered cell values per row

        Returns:
            Number of rows appended
        """
        if table is None:
            logger.warning("No table found, positional fill skipped")
            return 0

        rows = table_rows(table)
        skip = 1 if skip_header else 0
        for row in rows[skip:]:
            table.remove(row)

        appended = 0
        for record in records:
            template = self._positional_template(rows, skip_header, first=appended == 0)
            if template is None:
                row = self._build_default_row(record)
            else:
                row = self._fill_from_template(template, record)
            table.append(row)
            appended += 1

        logger.info(f"Filled table with {appended} rows")
        return appended

    @staticmethod
    def _positional_template(rows: list, skip_header: bool, first: bool):
        if skip_header:
            index = 1
        else:
            index = 0 if first or len(rows) < 2 else 1
        return rows[index] if index < len(rows) else None

    @staticmethod
    def _build_default_row(record: Sequence[Any]):
        row = OxmlElement("w:tr")
        for value in record:
            cell = OxmlElement("w:tc")
            cell.append(new_paragraph(new_text_run(_cell_text(value))))
            row.append(cell)
        return row

    @staticmethod
    def _fill_from_template(template, record: Sequence[Any]):
        row = deepcopy(template)
        anchors = [cell.find(".//" + W_R) for cell in template.iter(W_TC)]
        cells = list(row.iter(W_TC))

        for index, value in enumerate(record):
            if index >= len(cells):
                break
            cell = cells[index]
            run = new_text_run(_cell_text(value), template=anchors[index])

            paragraph = cell.find(".//" + W_P)
            if paragraph is None:
                cell.append(new_paragraph(run))
            else:
                for old in paragraph.findall(W_R):
                    paragraph.remove(old)
                paragraph.append(run)
        return row

    def fill_composite_table(
        self,
        table,
        skip_header: bool,
        records: Iterable[Mapping[str, Any]],
        strict: bool = False,
    ) -> SubstitutionResult:
        """
        Fill a table whose template row holds tokens.

        The template row (the row after the optional header) is removed and
        cloned per record; the record's bindings are substituted into the
        clone's paragraphs. HTML fragments lose any nested tables first.

        Args:
            table: ``w:tbl`` element, or None for a document without tables
            skip_header: Keep the first row as a header
            records: Token bindings per row
            strict: Raise instead of skipping when there is no template row

        Returns:
            Combined SubstitutionResult over all generated rows

        Raises:
            MissingTemplateRowError: If strict and the table has no template row
        """
        result = SubstitutionResult()
        if table is None:
            logger.warning("No table found, composite fill skipped")
            return result

        try:
            template = self._take_template_row(table, skip_header)
        except MissingTemplateRowError:
            if strict:
                raise
            logger.warning("Table has no template row, composite fill skipped")
            return result

        count = 0
        for record in records:
            row = deepcopy(template)
            bindings = {
                name: self._prepare_cell_value(value)
                for name, value in coerce_bindings(record).items()
            }
            result.merge(self.substituter.substitute_paragraphs(list(row.iter(W_P)), bindings))
            table.append(row)
            count += 1

        logger.info(f"Filled composite table with {count} rows")
        return result

    @staticmethod
    def _take_template_row(table, skip_header: bool):
        rows = table_rows(table)
        index = 1 if skip_header else 0
        if index >= len(rows):
            raise MissingTemplateRowError(
                f"Table has {len(rows)} rows, no template row after header={skip_header}"
            )
        template = rows[index]
        table.remove(template)
        return template

    def _prepare_cell_value(self, value):
        if value.kind == ValueKind.FRAGMENT and self.settings.strip_fragment_tables:
            return FragmentValue(markup=strip_tables(value.markup))
        return value
