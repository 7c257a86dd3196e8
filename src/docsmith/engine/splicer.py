"""Rebuild the runs covered by a token occurrence."""

import logging
from dataclasses import dataclass

from ..oxml import W_P, W_TC, copy_run_properties, new_paragraph, new_text_run
from ..tokens import RunSpan, TokenMatch
from ..values import RenderedContent

logger = logging.getLogger(__name__)


@dataclass
class SpliceResult:
    """Outcome of one splice."""

    runs_removed: int
    runs_inserted: int
    paragraph_replaced: bool = False


def select_runs(spans: list[RunSpan], start: int, end: int) -> list[RunSpan]:
    """
    Select the runs covering the half-open match range ``[start, end)``.

    A run is selected when it starts inside the range or ends inside it
    (``end`` inclusive). Runs that merely touch the range are excluded. When
    nothing qualifies the match sits strictly inside one run, which is then
    the only run selected.
    """
    selected = [
        span
        for span in spans
        if (span.start >= start and span.start < end) or (span.end > start and span.end <= end)
    ]
    if not selected:
        selected = [span for span in spans if span.start <= start and span.end >= end][:1]
    return selected


class RunSplicer:
    """Replace the runs of a token occurrence with prefix, content and suffix runs."""

    def splice(self, paragraph, match: TokenMatch, content: RenderedContent) -> SpliceResult:
        """
        Apply rendered content to the runs covering ``match``.

        The first covered run donates its formatting and the text before the
        opening marker; the last covered run donates the text after the closing
        marker. Fragment content replaces the whole paragraph in its parent.

        Args:
            paragraph: The ``w:p`` the match was found in
            match: Token occurrence, carrying the run index it was found against
            content: Rendered replacement nodes

        Returns:
            SpliceResult describing the edit
        """
        selected = select_runs(match.spans, match.start, match.end)
        if not selected:
            raise ValueError(f"No runs cover token {match.text} at [{match.start}, {match.end})")

        first, last = selected[0], selected[-1]
        anchor = first.run

        if content.replaces_paragraph:
            parent = paragraph.getparent()
            for node in content.nodes:
                paragraph.addprevious(node)
            parent.remove(paragraph)
            # A table cell must end with a paragraph.
            if parent.tag == W_TC and parent[-1].tag != W_P:
                parent.append(new_paragraph())
            logger.debug(f"Replaced paragraph with fragment for {match.text}")
            return SpliceResult(runs_removed=len(selected), runs_inserted=0, paragraph_replaced=True)

        prefix = first.text[: max(match.start - first.start, 0)]
        suffix = last.text[match.end - last.start:] if match.end < last.end else ""

        new_runs = []
        if prefix:
            new_runs.append(new_text_run(prefix, template=anchor))
        for node in content.nodes:
            copy_run_properties(anchor, node)
            new_runs.append(node)
        if suffix:
            new_runs.append(new_text_run(suffix, template=anchor))

        for run in new_runs:
            anchor.addprevious(run)
        for span in selected:
            span.run.getparent().remove(span.run)

        logger.debug(
            f"Spliced {match.text}: removed {len(selected)} runs, inserted {len(new_runs)}"
        )
        return SpliceResult(runs_removed=len(selected), runs_inserted=len(new_runs))
