"""Small WordprocessingML helpers shared by the scanner, splicer and renderer."""

from copy import deepcopy
from typing import Optional

from docx.oxml import OxmlElement
from docx.oxml.ns import qn

W_P = qn("w:p")
W_R = qn("w:r")
W_T = qn("w:t")
W_RPR = qn("w:rPr")
W_TBL = qn("w:tbl")
W_TR = qn("w:tr")
W_TC = qn("w:tc")
XML_SPACE = qn("xml:space")


def run_text(run) -> str:
    """Text of a run: its ``w:t`` children concatenated."""
    return "".join(t.text or "" for t in run.findall(W_T))


def has_text(run) -> bool:
    return run.find(W_T) is not None


def owning_paragraph(element):
    """Nearest ``w:p`` ancestor of an element, or None."""
    parent = element.getparent()
    while parent is not None and parent.tag != W_P:
        parent = parent.getparent()
    return parent


def paragraph_runs(paragraph) -> list:
    """Runs of a paragraph in document order, excluding runs of nested text boxes."""
    return [r for r in paragraph.iter(W_R) if owning_paragraph(r) is paragraph]


def run_properties(run):
    return run.find(W_RPR) if run is not None else None


def preserve_space(run):
    """Mark every text node of a run so Word keeps leading/trailing whitespace."""
    for t in run.iter(W_T):
        t.set(XML_SPACE, "preserve")


def copy_run_properties(source, target):
    """Clone the formatting of ``source`` onto ``target``."""
    if source is None or target is None:
        return
    rpr = run_properties(source)
    if rpr is not None:
        existing = run_properties(target)
        if existing is not None:
            target.remove(existing)
        target.insert(0, deepcopy(rpr))
    preserve_space(target)


def new_text_run(text: str, template=None):
    """Build a ``w:r`` holding ``text``, formatted like ``template`` when given."""
    run = OxmlElement("w:r")
    t = OxmlElement("w:t")
    t.text = text
    run.append(t)
    if template is not None:
        copy_run_properties(template, run)
    else:
        preserve_space(run)
    return run


def new_paragraph(run: Optional[object] = None):
    paragraph = OxmlElement("w:p")
    if run is not None:
        paragraph.append(run)
    return paragraph
