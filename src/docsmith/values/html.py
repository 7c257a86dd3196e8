"""HTML fragment helpers."""

import logging

from lxml import html as lxml_html

logger = logging.getLogger(__name__)

# Table structure dropped in place; their children move up to the parent
_CONTAINER_TAGS = ("table", "thead", "tbody", "tfoot")


def wrap_fragment(markup: str, charset: str = "utf-8") -> str:
    """Wrap markup in the minimal document shell Word expects from an altChunk."""
    return f"<html><head><meta charset={charset}></head><body>{markup}</body></html>"


def strip_tables(markup: str) -> str:
    """
    Remove nested table markup from an HTML fragment.

    Rows become paragraphs and cells become spans, so the text survives but
    no ``<table>`` element does. Markup without tables is returned unchanged.

    Args:
        markup: HTML fragment

    Returns:
        Equivalent fragment with zero tables
    """
    if "<table" not in markup.lower():
        return markup

    root = lxml_html.fragment_fromstring(markup, create_parent="div")

    for element in list(root.iter("colgroup", "col")):
        element.drop_tree()
    for element in list(root.iter("td", "th")):
        element.tag = "span"
        element.tail = " " + (element.tail or "")
    for element in list(root.iter("tr", "caption")):
        element.tag = "p"
    for element in reversed(list(root.iter(*_CONTAINER_TAGS))):
        element.drop_tag()

    logger.debug("Stripped table markup from fragment")
    return lxml_html.tostring(root, encoding="unicode")
