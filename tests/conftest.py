"""Pytest configuration and shared fixtures."""

import io

import docx
import pytest
from lxml import etree
from PIL import Image

from docsmith.config import Settings
from docsmith.engine import TokenSubstituter
from docsmith.oxml import W_RPR, paragraph_runs, run_text
from docsmith.stores import InMemoryStores
from docsmith.values import ValueRenderer


@pytest.fixture
def test_settings() -> Settings:
    """Create settings with test values."""
    return Settings(
        log_level="DEBUG",
        emu_per_pixel=9525,
        fragment_id_prefix="AltChunk",
        fragment_charset="utf-8",
        strip_fragment_tables=True,
    )


@pytest.fixture
def document():
    """An empty python-docx document."""
    return docx.Document()


@pytest.fixture
def stores(test_settings) -> InMemoryStores:
    return InMemoryStores(test_settings)


@pytest.fixture
def renderer(stores, test_settings) -> ValueRenderer:
    return ValueRenderer(stores, test_settings)


@pytest.fixture
def substituter(renderer) -> TokenSubstituter:
    return TokenSubstituter(renderer)


@pytest.fixture
def make_paragraph(document):
    """
    Factory adding a paragraph built from (text, formatting) fragments.

    Formatting is a dict of python-docx run attributes, e.g. {"bold": True}.
    """

    def _make(*fragments):
        paragraph = document.add_paragraph()
        for fragment in fragments:
            if isinstance(fragment, str):
                text, formatting = fragment, {}
            else:
                text, formatting = fragment
            run = paragraph.add_run(text)
            for attr, value in formatting.items():
                setattr(run, attr, value)
        return paragraph._p

    return _make


@pytest.fixture
def png_bytes() -> bytes:
    """A 40x20 PNG image."""
    buffer = io.BytesIO()
    Image.new("RGB", (40, 20), "red").save(buffer, format="PNG")
    return buffer.getvalue()


def texts(paragraph) -> list[str]:
    """Text of every run in a paragraph."""
    return [run_text(r) for r in paragraph_runs(paragraph)]


def rpr_xml(run) -> bytes:
    rpr = run.find(W_RPR)
    return etree.tostring(rpr) if rpr is not None else b""


@pytest.fixture
def helpers():
    """Inspection helpers for run-level assertions."""

    class Helpers:
        texts = staticmethod(texts)
        rpr_xml = staticmethod(rpr_xml)

    return Helpers
