"""Tests for run selection, splicing and paragraph substitution."""

import pytest
from lxml import etree

from docsmith.engine import RunSplicer, select_runs
from docsmith.oxml import W_P, paragraph_runs
from docsmith.tokens import RunSpan, TokenScanner
from docsmith.values import FragmentValue, TextValue


def spans_for(*ranges):
    return [RunSpan(run=None, start=s, end=e, text="x" * (e - s)) for s, e in ranges]


class TestSelectRuns:
    """Test the half-open run selection rule."""

    def test_excludes_runs_touching_the_match(self):
        spans = spans_for((0, 6), (6, 14), (14, 15))

        selected = select_runs(spans, 6, 14)

        assert [(s.start, s.end) for s in selected] == [(6, 14)]

    def test_includes_straddling_runs(self):
        spans = spans_for((0, 3), (3, 10), (10, 15))

        selected = select_runs(spans, 6, 14)

        assert [(s.start, s.end) for s in selected] == [(3, 10), (10, 15)]

    def test_includes_runs_fully_inside(self):
        spans = spans_for((0, 7), (7, 9), (9, 11), (11, 20))

        selected = select_runs(spans, 5, 13)

        assert [(s.start, s.end) for s in selected] == [(0, 7), (7, 9), (9, 11), (11, 20)]

    def test_run_ending_exactly_at_match_end_is_selected(self):
        spans = spans_for((0, 4), (4, 10), (10, 12))

        selected = select_runs(spans, 2, 10)

        assert [(s.start, s.end) for s in selected] == [(0, 4), (4, 10)]

    def test_single_enclosing_run_is_selected(self):
        spans = spans_for((0, 15), (15, 20))

        selected = select_runs(spans, 6, 14)

        assert [(s.start, s.end) for s in selected] == [(0, 15)]


class TestRunSplicer:
    """Test the structural edit of a splice."""

    def test_splice_text_over_split_runs(self, make_paragraph, renderer, helpers):
        paragraph = make_paragraph("Hel", ("lo {{na", {"bold": True}), "me}}!")
        match = TokenScanner().find(paragraph, "name")

        result = RunSplicer().splice(paragraph, match, renderer.render(TextValue(text="World")))

        assert "".join(helpers.texts(paragraph)) == "Hello World!"
        assert helpers.texts(paragraph) == ["Hel", "lo ", "World", "!"]
        assert result.runs_removed == 2
        assert result.runs_inserted == 3
        assert result.paragraph_replaced is False

    def test_anchor_formatting_is_cloned(self, make_paragraph, renderer, helpers):
        paragraph = make_paragraph("Hel", ("lo {{na", {"bold": True}), ("me}}!", {"italic": True}))
        match = TokenScanner().find(paragraph, "name")
        anchor_rpr = helpers.rpr_xml(match.spans[1].run)

        RunSplicer().splice(paragraph, match, renderer.render(TextValue(text="World")))

        runs = paragraph_runs(paragraph)
        assert helpers.rpr_xml(runs[1]) == anchor_rpr
        assert helpers.rpr_xml(runs[2]) == anchor_rpr
        assert helpers.rpr_xml(runs[3]) == anchor_rpr

    def test_new_text_preserves_space(self, make_paragraph, renderer):
        paragraph = make_paragraph("a {{name}} b")
        match = TokenScanner().find(paragraph, "name")

        RunSplicer().splice(paragraph, match, renderer.render(TextValue(text=" padded ")))

        space = "{http://www.w3.org/XML/1998/namespace}space"
        for run in paragraph_runs(paragraph):
            for t in run.iter("{http://schemas.openxmlformats.org/wordprocessingml/2006/main}t"):
                assert t.get(space) == "preserve"

    def test_no_empty_prefix_or_suffix_runs(self, make_paragraph, renderer, helpers):
        paragraph = make_paragraph("{{name}}")
        match = TokenScanner().find(paragraph, "name")

        RunSplicer().splice(paragraph, match, renderer.render(TextValue(text="World")))

        assert helpers.texts(paragraph) == ["World"]

    def test_fragment_replaces_paragraph(self, document, make_paragraph, renderer):
        before = make_paragraph("before")
        paragraph = make_paragraph("x {{body}} y")
        body = paragraph.getparent()
        match = TokenScanner().find(paragraph, "body")

        result = RunSplicer().splice(
            paragraph, match, renderer.render(FragmentValue(markup="<p>hi</p>"))
        )

        assert result.paragraph_replaced is True
        assert paragraph.getparent() is None
        chunk = before.getnext()
        assert etree.QName(chunk).localname == "altChunk"
        assert chunk.getparent() is body


class TestTokenSubstituter:
    """Test the scan/splice loop over paragraphs."""

    def test_no_op_preservation(self, make_paragraph, substituter):
        paragraph = make_paragraph(("Plain ", {"bold": True}), "text {{other}}")
        before = etree.tostring(paragraph)

        result = substituter.substitute_paragraphs([paragraph], {"name": "World"})

        assert etree.tostring(paragraph) == before
        assert result.replacements == 0

    def test_single_run_round_trip(self, make_paragraph, substituter, helpers):
        paragraph = make_paragraph(("Hello {{name}}!", {"bold": True}))
        original_rpr = helpers.rpr_xml(paragraph_runs(paragraph)[0])

        substituter.substitute_paragraphs([paragraph], {"name": TextValue(text="World")})

        assert "".join(helpers.texts(paragraph)) == "Hello World!"
        content_run = paragraph_runs(paragraph)[1]
        assert helpers.texts(paragraph)[1] == "World"
        assert helpers.rpr_xml(content_run) == original_rpr

    def test_split_run_correctness(self, make_paragraph, substituter, helpers):
        paragraph = make_paragraph("Hel", ("lo {{na", {"underline": True}), "me}}!")
        second_rpr = helpers.rpr_xml(paragraph_runs(paragraph)[1])

        substituter.substitute_paragraphs([paragraph], {"name": TextValue(text="World")})

        assert "".join(helpers.texts(paragraph)) == "Hello World!"
        world = paragraph_runs(paragraph)[2]
        assert helpers.rpr_xml(world) == second_rpr

    def test_unresolved_pass_through(self, make_paragraph, substituter, helpers):
        paragraph = make_paragraph("Dear {{name}}, see {{unknown}}.")

        result = substituter.substitute_paragraphs([paragraph], {"name": "Ann"})

        assert "".join(helpers.texts(paragraph)) == "Dear Ann, see {{unknown}}."
        assert result.unresolved_tokens == ["unknown"]

    def test_every_occurrence_is_replaced(self, make_paragraph, substituter, helpers):
        paragraph = make_paragraph("{{a}}-{{", "A}}-{{a:x}}")

        result = substituter.substitute_paragraphs([paragraph], {"a": "1"})

        assert "".join(helpers.texts(paragraph)) == "1-1-1"
        assert result.replacements == 3

    def test_value_containing_its_token_terminates(self, make_paragraph, substituter, helpers):
        paragraph = make_paragraph("[{{loop}}]")

        result = substituter.substitute_paragraphs([paragraph], {"loop": "{{loop}}"})

        assert "".join(helpers.texts(paragraph)) == "[{{loop}}]"
        assert result.replacements == 1

    def test_bindings_accept_markers_in_names(self, make_paragraph, substituter, helpers):
        paragraph = make_paragraph("{{name}}")

        substituter.substitute_paragraphs([paragraph], {"{{name}}": "x"})

        assert helpers.texts(paragraph) == ["x"]

    def test_fragment_stops_paragraph(self, document, make_paragraph, substituter, stores):
        make_paragraph("{{html}} {{name}}")
        paragraphs = list(document.element.body.iter(W_P))

        result = substituter.substitute_paragraphs(
            paragraphs, {"html": FragmentValue(markup="<b>x</b>"), "name": "never"}
        )

        assert result.paragraphs_replaced == 1
        assert result.replacements == 1
        assert len(stores.registrations.fragments) == 1

    def test_unsupported_value_kind_raises(self, make_paragraph, substituter):
        from docsmith.errors import UnsupportedValueKindError

        paragraph = make_paragraph("{{name}}")

        with pytest.raises(UnsupportedValueKindError):
            substituter.substitute_paragraphs([paragraph], {"name": object()})
