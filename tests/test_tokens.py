"""Tests for token syntax and the run index."""

from docsmith.tokens import (
    TokenScanner,
    build_token_pattern,
    flatten,
    index_runs,
    make_token,
    modifier_width,
    parse_token,
    strip_markers,
)


class TestTokenSyntax:
    """Test token syntax utilities."""

    def test_pattern_matches_plain_token(self):
        pattern = build_token_pattern("name")
        match = pattern.search("Hello {{name}}!")

        assert match is not None
        assert match.group(0) == "{{name}}"
        assert match.group(1) is None

    def test_pattern_is_case_insensitive(self):
        pattern = build_token_pattern("Name")
        assert pattern.search("{{NAME}}") is not None
        assert pattern.search("{{name}}") is not None

    def test_pattern_accepts_modifier(self):
        match = build_token_pattern("logo").search("see {{logo:200}} here")

        assert match.group(0) == "{{logo:200}}"
        assert match.group(1) == "200"

    def test_pattern_rejects_invalid_modifier(self):
        assert build_token_pattern("logo").search("{{logo:2 00}}") is None
        assert build_token_pattern("logo").search("{{logo:a.b}}") is None

    def test_pattern_does_not_match_longer_name(self):
        assert build_token_pattern("name").search("{{names}}") is None

    def test_pattern_escapes_name(self):
        pattern = build_token_pattern("a.b")
        assert pattern.search("{{a.b}}") is not None
        assert pattern.search("{{axb}}") is None

    def test_strip_markers(self):
        assert strip_markers("{{name}}") == "name"
        assert strip_markers("name") == "name"

    def test_parse_token(self):
        assert parse_token("{{logo:200}}") == ("logo", "200")
        assert parse_token("{{logo}}") == ("logo", None)

    def test_make_token(self):
        assert make_token("logo") == "{{logo}}"
        assert make_token("logo", "120") == "{{logo:120}}"

    def test_modifier_width(self):
        assert modifier_width("200") == 200
        assert modifier_width("wide") is None
        assert modifier_width("") is None
        assert modifier_width(None) is None
        assert modifier_width("0") is None


class TestRunIndex:
    """Test flattening and offset indexing."""

    def test_index_is_gap_free(self, make_paragraph):
        paragraph = make_paragraph("Hel", "lo {{na", "me}}!")

        spans = index_runs(paragraph)

        assert [(s.start, s.end) for s in spans] == [(0, 3), (3, 10), (10, 15)]
        assert flatten(spans) == "Hello {{name}}!"

    def test_runs_without_text_are_not_indexed(self, make_paragraph):
        paragraph = make_paragraph("a", "b")
        runs = paragraph.findall("{http://schemas.openxmlformats.org/wordprocessingml/2006/main}r")
        # Turn the first run into a non-text run (e.g. a lone break)
        t = runs[0][-1]
        runs[0].remove(t)

        spans = index_runs(paragraph)

        assert len(spans) == 1
        assert spans[0].text == "b"
        assert (spans[0].start, spans[0].end) == (0, 1)


class TestTokenScanner:
    """Test token scanning across runs."""

    def test_find_across_runs(self, make_paragraph):
        paragraph = make_paragraph("Hel", "lo {{na", "me}}!")

        match = TokenScanner().find(paragraph, "name")

        assert match is not None
        assert (match.start, match.end) == (6, 14)
        assert match.text == "{{name}}"
        assert len(match.spans) == 3

    def test_find_returns_none_when_absent(self, make_paragraph):
        paragraph = make_paragraph("nothing to see")
        assert TokenScanner().find(paragraph, "name") is None

    def test_find_with_offset(self, make_paragraph):
        paragraph = make_paragraph("{{x}} and {{x}}")

        match = TokenScanner().find(paragraph, "x", offset=1)

        assert match.start == 10

    def test_find_reads_modifier(self, make_paragraph):
        paragraph = make_paragraph("{{logo:", "120}}")

        match = TokenScanner().find(paragraph, "{{logo}}")

        assert match.modifier == "120"
        assert match.name == "logo"

    def test_find_all_names(self):
        names = TokenScanner.find_all_names("{{a}} {{b:1}} {{a}} {{ c }}")
        assert names == ["a", "b", "c"]
