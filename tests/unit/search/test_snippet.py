"""Unit tests for escaping, highlighting and snippet windows."""

import pytest

from site_search.domain.model import IndexEntry
from site_search.domain.search import RenderedHit, SearchHit
from site_search.search.snippet import (
    escape_html,
    find_first_match,
    highlight,
    make_snippet,
    present_hits,
    render_results_html,
)


pytestmark = pytest.mark.unit


class TestEscapeHtml:
    def test_escapes_all_special_characters(self):
        assert escape_html("<a href=\"x\">Tom & Jerry's</a>") == (
            "&lt;a href=&quot;x&quot;&gt;Tom &amp; Jerry&#39;s&lt;/a&gt;"
        )

    def test_none_is_empty(self):
        assert escape_html(None) == ""


class TestHighlight:
    def test_wraps_case_insensitive_matches(self):
        assert highlight("Install the installer", ["install"]) == (
            "<mark>Install</mark> the <mark>install</mark>er"
        )

    def test_escapes_before_highlighting(self):
        result = highlight("<script>alert(1)</script>", ["script"])

        assert result == "&lt;<mark>script</mark>&gt;alert(1)&lt;/<mark>script</mark>&gt;"
        assert "<script>" not in result

    def test_terms_are_literal(self):
        assert highlight("use c++ now", ["c++"]) == "use <mark>c++</mark> now"

    def test_multiple_terms(self):
        assert highlight("alpha beta gamma", ["gamma", "alpha"]) == "<mark>alpha</mark> beta <mark>gamma</mark>"

    def test_no_terms_only_escapes(self):
        assert highlight("a < b", []) == "a &lt; b"


class TestFindFirstMatch:
    def test_earliest_term_wins(self):
        assert find_first_match("one two three", ["three", "two"]) == (4, 3)

    def test_no_match(self):
        assert find_first_match("one", ["zzz"]) == (-1, 0)

    def test_positions_index_the_original_text(self):
        """Test a character that lower-cases to two does not shift the match."""
        text = "\u0130stanbul needle"

        pos, length = find_first_match(text, ["needle"])

        assert (pos, length) == (9, 6)
        assert text[pos : pos + length] == "needle"

    def test_case_insensitive(self):
        assert find_first_match("Read the README", ["readme"]) == (9, 6)


class TestMakeSnippet:
    """Test the centered window around the first match."""

    def test_short_text_without_match(self):
        assert make_snippet("short & sweet", ["zzz"]) == "short &amp; sweet"

    def test_long_text_without_match_is_cut(self):
        assert make_snippet("x" * 200, ["zzz"]) == "x" * 180 + "…"

    def test_no_match_is_not_highlighted(self):
        assert "<mark>" not in make_snippet("needle " * 40, [])

    def test_match_near_start_has_only_trailing_ellipsis(self):
        text = "needle " + "word " * 100

        snippet = make_snippet(text, ["needle"])

        assert snippet.startswith("<mark>needle</mark> word")
        assert snippet.endswith("…")
        assert "…" not in snippet[:-1]

    def test_window_is_centered_on_match(self):
        text = "alpha " * 40 + "needle " + "omega " * 40

        snippet = make_snippet(text, ["needle"])

        assert snippet.startswith("… alpha")
        assert snippet.endswith("omega …")
        assert "<mark>needle</mark>" in snippet

    def test_match_inside_single_long_word(self):
        text = "A" * 200 + "needle" + "B" * 200

        snippet = make_snippet(text, ["needle"])

        assert snippet == "…" + "A" * 90 + "<mark>needle</mark>" + "B" * 84 + "…"
        assert len(snippet.replace("<mark>", "").replace("</mark>", "").strip("…")) <= 180

    def test_window_length_is_bounded(self):
        text = " ".join(f"word{i}" for i in range(200)) + " needle " + " ".join(f"tail{i}" for i in range(200))

        snippet = make_snippet(text, ["needle"], max_chars=60)
        plain = snippet.replace("<mark>", "").replace("</mark>", "").replace("…", "")

        assert len(plain) <= 60
        assert "needle" in plain

    def test_content_is_cleaned_and_escaped(self):
        snippet = make_snippet("Use <b>bold</b> &lt;tag&gt; and a & b for needle", ["needle"])
        assert snippet == "Use bold and a &amp; b for <mark>needle</mark>"


class TestPresentation:
    """Test rendering of hits into markup."""

    def test_present_hits(self):
        references = {"/a": IndexEntry(title="Install <Guide>", url="/a", content="Run install now")}

        rendered = present_hits([SearchHit(ref="/a", score=2.5)], references, ["install"])

        assert rendered == [
            RenderedHit(
                url="/a",
                title_html="<mark>Install</mark> &lt;Guide&gt;",
                snippet_html="Run <mark>install</mark> now",
                score=2.5,
            )
        ]

    def test_present_hits_with_unknown_reference(self):
        rendered = present_hits([SearchHit(ref="/gone", score=1.0)], {}, ["x"])

        assert rendered[0].url == "/gone"
        assert rendered[0].title_html == "/gone"
        assert rendered[0].snippet_html == ""

    def test_render_results(self):
        hit = RenderedHit(url="/a?x=1&y=2", title_html="<mark>A</mark>", snippet_html="s", score=1.0)

        markup = render_results_html([hit, hit])

        assert markup.count('<div class="search-hit">') == 2
        assert 'href="/a?x=1&amp;y=2"' in markup
        assert "<span><mark>A</mark></span>" in markup

    def test_render_nothing_found(self):
        assert render_results_html([]) == "<div>Nothing found.</div>"
