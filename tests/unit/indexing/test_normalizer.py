"""Unit tests for markdown to plain text normalization."""

import pytest

from site_search.indexing.normalizer import markdown_to_text


pytestmark = pytest.mark.unit


class TestMarkdownToText:
    """Test each rewrite and their ordering."""

    def test_backtick_fence_is_removed(self):
        markdown = "before\n```python\nprint('x')\n```\nafter\n"
        assert markdown_to_text(markdown) == "before\nafter"

    def test_tilde_fence_is_removed(self):
        markdown = "before\n~~~\nsecret code\n~~~\nafter"
        assert markdown_to_text(markdown) == "before\nafter"

    def test_inline_code_is_unwrapped(self):
        assert markdown_to_text("run `make build` now") == "run make build now"

    def test_inline_code_unwrapped_before_emphasis_stripping(self):
        """Test underscores inside inline code are stripped by the emphasis pass."""
        assert markdown_to_text("use `snake_case` names") == "use snakecase names"

    def test_image_becomes_alt_text(self):
        assert markdown_to_text("see ![diagram](img/a.png) here") == "see diagram here"

    def test_link_becomes_text(self):
        assert markdown_to_text("read the [guide](/guide/) first") == "read the guide first"

    def test_html_tags_become_spaces(self):
        assert markdown_to_text("a<br/>b <span class='x'>c</span>") == "a b c"

    def test_heading_markers_are_stripped(self):
        assert markdown_to_text("### Details\ntext") == "Details\ntext"

    def test_list_markers_are_stripped(self):
        markdown = "- one\n* two\n+ three\n1. four\n10. five"
        assert markdown_to_text(markdown) == "one\ntwo\nthree\nfour\nfive"

    def test_emphasis_characters_are_removed_everywhere(self):
        assert markdown_to_text("**bold** _it_ ~~gone~~") == "bold it gone"

    def test_block_quote_markers_are_stripped(self):
        assert markdown_to_text("> quoted\n>also") == "quoted\nalso"

    def test_whitespace_is_collapsed(self):
        markdown = "a \t  b\r\n\r\n\r\nc"
        assert markdown_to_text(markdown) == "a b\nc"

    def test_unbalanced_syntax_is_lenient(self):
        """Test that malformed markup leaves stray punctuation but never fails."""
        assert markdown_to_text("[broken](link and ```open fence") == "[broken](link and `open fence"

    def test_empty_input(self):
        assert markdown_to_text("") == ""

    def test_plain_text_is_unchanged(self):
        """Test normalizing text without markup only collapses whitespace."""
        plain = "Plain sentence with words and numbers 42.\nSecond line here."
        assert markdown_to_text(plain) == plain
        assert markdown_to_text(markdown_to_text(plain)) == plain

    def test_section_with_only_a_fence_is_empty(self):
        assert markdown_to_text("\n```js\nconst x = 1;\n```\n\n") == ""
