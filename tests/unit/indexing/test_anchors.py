"""Unit tests for heading anchor generation."""

import pytest

from site_search.indexing.anchors import heading_id


pytestmark = pytest.mark.unit


class TestHeadingId:
    """Test heading ids stay compatible with the page renderer."""

    @pytest.mark.parametrize(
        ("heading", "expected"),
        [
            ("Getting Started", "getting-started"),
            ("Hello   World", "hello---world"),
            ("  Padded Heading  ", "padded-heading"),
            ("What's new in 2.0?", "whats-new-in-20"),
            ("snake_case & kebab-case", "snake_case--kebab-case"),
            ("Café Crème", "café-crème"),
            ("Привіт Світ", "привіт-світ"),
            ("C++ / C#", "c--c"),
            ("हिंदी x", "हिंदी-x"),
            ("Ⅻ Roman", "ⅻ-roman"),
            ("مُقَدِّمَة", "مُقَدِّمَة"),
            ("", ""),
        ],
    )
    def test_known_headings(self, heading, expected):
        assert heading_id(heading) == expected

    def test_runs_of_spaces_are_not_collapsed(self):
        """Test each space becomes its own hyphen."""
        assert heading_id("a  b") == "a--b"

    def test_tabs_survive_inside(self):
        """Test that only spaces are converted to hyphens."""
        assert heading_id("a\tb") == "a\tb"

    def test_removed_characters_leave_spaces_behind(self):
        """Test removal happens before trimming and hyphenation."""
        assert heading_id("! Leading bang") == "leading-bang"

    def test_deterministic(self):
        assert heading_id("Configure the   Daemon") == heading_id("Configure the   Daemon")

    def test_combining_vowel_signs_are_kept(self):
        """Test Devanagari vowel signs survive alongside their base letters."""
        assert heading_id("हिंदी") == "हिंदी"

    def test_non_ascii_whitespace_is_dropped(self):
        assert heading_id("a\u00a0b") == "ab"
