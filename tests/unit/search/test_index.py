"""Unit tests for the in-memory inverted index."""

import pytest

from site_search.domain.model import IndexEntry
from site_search.search.index import CONTENT_FIELD, TITLE_FIELD, InvertedIndex, clean_entry


pytestmark = pytest.mark.unit


class TestInvertedIndex:
    """Test index construction."""

    def test_postings_per_field(self, sample_entries):
        index = InvertedIndex.build(sample_entries)

        assert index.doc_count == 4
        assert dict(index.postings[TITLE_FIELD]["guide"]) == {0: 1, 1: 1}
        assert dict(index.postings[CONTENT_FIELD]["log"]) == {1: 1, 3: 1}

    def test_default_boosts(self, sample_entries):
        index = InvertedIndex.build(sample_entries)
        assert dict(index.field_boosts) == {TITLE_FIELD: 10.0, CONTENT_FIELD: 1.0}

    def test_boost_override(self, sample_entries):
        index = InvertedIndex.build(sample_entries, field_boosts={TITLE_FIELD: 3.0})
        assert index.field_boosts[TITLE_FIELD] == 3.0
        assert index.field_boosts[CONTENT_FIELD] == 1.0

    def test_field_lengths(self):
        index = InvertedIndex.build([IndexEntry(title="One two", url="/a", content="x y z")])
        assert index.field_lengths[TITLE_FIELD][0] == 2
        assert index.field_lengths[CONTENT_FIELD][0] == 3

    def test_entries_are_cleaned(self):
        entry = IndexEntry(title="<b>Bold</b> title", url="/b", content="keep &lt;span&gt; this")

        index = InvertedIndex.build([entry])

        assert index.documents[0] == IndexEntry(title="Bold title", url="/b", content="keep this")
        assert "span" not in index.vocabulary

    def test_duplicate_urls_last_writer_wins_in_references(self):
        entries = [
            IndexEntry(title="First", url="/same", content="alpha"),
            IndexEntry(title="Second", url="/same", content="beta"),
        ]

        index = InvertedIndex.build(entries)

        assert index.reference("/same").title == "Second"
        assert dict(index.postings[CONTENT_FIELD]["alpha"]) == {0: 1}
        assert dict(index.postings[CONTENT_FIELD]["beta"]) == {1: 1}

    def test_vocabulary_is_sorted_and_unique(self, sample_entries):
        index = InvertedIndex.build(sample_entries)
        assert list(index.vocabulary) == sorted(set(index.vocabulary))

    def test_tokens_with_prefix(self, sample_entries):
        index = InvertedIndex.build(sample_entries)

        assert index.tokens_with_prefix("inst") == ["install", "installer"]
        assert index.tokens_with_prefix("zzz") == []
        assert index.tokens_with_prefix("") == []

    def test_index_is_read_only(self, sample_entries):
        index = InvertedIndex.build(sample_entries)

        with pytest.raises(TypeError):
            index.postings[TITLE_FIELD]["new"] = {}  # type: ignore[index]

    def test_empty_corpus(self):
        index = InvertedIndex.build([])
        assert index.doc_count == 0
        assert index.vocabulary == ()

    def test_clean_entry(self):
        cleaned = clean_entry(IndexEntry(title="  a   b ", url="/u", content="<p>c</p>"))
        assert cleaned == IndexEntry(title="a b", url="/u", content="c")
