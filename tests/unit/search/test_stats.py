"""Unit tests for scoring statistics."""

import pytest

from site_search.search.stats import calculate_idf, compute_field_length_stats, term_weight


pytestmark = pytest.mark.unit


class TestIdf:
    def test_rare_terms_weigh_more(self):
        assert calculate_idf(1, 100) > calculate_idf(50, 100)

    def test_ubiquitous_terms_stay_positive(self):
        assert calculate_idf(10, 10) > 0

    def test_empty_corpus(self):
        assert calculate_idf(0, 0) == 0.0


class TestTermWeight:
    def test_zero_frequency(self):
        assert term_weight(0, 10, 10.0) == 0.0

    def test_saturates(self):
        low = term_weight(1, 10, 10.0)
        high = term_weight(100, 10, 10.0)
        assert low < high < 2.2

    def test_shorter_fields_weigh_more(self):
        assert term_weight(1, 2, 10.0) > term_weight(1, 20, 10.0)

    def test_average_length_document(self):
        assert term_weight(1, 10, 10.0) == pytest.approx(1.0)


class TestFieldLengthStats:
    def test_average(self):
        stats = compute_field_length_stats({"title": {0: 2, 1: 4}, "content": {}})
        assert stats["title"].average_length == 3.0
        assert stats["content"].average_length == 0.0
