"""
Search index and query engine package.

This package provides a pure-Python, in-memory search stack:
- analyzers: Tokenizers and filters (lowercase only, no stemming)
- fuzzy: Bounded edit distance over the index vocabulary
- stats: Field length statistics, IDF and BM25 term weights
- index: Inverted index built from the corpus artifact
- query: Wildcard + fuzzy query engine with result deduplication
- snippet: HTML escaping, highlighting and centered snippets
"""
