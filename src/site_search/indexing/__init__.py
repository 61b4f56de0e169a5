"""
Offline indexing pipeline.

- segmenter: split a page into H1/H2 sections
- anchors: heading ids compatible with the page renderer
- normalizer: markdown/HTML to plain text
- sources: page discovery and front matter
- corpus: build and (de)serialize the corpus artifact
"""
