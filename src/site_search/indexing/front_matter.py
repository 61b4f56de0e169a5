"""YAML front matter utilities for markdown pages.

Parses front matter metadata in site sources.
Uses Jekyll-style '---' delimiters to separate YAML from the markdown body.

Example page with front matter:
    ---
    title: Installation Guide
    permalink: /guide/install/
    search: false
    ---
    # Install

    Download the archive...
"""

import re
from typing import Any

import yaml


DELIMITER = "---"

_FRONT_MATTER_PATTERN = re.compile(
    rf"\A{re.escape(DELIMITER)}[ \t]*\r?\n(.*?)^{re.escape(DELIMITER)}[ \t]*(?:\r?\n|\Z)",
    re.DOTALL | re.MULTILINE,
)


def parse_front_matter(content: str) -> tuple[dict[str, Any], str]:
    """Parse YAML front matter from markdown content.

    Args:
        content: Full page source including front matter

    Returns:
        Tuple of (front_matter_dict, markdown_content)
        If no front matter found, returns (empty dict, original content)

    Example:
        >>> content = "---\\ntitle: Guide\\n---\\n# Content"
        >>> metadata, markdown = parse_front_matter(content)
        >>> metadata["title"]
        'Guide'
        >>> markdown
        '# Content'
    """
    match = _FRONT_MATTER_PATTERN.match(content)
    if not match:
        return {}, content

    yaml_text = match.group(1)
    markdown_content = content[match.end() :]

    try:
        metadata = yaml.safe_load(yaml_text) or {}
    except yaml.YAMLError:
        # Invalid YAML - keep the page, lose the metadata
        return {}, content

    if not isinstance(metadata, dict):
        return {}, content

    return metadata, markdown_content

