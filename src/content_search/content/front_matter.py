"""YAML front matter utilities for Markdown/MDX content files.

Content files open with a YAML block fenced by ``---`` lines::

    ---
    slug: what-is-bitcoin
    title: What is Bitcoin?
    summary: A digital currency without banks.
    tags: [basics, currency]
    topic: basics
    level: beginner
    type: qa
    lastUpdated: 2024-01-15
    ---
    Bitcoin is ...
"""

import re
from typing import Any

import yaml


DELIMITER = "---"

_FRONT_MATTER_PATTERN = re.compile(
    rf"^\ufeff?{re.escape(DELIMITER)}[ \t]*\r?\n(.*?)\r?\n{re.escape(DELIMITER)}[ \t]*(?:\r?\n|$)",
    re.DOTALL,
)


def parse_front_matter(content: str) -> tuple[dict[str, Any], str]:
    """Parse YAML front matter from a content file.

    Args:
        content: Full file content including front matter

    Returns:
        Tuple of (front_matter_dict, body). If no front matter is found, or it
        is not a valid YAML mapping, returns (empty dict, original content).

    Example:
        >>> metadata, body = parse_front_matter("---\\nslug: intro\\n---\\n# Intro")
        >>> metadata["slug"]
        'intro'
        >>> body
        '# Intro'
    """
    match = _FRONT_MATTER_PATTERN.match(content)
    if not match:
        return {}, content

    try:
        metadata = yaml.safe_load(match.group(1)) or {}
    except yaml.YAMLError:
        return {}, content

    if not isinstance(metadata, dict):
        return {}, content

    return metadata, content[match.end() :]
