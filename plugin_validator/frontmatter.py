"""Frontmatter extraction and single-line field matching for markdown artifacts.

Frontmatter is matched with patterns rather than a YAML parser: only the
``key: value`` lines the validators care about are inspected, and the rest of
the header may be malformed without affecting the result.
"""

from __future__ import annotations

import re

# Header must open on the very first line and close on the first later line
# that is exactly "---".
FRONTMATTER_PATTERN = re.compile(r"\A---\n(.*?)\n---(?=\r?\n|\Z)", re.DOTALL)

# Plugin and skill identifiers: lowercase, digits and hyphens, starting with a letter
NAME_PATTERN = re.compile(r"[a-z][a-z0-9-]*")

SEMVER_PATTERN = re.compile(r"[0-9]+\.[0-9]+\.[0-9]+(-[a-z0-9.]+)?")

_LINE_BREAKS = "\n\r\u2028\u2029"


def extract_frontmatter(content: str) -> str | None:
    """Return the header text between the opening and closing ``---`` lines.

    Args:
        content: Full text of a markdown file

    Returns:
        Header text (possibly empty), or None when the text does not start
        with a frontmatter block.
    """
    match = FRONTMATTER_PATTERN.match(content)
    if match is None:
        return None
    return match.group(1)


def _field_pattern(key: str) -> re.Pattern[str]:
    return re.compile(
        rf"(?:^|(?<=[{_LINE_BREAKS}])){re.escape(key)}:\s*([^{_LINE_BREAKS}]+)(?=[{_LINE_BREAKS}]|\Z)"
    )


def first_field_value(frontmatter: str, key: str) -> str | None:
    """Return the raw value of the first ``key: value`` line, or None."""
    match = _field_pattern(key).search(frontmatter)
    if match is None:
        return None
    return match.group(1)


def has_field(frontmatter: str, key: str) -> bool:
    """Check whether any header line carries a non-empty ``key:`` field."""
    return first_field_value(frontmatter, key) is not None


def is_valid_name(value: object) -> bool:
    """Check a plugin or skill name against the kebab-case naming rule."""
    return isinstance(value, str) and NAME_PATTERN.fullmatch(value) is not None


def is_semver(value: object) -> bool:
    return isinstance(value, str) and SEMVER_PATTERN.fullmatch(value) is not None
