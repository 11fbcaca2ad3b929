"""Sample artifact contents shared by the tests."""

from __future__ import annotations

from pathlib import Path

VALID_SKILL = """---
name: code-review
description: Review code changes for bugs, style issues and missing tests
---

# Code Review
"""

VALID_COMMAND = """---
description: Deploy the current branch
argument-hint: [environment]
---

Deploy $ARGUMENTS to the target environment.
"""

VALID_AGENT = """---
name: reviewer
description: Reviews pull requests
tools: Read, Grep
model: sonnet
---

You review pull requests.
"""

VALID_MANIFEST = """{
  "name": "sample-plugin",
  "version": "1.2.3",
  "description": "A sample plugin",
  "author": {"name": "Jane Doe"},
  "license": "MIT",
  "keywords": ["sample"]
}
"""


def write(path: Path, content: str) -> Path:
    """Write a file, creating parent directories."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    return path
