"""Pytest configuration for plugin-validator tests."""

from __future__ import annotations

from pathlib import Path

import pytest

from .samples import VALID_AGENT, VALID_COMMAND, VALID_MANIFEST, VALID_SKILL, write


@pytest.fixture
def plugin_dir(tmp_path: Path) -> Path:
    """Create a complete plugin with one of every component."""
    root = tmp_path / "sample-plugin"
    write(root / ".claude-plugin" / "plugin.json", VALID_MANIFEST)
    write(root / "skills" / "code-review" / "SKILL.md", VALID_SKILL)
    write(root / "commands" / "deploy.md", VALID_COMMAND)
    write(root / "agents" / "reviewer.md", VALID_AGENT)
    write(root / "hooks" / "hooks.json", '{"hooks": {}}')
    write(root / ".mcp.json", '{"mcpServers": {}}')
    return root

@pytest.fixture
def empty_plugin_dir(tmp_path: Path) -> Path:
    """Create a plugin directory with nothing in it."""
    root = tmp_path / "empty-plugin"
    root.mkdir()
    return root
