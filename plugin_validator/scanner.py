"""Walk a plugin directory and build an inventory of its components.

Expected layout under the plugin root::

    .claude-plugin/plugin.json
    skills/<name>/SKILL.md
    commands/**/*.md
    agents/*.md
    hooks/hooks.json
    .mcp.json
"""

from __future__ import annotations

import logging
import os
from collections.abc import Callable
from pathlib import Path

from .models import ArtifactRef, PluginScanResult, ValidationResult
from .validators import validate_agent_md, validate_command_md, validate_skill_md

logger = logging.getLogger(__name__)

MARKDOWN_SUFFIX = ".md"
SKILL_FILENAME = "SKILL.md"
NAMESPACE_SEPARATOR = ":"


def scan_plugin_structure(plugin_path: str | os.PathLike[str]) -> PluginScanResult:
    """Inventory a plugin directory and collect structural issues.

    The plugin root is assumed to exist; every component directory is
    optional and checked for existence before it is listed.

    Args:
        plugin_path: Path to the plugin root

    Returns:
        PluginScanResult describing skills, commands, agents, marker files,
        empty component directories and issues.
    """
    plugin_dir = Path(plugin_path)
    result = PluginScanResult()

    result.has_plugin_json = (plugin_dir / ".claude-plugin" / "plugin.json").exists()
    if not result.has_plugin_json:
        result.issues.append("Missing .claude-plugin/plugin.json")

    _scan_skills(plugin_dir / "skills", result)

    commands_dir = plugin_dir / "commands"
    if commands_dir.exists():
        if not _scan_commands(commands_dir, "", result):
            result.empty_dirs.append("commands/")

    _scan_agents(plugin_dir / "agents", result)

    result.has_hooks = (plugin_dir / "hooks" / "hooks.json").exists()
    result.has_mcp_config = (plugin_dir / ".mcp.json").exists()

    logger.debug(
        "Scanned %s: %d skills, %d commands, %d agents, %d issues",
        plugin_dir,
        len(result.skills),
        len(result.commands),
        len(result.agents),
        len(result.issues),
    )
    return result


def _list_entries(directory: Path, result: PluginScanResult) -> list[Path]:
    """List a directory in traversal order, recording an issue if it cannot be read."""
    try:
        return list(directory.iterdir())
    except OSError as e:
        logger.warning("Cannot list %s: %s", directory, e)
        result.issues.append(f"Cannot read directory {directory}: {e.strerror or e}")
        return []


def _inspect(
    file_path: Path,
    name: str,
    validator: Callable[[str], ValidationResult],
    result: PluginScanResult,
) -> ArtifactRef:
    try:
        # Undecodable bytes become U+FFFD and are judged as content
        content = file_path.read_text(encoding="utf-8", errors="replace")
    except PermissionError:
        result.issues.append(f"Permission denied reading {file_path}")
        return ArtifactRef(name=name, path=str(file_path), has_valid_frontmatter=False)
    except OSError as e:
        result.issues.append(f"Cannot read file {file_path}: {e.strerror or e}")
        return ArtifactRef(name=name, path=str(file_path), has_valid_frontmatter=False)

    validation = validator(content)
    logger.debug("Validated %s (%s): valid=%s", name, file_path, validation.valid)
    return ArtifactRef(name=name, path=str(file_path), has_valid_frontmatter=validation.valid)


def _is_directory(entry: Path) -> bool:
    # Symlinks are never followed, so a link loop cannot recurse
    return not entry.is_symlink() and entry.is_dir()


def _is_markdown_file(entry: Path) -> bool:
    return not entry.is_symlink() and entry.is_file() and entry.name.endswith(MARKDOWN_SUFFIX)


def _scan_skills(skills_dir: Path, result: PluginScanResult) -> None:
    if not skills_dir.exists():
        return

    for entry in _list_entries(skills_dir, result):
        if _is_directory(entry):
            skill_md = entry / SKILL_FILENAME
            if skill_md.exists():
                result.skills.append(_inspect(skill_md, entry.name, validate_skill_md, result))
            else:
                result.issues.append(f"Skill directory {entry.name} missing {SKILL_FILENAME} file")
        elif _is_markdown_file(entry):
            result.issues.append(
                f"Flat skill file found: skills/{entry.name} - "
                f"should be skills/{entry.stem}/{SKILL_FILENAME}"
            )


def _scan_commands(directory: Path, prefix: str, result: PluginScanResult) -> bool:
    """Record every command file under ``directory``, namespacing by subdirectory.

    Returns:
        True when ``directory`` itself holds at least one command file.
        Files in nested directories do not count.
    """
    has_content = False

    for entry in _list_entries(directory, result):
        if _is_directory(entry):
            namespace = f"{prefix}{NAMESPACE_SEPARATOR}{entry.name}" if prefix else entry.name
            _scan_commands(entry, namespace, result)
        elif _is_markdown_file(entry):
            has_content = True
            name = f"{prefix}{NAMESPACE_SEPARATOR}{entry.stem}" if prefix else entry.stem
            result.commands.append(_inspect(entry, name, validate_command_md, result))

    return has_content


def _scan_agents(agents_dir: Path, result: PluginScanResult) -> None:
    if not agents_dir.exists():
        return

    has_content = False
    for entry in _list_entries(agents_dir, result):
        if _is_markdown_file(entry):
            has_content = True
            result.agents.append(_inspect(entry, entry.stem, validate_agent_md, result))

    if not has_content:
        result.empty_dirs.append("agents/")
