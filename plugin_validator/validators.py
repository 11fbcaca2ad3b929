"""Rule sets for the four plugin artifact kinds.

Every validator takes the raw file content and returns a fresh
:class:`ValidationResult`. Findings are data: nothing here raises for a bad
document.
"""

from __future__ import annotations

import json
import logging
from typing import Any

from .frontmatter import (
    extract_frontmatter,
    first_field_value,
    has_field,
    is_semver,
    is_valid_name,
)
from .models import Findings, ValidationResult

logger = logging.getLogger(__name__)

MAX_DESCRIPTION_LENGTH = 1024
MIN_DESCRIPTION_LENGTH = 20
MIN_COMMAND_LENGTH = 10

MISSING_FRONTMATTER = "Missing YAML frontmatter (must start with --- and end with ---)"
INVALID_NAME = "Invalid name: must be lowercase, alphanumeric with hyphens"


def _reject_constant(name: str) -> Any:
    raise ValueError(f"Unexpected token {name} is not valid JSON")


def _is_missing(value: Any) -> bool:
    """Absent, null, empty string, zero and false count as missing; empty arrays and objects do not."""
    return value is None or value is False or value == "" or value == 0


def _utf16_length(text: str) -> int:
    return len(text.encode("utf-16-le", errors="surrogatepass")) // 2


def validate_plugin_json(content: str) -> ValidationResult:
    """Validate a ``.claude-plugin/plugin.json`` manifest.

    Args:
        content: Raw JSON text of the manifest

    Returns:
        ValidationResult. A parse failure yields a single error and no
        further checks.
    """
    findings = Findings()

    try:
        data: Any = json.loads(content, parse_constant=_reject_constant)
    except ValueError as e:
        findings.error(f"Invalid JSON: {e}")
        return findings.result()
    except RecursionError:
        findings.error("Invalid JSON: nesting is too deep")
        return findings.result()

    if data is None:
        findings.error("Invalid JSON: cannot read field 'name' of null")
        return findings.result()

    if not isinstance(data, dict):
        # Arrays and scalars carry no fields
        data = {}

    # Required fields
    name = data.get("name")
    if _is_missing(name):
        findings.error("Missing required field: name")
    elif not is_valid_name(name):
        findings.error(INVALID_NAME)

    if _is_missing(data.get("description")):
        findings.error("Missing required field: description")

    version = data.get("version")
    if _is_missing(version):
        findings.error("Missing required field: version")
    elif not is_semver(version):
        findings.warn("Version should follow semantic versioning (e.g., 1.0.0)")

    author = data.get("author")
    if not isinstance(author, dict) or _is_missing(author.get("name")):
        findings.error("Missing required field: author.name")

    # Optional fields
    license_value = data.get("license")
    if not _is_missing(license_value) and not isinstance(license_value, str):
        findings.warn("License should be a string (SPDX identifier)")

    keywords = data.get("keywords")
    if not _is_missing(keywords) and not isinstance(keywords, list):
        findings.warn("Keywords should be an array")

    return findings.result()


def validate_skill_md(content: str) -> ValidationResult:
    """Validate a ``SKILL.md`` file: frontmatter with a kebab-case name and a description."""
    findings = Findings()

    frontmatter = extract_frontmatter(content)
    if frontmatter is None:
        findings.error(MISSING_FRONTMATTER)
        return findings.result()

    name = first_field_value(frontmatter, "name")
    if name is None:
        findings.error("Missing required frontmatter field: name")
    elif not is_valid_name(name.strip()):
        findings.error(INVALID_NAME)

    description = first_field_value(frontmatter, "description")
    if description is None:
        findings.error("Missing required frontmatter field: description")
    else:
        length = _utf16_length(description)
        if length > MAX_DESCRIPTION_LENGTH:
            findings.error(f"Description exceeds {MAX_DESCRIPTION_LENGTH} character limit")
        if length < MIN_DESCRIPTION_LENGTH:
            findings.warn("Description is very short - consider adding trigger phrases")

    return findings.result()


def validate_command_md(content: str) -> ValidationResult:
    """Validate a slash-command markdown file.

    Frontmatter is optional for commands, so only style warnings are produced.
    """
    findings = Findings()

    frontmatter = extract_frontmatter(content)
    if frontmatter is None:
        findings.warn("No frontmatter found - consider adding description and argument-hint")
    elif "\t" in frontmatter:
        findings.warn("YAML frontmatter contains tabs - use spaces")

    if len(content.strip()) < MIN_COMMAND_LENGTH:
        findings.warn("Command content is very short")

    return findings.result()


def validate_agent_md(content: str) -> ValidationResult:
    """Validate an agent definition: name and description required, tools and model recommended."""
    findings = Findings()

    frontmatter = extract_frontmatter(content)
    if frontmatter is None:
        findings.error(MISSING_FRONTMATTER)
        return findings.result()

    for required in ("name", "description"):
        if not has_field(frontmatter, required):
            findings.error(f"Missing required frontmatter field: {required}")

    if not has_field(frontmatter, "tools"):
        findings.warn("No tools specified - agent will inherit all tools from conversation")

    if not has_field(frontmatter, "model"):
        findings.warn("No model specified - defaults to sonnet")

    return findings.result()


# Artifact kind -> validator, shared by the scanner and the command line
VALIDATORS = {
    "plugin-json": validate_plugin_json,
    "skill": validate_skill_md,
    "command": validate_command_md,
    "agent": validate_agent_md,
}
