"""Validate Claude Code plugin artifacts and scan plugin directory structure."""

__version__ = "1.0.0"

from .frontmatter import extract_frontmatter, first_field_value, has_field
from .manifest import build_manifest, generate_plugin_json
from .models import ArtifactRef, PluginScanResult, ValidationResult
from .scanner import scan_plugin_structure
from .validators import (
    validate_agent_md,
    validate_command_md,
    validate_plugin_json,
    validate_skill_md,
)

__all__ = [
    "ArtifactRef",
    "PluginScanResult",
    "ValidationResult",
    "build_manifest",
    "extract_frontmatter",
    "first_field_value",
    "generate_plugin_json",
    "has_field",
    "scan_plugin_structure",
    "validate_agent_md",
    "validate_command_md",
    "validate_plugin_json",
    "validate_skill_md",
]
