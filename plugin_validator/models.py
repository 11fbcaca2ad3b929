"""Result records returned by the validators and the structure scanner."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class ValidationResult:
    """Verdict for one artifact: errors make it invalid, warnings never do."""

    errors: tuple[str, ...] = ()
    warnings: tuple[str, ...] = ()

    @property
    def valid(self) -> bool:
        return not self.errors

    def to_dict(self) -> dict[str, Any]:
        return {
            "valid": self.valid,
            "errors": list(self.errors),
            "warnings": list(self.warnings),
        }


@dataclass
class Findings:
    """Mutable collector used while a single validator call runs."""

    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    def error(self, message: str) -> None:
        self.errors.append(message)

    def warn(self, message: str) -> None:
        self.warnings.append(message)

    def result(self) -> ValidationResult:
        return ValidationResult(errors=tuple(self.errors), warnings=tuple(self.warnings))


@dataclass(frozen=True)
class ArtifactRef:
    """A discovered skill, command or agent file and whether it validated cleanly."""

    name: str
    path: str
    has_valid_frontmatter: bool

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "path": self.path,
            "hasValidFrontmatter": self.has_valid_frontmatter,
        }


@dataclass
class PluginScanResult:
    """Inventory of a plugin directory plus the structural issues found in it.

    Built empty and filled in by a single scan; callers treat the returned
    value as read-only.
    """

    skills: list[ArtifactRef] = field(default_factory=list)
    commands: list[ArtifactRef] = field(default_factory=list)
    agents: list[ArtifactRef] = field(default_factory=list)
    has_plugin_json: bool = False
    has_hooks: bool = False
    has_mcp_config: bool = False
    empty_dirs: list[str] = field(default_factory=list)
    issues: list[str] = field(default_factory=list)

    @property
    def invalid_artifacts(self) -> list[ArtifactRef]:
        return [
            ref
            for ref in (*self.skills, *self.commands, *self.agents)
            if not ref.has_valid_frontmatter
        ]

    def to_dict(self) -> dict[str, Any]:
        """Encode with the wire key names, in the order callers compare against."""
        return {
            "skills": [ref.to_dict() for ref in self.skills],
            "commands": [ref.to_dict() for ref in self.commands],
            "agents": [ref.to_dict() for ref in self.agents],
            "hasPluginJson": self.has_plugin_json,
            "hasHooks": self.has_hooks,
            "hasMcpConfig": self.has_mcp_config,
            "emptyDirs": list(self.empty_dirs),
            "issues": list(self.issues),
        }
