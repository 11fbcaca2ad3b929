"""Suggest a plugin.json manifest from what a plugin directory contains."""

from __future__ import annotations

import json
import os
import re
from typing import Any

from .scanner import scan_plugin_structure

_SLUG_INVALID = re.compile(r"[^a-z0-9-]")

DEFAULT_VERSION = "1.0.0"
DEFAULT_LICENSE = "MIT"


def slugify_plugin_name(dir_name: str) -> str:
    """Lowercase a directory name and replace anything outside ``[a-z0-9-]`` with ``-``.

    A name starting with a digit or hyphen is returned as-is and will still
    fail the manifest naming rule.
    """
    return _SLUG_INVALID.sub("-", dir_name.lower())


def build_manifest(plugin_path: str | os.PathLike[str]) -> dict[str, Any]:
    """Build the manifest skeleton for a plugin directory.

    Component pointers are only included for categories the scan found
    entries in.
    """
    scan = scan_plugin_structure(plugin_path)
    dir_name = os.path.basename(os.path.normpath(os.fspath(plugin_path)))

    manifest: dict[str, Any] = {
        "name": slugify_plugin_name(dir_name),
        "version": DEFAULT_VERSION,
        "description": f"[TODO: Add description for {dir_name}]",
        "author": {
            "name": "[TODO: Add author name]",
        },
        "license": DEFAULT_LICENSE,
        "keywords": [],
    }

    if scan.skills:
        manifest["skills"] = "./skills/"
    if scan.commands:
        manifest["commands"] = "./commands/"
    if scan.agents:
        manifest["agents"] = "./agents/"

    return manifest


def generate_plugin_json(plugin_path: str | os.PathLike[str]) -> str:
    """Render the suggested manifest as indented JSON. Nothing is written to disk."""
    return json.dumps(build_manifest(plugin_path), indent=2, ensure_ascii=False)
