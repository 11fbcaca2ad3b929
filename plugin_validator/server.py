"""MCP server exposing the plugin validators as tools.

The tool handlers are plain functions collected into an explicit name ->
handler mapping; :class:`ToolDispatcher` checks arguments against each tool's
input schema and turns every outcome into JSON text. ``create_server`` wires a
dispatcher into an MCP stdio server.
"""

from __future__ import annotations

import json
import logging
import os
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass
from typing import Any

from jsonschema import Draft7Validator
from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.types import TextContent, Tool

from . import __version__
from .config import Settings
from .manifest import generate_plugin_json
from .models import ValidationResult
from .scanner import scan_plugin_structure
from .validators import (
    validate_agent_md,
    validate_command_md,
    validate_plugin_json,
    validate_skill_md,
)

logger = logging.getLogger(__name__)


def _content_schema(description: str) -> dict[str, Any]:
    return {
        "type": "object",
        "properties": {
            "content": {
                "type": "string",
                "description": description,
            },
        },
        "required": ["content"],
    }


_PLUGIN_PATH_SCHEMA: dict[str, Any] = {
    "type": "object",
    "properties": {
        "pluginPath": {
            "type": "string",
            "description": "Absolute path to the plugin directory",
        },
    },
    "required": ["pluginPath"],
}

TOOLS: list[Tool] = [
    Tool(
        name="validate_plugin_json",
        description="Validate a plugin.json manifest file content against Claude Code requirements",
        inputSchema=_content_schema("The JSON content of the plugin.json file"),
    ),
    Tool(
        name="validate_skill_md",
        description="Validate a SKILL.md file content for proper frontmatter and structure",
        inputSchema=_content_schema("The content of the SKILL.md file"),
    ),
    Tool(
        name="validate_command_md",
        description="Validate a command markdown file for proper structure",
        inputSchema=_content_schema("The content of the command .md file"),
    ),
    Tool(
        name="validate_agent_md",
        description="Validate an agent markdown file for required frontmatter fields",
        inputSchema=_content_schema("The content of the agent .md file"),
    ),
    Tool(
        name="scan_plugin_structure",
        description="Scan a plugin directory and return its structure and any issues found",
        inputSchema=_PLUGIN_PATH_SCHEMA,
    ),
    Tool(
        name="generate_plugin_json",
        description=(
            "Generate a plugin.json manifest based on discovered components "
            "in a plugin directory"
        ),
        inputSchema=_PLUGIN_PATH_SCHEMA,
    ),
]


@dataclass(frozen=True)
class ToolResponse:
    """Text payload returned to the MCP client."""

    text: str
    is_error: bool = False


ToolHandler = Callable[[Mapping[str, Any]], ToolResponse]


class ToolCallError(Exception):
    """Raised inside the MCP handler so the SDK reports an error-flagged result."""


def _to_json(data: Any) -> str:
    return json.dumps(data, indent=2, ensure_ascii=False)


def _content_tool(validator: Callable[[str], ValidationResult]) -> ToolHandler:
    def handler(arguments: Mapping[str, Any]) -> ToolResponse:
        return ToolResponse(_to_json(validator(arguments["content"]).to_dict()))

    return handler


def _path_tool(render: Callable[[str], str]) -> ToolHandler:
    """Wrap a path-based operation; a missing path short-circuits with an error payload."""

    def handler(arguments: Mapping[str, Any]) -> ToolResponse:
        plugin_path = arguments["pluginPath"]
        if not os.path.exists(plugin_path):
            return ToolResponse(json.dumps({"error": f"Path not found: {plugin_path}"}))
        return ToolResponse(render(plugin_path))

    return handler


def build_tool_handlers() -> dict[str, ToolHandler]:
    """Map every tool name to its handler."""
    return {
        "validate_plugin_json": _content_tool(validate_plugin_json),
        "validate_skill_md": _content_tool(validate_skill_md),
        "validate_command_md": _content_tool(validate_command_md),
        "validate_agent_md": _content_tool(validate_agent_md),
        "scan_plugin_structure": _path_tool(
            lambda plugin_path: _to_json(scan_plugin_structure(plugin_path).to_dict())
        ),
        "generate_plugin_json": _path_tool(generate_plugin_json),
    }


class ToolDispatcher:
    """Route tool calls by name to handlers after checking their arguments."""

    def __init__(self, handlers: Mapping[str, ToolHandler], tools: Iterable[Tool]) -> None:
        self._handlers = dict(handlers)
        self._tools = list(tools)
        self._argument_validators = {
            tool.name: Draft7Validator(tool.inputSchema) for tool in self._tools
        }

    @property
    def tools(self) -> list[Tool]:
        return list(self._tools)

    def dispatch(self, name: str, arguments: Mapping[str, Any] | None) -> ToolResponse:
        """Run one tool call.

        Args:
            name: Tool name
            arguments: Tool arguments as sent by the client

        Returns:
            ToolResponse; unknown tools, bad arguments and handler failures
            come back with ``is_error`` set.
        """
        handler = self._handlers.get(name)
        if handler is None:
            return ToolResponse(f"Unknown tool: {name}", is_error=True)

        arguments = arguments or {}
        validator = self._argument_validators.get(name)
        if validator is not None:
            problems = [error.message for error in validator.iter_errors(arguments)]
            if problems:
                return ToolResponse(
                    f"Invalid arguments for {name}: {'; '.join(problems)}", is_error=True
                )

        try:
            return handler(arguments)
        except Exception as e:
            logger.exception("Tool %s failed", name)
            return ToolResponse(json.dumps({"error": str(e)}), is_error=True)


def create_dispatcher() -> ToolDispatcher:
    return ToolDispatcher(build_tool_handlers(), TOOLS)


def create_server(
    dispatcher: ToolDispatcher | None = None, settings: Settings | None = None
) -> Server:
    """Create and configure the MCP plugin validator server.

    Returns:
        Configured MCP Server instance
    """
    dispatcher = dispatcher or create_dispatcher()
    settings = settings or Settings.from_env()
    server = Server(settings.server_name, version=__version__)

    @server.list_tools()
    async def list_tools() -> list[Tool]:
        """List available tools."""
        return dispatcher.tools

    @server.call_tool()
    async def call_tool(name: str, arguments: dict[str, Any]) -> list[TextContent]:
        """Handle tool calls."""
        response = dispatcher.dispatch(name, arguments)
        if response.is_error:
            raise ToolCallError(response.text)
        return [TextContent(type="text", text=response.text)]

    return server


async def run_server(settings: Settings | None = None) -> None:
    """Run the MCP server on stdio."""
    server = create_server(settings=settings)
    async with stdio_server() as (read_stream, write_stream):
        logger.info("Plugin Validator MCP Server running on stdio")
        await server.run(read_stream, write_stream, server.create_initialization_options())
