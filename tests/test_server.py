"""Tests for the MCP tool adapter.

Run with: pytest tests/test_server.py -v
"""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from mcp import types
from mcp.server import Server

from plugin_validator.config import Settings
from plugin_validator.server import (
    TOOLS,
    ToolDispatcher,
    ToolResponse,
    build_tool_handlers,
    create_dispatcher,
    create_server,
)

from .samples import VALID_SKILL


@pytest.fixture
def dispatcher() -> ToolDispatcher:
    return create_dispatcher()


class TestToolCatalog:
    """Tests for the tool definitions."""

    def test_six_tools(self) -> None:
        """Should expose every operation."""
        assert [tool.name for tool in TOOLS] == [
            "validate_plugin_json",
            "validate_skill_md",
            "validate_command_md",
            "validate_agent_md",
            "scan_plugin_structure",
            "generate_plugin_json",
        ]

    def test_handlers_match_catalog(self) -> None:
        """Should have a handler for each tool."""
        assert set(build_tool_handlers()) == {tool.name for tool in TOOLS}

    def test_required_arguments(self) -> None:
        """Should require content or pluginPath."""
        for tool in TOOLS:
            expected = "content" if tool.name.startswith("validate_") else "pluginPath"
            assert tool.inputSchema["required"] == [expected]


class TestDispatch:
    """Tests for ToolDispatcher.dispatch."""

    def test_validate_skill(self, dispatcher: ToolDispatcher) -> None:
        """Should return the validation result as indented JSON."""
        response = dispatcher.dispatch("validate_skill_md", {"content": VALID_SKILL})
        assert not response.is_error
        assert json.loads(response.text) == {"valid": True, "errors": [], "warnings": []}
        assert response.text.startswith('{\n  "valid"')

    def test_validate_plugin_json_parse_error(self, dispatcher: ToolDispatcher) -> None:
        """Should report parse errors as findings, not tool errors."""
        response = dispatcher.dispatch("validate_plugin_json", {"content": "{"})
        assert not response.is_error
        data = json.loads(response.text)
        assert data["valid"] is False
        assert data["errors"][0].startswith("Invalid JSON")

    def test_unknown_tool(self, dispatcher: ToolDispatcher) -> None:
        """Should flag unknown tools as errors."""
        response = dispatcher.dispatch("delete_everything", {})
        assert response == ToolResponse("Unknown tool: delete_everything", is_error=True)

    def test_missing_argument(self, dispatcher: ToolDispatcher) -> None:
        """Should reject calls that miss a required argument."""
        response = dispatcher.dispatch("validate_agent_md", {})
        assert response.is_error
        assert "content" in response.text

    def test_none_arguments(self, dispatcher: ToolDispatcher) -> None:
        """Should treat missing arguments like an empty object."""
        response = dispatcher.dispatch("scan_plugin_structure", None)
        assert response.is_error
        assert "pluginPath" in response.text

    def test_wrong_argument_type(self, dispatcher: ToolDispatcher) -> None:
        """Should reject non-string content."""
        response = dispatcher.dispatch("validate_command_md", {"content": 42})
        assert response.is_error

    def test_scan_missing_path(self, dispatcher: ToolDispatcher, tmp_path: Path) -> None:
        """Should return a path-not-found payload without scanning."""
        missing = str(tmp_path / "nope")
        response = dispatcher.dispatch("scan_plugin_structure", {"pluginPath": missing})
        assert json.loads(response.text) == {"error": f"Path not found: {missing}"}

    def test_generate_missing_path(self, dispatcher: ToolDispatcher, tmp_path: Path) -> None:
        """Should return a path-not-found payload for generation too."""
        missing = str(tmp_path / "nope")
        response = dispatcher.dispatch("generate_plugin_json", {"pluginPath": missing})
        assert json.loads(response.text) == {"error": f"Path not found: {missing}"}

    def test_scan(self, dispatcher: ToolDispatcher, plugin_dir: Path) -> None:
        """Should return the scan result as JSON."""
        response = dispatcher.dispatch("scan_plugin_structure", {"pluginPath": str(plugin_dir)})
        data = json.loads(response.text)
        assert data["hasPluginJson"] is True
        assert data["skills"][0]["name"] == "code-review"

    def test_generate(self, dispatcher: ToolDispatcher, plugin_dir: Path) -> None:
        """Should return the manifest text unchanged."""
        response = dispatcher.dispatch("generate_plugin_json", {"pluginPath": str(plugin_dir)})
        assert json.loads(response.text)["name"] == "sample-plugin"

    def test_handler_failure(self) -> None:
        """Should turn handler exceptions into error responses."""

        def explode(arguments: object) -> ToolResponse:
            raise RuntimeError("boom")

        dispatcher = ToolDispatcher({"validate_skill_md": explode}, TOOLS)
        response = dispatcher.dispatch("validate_skill_md", {"content": ""})
        assert response.is_error
        assert json.loads(response.text) == {"error": "boom"}

    def test_custom_handler_mapping(self) -> None:
        """Should only know the handlers it was built with."""
        dispatcher = ToolDispatcher({}, TOOLS)
        assert dispatcher.dispatch("validate_skill_md", {"content": ""}).is_error


class TestCreateServer:
    """Tests for MCP server wiring."""

    def test_creates_server(self) -> None:
        """Should build a named MCP server."""
        server = create_server(settings=Settings(server_name="test-validator"))
        assert isinstance(server, Server)
        assert server.name == "test-validator"

    def test_registers_handlers(self) -> None:
        """Should register tool listing and tool calls."""
        server = create_server()
        assert types.ListToolsRequest in server.request_handlers
        assert types.CallToolRequest in server.request_handlers

    async def test_list_tools(self) -> None:
        """Should list all six tools."""
        server = create_server()
        handler = server.request_handlers[types.ListToolsRequest]
        result = await handler(types.ListToolsRequest(method="tools/list"))
        assert [tool.name for tool in result.root.tools] == [tool.name for tool in TOOLS]
