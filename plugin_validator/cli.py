"""Command-line interface for the plugin validator.

CLI Options:
- Normal mode: Warnings are displayed but don't cause failure (exit 0)
- Use --strict flag to treat warnings as errors (exit 1, for CI/CD)

Usage:
    plugin-validator serve                          # MCP server on stdio
    plugin-validator scan ./my-plugin               # Structure summary
    plugin-validator scan ./my-plugin --strict      # Empty dirs fail too
    plugin-validator validate skill skills/x/SKILL.md
    plugin-validator generate ./my-plugin           # Suggested plugin.json

Exit codes:
    0 - All checks passed (warnings allowed in normal mode)
    1 - Validation errors found (or warnings in strict mode)
    2 - Path not found or unreadable
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from . import __version__
from .config import Settings
from .manifest import generate_plugin_json
from .models import ArtifactRef, PluginScanResult, ValidationResult
from .scanner import scan_plugin_structure
from .server import run_server
from .validators import VALIDATORS

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_BAD_PATH = 2

console = Console()
err_console = Console(stderr=True)


def configure_logging(settings: Settings, *, verbose: bool = False) -> None:
    """Send log records to stderr; stdout carries results and the MCP transport."""
    level = logging.DEBUG if verbose else settings.log_level_number
    logging.basicConfig(
        level=level,
        stream=sys.stderr,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def calculate_exit_code(errors: int, warnings: int, *, strict: bool = False) -> int:
    """Errors always fail; warnings fail only in strict mode."""
    if errors > 0 or (strict and warnings > 0):
        return EXIT_FAILED
    return EXIT_OK


def status_icon(valid: bool) -> str:
    return "[green]✓[/green]" if valid else "[red]✗[/red]"


def _artifact_table(title: str, refs: list[ArtifactRef]) -> Table:
    table = Table(title=title, show_header=True, header_style="bold cyan")
    table.add_column("Name", style="cyan", no_wrap=True)
    table.add_column("Valid", justify="center")
    table.add_column("Path", overflow="fold")
    for ref in refs:
        table.add_row(escape(ref.name), status_icon(ref.has_valid_frontmatter), escape(ref.path))
    return table


def render_scan(plugin_path: str, scan: PluginScanResult, *, strict: bool) -> int:
    """Print a scan summary and return the exit code."""
    console.print(f"\n[bold cyan]Scanning plugin structure: {escape(plugin_path)}[/bold cyan]\n")

    for title, refs in (
        ("Skills", scan.skills),
        ("Commands", scan.commands),
        ("Agents", scan.agents),
    ):
        if refs:
            console.print(_artifact_table(title, refs))
            console.print()

    markers = Table(title="Marker Files", show_header=True, header_style="bold cyan")
    markers.add_column("File", style="cyan")
    markers.add_column("Present", justify="center")
    markers.add_row(".claude-plugin/plugin.json", status_icon(scan.has_plugin_json))
    markers.add_row("hooks/hooks.json", status_icon(scan.has_hooks))
    markers.add_row(".mcp.json", status_icon(scan.has_mcp_config))
    console.print(markers)
    console.print()

    invalid = scan.invalid_artifacts
    if scan.issues or invalid:
        console.print("[bold red]Issues:[/bold red]\n")
        for issue in scan.issues:
            console.print(f"  [red]• {escape(issue)}[/red]")
        for ref in invalid:
            console.print(f"  [red]• {escape(ref.name)}: invalid frontmatter ({escape(ref.path)})[/red]")
        console.print()

    if scan.empty_dirs:
        warning_style = "red" if strict else "yellow"
        console.print(f"[bold {warning_style}]Empty directories:[/bold {warning_style}]\n")
        for directory in scan.empty_dirs:
            console.print(f"  [{warning_style}]• {directory}[/{warning_style}]")
        console.print()

    total_errors = len(scan.issues) + len(invalid)
    exit_code = calculate_exit_code(total_errors, len(scan.empty_dirs), strict=strict)
    _render_summary(exit_code, total_errors, len(scan.empty_dirs))
    return exit_code


def render_validation(file_path: Path, result: ValidationResult, *, strict: bool) -> int:
    """Print the findings for one artifact and return the exit code."""
    console.print(f"\n[bold cyan]Validating {escape(str(file_path))}[/bold cyan]\n")

    if result.errors:
        console.print("[bold red]Errors:[/bold red]")
        for error in result.errors:
            console.print(f"  [red]• {escape(error)}[/red]")
        console.print()

    if result.warnings:
        warning_style = "red" if strict else "yellow"
        console.print(f"[bold {warning_style}]Warnings:[/bold {warning_style}]")
        for warning in result.warnings:
            console.print(f"  [{warning_style}]• {escape(warning)}[/{warning_style}]")
        console.print()

    exit_code = calculate_exit_code(len(result.errors), len(result.warnings), strict=strict)
    _render_summary(exit_code, len(result.errors), len(result.warnings))
    return exit_code


def _render_summary(exit_code: int, total_errors: int, total_warnings: int) -> None:
    if exit_code != EXIT_OK:
        if total_errors == 0:
            message = (
                f"✗ Validation failed due to {total_warnings} warning(s) "
                "(warnings treated as errors in strict mode)"
            )
        else:
            message = f"✗ Validation failed with {total_errors} error(s)"
            if total_warnings > 0:
                message += f" and {total_warnings} warning(s)"
        console.print(Panel.fit(f"[bold red]{message}[/bold red]", border_style="red"))
    else:
        message = "✅ All checks passed!"
        if total_warnings > 0:
            message += f"\n{total_warnings} warning(s) found but not failing (normal mode)"
        console.print(Panel.fit(f"[bold green]{message}[/bold green]", border_style="green"))


def _require_path(path: str) -> bool:
    if not Path(path).exists():
        err_console.print(f"[red]Path not found: {escape(path)}[/red]")
        return False
    return True


def cmd_scan(args: argparse.Namespace) -> int:
    if not _require_path(args.plugin_path):
        return EXIT_BAD_PATH

    scan = scan_plugin_structure(args.plugin_path)
    if args.json:
        print(json.dumps(scan.to_dict(), indent=2, ensure_ascii=False))
        return calculate_exit_code(
            len(scan.issues) + len(scan.invalid_artifacts), len(scan.empty_dirs), strict=args.strict
        )
    return render_scan(args.plugin_path, scan, strict=args.strict)


def cmd_validate(args: argparse.Namespace) -> int:
    file_path = Path(args.file)
    try:
        content = file_path.read_text(encoding="utf-8", errors="replace")
    except FileNotFoundError:
        err_console.print(f"[red]Path not found: {escape(str(file_path))}[/red]")
        return EXIT_BAD_PATH
    except OSError as e:
        err_console.print(f"[red]Cannot read file {escape(str(file_path))}: {escape(str(e))}[/red]")
        return EXIT_BAD_PATH

    result = VALIDATORS[args.kind](content)
    if args.json:
        print(json.dumps(result.to_dict(), indent=2, ensure_ascii=False))
        return calculate_exit_code(len(result.errors), len(result.warnings), strict=args.strict)
    return render_validation(file_path, result, strict=args.strict)


def cmd_generate(args: argparse.Namespace) -> int:
    if not _require_path(args.plugin_path):
        return EXIT_BAD_PATH
    print(generate_plugin_json(args.plugin_path))
    return EXIT_OK


def cmd_serve(args: argparse.Namespace, settings: Settings) -> int:
    if args.name:
        settings.server_name = args.name
    asyncio.run(run_server(settings))
    return EXIT_OK


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="plugin-validator",
        description="Validate Claude Code plugin artifacts and scan plugin structure",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Exit codes:
  0 - Validation passed
  1 - Validation failed (errors found, or warnings in strict mode)
  2 - Path not found or unreadable
        """,
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")

    subparsers = parser.add_subparsers(dest="command", required=True)

    serve = subparsers.add_parser("serve", help="Run the MCP server on stdio")
    serve.add_argument("--name", help="Server name announced to clients")

    scan = subparsers.add_parser("scan", help="Scan a plugin directory")
    scan.add_argument("plugin_path", help="Path to the plugin directory")
    scan.add_argument("--json", action="store_true", help="Print the raw scan result as JSON")
    scan.add_argument(
        "--strict", action="store_true", help="Treat empty component directories as errors"
    )

    validate = subparsers.add_parser("validate", help="Validate a single artifact file")
    validate.add_argument("kind", choices=sorted(VALIDATORS), help="Artifact kind")
    validate.add_argument("file", help="Path to the artifact file")
    validate.add_argument("--json", action="store_true", help="Print the result as JSON")
    validate.add_argument(
        "--strict", action="store_true", help="Treat warnings as errors (useful for CI/CD)"
    )

    generate = subparsers.add_parser("generate", help="Suggest a plugin.json for a directory")
    generate.add_argument("plugin_path", help="Path to the plugin directory")

    return parser


def main(argv: list[str] | None = None) -> int:
    """Run the command line."""
    args = build_parser().parse_args(argv)
    settings = Settings.from_env()
    configure_logging(settings, verbose=args.verbose)

    if args.command == "serve":
        return cmd_serve(args, settings)
    if args.command == "scan":
        return cmd_scan(args)
    if args.command == "validate":
        return cmd_validate(args)
    return cmd_generate(args)
