"""Main Click CLI entry point for the sequential thinking server.

Entry point registered in pyproject.toml::

    [project.scripts]
    mcp-server-sequential-thinking = "sequential_thinking_mcp.cli.main:cli"

Usage examples::

    mcp-server-sequential-thinking              # same as ``serve``
    mcp-server-sequential-thinking serve --log-level DEBUG
    mcp-server-sequential-thinking schema --json-output
    mcp-server-sequential-thinking --version
"""

from __future__ import annotations

import json
import sys
from typing import Optional

import click

from sequential_thinking_mcp import __version__


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="sequential-thinking-mcp")
@click.pass_context
def cli(ctx: click.Context) -> None:
    """Sequential Thinking -- an MCP tool for reflective, branchable thought chains."""
    if ctx.invoked_subcommand is None:
        ctx.invoke(serve)


@cli.command()
@click.option(
    "--log-level",
    type=click.Choice(
        ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"], case_sensitive=False
    ),
    default=None,
    help="Override the log level (default: SEQUENTIAL_THINKING_LOG_LEVEL or INFO).",
)
def serve(log_level: Optional[str]) -> None:
    """Run the MCP server over stdio.

    Thought rendering goes to stderr and can be turned off with
    DISABLE_THOUGHT_LOGGING=true.
    """
    from sequential_thinking_mcp.config import ThinkingConfig
    from sequential_thinking_mcp.mcp.server import run_stdio

    try:
        overrides = {"log_level": log_level} if log_level else {}
        run_stdio(ThinkingConfig.load(**overrides))
    except Exception as exc:
        click.secho(f"Fatal error running server: {exc}", fg="red", err=True)
        sys.exit(1)


@cli.command()
@click.option(
    "--json-output",
    "output_json",
    is_flag=True,
    default=False,
    help="Output the tool definition as JSON instead of human-readable text.",
)
def schema(output_json: bool) -> None:
    """Show the advertised ``sequentialthinking`` tool definition."""
    from sequential_thinking_mcp.mcp.schema import tool_definition

    definition = tool_definition()

    if output_json:
        click.echo(json.dumps(definition, indent=2))
        return

    input_schema = definition["inputSchema"]
    required = set(input_schema["required"])

    click.secho(f"Tool: {definition['name']}", bold=True)
    click.echo("")
    click.secho("Parameters:", bold=True)
    for name, prop in input_schema["properties"].items():
        marker = "*" if name in required else " "
        type_label = prop["type"]
        if "minimum" in prop:
            type_label += f" (>= {prop['minimum']})"
        click.echo(f"  {marker} {name:<20} {type_label:<16} {prop['description']}")
    click.echo("")
    click.echo("  * required")
