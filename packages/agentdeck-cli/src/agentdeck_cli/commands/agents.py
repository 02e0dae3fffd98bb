"""Agent catalog commands: validate, list, catalog, info."""
from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import typer
from agentdeck_core.config import AgentdeckConfig
from agentdeck_core.errors import DiscoveryError
from agentdeck_definitions import load_registry, render_catalog
from agentdeck_definitions.catalog import RENDERERS
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.syntax import Syntax
from rich.table import Table

if TYPE_CHECKING:
    from agentdeck_definitions.types import Registry

console = Console()
err_console = Console(stderr=True)

_PREVIEW_CHARS = 500


def _config(ctx: typer.Context) -> AgentdeckConfig:
    return ctx.obj if isinstance(ctx.obj, AgentdeckConfig) else AgentdeckConfig()


def _load(
    ctx: typer.Context,
    root: Path | None,
    required_sections: list[str] | None = None,
) -> Registry:
    """Load the registry for *root*, exiting with status 2 if it is missing."""
    config = _config(ctx)
    scan_root = root if root is not None else Path(config.discovery.root)
    try:
        return load_registry(scan_root, config, required_sections=required_sections)
    except DiscoveryError as exc:
        err_console.print(f"[red]Error:[/red] {escape(str(exc))}", soft_wrap=True)
        raise typer.Exit(2) from None


def _report_issues(errors: list[str], warnings: list[str]) -> None:
    """Print formatted issues to stderr."""
    for line in errors:
        err_console.print(escape(line), style="red", soft_wrap=True)
    for line in warnings:
        err_console.print(escape(line), style="yellow", soft_wrap=True)


def validate_command(
    ctx: typer.Context,
    root: Path | None = typer.Argument(
        None,
        help="Directory to scan recursively (defaults to AGENTDECK_ROOT "
        "or the configured discovery root)",
    ),
    strict: bool = typer.Option(
        False, "--strict", help="Treat warnings as failures"
    ),
    lint: list[str] | None = typer.Option(
        None,
        "--lint",
        help="Require a markdown section with this title in every body "
        "(repeatable)",
    ),
) -> None:
    """Validate agent definitions, print the catalog, and report issues."""
    registry = _load(ctx, root, required_sections=lint or None)
    catalog = render_catalog(registry)

    if catalog.entries:
        table = Table(
            title="Agent Catalog",
            show_header=True,
            header_style="bold cyan",
        )
        table.add_column("Name", style="bold")
        table.add_column("Tools")
        table.add_column("Description")

        for identifier, description in catalog.entries:
            agent = registry.entries[identifier]
            tools = ", ".join(agent.declared_tools) if agent.declared_tools else "-"
            table.add_row(escape(identifier), escape(tools), escape(description))

        console.print(table)
    else:
        console.print("[yellow]No valid agent definitions found.[/yellow]")

    _report_issues(catalog.errors, catalog.warnings)

    err_console.print(
        f"\n[dim]{len(catalog.entries)} agent(s), "
        f"{len(catalog.errors)} error(s), "
        f"{len(catalog.warnings)} warning(s).[/dim]"
    )

    strict = strict or _config(ctx).validation.strict
    if catalog.errors or (strict and catalog.warnings):
        raise typer.Exit(1)


def list_command(
    ctx: typer.Context,
    root: Path | None = typer.Argument(None, help="Directory to scan"),
) -> None:
    """List valid agents as 'identifier: description', sorted by identifier."""
    catalog = render_catalog(_load(ctx, root))
    for identifier, description in catalog.entries:
        console.out(f"{identifier}: {description}", highlight=False)


def catalog_command(
    ctx: typer.Context,
    root: Path | None = typer.Argument(None, help="Directory to scan"),
    output_format: str = typer.Option(
        "text",
        "--format",
        "-f",
        help="Output format: text, markdown, or json",
    ),
) -> None:
    """Render the agent catalog (e.g. to regenerate a README table)."""
    renderer = RENDERERS.get(output_format)
    if renderer is None:
        err_console.print(
            f"[red]Unknown format:[/red] '{escape(output_format)}' "
            f"(choose from {', '.join(RENDERERS)})"
        )
        raise typer.Exit(2)

    catalog = render_catalog(_load(ctx, root))
    console.out(renderer(catalog), end="", highlight=False)


def info_command(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Identifier of the agent to inspect"),
    root: Path | None = typer.Argument(None, help="Directory to scan"),
) -> None:
    """Show detailed information about one agent definition."""
    registry = _load(ctx, root)

    match = registry.get(name)
    if match is None:
        err_console.print(f"[red]Agent not found:[/red] '{escape(name)}'")
        available = sorted(registry.entries)
        if available:
            err_console.print(
                f"[dim]Available agents: {escape(', '.join(available))}[/dim]"
            )
        raise typer.Exit(1)

    meta_lines = [
        f"[bold]Name:[/bold]          {escape(match.identifier)}",
        f"[bold]Description:[/bold]   {escape(match.description)}",
    ]

    if match.declared_tools:
        meta_lines.append(
            f"[bold]Tools:[/bold]         {escape(', '.join(match.declared_tools))}"
        )

    for key, value in match.extra.items():
        meta_lines.append(f"[bold]{escape(key)}:[/bold] {escape(str(value))}")

    meta_lines.append(f"[bold]Source:[/bold]        {escape(str(match.source_path))}")

    console.print(Panel(
        "\n".join(meta_lines),
        title=f"Agent: {escape(match.identifier)}",
        border_style="cyan",
    ))

    body = match.body_content.strip()
    if body:
        preview = body
        if len(preview) > _PREVIEW_CHARS:
            preview = preview[:_PREVIEW_CHARS] + "\n\n... (truncated)"
        console.print()
        console.print(Panel(
            Syntax(preview, "markdown", theme="monokai", word_wrap=True),
            title="Instructions (preview)",
            border_style="dim",
        ))
    else:
        console.print("\n[dim]No instructions body defined.[/dim]")
