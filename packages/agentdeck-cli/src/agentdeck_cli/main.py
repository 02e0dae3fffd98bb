from __future__ import annotations

import os
from pathlib import Path

import typer
from agentdeck_core import __version__
from agentdeck_core.config import ROOT_ENV_VAR, AgentdeckConfig
from agentdeck_core.errors import ConfigError
from agentdeck_core.logging import setup_logging
from rich.console import Console
from rich.markup import escape

from agentdeck_cli.commands.agents import (
    catalog_command,
    info_command,
    list_command,
    validate_command,
)

app = typer.Typer(
    name="agentdeck",
    help="agentdeck: validate and catalog agent definition files",
    no_args_is_help=True,
)

app.command("validate")(validate_command)
app.command("list")(list_command)
app.command("catalog")(catalog_command)
app.command("info")(info_command)


@app.callback()
def _root(
    ctx: typer.Context,
    config_path: Path | None = typer.Option(
        None,
        "--config",
        "-c",
        help="Config file to use instead of the layered defaults",
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Enable debug logging"
    ),
    log_json: bool = typer.Option(
        False, "--log-json", help="Emit log records as JSON lines"
    ),
) -> None:
    """Load configuration and set up logging for every command."""
    try:
        if config_path is not None:
            config = AgentdeckConfig.from_toml(config_path)
            env_root = os.environ.get(ROOT_ENV_VAR)
            if env_root:
                config = config.with_root(env_root)
        else:
            config = AgentdeckConfig.load()
    except ConfigError as exc:
        Console(stderr=True).print(
            f"[red]Config error:[/red] {escape(str(exc))}", soft_wrap=True
        )
        raise typer.Exit(2) from None

    setup_logging(
        level="DEBUG" if verbose else config.logging.level,
        json_output=log_json or config.logging.json,
    )
    ctx.obj = config


@app.command()
def version() -> None:
    """Show the agentdeck version."""
    Console().print(f"agentdeck {__version__}")


def main() -> None:
    app()


if __name__ == "__main__":
    main()
