"""Shared CLI functionality for the LLM Data Analyzer."""

from __future__ import annotations

import typer

from llm_data_analyzer import __version__, opts
from llm_data_analyzer.config import load_config
from llm_data_analyzer.core.utils import console

app = typer.Typer(
    name="llm-data-analyzer",
    help=(
        "Analyze large text or JSONL files with LLMs. The input is split into chunks "
        "that fit the model's context window, each chunk is analyzed, and the results "
        "are condensed into one consolidated report."
    ),
    add_completion=True,
    rich_markup_mode="markdown",
)


def _version_callback(value: bool) -> None:  # noqa: FBT001
    if value:
        console.print(f"llm-data-analyzer {__version__}")
        raise typer.Exit


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    config_file: str | None = opts.CONFIG_FILE,
    version: bool = typer.Option(  # noqa: ARG001
        False,  # noqa: FBT003
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show the version and exit.",
    ),
) -> None:
    """Analyze large files with LLMs."""
    if ctx.invoked_subcommand is None:
        console.print("[bold red]No command specified.[/bold red]")
        console.print("[bold yellow]Running --help for your convenience.[/bold yellow]")
        console.print(ctx.get_help())
        raise typer.Exit
    import dotenv  # noqa: PLC0415

    dotenv.load_dotenv()
    set_config_defaults(ctx, config_file)


def set_config_defaults(ctx: typer.Context, config_file: str | None) -> None:
    """Set the default values for the subcommand based on the config file.

    The loaded config is kept on ``ctx.obj`` so commands can read the
    ``[[endpoints]]`` tables. Option defaults come from ``[defaults]``,
    overridden by a table named after the subcommand.
    """
    config = load_config(config_file)
    ctx.obj = config
    wildcard_config = config.get("defaults", {})
    subcommand = ctx.invoked_subcommand

    if not subcommand:
        ctx.default_map = wildcard_config
        return

    command_config = config.get(subcommand, {})
    ctx.default_map = {subcommand: {**wildcard_config, **command_config}}


# Import commands from other modules to register them
from llm_data_analyzer.commands import analyze  # noqa: E402, F401
