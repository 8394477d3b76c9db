"""Console output and logging helpers shared by the CLI."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.panel import Panel
from rich.text import Text

if TYPE_CHECKING:
    from rich.status import Status

console = Console()
err_console = Console(stderr=True)


def setup_logging(
    log_level: str,
    log_file: str | None,
    *,
    quiet: bool,
    verbose: bool = False,
) -> None:
    """Configure the root logger with a Rich handler and an optional file handler."""
    level = logging.DEBUG if verbose else getattr(logging, log_level.upper(), logging.INFO)
    handlers: list[logging.Handler] = []
    if not quiet:
        handlers.append(
            RichHandler(console=err_console, rich_tracebacks=True, show_path=False),
        )
    if log_file:
        file_handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s"),
        )
        handlers.append(file_handler)
    if not handlers:
        handlers.append(logging.NullHandler())

    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=handlers,
        force=True,
    )

    # Suppress noisy logs from libraries
    for name in ("httpx", "httpcore", "openai"):
        logging.getLogger(name).setLevel(logging.WARNING)


def print_error_message(message: str, suggestion: str | None = None) -> None:
    """Print an error message in a red panel."""
    body = f"[bold red]{escape(message)}[/bold red]"
    if suggestion:
        body += f"\n\n[yellow]{escape(suggestion)}[/yellow]"
    err_console.print(Panel(body, title="[bold]Error[/bold]", border_style="red"))


def print_output_panel(
    output: str,
    title: str = "Output",
    subtitle: str | None = None,
    style: str = "green",
) -> None:
    """Print the final result in a bordered panel, without interpreting markup."""
    console.print(
        Panel(
            Text(output),
            title=f"[bold]{title}[/bold]",
            subtitle=subtitle,
            border_style=style,
        ),
    )


def print_with_style(message: str, style: str = "bold green") -> None:
    """Print a message with a Rich style."""
    console.print(message, style=style, markup=False)


def print_command_line_args(args: dict[str, Any]) -> None:
    """Print the parsed command-line arguments."""
    console.print("[bold blue]Command-line arguments:[/bold blue]")
    for key, value in sorted(args.items()):
        console.print(f"  [cyan]{key}[/cyan]: {escape(str(value))}")


def create_status(message: str, style: str = "bold yellow") -> Status:
    """Create a Rich status spinner on stderr."""
    return err_console.status(f"[{style}]{escape(message)}[/{style}]")
