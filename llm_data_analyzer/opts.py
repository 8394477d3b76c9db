"""Shared CLI options for analyzer commands."""

from __future__ import annotations

import typer

from llm_data_analyzer.constants import DEFAULT_MAX_CONCURRENT_CHUNKS

# --- Endpoint Options ---
ENDPOINT_NAME = typer.Option(
    ...,
    "--endpoint-name",
    "-e",
    help="Name of the LLM endpoint to use (defined in the config file).",
    rich_help_panel="Endpoint Options",
)

# --- Prompt Options ---
ANALYSIS_PROMPT_FILE = typer.Option(
    ...,
    "--analysis-prompt-file",
    help="Path to the file with the prompt applied to every chunk.",
    rich_help_panel="Prompt Options",
)
SUMMARY_PROMPT_FILE = typer.Option(
    ...,
    "--summary-prompt-file",
    help="Path to the file with the prompt used to condense the chunk analyses.",
    rich_help_panel="Prompt Options",
)

# --- Input Options ---
JSONL = typer.Option(
    False,  # noqa: FBT003
    "--jsonl",
    help="Treat the input file as JSONL and never split a record across chunks.",
    rich_help_panel="Input Options",
)

# --- Processing Options ---
MAX_CONCURRENT = typer.Option(
    DEFAULT_MAX_CONCURRENT_CHUNKS,
    "--max-concurrent",
    min=1,
    help="Maximum number of chunks analyzed in parallel.",
    rich_help_panel="Processing Options",
)
TIMEOUT = typer.Option(
    None,
    "--timeout",
    min=0.0,
    help="Deadline in seconds for each parallel analysis stage.",
    rich_help_panel="Processing Options",
)
TEMP_DIR = typer.Option(
    None,
    "--temp-dir",
    help="Directory for intermediate per-chunk results (kept after the run).",
    rich_help_panel="Processing Options",
)
KEEP_TEMP_DIR = typer.Option(
    False,  # noqa: FBT003
    "--keep-temp-dir",
    help="Keep the temporary directory after execution.",
    rich_help_panel="Processing Options",
)

# --- Output Options ---
OUTPUT_FILE = typer.Option(
    None,
    "--output",
    "-o",
    help="Path to the output file (default is stdout).",
    rich_help_panel="Output Options",
)
JSON_OUTPUT = typer.Option(
    False,  # noqa: FBT003
    "--json",
    help="Print the full result as JSON.",
    rich_help_panel="Output Options",
)

# --- General Options ---
LOG_LEVEL = typer.Option(
    "WARNING",
    "--log-level",
    help="Set the log level (e.g., DEBUG, INFO, WARNING).",
    rich_help_panel="General Options",
)
LOG_FILE = typer.Option(
    None,
    "--log-file",
    help="Path to a file to write logs to.",
    rich_help_panel="General Options",
)
VERBOSE = typer.Option(
    False,  # noqa: FBT003
    "--verbose",
    "-v",
    help="Enable verbose logging (same as --log-level DEBUG).",
    rich_help_panel="General Options",
)
QUIET = typer.Option(
    False,  # noqa: FBT003
    "--quiet",
    "-q",
    help="Suppress all output except for the final result.",
    rich_help_panel="General Options",
)
CONFIG_FILE = typer.Option(
    None,
    "--config-file",
    "-c",
    help="Path to a custom config file.",
    rich_help_panel="General Options",
)
PRINT_ARGS = typer.Option(
    False,  # noqa: FBT003
    "--print-args",
    help="Print the command line arguments, including variables taken from the configuration file.",
    rich_help_panel="General Options",
)
