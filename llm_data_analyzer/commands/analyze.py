"""Analyze a large text or JSONL file and print a consolidated report."""

from __future__ import annotations

import asyncio
import contextlib
import logging
import time
from pathlib import Path  # noqa: TC003
from typing import TYPE_CHECKING

import typer

from llm_data_analyzer import opts
from llm_data_analyzer.analyzer import AnalyzerError, ConfigurationError, InputFormatError
from llm_data_analyzer.cli import app
from llm_data_analyzer.config import parse_settings, select_endpoint
from llm_data_analyzer.core.utils import (
    create_status,
    print_command_line_args,
    print_error_message,
    print_output_panel,
    print_with_style,
    setup_logging,
)
from llm_data_analyzer.llm import LLMClient
from llm_data_analyzer.pipeline import run_analysis
from llm_data_analyzer.workdir import WorkDir

if TYPE_CHECKING:
    from llm_data_analyzer.analyzer import AnalysisReport
    from llm_data_analyzer.config import EndpointConfig

LOGGER = logging.getLogger(__name__)


def _read_text(path: Path, description: str) -> str:
    """Read a UTF-8 file.

    Raises:
        ConfigurationError: If the file does not exist.
        InputFormatError: If the file is not valid UTF-8.

    """
    if not path.is_file():
        msg = f"{description} not found: {path}"
        raise ConfigurationError(msg)
    try:
        return path.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        msg = f"{description} is not valid UTF-8: {path}"
        raise InputFormatError(msg) from e


async def _async_analyze(
    content: str,
    *,
    endpoint: EndpointConfig,
    analysis_prompt: str,
    summary_prompt: str,
    jsonl: bool,
    temp_dir: Path | None,
    keep_temp_dir: bool,
    max_concurrent: int,
    timeout: float | None,
) -> AnalysisReport:
    client = LLMClient.from_endpoint(endpoint, timeout=timeout)
    with WorkDir(temp_dir, keep=keep_temp_dir) as work_dir:
        return await run_analysis(
            content,
            analyze=client.analyze,
            analysis_prompt=analysis_prompt,
            summary_prompt=summary_prompt,
            chunk_size=endpoint.chunk_size,
            context_window_size=endpoint.context_window_size,
            jsonl=jsonl,
            work_dir=work_dir,
            max_concurrency=max_concurrent,
            timeout=timeout,
        )


def _display_report(
    report: AnalysisReport,
    elapsed: float,
    *,
    output_file: Path | None,
    json_output: bool,
    quiet: bool,
) -> None:
    """Write or print the final report."""
    if output_file is not None:
        output_file.write_text(report.report, encoding="utf-8")
        if not quiet:
            print_with_style(f"Final summary written to {output_file}")
        return

    if json_output:
        print(report.model_dump_json(indent=2))
        return

    if quiet:
        print(report.report)
        return

    print_output_panel(
        report.report,
        title="Final Summary",
        subtitle=(
            f"[dim]{report.chunk_count} chunks | {report.input_tokens:,} input tokens | "
            f"{report.reduction_iterations} reduce iterations | {elapsed:.2f}s[/dim]"
        ),
    )


@app.command("analyze")
def analyze_command(
    *,
    input_file: Path = typer.Argument(  # noqa: B008
        ...,
        help="Path to the text or JSONL file to analyze.",
    ),
    endpoint_name: str = opts.ENDPOINT_NAME,
    analysis_prompt_file: Path = opts.ANALYSIS_PROMPT_FILE,
    summary_prompt_file: Path = opts.SUMMARY_PROMPT_FILE,
    jsonl: bool = opts.JSONL,
    max_concurrent: int = opts.MAX_CONCURRENT,
    timeout: float | None = opts.TIMEOUT,
    temp_dir: Path | None = opts.TEMP_DIR,
    keep_temp_dir: bool = opts.KEEP_TEMP_DIR,
    output_file: Path | None = opts.OUTPUT_FILE,
    json_output: bool = opts.JSON_OUTPUT,
    log_level: str = opts.LOG_LEVEL,
    log_file: str | None = opts.LOG_FILE,
    verbose: bool = opts.VERBOSE,
    quiet: bool = opts.QUIET,
    print_args: bool = opts.PRINT_ARGS,
    ctx: typer.Context,
) -> None:
    """Analyze a large file chunk by chunk and condense the results.

    The file is split into chunks that fit the endpoint's `chunk_size`, every
    chunk is analyzed in parallel with the analysis prompt, and the combined
    analyses are condensed with the summary prompt until they fit the
    endpoint's `context_window_size`.

    Examples:
        # Analyze a log file
        llm-data-analyzer analyze app.log -e gpt4 --analysis-prompt-file a.txt --summary-prompt-file s.txt

        # Analyze JSONL records, keeping every record whole
        llm-data-analyzer analyze events.jsonl --jsonl -e local ...

    """
    if print_args:
        print_command_line_args({k: v for k, v in locals().items() if k != "ctx"})

    setup_logging(log_level, log_file, quiet=quiet, verbose=verbose)

    try:
        settings = parse_settings(ctx.obj or {})
        endpoint = select_endpoint(settings, endpoint_name)
        analysis_prompt = _read_text(analysis_prompt_file, "Analysis prompt file")
        summary_prompt = _read_text(summary_prompt_file, "Summary prompt file")
        content = _read_text(input_file, "Input file")

        status = (
            create_status(f"Analyzing {input_file.name} with {endpoint.model}...")
            if not quiet
            else contextlib.nullcontext()
        )
        with status:
            start_time = time.monotonic()
            report = asyncio.run(
                _async_analyze(
                    content,
                    endpoint=endpoint,
                    analysis_prompt=analysis_prompt,
                    summary_prompt=summary_prompt,
                    jsonl=jsonl,
                    temp_dir=temp_dir,
                    keep_temp_dir=keep_temp_dir,
                    max_concurrent=max_concurrent,
                    timeout=timeout,
                ),
            )
            elapsed = time.monotonic() - start_time
    except ConfigurationError as e:
        print_error_message(str(e), "Check your config file and command-line options.")
        raise typer.Exit(1) from e
    except InputFormatError as e:
        hint = "Check that every line is a JSON record." if jsonl else "Check the input file."
        print_error_message(str(e), hint)
        raise typer.Exit(1) from e
    except AnalyzerError as e:
        LOGGER.debug("Analysis failed", exc_info=True)
        print_error_message(str(e), f"Check that the endpoint '{endpoint_name}' is reachable.")
        raise typer.Exit(1) from e

    _display_report(
        report,
        elapsed,
        output_file=output_file,
        json_output=json_output,
        quiet=quiet,
    )
