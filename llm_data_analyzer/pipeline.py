"""End-to-end analysis: split, analyze every chunk, then reduce to one report."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from llm_data_analyzer.analyzer import (
    AnalysisDispatcher,
    AnalysisReport,
    Chunker,
    HierarchicalReducer,
    default_tokenizer,
)
from llm_data_analyzer.analyzer._prompts import join_results
from llm_data_analyzer.constants import MAX_REDUCE_ITERATIONS

if TYPE_CHECKING:
    from llm_data_analyzer.analyzer.dispatch import Analyze
    from llm_data_analyzer.analyzer.tokenizer import Tokenizer
    from llm_data_analyzer.workdir import WorkDir

LOGGER = logging.getLogger(__name__)


async def run_analysis(
    content: str,
    *,
    analyze: Analyze,
    analysis_prompt: str,
    summary_prompt: str,
    chunk_size: int,
    context_window_size: int,
    jsonl: bool = False,
    work_dir: WorkDir | None = None,
    max_concurrency: int | None = None,
    timeout: float | None = None,
    max_iterations: int = MAX_REDUCE_ITERATIONS,
    tokenizer: Tokenizer | None = None,
    logger: logging.Logger | None = None,
) -> AnalysisReport:
    """Analyze ``content`` chunk by chunk and condense the results.

    Args:
        content: Raw input text, or JSON lines when ``jsonl`` is set.
        analyze: Async callable sending one prompt to the model.
        analysis_prompt: Instructions applied to every input chunk.
        summary_prompt: Instructions used to condense the combined analyses.
        chunk_size: Token budget per input chunk.
        context_window_size: Token budget the final summary request must fit.
        jsonl: Treat ``content`` as JSON lines and keep records whole.
        work_dir: Entered ``WorkDir`` receiving each chunk's analysis.
        max_concurrency: Upper bound on in-flight model calls per stage.
        timeout: Deadline in seconds for each fan-out stage.
        max_iterations: Iteration cap of the reduce loop.
        tokenizer: Tokenizer shared by chunking and reduction.
        logger: Logger for progress messages.

    Returns:
        AnalysisReport with the final report and run statistics.

    Raises:
        InputFormatError: If the input cannot be chunked. Raised before any
            model call.
        AnalysisError: If any model call fails.
        ConvergenceError: If the reduce loop does not fit the context window.

    """
    logger = logger or LOGGER
    tokenizer = tokenizer or default_tokenizer()

    chunker = Chunker(chunk_size, tokenizer, logger=logger)
    chunks = chunker.split_jsonl(content) if jsonl else chunker.split(content)
    logger.info("Input split into %d chunks", len(chunks))

    dispatcher = AnalysisDispatcher(
        analyze,
        analysis_prompt,
        max_concurrency=max_concurrency,
        timeout=timeout,
        on_result=work_dir.write_result if work_dir is not None else None,
        logger=logger,
    )
    results = await dispatcher.dispatch(chunks)
    if work_dir is not None:
        results = work_dir.read_results(len(chunks))
    combined = join_results(results)

    logger.info("Combining results and generating final summary...")
    reducer = HierarchicalReducer(
        analyze,
        context_window_size,
        tokenizer=tokenizer,
        max_iterations=max_iterations,
        max_concurrency=max_concurrency,
        timeout=timeout,
        logger=logger,
    )
    reduction = await reducer.reduce(combined, summary_prompt)

    return AnalysisReport(
        report=reduction.result or "",
        chunk_count=len(chunks),
        input_tokens=tokenizer.count(content),
        combined_tokens=tokenizer.count(combined),
        reduction_iterations=reduction.completed_iterations,
    )
