"""Parallel fan-out of chunk analyses with ordered recombination.

Every chunk is analyzed in its own task inside one ``asyncio.TaskGroup``.
Results land in a list slot keyed by the chunk's ordinal, so the combined
output follows input order regardless of completion order. The first failure
is kept in a single error slot; the task group cancels the remaining siblings
and exactly that one error is raised.
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
from collections.abc import Awaitable, Callable

from llm_data_analyzer.analyzer._prompts import frame_analysis_prompt, join_results
from llm_data_analyzer.analyzer.models import (
    AnalysisError,
    AnalysisTimeoutError,
    ConfigurationError,
)

LOGGER = logging.getLogger(__name__)

Analyze = Callable[[str], Awaitable[str]]
ResultCallback = Callable[[int, str], None]
PromptFramer = Callable[[str, str], str]


class AnalysisDispatcher:
    """Run an analyze operation over every chunk concurrently.

    Args:
        analyze: Async callable sending one prompt to the model.
        prompt: Instruction prompt placed before every chunk.
        max_concurrency: Upper bound on in-flight calls (``None`` = one per chunk).
        timeout: Deadline in seconds for the whole fan-out (``None`` = no deadline).
        frame: Combines ``prompt`` and a chunk into the text sent to ``analyze``.
        on_result: Called with ``(index, text)`` as each chunk completes.
        logger: Logger for progress messages.

    """

    def __init__(
        self,
        analyze: Analyze,
        prompt: str,
        *,
        max_concurrency: int | None = None,
        timeout: float | None = None,
        frame: PromptFramer = frame_analysis_prompt,
        on_result: ResultCallback | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        if max_concurrency is not None and max_concurrency <= 0:
            msg = f"max_concurrency must be positive, got {max_concurrency}"
            raise ConfigurationError(msg)
        self.analyze = analyze
        self.prompt = prompt
        self.max_concurrency = max_concurrency
        self.timeout = timeout
        self.frame = frame
        self.on_result = on_result
        self.logger = logger or LOGGER

    async def dispatch(self, chunks: list[str]) -> list[str]:
        """Analyze all chunks and return the results in chunk order.

        Raises:
            AnalysisError: For the first chunk whose analysis failed. Results of
                other chunks are discarded.
            AnalysisTimeoutError: If the deadline expired first.

        """
        total = len(chunks)
        if not total:
            return []

        results: list[str] = [""] * total
        first_failure: tuple[int, Exception] | None = None
        semaphore = (
            asyncio.Semaphore(self.max_concurrency)
            if self.max_concurrency is not None
            else contextlib.nullcontext()
        )

        async def analyze_chunk(index: int, chunk: str) -> None:
            nonlocal first_failure
            async with semaphore:
                self.logger.info("Analyzing chunk %d/%d...", index + 1, total)
                try:
                    result = await self.analyze(self.frame(self.prompt, chunk))
                    if self.on_result is not None:
                        self.on_result(index, result)
                except Exception as e:
                    if first_failure is None:
                        first_failure = (index + 1, e)
                    raise
            results[index] = result
            self.logger.debug("Chunk %d/%d analyzed", index + 1, total)

        try:
            async with asyncio.timeout(self.timeout):
                async with asyncio.TaskGroup() as tg:
                    for index, chunk in enumerate(chunks):
                        tg.create_task(analyze_chunk(index, chunk))
        except TimeoutError as e:
            msg = f"Analysis of {total} chunks did not finish within {self.timeout}s"
            raise AnalysisTimeoutError(msg) from e
        except ExceptionGroup:
            if first_failure is None:
                raise
            chunk_number, cause = first_failure
            msg = f"Failed to analyze chunk {chunk_number}: {cause}"
            raise AnalysisError(msg, chunk_index=chunk_number) from cause

        self.logger.info("All %d chunks analyzed successfully", total)
        return results

    async def dispatch_and_combine(self, chunks: list[str]) -> str:
        """Analyze all chunks and join the results in chunk order."""
        return join_results(await self.dispatch(chunks))
