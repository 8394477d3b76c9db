"""Bounded iterative reduction of a body of analyses into one report.

Algorithm:
1. Measure: if body + prompt tokens are strictly below the budget, make one
   final analyze call and return it.
2. Split: cut the body into budget-sized token windows. A single window means
   the body cannot be shrunk further; analyze it whole as a best effort.
3. Fan out: summarize every window concurrently, join the summaries in window
   order and go back to 1.

The loop is an explicit iteration with a cap; a body that never shrinks fails
with ``ConvergenceError`` instead of looping forever.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from llm_data_analyzer.analyzer._prompts import frame_summary_prompt, join_results
from llm_data_analyzer.analyzer.chunking import Chunker
from llm_data_analyzer.analyzer.dispatch import AnalysisDispatcher
from llm_data_analyzer.analyzer.models import (
    AnalysisError,
    ConfigurationError,
    ConvergenceError,
    ReductionState,
)
from llm_data_analyzer.analyzer.tokenizer import default_tokenizer
from llm_data_analyzer.constants import MAX_REDUCE_ITERATIONS

if TYPE_CHECKING:
    from llm_data_analyzer.analyzer.dispatch import Analyze
    from llm_data_analyzer.analyzer.tokenizer import Tokenizer

LOGGER = logging.getLogger(__name__)


class HierarchicalReducer:
    """Condense text until it fits a context budget."""

    def __init__(
        self,
        analyze: Analyze,
        budget: int,
        *,
        tokenizer: Tokenizer | None = None,
        max_iterations: int = MAX_REDUCE_ITERATIONS,
        max_concurrency: int | None = None,
        timeout: float | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        if budget <= 0:
            msg = f"Context budget must be positive, got {budget}"
            raise ConfigurationError(msg)
        if max_iterations <= 0:
            msg = f"max_iterations must be positive, got {max_iterations}"
            raise ConfigurationError(msg)
        self.analyze = analyze
        self.budget = budget
        self.tokenizer = tokenizer or default_tokenizer()
        self.max_iterations = max_iterations
        self.max_concurrency = max_concurrency
        self.timeout = timeout
        self.logger = logger or LOGGER
        self.chunker = Chunker(budget, self.tokenizer, logger=self.logger)

    async def summarize(self, text: str, prompt: str) -> str:
        """Reduce ``text`` with ``prompt`` into a single final answer."""
        state = await self.reduce(text, prompt)
        return state.result or ""

    async def reduce(self, text: str, prompt: str) -> ReductionState:
        """Run the reduce loop and return its finished state.

        The state is created per call, so concurrent calls on one reducer keep
        separate iteration counts.

        Raises:
            ConvergenceError: If the body is still over budget after
                ``max_iterations`` fan-out iterations.
            AnalysisError: If any analyze call fails; no retry is attempted.

        """
        state = ReductionState(current_text=text, prompt=prompt, budget=self.budget)
        prompt_tokens = self.tokenizer.count(prompt)

        while True:
            if state.iteration > self.max_iterations:
                msg = (
                    f"Summarization reached max iterations ({self.max_iterations}) "
                    "without fitting the context budget"
                )
                raise ConvergenceError(msg, iterations=state.completed_iterations)

            text_tokens = self.tokenizer.count(state.current_text)
            self.logger.info(
                "Summarizer iteration %d: %d text tokens + %d prompt tokens (budget %d)",
                state.iteration,
                text_tokens,
                prompt_tokens,
                state.budget,
            )

            # Strict: a body exactly at the budget is split once more
            if text_tokens + prompt_tokens < state.budget:
                self.logger.info("Text is small enough, performing final analysis")
                state.result = await self._final(state)
                return state

            chunks = self.chunker.split(state.current_text)
            if len(chunks) <= 1:
                self.logger.info("Cannot split further, analyzing the whole text")
                state.result = await self._final(state)
                return state

            self.logger.info("Splitting text into %d chunks for summarization", len(chunks))
            dispatcher = AnalysisDispatcher(
                self.analyze,
                state.prompt,
                max_concurrency=self.max_concurrency,
                timeout=self.timeout,
                frame=frame_summary_prompt,
                logger=self.logger,
            )
            summaries = await dispatcher.dispatch(chunks)
            state.advance(join_results(summaries))

    async def _final(self, state: ReductionState) -> str:
        try:
            return await self.analyze(frame_summary_prompt(state.prompt, state.current_text))
        except AnalysisError:
            raise
        except Exception as e:
            msg = f"Final summarization failed: {e}"
            raise AnalysisError(msg) from e
