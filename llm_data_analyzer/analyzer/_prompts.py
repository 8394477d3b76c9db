"""Prompt framing for chunk analysis and reduction calls."""

from __future__ import annotations

from llm_data_analyzer.constants import ANALYSIS_FRAME, RESULT_SEPARATOR, SUMMARY_FRAME


def frame_analysis_prompt(prompt: str, chunk: str) -> str:
    """Place a chunk after the analysis instructions."""
    return ANALYSIS_FRAME.format(prompt=prompt, content=chunk)


def frame_summary_prompt(prompt: str, text: str) -> str:
    """Place a body of text after the summary instructions."""
    return SUMMARY_FRAME.format(prompt=prompt, content=text)


def join_results(results: list[str]) -> str:
    """Join ordered analyses into one body."""
    return RESULT_SEPARATOR.join(results)
