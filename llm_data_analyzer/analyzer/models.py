"""Data models and errors for chunked analysis and reduction."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime

from pydantic import BaseModel, Field


class AnalyzerError(Exception):
    """Base class for all analyzer failures."""


class ConfigurationError(AnalyzerError):
    """Raised for invalid budgets, unknown endpoints or missing credentials."""


class InputFormatError(AnalyzerError):
    """Raised when input cannot be chunked (malformed or oversized JSONL record)."""

    def __init__(self, message: str, *, line_number: int | None = None) -> None:
        super().__init__(message)
        self.line_number = line_number


class AnalysisError(AnalyzerError):
    """Raised when the analysis collaborator fails for any reason."""

    def __init__(self, message: str, *, chunk_index: int | None = None) -> None:
        super().__init__(message)
        self.chunk_index = chunk_index


class AnalysisTimeoutError(AnalysisError):
    """Raised when a dispatch deadline expires before all chunks finished."""


class ConvergenceError(AnalyzerError):
    """Raised when the reduce loop exceeds its iteration cap."""

    def __init__(self, message: str, *, iterations: int) -> None:
        super().__init__(message)
        self.iterations = iterations


@dataclass
class ReductionState:
    """Mutable loop state of a single ``HierarchicalReducer.reduce`` call.

    Attributes:
        current_text: The body still to be condensed.
        prompt: The fixed reduction prompt.
        budget: Token budget the loop is closing against.
        iteration: 1-based iteration counter.
        result: The final answer, set once the loop has finished.

    """

    current_text: str
    prompt: str
    budget: int
    iteration: int = 1
    result: str | None = None

    @property
    def completed_iterations(self) -> int:
        """Number of fan-out iterations finished so far."""
        return self.iteration - 1

    def advance(self, text: str) -> None:
        """Replace the body with the joined summaries of this iteration."""
        self.current_text = text
        self.iteration += 1


class AnalysisReport(BaseModel):
    """Result of a full analysis run."""

    report: str = Field(..., description="The final consolidated report")
    chunk_count: int = Field(..., ge=0, description="Number of input chunks analyzed")
    input_tokens: int = Field(..., ge=0, description="Token count of the raw input")
    combined_tokens: int = Field(
        default=0,
        ge=0,
        description="Token count of the concatenated per-chunk analyses",
    )
    reduction_iterations: int = Field(
        default=0,
        ge=0,
        description="Number of fan-out iterations the reducer needed (0 = none)",
    )
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(UTC),
        description="Timestamp when the report was created",
    )
