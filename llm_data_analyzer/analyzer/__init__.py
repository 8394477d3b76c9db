"""Token-budgeted chunking and iterative fan-out/reduce analysis.

This module provides the core of the analyzer:
1. ``Chunker`` splits plain text into token windows, or packs JSONL records
   into budgeted chunks without splitting a record
2. ``AnalysisDispatcher`` analyzes all chunks concurrently and recombines the
   results in chunk order
3. ``HierarchicalReducer`` condenses the combined analyses until they fit a
   context budget, with a fixed iteration cap

Example:
    from llm_data_analyzer.analyzer import AnalysisDispatcher, Chunker, HierarchicalReducer

    chunks = Chunker(4000).split(document)
    combined = await AnalysisDispatcher(client.analyze, prompt).dispatch_and_combine(chunks)
    report = await HierarchicalReducer(client.analyze, 8000).summarize(combined, summary_prompt)

"""

from llm_data_analyzer.analyzer.chunking import Chunker
from llm_data_analyzer.analyzer.dispatch import AnalysisDispatcher
from llm_data_analyzer.analyzer.models import (
    AnalysisError,
    AnalysisReport,
    AnalysisTimeoutError,
    AnalyzerError,
    ConfigurationError,
    ConvergenceError,
    InputFormatError,
    ReductionState,
)
from llm_data_analyzer.analyzer.reduce import HierarchicalReducer
from llm_data_analyzer.analyzer.tokenizer import TiktokenTokenizer, Tokenizer, default_tokenizer

__all__ = [
    "AnalysisDispatcher",
    "AnalysisError",
    "AnalysisReport",
    "AnalysisTimeoutError",
    "AnalyzerError",
    "Chunker",
    "ConfigurationError",
    "ConvergenceError",
    "HierarchicalReducer",
    "InputFormatError",
    "ReductionState",
    "TiktokenTokenizer",
    "Tokenizer",
    "default_tokenizer",
]
