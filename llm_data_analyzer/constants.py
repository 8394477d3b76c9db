"""Default configuration settings for the LLM Data Analyzer package."""

from __future__ import annotations

# --- Tokenizer ---
DEFAULT_ENCODING = "cl100k_base"

# --- Chunking / Reduction ---
MAX_REDUCE_ITERATIONS = 10
DEFAULT_MAX_CONCURRENT_CHUNKS = 5

# Separator placed between per-chunk analyses and between sub-chunk summaries
RESULT_SEPARATOR = "\n\n---\n\n"
# Header separating an instruction prompt from the chunk it applies to
ANALYSIS_FRAME = "{prompt}\n\n---\n{content}"
SUMMARY_FRAME = "{prompt}\n\n--- Text to Summarize ---\n{content}"

# --- Work directory ---
WORK_DIR_PREFIX = "llm-analyzer-"
CHUNK_RESULT_TEMPLATE = "chunk_{ordinal:06d}.txt"
