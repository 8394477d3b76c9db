"""Analyze large text and JSONL corpora with language models."""

from __future__ import annotations

__version__ = "0.1.0"
