"""Shared test fixtures and configuration."""

from __future__ import annotations

import contextlib
import logging

import pytest


def pytest_collection_modifyitems(items: list[pytest.Item]) -> None:
    """Set default timeout for all tests."""
    for item in items:
        with contextlib.suppress(AttributeError):
            item.add_marker(pytest.mark.timeout(3))


class CharTokenizer:
    """One token per character; lossless, deterministic and offline."""

    def encode(self, text: str) -> list[int]:
        return [ord(c) for c in text]

    def decode(self, tokens: list[int]) -> str:
        return "".join(chr(t) for t in tokens)

    def count(self, text: str) -> int:
        return len(text)


@pytest.fixture
def char_tokenizer() -> CharTokenizer:
    """Provide a tokenizer whose token count equals the character count."""
    return CharTokenizer()


@pytest.fixture
def mock_logger() -> logging.Logger:
    """Provide a logger for testing."""
    logger = logging.getLogger("test")
    logger.setLevel(logging.DEBUG)
    return logger


@pytest.fixture
def llm_responses() -> dict[str, str]:
    """Predefined LLM responses for testing."""
    return {
        "analysis": "chunk summary",
        "summary": "Final summary.",
    }
