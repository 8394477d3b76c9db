"""Token encoding used to measure and cut chunk boundaries."""

from __future__ import annotations

from functools import lru_cache
from typing import TYPE_CHECKING, Protocol

from llm_data_analyzer.analyzer.models import ConfigurationError
from llm_data_analyzer.constants import DEFAULT_ENCODING

if TYPE_CHECKING:
    import tiktoken


class Tokenizer(Protocol):
    """Reversible text <-> token sequence codec.

    Implementations must be deterministic: identical text always yields an
    identical token sequence within one process.
    """

    def encode(self, text: str) -> list[int]: ...

    def decode(self, tokens: list[int]) -> str: ...

    def count(self, text: str) -> int: ...


@lru_cache(maxsize=4)
def _get_encoding(name: str) -> tiktoken.Encoding:
    """Get a tiktoken encoding by name, with caching."""
    import tiktoken  # noqa: PLC0415

    try:
        return tiktoken.get_encoding(name)
    except ValueError as e:
        msg = f"Unknown tokenizer encoding: {name}"
        raise ConfigurationError(msg) from e


class TiktokenTokenizer:
    """Tokenizer backed by a tiktoken BPE encoding (``cl100k_base`` by default)."""

    def __init__(self, encoding_name: str = DEFAULT_ENCODING) -> None:
        self.encoding_name = encoding_name
        self._encoding = _get_encoding(encoding_name)

    def encode(self, text: str) -> list[int]:
        # Input may legitimately contain special-token text like <|endoftext|>
        return self._encoding.encode(text, disallowed_special=())

    def decode(self, tokens: list[int]) -> str:
        return self._encoding.decode(tokens)

    def count(self, text: str) -> int:
        if not text:
            return 0
        return len(self.encode(text))


@lru_cache(maxsize=1)
def default_tokenizer() -> TiktokenTokenizer:
    """Return the process-wide shared tokenizer."""
    return TiktokenTokenizer()
