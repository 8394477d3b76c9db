"""Token-budgeted chunking of plain text and JSON-lines input.

Two strategies:
1. Plain text: encode once, cut the token stream into fixed windows, decode
   each window. Token boundaries need not align with characters, so a decoded
   window can differ slightly from a character slice of the input.
2. JSONL: validate every record, then greedily pack whole records into chunks.
   Records are never split so each chunk stays a sequence of parseable JSON.
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING

from llm_data_analyzer.analyzer.models import ConfigurationError, InputFormatError
from llm_data_analyzer.analyzer.tokenizer import default_tokenizer

if TYPE_CHECKING:
    from pathlib import Path

    from llm_data_analyzer.analyzer.tokenizer import Tokenizer

LOGGER = logging.getLogger(__name__)

_MAX_LINE_PREVIEW = 200


def _split_records(text: str) -> list[str]:
    """Split JSONL text into records on line feeds only.

    JSON strings may contain U+2028, U+2029 and U+0085 unescaped, so
    ``str.splitlines`` would cut valid records apart. A trailing line feed
    ends the last record, and a CRLF terminator is stripped.
    """
    records = text.split("\n")
    if records[-1] == "":
        records.pop()
    return [record.removesuffix("\r") for record in records]


def _preview(line: str) -> str:
    if len(line) <= _MAX_LINE_PREVIEW:
        return line
    return f"{line[:_MAX_LINE_PREVIEW]}..."


class Chunker:
    """Split content into ordered chunks of at most ``chunk_size`` tokens."""

    def __init__(
        self,
        chunk_size: int,
        tokenizer: Tokenizer | None = None,
        *,
        logger: logging.Logger | None = None,
    ) -> None:
        """Initialize the Chunker.

        Raises:
            ConfigurationError: If ``chunk_size`` is not a positive integer.

        """
        if chunk_size <= 0:
            msg = f"Chunk size must be positive, got {chunk_size}"
            raise ConfigurationError(msg)
        self.chunk_size = chunk_size
        self.tokenizer = tokenizer or default_tokenizer()
        self.logger = logger or LOGGER

    def split(self, text: str) -> list[str]:
        """Split text into consecutive token windows.

        Returns ``ceil(N / chunk_size)`` chunks for a text of ``N`` tokens, or
        an empty list for empty input. Windows never overlap and no token is
        dropped.
        """
        tokens = self.tokenizer.encode(text)
        chunks = [
            self.tokenizer.decode(tokens[start : start + self.chunk_size])
            for start in range(0, len(tokens), self.chunk_size)
        ]
        self.logger.debug(
            "Split %d tokens into %d chunks (chunk_size=%d)",
            len(tokens),
            len(chunks),
            self.chunk_size,
        )
        return chunks

    def split_jsonl(self, text: str) -> list[str]:
        """Group JSONL records into chunks without splitting any record.

        Every record is validated before packing, so a malformed record fails
        the whole operation before any chunk is produced.

        Raises:
            InputFormatError: If a record is not valid JSON, or a single record
                (including its trailing newline) exceeds ``chunk_size`` tokens.

        """
        records = _split_records(text)
        for line_number, record in enumerate(records, start=1):
            try:
                json.loads(record)
            except json.JSONDecodeError as e:
                msg = f"Invalid JSON on line {line_number}: {_preview(record)}"
                raise InputFormatError(msg, line_number=line_number) from e

        chunks: list[str] = []
        current: list[str] = []
        current_tokens = 0

        for line_number, record in enumerate(records, start=1):
            line = f"{record}\n"
            line_tokens = self.tokenizer.count(line)
            if line_tokens > self.chunk_size:
                msg = (
                    f"Line {line_number} is too long to fit in a chunk: "
                    f"{line_tokens} tokens (chunk size {self.chunk_size})"
                )
                raise InputFormatError(msg, line_number=line_number)

            if current and current_tokens + line_tokens > self.chunk_size:
                chunks.append("".join(current))
                current = []
                current_tokens = 0

            current.append(line)
            current_tokens += line_tokens

        if current:
            chunks.append("".join(current))

        self.logger.debug(
            "Grouped %d JSONL records into %d chunks (chunk_size=%d)",
            len(records),
            len(chunks),
            self.chunk_size,
        )
        return chunks

    def split_file(self, path: Path, *, jsonl: bool = False) -> list[str]:
        """Read a UTF-8 file and split it with the matching strategy."""
        content = path.read_text(encoding="utf-8")
        return self.split_jsonl(content) if jsonl else self.split(content)

