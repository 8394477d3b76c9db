"""On-disk persistence of per-chunk analyses.

Files are named from a zero-padded ordinal, but reading back always goes
through the ordinal, never through a directory listing, so the recombined
order cannot depend on how file names sort.
"""

from __future__ import annotations

import logging
import shutil
import tempfile
from pathlib import Path
from typing import Self

from llm_data_analyzer.constants import CHUNK_RESULT_TEMPLATE, WORK_DIR_PREFIX

LOGGER = logging.getLogger(__name__)


class WorkDir:
    """Directory holding intermediate chunk analyses.

    Use as a context manager. Without an explicit ``path`` a temporary
    directory is created and removed on exit unless ``keep`` is set. An
    explicit ``path`` is never removed.
    """

    def __init__(self, path: Path | None = None, *, keep: bool = False) -> None:
        self._requested = path
        self.keep = keep or path is not None
        self.path: Path | None = None

    def __enter__(self) -> Self:
        if self._requested is not None:
            self._requested.mkdir(parents=True, exist_ok=True)
            self.path = self._requested
        else:
            self.path = Path(tempfile.mkdtemp(prefix=WORK_DIR_PREFIX))
        LOGGER.info("Using work directory: %s", self.path)
        return self

    def __exit__(self, *exc: object) -> None:
        if self.path is not None and not self.keep:
            shutil.rmtree(self.path, ignore_errors=True)
            LOGGER.debug("Removed work directory %s", self.path)

    def _file_for(self, index: int) -> Path:
        if self.path is None:
            msg = "WorkDir must be entered before use"
            raise RuntimeError(msg)
        return self.path / CHUNK_RESULT_TEMPLATE.format(ordinal=index + 1)

    def write_result(self, index: int, text: str) -> None:
        """Persist the analysis of the chunk at 0-based ``index``."""
        self._file_for(index).write_text(text, encoding="utf-8")

    def read_results(self, count: int) -> list[str]:
        """Read back ``count`` analyses in chunk order."""
        return [self._file_for(index).read_text(encoding="utf-8") for index in range(count)]
