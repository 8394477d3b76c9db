"""Tests for the intermediate results directory."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from llm_data_analyzer.workdir import WorkDir

if TYPE_CHECKING:
    from pathlib import Path


def test_temporary_directory_removed_on_exit() -> None:
    """Test that a generated directory is cleaned up."""
    with WorkDir() as work_dir:
        path = work_dir.path
        assert path is not None
        assert path.is_dir()
        assert path.name.startswith("llm-analyzer-")
        work_dir.write_result(0, "analysis")
    assert not path.exists()


def test_keep_leaves_temporary_directory() -> None:
    """Test that --keep-temp-dir preserves the generated directory."""
    with WorkDir(keep=True) as work_dir:
        work_dir.write_result(0, "analysis")
        path = work_dir.path
    assert path is not None
    assert (path / "chunk_000001.txt").read_text(encoding="utf-8") == "analysis"
    (path / "chunk_000001.txt").unlink()
    path.rmdir()


def test_explicit_path_is_created_and_kept(tmp_path: Path) -> None:
    """Test that a user-supplied directory is created and never removed."""
    target = tmp_path / "nested" / "results"
    with WorkDir(target) as work_dir:
        assert work_dir.path == target
        work_dir.write_result(2, "third")
    assert (target / "chunk_000003.txt").read_text(encoding="utf-8") == "third"


def test_read_results_follows_ordinal_order(tmp_path: Path) -> None:
    """Test that results written out of order read back in chunk order."""
    with WorkDir(tmp_path) as work_dir:
        for index in reversed(range(11)):
            work_dir.write_result(index, f"result {index + 1}")
        results = work_dir.read_results(11)
    assert results == [f"result {i}" for i in range(1, 12)]


def test_use_before_enter_fails() -> None:
    """Test that writing before entering the context is rejected."""
    with pytest.raises(RuntimeError, match="must be entered"):
        WorkDir().write_result(0, "x")
