"""Shared test fixtures for mdtest tests."""

from collections.abc import Callable
from pathlib import Path

import pytest
from typer.testing import CliRunner


@pytest.fixture
def runner() -> CliRunner:
    """Create CLI test runner."""
    return CliRunner()


@pytest.fixture
def write_doc(tmp_path: Path) -> Callable[..., Path]:
    """Return a helper that writes a markdown document into tmp_path.

    Blocks are joined with prose paragraphs between them, the way a real
    README interleaves explanation and recipes.
    """

    def _write(*blocks: str, name: str = "README.md") -> Path:
        parts = ["# Example\n"]
        for block in blocks:
            parts.append("Some explanation.\n")
            parts.append(block)
        path = tmp_path / name
        path.write_text("\n".join(parts))
        return path

    return _write
