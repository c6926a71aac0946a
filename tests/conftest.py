from __future__ import annotations

from pathlib import Path
import textwrap

import pytest


def _normalize_spec(text: str) -> str:
    # Allow indented triple-quoted specs in tests.
    text = textwrap.dedent(text).lstrip("\n")
    if text and not text.endswith("\n"):
        text += "\n"
    return text


@pytest.fixture()
def write_spec(tmp_path: Path):
    """Write a CFG spec into a temporary file and return its path."""

    def _write(text: str, name: str = "cfg.txt") -> Path:
        path = tmp_path / name
        path.write_text(_normalize_spec(text), encoding="utf-8")
        return path

    return _write


@pytest.fixture()
def diamond_spec(write_spec):
    return write_spec(
        """
        ! diamond
        1: 2, 3
        2: 4
        3: 4
        4:
        """
    )
