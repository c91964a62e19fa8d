"""Shared fixtures for building hook unit trees on disk."""

import textwrap
from pathlib import Path

import pytest


@pytest.fixture
def hooks_dir(tmp_path):
    """An empty hooks directory."""
    path = tmp_path / "hooks"
    path.mkdir()
    return path


@pytest.fixture
def write_unit(hooks_dir):
    """Write a unit file relative to the hooks directory and return its path."""

    def _write(relpath: str, body: str) -> Path:
        path = hooks_dir / relpath
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(textwrap.dedent(body))
        return path

    return _write


@pytest.fixture
def returning_unit(write_unit):
    """Write a unit whose run() appends ``value`` to its first argument and returns it."""

    def _write(relpath: str, value) -> Path:
        return write_unit(
            relpath,
            f"""
            def run(calls, *rest):
                calls.append({value!r})
                return {value!r}
            """,
        )

    return _write
