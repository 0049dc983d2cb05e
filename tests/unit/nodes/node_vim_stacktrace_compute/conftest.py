"""Shared fixtures for vim_stacktrace_compute handler tests.

Collaborators are replaced with in-memory doubles so the pure handlers can
be exercised against synthetic logs.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from pathlib import Path

import pytest

from vimtrace.adapters import AdapterMappingIntrospection, AdapterMemorySink


class FakeFilesystem:
    """Filesystem double backed by a path -> lines mapping."""

    def __init__(self, files: dict[str, list[str]] | None = None) -> None:
        self.files = files or {}
        self.reads: list[str] = []

    def is_readable(self, path: str) -> bool:
        return path in self.files

    def read_lines(self, path: str) -> list[str]:
        self.reads.append(path)
        return list(self.files[path])


class ExplodingIntrospection:
    """Introspection double whose backend is broken."""

    def introspect(self, name: str) -> Sequence[str]:
        raise RuntimeError(f"backend down while looking up {name}")


def error_block(context: str, lnum: int, message: str) -> str:
    """Render one error block the way Vim prints it."""
    return (
        f"Error detected while processing {context}:\n"
        f"line {lnum:>4}:\n"
        f"{message}\n"
    )


def last_set(path: str, lnum: int | None = None) -> list[str]:
    """Render ``:verbose function`` output for a definition."""
    suffix = f" line {lnum}" if lnum is not None else ""
    return ["   function Stub()", f"\tLast set from {path}{suffix}"]


# =============================================================================
# Collaborator Fixtures
# =============================================================================


@pytest.fixture
def fake_filesystem() -> FakeFilesystem:
    """Filesystem with two readable plugin files."""
    return FakeFilesystem(
        {
            "/tmp/a.vim": ["function! FuncA() abort", "  call FuncB()", "endfunction"],
            "/tmp/b.vim": [""] * 19 + ["fu Foo()", "  return 1", "endfu"],
        }
    )


@pytest.fixture
def introspection() -> AdapterMappingIntrospection:
    """Introspection knowing a handful of functions."""
    return AdapterMappingIntrospection(
        {
            "Foo": last_set("/tmp/a.vim", 10),
            "FuncA": last_set("/tmp/a.vim", 1),
            "FuncB": last_set("/tmp/a.vim", 20),
            "ScanOnly": last_set("/tmp/b.vim"),
            "Missing": last_set("/nonexistent/plugin.vim", 4),
        }
    )


@pytest.fixture
def memory_sink() -> AdapterMemorySink:
    """Fresh, inactive in-memory sink."""
    return AdapterMemorySink()


@pytest.fixture
def write_script(tmp_path: Path) -> Callable[[str, list[str]], Path]:
    """Factory writing a Vim script below ``tmp_path``."""

    def _write(relative: str, lines: list[str]) -> Path:
        path = tmp_path / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text("\n".join(lines) + "\n", encoding="utf-8")
        return path

    return _write


@pytest.fixture
def make_block() -> Callable[[str, int, str], str]:
    """Factory rendering a Vim error block."""
    return error_block


@pytest.fixture
def make_filesystem() -> type[FakeFilesystem]:
    """The FakeFilesystem class, for tests needing custom file contents."""
    return FakeFilesystem


@pytest.fixture
def exploding_introspection() -> ExplodingIntrospection:
    """Introspection that raises on every lookup."""
    return ExplodingIntrospection()
