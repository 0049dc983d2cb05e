"""TypedDict structures and collaborator protocols for stacktrace handlers.

The TypedDicts define the contracts between pure functions and the
orchestrator. The Protocols describe the external collaborators (log source,
introspection service, filesystem reader, presentation sink) so that the
pipeline can run against real backends or test doubles.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol, TypedDict, runtime_checkable


class LogBlockDict(TypedDict):
    """Three consecutive log lines belonging to one error occurrence."""

    header_line: str
    line_number_line: str
    message_line: str
    start_index: int


class RawFrameDict(TypedDict):
    """One call-chain token, already stripped of noise prefixes."""

    token: str
    name: str
    offset: int
    kind: str  # "function" or "file"


class ErrorRecordDict(TypedDict):
    """Structured error: message plus frames ordered innermost first."""

    message: str
    frames: list[RawFrameDict]


class ResolvedFrameDict(TypedDict):
    """A frame mapped back to an absolute source location."""

    display_text: str
    source_file: str | None
    source_line: int | None


class QuickfixEntryDict(TypedDict):
    """One navigable row of the entry list."""

    text: str
    file: str | None
    line: int
    buffer_id: int
    kind: str  # "E" or "I"


class DefinitionLocationDict(TypedDict):
    """Location parsed from a 'Last set from' introspection line."""

    path: str
    line: int | None


@runtime_checkable
class ProtocolLogSource(Protocol):
    """Returns the full diagnostic message history, most recent last."""

    def read_log(self) -> str:
        """Return the newline-delimited log text."""
        ...


@runtime_checkable
class ProtocolIntrospection(Protocol):
    """Looks up where a named function was defined.

    Mirrors the output of ``:verbose function {name}``: line 0 is the
    signature, line 1 (if present) reads ``Last set from <path>[ line <n>]``.
    """

    def introspect(self, name: str) -> Sequence[str]:
        """Return definition lines, or an empty sequence if unknown."""
        ...


@runtime_checkable
class ProtocolFilesystem(Protocol):
    """Read-only access to source files."""

    def is_readable(self, path: str) -> bool:
        """Return True if ``path`` can be opened for reading."""
        ...

    def read_lines(self, path: str) -> list[str]:
        """Return the file's lines without line terminators."""
        ...


@runtime_checkable
class ProtocolPresentationSink(Protocol):
    """Navigable list view that accepts the produced entries."""

    def set_list(self, items: Sequence[QuickfixEntryDict], title: str) -> None:
        """Replace any previously displayed list."""
        ...

    def is_active(self) -> bool:
        """Return True if the list view is already the active view."""
        ...

    def open(self) -> None:
        """Make the list view visible."""
        ...


__all__ = [
    "DefinitionLocationDict",
    "ErrorRecordDict",
    "LogBlockDict",
    "ProtocolFilesystem",
    "ProtocolIntrospection",
    "ProtocolLogSource",
    "ProtocolPresentationSink",
    "QuickfixEntryDict",
    "RawFrameDict",
    "ResolvedFrameDict",
]
