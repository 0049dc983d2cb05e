# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT
"""Protocol adapters for stacktrace collaborator dependencies.

Bridges concrete backends to the protocol interfaces expected by the
stacktrace handlers.

Adapters:
    - AdapterTextLogSource / AdapterFileLogSource: text → ProtocolLogSource
    - AdapterLocalFilesystem: local disk → ProtocolFilesystem
    - AdapterMappingIntrospection: captured ``:verbose function`` output
      → ProtocolIntrospection
    - AdapterRuntimePathIntrospection: ``*.vim`` files under runtime
      directories → ProtocolIntrospection
    - AdapterMemorySink / AdapterStreamSink: → ProtocolPresentationSink

Protocol conformance is verified in tests, not at import time.
"""

from __future__ import annotations

import json
import logging
import os
import re
from collections.abc import Iterable, Mapping, Sequence
from pathlib import Path
from typing import IO, Literal

from vimtrace.nodes.node_vim_stacktrace_compute.handlers.handler_frame_resolution import (
    SCRIPT_LOCAL_PATTERN,
)
from vimtrace.nodes.node_vim_stacktrace_compute.handlers.protocols import (
    QuickfixEntryDict,
)
from vimtrace.nodes.node_vim_stacktrace_compute.models import ModelQuickfixEntry

logger = logging.getLogger(__name__)

OutputFormat = Literal["quickfix", "json"]

_DEFINITION_PATTERN = re.compile(
    r"^\s*fu(?:n(?:c(?:t(?:i(?:o(?:n)?)?)?)?)?)?!?\s+(?P<name>[^\s(]+)\s*\("
)


# =============================================================================
# Log sources
# =============================================================================


class AdapterTextLogSource:
    """Log source over an in-memory message history."""

    __slots__ = ("_text",)

    def __init__(self, text: str) -> None:
        self._text = text

    def read_log(self) -> str:
        """Return the stored text."""
        return self._text


class AdapterFileLogSource:
    """Log source reading a captured ``:messages`` dump (or ``verbosefile``).

    The file is read fresh on every call so each invocation sees the
    current snapshot.
    """

    __slots__ = ("_path",)

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)

    def read_log(self) -> str:
        """Return the file's current contents."""
        return self._path.read_text(encoding="utf-8", errors="replace")


# =============================================================================
# Filesystem
# =============================================================================


class AdapterLocalFilesystem:
    """Read-only access to source files on the local disk."""

    __slots__ = ()

    def is_readable(self, path: str) -> bool:
        """Return True if ``path`` is a readable regular file."""
        expanded = os.path.expanduser(path)
        return os.path.isfile(expanded) and os.access(expanded, os.R_OK)

    def read_lines(self, path: str) -> list[str]:
        """Return the file's lines; undecodable bytes are replaced."""
        text = Path(os.path.expanduser(path)).read_text(
            encoding="utf-8", errors="replace"
        )
        return text.splitlines()


# =============================================================================
# Introspection
# =============================================================================


class AdapterMappingIntrospection:
    """Introspection over pre-captured ``:verbose function`` output.

    Unknown names yield an empty sequence.
    """

    __slots__ = ("_definitions",)

    def __init__(self, definitions: Mapping[str, Sequence[str]]) -> None:
        self._definitions = {name: list(lines) for name, lines in definitions.items()}

    @classmethod
    def from_json_file(cls, path: str | Path) -> AdapterMappingIntrospection:
        """Load ``{"FuncName": ["function FuncName()", "Last set from ..."]}``.

        Raises:
            ValueError: If the document is not an object of string lists.
        """
        data = json.loads(Path(path).read_text(encoding="utf-8"))
        if not isinstance(data, dict) or not all(
            isinstance(lines, list) and all(isinstance(s, str) for s in lines)
            for lines in data.values()
        ):
            raise ValueError(f"Expected an object of string lists in {path}")
        return cls(data)

    def introspect(self, name: str) -> list[str]:
        """Return the captured definition lines for ``name``."""
        return list(self._definitions.get(name, []))


class AdapterRuntimePathIntrospection:
    """Introspection derived from scanning Vim script files.

    Every ``*.vim`` file under the given runtime directories is indexed for
    ``function`` statements. Script-local ``<SNR>N_Name`` lookups match an
    ``s:Name`` definition in any indexed file.

    With ``include_line=False`` the reported ``Last set from`` line omits the
    line number, the way some introspection backends do.
    """

    __slots__ = ("_include_line", "_index", "_roots")

    def __init__(self, roots: Iterable[str | Path], *, include_line: bool = True) -> None:
        self._roots = [Path(os.path.expanduser(str(root))) for root in roots]
        self._include_line = include_line
        self._index: dict[str, tuple[str, int]] | None = None

    def _build_index(self) -> dict[str, tuple[str, int]]:
        index: dict[str, tuple[str, int]] = {}
        for root in self._roots:
            files = [root] if root.is_file() else sorted(root.rglob("*.vim"))
            for script in files:
                try:
                    lines = script.read_text(encoding="utf-8", errors="replace")
                except OSError as e:
                    logger.debug("Skipping unreadable script %s: %s", script, e)
                    continue
                for lnum, line in enumerate(lines.splitlines(), start=1):
                    match = _DEFINITION_PATTERN.match(line)
                    if match is not None:
                        index.setdefault(match.group("name"), (str(script), lnum))
        logger.debug("Indexed %d function definition(s)", len(index))
        return index

    def _lookup(self, name: str) -> tuple[str, int] | None:
        if self._index is None:
            self._index = self._build_index()
        found = self._index.get(name)
        if found is None:
            script_local = SCRIPT_LOCAL_PATTERN.match(name)
            if script_local is not None:
                bare = script_local.group("name")
                found = self._index.get(f"s:{bare}") or self._index.get(
                    f"<SID>{bare}"
                )
        return found

    def introspect(self, name: str) -> list[str]:
        """Return ``:verbose function``-style lines for ``name``."""
        found = self._lookup(name)
        if found is None:
            return []
        path, lnum = found
        last_set = f"\tLast set from {path}"
        if self._include_line:
            last_set += f" line {lnum}"
        return [f"   function {name}(...)", last_set]


# =============================================================================
# Presentation sinks
# =============================================================================


class AdapterMemorySink:
    """Sink keeping the latest list in memory."""

    __slots__ = ("_active", "items", "open_count", "title")

    def __init__(self, *, active: bool = False) -> None:
        self.items: list[QuickfixEntryDict] = []
        self.title: str | None = None
        self.open_count = 0
        self._active = active

    def set_list(self, items: Sequence[QuickfixEntryDict], title: str) -> None:
        """Replace the stored list."""
        self.items = list(items)
        self.title = title

    def is_active(self) -> bool:
        """Return True once the view has been opened."""
        return self._active

    def open(self) -> None:
        """Mark the view visible."""
        self.open_count += 1
        self._active = True


class AdapterStreamSink:
    """Sink rendering the list to a text stream.

    ``quickfix`` renders ``file:line:K: text`` lines readable with Vim's
    default errorformat (``vim -q``); ``json`` renders ``{title, items}``
    with items in ``setqflist()`` shape.
    """

    __slots__ = ("_active", "_output_format", "_stream")

    def __init__(self, stream: IO[str], output_format: OutputFormat = "quickfix") -> None:
        self._stream = stream
        self._output_format = output_format
        self._active = False

    def set_list(self, items: Sequence[QuickfixEntryDict], title: str) -> None:
        """Write the list to the stream."""
        if self._output_format == "json":
            document = {
                "title": title,
                "items": [
                    ModelQuickfixEntry(**item).to_quickfix_dict() for item in items
                ],
            }
            self._stream.write(json.dumps(document, indent=2) + "\n")
        else:
            for item in items:
                self._stream.write(format_quickfix_line(item) + "\n")
        self._stream.flush()

    def is_active(self) -> bool:
        """Return True once opened."""
        return self._active

    def open(self) -> None:
        """Streams are always visible; only the state is recorded."""
        self._active = True


def format_quickfix_line(item: QuickfixEntryDict) -> str:
    """Render one entry as an errorformat-compatible line."""
    if item["file"] is None:
        return f"{item['kind']}: {item['text']}"
    return f"{item['file']}:{item['line']}:{item['kind']}: {item['text']}"


__all__ = [
    "AdapterFileLogSource",
    "AdapterLocalFilesystem",
    "AdapterMappingIntrospection",
    "AdapterMemorySink",
    "AdapterRuntimePathIntrospection",
    "AdapterStreamSink",
    "AdapterTextLogSource",
    "format_quickfix_line",
]
