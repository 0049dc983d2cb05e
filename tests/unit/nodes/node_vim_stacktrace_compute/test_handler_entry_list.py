"""Unit tests for entry list construction and publishing."""

from __future__ import annotations

import pytest

from vimtrace.adapters import AdapterMemorySink
from vimtrace.nodes.node_vim_stacktrace_compute.handlers import (
    ErrorRecordDict,
    QuickfixEntryDict,
    RawFrameDict,
    build_entries,
    publish_entries,
)


def _record(message: str, *tokens: tuple[str, int]) -> ErrorRecordDict:
    return ErrorRecordDict(
        message=message,
        frames=[
            RawFrameDict(token=f"{n}[{o}]", name=n, offset=o, kind="function")
            for n, o in tokens
        ],
    )


@pytest.mark.unit
class TestBuildEntries:
    """Tests for build_entries."""

    def test_message_then_frames(self, introspection, fake_filesystem) -> None:
        entries = build_entries(
            [_record("E121: Undefined variable: x", ("FuncA", 2))],
            introspection,
            fake_filesystem,
        )

        assert entries == [
            {
                "text": "E121: Undefined variable: x",
                "file": None,
                "line": 0,
                "buffer_id": 0,
                "kind": "E",
            },
            {
                "text": "0. FuncA[2]",
                "file": "/tmp/a.vim",
                "line": 3,
                "buffer_id": 0,
                "kind": "I",
            },
        ]

    def test_records_keep_chronological_order(
        self, introspection, fake_filesystem
    ) -> None:
        entries = build_entries(
            [
                _record("E1: first", ("FuncB", 1), ("FuncA", 3)),
                _record("E2: second", ("Foo", 1)),
            ],
            introspection,
            fake_filesystem,
        )

        assert [(e["kind"], e["text"]) for e in entries] == [
            ("E", "E1: first"),
            ("I", "0. FuncB[1]"),
            ("I", "1. FuncA[3]"),
            ("E", "E2: second"),
            ("I", "0. Foo[1]"),
        ]

    def test_unresolved_frames_leave_only_the_message(
        self, introspection, fake_filesystem
    ) -> None:
        entries = build_entries(
            [_record("E1: lonely", ("Missing", 1), ("Nope", 2))],
            introspection,
            fake_filesystem,
        )

        assert [e["text"] for e in entries] == ["E1: lonely"]

    def test_no_records_builds_nothing(self, introspection, fake_filesystem) -> None:
        assert build_entries([], introspection, fake_filesystem) == []


@pytest.mark.unit
class TestPublishEntries:
    """Tests for publish_entries."""

    ENTRY = QuickfixEntryDict(text="E1: x", file=None, line=0, buffer_id=0, kind="E")

    def test_empty_list_leaves_sink_untouched(self, memory_sink) -> None:
        memory_sink.set_list([self.ENTRY], "previous")

        assert publish_entries([], memory_sink, "Stacktrace") is False
        assert memory_sink.title == "previous"
        assert memory_sink.open_count == 0

    def test_publish_opens_inactive_sink(self, memory_sink) -> None:
        assert publish_entries([self.ENTRY], memory_sink, "Stacktrace") is True
        assert memory_sink.items == [self.ENTRY]
        assert memory_sink.title == "Stacktrace"
        assert memory_sink.open_count == 1

    def test_publish_does_not_reopen_active_sink(self) -> None:
        sink = AdapterMemorySink(active=True)

        publish_entries([self.ENTRY], sink, "Stacktrace")

        assert sink.items == [self.ENTRY]
        assert sink.open_count == 0
