"""Unit tests for the stacktrace models and settings."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from vimtrace.enums import EnumEntryKind, EnumFrameKind, EnumTraceStatus
from vimtrace.nodes.node_vim_stacktrace_compute.models import (
    ModelErrorRecord,
    ModelParserConfig,
    ModelQuickfixEntry,
    ModelRawFrame,
    ModelStacktraceInput,
    ModelStacktraceOutput,
    VimStacktraceSettings,
)


@pytest.mark.unit
class TestErrorRecord:
    """Tests for ModelErrorRecord."""

    def test_empty_frames_rejected(self) -> None:
        with pytest.raises(ValidationError):
            ModelErrorRecord(message="E1: x", frames=[])

    def test_frozen(self) -> None:
        record = ModelErrorRecord(
            message="E1: x",
            frames=[ModelRawFrame(token="Foo[1]", name="Foo", offset=1)],
        )
        assert record.frames[0].kind is EnumFrameKind.FUNCTION
        with pytest.raises(ValidationError):
            record.message = "changed"  # type: ignore[misc]


@pytest.mark.unit
class TestQuickfixEntry:
    """Tests for ModelQuickfixEntry."""

    def test_to_quickfix_dict_with_file(self) -> None:
        entry = ModelQuickfixEntry(
            text="0. Foo[1]", file="/tmp/a.vim", line=11, kind=EnumEntryKind.INFO
        )
        assert entry.to_quickfix_dict() == {
            "text": "0. Foo[1]",
            "filename": "/tmp/a.vim",
            "lnum": 11,
            "bufnr": 0,
            "type": "I",
        }

    def test_to_quickfix_dict_without_file(self) -> None:
        entry = ModelQuickfixEntry(text="E1: x", kind=EnumEntryKind.ERROR)
        assert "filename" not in entry.to_quickfix_dict()


@pytest.mark.unit
class TestStacktraceOutput:
    """Tests for ModelStacktraceOutput validation."""

    def test_found_requires_error_entry_per_record(self) -> None:
        with pytest.raises(ValidationError):
            ModelStacktraceOutput(status=EnumTraceStatus.FOUND)

    def test_no_trace_may_be_empty(self) -> None:
        output = ModelStacktraceOutput(status=EnumTraceStatus.NO_TRACE)
        assert output.success is False


@pytest.mark.unit
class TestSettings:
    """Tests for VimStacktraceSettings and ModelParserConfig."""

    def test_defaults(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("VIMTRACE_MAX_ADJACENCY_DISTANCE", raising=False)
        config = VimStacktraceSettings().to_parser_config()

        assert config == ModelParserConfig()
        assert config.max_adjacency_distance == 3
        assert config.noise_prefixes == ("function ", "script ")

    def test_override_wins_over_settings(self) -> None:
        settings = VimStacktraceSettings(max_adjacency_distance=5)
        assert settings.to_parser_config(1).max_adjacency_distance == 1
        assert settings.to_parser_config().max_adjacency_distance == 5

    def test_noise_prefixes_from_environment(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("VIMTRACE_NOISE_PREFIXES", '["function ", "script ", "lambda "]')

        config = VimStacktraceSettings().to_parser_config()

        assert config.noise_prefixes == ("function ", "script ", "lambda ")

    def test_negative_distance_rejected(self) -> None:
        with pytest.raises(ValidationError):
            ModelStacktraceInput(max_adjacency_distance=-1)
