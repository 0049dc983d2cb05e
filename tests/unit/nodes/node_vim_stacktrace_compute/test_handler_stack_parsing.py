"""Unit tests for call-chain parsing."""

from __future__ import annotations

import pytest

from vimtrace.nodes.node_vim_stacktrace_compute.handlers import (
    LogBlockDict,
    UnrecognizedHeaderError,
    parse_block,
    parse_frame_token,
    split_chain,
    strip_noise_prefix,
)
from vimtrace.nodes.node_vim_stacktrace_compute.models import ModelParserConfig


def _block(context: str, lnum: int = 5, message: str = "E492: oops") -> LogBlockDict:
    return LogBlockDict(
        header_line=f"Error detected while processing {context}:",
        line_number_line=f"line {lnum:>4}:",
        message_line=message,
        start_index=0,
    )


def _tokens(context: str, lnum: int = 5) -> list[str]:
    return [f["token"] for f in parse_block(_block(context, lnum))["frames"]]


@pytest.mark.unit
class TestChainHelpers:
    """Tests for the token-level helpers."""

    def test_split_chain_outer_to_inner(self) -> None:
        assert split_chain("FuncA[12]..FuncB[34]..FuncC[56]") == [
            "FuncA[12]",
            "FuncB[34]",
            "FuncC[56]",
        ]

    def test_split_chain_keeps_parent_directory_paths(self) -> None:
        assert split_chain("script /a/../b.vim[3]..function Foo[1]") == [
            "script /a/../b.vim[3]",
            "function Foo[1]",
        ]

    @pytest.mark.parametrize(
        ("token", "expected"),
        [
            ("function Foo[3]", "Foo[3]"),
            ("script /tmp/x.vim[7]", "/tmp/x.vim[7]"),
            ("Foo[3]", "Foo[3]"),
        ],
    )
    def test_strip_noise_prefix(self, token: str, expected: str) -> None:
        assert strip_noise_prefix(token, ("function ", "script ")) == expected

    def test_parse_frame_token(self) -> None:
        assert parse_frame_token("<SNR>12_Save[40]") == ("<SNR>12_Save", 40)
        assert parse_frame_token("Foo") is None
        assert parse_frame_token("Foo[x]") is None


@pytest.mark.unit
class TestParseBlock:
    """Tests for parse_block."""

    def test_single_function(self) -> None:
        record = parse_block(_block("function FuncA", 5, "E492: Not an editor command"))

        assert record["message"] == "E492: Not an editor command"
        assert [f["token"] for f in record["frames"]] == ["FuncA[5]"]
        assert record["frames"][0]["name"] == "FuncA"
        assert record["frames"][0]["offset"] == 5
        assert record["frames"][0]["kind"] == "function"

    def test_chain_is_reversed_to_inner_first(self) -> None:
        assert _tokens("function FuncA[12]..FuncB[34]..FuncC", 56) == [
            "FuncC[56]",
            "FuncB[34]",
            "FuncA[12]",
        ]

    def test_noise_prefixes_are_stripped_without_touching_offsets(self) -> None:
        record = parse_block(
            _block("command line..script /tmp/x.vim[3]..function Foo", 7)
        )

        assert [(f["name"], f["offset"], f["kind"]) for f in record["frames"]] == [
            ("Foo", 7, "function"),
            ("/tmp/x.vim", 3, "file"),
        ]

    def test_file_frame_ends_the_chain(self) -> None:
        assert _tokens(
            "function Outer[2]..script /tmp/s.vim[4]..function Inner", 9
        ) == ["Inner[9]", "/tmp/s.vim[4]"]

    def test_sourced_file_header(self) -> None:
        record = parse_block(_block("/home/me/.vimrc", 12))

        assert len(record["frames"]) == 1
        assert record["frames"][0]["kind"] == "file"
        assert record["frames"][0]["offset"] == 12

    def test_autocommand_preamble_is_dropped(self) -> None:
        assert _tokens(
            'BufWritePre Autocommands for "*"..function <SNR>12_Save', 3
        ) == ["<SNR>12_Save[3]"]

    def test_autocommand_preamble_without_pattern_is_unrecognized(self) -> None:
        config = ModelParserConfig(preamble_patterns=())
        block = _block('BufWritePre Autocommands for "*"..function <SNR>12_Save', 3)

        with pytest.raises(UnrecognizedHeaderError):
            parse_block(block, config)

    def test_extra_noise_prefix_is_configurable(self) -> None:
        config = ModelParserConfig(noise_prefixes=("function ", "script ", "lambda "))

        record = parse_block(_block("function Outer[1]..lambda <lambda>3", 2), config)

        assert [f["token"] for f in record["frames"]] == ["<lambda>3[2]", "Outer[1]"]

    def test_unrecognized_header_shape_raises(self) -> None:
        with pytest.raises(UnrecognizedHeaderError):
            parse_block(_block("Something odd happened"))

    def test_empty_context_raises(self) -> None:
        with pytest.raises(UnrecognizedHeaderError):
            parse_block(_block("function "))

    def test_innermost_segment_with_offset_is_unrecognized(self) -> None:
        with pytest.raises(UnrecognizedHeaderError):
            parse_block(_block("function Foo[3]", 5))

    def test_bracketed_token_is_not_a_frame(self) -> None:
        assert parse_frame_token("Foo[3][5]") is None
