"""Call-chain parsing for Vim Stacktrace Compute.

Turns one segmented log block into an ErrorRecordDict whose frames are
ordered innermost first. After this step nothing downstream re-tokenizes
the flattened chain string.

Header shapes handled (after the ``Error detected while processing`` lead):

    function FuncA[12]..FuncB[34]..FuncC
    command line..script /tmp/x.vim[3]..function Foo
    BufWritePre Autocommands for "*"..function <SNR>12_Save
    /home/me/.vimrc
"""

from __future__ import annotations

import logging
import re

from vimtrace.enums import EnumFrameKind
from vimtrace.nodes.node_vim_stacktrace_compute.handlers.exceptions import (
    UnrecognizedHeaderError,
)
from vimtrace.nodes.node_vim_stacktrace_compute.handlers.handler_segmentation import (
    HEADER_PATTERN,
    LINE_NUMBER_PATTERN,
)
from vimtrace.nodes.node_vim_stacktrace_compute.handlers.protocols import (
    ErrorRecordDict,
    LogBlockDict,
    RawFrameDict,
)
from vimtrace.nodes.node_vim_stacktrace_compute.models.model_stacktrace_config import (
    ModelParserConfig,
)

logger = logging.getLogger(__name__)

CHAIN_DELIMITER = ".."
FRAME_TOKEN_PATTERN = re.compile(r"^(?P<name>[^\[\]]+)\[(?P<offset>\d+)\]$")
# Only split on ".." that closes a segment, so "/a/../b.vim" survives.
_CHAIN_SPLIT_PATTERN = re.compile(r'(?<=[\]"])\.\.')


def is_file_name(name: str) -> bool:
    """Return True if a frame name denotes a sourced file, not a function."""
    return "/" in name or "\\" in name or "." in name


def strip_noise_prefix(token: str, noise_prefixes: tuple[str, ...]) -> str:
    """Remove the first matching noise prefix (``function ``, ``script ``)."""
    for prefix in noise_prefixes:
        if token.startswith(prefix):
            return token[len(prefix) :]
    return token


def strip_header_keyword(context: str, header_keywords: tuple[str, ...]) -> str:
    """Remove a leading ``function `` or ``command line..`` keyword."""
    for keyword in header_keywords:
        if context.startswith(keyword):
            return context[len(keyword) :]
    return context


def split_chain(chain: str) -> list[str]:
    """Split a flattened chain on its ``..`` delimiter, outer to inner."""
    return [segment for segment in _CHAIN_SPLIT_PATTERN.split(chain) if segment]


def parse_frame_token(token: str) -> tuple[str, int] | None:
    """Split ``Name[Offset]`` into its parts, or None if malformed."""
    match = FRAME_TOKEN_PATTERN.match(token)
    if match is None:
        return None
    return match.group("name"), int(match.group("offset"))


def extract_relative_line(line_number_line: str) -> int:
    """Return the digits following ``line`` in the line-number line.

    Raises:
        UnrecognizedHeaderError: If the line does not carry a line number.
    """
    match = LINE_NUMBER_PATTERN.match(line_number_line)
    if match is None:
        raise UnrecognizedHeaderError(
            f"Not a line number line: {line_number_line!r}"
        )
    return int(match.group("lnum"))


def extract_chain(header_line: str, header_keywords: tuple[str, ...]) -> str:
    """Return the flattened call chain named by an error header.

    Raises:
        UnrecognizedHeaderError: If the header is malformed or names nothing.
    """
    match = HEADER_PATTERN.match(header_line)
    if match is None:
        raise UnrecognizedHeaderError(f"Not an error header: {header_line!r}")
    chain = strip_header_keyword(match.group("context"), header_keywords).strip()
    if not chain:
        raise UnrecognizedHeaderError(f"Header names no context: {header_line!r}")
    return chain


def _to_raw_frame(token: str) -> RawFrameDict:
    parsed = parse_frame_token(token)
    if parsed is None:
        raise UnrecognizedHeaderError(f"Unrecognized chain segment: {token!r}")
    name, offset = parsed
    kind = EnumFrameKind.FILE if is_file_name(name) else EnumFrameKind.FUNCTION
    if kind is EnumFrameKind.FUNCTION and any(ch.isspace() for ch in name):
        raise UnrecognizedHeaderError(f"Unrecognized chain segment: {token!r}")
    return RawFrameDict(token=token, name=name, offset=offset, kind=kind.value)


def parse_block(
    block: LogBlockDict,
    config: ModelParserConfig | None = None,
    *,
    correlation_id: str | None = None,
) -> ErrorRecordDict:
    """Convert a segmented block into a structured error record.

    The relative line number is appended to the innermost chain segment,
    the chain is split, noise prefixes and autocommand preambles are
    removed, and the frames are reversed to innermost first. A file-typed
    frame ends the chain: frames outside a sourced file are dropped.

    Args:
        block: Header, line-number and message lines of one error.
        config: Parser configuration; defaults apply when None.
        correlation_id: Correlation ID for tracing.

    Returns:
        ErrorRecordDict with at least one frame.

    Raises:
        UnrecognizedHeaderError: If the header shape cannot be decomposed.
    """
    config = config or ModelParserConfig()

    relative_line = extract_relative_line(block["line_number_line"])
    chain = extract_chain(block["header_line"], config.header_keywords)
    flattened = f"{chain}[{relative_line}]"

    frames: list[RawFrameDict] = []
    for segment in split_chain(flattened):
        token = strip_noise_prefix(segment, config.noise_prefixes)
        if any(re.match(pattern, token) for pattern in config.preamble_patterns):
            logger.debug(
                "Dropping chain preamble %r",
                token,
                extra={"correlation_id": correlation_id},
            )
            continue
        frames.append(_to_raw_frame(token))

    frames.reverse()

    for index, frame in enumerate(frames):
        if frame["kind"] == EnumFrameKind.FILE.value:
            frames = frames[: index + 1]
            break

    if not frames:
        raise UnrecognizedHeaderError(
            f"Header yielded no frames: {block['header_line']!r}"
        )

    logger.debug(
        "Parsed error record with %d frame(s): %s",
        len(frames),
        flattened,
        extra={"correlation_id": correlation_id},
    )

    return ErrorRecordDict(message=block["message_line"], frames=frames)


__all__ = [
    "CHAIN_DELIMITER",
    "FRAME_TOKEN_PATTERN",
    "extract_chain",
    "extract_relative_line",
    "is_file_name",
    "parse_block",
    "parse_frame_token",
    "split_chain",
    "strip_header_keyword",
    "strip_noise_prefix",
]
