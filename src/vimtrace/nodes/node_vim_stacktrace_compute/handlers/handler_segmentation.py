"""Log segmentation for Vim Stacktrace Compute.

Isolates the block(s) of the most recent error, or tight run of errors,
from the tail of the message history. Pure functions, no I/O.
"""

from __future__ import annotations

import logging
import re

from vimtrace.nodes.node_vim_stacktrace_compute.handlers.protocols import (
    LogBlockDict,
)
from vimtrace.nodes.node_vim_stacktrace_compute.models.model_stacktrace_config import (
    DEFAULT_MAX_ADJACENCY_DISTANCE,
    DEFAULT_PSEUDO_PATH_PATTERN,
)

logger = logging.getLogger(__name__)

HEADER_PATTERN = re.compile(r"^Error detected while processing (?P<context>.*):$")
LINE_NUMBER_PATTERN = re.compile(r"^line\s+(?P<lnum>\d+)")

# header + line number + message
BLOCK_SIZE = 3


def split_log_lines(raw_log: str) -> list[str]:
    """Split the log into lines, dropping every blank line.

    The message history sometimes repeats blank lines, so blank lines are
    never significant.
    """
    return [line for line in raw_log.replace("\r", "").split("\n") if line.strip()]


def is_pseudo_path_header(line: str, pseudo_path_pattern: str) -> bool:
    """Return True if the header refers to a file-descriptor pseudo-path."""
    return re.search(pseudo_path_pattern, line) is not None


def _is_block_start(lines: list[str], index: int, pseudo_path_pattern: str) -> bool:
    if index + BLOCK_SIZE > len(lines):
        return False
    header = lines[index]
    if HEADER_PATTERN.match(header) is None:
        return False
    if is_pseudo_path_header(header, pseudo_path_pattern):
        logger.debug("Skipping pseudo-path header at line %d: %s", index, header)
        return False
    return LINE_NUMBER_PATTERN.match(lines[index + 1]) is not None


def segment_log(
    raw_log: str,
    max_adjacency_distance: int = DEFAULT_MAX_ADJACENCY_DISTANCE,
    *,
    pseudo_path_pattern: str = DEFAULT_PSEUDO_PATH_PATTERN,
    correlation_id: str | None = None,
) -> list[LogBlockDict]:
    """Locate the most recent error block and any errors adjacent to it.

    Lines are scanned from the end. Once the scan has moved more than
    ``max_adjacency_distance`` lines past the last header found without
    meeting another one, it stops: older errors are unrelated history.

    Args:
        raw_log: Full message history, most recent message last.
        max_adjacency_distance: Allowed gap between consecutive headers.
        pseudo_path_pattern: Regex of header paths to skip.
        correlation_id: Correlation ID for tracing.

    Returns:
        Blocks in chronological order (earliest first); empty when no trace
        is available.
    """
    lines = split_log_lines(raw_log)
    if len(lines) < BLOCK_SIZE:
        logger.debug(
            "Log too short to hold an error block (%d lines)",
            len(lines),
            extra={"correlation_id": correlation_id},
        )
        return []

    blocks: list[LogBlockDict] = []
    last_header_index: int | None = None

    for index in range(len(lines) - 1, -1, -1):
        if _is_block_start(lines, index, pseudo_path_pattern):
            blocks.append(
                LogBlockDict(
                    header_line=lines[index],
                    line_number_line=lines[index + 1],
                    message_line=lines[index + 2],
                    start_index=index,
                )
            )
            last_header_index = index
            continue

        if (
            last_header_index is not None
            and last_header_index - index > max_adjacency_distance
        ):
            break

    blocks.reverse()

    logger.debug(
        "Segmented %d error block(s) from %d log lines",
        len(blocks),
        len(lines),
        extra={"correlation_id": correlation_id},
    )
    return blocks


__all__ = [
    "HEADER_PATTERN",
    "LINE_NUMBER_PATTERN",
    "is_pseudo_path_header",
    "segment_log",
    "split_log_lines",
]
