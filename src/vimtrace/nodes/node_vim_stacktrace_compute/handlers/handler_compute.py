# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Orchestration handler for Vim Stacktrace Compute.

This module coordinates the stacktrace workflow:
1. Reads the current log snapshot
2. Segments the most recent error block(s)
3. Parses each block into an error record
4. Resolves frames and builds the entry list
5. Publishes the list to the presentation sink

Error Handling: Returns structured output, never raises.
Correlation ID: Threaded through all operations for end-to-end tracing.
"""

from __future__ import annotations

import contextlib
import logging
import time

from vimtrace.enums import EnumTraceStatus
from vimtrace.nodes.node_vim_stacktrace_compute.handlers.exceptions import (
    UnrecognizedHeaderError,
)
from vimtrace.nodes.node_vim_stacktrace_compute.handlers.handler_entry_list import (
    build_entries,
    publish_entries,
)
from vimtrace.nodes.node_vim_stacktrace_compute.handlers.handler_segmentation import (
    segment_log,
)
from vimtrace.nodes.node_vim_stacktrace_compute.handlers.handler_stack_parsing import (
    parse_block,
)
from vimtrace.nodes.node_vim_stacktrace_compute.handlers.protocols import (
    ErrorRecordDict,
    ProtocolFilesystem,
    ProtocolIntrospection,
    ProtocolLogSource,
    ProtocolPresentationSink,
    QuickfixEntryDict,
)
from vimtrace.nodes.node_vim_stacktrace_compute.models import (
    ModelErrorRecord,
    ModelQuickfixEntry,
    ModelRawFrame,
    ModelStacktraceInput,
    ModelStacktraceOutput,
    VimStacktraceSettings,
)

logger = logging.getLogger(__name__)

NO_TRACE_MESSAGE = "No stacktrace found"
UNPARSEABLE_MESSAGE = "Could not parse stacktrace"


def handle_stacktrace_compute(
    input_data: ModelStacktraceInput,
    *,
    log_source: ProtocolLogSource,
    introspection: ProtocolIntrospection,
    filesystem: ProtocolFilesystem,
    sink: ProtocolPresentationSink,
    settings: VimStacktraceSettings | None = None,
) -> ModelStacktraceOutput:
    """Reconstruct the most recent stacktrace and publish it to the sink.

    Args:
        input_data: Per-invocation options.
        log_source: Message history provider.
        introspection: Function definition lookup.
        filesystem: Source file reader.
        sink: Presentation sink receiving the entry list.
        settings: Configuration; loaded from the environment when None.

    Returns:
        ModelStacktraceOutput. On NO_TRACE or UNPARSEABLE the sink is not
        touched and ``message`` holds the text to report.

    Note:
        This function never raises exceptions. All errors are captured
        and returned as structured output.
    """
    start_time = time.perf_counter()
    correlation_id = input_data.correlation_id

    logger.debug(
        "Starting stacktrace compute",
        extra={"correlation_id": correlation_id},
    )

    try:
        return _execute(
            input_data,
            log_source=log_source,
            introspection=introspection,
            filesystem=filesystem,
            sink=sink,
            settings=settings or VimStacktraceSettings(),
            start_time=start_time,
        )

    except Exception as e:
        # Log with exception info, but suppress logging failures
        with contextlib.suppress(Exception):
            logger.exception(
                "Unhandled exception in stacktrace compute: %s",
                str(e),
                extra={"correlation_id": correlation_id},
            )
        return ModelStacktraceOutput(
            status=EnumTraceStatus.UNPARSEABLE,
            message=UNPARSEABLE_MESSAGE,
            warnings=[f"Unhandled error: {e}"],
            processing_time_ms=_elapsed_time_ms(start_time),
        )


def _execute(
    input_data: ModelStacktraceInput,
    *,
    log_source: ProtocolLogSource,
    introspection: ProtocolIntrospection,
    filesystem: ProtocolFilesystem,
    sink: ProtocolPresentationSink,
    settings: VimStacktraceSettings,
    start_time: float,
) -> ModelStacktraceOutput:
    correlation_id = input_data.correlation_id
    config = settings.to_parser_config(input_data.max_adjacency_distance)

    blocks = segment_log(
        log_source.read_log(),
        config.max_adjacency_distance,
        pseudo_path_pattern=config.pseudo_path_pattern,
        correlation_id=correlation_id,
    )
    if not blocks:
        logger.info(NO_TRACE_MESSAGE, extra={"correlation_id": correlation_id})
        return ModelStacktraceOutput(
            status=EnumTraceStatus.NO_TRACE,
            message=NO_TRACE_MESSAGE,
            processing_time_ms=_elapsed_time_ms(start_time),
        )

    warnings: list[str] = []
    records: list[ErrorRecordDict] = []
    for block in blocks:
        try:
            records.append(parse_block(block, config, correlation_id=correlation_id))
        except UnrecognizedHeaderError as e:
            warnings.append(str(e))
            logger.warning(
                "Skipping unrecognized error block: %s",
                e,
                extra={"correlation_id": correlation_id},
            )

    entries = build_entries(
        records, introspection, filesystem, correlation_id=correlation_id
    )
    if not entries:
        logger.warning(UNPARSEABLE_MESSAGE, extra={"correlation_id": correlation_id})
        return ModelStacktraceOutput(
            status=EnumTraceStatus.UNPARSEABLE,
            message=UNPARSEABLE_MESSAGE,
            warnings=warnings,
            processing_time_ms=_elapsed_time_ms(start_time),
        )

    publish_entries(entries, sink, input_data.title or settings.list_title)

    processing_time = _elapsed_time_ms(start_time)
    logger.debug(
        "Stacktrace complete: records=%d, entries=%d, time_ms=%.2f",
        len(records),
        len(entries),
        processing_time,
        extra={"correlation_id": correlation_id},
    )

    return ModelStacktraceOutput(
        status=EnumTraceStatus.FOUND,
        entries=[_to_entry_model(e) for e in entries],
        records=[_to_record_model(r) for r in records],
        warnings=warnings,
        processing_time_ms=processing_time,
    )


def _to_record_model(record: ErrorRecordDict) -> ModelErrorRecord:
    return ModelErrorRecord(
        message=record["message"],
        frames=[
            ModelRawFrame(
                token=f["token"],
                name=f["name"],
                offset=f["offset"],
                kind=f["kind"],
            )
            for f in record["frames"]
        ],
    )


def _to_entry_model(entry: QuickfixEntryDict) -> ModelQuickfixEntry:
    return ModelQuickfixEntry(
        text=entry["text"],
        file=entry["file"],
        line=entry["line"],
        buffer_id=entry["buffer_id"],
        kind=entry["kind"],
    )


def _elapsed_time_ms(start_time: float) -> float:
    """Calculate elapsed time in milliseconds."""
    return (time.perf_counter() - start_time) * 1000


__all__ = [
    "NO_TRACE_MESSAGE",
    "UNPARSEABLE_MESSAGE",
    "handle_stacktrace_compute",
]
