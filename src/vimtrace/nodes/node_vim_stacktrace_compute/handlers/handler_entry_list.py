"""Entry list construction for Vim Stacktrace Compute.

Flattens error records and their resolved frames into one ordered list of
quickfix-style entries and hands it to the presentation sink.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from vimtrace.enums import EnumEntryKind
from vimtrace.nodes.node_vim_stacktrace_compute.handlers.handler_frame_resolution import (
    resolve_record_frames,
)
from vimtrace.nodes.node_vim_stacktrace_compute.handlers.protocols import (
    ErrorRecordDict,
    ProtocolFilesystem,
    ProtocolIntrospection,
    ProtocolPresentationSink,
    QuickfixEntryDict,
)

logger = logging.getLogger(__name__)


def build_entries(
    records: Sequence[ErrorRecordDict],
    introspection: ProtocolIntrospection,
    filesystem: ProtocolFilesystem,
    *,
    correlation_id: str | None = None,
) -> list[QuickfixEntryDict]:
    """Build the entry list for records given in chronological order.

    Each record contributes one Error entry for its message followed by one
    Info entry per resolved frame, innermost first. Unresolved frames are
    left out without placeholders.
    """
    entries: list[QuickfixEntryDict] = []
    for record in records:
        entries.append(
            QuickfixEntryDict(
                text=record["message"],
                file=None,
                line=0,
                buffer_id=0,
                kind=EnumEntryKind.ERROR.value,
            )
        )
        for frame in resolve_record_frames(
            record, introspection, filesystem, correlation_id=correlation_id
        ):
            entries.append(
                QuickfixEntryDict(
                    text=frame["display_text"],
                    file=frame["source_file"],
                    line=frame["source_line"] or 0,
                    buffer_id=0,
                    kind=EnumEntryKind.INFO.value,
                )
            )

    logger.debug(
        "Built %d entries from %d record(s)",
        len(entries),
        len(records),
        extra={"correlation_id": correlation_id},
    )
    return entries


def publish_entries(
    entries: Sequence[QuickfixEntryDict],
    sink: ProtocolPresentationSink,
    title: str,
) -> bool:
    """Replace the sink's list and open it unless it is already active.

    Returns:
        False (and leaves the sink untouched) when there is nothing to show.
    """
    if not entries:
        return False
    sink.set_list(list(entries), title)
    if not sink.is_active():
        sink.open()
    return True


__all__ = ["build_entries", "publish_entries"]
