"""
Stacktrace Enums Package.

Consolidated enums for the vimtrace system:

    from vimtrace.enums import EnumEntryKind, EnumFrameKind, EnumTraceStatus
"""

from vimtrace.enums.enum_entry_kind import EnumEntryKind
from vimtrace.enums.enum_frame_kind import EnumFrameKind
from vimtrace.enums.enum_trace_status import EnumTraceStatus

__all__ = [
    "EnumEntryKind",
    "EnumFrameKind",
    "EnumTraceStatus",
]
