"""Handlers for Vim Stacktrace Compute Node.

This module re-exports all public functions and types from the handler
submodules, providing a clean API for the node.

Architecture:
    - handler_compute: Orchestration layer (Pydantic <-> TypedDict)
    - handler_segmentation: Isolating the latest error block(s)
    - handler_stack_parsing: Header and call-chain parsing
    - handler_frame_resolution: Frame to file/line resolution
    - handler_entry_list: Entry list building and publishing
    - protocols: TypedDict contracts and collaborator protocols
    - exceptions: Domain-specific errors
"""

from vimtrace.nodes.node_vim_stacktrace_compute.handlers.exceptions import (
    FrameResolutionError,
    StacktraceParsingError,
    UnrecognizedHeaderError,
)
from vimtrace.nodes.node_vim_stacktrace_compute.handlers.handler_compute import (
    NO_TRACE_MESSAGE,
    UNPARSEABLE_MESSAGE,
    handle_stacktrace_compute,
)
from vimtrace.nodes.node_vim_stacktrace_compute.handlers.handler_entry_list import (
    build_entries,
    publish_entries,
)
from vimtrace.nodes.node_vim_stacktrace_compute.handlers.handler_frame_resolution import (
    definition_pattern,
    parse_last_set_from,
    resolve_frame,
    resolve_record_frames,
    resolve_token,
    scan_for_definition,
)
from vimtrace.nodes.node_vim_stacktrace_compute.handlers.handler_segmentation import (
    is_pseudo_path_header,
    segment_log,
    split_log_lines,
)
from vimtrace.nodes.node_vim_stacktrace_compute.handlers.handler_stack_parsing import (
    extract_chain,
    extract_relative_line,
    is_file_name,
    parse_block,
    parse_frame_token,
    split_chain,
    strip_header_keyword,
    strip_noise_prefix,
)
from vimtrace.nodes.node_vim_stacktrace_compute.handlers.protocols import (
    DefinitionLocationDict,
    ErrorRecordDict,
    LogBlockDict,
    ProtocolFilesystem,
    ProtocolIntrospection,
    ProtocolLogSource,
    ProtocolPresentationSink,
    QuickfixEntryDict,
    RawFrameDict,
    ResolvedFrameDict,
)

__all__ = [
    "NO_TRACE_MESSAGE",
    "UNPARSEABLE_MESSAGE",
    "DefinitionLocationDict",
    "ErrorRecordDict",
    "FrameResolutionError",
    "LogBlockDict",
    "ProtocolFilesystem",
    "ProtocolIntrospection",
    "ProtocolLogSource",
    "ProtocolPresentationSink",
    "QuickfixEntryDict",
    "RawFrameDict",
    "ResolvedFrameDict",
    "StacktraceParsingError",
    "UnrecognizedHeaderError",
    "build_entries",
    "definition_pattern",
    "extract_chain",
    "extract_relative_line",
    "handle_stacktrace_compute",
    "is_file_name",
    "is_pseudo_path_header",
    "parse_block",
    "parse_frame_token",
    "parse_last_set_from",
    "publish_entries",
    "resolve_frame",
    "resolve_record_frames",
    "resolve_token",
    "scan_for_definition",
    "segment_log",
    "split_chain",
    "split_log_lines",
    "strip_header_keyword",
    "strip_noise_prefix",
]
