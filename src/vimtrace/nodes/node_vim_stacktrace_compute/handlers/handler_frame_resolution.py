"""Frame resolution for Vim Stacktrace Compute.

Maps each raw frame to the source file and absolute line where the call
happened. The log only records a line number relative to the function
body, so the function's definition site is looked up through the
introspection collaborator and combined with that offset.

Two strategies, tried in order:
    1. Offset accumulation: introspection reports ``Last set from <path>
       line <n>``; the absolute line is ``n + offset``.
    2. Pattern scan: introspection reports only the path; the file is read
       and scanned from ``offset`` for the function's signature.

Error Handling: a frame that cannot be resolved yields None and is left
out of the entry list. Collaborator failures never propagate.
"""

from __future__ import annotations

import logging
import os
import re
from collections.abc import Sequence

from vimtrace.enums import EnumFrameKind
from vimtrace.nodes.node_vim_stacktrace_compute.handlers.exceptions import (
    FrameResolutionError,
)
from vimtrace.nodes.node_vim_stacktrace_compute.handlers.handler_stack_parsing import (
    is_file_name,
    parse_frame_token,
)
from vimtrace.nodes.node_vim_stacktrace_compute.handlers.protocols import (
    DefinitionLocationDict,
    ErrorRecordDict,
    ProtocolFilesystem,
    ProtocolIntrospection,
    RawFrameDict,
    ResolvedFrameDict,
)

logger = logging.getLogger(__name__)

LAST_SET_FROM_PATTERN = re.compile(
    r"Last set from (?P<path>.*?)(?: line (?P<lnum>\d+))?\s*$"
)
SCRIPT_LOCAL_PATTERN = re.compile(r"^<SNR>\d+_(?P<name>.+)$")
# ":fu", ":fun", ... ":function", with or without "!"
_FUNCTION_COMMAND = r"fu(?:n(?:c(?:t(?:i(?:o(?:n)?)?)?)?)?)?!?"


def parse_last_set_from(line: str) -> DefinitionLocationDict | None:
    """Extract the defining path and optional line from introspection output.

    Returns:
        DefinitionLocationDict, or None when the line has no usable path.
    """
    match = LAST_SET_FROM_PATTERN.search(line)
    if match is None:
        return None
    path = match.group("path").strip()
    if not path:
        return None
    lnum = match.group("lnum")
    return DefinitionLocationDict(
        path=path, line=int(lnum) if lnum is not None else None
    )


def definition_pattern(name: str) -> re.Pattern[str]:
    """Build the regex matching the ``function`` statement defining ``name``.

    Script-local functions appear mangled as ``<SNR>12_Name`` in the log but
    are written ``s:Name`` (or ``<SID>Name``) in source, so every form is
    accepted.
    """
    script_local = SCRIPT_LOCAL_PATTERN.match(name)
    bare = script_local.group("name") if script_local else name
    forms = [name, f"s:{bare}", f"<SID>{bare}"]
    if script_local:
        forms.append(bare)
    alternation = "|".join(re.escape(form) for form in dict.fromkeys(forms))
    return re.compile(rf"^\s*{_FUNCTION_COMMAND}\s+(?:{alternation})\b")


def scan_for_definition(lines: Sequence[str], name: str, start: int) -> int | None:
    """Scan forward from ``start`` for the definition of ``name``.

    The result counts one line per scanned line on top of ``start``, so a
    scan from 0 that matches the 20th physical line returns 20.

    Returns:
        The resolved line number, or None at end of file without a match.
    """
    pattern = definition_pattern(name)
    lnum = start
    for line in lines[start:]:
        lnum += 1
        if pattern.search(line):
            return lnum
    return None


def _introspect(introspection: ProtocolIntrospection, name: str) -> list[str]:
    try:
        return list(introspection.introspect(name))
    except Exception as e:
        raise FrameResolutionError(f"Introspection failed for {name}: {e}") from e


def _locate_function(
    frame: RawFrameDict,
    introspection: ProtocolIntrospection,
    filesystem: ProtocolFilesystem,
) -> tuple[str, int]:
    name = frame["name"]
    definition = _introspect(introspection, name)
    if len(definition) < 2:
        raise FrameResolutionError(f"No definition information for {name}")

    location = parse_last_set_from(definition[1])
    if location is None:
        raise FrameResolutionError(f"No source path reported for {name}")

    path = os.path.expanduser(location["path"])
    try:
        readable = filesystem.is_readable(path)
    except Exception as e:
        raise FrameResolutionError(f"Cannot check {path}: {e}") from e
    if not readable:
        raise FrameResolutionError(f"Source not readable: {path}")

    if location["line"] is not None:
        return path, location["line"] + frame["offset"]

    try:
        lines = filesystem.read_lines(path)
    except Exception as e:
        raise FrameResolutionError(f"Cannot read {path}: {e}") from e

    lnum = scan_for_definition(lines, name, frame["offset"])
    if lnum is None:
        raise FrameResolutionError(f"Definition of {name} not found in {path}")
    return path, lnum


def resolve_frame(
    frame: RawFrameDict,
    introspection: ProtocolIntrospection,
    filesystem: ProtocolFilesystem,
    *,
    index: int = 0,
    correlation_id: str | None = None,
) -> ResolvedFrameDict | None:
    """Resolve one frame to a navigable location.

    Args:
        frame: Parsed frame token.
        introspection: Function definition lookup.
        filesystem: Source file reader.
        index: Position among the record's successfully resolved frames.
        correlation_id: Correlation ID for tracing.

    Returns:
        ResolvedFrameDict, or None when the frame cannot be resolved.
    """
    if frame["kind"] == EnumFrameKind.FILE.value:
        # A sourced file logs an absolute line in that file.
        return ResolvedFrameDict(
            display_text="",
            source_file=os.path.expanduser(frame["name"]),
            source_line=frame["offset"],
        )

    try:
        path, lnum = _locate_function(frame, introspection, filesystem)
    except FrameResolutionError as e:
        logger.debug(
            "Omitting frame %s: %s",
            frame["token"],
            e,
            extra={"correlation_id": correlation_id},
        )
        return None

    return ResolvedFrameDict(
        display_text=f"{index}. {frame['token']}",
        source_file=path,
        source_line=lnum,
    )


def resolve_token(
    token: str,
    introspection: ProtocolIntrospection,
    filesystem: ProtocolFilesystem,
    *,
    index: int = 0,
) -> ResolvedFrameDict | None:
    """Resolve a bare ``Name[Offset]`` token; malformed tokens yield None."""
    parsed = parse_frame_token(token)
    if parsed is None:
        return None
    name, offset = parsed
    kind = EnumFrameKind.FILE if is_file_name(name) else EnumFrameKind.FUNCTION
    frame = RawFrameDict(token=token, name=name, offset=offset, kind=kind.value)
    return resolve_frame(frame, introspection, filesystem, index=index)


def resolve_record_frames(
    record: ErrorRecordDict,
    introspection: ProtocolIntrospection,
    filesystem: ProtocolFilesystem,
    *,
    correlation_id: str | None = None,
) -> list[ResolvedFrameDict]:
    """Resolve every frame of a record, closing gaps left by failures.

    Failed frames do not consume a display index.
    """
    resolved: list[ResolvedFrameDict] = []
    for frame in record["frames"]:
        result = resolve_frame(
            frame,
            introspection,
            filesystem,
            index=len(resolved),
            correlation_id=correlation_id,
        )
        if result is not None:
            resolved.append(result)

    logger.debug(
        "Resolved %d of %d frame(s)",
        len(resolved),
        len(record["frames"]),
        extra={"correlation_id": correlation_id},
    )
    return resolved


__all__ = [
    "LAST_SET_FROM_PATTERN",
    "definition_pattern",
    "parse_last_set_from",
    "resolve_frame",
    "resolve_record_frames",
    "resolve_token",
    "scan_for_definition",
]
