"""Domain-specific exceptions for Vim Stacktrace Compute."""

from __future__ import annotations


class StacktraceParsingError(Exception):
    """Base class for stacktrace reconstruction failures."""

    pass


class UnrecognizedHeaderError(StacktraceParsingError):
    """Raised when an error header cannot be decomposed into frames.

    Examples:
        - Chain segment still containing whitespace after prefix stripping
        - Header whose context is empty
        - Innermost segment already carrying an offset
    """

    pass


class FrameResolutionError(StacktraceParsingError):
    """Raised when a single frame cannot be resolved to a source location.

    Never escapes the resolver: the frame is omitted from the entry list.
    """

    pass


__all__ = [
    "FrameResolutionError",
    "StacktraceParsingError",
    "UnrecognizedHeaderError",
]
