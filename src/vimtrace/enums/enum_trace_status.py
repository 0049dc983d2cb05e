# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Outcome status enum for a stacktrace reconstruction run."""

from enum import Enum


class EnumTraceStatus(str, Enum):
    """Outcome of one stacktrace invocation.

    FOUND: at least one entry was produced and published.
    NO_TRACE: the log held no qualifying error block (informational).
    UNPARSEABLE: blocks were segmented but none yielded entries (warning).
    """

    FOUND = "found"
    NO_TRACE = "no_trace"
    UNPARSEABLE = "unparseable"


__all__ = ["EnumTraceStatus"]
