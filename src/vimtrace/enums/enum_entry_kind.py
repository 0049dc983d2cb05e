# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Entry kind enum for quickfix-style stacktrace entries."""

from enum import Enum


class EnumEntryKind(str, Enum):
    """Kind of a navigable entry handed to the presentation sink.

    The value is the single-letter type code quickfix consumers expect.
    """

    ERROR = "E"
    INFO = "I"


__all__ = ["EnumEntryKind"]
