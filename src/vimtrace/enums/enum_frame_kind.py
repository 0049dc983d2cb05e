# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Frame kind enum for parsed call-chain tokens."""

from enum import Enum


class EnumFrameKind(str, Enum):
    """Whether a raw frame names a function or a directly sourced file."""

    FUNCTION = "function"
    FILE = "file"


__all__ = ["EnumFrameKind"]
