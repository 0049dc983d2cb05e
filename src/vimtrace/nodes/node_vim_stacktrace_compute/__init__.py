# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Vim Stacktrace Compute Node."""

from vimtrace.nodes.node_vim_stacktrace_compute.handlers import (
    handle_stacktrace_compute,
)

__all__ = ["handle_stacktrace_compute"]
