# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""vimtrace - navigable stacktraces from Vim error messages.

Reconstructs the call stack of the most recent Vim script error from the
message history and publishes it as a quickfix-style entry list.

Quick Start:
    >>> from vimtrace import handle_stacktrace_compute, ModelStacktraceInput
    >>> from vimtrace.adapters import (
    ...     AdapterLocalFilesystem,
    ...     AdapterMappingIntrospection,
    ...     AdapterMemorySink,
    ...     AdapterTextLogSource,
    ... )
    >>> result = handle_stacktrace_compute(
    ...     ModelStacktraceInput(),
    ...     log_source=AdapterTextLogSource(""),
    ...     introspection=AdapterMappingIntrospection({}),
    ...     filesystem=AdapterLocalFilesystem(),
    ...     sink=AdapterMemorySink(),
    ... )
    >>> result.status.value
    'no_trace'
"""

from vimtrace.nodes.node_vim_stacktrace_compute.handlers import (
    handle_stacktrace_compute,
)
from vimtrace.nodes.node_vim_stacktrace_compute.models import (
    ModelStacktraceInput,
    ModelStacktraceOutput,
    VimStacktraceSettings,
)

__version__ = "0.1.0"

__all__ = [
    "ModelStacktraceInput",
    "ModelStacktraceOutput",
    "VimStacktraceSettings",
    "__version__",
    "handle_stacktrace_compute",
]
