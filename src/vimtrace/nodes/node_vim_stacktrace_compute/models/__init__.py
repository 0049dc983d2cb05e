"""Models for Vim Stacktrace Compute Node.

All models use strong typing with Pydantic BaseModel for type safety.
"""

from vimtrace.nodes.node_vim_stacktrace_compute.models.model_error_record import (
    ModelErrorRecord,
    ModelRawFrame,
)
from vimtrace.nodes.node_vim_stacktrace_compute.models.model_quickfix_entry import (
    ModelQuickfixEntry,
)
from vimtrace.nodes.node_vim_stacktrace_compute.models.model_stacktrace_config import (
    DEFAULT_LIST_TITLE,
    DEFAULT_MAX_ADJACENCY_DISTANCE,
    ModelParserConfig,
    VimStacktraceSettings,
)
from vimtrace.nodes.node_vim_stacktrace_compute.models.model_stacktrace_input import (
    ModelStacktraceInput,
)
from vimtrace.nodes.node_vim_stacktrace_compute.models.model_stacktrace_output import (
    ModelStacktraceOutput,
)

__all__ = [
    "DEFAULT_LIST_TITLE",
    "DEFAULT_MAX_ADJACENCY_DISTANCE",
    "ModelErrorRecord",
    "ModelParserConfig",
    "ModelQuickfixEntry",
    "ModelRawFrame",
    "ModelStacktraceInput",
    "ModelStacktraceOutput",
    "VimStacktraceSettings",
]
