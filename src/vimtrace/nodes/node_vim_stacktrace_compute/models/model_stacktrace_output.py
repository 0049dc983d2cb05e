"""Output model for Vim Stacktrace Compute."""

from __future__ import annotations

from typing import Self

from pydantic import BaseModel, Field, model_validator

from vimtrace.enums import EnumEntryKind, EnumTraceStatus
from vimtrace.nodes.node_vim_stacktrace_compute.models.model_error_record import (
    ModelErrorRecord,
)
from vimtrace.nodes.node_vim_stacktrace_compute.models.model_quickfix_entry import (
    ModelQuickfixEntry,
)


class ModelStacktraceOutput(BaseModel):
    """Output model for stacktrace reconstruction.

    ``entries`` is what was (or would have been) published to the sink.
    """

    status: EnumTraceStatus = Field(..., description="Outcome of the invocation")
    entries: list[ModelQuickfixEntry] = Field(
        default_factory=list,
        description="Entry list in chronological record order",
    )
    records: list[ModelErrorRecord] = Field(
        default_factory=list,
        description="Parsed error records, earliest first",
    )
    message: str | None = Field(
        default=None,
        description="User-facing informational or warning message",
    )
    warnings: list[str] = Field(
        default_factory=list,
        description="Non-fatal problems met while parsing",
    )
    processing_time_ms: float | None = Field(
        default=None, ge=0, description="Time spent in the pipeline"
    )

    @property
    def success(self) -> bool:
        """True when an entry list was produced."""
        return self.status is EnumTraceStatus.FOUND

    @model_validator(mode="after")
    def validate_found_has_error_entries(self) -> Self:
        """A FOUND result must carry one Error entry per record.

        Raises:
            ValueError: If the entry list and records disagree.
        """
        if self.status is not EnumTraceStatus.FOUND:
            return self

        error_count = sum(1 for e in self.entries if e.kind is EnumEntryKind.ERROR)
        if error_count != len(self.records) or error_count == 0:
            raise ValueError(
                f"FOUND output needs one error entry per record "
                f"(errors={error_count}, records={len(self.records)})"
            )
        return self

    model_config = {"frozen": True, "extra": "forbid"}


__all__ = ["ModelStacktraceOutput"]
