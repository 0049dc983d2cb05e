"""Input model for Vim Stacktrace Compute."""

from __future__ import annotations

from pydantic import BaseModel, Field


class ModelStacktraceInput(BaseModel):
    """Input model for one stacktrace invocation.

    ``max_adjacency_distance`` and ``title`` fall back to settings when None.
    """

    max_adjacency_distance: int | None = Field(
        default=None,
        ge=0,
        description="Override for the header adjacency distance",
    )
    title: str | None = Field(
        default=None,
        description="Title for the published entry list",
    )
    correlation_id: str | None = Field(
        default=None,
        description="Correlation ID for tracing",
        pattern=r"^[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}$",
    )

    model_config = {"frozen": True, "extra": "forbid"}


__all__ = ["ModelStacktraceInput"]
