# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Error record models for Vim Stacktrace Compute."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from vimtrace.enums import EnumFrameKind


class ModelRawFrame(BaseModel):
    """One call-chain token, e.g. ``FuncB[34]`` or ``/tmp/x.vim[3]``."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    token: str = Field(..., min_length=1, description="Token with offset suffix")
    name: str = Field(..., min_length=1, description="Function name or file path")
    offset: int = Field(..., ge=0, description="Relative (or file-absolute) line")
    kind: EnumFrameKind = Field(
        default=EnumFrameKind.FUNCTION, description="Function or sourced file"
    )


class ModelErrorRecord(BaseModel):
    """A single error with its call chain ordered innermost first."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    message: str = Field(..., description="Error message line")
    frames: list[ModelRawFrame] = Field(
        ...,
        min_length=1,
        description="Frames from innermost (failure site) to outermost",
    )


__all__ = ["ModelErrorRecord", "ModelRawFrame"]
