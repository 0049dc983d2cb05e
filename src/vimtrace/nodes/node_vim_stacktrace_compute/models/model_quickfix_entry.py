# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Navigable entry model for Vim Stacktrace Compute."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from vimtrace.enums import EnumEntryKind


class ModelQuickfixEntry(BaseModel):
    """One row of the entry list handed to the presentation sink."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    text: str = Field(..., description="Message or frame display text")
    file: str | None = Field(default=None, description="Source file, if navigable")
    line: int = Field(default=0, ge=0, description="Absolute line, 0 when none")
    buffer_id: int = Field(default=0, ge=0, description="Buffer number, 0 = none")
    kind: EnumEntryKind = Field(..., description="Error or Info")

    def to_quickfix_dict(self) -> dict[str, Any]:
        """Return the dict shape accepted by ``setqflist()``."""
        item: dict[str, Any] = {
            "text": self.text,
            "lnum": self.line,
            "bufnr": self.buffer_id,
            "type": self.kind.value,
        }
        if self.file is not None:
            item["filename"] = self.file
        return item


__all__ = ["ModelQuickfixEntry"]
