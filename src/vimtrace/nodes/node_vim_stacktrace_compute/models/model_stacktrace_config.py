# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Stacktrace reconstruction configuration.

The header keyword and noise prefix sets are inferred from observed Vim
output and are kept configurable so new shapes can be added without code
changes.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_MAX_ADJACENCY_DISTANCE = 3
DEFAULT_LIST_TITLE = "Stacktrace"
DEFAULT_HEADER_KEYWORDS: tuple[str, ...] = ("function ", "command line..")
DEFAULT_NOISE_PREFIXES: tuple[str, ...] = ("function ", "script ")
# Autocommand preambles, e.g. 'BufWritePre Autocommands for "*"'
DEFAULT_PREAMBLE_PATTERNS: tuple[str, ...] = (r'^\S+ Autocommands for ".*"$',)
# Process file-descriptor pseudo-paths (process substitution, vim -S <(...))
DEFAULT_PSEUDO_PATH_PATTERN = r"/proc/(?:self|\d+)/fd/|/dev/fd/"


class ModelParserConfig(BaseModel):
    """Frozen parser configuration passed to the pure handler functions.

    Attributes:
        max_adjacency_distance: Lines the segmenter may move past the last
            header before it stops scanning.
        header_keywords: Leading keywords stripped from the header context.
        noise_prefixes: Prefixes stripped from each chain token.
        preamble_patterns: Regexes of chain segments that are not frames.
        pseudo_path_pattern: Regex of header paths that are never resolvable.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    max_adjacency_distance: int = Field(
        default=DEFAULT_MAX_ADJACENCY_DISTANCE,
        ge=0,
        description="Maximum distance between adjacent error headers",
    )
    header_keywords: tuple[str, ...] = Field(
        default=DEFAULT_HEADER_KEYWORDS,
        description="Keywords stripped from the start of the header context",
    )
    noise_prefixes: tuple[str, ...] = Field(
        default=DEFAULT_NOISE_PREFIXES,
        description="Prefixes stripped from each call-chain token",
    )
    preamble_patterns: tuple[str, ...] = Field(
        default=DEFAULT_PREAMBLE_PATTERNS,
        description="Regexes matching chain segments that carry no frame",
    )
    pseudo_path_pattern: str = Field(
        default=DEFAULT_PSEUDO_PATH_PATTERN,
        description="Regex matching unreadable pseudo-paths in headers",
    )


class VimStacktraceSettings(BaseSettings):
    """Pydantic Settings for stacktrace reconstruction, loaded from environment.

    Environment variables:
        VIMTRACE_MAX_ADJACENCY_DISTANCE: int (default 3)
        VIMTRACE_LIST_TITLE: str (default "Stacktrace")
        VIMTRACE_HEADER_KEYWORDS: JSON list of str
        VIMTRACE_NOISE_PREFIXES: JSON list of str
        VIMTRACE_PREAMBLE_PATTERNS: JSON list of regex str
        VIMTRACE_PSEUDO_PATH_PATTERN: regex str
    """

    model_config = SettingsConfigDict(
        env_prefix="VIMTRACE_",
        extra="ignore",
    )

    max_adjacency_distance: int = Field(
        default=DEFAULT_MAX_ADJACENCY_DISTANCE,
        ge=0,
        description="Maximum distance between adjacent error headers",
    )
    list_title: str = Field(
        default=DEFAULT_LIST_TITLE,
        description="Title given to the published entry list",
    )
    header_keywords: list[str] = Field(
        default_factory=lambda: list(DEFAULT_HEADER_KEYWORDS),
    )
    noise_prefixes: list[str] = Field(
        default_factory=lambda: list(DEFAULT_NOISE_PREFIXES),
    )
    preamble_patterns: list[str] = Field(
        default_factory=lambda: list(DEFAULT_PREAMBLE_PATTERNS),
    )
    pseudo_path_pattern: str = Field(default=DEFAULT_PSEUDO_PATH_PATTERN)

    def to_parser_config(
        self, max_adjacency_distance: int | None = None
    ) -> ModelParserConfig:
        """Convert settings to a frozen ModelParserConfig instance.

        Args:
            max_adjacency_distance: Per-invocation override of the setting.
        """
        return ModelParserConfig(
            max_adjacency_distance=(
                self.max_adjacency_distance
                if max_adjacency_distance is None
                else max_adjacency_distance
            ),
            header_keywords=tuple(self.header_keywords),
            noise_prefixes=tuple(self.noise_prefixes),
            preamble_patterns=tuple(self.preamble_patterns),
            pseudo_path_pattern=self.pseudo_path_pattern,
        )


__all__ = [
    "DEFAULT_LIST_TITLE",
    "DEFAULT_MAX_ADJACENCY_DISTANCE",
    "ModelParserConfig",
    "VimStacktraceSettings",
]
