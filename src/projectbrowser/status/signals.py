"""Input signals and output views of the status engine.

This module defines:
- ColorTag: Semantic colors understood by the presentation layer
- ExplicitStatus, ActiveTool, TokenUsage: Parts of a StatusSignal
- StatusSignal: Everything an external producer reports about the task
- TokenSummary, StatusView: Engine output
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

DEFAULT_ICON = "✻"
SPINNER_FRAMES = ("✻", "✹", "✸", "✶")
ANIMATION_PHASES = len(SPINNER_FRAMES)


class ColorTag(Enum):
    """Status colors. YELLOW doubles as the warning color."""

    BLUE = "blue"
    PURPLE = "purple"
    ORANGE = "orange"
    YELLOW = "yellow"
    GREEN = "green"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def parse(cls, value: ColorTag | str | None, default: ColorTag | None = None) -> ColorTag:
        """Coerce a caller-supplied color, falling back to ``default`` (blue)."""
        if isinstance(value, ColorTag):
            return value
        if value:
            try:
                return cls(value.lower())
            except ValueError:
                pass
        return default or cls.BLUE


def _int_or_none(value: Any) -> int | None:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    return int(value)


def _first(data: dict[str, Any], *keys: str) -> Any:
    for key in keys:
        if data.get(key) is not None:
            return data[key]
    return None


@dataclass(frozen=True)
class ExplicitStatus:
    """Status text pushed by the producer; overrides all inference."""

    text: str = ""
    icon: str | None = None
    color: ColorTag | str | None = None
    can_interrupt: bool | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ExplicitStatus:
        can_interrupt = _first(data, "can_interrupt", "canInterrupt")
        return cls(
            text=str(data.get("text") or ""),
            icon=data.get("icon"),
            color=data.get("color"),
            can_interrupt=can_interrupt if isinstance(can_interrupt, bool) else None,
        )


@dataclass(frozen=True)
class ActiveTool:
    """The tool call currently executing."""

    name: str = "Tool"
    input: Any = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ActiveTool:
        return cls(
            name=str(_first(data, "name", "toolName") or "Tool"),
            input=data.get("input"),
        )


@dataclass(frozen=True)
class TokenUsage:
    """Token counts reported by the model provider. Any field may be missing."""

    input_tokens: int | None = None
    output_tokens: int | None = None
    cache_tokens: int | None = None
    used: int | None = None
    total: int | None = None

    @property
    def has_breakdown(self) -> bool:
        """True when input/output counts were reported separately."""
        return self.input_tokens is not None or self.output_tokens is not None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> TokenUsage:
        """Build from a wire payload, accepting the field aliases producers use."""
        return cls(
            input_tokens=_int_or_none(_first(data, "inputTokens", "input_tokens", "input")),
            output_tokens=_int_or_none(_first(data, "outputTokens", "output_tokens", "output")),
            cache_tokens=_int_or_none(
                _first(data, "cacheReadTokens", "cacheTokens", "cache_tokens", "cache")
            ),
            used=_int_or_none(_first(data, "used", "totalUsed")),
            total=_int_or_none(_first(data, "total", "totalLimit")),
        )


@dataclass(frozen=True)
class StatusSignal:
    """Latest activity hints from the task producer.

    Attributes:
        explicit_status: Producer-supplied status, highest priority
        active_tool: Currently executing tool call
        token_usage: Latest token counts
        provider: Model provider id, only used for the startup label
        is_active: False keeps the engine dormant and its view hidden
    """

    explicit_status: ExplicitStatus | None = None
    active_tool: ActiveTool | None = None
    token_usage: TokenUsage | None = None
    provider: str | None = None
    is_active: bool = False


@dataclass(frozen=True)
class TokenSummary:
    """Normalized token counts.

    Detailed summaries carry input/output/cache; simple ones carry only
    ``total`` and a ``limit``.
    """

    total: int = 0
    input: int = 0
    output: int = 0
    cache: int = 0
    limit: int | None = None

    @property
    def is_detailed(self) -> bool:
        return self.limit is None


@dataclass(frozen=True)
class StatusView:
    """Snapshot rendered by the presentation layer."""

    visible: bool = False
    label: str = ""
    icon: str = DEFAULT_ICON
    color: ColorTag = ColorTag.BLUE
    elapsed_seconds: int = 0
    token_summary: TokenSummary | None = None
    can_interrupt: bool = True
    animation_phase: int = 0

    @property
    def display_icon(self) -> str:
        """The default glyph animates through the spinner frames."""
        if self.icon == DEFAULT_ICON:
            return SPINNER_FRAMES[self.animation_phase % ANIMATION_PHASES]
        return self.icon


HIDDEN_VIEW = StatusView()
