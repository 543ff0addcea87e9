"""Priority chain that turns status signals into a presentation.

Rules are evaluated in order and the first whose predicate holds produces
the label, icon and color. Each rule is a plain value so the chain can be
inspected and each step tested on its own.
"""

from __future__ import annotations

import json
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from projectbrowser.status.signals import DEFAULT_ICON, ColorTag, StatusSignal

PERMISSION_SENTINEL = "Waiting for permission"

TOOL_INPUT_LIMIT = 40
TOOL_INPUT_DISPLAY = 30
ELLIPSIS = "..."

STARTUP_GRACE_SECONDS = 3
SILENCE_MIN_ELAPSED = 10
ACTION_WORD_SECONDS = 4

PROVIDER_NAMES: dict[str, str] = {
    "claude": "Claude",
    "cursor": "Cursor",
    "codex": "Codex",
}

_STRIP_CHARS = str.maketrans("", "", '{}"')


@dataclass(frozen=True)
class StatusContext:
    """Inputs of one recompute cycle."""

    signal: StatusSignal
    elapsed_seconds: int
    silence_seconds: float
    silence_timeout: float
    provider: str


@dataclass(frozen=True)
class StatusPresentation:
    label: str
    icon: str = DEFAULT_ICON
    color: ColorTag = ColorTag.BLUE


@dataclass(frozen=True)
class StatusRule:
    """One predicate/producer pair of the chain."""

    name: str
    applies: Callable[[StatusContext], bool]
    produce: Callable[[StatusContext], StatusPresentation]


def shorten_tool_input(value: Any) -> str:
    """Compact one-line rendering of a tool input.

    The input is serialized to compact JSON, stripped of braces and double
    quotes, cut to 40 characters, and shown as 30 characters plus an
    ellipsis when still longer than that.
    """
    if value is None:
        return ""
    serialized = json.dumps(value, separators=(",", ":"), ensure_ascii=False, default=str)
    short = serialized.translate(_STRIP_CHARS)[:TOOL_INPUT_LIMIT]
    if len(short) > TOOL_INPUT_DISPLAY:
        return short[:TOOL_INPUT_DISPLAY] + ELLIPSIS
    return short


def action_word(elapsed_seconds: int) -> str:
    """Rotating filler label, advancing every four seconds."""
    words = (
        "Thinking",
        "Processing",
        "Analyzing",
        "Still working" if elapsed_seconds > 20 else "Working",
        "Almost there" if elapsed_seconds > 30 else "Computing",
    )
    return words[(elapsed_seconds // ACTION_WORD_SECONDS) % len(words)]


# -----------------------------------------------------------------------------
# Rules
# -----------------------------------------------------------------------------


def _has_explicit_status(ctx: StatusContext) -> bool:
    status = ctx.signal.explicit_status
    return status is not None and bool(status.text)


def _explicit_status(ctx: StatusContext) -> StatusPresentation:
    status = ctx.signal.explicit_status
    assert status is not None
    if status.text == PERMISSION_SENTINEL:
        return StatusPresentation("Waiting for you", "⏸️", ColorTag.YELLOW)
    return StatusPresentation(
        status.text,
        status.icon or DEFAULT_ICON,
        ColorTag.parse(status.color),
    )


def _has_active_tool(ctx: StatusContext) -> bool:
    return ctx.signal.active_tool is not None


def _active_tool(ctx: StatusContext) -> StatusPresentation:
    tool = ctx.signal.active_tool
    assert tool is not None
    short_input = shorten_tool_input(tool.input)
    label = f"{tool.name}: {short_input}" if short_input else f"Using {tool.name}"
    return StatusPresentation(label, "🔧", ColorTag.PURPLE)


def _is_silent(ctx: StatusContext) -> bool:
    return (
        ctx.silence_seconds > ctx.silence_timeout
        and ctx.elapsed_seconds >= SILENCE_MIN_ELAPSED
    )


def _waiting_for_response(ctx: StatusContext) -> StatusPresentation:
    return StatusPresentation("Waiting for response...", "⏳", ColorTag.ORANGE)


def _is_starting(ctx: StatusContext) -> bool:
    return ctx.elapsed_seconds < STARTUP_GRACE_SECONDS


def _provider_thinking(ctx: StatusContext) -> StatusPresentation:
    name = PROVIDER_NAMES.get(ctx.provider, ctx.provider)
    return StatusPresentation(f"{name} is thinking", "💭", ColorTag.BLUE)


def _always(ctx: StatusContext) -> bool:
    return True


def _rotating_action(ctx: StatusContext) -> StatusPresentation:
    return StatusPresentation(action_word(ctx.elapsed_seconds))


STATUS_RULES: tuple[StatusRule, ...] = (
    StatusRule("explicit", _has_explicit_status, _explicit_status),
    StatusRule("tool", _has_active_tool, _active_tool),
    StatusRule("silence", _is_silent, _waiting_for_response),
    StatusRule("startup", _is_starting, _provider_thinking),
    StatusRule("default", _always, _rotating_action),
)


def evaluate_rules(
    ctx: StatusContext,
    rules: tuple[StatusRule, ...] = STATUS_RULES,
) -> StatusPresentation:
    """Return the presentation of the first rule that applies."""
    for rule in rules:
        if rule.applies(ctx):
            return rule.produce(ctx)
    return StatusPresentation(action_word(ctx.elapsed_seconds))
