"""Real-time activity status inference for assistant tasks."""

from projectbrowser.status.engine import StatusEngine
from projectbrowser.status.rules import (
    PERMISSION_SENTINEL,
    PROVIDER_NAMES,
    STATUS_RULES,
    StatusContext,
    StatusPresentation,
    StatusRule,
    action_word,
    evaluate_rules,
    shorten_tool_input,
)
from projectbrowser.status.signals import (
    DEFAULT_ICON,
    HIDDEN_VIEW,
    SPINNER_FRAMES,
    ActiveTool,
    ColorTag,
    ExplicitStatus,
    StatusSignal,
    StatusView,
    TokenSummary,
    TokenUsage,
)
from projectbrowser.status.timers import AsyncioTimerService, TimerHandle, TimerService
from projectbrowser.status.tokens import format_tokens, summarize_tokens

__all__ = [
    # Engine
    "StatusEngine",
    # Signals
    "ActiveTool",
    "ColorTag",
    "ExplicitStatus",
    "StatusSignal",
    "StatusView",
    "TokenSummary",
    "TokenUsage",
    "DEFAULT_ICON",
    "HIDDEN_VIEW",
    "SPINNER_FRAMES",
    # Rules
    "PERMISSION_SENTINEL",
    "PROVIDER_NAMES",
    "STATUS_RULES",
    "StatusContext",
    "StatusPresentation",
    "StatusRule",
    "action_word",
    "evaluate_rules",
    "shorten_tool_input",
    # Tokens
    "format_tokens",
    "summarize_tokens",
    # Timers
    "AsyncioTimerService",
    "TimerHandle",
    "TimerService",
]
