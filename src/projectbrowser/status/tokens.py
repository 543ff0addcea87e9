"""Token usage normalization and display formatting."""

from __future__ import annotations

from projectbrowser.config.schema import DEFAULT_TOKEN_LIMIT
from projectbrowser.status.signals import TokenSummary, TokenUsage


def summarize_tokens(
    usage: TokenUsage | None,
    default_limit: int = DEFAULT_TOKEN_LIMIT,
) -> TokenSummary | None:
    """Normalize reported usage into a TokenSummary.

    A usage with an input/output breakdown yields a detailed summary whose
    missing counts are 0; its total is ``used``, else the reported ``total``.
    Otherwise only ``used`` is meaningful and the summary pairs it with the
    reported (or default) limit.
    """
    if usage is None:
        return None
    if usage.has_breakdown:
        return TokenSummary(
            input=usage.input_tokens or 0,
            output=usage.output_tokens or 0,
            cache=usage.cache_tokens or 0,
            total=usage.used or usage.total or 0,
        )
    return TokenSummary(total=usage.used or 0, limit=usage.total or default_limit)


def format_tokens(value: int | None) -> str:
    """Format a token count: thousands as ``1.5k``, small values as integers."""
    if not value:
        return "0"
    if value >= 1000:
        return f"{value / 1000:.1f}k"
    return str(int(value))
