"""Activity status engine.

Turns a stream of StatusSignal updates into one StatusView. The engine owns
two clocks that run only while the signal is active:

- elapsed seconds, ticking every second, reset to 0 on each activation
- the spinner phase, advancing every half second modulo 4

The clocks are independent timers and may be observed at any relative
phase. Both are cancelled when the signal goes inactive and on close().
"""

from __future__ import annotations

import math
import time
from collections.abc import Callable
from dataclasses import replace
from typing import TYPE_CHECKING, Any

from projectbrowser.config.schema import DEFAULT_TOKEN_LIMIT
from projectbrowser.logging import get_logger
from projectbrowser.status.rules import STATUS_RULES, StatusContext, StatusRule, evaluate_rules
from projectbrowser.status.signals import (
    ANIMATION_PHASES,
    HIDDEN_VIEW,
    StatusSignal,
    StatusView,
)
from projectbrowser.status.timers import AsyncioTimerService
from projectbrowser.status.tokens import summarize_tokens

if TYPE_CHECKING:
    from projectbrowser.config.schema import StatusConfig
    from projectbrowser.status.timers import TimerHandle, TimerService

log = get_logger("status")

StatusListener = Callable[[StatusView], None]


class StatusEngine:
    """Infers a prioritized status line for a long-running assistant task."""

    def __init__(
        self,
        timers: TimerService | None = None,
        *,
        clock: Callable[[], float] = time.monotonic,
        provider: str = "claude",
        token_limit: int = DEFAULT_TOKEN_LIMIT,
        silence_timeout: float = 8.0,
        tick_interval: float = 1.0,
        animation_interval: float = 0.5,
        rules: tuple[StatusRule, ...] = STATUS_RULES,
    ) -> None:
        self._timers = timers if timers is not None else AsyncioTimerService()
        self._clock = clock
        self._provider = provider
        self._token_limit = token_limit
        self._silence_timeout = silence_timeout
        self._tick_interval = tick_interval
        self._animation_interval = animation_interval
        self._rules = rules

        self._signal = StatusSignal()
        self._view = HIDDEN_VIEW
        self._elapsed = 0
        self._phase = 0
        self._started_at = 0.0
        self._last_activity = clock()

        self._tick_timer: TimerHandle | None = None
        self._animation_timer: TimerHandle | None = None
        self._listeners: list[StatusListener] = []

    @classmethod
    def from_config(
        cls,
        config: StatusConfig,
        timers: TimerService | None = None,
        **kwargs: Any,
    ) -> StatusEngine:
        return cls(
            timers,
            provider=config.provider,
            token_limit=config.token_limit,
            silence_timeout=config.silence_timeout,
            tick_interval=config.tick_interval,
            animation_interval=config.animation_interval,
            **kwargs,
        )

    @property
    def signal(self) -> StatusSignal:
        return self._signal

    @property
    def view(self) -> StatusView:
        return self._view

    @property
    def elapsed_seconds(self) -> int:
        return self._elapsed

    @property
    def animation_phase(self) -> int:
        return self._phase

    @property
    def running(self) -> bool:
        return self._tick_timer is not None

    # -------------------------------------------------------------------------
    # Inputs
    # -------------------------------------------------------------------------

    def update(self, signal: StatusSignal | None = None, **changes: Any) -> StatusView:
        """Apply a new signal, or change fields of the current one.

        Args:
            signal: Complete replacement signal.
            **changes: StatusSignal fields to change (applied after ``signal``).

        Returns:
            The recomputed view.
        """
        previous = self._signal
        current = signal if signal is not None else previous
        if changes:
            current = replace(current, **changes)

        # Timers start before the signal is stored so a failed start leaves
        # the engine inactive
        if current.is_active and not previous.is_active:
            self._activate()
        elif previous.is_active and not current.is_active:
            self._deactivate()
        self._signal = current

        activity_changed = (
            current.token_usage != previous.token_usage
            or current.active_tool != previous.active_tool
        )
        if activity_changed and (current.token_usage or current.active_tool):
            self._last_activity = self._clock()

        return self._recompute()

    def set_active(self, active: bool) -> StatusView:
        return self.update(is_active=active)

    def tick(self) -> StatusView:
        """Advance the elapsed-seconds clock from the wall clock."""
        if self._signal.is_active:
            elapsed = math.floor(self._clock() - self._started_at)
            self._elapsed = max(self._elapsed, elapsed)
        return self._recompute()

    def advance_animation(self) -> StatusView:
        if self._signal.is_active:
            self._phase = (self._phase + 1) % ANIMATION_PHASES
        return self._recompute()

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    def _activate(self) -> None:
        now = self._clock()
        self._started_at = now
        self._last_activity = now
        self._elapsed = 0
        self._phase = 0
        self._stop_timers()
        try:
            self._tick_timer = self._timers.every(self._tick_interval, self.tick)
            self._animation_timer = self._timers.every(
                self._animation_interval, self.advance_animation
            )
        except Exception:
            self._stop_timers()
            raise
        log.debug("Status engine active")

    def _deactivate(self) -> None:
        self._stop_timers()
        self._elapsed = 0
        self._phase = 0
        log.debug("Status engine idle")

    def _stop_timers(self) -> None:
        for timer in (self._tick_timer, self._animation_timer):
            if timer is not None:
                timer.cancel()
        self._tick_timer = None
        self._animation_timer = None

    def close(self) -> None:
        """Cancel both clocks and go inactive.

        A later ``set_active(True)`` starts a fresh activation.
        """
        if self._signal.is_active:
            self._signal = replace(self._signal, is_active=False)
            self._deactivate()
            self._recompute()
        else:
            self._stop_timers()

    async def __aenter__(self) -> StatusEngine:
        return self

    async def __aexit__(self, *args: object) -> None:
        self.close()

    def subscribe(self, callback: StatusListener) -> Callable[[], None]:
        """Register a listener called with every recomputed view.

        Returns:
            A function to unregister the listener.
        """
        self._listeners.append(callback)

        def unsubscribe() -> None:
            if callback in self._listeners:
                self._listeners.remove(callback)

        return unsubscribe

    # -------------------------------------------------------------------------
    # Recompute
    # -------------------------------------------------------------------------

    def compute_view(self) -> StatusView:
        signal = self._signal
        if not signal.is_active:
            return HIDDEN_VIEW

        ctx = StatusContext(
            signal=signal,
            elapsed_seconds=self._elapsed,
            silence_seconds=self._clock() - self._last_activity,
            silence_timeout=self._silence_timeout,
            provider=signal.provider or self._provider,
        )
        presentation = evaluate_rules(ctx, self._rules)
        explicit = signal.explicit_status

        return StatusView(
            visible=True,
            label=presentation.label,
            icon=presentation.icon,
            color=presentation.color,
            elapsed_seconds=self._elapsed,
            token_summary=summarize_tokens(signal.token_usage, self._token_limit),
            can_interrupt=not (explicit is not None and explicit.can_interrupt is False),
            animation_phase=self._phase,
        )

    def _recompute(self) -> StatusView:
        self._view = self.compute_view()
        for callback in list(self._listeners):
            try:
                callback(self._view)
            except Exception as e:
                log.warning("Status listener error: %s", e)
        return self._view
