"""
Timer Service - one cancellable delayed action per button

Every pin owns at most one PendingTimer, stored in its ButtonState.
Scheduling a new timer for a pin cancels the previous one first, in the
same call, so an old timer can never fire after a new one was armed.
"""

import asyncio
from typing import Callable, Optional

from models.button_state import ButtonState, PendingTimer
from models.enums import TimerPurpose
from utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.TIMER)


class TimerService:
    """
    Per-pin timer scheduling on top of loop.call_later

    Guarantees:
    - at most one pending timer per ButtonState
    - cancel() is idempotent (already fired / cancelled = no-op)
    - a timer fires exactly once unless cancelled first
    - callbacks never run synchronously from schedule()

    Args:
        loop: Event loop used for call_later (default: running loop,
              resolved on first schedule)
    """

    def __init__(self, loop: Optional[asyncio.AbstractEventLoop] = None):
        self._loop = loop

    def _get_loop(self) -> asyncio.AbstractEventLoop:
        if self._loop is None:
            self._loop = asyncio.get_running_loop()
        return self._loop

    def schedule(
        self,
        state: ButtonState,
        purpose: TimerPurpose,
        duration_ms: int,
        callback: Callable[[], None]
    ) -> PendingTimer:
        """Cancel the pin's pending timer and arm a new one"""
        self.cancel_pending(state)

        timer = PendingTimer(
            pin=state.pin,
            purpose=purpose,
            duration_ms=duration_ms,
            callback=callback,
        )
        timer.handle = self._get_loop().call_later(
            duration_ms / 1000.0, self._fire, state, timer
        )
        state.pending_timer = timer

        log.debug(
            "Timer scheduled",
            pin=state.pin,
            purpose=purpose.name,
            duration_ms=duration_ms
        )
        return timer

    def cancel(self, timer: Optional[PendingTimer]) -> None:
        """Cancel a timer; no-op for None, fired or cancelled timers"""
        if timer is None or not timer.active:
            return
        timer.cancelled = True
        if timer.handle is not None:
            timer.handle.cancel()
        log.debug("Timer cancelled", pin=timer.pin, purpose=timer.purpose.name)

    def cancel_pending(self, state: ButtonState) -> None:
        """Cancel whatever timer the pin currently has"""
        timer = state.pending_timer
        state.pending_timer = None
        self.cancel(timer)

    def _fire(self, state: ButtonState, timer: PendingTimer) -> None:
        # Stale: replaced or cancelled after the loop already queued it
        if not timer.active or state.pending_timer is not timer:
            return
        timer.fired = True
        state.pending_timer = None
        timer.callback()
