"""
Per-pin button state

One ButtonState exists for every registered pin. It is owned by the
ButtonRegistry and mutated only by that pin's DebounceFilter and
GestureStateMachine.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Optional, TYPE_CHECKING

from models.enums import GestureState, LogicalLevel, TimerPurpose

if TYPE_CHECKING:
    import asyncio


@dataclass(eq=False)
class PendingTimer:
    """Handle for one scheduled per-pin action"""
    pin: int
    purpose: TimerPurpose
    duration_ms: int
    callback: Callable[[], None]
    handle: Optional["asyncio.TimerHandle"] = None
    cancelled: bool = False
    fired: bool = False

    @property
    def active(self) -> bool:
        return not (self.cancelled or self.fired)


@dataclass
class ButtonState:
    pin: int
    gesture_state: GestureState = GestureState.INIT
    is_debouncing: bool = False
    pending_raw_level: Optional[int] = None
    logical_level: LogicalLevel = LogicalLevel.RELEASED
    pending_timer: Optional[PendingTimer] = field(default=None, repr=False)

    @property
    def is_ready(self) -> bool:
        """False until the startup preread has completed"""
        return self.gesture_state is not GestureState.INIT

    @property
    def is_pressed(self) -> bool:
        return self.logical_level is LogicalLevel.PRESSED
