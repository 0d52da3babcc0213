"""Debounced, gesture-aware push buttons"""

from buttons.timer_service import TimerService
from buttons.gesture_state_machine import GestureStateMachine
from buttons.debounce_filter import DebounceFilter, logical_level
from buttons.button_registry import ButtonRegistry, ButtonUnit

__all__ = [
    "TimerService",
    "GestureStateMachine",
    "DebounceFilter",
    "logical_level",
    "ButtonRegistry",
    "ButtonUnit",
]
