"""Tests for the debounce filter and the polarity mapping"""

from unittest.mock import MagicMock

import pytest

from buttons.debounce_filter import DebounceFilter, logical_level
from buttons.gesture_state_machine import GestureStateMachine
from models.button_state import ButtonState
from models.enums import GestureState, GPIOPullMode, LogicalLevel, TimerPurpose
from models.events import EventType


@pytest.fixture
def state():
    return ButtonState(pin=17, gesture_state=GestureState.IDLE)


@pytest.fixture
def gestures():
    return MagicMock(spec=GestureStateMachine)


def make_filter(state, timers, sink, gestures, pull_mode=GPIOPullMode.PULL_UP):
    return DebounceFilter(state, timers, sink, gestures, pull_mode=pull_mode, debounce_ms=30)


# ============================================================================
# Polarity
# ============================================================================

@pytest.mark.parametrize("raw,pull_mode,expected", [
    (0, GPIOPullMode.PULL_UP, LogicalLevel.PRESSED),
    (1, GPIOPullMode.PULL_UP, LogicalLevel.RELEASED),
    (1, GPIOPullMode.PULL_DOWN, LogicalLevel.PRESSED),
    (0, GPIOPullMode.PULL_DOWN, LogicalLevel.RELEASED),
])
def test_logical_level(raw, pull_mode, expected):
    assert logical_level(raw, pull_mode) is expected


# ============================================================================
# Debouncing
# ============================================================================

def test_first_change_arms_debounce_timer(fake_loop, timers, sink, state, gestures):
    f = make_filter(state, timers, sink, gestures)

    f.on_raw_change(0)

    assert state.is_debouncing
    assert state.pending_raw_level == 0
    assert state.pending_timer.purpose is TimerPurpose.DEBOUNCE
    assert sink.events == []


def test_burst_collapses_to_one_transition(fake_loop, timers, sink, state, gestures):
    f = make_filter(state, timers, sink, gestures)

    for raw in (0, 1, 0, 1, 0):
        f.on_raw_change(raw)
        fake_loop.advance(2)

    fake_loop.advance(30)

    assert sink.types() == [EventType.BUTTON_CHANGED, EventType.BUTTON_PRESS]
    gestures.on_confirmed_transition.assert_called_once_with(True)
    assert state.logical_level is LogicalLevel.PRESSED
    assert not state.is_debouncing


def test_last_raw_level_wins(fake_loop, timers, sink, state, gestures):
    f = make_filter(state, timers, sink, gestures)

    f.on_raw_change(0)
    f.on_raw_change(1)
    fake_loop.advance(30)

    assert sink.types() == [EventType.BUTTON_CHANGED, EventType.BUTTON_RELEASE]
    gestures.on_confirmed_transition.assert_called_once_with(False)


def test_window_is_not_extended_by_later_edges(fake_loop, timers, sink, state, gestures):
    f = make_filter(state, timers, sink, gestures)

    f.on_raw_change(0)
    fake_loop.advance(20)
    f.on_raw_change(1)
    f.on_raw_change(0)
    fake_loop.advance(10)

    assert sink.types() == [EventType.BUTTON_CHANGED, EventType.BUTTON_PRESS]


def test_pull_down_polarity(fake_loop, timers, sink, state, gestures):
    f = make_filter(state, timers, sink, gestures, pull_mode=GPIOPullMode.PULL_DOWN)

    f.on_raw_change(1)
    fake_loop.advance(30)

    assert sink.types() == [EventType.BUTTON_CHANGED, EventType.BUTTON_PRESS]
    assert sink.events[0].pin == 17


def test_cancel_drops_pending_window(fake_loop, timers, sink, state, gestures):
    f = make_filter(state, timers, sink, gestures)

    f.on_raw_change(0)
    f.cancel()
    fake_loop.advance(100)

    assert sink.events == []
    assert not state.is_debouncing
    assert state.pending_timer is None
    gestures.on_confirmed_transition.assert_not_called()
