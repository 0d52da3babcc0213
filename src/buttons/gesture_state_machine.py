"""
Gesture State Machine

Turns confirmed press / release transitions and gesture timer expiries of
one pin into gesture events:

    press ─(pressed_ms)──────────────────────────► pressed ... release ► released
    press, release ─(clicked_ms)─────────────────► clicked
    press, release, press, release ──────────────► double_clicked
    press, release, press ─(pressed_ms)──────────► clicked_pressed ... release ► released

State table (anything not listed is handled by the redundant-transition
rules at the bottom of on_confirmed_transition):

    IDLE / PRESSED / RELEASE_WAIT + press  → PRESSED        (arm pressed_ms)
    CLICKED          + press               → CLICKED_PRESSED (arm pressed_ms)
    PRESSED          + release             → CLICKED        (arm clicked_ms)
    CLICKED_PRESSED  + release             → IDLE           emit double_clicked
    RELEASE_WAIT     + release             → IDLE           emit released
    PRESSED          + timer               → RELEASE_WAIT   emit pressed
    CLICKED          + timer               → IDLE           emit clicked
    CLICKED_PRESSED  + timer               → RELEASE_WAIT   emit clicked_pressed
"""

from models.button_state import ButtonState
from models.enums import ButtonGesture, GestureState, TimerPurpose
from models.events import ButtonEvent, GestureEvent
from buttons.timer_service import TimerService
from services.event_sink import IEventSink
from utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.GESTURE)


class GestureStateMachine:
    """
    Gesture interpretation for one pin

    Args:
        state: The pin's ButtonState
        timers: Shared TimerService
        sink: Event sink for gesture events
        pressed_ms: Hold longer than this is a long press
        clicked_ms: Window after a short press in which a second press
                    makes a double click
    """

    def __init__(
        self,
        state: ButtonState,
        timers: TimerService,
        sink: IEventSink,
        pressed_ms: int,
        clicked_ms: int
    ):
        self.state = state
        self.timers = timers
        self.sink = sink
        self.pressed_ms = pressed_ms
        self.clicked_ms = clicked_ms

    # ---------------------------------------------------------------
    # Inputs
    # ---------------------------------------------------------------

    def on_confirmed_transition(self, is_press: bool) -> None:
        current = self.state.gesture_state
        if current is GestureState.INIT:
            return

        if is_press:
            if current is GestureState.CLICKED:
                self._transition(GestureState.CLICKED_PRESSED)
                self._arm(self.pressed_ms)
            elif current is GestureState.CLICKED_PRESSED:
                # Bounce settled back to pressed; restore the hold window
                self._arm(self.pressed_ms)
            else:
                self._transition(GestureState.PRESSED)
                self._arm(self.pressed_ms)
            return

        if current is GestureState.PRESSED:
            self._transition(GestureState.CLICKED)
            self._arm(self.clicked_ms)
        elif current is GestureState.CLICKED_PRESSED:
            self.timers.cancel_pending(self.state)
            self._transition(GestureState.DOUBLE_CLICKED)
            self._emit(ButtonGesture.DOUBLE_CLICKED)
            self._transition(GestureState.IDLE)
        elif current is GestureState.RELEASE_WAIT:
            self.timers.cancel_pending(self.state)
            self._emit(ButtonGesture.RELEASED)
            self._transition(GestureState.IDLE)
        elif current is GestureState.CLICKED:
            # Bounce settled back to released; restore the click window
            self._arm(self.clicked_ms)

    def on_gesture_timer_expired(self) -> None:
        current = self.state.gesture_state

        if current is GestureState.PRESSED:
            self._transition(GestureState.RELEASE_WAIT)
            self._emit(ButtonGesture.PRESSED)
        elif current is GestureState.CLICKED:
            self._transition(GestureState.IDLE)
            self._emit(ButtonGesture.CLICKED)
        elif current is GestureState.CLICKED_PRESSED:
            self._transition(GestureState.RELEASE_WAIT)
            self._emit(ButtonGesture.CLICKED_PRESSED)

    # ---------------------------------------------------------------
    # Internals
    # ---------------------------------------------------------------

    def _arm(self, duration_ms: int) -> None:
        self.timers.schedule(
            self.state,
            TimerPurpose.GESTURE,
            duration_ms,
            self.on_gesture_timer_expired
        )

    def _transition(self, new_state: GestureState) -> None:
        log.debug(
            "Gesture state",
            pin=self.state.pin,
            transition=f"{self.state.gesture_state.name} → {new_state.name}"
        )
        self.state.gesture_state = new_state

    def _emit(self, gesture: ButtonGesture) -> None:
        pin = self.state.pin
        log.info("Gesture", pin=pin, gesture=gesture.value)
        self.sink.emit(ButtonEvent(gesture, pin))
        self.sink.emit(GestureEvent(gesture, pin))
