"""
Debounce Filter

Collapses a burst of raw edges into one stable transition. The first raw
change arms a single debounce window; later changes inside the window only
overwrite the pending level. On expiry the last raw level wins.
"""

from models.button_state import ButtonState
from models.enums import GPIOPullMode, LogicalLevel, TimerPurpose
from models.events import ButtonChangedEvent, ButtonPressEvent, ButtonReleaseEvent
from buttons.timer_service import TimerService
from buttons.gesture_state_machine import GestureStateMachine
from services.event_sink import IEventSink
from utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.BUTTON)


def logical_level(raw: int, pull_mode: GPIOPullMode) -> LogicalLevel:
    """Polarity-correct a raw pin level (pull-up: LOW means pressed)"""
    if pull_mode is GPIOPullMode.PULL_UP:
        pressed = not raw
    else:
        pressed = bool(raw)
    return LogicalLevel.PRESSED if pressed else LogicalLevel.RELEASED


class DebounceFilter:
    """
    Raw level changes → confirmed press / release for one pin

    Args:
        state: The pin's ButtonState
        timers: Shared TimerService
        sink: Event sink for button_changed / button_press / button_release
        gestures: The pin's GestureStateMachine (receives confirmed transitions)
        pull_mode: Pin polarity
        debounce_ms: Settling window
    """

    def __init__(
        self,
        state: ButtonState,
        timers: TimerService,
        sink: IEventSink,
        gestures: GestureStateMachine,
        pull_mode: GPIOPullMode,
        debounce_ms: int
    ):
        self.state = state
        self.timers = timers
        self.sink = sink
        self.gestures = gestures
        self.pull_mode = pull_mode
        self.debounce_ms = debounce_ms

    def on_raw_change(self, raw_level: int) -> None:
        state = self.state
        state.pending_raw_level = raw_level

        if state.is_debouncing:
            return

        state.is_debouncing = True
        self.timers.schedule(
            state,
            TimerPurpose.DEBOUNCE,
            self.debounce_ms,
            self.on_debounce_expired
        )

    def on_debounce_expired(self) -> None:
        state = self.state
        state.is_debouncing = False
        state.logical_level = logical_level(state.pending_raw_level, self.pull_mode)
        is_press = state.logical_level is LogicalLevel.PRESSED

        log.debug(
            "Debounced level",
            pin=state.pin,
            raw=state.pending_raw_level,
            logical=state.logical_level.name
        )

        self.sink.emit(ButtonChangedEvent(state.pin))
        if is_press:
            self.sink.emit(ButtonPressEvent(state.pin))
        else:
            self.sink.emit(ButtonReleaseEvent(state.pin))

        self.gestures.on_confirmed_transition(is_press)

    def cancel(self) -> None:
        """Drop an in-flight debounce window (teardown)"""
        if self.state.is_debouncing:
            self.state.is_debouncing = False
            self.timers.cancel_pending(self.state)
