"""Button events (debounced level changes and gestures)"""

from dataclasses import dataclass

from models.enums import ButtonGesture
from models.events.base import Event
from models.events.types import EventType
from models.events.sources import EventSource


GESTURE_EVENT_TYPES = {
    ButtonGesture.PRESSED: EventType.PRESSED,
    ButtonGesture.CLICKED: EventType.CLICKED,
    ButtonGesture.CLICKED_PRESSED: EventType.CLICKED_PRESSED,
    ButtonGesture.DOUBLE_CLICKED: EventType.DOUBLE_CLICKED,
    ButtonGesture.RELEASED: EventType.RELEASED,
}


@dataclass(init=False)
class ButtonChangedEvent(Event):
    """Debounced level change (emitted once per settled debounce window)"""
    pin: int

    def __init__(self, pin: int):
        super().__init__(
            type=EventType.BUTTON_CHANGED,
            source=EventSource.DEBOUNCE,
        )
        self.pin = pin


@dataclass(init=False)
class ButtonPressEvent(Event):
    """Debounced level is now PRESSED"""
    pin: int

    def __init__(self, pin: int):
        super().__init__(
            type=EventType.BUTTON_PRESS,
            source=EventSource.DEBOUNCE,
        )
        self.pin = pin


@dataclass(init=False)
class ButtonReleaseEvent(Event):
    """Debounced level is now RELEASED"""
    pin: int

    def __init__(self, pin: int):
        super().__init__(
            type=EventType.BUTTON_RELEASE,
            source=EventSource.DEBOUNCE,
        )
        self.pin = pin


@dataclass(init=False)
class GestureEvent(Event):
    """
    Terminal gesture on a pin

    The event type is gesture specific (PRESSED, CLICKED, ...), so handlers
    can subscribe to exactly the gesture they care about.
    """
    gesture: ButtonGesture
    pin: int

    def __init__(self, gesture: ButtonGesture, pin: int):
        super().__init__(
            type=GESTURE_EVENT_TYPES[gesture],
            source=EventSource.GESTURE,
        )
        self.gesture = gesture
        self.pin = pin


@dataclass(init=False)
class ButtonEvent(Event):
    """
    Generic mirror of every gesture: button_event(type, pin)

    Args:
        gesture: Which gesture fired (gesture.value is the type name)
        pin: Pin identifier
    """
    gesture: ButtonGesture
    pin: int

    def __init__(self, gesture: ButtonGesture, pin: int):
        super().__init__(
            type=EventType.BUTTON_EVENT,
            source=EventSource.GESTURE,
        )
        self.gesture = gesture
        self.pin = pin

    @property
    def gesture_type(self) -> str:
        return self.gesture.value
