from enum import Enum, auto


class EventType(Enum):
    # Debounced level changes
    BUTTON_CHANGED = auto()
    BUTTON_PRESS = auto()
    BUTTON_RELEASE = auto()

    # Gestures
    PRESSED = auto()
    CLICKED = auto()
    CLICKED_PRESSED = auto()
    DOUBLE_CLICKED = auto()
    RELEASED = auto()

    # Generic mirror of every gesture: (gesture, pin)
    BUTTON_EVENT = auto()

    # Diagnostics
    DEBUG = auto()
    ERROR = auto()
