"""
Enums for the button debounce / gesture state machine
"""

from enum import Enum, auto


class GestureState(Enum):
    """
    Per-pin gesture state

    INIT: Registered, preread not completed yet (raw changes ignored)
    IDLE: Released, nothing pending
    PRESSED: Held, waiting for long-press window to expire
    CLICKED: Released after a short press, waiting for second press
    CLICKED_PRESSED: Second press after a click
    DOUBLE_CLICKED: Second release after a click (transient)
    RELEASE_WAIT: Long gesture already emitted, waiting for physical release
    """
    INIT = auto()
    IDLE = auto()
    PRESSED = auto()
    CLICKED = auto()
    CLICKED_PRESSED = auto()
    DOUBLE_CLICKED = auto()
    RELEASE_WAIT = auto()


class LogicalLevel(Enum):
    """Polarity-corrected button level"""
    PRESSED = auto()
    RELEASED = auto()


class ButtonGesture(Enum):
    """Terminal gesture events (value = name used by generic button_event)"""
    PRESSED = "pressed"
    CLICKED = "clicked"
    CLICKED_PRESSED = "clicked_pressed"
    DOUBLE_CLICKED = "double_clicked"
    RELEASED = "released"


class TimerPurpose(Enum):
    """What a pending per-pin timer is for"""
    DEBOUNCE = auto()
    GESTURE = auto()


class GPIOPullMode(Enum):
    """GPIO pull-up/down resistor configuration"""
    PULL_UP = auto()     # Internal pull-up resistor (press pulls pin LOW)
    PULL_DOWN = auto()   # Internal pull-down resistor (press pulls pin HIGH)


class GPIOEdge(Enum):
    """Edge detection mode for input pins"""
    RISING = auto()
    FALLING = auto()
    BOTH = auto()


class PinNumbering(Enum):
    """Pin numbering scheme used by the GPIO backend"""
    BCM = auto()     # Broadcom GPIO numbers
    BOARD = auto()   # Physical 40-pin header numbers


class LogLevel(Enum):
    """Log severity levels"""
    DEBUG = auto()
    INFO = auto()
    WARN = auto()
    ERROR = auto()


class LogCategory(Enum):
    """Log categories for grouping related events"""
    CONFIG = auto()      # Configuration loading, validation
    HARDWARE = auto()    # GPIO pin setup, reads, edge callbacks
    BUTTON = auto()      # Registry, debounce
    GESTURE = auto()     # Gesture state transitions
    TIMER = auto()       # Timer scheduling
    EVENT = auto()       # Event bus events and handling
    SYSTEM = auto()      # Startup, shutdown, errors

    SHUTDOWN = auto()
    TASK = auto()

    GENERAL = auto()    # Default general category
