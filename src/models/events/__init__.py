"""
Event system for GPIO Buttons

Typed events published by the debounce filter, the gesture state machine
and the button registry.
"""

# Event type, base class, and sources
from models.events.types import EventType
from models.events.base import Event
from models.events.sources import EventSource

# Button events
from models.events.button import (
    ButtonChangedEvent,
    ButtonPressEvent,
    ButtonReleaseEvent,
    GestureEvent,
    ButtonEvent,
    GESTURE_EVENT_TYPES,
)

# Diagnostics
from models.events.diagnostic import DebugEvent, ErrorEvent

__all__ = [
    # Type, base, and sources
    "EventType",
    "Event",
    "EventSource",

    # Button
    "ButtonChangedEvent",
    "ButtonPressEvent",
    "ButtonReleaseEvent",
    "GestureEvent",
    "ButtonEvent",
    "GESTURE_EVENT_TYPES",

    # Diagnostics
    "DebugEvent",
    "ErrorEvent",
]
