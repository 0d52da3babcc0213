from enum import Enum, auto


class EventSource(Enum):
    """Event source identifiers"""
    DEBOUNCE = auto()         # Debounce filter (level changes)
    GESTURE = auto()          # Gesture state machine
    BUTTON_REGISTRY = auto()  # Registry setup / teardown diagnostics
    APPLICATION = auto()      # Generic application events
