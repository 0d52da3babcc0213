"""Out-of-band diagnostic events (debug / error channels)"""

from dataclasses import dataclass
from typing import Optional

from models.events.base import Event
from models.events.types import EventType
from models.events.sources import EventSource


@dataclass(init=False)
class DebugEvent(Event):
    message: str

    def __init__(self, message: str, source: EventSource = EventSource.BUTTON_REGISTRY):
        super().__init__(type=EventType.DEBUG, source=source)
        self.message = message


@dataclass(init=False)
class ErrorEvent(Event):
    """
    Error report

    Args:
        message: Human readable description
        error: Underlying exception, if any
    """
    message: str
    error: Optional[Exception]

    def __init__(
        self,
        message: str,
        error: Optional[Exception] = None,
        source: EventSource = EventSource.BUTTON_REGISTRY,
    ):
        super().__init__(type=EventType.ERROR, source=source)
        self.message = message
        self.error = error
