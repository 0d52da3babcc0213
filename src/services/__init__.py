"""Services layer"""

from .event_sink import IEventSink
from .event_bus import EventBus
from .middleware import log_middleware

__all__ = [
    "IEventSink",
    "EventBus",
    "log_middleware",
]
