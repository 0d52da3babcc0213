"""
Event Sink port

The only outward channel of the button core. EventBus implements it;
tests substitute a recording sink.
"""

from typing import Protocol

from models.events import Event


class IEventSink(Protocol):

    def emit(self, event: Event) -> None:
        """Deliver one event synchronously. Must not raise."""
        ...
