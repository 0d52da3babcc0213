"""
Middleware for EventBus

Middleware = pipeline functions that process events before handlers.
Can modify events, block events, or log/validate events.
"""

from models.events import Event, EventType
from utils.enum_helper import EnumHelper
from utils.logger import get_logger, LogCategory, LogLevel

log = get_logger().for_category(LogCategory.EVENT)

# Level changes are chatty; gestures and diagnostics are not
_DEBUG_LEVEL_TYPES = {
    EventType.BUTTON_CHANGED,
    EventType.BUTTON_PRESS,
    EventType.BUTTON_RELEASE,
    EventType.DEBUG,
}


def log_middleware(event: Event) -> Event:
    """
    Log all events for debugging

    Usage:
        event_bus.add_middleware(log_middleware)
    """
    source_str = EnumHelper.to_name(event.source)
    data_str = ", ".join(
        f"{k}={EnumHelper.to_name(v) if hasattr(v, 'name') else v}"
        for k, v in event.to_data().items()
    )

    level = LogLevel.DEBUG if event.type in _DEBUG_LEVEL_TYPES else LogLevel.INFO
    log.log(f"Event: {event.type.name} from {source_str} | {data_str}", level)
    return event
