"""
Event Bus - Central event routing system

Implements pub-sub pattern:
- Publishers: emit(event) from sync code, await publish(event) from async code
- Subscribers: subscribe(event_type, handler, priority, filter_fn)
- Middleware: add_middleware(middleware_fn)
"""

import inspect
from typing import Callable, List, Dict, Optional
from dataclasses import dataclass
from models.events import Event, EventType
from lifecycle.task_registry import create_tracked_task, TaskCategory
from utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.EVENT)


@dataclass
class EventHandler:
    """Event handler registration"""
    handler: Callable[[Event], None]
    priority: int
    filter_fn: Optional[Callable[[Event], bool]]


class EventBus:
    """
    Central event bus for pub-sub event handling

    Implements the IEventSink port used by the button core.

    Features:
    - Priority-based handler execution (high priority first)
    - Per-handler filtering (fine-grained control)
    - Middleware pipeline (logging, blocking, rate limiting)
    - Async/sync handler support (auto-detected)
    - Fault tolerance (one handler crash doesn't stop others)

    Example:
        bus = EventBus()

        # Subscribe
        bus.subscribe(
            EventType.CLICKED,
            handler_fn,
            priority=10,
            filter_fn=lambda e: e.pin == 17
        )

        # Publish (sync, from timer callbacks)
        bus.emit(GestureEvent(ButtonGesture.CLICKED, 17))
    """

    def __init__(self):
        # Handlers organized by event type
        self._handlers: Dict[EventType, List[EventHandler]] = {}

        # Middleware pipeline (applied in registration order)
        self._middleware: List[Callable[[Event], Optional[Event]]] = []

        # Event history (circular buffer for debugging)
        self._event_history: List[Event] = []
        self._history_limit = 100

    def subscribe(
        self,
        event_type: EventType,
        handler: Callable[[Event], None],
        priority: int = 0,
        filter_fn: Optional[Callable[[Event], bool]] = None
    ) -> None:
        """
        Subscribe to event type

        Args:
            event_type: Which events to listen for
            handler: Function to call (can be async or sync)
            priority: Execution priority (higher = called first, default: 0)
            filter_fn: Optional filter (return True = handle, False = skip)

        Example:
            # Only handle clicks on pin 17
            bus.subscribe(
                EventType.CLICKED,
                self._on_up_clicked,
                filter_fn=lambda e: e.pin == 17
            )
        """
        if event_type not in self._handlers:
            self._handlers[event_type] = []

        handler_entry = EventHandler(handler, priority, filter_fn)
        self._handlers[event_type].append(handler_entry)

        # Sort by priority (descending - highest first)
        self._handlers[event_type].sort(key=lambda h: h.priority, reverse=True)

        log.debug(
            "Event handler subscribed",
            event_type=event_type.name,
            handler=getattr(handler, "__name__", repr(handler)),
            priority=priority
        )

    def unsubscribe(self, event_type: EventType, handler: Callable[[Event], None]) -> None:
        """Remove every registration of handler for event_type"""
        entries = self._handlers.get(event_type, [])
        self._handlers[event_type] = [e for e in entries if e.handler != handler]

    def add_middleware(self, middleware: Callable[[Event], Optional[Event]]) -> None:
        """
        Add middleware to event processing pipeline

        Middleware can:
        - Modify events (return modified event)
        - Block events (return None)
        - Log/validate events

        Middleware runs in registration order (FIFO).
        """
        self._middleware.append(middleware)
        log.debug(
            "Middleware registered",
            middleware=getattr(middleware, "__name__", repr(middleware))
        )

    def _prepare(self, event: Event) -> Optional[Event]:
        """Run middleware and record history; None = event blocked"""
        for middleware in self._middleware:
            processed_event = middleware(event)
            if processed_event is None:
                return None
            event = processed_event

        self._event_history.append(event)
        if len(self._event_history) > self._history_limit:
            self._event_history.pop(0)

        return event

    def _matching_handlers(self, event: Event) -> List[EventHandler]:
        handlers = self._handlers.get(event.type, [])
        if not handlers:
            log.debug("No handlers for event", event_type=event.type.name)
        return [
            h for h in handlers
            if h.filter_fn is None or h.filter_fn(event)
        ]

    def _log_handler_failure(self, handler_entry: EventHandler, event: Event, e: Exception) -> None:
        log.error(
            f"Event handler failed: {getattr(handler_entry.handler, '__name__', handler_entry.handler)} "
            f"for {event.type.name}",
            exception=repr(e)
        )

    def emit(self, event: Event) -> None:
        """
        Publish event synchronously (IEventSink port)

        Sync handlers run inline, in priority order, before emit() returns.
        Async handlers are scheduled as tracked tasks on the running loop.
        Handler and filter exceptions are logged, never raised.
        """
        try:
            prepared = self._prepare(event)
            if prepared is None:
                return
            handlers = self._matching_handlers(prepared)
        except Exception as e:
            log.error(f"Event pipeline failed for {event.type.name}", exception=repr(e))
            return

        for handler_entry in handlers:
            try:
                if inspect.iscoroutinefunction(handler_entry.handler):
                    create_tracked_task(
                        self._run_async_handler(handler_entry, prepared),
                        category=TaskCategory.EVENTBUS,
                        description=f"{prepared.type.name} handler"
                    )
                else:
                    handler_entry.handler(prepared)
            except Exception as e:
                self._log_handler_failure(handler_entry, prepared, e)
                # Continue to next handler (fault tolerance)

    async def _run_async_handler(self, handler_entry: EventHandler, event: Event) -> None:
        try:
            await handler_entry.handler(event)
        except Exception as e:
            self._log_handler_failure(handler_entry, event, e)

    async def publish(self, event: Event) -> None:
        """
        Publish event and await every handler

        Flow:
        1. Apply middleware (can modify or block event)
        2. Save to event history
        3. Lookup handlers for event type
        4. Execute handlers by priority (high → low)
        5. Apply per-handler filters
        6. Handle async/sync handlers transparently
        7. Catch and log handler exceptions (fault tolerance)
        """
        prepared = self._prepare(event)
        if prepared is None:
            return

        for handler_entry in self._matching_handlers(prepared):
            try:
                if inspect.iscoroutinefunction(handler_entry.handler):
                    await handler_entry.handler(prepared)
                else:
                    handler_entry.handler(prepared)
            except Exception as e:
                self._log_handler_failure(handler_entry, prepared, e)

    def get_event_history(self, limit: int = 10) -> List[Event]:
        """
        Get recent events from history

        Args:
            limit: Number of recent events to return

        Returns:
            List of recent events (newest last)
        """
        return self._event_history[-limit:]

    def clear_history(self) -> None:
        """Clear event history"""
        self._event_history.clear()
