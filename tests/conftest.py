"""
Shared fixtures for button tests

FakeLoop replaces the asyncio loop for timer scheduling, so debounce and
gesture windows are driven deterministically with advance(ms).
"""

import heapq
import itertools
import sys
from pathlib import Path
from typing import Any, Callable, List, Tuple

import pytest

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from buttons import ButtonRegistry, TimerService
from hardware.gpio import MockGPIOManager
from lifecycle.task_registry import TaskRegistry
from models.config import ButtonsConfig, TimingConfig
from models.events import EventType


# ============================================================================
# Fake loop
# ============================================================================

class FakeHandle:
    def __init__(self, when: float, callback: Callable, args: Tuple[Any, ...]):
        self.when = when
        self.callback = callback
        self.args = args
        self._cancelled = False

    def cancel(self) -> None:
        self._cancelled = True

    def cancelled(self) -> bool:
        return self._cancelled


class FakeLoop:
    """Minimal call_later() clock; time only moves on advance()"""

    def __init__(self):
        self._now = 0.0
        self._queue: List[Tuple[float, int, FakeHandle]] = []
        self._seq = itertools.count()

    def time(self) -> float:
        return self._now

    def call_later(self, delay: float, callback: Callable, *args) -> FakeHandle:
        handle = FakeHandle(self._now + delay, callback, args)
        heapq.heappush(self._queue, (handle.when, next(self._seq), handle))
        return handle

    def advance(self, ms: float) -> None:
        """Move time forward, running every callback that falls due"""
        target = self._now + ms / 1000.0
        while self._queue and self._queue[0][0] <= target + 1e-9:
            when, _, handle = heapq.heappop(self._queue)
            self._now = max(self._now, when)
            if not handle.cancelled():
                handle.callback(*handle.args)
        self._now = target

    @property
    def pending(self) -> int:
        return sum(1 for _, _, h in self._queue if not h.cancelled())


# ============================================================================
# Recording sink
# ============================================================================

class RecordingSink:
    """IEventSink that keeps every event"""

    def __init__(self):
        self.events = []

    def emit(self, event) -> None:
        self.events.append(event)

    def types(self, *only: EventType) -> List[EventType]:
        return [e.type for e in self.events if not only or e.type in only]

    def gestures(self) -> List[str]:
        """Gesture names in emission order (specific events only)"""
        gesture_types = {
            EventType.PRESSED,
            EventType.CLICKED,
            EventType.CLICKED_PRESSED,
            EventType.DOUBLE_CLICKED,
            EventType.RELEASED,
        }
        return [e.type.name.lower() for e in self.events if e.type in gesture_types]

    def clear(self) -> None:
        self.events.clear()


# ============================================================================
# Fixtures
# ============================================================================

@pytest.fixture(autouse=True)
def fresh_task_registry():
    """Tasks tracked by one test never leak into the next"""
    TaskRegistry._instance = None
    yield
    TaskRegistry._instance = None


@pytest.fixture
def fake_loop():
    return FakeLoop()


@pytest.fixture
def timers(fake_loop):
    return TimerService(loop=fake_loop)


@pytest.fixture
def sink():
    return RecordingSink()


@pytest.fixture
def gpio():
    return MockGPIOManager()


@pytest.fixture
def timing():
    return TimingConfig(debounce_ms=30, pressed_ms=200, clicked_ms=200)


@pytest.fixture
def buttons_config(timing):
    return ButtonsConfig(pins=[17, 27], timing=timing)


@pytest.fixture
def registry(buttons_config, gpio, sink, timers):
    return ButtonRegistry(buttons_config, gpio, sink, timers=timers)
