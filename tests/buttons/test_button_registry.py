"""
ButtonRegistry tests against the mock GPIO backend

Pin setup and preread run on the real event loop (pytest-asyncio); gesture
timers run on the FakeLoop from conftest.
"""

import asyncio
from unittest.mock import patch

import pytest

from buttons import ButtonRegistry
from models.config import ButtonsConfig
from models.enums import GestureState, GPIOPullMode, LogicalLevel
from models.errors import PinConfigurationError, PinReadError, TeardownError
from models.events import EventType

NON_DIAGNOSTIC = (
    EventType.BUTTON_CHANGED,
    EventType.BUTTON_PRESS,
    EventType.BUTTON_RELEASE,
    EventType.PRESSED,
    EventType.CLICKED,
    EventType.CLICKED_PRESSED,
    EventType.DOUBLE_CLICKED,
    EventType.RELEASED,
    EventType.BUTTON_EVENT,
)


def click(gpio, loop, pin):
    gpio.set_level(pin, 0)
    loop.advance(60)
    gpio.set_level(pin, 1)
    loop.advance(30)


# ============================================================================
# Initialization
# ============================================================================

@pytest.mark.asyncio
async def test_init_registers_every_pin(registry, gpio, sink):
    await registry.init()

    assert registry.active_pins == [17, 27]
    assert set(gpio.get_registry()) == {17, 27}
    assert gpio.listener_count == 1

    for pin in (17, 27):
        state = registry.get_state(pin)
        assert state.gesture_state is GestureState.IDLE
        assert state.logical_level is LogicalLevel.RELEASED

    assert sink.types(*NON_DIAGNOSTIC) == []
    assert EventType.DEBUG in sink.types()


@pytest.mark.asyncio
async def test_button_held_at_startup_is_pressed_without_events(registry, gpio, sink, fake_loop):
    gpio.set_level(17, 0)

    await registry.init()

    state = registry.get_state(17)
    assert state.gesture_state is GestureState.PRESSED
    assert state.logical_level is LogicalLevel.PRESSED
    assert sink.types(*NON_DIAGNOSTIC) == []

    # Startup state is never re-announced
    fake_loop.advance(1000)
    assert sink.gestures() == []

    gpio.set_level(17, 1)
    fake_loop.advance(30)
    fake_loop.advance(200)
    assert sink.gestures() == ["clicked"]


@pytest.mark.asyncio
async def test_pull_down_startup(gpio, sink, timers, timing):
    config = ButtonsConfig(pins=[5], pull_mode=GPIOPullMode.PULL_DOWN, timing=timing)
    registry = ButtonRegistry(config, gpio, sink, timers=timers)
    gpio.set_level(5, 1)

    await registry.init()

    assert registry.get_state(5).gesture_state is GestureState.PRESSED


@pytest.mark.asyncio
async def test_configure_failure_excludes_only_that_pin(registry, gpio, sink):
    gpio.fail_setup.add(17)

    await registry.init()

    assert registry.active_pins == [27]
    assert registry.get_state(17) is None

    errors = [e for e in sink.events if e.type is EventType.ERROR]
    assert len(errors) == 1
    assert isinstance(errors[0].error, PinConfigurationError)
    assert errors[0].error.pin == 17


@pytest.mark.asyncio
async def test_preread_failure_excludes_pin_but_releases_it_on_teardown(registry, gpio, sink):
    gpio.fail_read.add(27)

    await registry.init()

    assert registry.active_pins == [17]
    errors = [e for e in sink.events if e.type is EventType.ERROR]
    assert len(errors) == 1
    assert isinstance(errors[0].error, PinReadError)

    await registry.unregister_all()
    assert sorted(gpio.released) == [17, 27]


@pytest.mark.asyncio
async def test_unexpected_setup_exception_excludes_only_that_pin(registry, gpio, sink):
    original = gpio.register_input

    def flaky(pin, *args, **kwargs):
        if pin == 17:
            raise LookupError("no such channel")
        return original(pin, *args, **kwargs)

    with patch.object(gpio, "register_input", side_effect=flaky):
        await registry.init()

    assert registry.active_pins == [27]
    errors = [e for e in sink.events if e.type is EventType.ERROR]
    assert len(errors) == 1
    assert isinstance(errors[0].error, PinConfigurationError)
    assert isinstance(errors[0].error.__cause__, LookupError)


@pytest.mark.asyncio
async def test_unexpected_read_exception_excludes_only_that_pin(registry, gpio, sink):
    original = gpio.read

    def flaky(pin):
        if pin == 17:
            raise KeyError(pin)
        return original(pin)

    with patch.object(gpio, "read", side_effect=flaky):
        await registry.init()

    assert registry.active_pins == [27]
    errors = [e for e in sink.events if e.type is EventType.ERROR]
    assert len(errors) == 1
    assert isinstance(errors[0].error, PinReadError)


@pytest.mark.asyncio
async def test_register_twice_is_harmless(registry, gpio):
    await registry.init()

    assert await registry.register(17) is True
    assert list(gpio.get_registry()) == [17, 27]


# ============================================================================
# Dispatch
# ============================================================================

@pytest.mark.asyncio
async def test_click_on_one_pin_does_not_affect_other(registry, gpio, sink, fake_loop):
    await registry.init()

    click(gpio, fake_loop, 17)
    fake_loop.advance(200)

    assert sink.gestures() == ["clicked"]
    assert all(e.pin == 17 for e in sink.events if hasattr(e, "pin"))
    assert registry.get_state(27).gesture_state is GestureState.IDLE


@pytest.mark.asyncio
async def test_dispatch_ignores_unknown_pins(registry, sink):
    await registry.init()
    sink.clear()

    registry.dispatch(99, 0)

    assert sink.events == []


def test_dispatch_before_init_is_ignored(registry, sink, fake_loop):
    registry.dispatch(17, 0)
    fake_loop.advance(100)

    assert sink.events == []


@pytest.mark.asyncio
async def test_double_click_through_gpio(registry, gpio, sink, fake_loop):
    await registry.init()

    click(gpio, fake_loop, 27)
    gpio.set_level(27, 0)
    fake_loop.advance(50)
    gpio.set_level(27, 1)
    fake_loop.advance(30)
    fake_loop.advance(500)

    assert sink.gestures() == ["double_clicked"]


# ============================================================================
# Teardown
# ============================================================================

@pytest.mark.asyncio
async def test_teardown_releases_everything(registry, gpio, fake_loop):
    await registry.init()

    await registry.unregister_all()

    assert sorted(gpio.released) == [17, 27]
    assert gpio.cleaned_up
    assert registry.active_pins == []
    assert fake_loop.pending == 0


@pytest.mark.asyncio
async def test_no_events_after_teardown(registry, gpio, sink, fake_loop):
    await registry.init()

    # Mid-gesture: a click window and a debounce window are pending
    click(gpio, fake_loop, 17)
    gpio.set_level(27, 0)

    await registry.unregister_all()
    sink.clear()

    fake_loop.advance(1000)
    registry.dispatch(17, 0)
    fake_loop.advance(1000)

    assert sink.events == []


@pytest.mark.asyncio
async def test_shared_gpio_is_not_destroyed(buttons_config, gpio, sink, timers):
    registry = ButtonRegistry(buttons_config, gpio, sink, timers=timers, owns_gpio=False)
    await registry.init()

    await registry.destroy()

    assert sorted(gpio.released) == [17, 27]
    assert not gpio.cleaned_up
    assert gpio.listener_count == 0


@pytest.mark.asyncio
async def test_teardown_attempts_every_pin_and_reports_failures(registry, gpio, sink):
    await registry.init()
    gpio.fail_release.add(17)
    gpio.fail_cleanup = True

    with pytest.raises(TeardownError) as exc_info:
        await registry.unregister_all()

    assert gpio.released == [27]
    assert [pin for pin, _ in exc_info.value.failures] == [17, None]

    errors = [e for e in sink.events if e.type is EventType.ERROR]
    assert errors[-1].error is exc_info.value


@pytest.mark.asyncio
async def test_unexpected_release_exception_still_releases_other_pins(registry, gpio):
    await registry.init()
    original = gpio.release

    def flaky(pin):
        if pin == 17:
            raise KeyError(pin)
        original(pin)

    with patch.object(gpio, "release", side_effect=flaky):
        with pytest.raises(TeardownError) as exc_info:
            await registry.unregister_all()

    assert gpio.released == [27]
    assert gpio.cleaned_up
    assert [pin for pin, _ in exc_info.value.failures] == [17]


@pytest.mark.asyncio
async def test_teardown_during_init_leaves_nothing_behind(registry, gpio, sink):
    task = asyncio.ensure_future(registry.init())
    # init is now suspended in the preread of the first pin
    await asyncio.sleep(0)

    await registry.unregister_all()
    events_after_teardown = len(sink.events)
    await task

    assert gpio.listener_count == 0
    assert registry.active_pins == []
    assert registry.get_state(17) is None
    assert gpio.get_registry() == {}
    assert gpio.released == [17]
    assert len(sink.events) == events_after_teardown


@pytest.mark.asyncio
async def test_register_after_teardown_is_refused(registry, gpio):
    await registry.init()
    await registry.unregister_all()

    assert await registry.register(5) is False
    assert gpio.get_registry() == {}


@pytest.mark.asyncio
async def test_init_after_teardown_registers_again(registry, gpio):
    await registry.init()
    await registry.unregister_all()

    await registry.init()

    assert registry.active_pins == [17, 27]
    assert gpio.listener_count == 1
