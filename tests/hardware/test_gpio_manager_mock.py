"""Tests for the in-memory GPIO backend"""

import pytest

from hardware.gpio import MockGPIOManager, create_gpio_manager
from models.enums import GPIOEdge, GPIOPullMode, PinNumbering
from runtime.runtime_info import RuntimeInfo


def test_rest_level_follows_pull_mode():
    gpio = MockGPIOManager()
    gpio.register_input(17, "Button(17)", pull_mode=GPIOPullMode.PULL_UP)
    gpio.register_input(27, "Button(27)", pull_mode=GPIOPullMode.PULL_DOWN)

    assert gpio.read(17) == 1
    assert gpio.read(27) == 0


def test_conflicting_registration_rejected():
    gpio = MockGPIOManager()
    gpio.register_input(17, "Button(17)")

    with pytest.raises(ValueError):
        gpio.register_input(17, "Other")


def test_set_level_notifies_on_change_only():
    gpio = MockGPIOManager()
    gpio.register_input(17, "Button(17)")
    seen = []
    gpio.add_change_listener(lambda pin, level: seen.append((pin, level)))

    gpio.set_level(17, 0)
    gpio.set_level(17, 0)
    gpio.set_level(17, 1)
    gpio.set_level(99, 0)  # not registered

    assert seen == [(17, 0), (17, 1)]


def test_edge_filtering():
    gpio = MockGPIOManager()
    gpio.register_input(17, "Button(17)", edge=GPIOEdge.FALLING)
    seen = []
    gpio.add_change_listener(lambda pin, level: seen.append(level))

    gpio.set_level(17, 0)
    gpio.set_level(17, 1)

    assert seen == [0]


def test_release_and_cleanup():
    gpio = MockGPIOManager()
    gpio.register_input(17, "Button(17)")
    gpio.add_change_listener(lambda pin, level: None)

    gpio.release(17)
    assert gpio.get_registry() == {}
    assert gpio.released == [17]

    gpio.cleanup()
    assert gpio.cleaned_up
    assert gpio.listener_count == 0


def test_injected_failures():
    gpio = MockGPIOManager()
    gpio.fail_setup.add(1)
    gpio.fail_read.add(2)
    gpio.fail_release.add(2)
    gpio.fail_cleanup = True

    with pytest.raises(RuntimeError):
        gpio.register_input(1, "Button(1)")
    gpio.register_input(2, "Button(2)")
    with pytest.raises(RuntimeError):
        gpio.read(2)
    with pytest.raises(RuntimeError):
        gpio.release(2)
    with pytest.raises(RuntimeError):
        gpio.cleanup()


def test_factory_falls_back_to_mock(monkeypatch):
    monkeypatch.setattr(RuntimeInfo, "has_gpio", classmethod(lambda cls: False))

    gpio = create_gpio_manager(PinNumbering.BCM)

    assert isinstance(gpio, MockGPIOManager)
