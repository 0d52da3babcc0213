"""
Button Registry

Owns one (ButtonState, DebounceFilter, GestureStateMachine) unit per
configured pin, demultiplexes the GPIO change stream by pin and runs the
register / teardown lifecycle.

Only the registry writes ButtonState objects (through the pin's filter and
state machine). Setup failures exclude a single pin; teardown attempts every
pin and reports all failures at once.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from buttons.debounce_filter import DebounceFilter, logical_level
from buttons.gesture_state_machine import GestureStateMachine
from buttons.timer_service import TimerService
from hardware.gpio.gpio_manager_interface import IGPIOManager
from models.button_state import ButtonState
from models.config import ButtonsConfig
from models.enums import GestureState, GPIOEdge, LogicalLevel
from models.errors import PinConfigurationError, PinReadError, TeardownError
from models.events import DebugEvent, ErrorEvent
from services.event_sink import IEventSink
from utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.BUTTON)


@dataclass
class ButtonUnit:
    """Everything the registry keeps for one pin"""
    state: ButtonState
    debounce: DebounceFilter
    gestures: GestureStateMachine


class ButtonRegistry:
    """
    Registry of debounced, gesture-aware buttons

    Args:
        config: Pins, polarity and timing
        gpio: Hardware collaborator
        sink: Event sink (usually the EventBus)
        timers: TimerService (default: one bound to the running loop)
        owns_gpio: Shut the GPIO backend down on teardown. Pass False when
                   the GPIO manager is shared with other components.

    Example:
        registry = ButtonRegistry(config, gpio, event_bus)
        await registry.init()
        ...
        await registry.unregister_all()
    """

    def __init__(
        self,
        config: ButtonsConfig,
        gpio: IGPIOManager,
        sink: IEventSink,
        timers: Optional[TimerService] = None,
        owns_gpio: bool = True
    ):
        self.config = config
        self.gpio = gpio
        self.sink = sink
        self.timers = timers or TimerService()
        self.owns_gpio = owns_gpio

        self._units: Dict[int, ButtonUnit] = {}
        # Pins configured on the hardware, including ones whose preread failed
        self._configured: List[int] = []
        self._listening = False
        # Set by unregister_all; an init() suspended in a preread stops on resume
        self._closed = False

    # ---------------------------------------------------------------
    # Setup
    # ---------------------------------------------------------------

    async def init(self) -> None:
        """Register every configured pin, then start listening for changes"""
        self._closed = False
        self._debug("Initialize gpio buttons.")

        for pin in self.config.pins:
            await self.register(pin)
            if self._closed:
                log.info("Button init interrupted by teardown")
                return

        self._debug("Listen for changes to gpio pins.")
        self._start_listening()

        log.info(
            "Buttons ready",
            active=self.active_pins,
            pull=self.config.pull_mode.name,
            timing=self.config.timing.as_dict()
        )

    async def register(self, pin: int) -> bool:
        """
        Configure and preread one pin.

        Returns:
            True if the pin is active, False if setup failed (reported on
            the error channel, other pins unaffected)
        """
        if self._closed:
            return False
        if pin in self._units:
            log.warn("Button pin already registered", pin=pin)
            return self._units[pin].state.is_ready

        unit = self._create_unit(pin)
        self._units[pin] = unit

        try:
            self._configure(pin)
        except PinConfigurationError as e:
            self._units.pop(pin, None)
            self._report_error(e)
            return False

        try:
            raw = await self._preread(pin)
        except PinReadError as e:
            self._units.pop(pin, None)
            if not self._closed:
                self._report_error(e)
            return False

        if self._closed:
            # Teardown ran during the preread and already released this pin
            return False

        # Held at startup is state, not a gesture: no events
        state = unit.state
        state.logical_level = logical_level(raw, self.config.pull_mode)
        state.gesture_state = (
            GestureState.PRESSED
            if state.logical_level is LogicalLevel.PRESSED
            else GestureState.IDLE
        )

        log.info("Button registered", pin=pin, raw=raw, state=state.gesture_state.name)
        return True

    def _create_unit(self, pin: int) -> ButtonUnit:
        timing = self.config.timing
        state = ButtonState(pin=pin)
        gestures = GestureStateMachine(
            state,
            self.timers,
            self.sink,
            pressed_ms=timing.pressed_ms,
            clicked_ms=timing.clicked_ms
        )
        debounce = DebounceFilter(
            state,
            self.timers,
            self.sink,
            gestures,
            pull_mode=self.config.pull_mode,
            debounce_ms=timing.debounce_ms
        )
        return ButtonUnit(state=state, debounce=debounce, gestures=gestures)

    def _configure(self, pin: int) -> None:
        self._debug(f"Setup button pin {pin}.")
        try:
            self.gpio.register_input(
                pin,
                f"Button({pin})",
                pull_mode=self.config.pull_mode,
                edge=GPIOEdge.BOTH
            )
        except Exception as e:
            raise PinConfigurationError(pin, str(e)) from e
        self._configured.append(pin)

    async def _preread(self, pin: int) -> int:
        self._debug(f"Preread button pin {pin}.")
        loop = asyncio.get_running_loop()
        try:
            return int(await loop.run_in_executor(None, self.gpio.read, pin))
        except Exception as e:
            raise PinReadError(pin, str(e)) from e

    def _start_listening(self) -> None:
        if not self._listening:
            self.gpio.add_change_listener(self.dispatch)
            self._listening = True

    # ---------------------------------------------------------------
    # Runtime
    # ---------------------------------------------------------------

    def dispatch(self, pin: int, raw_level: int) -> None:
        """Route a raw change to the pin's debounce filter"""
        unit = self._units.get(pin)
        if unit is None or not unit.state.is_ready:
            return
        unit.debounce.on_raw_change(raw_level)

    def get_state(self, pin: int) -> Optional[ButtonState]:
        unit = self._units.get(pin)
        return unit.state if unit else None

    @property
    def active_pins(self) -> List[int]:
        return [pin for pin, unit in self._units.items() if unit.state.is_ready]

    # ---------------------------------------------------------------
    # Teardown
    # ---------------------------------------------------------------

    async def unregister_all(self) -> None:
        """
        Cancel every pending timer and release every configured pin.

        All pins are attempted even if some fail.

        Raises:
            TeardownError: One or more releases (or the GPIO shutdown) failed
        """
        self._closed = True
        self._debug("Cleanup buttons.")

        for unit in self._units.values():
            unit.debounce.cancel()
            self.timers.cancel_pending(unit.state)
            unit.state.gesture_state = GestureState.INIT
        self._units.clear()

        if self._listening:
            self.gpio.remove_change_listener(self.dispatch)
            self._listening = False

        failures: List[Tuple[Optional[int], str]] = []
        for pin in self._configured:
            try:
                self.gpio.release(pin)
            except Exception as e:
                failures.append((pin, str(e)))
                log.error("Failed to release button pin", pin=pin, error=str(e))
        self._configured.clear()

        if self.owns_gpio:
            self._debug("Destroy gpio.")
            try:
                self.gpio.cleanup()
            except Exception as e:
                failures.append((None, str(e)))
                log.error("GPIO cleanup failed", error=str(e))

        if failures:
            error = TeardownError(failures)
            self.sink.emit(ErrorEvent(str(error), error))
            raise error

        log.info("Buttons torn down")

    async def destroy(self) -> None:
        await self.unregister_all()

    # ---------------------------------------------------------------
    # Diagnostics
    # ---------------------------------------------------------------

    def _debug(self, message: str) -> None:
        log.debug(message)
        self.sink.emit(DebugEvent(message))

    def _report_error(self, error: Exception) -> None:
        log.error(str(error))
        self.sink.emit(ErrorEvent(str(error), error))
