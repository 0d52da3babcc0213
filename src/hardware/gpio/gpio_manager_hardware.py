"""
GPIO Manager - Infrastructure Layer Component

Centralized GPIO pin allocation and lifecycle management on top of RPi.GPIO.

Architecture: Infrastructure Layer
- Sits between the button registry and the RPi.GPIO hardware driver
- Manages pin registry and prevents conflicts
- Marshals RPi.GPIO edge callbacks (driver thread) onto the asyncio loop
"""

import asyncio
from typing import Dict, List, Optional
from hardware.gpio.gpio_manager_interface import IGPIOManager, ChangeListener
from models.enums import GPIOPullMode, GPIOEdge, PinNumbering
from utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.HARDWARE)

class HardwareGPIOManager(IGPIOManager):
    """
    Infrastructure component managing GPIO pin allocation and lifecycle.

    Responsibilities:
    - Initialize RPi.GPIO library (BCM or BOARD numbering, disable warnings)
    - Track registered pins (prevent conflicts)
    - Register both-edge detection and forward level changes to listeners
    - Clean up pins on release / shutdown
    """

    def __init__(
        self,
        numbering: PinNumbering = PinNumbering.BCM,
        loop: Optional[asyncio.AbstractEventLoop] = None
    ):
        """Initialize GPIO library and empty pin registry"""
        try:
            import RPi.GPIO as GPIO
        except ImportError as e:
            raise RuntimeError("RPi.GPIO not available") from e

        self._gpio = GPIO
        self._loop = loop
        self._registry: Dict[int, str] = {}  # pin -> component_name
        self._listeners: List[ChangeListener] = []

        mode = {
            PinNumbering.BCM: self._gpio.BCM,
            PinNumbering.BOARD: self._gpio.BOARD,
        }[numbering]
        self._gpio.setmode(mode)
        self._gpio.setwarnings(False)

        log.info(f"GPIO manager initialized ({numbering.name} mode)")


    # -------------------------------
    # Registration
    # -------------------------------

    def register_input(
        self,
        pin: int,
        component: str,
        pull_mode: GPIOPullMode = GPIOPullMode.PULL_UP,
        edge: GPIOEdge = GPIOEdge.BOTH
    ) -> None:
        """
        Register and setup input pin with edge detection

        Args:
            pin: GPIO pin number (in the configured numbering scheme)
            component: Component name for tracking (e.g., "Button(17)")
            pull_mode: Pull resistor configuration (default: PULL_UP)
            edge: Edge(s) reported to change listeners (default: BOTH)

        Raises:
            ValueError: If pin already registered by another component
            RuntimeError: If RPi.GPIO rejects the setup
        """
        self._check_available(pin, component)

        if self._loop is None:
            self._loop = asyncio.get_running_loop()

        gpio_pull = {
            GPIOPullMode.PULL_UP: self._gpio.PUD_UP,
            GPIOPullMode.PULL_DOWN: self._gpio.PUD_DOWN,
        }[pull_mode]

        gpio_edge = {
            GPIOEdge.RISING: self._gpio.RISING,
            GPIOEdge.FALLING: self._gpio.FALLING,
            GPIOEdge.BOTH: self._gpio.BOTH,
        }[edge]

        self._gpio.setup(pin, self._gpio.IN, pull_up_down=gpio_pull)
        try:
            self._gpio.add_event_detect(pin, gpio_edge, callback=self._on_edge)
        except RuntimeError:
            self._gpio.cleanup(pin)
            raise
        self._registry[pin] = component

        log.info(
            "GPIO pin registered (INPUT)",
            pin=pin,
            component=component,
            pull=pull_mode.name,
            edge=edge.name
        )

    def release(self, pin: int) -> None:
        """Stop edge detection and reset a single pin"""
        if pin not in self._registry:
            return
        self._gpio.remove_event_detect(pin)
        self._gpio.cleanup(pin)
        component = self._registry.pop(pin)
        log.debug("GPIO pin released", pin=pin, component=component)


    # -------------------------------
    # IO
    # -------------------------------

    def read(self, pin: int) -> int:
        return int(self._gpio.input(pin))

    def add_change_listener(self, listener: ChangeListener) -> None:
        if listener not in self._listeners:
            self._listeners.append(listener)

    def remove_change_listener(self, listener: ChangeListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def _on_edge(self, channel: int) -> None:
        """RPi.GPIO callback, runs on the driver's thread"""
        level = int(self._gpio.input(channel))
        loop = self._loop
        if loop is None or loop.is_closed():
            return
        loop.call_soon_threadsafe(self._notify, channel, level)

    def _notify(self, pin: int, level: int) -> None:
        for listener in list(self._listeners):
            listener(pin, level)


    # -------------------------------
    # Lifecycle
    # -------------------------------

    def cleanup(self) -> None:
        """
        Cleanup all GPIO pins

        Called on application shutdown to release GPIO resources.
        """
        pin_count = len(self._registry)
        log.info(f"Cleaning up {pin_count} GPIO pins")

        self._gpio.cleanup()
        self._registry.clear()
        self._listeners.clear()

        log.info("GPIO cleanup complete")

    def get_registry(self) -> Dict[int, str]:
        """
        Get current pin allocations (for debugging)

        Returns:
            Dict mapping pin number to component name
        """
        return self._registry.copy()

    def _check_available(self, pin: int, component: str) -> None:
        """
        Check if pin is available for registration

        Raises:
            ValueError: If pin already registered
        """
        if pin in self._registry:
            existing_owner = self._registry[pin]
            error_msg = (
                f"GPIO pin conflict detected: Pin {pin} requested by '{component}' "
                f"is already registered to '{existing_owner}'"
            )
            log.error(error_msg)
            raise ValueError(error_msg)

