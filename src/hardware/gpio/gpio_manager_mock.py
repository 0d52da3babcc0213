from typing import Dict, List, Set
from hardware.gpio.gpio_manager_interface import IGPIOManager, ChangeListener
from models.enums import GPIOPullMode, GPIOEdge
from utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.HARDWARE)

class MockGPIOManager(IGPIOManager):
    """
    In-memory GPIO backend for development machines and tests.

    Pins rest at the level implied by their pull mode. set_level() simulates
    an edge and notifies change listeners synchronously. Pins listed in
    fail_setup / fail_read / fail_release make the matching call raise.
    """

    def __init__(self):
        self._registry: Dict[int, str] = {}  # pin -> component_name
        self._values: Dict[int, int] = {}
        self._edges: Dict[int, GPIOEdge] = {}
        self._listeners: List[ChangeListener] = []

        self.fail_setup: Set[int] = set()
        self.fail_read: Set[int] = set()
        self.fail_release: Set[int] = set()
        self.fail_cleanup: bool = False

        self.released: List[int] = []
        self.cleaned_up: bool = False
        log.info("Mock GPIO manager initialized")

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
        if pin in self.fail_setup:
            raise RuntimeError(f"Mock setup failure on GPIO {pin}")
        self._check_available(pin, component)
        self._registry[pin] = component
        self._edges[pin] = edge
        self._values.setdefault(pin, 1 if pull_mode is GPIOPullMode.PULL_UP else 0)

    def release(self, pin: int) -> None:
        if pin in self.fail_release:
            raise RuntimeError(f"Mock release failure on GPIO {pin}")
        self._registry.pop(pin, None)
        self._edges.pop(pin, None)
        self.released.append(pin)


    # -------------------------------
    # IO
    # -------------------------------

    def read(self, pin: int) -> int:
        if pin in self.fail_read:
            raise RuntimeError(f"Mock read failure on GPIO {pin}")
        return self._values.get(pin, 0)

    def set_level(self, pin: int, level: int) -> None:
        """Drive a pin to level, notifying listeners if the edge is detected"""
        level = int(level)
        previous = self._values.get(pin)
        self._values[pin] = level

        edge = self._edges.get(pin)
        if edge is None or previous == level:
            return
        if edge is GPIOEdge.RISING and level == 0:
            return
        if edge is GPIOEdge.FALLING and level == 1:
            return

        for listener in list(self._listeners):
            listener(pin, level)

    def add_change_listener(self, listener: ChangeListener) -> None:
        if listener not in self._listeners:
            self._listeners.append(listener)

    def remove_change_listener(self, listener: ChangeListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    @property
    def listener_count(self) -> int:
        return len(self._listeners)

    # -------------------------------
    # Lifecycle
    # -------------------------------

    def cleanup(self) -> None:
        if self.fail_cleanup:
            raise RuntimeError("Mock GPIO cleanup failure")
        pin_count = len(self._registry)
        self._registry.clear()
        self._edges.clear()
        self._listeners.clear()
        self.cleaned_up = True
        log.info(f"Mock GPIO Manager cleanup finished ({pin_count} pins)")

    def get_registry(self) -> Dict[int, str]:
        return self._registry.copy()


    # -------------------------------
    # Internals
    # -------------------------------

    def _check_available(self, pin: int, component: str) -> None:
        if pin in self._registry:
            raise ValueError(
                f"GPIO {pin} already registered by {self._registry[pin]}"
            )
