from typing import Protocol, Dict, Callable
from models.enums import GPIOPullMode, GPIOEdge

# (pin, raw_level) change notification
ChangeListener = Callable[[int, int], None]


class IGPIOManager(Protocol):

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
        """Configure pin as input with edge detection (raises on failure)"""
        ...

    def release(self, pin: int) -> None:
        """Remove edge detection and free a single pin (raises on failure)"""
        ...


    # -------------------------------
    # IO
    # -------------------------------

    def read(self, pin: int) -> int:
        """Read GPIO pin value (0 or 1)"""
        ...

    def add_change_listener(self, listener: ChangeListener) -> None:
        """Subscribe to (pin, level) notifications, delivered on the event loop"""
        ...

    def remove_change_listener(self, listener: ChangeListener) -> None:
        ...


    # -------------------------------
    # Lifecycle / Debug
    # -------------------------------

    def cleanup(self) -> None:
        ...

    def get_registry(self) -> Dict[int, str]:
        ...
