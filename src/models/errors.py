"""
Button subsystem errors

Setup errors (configuration, preread) are per pin and never fatal to the
other pins. TeardownError is raised to the caller of the teardown after
every pin has been attempted.
"""

from typing import List, Tuple, Optional


class ButtonError(Exception):
    """Base class for button subsystem errors"""


class PinConfigurationError(ButtonError):
    """GPIO configuration (direction / edge / pull) failed for a pin"""

    def __init__(self, pin: int, reason: str):
        super().__init__(f"Failed to setup button pin {pin}. {reason}")
        self.pin = pin
        self.reason = reason


class PinReadError(ButtonError):
    """Startup preread of a pin failed"""

    def __init__(self, pin: int, reason: str):
        super().__init__(f"Failed preread on button pin {pin}. {reason}")
        self.pin = pin
        self.reason = reason


class TeardownError(ButtonError):
    """
    One or more hardware releases failed during teardown.

    failures: list of (pin, reason); pin is None for the global GPIO shutdown.
    """

    def __init__(self, failures: List[Tuple[Optional[int], str]]):
        self.failures = list(failures)
        parts = [
            f"pin {pin}: {reason}" if pin is not None else f"gpio: {reason}"
            for pin, reason in self.failures
        ]
        super().__init__(f"Teardown failed ({'; '.join(parts)})")
