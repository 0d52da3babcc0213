"""
Hardware Layer

Low-level hardware access only:

- GPIO managers (RPi.GPIO backed, in-memory mock, factory)
"""
from .gpio import IGPIOManager, HardwareGPIOManager, MockGPIOManager, create_gpio_manager

__all__ = [
    "IGPIOManager",
    "HardwareGPIOManager",
    "MockGPIOManager",
    "create_gpio_manager",
]
