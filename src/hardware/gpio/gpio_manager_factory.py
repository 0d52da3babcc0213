# factory.py
from runtime.runtime_info import RuntimeInfo
from hardware.gpio.gpio_manager_interface import IGPIOManager
from hardware.gpio.gpio_manager_mock import MockGPIOManager
from models.enums import PinNumbering
from utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.HARDWARE)

def create_gpio_manager(numbering: PinNumbering = PinNumbering.BCM) -> 'IGPIOManager':
    if RuntimeInfo.has_gpio():
        from hardware.gpio.gpio_manager_hardware import HardwareGPIOManager
        return HardwareGPIOManager(numbering=numbering)

    if RuntimeInfo.is_raspberry_pi():
        log.warn("Running on a Raspberry Pi but RPi.GPIO is not installed")
    log.warn("RPi.GPIO not found, using mock GPIO manager")
    return MockGPIOManager()
