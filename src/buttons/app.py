"""
Button service application
--------------------------

Responsible for:
- loading configuration and configuring the logger
- wiring GPIO manager, event bus and button registry
- logging every gesture of the configured buttons
- graceful shutdown on Ctrl+C / SIGTERM

Installed as the `gpio-buttons` console script; src/main.py runs it from a
source checkout.
"""

import argparse
import asyncio
import sys
from pathlib import Path
from typing import List, Optional, Union

from buttons.button_registry import ButtonRegistry
from hardware.gpio import create_gpio_manager
from lifecycle import ShutdownCoordinator
from lifecycle.handlers import ButtonShutdownHandler, TaskCancellationHandler
from managers import ConfigManager
from managers.config_manager import DEFAULT_CONFIG_PATH
from models.enums import LogCategory
from models.events import Event, EventType
from services import EventBus, log_middleware
from utils.logger import get_logger, configure_logger

log = get_logger().for_category(LogCategory.SYSTEM)
gesture_log = get_logger().for_category(LogCategory.GESTURE)

GESTURE_TYPES = (
    EventType.PRESSED,
    EventType.CLICKED,
    EventType.CLICKED_PRESSED,
    EventType.DOUBLE_CLICKED,
    EventType.RELEASED,
)


def on_gesture(event: Event) -> None:
    gesture_log.info(f"Button {event.pin}: {event.type.name.lower()}")


async def main(config_path: Union[str, Path] = DEFAULT_CONFIG_PATH) -> None:
    """Main async entry point (dependency injection and event loop startup)"""

    # ========================================================================
    # 1. CONFIGURATION
    # ========================================================================

    config = ConfigManager(config_path).load()
    configure_logger(config.logging.level, config.logging.colors)

    log.info("Starting GPIO button service...")

    # ========================================================================
    # 2. INFRASTRUCTURE
    # ========================================================================

    gpio_manager = create_gpio_manager(config.buttons.numbering)

    event_bus = EventBus()
    event_bus.add_middleware(log_middleware)

    for event_type in GESTURE_TYPES:
        event_bus.subscribe(event_type, on_gesture)

    # ========================================================================
    # 3. BUTTONS
    # ========================================================================

    registry = ButtonRegistry(config.buttons, gpio_manager, event_bus)
    await registry.init()

    if not registry.active_pins:
        log.warn("No button pin could be configured")

    # ========================================================================
    # 4. SHUTDOWN COORDINATOR
    # ========================================================================

    coordinator = ShutdownCoordinator()
    coordinator.register(ButtonShutdownHandler(registry))
    coordinator.register(TaskCancellationHandler())

    loop = asyncio.get_running_loop()
    coordinator.setup_signal_handlers(loop)

    log.info("🏁 Buttons initialized. Waiting for exit signal...")

    await coordinator.wait_for_shutdown()
    await coordinator.shutdown_all()

    log.info("👋 GPIO button service shut down cleanly.")


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Debounced GPIO push-button gestures")
    parser.add_argument(
        "-c", "--config",
        default=DEFAULT_CONFIG_PATH,
        help="Path to buttons.yaml (default: the bundled config)"
    )
    return parser.parse_args(argv)


def force_utf8_output() -> None:
    """UTF-8 console output (Unicode symbols on the Pi console)"""
    for stream in (sys.stdout, sys.stderr):
        if hasattr(stream, "reconfigure") and stream.encoding != "UTF-8":
            stream.reconfigure(encoding="utf-8")  # type: ignore


def run(argv: Optional[List[str]] = None) -> int:
    """Console script entry point"""
    force_utf8_output()
    args = parse_args(argv)
    try:
        asyncio.run(main(args.config))
    except KeyboardInterrupt:
        log.info("Keyboard interrupt received")
    except ValueError as e:
        log.error(f"Invalid configuration: {e}")
        return 1
    return 0
