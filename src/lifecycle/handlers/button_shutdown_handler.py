from __future__ import annotations

from typing import TYPE_CHECKING

from lifecycle.shutdown_protocol import IShutdownHandler
from models.errors import TeardownError
from utils.logger import get_logger, LogCategory

if TYPE_CHECKING:
    from buttons.button_registry import ButtonRegistry

log = get_logger().for_category(LogCategory.SHUTDOWN)


class ButtonShutdownHandler(IShutdownHandler):
    """
    Shutdown handler for the button registry.

    Cancels pending debounce / gesture timers and releases every button pin,
    so no gesture event is emitted once shutdown has started.

    Priority: 100 (shutdown first)
    """

    def __init__(self, registry: "ButtonRegistry"):
        self.registry = registry

    @property
    def shutdown_priority(self) -> int:
        return 100

    async def shutdown(self) -> None:
        log.info("Releasing buttons...")

        try:
            await self.registry.unregister_all()
            log.debug("Buttons released")
        except TeardownError as e:
            # Every pin was attempted; report and let the sequence continue
            for pin, reason in e.failures:
                log.error("Button release failed", pin=pin if pin is not None else "gpio", reason=reason)
