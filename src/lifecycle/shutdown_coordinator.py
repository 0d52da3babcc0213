"""
Shutdown coordinator that orchestrates graceful shutdown of all components.

Manages signal handlers, shutdown sequencing, and error handling across
multiple shutdown handlers in priority order.
"""

import asyncio
import signal
from typing import Dict, List, Optional

from utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.SYSTEM)


class ShutdownCoordinator:
    """
    Coordinates graceful shutdown of multiple components.

    Maintains a list of shutdown handlers and executes them in priority order
    when shutdown is triggered. Handles signal registration, timeout management,
    and error logging.

    Example:
        coordinator = ShutdownCoordinator()
        coordinator.register(ButtonShutdownHandler(registry))
        coordinator.register(TaskCancellationHandler())

        coordinator.setup_signal_handlers(loop)
        await coordinator.wait_for_shutdown()
        await coordinator.shutdown_all()
    """

    def __init__(self, timeout_per_handler: float = 5.0, total_timeout: float = 15.0):
        """
        Initialize shutdown coordinator.

        Args:
            timeout_per_handler: Timeout for each individual handler (seconds)
            total_timeout: Total timeout for entire shutdown sequence (seconds)
        """
        self._handlers: List = []
        self._shutdown_event: Optional[asyncio.Event] = None
        self._timeout_per_handler = timeout_per_handler
        self._total_timeout = total_timeout
        self._shutdown_trigger: Dict[str, Optional[str]] = {"reason": None}

    @property
    def reason(self) -> Optional[str]:
        return self._shutdown_trigger["reason"]

    def register(self, handler) -> None:
        """
        Register a shutdown handler.

        Handler must have:
        - shutdown_priority property (int)
        - async shutdown() method
        """
        if not hasattr(handler, "shutdown_priority"):
            raise ValueError(f"Handler {handler} missing shutdown_priority property")
        if not hasattr(handler, "shutdown"):
            raise ValueError(f"Handler {handler} missing shutdown() method")

        self._handlers.append(handler)
        log.debug(f"Registered shutdown handler: {handler.__class__.__name__}")

    def setup_signal_handlers(self, loop: asyncio.AbstractEventLoop) -> None:
        """Install SIGINT (Ctrl+C) and SIGTERM handlers that trigger shutdown"""
        self._ensure_event()

        def signal_handler(sig: signal.Signals) -> None:
            log.info(f"Signal {sig.name} received → triggering shutdown")
            self.request_shutdown(sig.name)

        for sig in (signal.SIGINT, signal.SIGTERM):
            loop.add_signal_handler(sig, lambda s=sig: signal_handler(s))

        log.info("Signal handlers installed (SIGINT, SIGTERM)")

    def request_shutdown(self, reason: str = "REQUESTED") -> None:
        """Trigger shutdown programmatically"""
        event = self._ensure_event()
        if self._shutdown_trigger["reason"] is None:
            self._shutdown_trigger["reason"] = reason
        event.set()

    def _ensure_event(self) -> asyncio.Event:
        if self._shutdown_event is None:
            self._shutdown_event = asyncio.Event()
        return self._shutdown_event

    async def wait_for_shutdown(self) -> None:
        """
        Wait for a shutdown signal or request_shutdown().

        Raises:
            RuntimeError: If neither setup_signal_handlers() nor
                          request_shutdown() was called first
        """
        if self._shutdown_event is None:
            raise RuntimeError("Call setup_signal_handlers() first")

        await self._shutdown_event.wait()
        log.debug(f"Shutdown triggered ({self.reason})")

    # ------------------------------------------------------------------
    # Shutdown sequence
    # ------------------------------------------------------------------

    async def shutdown_all(self) -> None:
        """
        Execute graceful shutdown of all handlers in priority order.

        Handlers are called in descending priority order (highest first).
        Each handler has its own timeout (timeout_per_handler) and the entire
        sequence has a global timeout (total_timeout). A failing handler does
        not stop the ones after it.
        """
        log.info("🛑 Initiating graceful shutdown sequence...")
        log.info(f"   Reason: {self._shutdown_trigger.get('reason') or 'UNKNOWN'}")

        sorted_handlers = sorted(
            self._handlers, key=lambda h: h.shutdown_priority, reverse=True
        )

        loop = asyncio.get_running_loop()
        start_time = loop.time()

        for handler in sorted_handlers:
            handler_name = handler.__class__.__name__

            elapsed = loop.time() - start_time
            if elapsed > self._total_timeout:
                log.error(
                    f"⚠️  Total shutdown timeout exceeded ({elapsed:.1f}s > {self._total_timeout}s)"
                )
                break

            try:
                log.debug(f"Shutting down {handler_name} (priority={handler.shutdown_priority})...")
                await asyncio.wait_for(handler.shutdown(), timeout=self._timeout_per_handler)
                log.debug(f"✓ {handler_name} shutdown complete")

            except asyncio.TimeoutError:
                log.error(f"⚠️  {handler_name} shutdown timeout ({self._timeout_per_handler}s)")

            except asyncio.CancelledError:
                log.warn(f"{handler_name} shutdown was cancelled")
                raise

            except Exception as e:
                log.error(f"❌ Error shutting down {handler_name}: {e}", error_type=type(e).__name__)

        log.info("✓ Shutdown sequence complete")
