# lifecycle/handlers/task_cancellation_handler.py

import asyncio
from typing import List, Optional

from lifecycle.shutdown_protocol import IShutdownHandler
from lifecycle.task_registry import TaskRegistry
from utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.SHUTDOWN)


class TaskCancellationHandler(IShutdownHandler):
    """
    Cancels every tracked asyncio task (async event handlers, background
    work) except the task running the shutdown and any explicitly excluded
    tasks.

    Priority: 40 (after the buttons stopped producing events)
    """

    def __init__(self, exclude_tasks: Optional[List[asyncio.Task]] = None):
        self.exclude_tasks = exclude_tasks or []

    @property
    def shutdown_priority(self) -> int:
        return 40

    async def shutdown(self) -> None:
        current = asyncio.current_task()
        exclude = list(self.exclude_tasks)
        if current:
            exclude.append(current)

        loop = asyncio.get_running_loop()
        tasks: List[asyncio.Task] = [
            t for t in TaskRegistry.instance().get_tasks_for_shutdown(exclude=exclude)
            if t.get_loop() is loop
        ]
        if not tasks:
            log.debug("No background tasks to cancel")
            return

        log.info(f"Cancelling {len(tasks)} background tasks...")

        for task in tasks:
            if not task.done():
                task.cancel(msg="shutdown")
                log.debug(f"Cancelled task: {task.get_name()}")

        # Wait for all tasks to finish (either complete or raise CancelledError)
        await asyncio.gather(*tasks, return_exceptions=True)

        log.debug(f"All tasks cancelled ({TaskRegistry.instance().summary()})")
