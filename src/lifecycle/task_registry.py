"""
Task Registry
-------------

Tracks asyncio tasks created by the button service (async event-bus
handlers) so shutdown can cancel them and report how they ended.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum, auto
from typing import Dict, List, Optional

from utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.TASK)


class TaskCategory(Enum):
    """Logical grouping of asynchronous tasks"""
    EVENTBUS = auto()  # async EventBus handlers


@dataclass(frozen=True)
class TaskInfo:
    """Metadata captured when the task is created"""
    id: int
    category: TaskCategory
    description: str
    created_at: str  # ISO UTC


@dataclass
class TaskRecord:
    task: asyncio.Task
    info: TaskInfo
    cancelled: bool = False
    finished_with_error: Optional[BaseException] = None

    @property
    def running(self) -> bool:
        return not self.task.done()


class TaskRegistry:
    """
    Process-wide registry of tracked tasks

    Finished tasks that ended cleanly are pruned once the registry grows past
    a threshold; failed ones are kept for the shutdown summary.
    """

    _instance: Optional["TaskRegistry"] = None
    _prune_threshold = 256

    def __init__(self) -> None:
        self._records: Dict[int, TaskRecord] = {}
        self._by_task: Dict[asyncio.Task, int] = {}
        self._next_id = 1

    @classmethod
    def instance(cls) -> "TaskRegistry":
        if cls._instance is None:
            cls._instance = cls()
        return cls._instance

    def register(self, task: asyncio.Task, category: TaskCategory, description: str) -> int:
        if len(self._records) >= self._prune_threshold:
            self.prune()

        task_id = self._next_id
        self._next_id += 1

        self._records[task_id] = TaskRecord(
            task=task,
            info=TaskInfo(
                id=task_id,
                category=category,
                description=description,
                created_at=datetime.now(timezone.utc).isoformat(),
            ),
        )
        self._by_task[task] = task_id
        task.add_done_callback(self._on_task_done)

        log.debug(f"[Task {task_id}] Registered ({category.name}) - {description}")
        return task_id

    def _on_task_done(self, task: asyncio.Task) -> None:
        record = self.get_record(task)
        if record is None:
            return

        if task.cancelled():
            record.cancelled = True
            log.debug(f"[Task {record.info.id}] Cancelled")
            return

        exc = task.exception()
        if exc is not None:
            record.finished_with_error = exc
            log.error(f"[Task {record.info.id}] FAILED: {exc}", description=record.info.description)
        else:
            log.debug(f"[Task {record.info.id}] Completed")

    def get_record(self, task: asyncio.Task) -> Optional[TaskRecord]:
        task_id = self._by_task.get(task)
        return self._records.get(task_id) if task_id is not None else None

    # -----------------------------
    # Queries
    # -----------------------------

    def active(self) -> List[TaskRecord]:
        return [r for r in self._records.values() if r.running]

    def failed(self) -> List[TaskRecord]:
        return [r for r in self._records.values() if r.finished_with_error is not None]

    def summary(self) -> str:
        cancelled = sum(1 for r in self._records.values() if r.cancelled)
        return (
            f"Tasks: total={len(self._records)}, running={len(self.active())}, "
            f"failed={len(self.failed())}, cancelled={cancelled}"
        )

    def prune(self) -> None:
        """Forget tasks that finished cleanly"""
        keep = {
            task_id: r for task_id, r in self._records.items()
            if r.running or r.finished_with_error is not None
        }
        self._by_task = {r.task: task_id for task_id, r in keep.items()}
        self._records = keep

    def get_tasks_for_shutdown(self, exclude: Optional[List[asyncio.Task]] = None) -> List[asyncio.Task]:
        """Running tasks that shutdown should cancel"""
        excluded = set(exclude or [])
        tasks = [r.task for r in self.active() if r.task not in excluded]
        log.debug(f"Shutdown: {len(tasks)} tasks to cancel")
        return tasks


def create_tracked_task(
    coro,
    *,
    category: TaskCategory,
    description: str,
    loop: Optional[asyncio.AbstractEventLoop] = None
) -> asyncio.Task:
    """Create a task and register it in one call"""
    loop = loop or asyncio.get_running_loop()
    task = loop.create_task(coro)
    TaskRegistry.instance().register(task, category, description)
    return task
