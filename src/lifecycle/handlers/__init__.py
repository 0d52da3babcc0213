from .button_shutdown_handler import ButtonShutdownHandler
from .task_cancellation_handler import TaskCancellationHandler

__all__ = [
    "ButtonShutdownHandler",
    "TaskCancellationHandler",
]
