"""Database models."""

from taskboard.models.task import TASK_STATUSES, Task
from taskboard.models.user import User


__all__ = ["User", "Task", "TASK_STATUSES"]
