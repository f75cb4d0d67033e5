"""Board model: tasks grouped into the three status columns."""

from datetime import datetime
from typing import Any, Iterable

from taskboard.models import TASK_STATUSES, Task
from taskboard.models.task import utcnow
from taskboard.schemas import TaskSchema


COLUMNS: tuple[tuple[str, str], ...] = (
    ("pending", "Pending"),
    ("in-progress", "In Progress"),
    ("completed", "Completed"),
)


def is_overdue(task: Task, now: datetime | None = None) -> bool:
    """Check whether a task's due date has passed.

    Args:
        task: Task to check.
        now: Reference time (naive UTC). Defaults to the current time.

    Returns:
        True if the due date is before ``now``.
    """
    if now is None:
        now = utcnow()
    return task.due_date < now


def is_valid_move(current_status: str, target_status: str) -> bool:
    """Check whether dropping a card on a column should change its status.

    A drop only triggers an update when it lands on one of the three
    columns and that column differs from the card's current one.
    """
    return target_status in TASK_STATUSES and target_status != current_status


def build_board(tasks: Iterable[Task], now: datetime | None = None) -> list[dict[str, Any]]:
    """Group tasks into board columns.

    Args:
        tasks: Tasks to place, in display order.
        now: Reference time for the overdue flag.

    Returns:
        One dict per column with status, title, count and serialized tasks.
    """
    if now is None:
        now = utcnow()

    schema = TaskSchema()
    columns: dict[str, list[dict[str, Any]]] = {status: [] for status, _ in COLUMNS}

    for task in tasks:
        # Rows with a status outside the workflow have no column to land in
        if task.status not in columns:
            continue
        card = schema.dump(task)
        card["overdue"] = is_overdue(task, now)
        columns[task.status].append(card)

    return [
        {
            "status": status,
            "title": title,
            "count": len(columns[status]),
            "tasks": columns[status],
        }
        for status, title in COLUMNS
    ]
