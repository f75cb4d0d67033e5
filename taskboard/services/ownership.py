"""Task ownership guard.

Every endpoint that reads a single task or mutates one resolves it through
``check_task_ownership`` first. The outcome is terminal for the request: a
missing task maps to 404, a task owned by someone else to 401.
"""

import enum
from dataclasses import dataclass

from taskboard.errors import error_response
from taskboard.extensions import db
from taskboard.models import Task


class Ownership(enum.Enum):
    """Outcome of an ownership check."""

    OK = "ok"
    NOT_FOUND = "not_found"
    FORBIDDEN = "forbidden"


@dataclass(frozen=True)
class OwnershipResult:
    outcome: Ownership
    task: Task | None = None

    @property
    def ok(self) -> bool:
        return self.outcome is Ownership.OK


_ERRORS = {
    Ownership.NOT_FOUND: ("Task not found", 404),
    Ownership.FORBIDDEN: ("Unauthorized", 401),
}


def check_task_ownership(task_id: int, user_id: int) -> OwnershipResult:
    """Load a task and verify it belongs to the requesting user.

    Args:
        task_id: Identifier of the task to load.
        user_id: Identifier of the authenticated user.

    Returns:
        OwnershipResult carrying the task only when the outcome is OK.
    """
    task = db.session.get(Task, task_id)
    if task is None:
        return OwnershipResult(Ownership.NOT_FOUND)

    if not task.is_owned_by(user_id):
        return OwnershipResult(Ownership.FORBIDDEN)

    return OwnershipResult(Ownership.OK, task)


def ownership_error_response(result: OwnershipResult) -> tuple:
    """Map a failed ownership check to its error response.

    Args:
        result: Result of check_task_ownership with a non-OK outcome.

    Returns:
        Tuple of (response, status_code).
    """
    message, status_code = _ERRORS[result.outcome]
    return error_response(message, status_code)
