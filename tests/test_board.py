"""Tests for board grouping."""

from datetime import datetime

import pytest

from taskboard.models import Task
from taskboard.services.board import COLUMNS, build_board, is_overdue, is_valid_move


NOW = datetime(2030, 1, 15, 12, 0, 0)


def _task(task_id, status, due_date=datetime(2030, 2, 1)):
    return Task(id=task_id, title=f"Task {task_id}", description="", status=status, due_date=due_date)


def test_columns_order():
    assert [status for status, _ in COLUMNS] == ["pending", "in-progress", "completed"]
    assert [title for _, title in COLUMNS] == ["Pending", "In Progress", "Completed"]


def test_build_board_groups_by_status(app):
    tasks = [_task(1, "pending"), _task(2, "completed"), _task(3, "pending"), _task(4, "in-progress")]

    with app.app_context():
        board = build_board(tasks, now=NOW)

    by_status = {column["status"]: column for column in board}
    assert [t["id"] for t in by_status["pending"]["tasks"]] == [1, 3]
    assert by_status["pending"]["count"] == 2
    assert by_status["in-progress"]["count"] == 1
    assert by_status["completed"]["tasks"][0]["id"] == 2


def test_build_board_empty(app):
    with app.app_context():
        board = build_board([], now=NOW)

    assert [column["count"] for column in board] == [0, 0, 0]


def test_build_board_marks_overdue(app):
    tasks = [_task(1, "pending", datetime(2030, 1, 1)), _task(2, "pending", datetime(2030, 3, 1))]

    with app.app_context():
        cards = build_board(tasks, now=NOW)[0]["tasks"]

    assert [card["overdue"] for card in cards] == [True, False]


def test_is_overdue():
    assert is_overdue(_task(1, "pending", datetime(2030, 1, 15, 11, 59)), now=NOW)
    assert not is_overdue(_task(1, "pending", datetime(2030, 1, 15, 12, 1)), now=NOW)


@pytest.mark.parametrize(
    ("current", "target", "expected"),
    [
        ("pending", "in-progress", True),
        ("in-progress", "completed", True),
        ("completed", "pending", True),
        ("pending", "pending", False),
        ("pending", "archived", False),
    ],
)
def test_is_valid_move(current, target, expected):
    assert is_valid_move(current, target) is expected
