"""Tests for application metrics wiring."""

from unittest.mock import MagicMock, patch

from taskboard.telemetry import TaskboardMetrics, get_metrics


def test_get_metrics_is_cached():
    metrics = get_metrics()
    assert isinstance(metrics, TaskboardMetrics)
    assert get_metrics() is metrics


def _fake_metrics():
    return TaskboardMetrics(*(MagicMock() for _ in range(6)))


def test_task_lifecycle_counters(client, auth_headers):
    fake = _fake_metrics()
    with patch("taskboard.routes.tasks.get_metrics", return_value=fake):
        task = client.post(
            "/api/tasks", json={"title": "Task", "dueDate": "2030-01-15"}, headers=auth_headers
        ).get_json()["task"]
        client.put(f"/api/tasks/{task['id']}", json={"status": "completed"}, headers=auth_headers)
        client.put(f"/api/tasks/{task['id']}", json={"title": "Same column"}, headers=auth_headers)
        client.delete(f"/api/tasks/{task['id']}", headers=auth_headers)

    fake.tasks_created.add.assert_called_once_with(1)
    fake.status_changes.add.assert_called_once_with(1, {"from": "pending", "to": "completed"})
    fake.tasks_deleted.add.assert_called_once_with(1)


def test_login_attempt_counter(client, user):
    fake = _fake_metrics()
    with patch("taskboard.routes.auth.get_metrics", return_value=fake):
        client.post("/api/login", json={"email": "test@example.com", "password": "wrongpassword"})

    fake.login_attempts.add.assert_called_once_with(1, {"status": "invalid_password"})
