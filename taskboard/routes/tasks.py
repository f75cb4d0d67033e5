"""Task CRUD endpoints."""

import logging

from flask import Blueprint, g, jsonify, request
from marshmallow import ValidationError

from taskboard.errors import validation_error_response
from taskboard.extensions import db
from taskboard.middleware.auth import token_required
from taskboard.models import Task
from taskboard.schemas import TaskCreateSchema, TaskSchema, TaskUpdateSchema
from taskboard.services.board import build_board, is_valid_move
from taskboard.services.ownership import check_task_ownership, ownership_error_response
from taskboard.telemetry import get_metrics, get_tracer


logger = logging.getLogger(__name__)
tracer = get_tracer(__name__)

tasks_bp = Blueprint("tasks", __name__, url_prefix="/api/tasks")


@tasks_bp.route("", methods=["GET"])
@token_required
def list_tasks():
    """List the caller's tasks, newest first.

    Query params:
        status: Optional filter (pending, in-progress, completed).
            Any other value is ignored.

    Returns:
        JSON response with the caller's tasks.
    """
    status = request.args.get("status")
    tasks = Task.for_user(g.current_user.id, status).all()

    return jsonify({"tasks": TaskSchema(many=True).dump(tasks)})


@tasks_bp.route("/board", methods=["GET"])
@token_required
def get_board():
    """Get the caller's tasks grouped into board columns.

    Returns:
        JSON response with the three status columns.
    """
    tasks = Task.for_user(g.current_user.id).all()

    return jsonify({"columns": build_board(tasks)})


@tasks_bp.route("", methods=["POST"])
@token_required
def create_task():
    """Create a new task. New tasks always start out pending.

    Returns:
        JSON response with created task.
    """
    with tracer.start_as_current_span("task.create") as span:
        schema = TaskCreateSchema()
        try:
            data = schema.load(request.get_json(silent=True) or {})
        except ValidationError as err:
            span.set_attribute("validation.status", "failed")
            return validation_error_response(err)

        task = Task(
            title=data["title"],
            description=data.get("description") or "",
            due_date=data["due_date"],
            status="pending",
            user_id=g.current_user.id,
        )

        db.session.add(task)
        db.session.commit()

        span.set_attribute("user.id", g.current_user.id)
        span.set_attribute("task.id", task.id)

        get_metrics().tasks_created.add(1)
        logger.info(f"Task created: {task.id}", extra={"user_id": g.current_user.id})

        return jsonify({"message": "Task created", "task": TaskSchema().dump(task)}), 201


@tasks_bp.route("/<int:task_id>", methods=["GET"])
@token_required
def get_task(task_id: int):
    """Get a single task owned by the caller.

    Args:
        task_id: Task identifier.

    Returns:
        JSON response with task data.
    """
    result = check_task_ownership(task_id, g.current_user.id)
    if not result.ok:
        return ownership_error_response(result)

    return jsonify({"task": TaskSchema().dump(result.task)})


@tasks_bp.route("/<int:task_id>", methods=["PUT"])
@token_required
def update_task(task_id: int):
    """Partially update a task. Absent fields are left unchanged.

    Args:
        task_id: Task identifier.

    Returns:
        JSON response with updated task.
    """
    with tracer.start_as_current_span("task.update") as span:
        span.set_attribute("task.id", task_id)

        result = check_task_ownership(task_id, g.current_user.id)
        if not result.ok:
            span.set_attribute("auth.status", result.outcome.value)
            return ownership_error_response(result)

        task = result.task

        schema = TaskUpdateSchema()
        try:
            data = schema.load(request.get_json(silent=True) or {})
        except ValidationError as err:
            span.set_attribute("validation.status", "failed")
            return validation_error_response(err)

        previous_status = task.status

        if "title" in data:
            task.title = data["title"]
        if "description" in data:
            task.description = data["description"]
        if "status" in data:
            task.status = data["status"]
        if "due_date" in data:
            task.due_date = data["due_date"]

        db.session.commit()

        if is_valid_move(previous_status, task.status):
            get_metrics().status_changes.add(1, {"from": previous_status, "to": task.status})
            span.set_attribute("task.status", task.status)

        logger.info(f"Task updated: {task.id}", extra={"user_id": g.current_user.id})

        return jsonify({"message": "Task updated", "task": TaskSchema().dump(task)})


@tasks_bp.route("/<int:task_id>", methods=["DELETE"])
@token_required
def delete_task(task_id: int):
    """Delete a task permanently.

    Args:
        task_id: Task identifier.

    Returns:
        JSON response with confirmation message.
    """
    with tracer.start_as_current_span("task.delete") as span:
        span.set_attribute("task.id", task_id)

        result = check_task_ownership(task_id, g.current_user.id)
        if not result.ok:
            span.set_attribute("auth.status", result.outcome.value)
            return ownership_error_response(result)

        db.session.delete(result.task)
        db.session.commit()
        get_metrics().tasks_deleted.add(1)

        logger.info(f"Task deleted: {task_id}", extra={"user_id": g.current_user.id})

        return jsonify({"message": "Task deleted"})
