"""Task-related Marshmallow schemas."""

from marshmallow import EXCLUDE, Schema, fields, validate

from taskboard.extensions import ma
from taskboard.models import TASK_STATUSES
from taskboard.schemas.fields import DueDate, UTCDateTime


def _title_field(**kwargs) -> fields.Str:
    return fields.Str(
        validate=[
            validate.Length(min=1, error="Title is required"),
            validate.Length(max=100, error="Title must be at most 100 characters"),
        ],
        error_messages={"required": "Title is required"},
        **kwargs,
    )


def _description_field() -> fields.Str:
    return fields.Str(
        validate=validate.Length(max=500, error="Description must be at most 500 characters")
    )


class TaskSchema(ma.Schema):
    """Schema for task serialization."""

    id = fields.Int(dump_only=True)
    title = fields.Str()
    description = fields.Str()
    status = fields.Str()
    due_date = DueDate(data_key="dueDate")
    created_at = UTCDateTime(dump_only=True, data_key="createdAt")
    updated_at = UTCDateTime(dump_only=True, data_key="updatedAt")


class TaskCreateSchema(Schema):
    """Schema for task creation validation.

    A task always starts out pending, so ``status`` is not a field here and
    is dropped along with any other unknown key.
    """

    class Meta:
        unknown = EXCLUDE

    title = _title_field(required=True)
    description = _description_field()
    due_date = DueDate(
        required=True,
        data_key="dueDate",
        error_messages={"required": "Due date is required"},
    )


class TaskUpdateSchema(Schema):
    """Schema for partial task update validation."""

    class Meta:
        unknown = EXCLUDE

    title = _title_field()
    description = _description_field()
    status = fields.Str(
        validate=validate.OneOf(
            TASK_STATUSES, error="Status must be one of: pending, in-progress, completed"
        )
    )
    due_date = DueDate(data_key="dueDate")
