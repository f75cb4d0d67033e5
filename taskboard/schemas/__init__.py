"""Marshmallow schemas for serialization and validation."""

from taskboard.schemas.fields import DueDate, UTCDateTime
from taskboard.schemas.task import (
    TaskCreateSchema,
    TaskSchema,
    TaskUpdateSchema,
)
from taskboard.schemas.user import (
    LoginSchema,
    ProfileUpdateSchema,
    RegisterSchema,
    TokenSchema,
    UserSchema,
)


__all__ = [
    "UserSchema",
    "RegisterSchema",
    "LoginSchema",
    "TokenSchema",
    "ProfileUpdateSchema",
    "TaskSchema",
    "TaskCreateSchema",
    "TaskUpdateSchema",
    "DueDate",
    "UTCDateTime",
]
