"""User-related Marshmallow schemas."""

from marshmallow import EXCLUDE, Schema, fields, pre_load, validate

from taskboard.extensions import ma
from taskboard.schemas.fields import UTCDateTime


class UserSchema(ma.Schema):
    """Schema for user serialization."""

    id = fields.Int(dump_only=True)
    email = fields.Email(required=True)
    name = fields.Str(required=True)
    created_at = UTCDateTime(dump_only=True, data_key="createdAt")


class RegisterSchema(Schema):
    """Schema for user registration validation."""

    class Meta:
        unknown = EXCLUDE

    email = fields.Email(required=True)
    password = fields.Str(required=True, load_only=True, validate=validate.Length(min=6))
    name = fields.Str(required=True, validate=validate.Length(min=1, max=255))


class LoginSchema(Schema):
    """Schema for user login validation."""

    class Meta:
        unknown = EXCLUDE

    email = fields.Email(required=True)
    password = fields.Str(required=True, load_only=True)


class TokenSchema(Schema):
    """Schema for JWT token response."""

    access_token = fields.Str(required=True)
    token_type = fields.Str(dump_default="Bearer")


class ProfileUpdateSchema(Schema):
    """Schema for profile update validation."""

    class Meta:
        unknown = EXCLUDE

    name = fields.Str(validate=validate.Length(min=1, max=255))
    email = fields.Email()
    current_password = fields.Str(load_only=True, data_key="currentPassword")
    new_password = fields.Str(
        load_only=True,
        data_key="newPassword",
        validate=validate.Length(min=6, error="New password must be at least 6 characters"),
    )

    @pre_load
    def drop_blank_passwords(self, data, **kwargs):
        """The profile form always posts both password keys, often empty."""
        if not isinstance(data, dict):
            return data
        return {
            key: value
            for key, value in data.items()
            if not (key in ("currentPassword", "newPassword") and value in ("", None))
        }
