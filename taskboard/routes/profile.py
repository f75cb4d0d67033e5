"""Profile management endpoints."""

import logging

from flask import Blueprint, g, jsonify, request
from marshmallow import ValidationError
from sqlalchemy.exc import IntegrityError

from taskboard.errors import error_response, validation_error_response
from taskboard.extensions import db
from taskboard.middleware.auth import token_required
from taskboard.models import User
from taskboard.schemas import ProfileUpdateSchema, UserSchema
from taskboard.telemetry import get_metrics, get_tracer


logger = logging.getLogger(__name__)
tracer = get_tracer(__name__)

profile_bp = Blueprint("profile", __name__, url_prefix="/api/users")


@profile_bp.route("/profile", methods=["GET"])
@token_required
def get_profile():
    """Get the caller's profile.

    Returns:
        JSON response with user data.
    """
    return jsonify({"user": UserSchema().dump(g.current_user)})


@profile_bp.route("/profile", methods=["PUT"])
@token_required
def update_profile():
    """Update name, email and optionally password.

    Setting a new password requires the current password, verified against
    the stored hash.

    Returns:
        JSON response with updated user data.
    """
    with tracer.start_as_current_span("user.profile.update") as span:
        user = g.current_user
        span.set_attribute("user.id", user.id)

        schema = ProfileUpdateSchema()
        try:
            data = schema.load(request.get_json(silent=True) or {})
        except ValidationError as err:
            return validation_error_response(err)

        if "new_password" in data:
            current_password = data.get("current_password")
            if not current_password:
                return error_response("Current password is required to set a new password", 400)
            if not user.check_password(current_password):
                span.set_attribute("auth.status", "invalid_password")
                logger.warning(f"Password change rejected for user {user.id}")
                return error_response("Current password is incorrect", 400)

        if "email" in data and data["email"] != user.email:
            taken = (
                db.session.query(User)
                .filter(User.email == data["email"], User.id != user.id)
                .first()
            )
            if taken:
                return error_response("Email already in use", 400)
            user.email = data["email"]

        if "name" in data:
            user.name = data["name"]

        if "new_password" in data:
            user.set_password(data["new_password"])
            span.set_attribute("user.password_changed", True)

        try:
            db.session.commit()
        except IntegrityError:
            db.session.rollback()
            return error_response("Email already in use", 400)

        password_changed = "true" if "new_password" in data else "false"
        get_metrics().profile_updates.add(1, {"password_changed": password_changed})
        logger.info(f"Profile updated: {user.id}", extra={"user_id": user.id})

        return jsonify({"message": "Profile updated", "user": UserSchema().dump(user)})


@profile_bp.route("/profile", methods=["DELETE"])
@token_required
def delete_profile():
    """Delete the caller's account together with their tasks.

    Returns:
        JSON response with confirmation message.
    """
    with tracer.start_as_current_span("user.delete") as span:
        user = g.current_user
        user_id = user.id
        span.set_attribute("user.id", user_id)

        db.session.delete(user)
        db.session.commit()
        get_metrics().accounts_deleted.add(1)

        logger.info(f"Account deleted: {user_id}", extra={"user_id": user_id})

        return jsonify({"message": "Account deleted"})
