"""Account endpoints: register, login, current user, logout."""

import logging

from flask import Blueprint, g, jsonify, request
from marshmallow import ValidationError
from sqlalchemy.exc import IntegrityError

from taskboard.errors import error_response, validation_error_response
from taskboard.extensions import db
from taskboard.middleware.auth import token_required
from taskboard.models import User
from taskboard.schemas import LoginSchema, RegisterSchema, TokenSchema, UserSchema
from taskboard.services.auth import generate_token
from taskboard.telemetry import get_metrics, get_tracer


logger = logging.getLogger(__name__)
tracer = get_tracer(__name__)

auth_bp = Blueprint("auth", __name__, url_prefix="/api")


def _session_payload(user: User) -> dict:
    return {
        "user": UserSchema().dump(user),
        "token": TokenSchema().dump({"access_token": generate_token(user)}),
    }


@auth_bp.route("/register", methods=["POST"])
def register():
    """Register a new user.

    Returns:
        JSON response with user data and JWT token.
    """
    with tracer.start_as_current_span("user.register") as span:
        schema = RegisterSchema()
        try:
            data = schema.load(request.get_json(silent=True) or {})
        except ValidationError as err:
            return validation_error_response(err)

        if db.session.query(User).filter(User.email == data["email"]).first():
            span.set_attribute("auth.status", "duplicate_email")
            return error_response("Email already registered", 409)

        user = User(email=data["email"], name=data["name"])
        user.set_password(data["password"])

        try:
            db.session.add(user)
            db.session.commit()
        except IntegrityError:
            db.session.rollback()
            return error_response("Email already registered", 409)

        span.set_attribute("user.id", user.id)
        logger.info(f"User registered: {user.email}", extra={"user_id": user.id})

        return jsonify(_session_payload(user)), 201


@auth_bp.route("/login", methods=["POST"])
def login():
    """Authenticate user and return JWT token.

    Returns:
        JSON response with user data and JWT token.
    """
    with tracer.start_as_current_span("user.login") as span:
        schema = LoginSchema()
        try:
            data = schema.load(request.get_json(silent=True) or {})
        except ValidationError as err:
            get_metrics().login_attempts.add(1, {"status": "invalid_request"})
            return validation_error_response(err)

        email = data["email"]
        user = db.session.query(User).filter(User.email == email).first()
        if not user:
            get_metrics().login_attempts.add(1, {"status": "user_not_found"})
            span.set_attribute("auth.status", "user_not_found")
            logger.warning(f"Login failed: user not found for {email}")
            return error_response("Invalid credentials", 401)

        if not user.check_password(data["password"]):
            get_metrics().login_attempts.add(1, {"status": "invalid_password"})
            span.set_attribute("auth.status", "invalid_password")
            logger.warning(f"Login failed: invalid password for {email}")
            return error_response("Invalid credentials", 401)

        get_metrics().login_attempts.add(1, {"status": "success"})
        span.set_attribute("user.id", user.id)
        span.set_attribute("auth.status", "success")
        logger.info(f"User logged in: {user.email}", extra={"user_id": user.id})

        return jsonify(_session_payload(user))


@auth_bp.route("/user", methods=["GET"])
@token_required
def get_user():
    """Get current authenticated user."""
    return jsonify(UserSchema().dump(g.current_user))


@auth_bp.route("/logout", methods=["POST"])
@token_required
def logout():
    """Logout current user.

    Tokens are stateless; the client discards its copy.
    """
    return jsonify({"message": "Logged out successfully"})
