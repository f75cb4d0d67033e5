"""Route blueprints."""

from taskboard.routes.auth import auth_bp
from taskboard.routes.health import health_bp
from taskboard.routes.pages import pages_bp
from taskboard.routes.profile import profile_bp
from taskboard.routes.tasks import tasks_bp


__all__ = ["health_bp", "auth_bp", "tasks_bp", "profile_bp", "pages_bp"]
