"""Browser pages for the board and profile.

The pages are static shells; the browser keeps the bearer token in
localStorage and talks to the JSON API.
"""

from flask import Blueprint, render_template

from taskboard.services.board import COLUMNS


pages_bp = Blueprint("pages", __name__)


@pages_bp.route("/", methods=["GET"])
def index():
    return render_template("index.html")


@pages_bp.route("/dashboard", methods=["GET"])
def dashboard():
    return render_template("dashboard.html", columns=COLUMNS)


@pages_bp.route("/profile", methods=["GET"])
def profile():
    return render_template("profile.html")
