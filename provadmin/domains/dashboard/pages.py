"""Landing page."""

from __future__ import annotations

from flask import Blueprint, render_template

dashboard_pages_bp = Blueprint("dashboard_pages", __name__)


@dashboard_pages_bp.get("/")
def dashboard():
    return render_template("dashboard/index.html")
