"""Flask application exposing the ``/run-task`` endpoint."""

from __future__ import annotations

from flask import Flask

from wobridge.automation.task_service import WorkOrderTaskRunner
from wobridge.web.config import ServerSettings


def create_app(runner: WorkOrderTaskRunner, settings: ServerSettings | None = None) -> Flask:
    settings = settings or ServerSettings()

    app = Flask(__name__)
    app.config["MAX_CONTENT_LENGTH"] = settings.max_upload_bytes
    app.extensions["wobridge.runner"] = runner
    app.extensions["wobridge.settings"] = settings

    from wobridge.web.routes import bp as tasks_bp

    app.register_blueprint(tasks_bp)
    return app
