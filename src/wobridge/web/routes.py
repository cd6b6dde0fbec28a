from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from flask import Blueprint, current_app, jsonify, request
from werkzeug.utils import secure_filename

from wobridge.automation.task_service import TaskResult, WorkOrderTaskRunner
from wobridge.web.config import ALLOWED_EXTENSIONS, ServerSettings

bp = Blueprint("tasks", __name__)

_FAILURE_MESSAGES = {
    "decode": "Failed to extract data from document",
    "identity": "Failed to resolve board user",
    "create": "Failed to add task to board",
}


def _runner() -> WorkOrderTaskRunner:
    return current_app.extensions["wobridge.runner"]


def _settings() -> ServerSettings:
    return current_app.extensions["wobridge.settings"]


def _allowed_file(filename: str) -> bool:
    return "." in filename and filename.rsplit(".", 1)[1].lower() in ALLOWED_EXTENSIONS


def _task_response(result: TaskResult) -> Any:
    if result.success:
        message = "Document already processed" if result.is_duplicate else "Task successfully added to board"
        return jsonify({"message": message, "result": result.to_payload()}), 200

    message = _FAILURE_MESSAGES.get(result.stage, "Task failed")
    return jsonify({"message": message, "stage": result.stage, "error": result.error}), 500


@bp.get("/health")
def health() -> Any:
    return jsonify({"status": "ok", "time": datetime.now(timezone.utc).isoformat()})


@bp.get("/run-task")
def run_configured_task() -> Any:
    document_path = _settings().document_path
    if document_path is None:
        return jsonify({"message": "No document path configured"}), 400

    current_app.logger.info("Processing %s and sending data to the board", document_path)
    return _task_response(_runner().run(document_path))


@bp.post("/run-task")
def run_submitted_task() -> Any:
    if request.content_type and request.content_type.startswith("multipart/form-data"):
        upload = request.files.get("file")
        if upload is None:
            return jsonify({"message": "file field missing"}), 400
        if not upload.filename:
            return jsonify({"message": "empty filename"}), 400
        if not _allowed_file(upload.filename):
            return jsonify({"message": "file type not allowed"}), 400

        upload_dir = Path(_settings().upload_dir)
        upload_dir.mkdir(parents=True, exist_ok=True)
        save_path = upload_dir / secure_filename(upload.filename)
        upload.save(save_path)
        return _task_response(_runner().run(save_path))

    data = request.get_json(silent=True) or {}
    text = data.get("text") if isinstance(data, dict) else None
    if not isinstance(text, str) or not text.strip():
        return jsonify({"message": "provide a 'file' upload or JSON 'text'"}), 400
    return _task_response(_runner().run_text(text, source=str(data.get("source") or "inline")))
