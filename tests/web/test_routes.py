from __future__ import annotations

import io
from pathlib import Path

import pytest

from wobridge.automation.task_service import TaskResult
from wobridge.web import ServerSettings, create_app


class _FakeRunner:
    def __init__(self, result: TaskResult | None = None) -> None:
        self.result = result
        self.paths: list[Path] = []
        self.texts: list[tuple[str, str]] = []

    def run(self, path) -> TaskResult:
        self.paths.append(Path(path))
        return self.result or TaskResult(success=True, stage="create", source=str(path), item_id="998877")

    def run_text(self, text: str, *, source: str = "inline") -> TaskResult:
        self.texts.append((text, source))
        return self.result or TaskResult(success=True, stage="create", source=source, item_id="998877")


def _client(runner: _FakeRunner, **settings):
    app = create_app(runner, ServerSettings(**settings))
    app.config["TESTING"] = True
    return app.test_client()


def test_health() -> None:
    response = _client(_FakeRunner()).get("/health")

    assert response.status_code == 200
    assert response.get_json()["status"] == "ok"


def test_get_run_task_processes_configured_document(tmp_path: Path) -> None:
    runner = _FakeRunner()
    document = tmp_path / "wo.pdf"

    response = _client(runner, document_path=document).get("/run-task")

    assert response.status_code == 200
    body = response.get_json()
    assert body["message"] == "Task successfully added to board"
    assert body["result"]["item_id"] == "998877"
    assert runner.paths == [document]


def test_get_run_task_without_configured_document() -> None:
    response = _client(_FakeRunner()).get("/run-task")

    assert response.status_code == 400
    assert response.get_json()["message"] == "No document path configured"


@pytest.mark.parametrize(
    ("stage", "message"),
    [
        ("decode", "Failed to extract data from document"),
        ("identity", "Failed to resolve board user"),
        ("create", "Failed to add task to board"),
    ],
)
def test_failures_map_to_stage_messages(tmp_path: Path, stage: str, message: str) -> None:
    runner = _FakeRunner(TaskResult(success=False, stage=stage, source="x", error="boom"))

    response = _client(runner, document_path=tmp_path / "wo.pdf").get("/run-task")

    assert response.status_code == 500
    body = response.get_json()
    assert body == {"message": message, "stage": stage, "error": "boom"}


def test_duplicate_is_reported_as_success(tmp_path: Path) -> None:
    runner = _FakeRunner(TaskResult(success=True, stage="dedupe", source="x", is_duplicate=True))

    response = _client(runner, document_path=tmp_path / "wo.pdf").get("/run-task")

    assert response.status_code == 200
    assert response.get_json()["message"] == "Document already processed"


def test_post_upload_saves_file_and_runs(tmp_path: Path) -> None:
    runner = _FakeRunner()
    client = _client(runner, upload_dir=tmp_path / "uploads")

    response = client.post(
        "/run-task",
        data={"file": (io.BytesIO(b"Work Order: 12345\n"), "../work order.txt")},
        content_type="multipart/form-data",
    )

    assert response.status_code == 200
    saved = runner.paths[0]
    assert saved.parent == tmp_path / "uploads"
    assert saved.name == "work_order.txt"
    assert saved.read_bytes() == b"Work Order: 12345\n"


@pytest.mark.parametrize(
    ("data", "message"),
    [
        ({"note": "x"}, "file field missing"),
        ({"file": (io.BytesIO(b"x"), "")}, "empty filename"),
        ({"file": (io.BytesIO(b"x"), "photo.jpg")}, "file type not allowed"),
    ],
)
def test_post_upload_validation(tmp_path: Path, data: dict, message: str) -> None:
    runner = _FakeRunner()
    client = _client(runner, upload_dir=tmp_path)

    response = client.post("/run-task", data=data, content_type="multipart/form-data")

    assert response.status_code == 400
    assert response.get_json()["message"] == message
    assert runner.paths == []


def test_post_json_text_runs_inline() -> None:
    runner = _FakeRunner()

    response = _client(runner).post("/run-task", json={"text": "Work Order: 1", "source": "email:42"})

    assert response.status_code == 200
    assert runner.texts == [("Work Order: 1", "email:42")]


def test_post_without_text_or_file_is_rejected() -> None:
    response = _client(_FakeRunner()).post("/run-task", json={"text": "   "})
    assert response.status_code == 400
