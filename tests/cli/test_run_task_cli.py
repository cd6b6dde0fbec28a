from __future__ import annotations

import json
from pathlib import Path

import pytest

from wobridge.automation.task_service import TaskResult
from wobridge.cli import run_task


class _FakeRunner:
    def __init__(self, registry) -> None:
        self.registry = registry
        self.paths: list[Path] = []

    def run(self, path: Path) -> TaskResult:
        self.paths.append(path)
        return TaskResult(success=True, stage="create", source=str(path), item_id="998877")


@pytest.fixture
def board_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("MONDAY_API_KEY", "secret-token")
    monkeypatch.setenv("MONDAY_BOARD_ID", "1234567890")
    monkeypatch.delenv("WOBRIDGE_DOCUMENT_PATH", raising=False)
    monkeypatch.delenv("PDF_PATH", raising=False)


def test_run_task_requires_board_configuration(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("MONDAY_API_KEY", raising=False)
    monkeypatch.delenv("MONDAY_BOARD_ID", raising=False)

    assert run_task.main(["--path", "wo.pdf"]) == 2


def test_run_task_requires_document_path(board_env: None) -> None:
    assert run_task.main([]) == 2


def test_run_task_prints_payload_and_saves_cache(
    board_env: None, tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: object
) -> None:
    runners: list[_FakeRunner] = []

    def _fake_build_runner(settings, *, project=None, registry=None):
        runner = _FakeRunner(registry)
        runners.append(runner)
        return runner

    monkeypatch.setattr(run_task, "build_runner", _fake_build_runner)
    cache = tmp_path / "processed.json"

    exit_code = run_task.main(["--path", str(tmp_path / "wo.pdf"), "--cache-file", str(cache)])
    payload = json.loads(capsys.readouterr().out)

    assert exit_code == 0
    assert payload["item_id"] == "998877"
    assert runners[0].paths == [tmp_path / "wo.pdf"]
    assert runners[0].registry is not None
    assert cache.exists()


def test_run_task_rejects_corrupt_cache(board_env: None, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(run_task, "build_runner", lambda *args, **kwargs: pytest.fail("runner must not be built"))
    cache = tmp_path / "processed.json"
    cache.write_text("{not json", encoding="utf-8")

    assert run_task.main(["--path", str(tmp_path / "wo.pdf"), "--cache-file", str(cache)]) == 2
