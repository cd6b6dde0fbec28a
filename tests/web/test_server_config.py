from __future__ import annotations

from pathlib import Path

import pytest

from wobridge.web.config import DEFAULT_PORT, ServerSettings


def test_server_settings_defaults() -> None:
    settings = ServerSettings.from_env({})

    assert settings.document_path is None
    assert settings.port == DEFAULT_PORT
    assert settings.upload_dir == Path("uploads")
    assert settings.project_name is None


def test_server_settings_reads_environment() -> None:
    settings = ServerSettings.from_env(
        {
            "WOBRIDGE_DOCUMENT_PATH": "inbox/wo.pdf",
            "PORT": "8080",
            "WOBRIDGE_UPLOAD_DIR": "/tmp/wo",
            "WOBRIDGE_PROJECT_NAME": "Spring Refresh",
        }
    )

    assert settings.document_path == Path("inbox/wo.pdf")
    assert settings.port == 8080
    assert settings.upload_dir == Path("/tmp/wo")
    assert settings.project_name == "Spring Refresh"


def test_legacy_pdf_path_variable_is_honoured() -> None:
    assert ServerSettings.from_env({"PDF_PATH": "order.pdf"}).document_path == Path("order.pdf")


@pytest.mark.parametrize(
    ("env", "message"),
    [
        ({"PORT": "0"}, "between 1 and 65535"),
        ({"PORT": "70000"}, "between 1 and 65535"),
        ({"PORT": "http"}, "invalid literal"),
        ({"WOBRIDGE_UPLOAD_DIR": " "}, "cannot be empty"),
    ],
)
def test_server_settings_validation(env: dict[str, str], message: str) -> None:
    with pytest.raises(ValueError, match=message):
        ServerSettings.from_env(env)
