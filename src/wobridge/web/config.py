"""Runtime configuration for the HTTP front end and task runner."""

from __future__ import annotations

from dataclasses import dataclass
import os
from pathlib import Path
from typing import Mapping


DEFAULT_PORT = 3000
DEFAULT_UPLOAD_DIR = "uploads"
DEFAULT_MAX_UPLOAD_BYTES = 20 * 1024 * 1024
ALLOWED_EXTENSIONS = frozenset({"pdf", "eml", "txt"})


@dataclass(frozen=True, slots=True)
class ServerSettings:
    """Validated settings for ``/run-task`` and the watcher/CLI entrypoints."""

    document_path: Path | None = None
    port: int = DEFAULT_PORT
    upload_dir: Path = Path(DEFAULT_UPLOAD_DIR)
    project_name: str | None = None
    max_upload_bytes: int = DEFAULT_MAX_UPLOAD_BYTES

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "ServerSettings":
        source: Mapping[str, str] = os.environ if environ is None else environ

        # PDF_PATH is the variable older deployments used
        document_raw = source.get("WOBRIDGE_DOCUMENT_PATH", source.get("PDF_PATH", "")).strip()
        port_raw = source.get("PORT", str(DEFAULT_PORT)).strip()
        upload_raw = source.get("WOBRIDGE_UPLOAD_DIR", DEFAULT_UPLOAD_DIR).strip()
        project_raw = source.get("WOBRIDGE_PROJECT_NAME", "").strip()

        if not upload_raw:
            raise ValueError("WOBRIDGE_UPLOAD_DIR cannot be empty")

        port = int(port_raw)
        if not 0 < port < 65536:
            raise ValueError("PORT must be between 1 and 65535")

        return cls(
            document_path=Path(document_raw) if document_raw else None,
            port=port,
            upload_dir=Path(upload_raw),
            project_name=project_raw or None,
        )
