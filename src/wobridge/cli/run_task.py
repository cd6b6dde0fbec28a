"""CLI command that posts one work-order document to the board."""

from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path

from dotenv import load_dotenv

from wobridge.automation.task_service import build_runner
from wobridge.board.config import BoardSettings
from wobridge.ingestion.dedupe import ProcessedRegistry
from wobridge.web.config import ServerSettings


load_dotenv()

LOGGER = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Extract a work order and create a board item")
    parser.add_argument("--path", default=None, help="Document path (defaults to WOBRIDGE_DOCUMENT_PATH)")
    parser.add_argument(
        "--cache-file",
        default=None,
        help="Processed-document cache; documents already posted are skipped",
    )
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(message)s")

    try:
        board_settings = BoardSettings.from_env()
        server_settings = ServerSettings.from_env()
    except ValueError as exc:
        LOGGER.error("Configuration error: %s", exc)
        return 2

    document_path = Path(args.path) if args.path else server_settings.document_path
    if document_path is None:
        LOGGER.error("No document given: pass --path or set WOBRIDGE_DOCUMENT_PATH")
        return 2

    cache_path = Path(args.cache_file) if args.cache_file else None
    registry = None
    if cache_path is not None:
        try:
            registry = ProcessedRegistry.load(cache_path)
        except (OSError, ValueError) as exc:
            LOGGER.error("Cannot read processed cache %s: %s", cache_path, exc)
            return 2

    runner = build_runner(board_settings, project=server_settings.project_name, registry=registry)
    result = runner.run(document_path)

    if registry is not None and cache_path is not None:
        registry.save(cache_path)

    print(json.dumps(result.to_payload(), ensure_ascii=True, indent=2))
    return 0 if result.success else 1


if __name__ == "__main__":
    raise SystemExit(main())
