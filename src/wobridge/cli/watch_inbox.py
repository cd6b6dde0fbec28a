"""CLI entrypoint that posts every new document dropped into an inbox folder."""

from __future__ import annotations

import argparse
import asyncio
import logging
from pathlib import Path

from dotenv import load_dotenv

from wobridge.automation.task_service import build_runner
from wobridge.automation.watcher import InboxWatcher
from wobridge.board.config import BoardSettings
from wobridge.ingestion.dedupe import ProcessedRegistry
from wobridge.web.config import ServerSettings


load_dotenv()

LOGGER = logging.getLogger(__name__)


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Watch a folder and post new work orders to the board")
    parser.add_argument("--watch-dir", required=True, help="Directory to watch for new documents")
    parser.add_argument(
        "--cache-file",
        default=".wobridge-processed.json",
        help="Processed-document cache shared across runs",
    )
    parser.add_argument("--debounce", type=float, default=2.0, help="Debounce delay in seconds")
    return parser.parse_args(argv)


async def _run_watcher(args: argparse.Namespace) -> int:
    watch_dir = Path(args.watch_dir)
    if not watch_dir.exists() or not watch_dir.is_dir():
        LOGGER.error("watch-dir must exist and be a directory: %s", watch_dir)
        return 2

    try:
        board_settings = BoardSettings.from_env()
        server_settings = ServerSettings.from_env()
    except ValueError as exc:
        LOGGER.error("Configuration error: %s", exc)
        return 2

    cache_path = Path(args.cache_file)
    try:
        registry = ProcessedRegistry.load(cache_path)
    except (OSError, ValueError) as exc:
        LOGGER.error("Cannot read processed cache %s: %s", cache_path, exc)
        return 2

    runner = build_runner(board_settings, project=server_settings.project_name, registry=registry)
    watcher = InboxWatcher(
        watch_dir,
        runner,
        cache_path=cache_path,
        debounce_seconds=float(args.debounce),
    )

    await watcher.start()
    try:
        while True:
            await asyncio.sleep(1.0)
    finally:
        watcher.stop()
        LOGGER.info("Watcher stopped cleanly")


def main(argv: list[str] | None = None) -> int:
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(message)s")
    args = _parse_args(argv)
    try:
        return asyncio.run(_run_watcher(args))
    except KeyboardInterrupt:
        LOGGER.info("Shutdown requested")
        return 0


if __name__ == "__main__":
    raise SystemExit(main())
