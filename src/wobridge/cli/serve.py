"""HTTP server entrypoint exposing ``/run-task``."""

from __future__ import annotations

import argparse
import logging
import sys

from dotenv import load_dotenv

from wobridge.automation.task_service import build_runner
from wobridge.board.config import BoardSettings
from wobridge.web.app import create_app
from wobridge.web.config import ServerSettings

load_dotenv()

logging.basicConfig(
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    level=logging.INFO,
)
logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Serve the work-order run-task endpoint")
    parser.add_argument("--host", default="127.0.0.1", help="Interface to bind")
    parser.add_argument("--port", type=int, default=None, help="Port (defaults to PORT)")
    args = parser.parse_args(argv)

    try:
        board_settings = BoardSettings.from_env()
        server_settings = ServerSettings.from_env()
    except ValueError as e:
        logger.error("Configuration error: %s", e)
        sys.exit(1)

    runner = build_runner(board_settings, project=server_settings.project_name)
    app = create_app(runner, server_settings)

    port = args.port or server_settings.port
    logger.info("Server is running on port %d (board %s)", port, board_settings.board_id)
    app.run(host=args.host, port=port)


if __name__ == "__main__":
    main()
