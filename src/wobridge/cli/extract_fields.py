"""CLI command that decodes a work order and prints the extracted record."""

from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path

from wobridge.extraction.assembler import parse_work_order
from wobridge.ingestion.reader import DocumentDecodeError, build_default_reader

LOGGER = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Extract work-order fields without touching the board")
    parser.add_argument("--path", required=True, help="PDF, .eml or .txt work order")
    parser.add_argument("--project", default=None, help="Project name to stamp on the record")
    parser.add_argument("--show-missing", action="store_true", help="Also list fields that were not found")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.WARNING, format="%(asctime)s %(levelname)s %(message)s")

    source_path = Path(args.path)
    try:
        read = build_default_reader().read(source_path)
    except DocumentDecodeError as exc:
        LOGGER.error("%s", exc)
        print(json.dumps({"path": str(source_path), "error": str(exc)}, ensure_ascii=True, indent=2))
        return 1

    record = parse_work_order(read.document.text, project=args.project)
    payload: dict[str, object] = {
        "path": str(source_path),
        "format": read.document.format_name,
        "record": record.to_display(),
    }
    if args.show_missing:
        payload["missing"] = record.missing_fields()
    print(json.dumps(payload, ensure_ascii=True, indent=2))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
