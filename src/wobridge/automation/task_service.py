"""Request boundary: decode, extract, resolve identity, create the board item."""

from __future__ import annotations

from dataclasses import dataclass
import logging
from pathlib import Path
from typing import Protocol

from wobridge.board.client import BoardRequestError, MondayClient
from wobridge.board.config import BoardSettings
from wobridge.extraction.assembler import assemble_record
from wobridge.extraction.engine import FieldExtractor
from wobridge.extraction.models import WorkOrderRecord
from wobridge.ingestion.dedupe import DocumentFingerprint, ProcessedRegistry, fingerprint_document
from wobridge.ingestion.reader import DocumentDecodeError, DocumentReader, build_default_reader


logger = logging.getLogger(__name__)


class BoardGateway(Protocol):
    def whoami(self) -> str: ...

    def create_item(
        self, record: WorkOrderRecord, assignee_id: str, *, source_name: str | None = None
    ) -> str: ...


@dataclass(frozen=True, slots=True)
class TaskResult:
    success: bool
    stage: str
    source: str
    item_id: str | None = None
    record: dict[str, str] | None = None
    is_duplicate: bool = False
    duplicate_reason: str | None = None
    error: str | None = None

    def to_payload(self) -> dict[str, object]:
        return {
            "success": self.success,
            "stage": self.stage,
            "source": self.source,
            "item_id": self.item_id,
            "record": self.record,
            "is_duplicate": self.is_duplicate,
            "duplicate_reason": self.duplicate_reason,
            "error": self.error,
        }


class WorkOrderTaskRunner:
    """Turn one work-order document into one board item.

    Every failure is logged and returned as an unsuccessful ``TaskResult``
    tagged with the stage that failed; nothing is raised to the caller and no
    item is created without a resolved assignee.
    """

    def __init__(
        self,
        reader: DocumentReader,
        client: BoardGateway,
        *,
        project: str | None = None,
        registry: ProcessedRegistry | None = None,
        extractor: FieldExtractor | None = None,
    ) -> None:
        self._reader = reader
        self._client = client
        self._project = project
        self._registry = registry
        self._extractor = extractor or FieldExtractor()

    @property
    def registry(self) -> ProcessedRegistry | None:
        return self._registry

    def run(self, path: str | Path) -> TaskResult:
        source = str(path)
        logger.info("Processing work order document %s", source)
        try:
            read = self._reader.read(path)
        except DocumentDecodeError as exc:
            logger.error("Failed to decode %s: %s", source, exc)
            return TaskResult(success=False, stage="decode", source=source, error=str(exc))

        for warning in read.document.warnings:
            logger.warning("%s: %s", source, warning)
        return self._process(
            read.document.text,
            source=source,
            fingerprint=read.fingerprint,
            source_name=Path(path).name,
        )

    def run_text(self, text: str, *, source: str = "inline") -> TaskResult:
        fingerprint = fingerprint_document(text.encode("utf-8"), text)
        return self._process(text, source=source, fingerprint=fingerprint)

    def _process(
        self,
        text: str,
        *,
        source: str,
        fingerprint: DocumentFingerprint,
        source_name: str | None = None,
    ) -> TaskResult:
        if self._registry is not None:
            decision = self._registry.check(fingerprint)
            if decision.is_duplicate:
                logger.info("Skipping already processed document %s (%s)", source, decision.reason)
                return TaskResult(
                    success=True,
                    stage="dedupe",
                    source=source,
                    is_duplicate=True,
                    duplicate_reason=decision.reason,
                )

        extraction = self._extractor.extract(text)

        try:
            assignee_id = self._client.whoami()
        except BoardRequestError as exc:
            logger.error("Identity lookup failed for %s: %s", source, exc)
            return TaskResult(success=False, stage="identity", source=source, error=str(exc))

        record = assemble_record(
            extraction.primary,
            extraction.fallback,
            assignee_id=assignee_id,
            project=self._project,
        )

        try:
            item_id = self._client.create_item(record, assignee_id, source_name=source_name)
        except BoardRequestError as exc:
            logger.error("Item creation failed for %s: %s", source, exc)
            return TaskResult(success=False, stage="create", source=source, error=str(exc))

        if self._registry is not None:
            self._registry.record(fingerprint)

        logger.info("Work order %s posted as item %s", record.to_display()["work_order"], item_id)
        return TaskResult(
            success=True,
            stage="create",
            source=source,
            item_id=item_id,
            record=record.to_display(),
        )


def build_runner(
    board_settings: BoardSettings,
    *,
    project: str | None = None,
    registry: ProcessedRegistry | None = None,
) -> WorkOrderTaskRunner:
    """Wire the default document reader and monday.com client."""

    return WorkOrderTaskRunner(
        build_default_reader(),
        MondayClient(board_settings),
        project=project,
        registry=registry,
    )
