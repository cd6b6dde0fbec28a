"""Inbox watcher that posts every new work-order document to the board."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Callable

from watchdog.events import PatternMatchingEventHandler
from watchdog.observers import Observer

from wobridge.automation.task_service import TaskResult, WorkOrderTaskRunner


LOGGER = logging.getLogger(__name__)

WATCH_PATTERNS = ["*.pdf", "*.eml", "*.txt"]
IGNORE_PATTERNS = ["*.tmp", "*.part", ".*", "*~"]


class DebouncedDocumentHandler(PatternMatchingEventHandler):
    """Queue a document once it has stopped receiving create/move events.

    Scanners and mail exporters write files in several steps.  Events arrive
    on the observer thread and are handed to the event loop, where each path
    keeps a single pending ``call_later`` handle that is pushed back on every
    new event.
    """

    def __init__(
        self,
        *,
        loop: asyncio.AbstractEventLoop,
        queue: asyncio.Queue[Path],
        debounce_seconds: float = 2.0,
    ) -> None:
        super().__init__(
            patterns=WATCH_PATTERNS,
            ignore_patterns=IGNORE_PATTERNS,
            ignore_directories=True,
            case_sensitive=False,
        )
        self._loop = loop
        self._queue = queue
        self._debounce_seconds = debounce_seconds
        # Only touched on the loop thread.
        self._pending: dict[Path, asyncio.TimerHandle] = {}

    def on_created(self, event) -> None:  # type: ignore[override]
        self._loop.call_soon_threadsafe(self._reschedule, Path(str(event.src_path)))

    def on_moved(self, event) -> None:  # type: ignore[override]
        # Exporters that write "x.part" and rename it land here.
        self._loop.call_soon_threadsafe(self._reschedule, Path(str(event.dest_path)))

    def _reschedule(self, path: Path) -> None:
        handle = self._pending.pop(path, None)
        if handle is not None:
            handle.cancel()
        self._pending[path] = self._loop.call_later(self._debounce_seconds, self._release, path)

    def _release(self, path: Path) -> None:
        self._pending.pop(path, None)
        self._queue.put_nowait(path)

    def close(self) -> None:
        for handle in self._pending.values():
            handle.cancel()
        self._pending.clear()


class InboxWatcher:
    """Run the task runner for each document dropped into *watch_dir*.

    Documents are processed one at a time in arrival order.  After every item
    that reaches the board the runner's processed registry is written to
    *cache_path*, so a restart does not post the same work order twice.
    """

    def __init__(
        self,
        watch_dir: str | Path,
        runner: WorkOrderTaskRunner,
        *,
        cache_path: Path | None = None,
        debounce_seconds: float = 2.0,
        on_result: Callable[[TaskResult], None] | None = None,
    ) -> None:
        self._watch_dir = Path(watch_dir)
        self._runner = runner
        self._cache_path = cache_path
        self._debounce_seconds = debounce_seconds
        self._on_result = on_result
        self._queue: asyncio.Queue[Path] | None = None
        self._handler: DebouncedDocumentHandler | None = None
        self._observer: Observer | None = None
        self._consumer_task: asyncio.Task[None] | None = None

    async def process(self, path: Path) -> TaskResult:
        """Post one document and persist the registry when an item was created."""

        LOGGER.info("Detected new document: %s", path)
        result = await asyncio.to_thread(self._runner.run, path)

        if result.is_duplicate:
            LOGGER.info("Skipped duplicate: %s (%s)", path.name, result.duplicate_reason)
        elif result.success:
            LOGGER.info("Posted %s as item %s", path.name, result.item_id)
            self._save_registry()
        else:
            LOGGER.error("Processing failed for %s at %s: %s", path, result.stage, result.error)

        if self._on_result is not None:
            self._on_result(result)
        return result

    def _save_registry(self) -> None:
        registry = self._runner.registry
        if registry is None or self._cache_path is None:
            return
        registry.save(self._cache_path)

    async def _drain_queue(self) -> None:
        assert self._queue is not None
        while True:
            path = await self._queue.get()
            try:
                await self.process(path)
            except Exception:  # pragma: no cover
                LOGGER.exception("Unexpected failure while processing %s", path)
            finally:
                self._queue.task_done()

    async def start(self) -> None:
        if self._observer is not None:
            return
        if not self._watch_dir.is_dir():
            raise ValueError(f"Watch directory does not exist or is not a directory: {self._watch_dir}")

        self._queue = asyncio.Queue()
        self._handler = DebouncedDocumentHandler(
            loop=asyncio.get_running_loop(),
            queue=self._queue,
            debounce_seconds=self._debounce_seconds,
        )

        observer = Observer()
        observer.schedule(self._handler, str(self._watch_dir), recursive=False)
        observer.start()
        self._observer = observer
        self._consumer_task = asyncio.create_task(self._drain_queue())
        LOGGER.info("Watching %s (debounce %.1fs)", self._watch_dir, self._debounce_seconds)

    def stop(self) -> None:
        if self._observer is not None:
            self._observer.stop()
            self._observer.join(timeout=5.0)
            self._observer = None

        if self._handler is not None:
            self._handler.close()
            self._handler = None

        if self._consumer_task is not None:
            self._consumer_task.cancel()
            self._consumer_task = None
