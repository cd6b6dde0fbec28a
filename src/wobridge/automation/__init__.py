"""Automation services for document-to-board workflows."""

from wobridge.automation.task_service import TaskResult, WorkOrderTaskRunner, build_runner
from wobridge.automation.watcher import DebouncedDocumentHandler, InboxWatcher

__all__ = [
    "DebouncedDocumentHandler",
    "InboxWatcher",
    "TaskResult",
    "WorkOrderTaskRunner",
    "build_runner",
]
