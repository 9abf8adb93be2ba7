# src/vcf_tasks/errors.py

from __future__ import annotations


class VcfTasksError(Exception):
    """Base exception for vcf_tasks."""


class VcfConnectionError(VcfTasksError):
    """Cannot reach the VCF API (connect failure, timeout, protocol error)."""


class VcfApiError(VcfTasksError):
    """The VCF API answered with a non-success status."""

    def __init__(self, status_code: int, message: str, *, error_code: str | None = None) -> None:
        self.status_code = status_code
        self.error_code = error_code
        self.message = message
        code = f" {error_code}" if error_code else ""
        super().__init__(f"VCF API error {status_code}{code}: {message}")


class VcfAuthError(VcfApiError):
    """Token request was rejected."""


class TaskTrackerError(VcfTasksError):
    """Base for outcomes raised by TaskTracker.wait_for_task()."""

    def __init__(self, task_id: str, message: str) -> None:
        self.task_id = task_id
        super().__init__(message)


class TaskFailedError(TaskTrackerError):
    """The task reached a terminal failure state (Failed / Cancelled) on the server."""

    def __init__(self, task_id: str, name: str, task_type: str, status: str) -> None:
        self.name = name
        self.task_type = task_type
        self.status = status
        super().__init__(
            task_id,
            f'Task with ID = {task_id} , Name: "{name}" Type: "{task_type}" is in state {status}',
        )


class TaskWaitCancelledError(TaskTrackerError):
    """The caller abandoned the wait before the task reached a terminal state."""

    def __init__(self, task_id: str) -> None:
        super().__init__(task_id, f"Waiting for task with ID = {task_id} was cancelled")
