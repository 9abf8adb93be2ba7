# src/vcf_tasks/tasks/task_tracker.py

from __future__ import annotations

"""
Task tracker.

A small polling loop over one server-side task:
- waits one polling interval (or until the caller's cancel event fires),
- fetches the task snapshot from the injected TaskStatusProvider,
- logs sub-task progress once per distinct message,
- returns on success, raises on failure / cancellation.

One tracker per awaited task. Do not reuse or share instances.
"""

import asyncio
import logging

from ..core.ports import TaskStatusProvider
from ..errors import TaskFailedError, TaskWaitCancelledError
from .task_models import SUBTASK_WORKING_STATUSES, SubTask, Task, TaskOutcome, classify

logger = logging.getLogger(__name__)

DEFAULT_POLLING_INTERVAL_SECONDS = 20.0
DEFAULT_API_CALL_TIMEOUT_SECONDS = 120.0


class TaskTracker:
    def __init__(
            self,
            provider: TaskStatusProvider,
            task_id: str,
            *,
            polling_interval: float | None = None,
            api_timeout: float = DEFAULT_API_CALL_TIMEOUT_SECONDS,
    ) -> None:
        if not task_id or not task_id.strip():
            raise ValueError("task_id must be a non-empty string")

        interval = DEFAULT_POLLING_INTERVAL_SECONDS if polling_interval is None else float(polling_interval)
        if interval <= 0:
            raise ValueError(f"polling_interval must be positive, got {polling_interval!r}")

        self._provider = provider
        self._task_id = task_id
        self._polling_interval = interval
        self._api_timeout = float(api_timeout)
        self._seen_messages: set[str] = set()

    @classmethod
    def with_polling_interval(
            cls,
            provider: TaskStatusProvider,
            task_id: str,
            polling_interval: float,
            **kwargs,
    ) -> TaskTracker:
        return cls(provider, task_id, polling_interval=polling_interval, **kwargs)

    @property
    def task_id(self) -> str:
        return self._task_id

    @property
    def polling_interval(self) -> float:
        return self._polling_interval

    @property
    def seen_messages(self) -> frozenset[str]:
        return frozenset(self._seen_messages)

    async def wait_for_task(self, cancel_event: asyncio.Event | None = None) -> Task:
        """
        Poll until the task reaches a terminal state.

        Returns the final snapshot on success (including unknown statuses).
        Raises:
        - TaskFailedError if the task ends Failed / Cancelled,
        - TaskWaitCancelledError if cancel_event is set while waiting,
        - whatever the provider raises, unchanged.

        Cancelling the coroutine itself propagates asyncio.CancelledError.
        """
        cancel_event = cancel_event or asyncio.Event()

        while True:
            if await self._wait_tick(cancel_event):
                logger.info("Stopped waiting for task %s: cancelled", self._task_id)
                raise TaskWaitCancelledError(self._task_id)

            task = await self._query(cancel_event)
            if task is None:
                logger.info("Stopped waiting for task %s: cancelled during status query", self._task_id)
                raise TaskWaitCancelledError(self._task_id)

            # Log before classifying so the final poll's progress is not lost.
            self._log_task(task)

            outcome = classify(task.status)
            if outcome is TaskOutcome.IN_PROGRESS:
                continue

            if outcome is TaskOutcome.FAILED:
                err = TaskFailedError(task.id, task.name, task.type, task.status)
                logger.error("%s", err)
                raise err

            logger.info(
                "Task with ID = %s is in state %s, completed at %s",
                task.id,
                task.status,
                task.completion_timestamp,
            )
            return task

    async def _query(self, cancel_event: asyncio.Event) -> Task | None:
        """Fetch the snapshot, abandoning the request if cancel_event fires first (None)."""
        query = asyncio.ensure_future(self._provider.get_task(self._task_id, timeout=self._api_timeout))
        cancelled = asyncio.ensure_future(cancel_event.wait())
        try:
            await asyncio.wait({query, cancelled}, return_when=asyncio.FIRST_COMPLETED)
        finally:
            for fut in (query, cancelled):
                fut.cancel()
            await asyncio.gather(query, cancelled, return_exceptions=True)

        if not cancelled.cancelled():
            return None
        return query.result()

    async def _wait_tick(self, cancel_event: asyncio.Event) -> bool:
        """Sleep one interval; True if cancel_event fired first."""
        if cancel_event.is_set():
            return True
        try:
            await asyncio.wait_for(cancel_event.wait(), timeout=self._polling_interval)
        except TimeoutError:
            return False
        return True

    def _log_task(self, task: Task) -> None:
        if task.sub_tasks is None:
            pack = task.localizable_description_pack
            if pack is not None and pack.message:
                self._log_once(pack.message, task.status)
            return

        for sub_task in task.sub_tasks:
            self._log_sub_task(sub_task)

    def _log_sub_task(self, sub_task: SubTask) -> None:
        if sub_task.status in SUBTASK_WORKING_STATUSES:
            return
        if sub_task.description:
            self._log_once(sub_task.description, sub_task.status)

    def _log_once(self, message: str, status: str) -> None:
        # Keyed on text only: identical descriptions from different sub-tasks log once.
        if message in self._seen_messages:
            return
        logger.info("[%s] %s", status, message)
        self._seen_messages.add(message)
