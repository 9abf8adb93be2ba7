# src/vcf_tasks/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the task tracker.

The tracker depends on a Protocol instead of the concrete API client,
so tests can feed it scripted task snapshots.
"""

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from ..tasks.task_models import Task


class TaskStatusProvider(Protocol):
    """
    Fetches the latest snapshot of a server-side task.

    timeout bounds a single query. Any exception raised is fatal to the
    caller's wait; retries (if any) belong to the provider's transport.
    """

    async def get_task(self, task_id: str, *, timeout: float) -> Task: ...
