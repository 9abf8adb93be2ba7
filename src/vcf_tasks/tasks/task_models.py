# src/vcf_tasks/tasks/task_models.py

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from enum import StrEnum
from typing import Any

# Raw status spellings reported by the VCF API. Casing differs between API versions.
STATUS_IN_PROGRESS = "In Progress"
STATUS_IN_PROGRESS_UPPERCASE = "IN_PROGRESS"
STATUS_PENDING = "Pending"
STATUS_FAILED = "Failed"
STATUS_CANCELLED = "Cancelled"
STATUS_NOT_APPLICABLE = "NOT_APPLICABLE"

IN_PROGRESS_STATUSES = frozenset({STATUS_IN_PROGRESS, STATUS_IN_PROGRESS_UPPERCASE, STATUS_PENDING})
FAILED_STATUSES = frozenset({STATUS_FAILED, STATUS_CANCELLED})

# Sub-tasks in these states have nothing worth reporting yet.
SUBTASK_WORKING_STATUSES = frozenset({STATUS_IN_PROGRESS_UPPERCASE, STATUS_PENDING, STATUS_NOT_APPLICABLE})


class TaskOutcome(StrEnum):
    IN_PROGRESS = "in_progress"
    FAILED = "failed"
    SUCCESS = "success"


def classify(raw_status: str | None) -> TaskOutcome:
    """
    Map a raw task status onto an outcome.

    Matching is case-sensitive against explicit allow-lists. Anything not known to be
    in progress or failed counts as success, so new terminal spellings introduced by the
    API do not hang the wait.
    """
    if raw_status in IN_PROGRESS_STATUSES:
        return TaskOutcome.IN_PROGRESS
    if raw_status in FAILED_STATUSES:
        return TaskOutcome.FAILED
    return TaskOutcome.SUCCESS


def _str(data: Mapping[str, Any], key: str) -> str:
    v = data.get(key)
    return "" if v is None else str(v)


@dataclass(slots=True, frozen=True)
class LocalizableDescriptionPack:
    component: str = ""
    bundle: str = ""
    message_key: str = ""
    message: str = ""
    arguments: tuple[str, ...] = ()

    @classmethod
    def from_api(cls, data: Mapping[str, Any] | None) -> LocalizableDescriptionPack | None:
        if data is None:
            return None
        return cls(
            component=_str(data, "component"),
            bundle=_str(data, "bundle"),
            message_key=_str(data, "messageKey"),
            message=_str(data, "message"),
            arguments=tuple(str(a) for a in (data.get("arguments") or ())),
        )


@dataclass(slots=True, frozen=True)
class SubTask:
    name: str = ""
    description: str = ""
    status: str = ""
    type: str = ""
    creation_timestamp: str = ""
    completion_timestamp: str = ""

    @classmethod
    def from_api(cls, data: Mapping[str, Any]) -> SubTask:
        return cls(
            name=_str(data, "name"),
            description=_str(data, "description"),
            status=_str(data, "status"),
            type=_str(data, "type"),
            creation_timestamp=_str(data, "creationTimestamp"),
            completion_timestamp=_str(data, "completionTimestamp"),
        )


@dataclass(slots=True, frozen=True)
class Task:
    """
    Read-only snapshot of a server-side task as returned by GET /v1/tasks/{id}.

    sub_tasks is None when the payload carries no sub-task list at all; an empty
    tuple means the list was present but empty.
    """

    id: str
    name: str = ""
    type: str = ""
    status: str = ""
    creation_timestamp: str = ""
    completion_timestamp: str = ""
    sub_tasks: tuple[SubTask, ...] | None = None
    localizable_description_pack: LocalizableDescriptionPack | None = None
    is_cancellable: bool = False
    is_retryable: bool = False

    @classmethod
    def from_api(cls, data: Mapping[str, Any]) -> Task:
        raw_subtasks = data.get("subTasks")
        sub_tasks = None if raw_subtasks is None else tuple(SubTask.from_api(s) for s in raw_subtasks)
        return cls(
            id=_str(data, "id"),
            name=_str(data, "name"),
            type=_str(data, "type"),
            status=_str(data, "status"),
            creation_timestamp=_str(data, "creationTimestamp"),
            completion_timestamp=_str(data, "completionTimestamp"),
            sub_tasks=sub_tasks,
            localizable_description_pack=LocalizableDescriptionPack.from_api(
                data.get("localizableDescriptionPack")
            ),
            is_cancellable=bool(data.get("isCancellable", False)),
            is_retryable=bool(data.get("isRetryable", False)),
        )

    @property
    def outcome(self) -> TaskOutcome:
        return classify(self.status)
