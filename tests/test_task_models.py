# tests/test_task_models.py

from __future__ import annotations

import pytest

from vcf_tasks.tasks.task_models import Task, TaskOutcome, classify


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("In Progress", TaskOutcome.IN_PROGRESS),
        ("IN_PROGRESS", TaskOutcome.IN_PROGRESS),
        ("Pending", TaskOutcome.IN_PROGRESS),
        ("Failed", TaskOutcome.FAILED),
        ("Cancelled", TaskOutcome.FAILED),
        ("Successful", TaskOutcome.SUCCESS),
        ("Done", TaskOutcome.SUCCESS),
        ("in progress", TaskOutcome.SUCCESS),
        ("FAILED", TaskOutcome.SUCCESS),
        (None, TaskOutcome.SUCCESS),
    ],
)
def test_classify(raw, expected) -> None:
    assert classify(raw) is expected


def test_task_from_api_payload() -> None:
    payload = {
        "id": "8a3c-11",
        "name": "Add cluster",
        "type": "CLUSTER_CREATION",
        "status": "IN_PROGRESS",
        "creationTimestamp": "2024-05-01T09:00:00.000Z",
        "isCancellable": True,
        "subTasks": [
            {"name": "Validate", "description": "Validate hosts", "status": "SUCCESSFUL", "type": "VALIDATION"},
            {"name": "Deploy", "status": "PENDING"},
        ],
        "localizableDescriptionPack": {
            "component": "com.vmware.vcf",
            "messageKey": "cluster.add",
            "message": "Adding cluster",
            "arguments": ["c1"],
        },
    }

    task = Task.from_api(payload)

    assert task.id == "8a3c-11"
    assert task.type == "CLUSTER_CREATION"
    assert task.outcome is TaskOutcome.IN_PROGRESS
    assert task.completion_timestamp == ""
    assert task.is_cancellable is True
    assert task.is_retryable is False
    assert task.sub_tasks is not None and len(task.sub_tasks) == 2
    assert task.sub_tasks[0].description == "Validate hosts"
    assert task.sub_tasks[1].description == ""
    assert task.localizable_description_pack is not None
    assert task.localizable_description_pack.message == "Adding cluster"
    assert task.localizable_description_pack.arguments == ("c1",)


def test_task_from_api_without_subtasks_keeps_none() -> None:
    task = Task.from_api({"id": "t", "status": "Successful"})

    assert task.sub_tasks is None
    assert task.localizable_description_pack is None


def test_task_from_api_with_empty_subtask_list() -> None:
    assert Task.from_api({"id": "t", "subTasks": []}).sub_tasks == ()
