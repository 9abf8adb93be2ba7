# tests/conftest.py

from __future__ import annotations

import logging

import pytest

from vcf_tasks.config import reset_settings

TRACKER_LOGGER = "vcf_tasks.tasks.task_tracker"


@pytest.fixture()
def tracker_logs(caplog: pytest.LogCaptureFixture) -> pytest.LogCaptureFixture:
    """caplog scoped to the tracker logger at INFO."""
    caplog.set_level(logging.INFO, logger=TRACKER_LOGGER)
    return caplog


@pytest.fixture(autouse=True)
def _fresh_settings():
    reset_settings()
    yield
    reset_settings()
