# src/vcf_tasks/cli/main.py

"""
CLI entrypoint.

Initializes logging from settings, opens a VCF API client, then waits on one
task id until it finishes. Ctrl+C / SIGTERM abandon the wait.

    vcf-tasks wait <task-id> [--interval SECONDS]
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import signal
import sys
from collections.abc import Sequence

from ..api.client import VcfClient
from ..config import Settings, get_settings
from ..errors import TaskFailedError, TaskWaitCancelledError, VcfTasksError
from ..logging_setup import setup_logging
from ..tasks.task_tracker import TaskTracker

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_TASK_FAILED = 1
EXIT_API_ERROR = 2
EXIT_CANCELLED = 130


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="vcf-tasks", description="Track VCF control-plane tasks.")
    sub = parser.add_subparsers(dest="command", required=True)

    wait = sub.add_parser("wait", help="Wait for a task to reach a terminal state.")
    wait.add_argument("task_id", help="Task identifier returned by the VCF API.")
    wait.add_argument(
        "--interval",
        type=float,
        default=None,
        help="Polling interval in seconds (default: VCF_POLLING_INTERVAL_SECONDS or 20).",
    )
    return parser


def _install_signal_handlers(cancel_event: asyncio.Event) -> None:
    loop = asyncio.get_running_loop()

    def _handle_signal(signum: int) -> None:
        logger.info("Signal %s received, cancelling wait...", signum)
        cancel_event.set()

    for sig in (signal.SIGINT, signal.SIGTERM):
        try:
            loop.add_signal_handler(sig, _handle_signal, sig)
        except (NotImplementedError, RuntimeError):
            # Windows event loops do not support add_signal_handler.
            logger.debug("Signal handler for %s not installed", sig)


async def wait_command(settings: Settings, task_id: str, interval: float | None) -> int:
    cancel_event = asyncio.Event()
    _install_signal_handlers(cancel_event)

    polling_interval = settings.polling_interval_seconds if interval is None else interval

    async with VcfClient.from_settings(settings) as client:
        tracker = TaskTracker.with_polling_interval(
            client,
            task_id,
            polling_interval,
            api_timeout=settings.api_timeout_seconds,
        )
        logger.info("Waiting for task %s (polling every %.1fs)", task_id, polling_interval)
        try:
            await tracker.wait_for_task(cancel_event)
        except TaskFailedError:
            return EXIT_TASK_FAILED
        except TaskWaitCancelledError:
            return EXIT_CANCELLED
        except VcfTasksError as e:
            logger.error("Task %s could not be tracked: %s", task_id, e)
            return EXIT_API_ERROR
    return EXIT_OK


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    settings = get_settings()

    level_name = str(settings.log_level).upper()
    console_level = getattr(logging, level_name, logging.INFO)
    setup_logging(log_dir=settings.data_dir, console_level=console_level)

    if not settings.base_url:
        logger.error("VCF_HOST is not set")
        return EXIT_API_ERROR

    try:
        return asyncio.run(wait_command(settings, args.task_id, args.interval))
    except ValueError as e:
        logger.error("%s", e)
        return EXIT_API_ERROR


if __name__ == "__main__":
    sys.exit(main())
