"""Asynchronous vCloud Director task handle."""

from __future__ import annotations

import asyncio
import logging
import time
from typing import TYPE_CHECKING

from vcd_metadata.exceptions import VCDTaskError, VCDTaskTimeoutError
from vcd_metadata.models import TaskRecord, TaskStatus

if TYPE_CHECKING:
    from vcd_metadata.client import VCDClient

logger = logging.getLogger(__name__)


class Task:
    """Handle to a server-side operation.

    A mutation is only *accepted* when its request returns; its side effects
    are visible once ``wait()`` returns.
    """

    def __init__(self, client: VCDClient, record: TaskRecord):
        self.client = client
        self.record = record

    def __repr__(self) -> str:
        return f"Task(href={self.href!r}, status={self.status.value!r})"

    @property
    def href(self) -> str:
        return self.record.href

    @property
    def status(self) -> TaskStatus:
        return self.record.status

    @property
    def done(self) -> bool:
        return self.record.status.is_terminal

    async def refresh(self) -> TaskRecord:
        """Re-read the task state from the server."""
        refreshed = await self.client.get_task(self.href)
        self.record = refreshed.record
        return self.record

    async def wait(
        self,
        timeout: float | None = None,
        poll_interval: float | None = None,
    ) -> TaskRecord:
        """Poll the task until it reaches a terminal state.

        Args:
            timeout: Deadline in seconds (default: client ``task_timeout``)
            poll_interval: Seconds between polls (default: client ``task_poll_interval``)

        Returns:
            Final task record

        Raises:
            VCDTaskError: If the task ends in error, canceled or aborted
            VCDTaskTimeoutError: If the deadline passes first
        """
        if timeout is None:
            timeout = self.client.task_timeout
        if poll_interval is None:
            poll_interval = self.client.task_poll_interval
        deadline = time.monotonic() + timeout

        while not self.done:
            remaining = deadline - time.monotonic()
            if remaining <= 0:
                raise VCDTaskTimeoutError(
                    f"Task {self.href} did not complete within {timeout}s (last status: {self.status})",
                    self.record,
                )
            await asyncio.sleep(min(poll_interval, remaining))
            await self.refresh()
            logger.debug(f"Task {self.href}: {self.status} ({self.record.progress}%)")

        if self.status != TaskStatus.SUCCESS:
            message = self.record.error_message or f"task ended with status {self.status}"
            logger.warning(f"Task {self.href} failed: {message}")
            raise VCDTaskError(f"Task {self.href} failed: {message}", self.record)

        return self.record
