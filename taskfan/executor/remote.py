from __future__ import annotations

import logging
import time
from typing import Callable

import httpx

from .types import ExecutionOutcome, Failure, Success

logger = logging.getLogger(__name__)

DEFAULT_ENDPOINT = "https://httpbin.org/get"
# None leaves the call with no timeout of its own.
DEFAULT_TIMEOUT_SECONDS: float | None = None
# Minimum settle time a task spends after a successful call.
MIN_SETTLE_SECONDS = 5.0


class RemoteOperation:
    def __init__(
        self,
        endpoint: str = DEFAULT_ENDPOINT,
        *,
        timeout_seconds: float | None = DEFAULT_TIMEOUT_SECONDS,
        settle_seconds: float = MIN_SETTLE_SECONDS,
        transport: httpx.BaseTransport | None = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.endpoint = endpoint
        self.timeout_seconds = timeout_seconds
        self.settle_seconds = settle_seconds
        self._transport = transport
        self._sleep = sleep

    def __call__(self, task_id: int) -> ExecutionOutcome:
        return self.execute(task_id)

    def execute(self, task_id: int) -> ExecutionOutcome:
        try:
            with httpx.Client(
                timeout=self.timeout_seconds,
                transport=self._transport,
                follow_redirects=True,
            ) as client:
                response = client.get(self.endpoint)
        except httpx.HTTPError as exc:
            return Failure(f"HTTP request failed: {_describe(exc)}")

        if not response.is_success:
            return Failure(f"HTTP request returned status: {_status_text(response)}")

        self._sleep(self.settle_seconds)
        logger.info("Task %d completed successfully", task_id)
        return Success()


def _describe(exc: httpx.HTTPError) -> str:
    return str(exc) or type(exc).__name__


def _status_text(response: httpx.Response) -> str:
    return f"{response.status_code} {response.reason_phrase}".strip()
