# ================================================================================
# Condition Poller
# ================================================================================
#
# Bounded-time polling of an async condition against a per-call deadline.
#
# Key Features:
#   - At-least-once evaluation (check first, then compare the deadline)
#   - Strictly sequential checks (each check is awaited before the next)
#   - Final check lands on the deadline rather than overshooting it
#   - Errors raised by the check propagate unchanged
#
# Usage:
#   poller = ConditionPoller(interval_ms=200)
#   await poller.poll(is_ready, timeout_ms=5000, message="page never became ready")
#
# ================================================================================

from __future__ import annotations

import asyncio
import time
from typing import Any, Awaitable, Callable, Optional

from loguru import logger

from .errors import WaitTimeoutError


AsyncCheck = Callable[[], Awaitable[Any]]

DEFAULT_POLL_INTERVAL_MS = 200


class ConditionPoller:
    """
    Repeatedly awaits a check until it is truthy or the deadline elapses.

    No backoff is applied: the pause between checks is the fixed interval,
    shortened so the last check happens exactly at the deadline.
    """

    def __init__(self, interval_ms: int = DEFAULT_POLL_INTERVAL_MS):
        """
        Args:
            interval_ms: Pause between consecutive checks in milliseconds
        """
        if interval_ms < 0:
            raise ValueError("interval_ms must not be negative")
        self.interval_ms = interval_ms

    async def poll(
        self,
        check: AsyncCheck,
        timeout_ms: int,
        message: Optional[str] = None,
    ) -> None:
        """
        Wait until ``check`` returns a truthy value.

        Args:
            check: Async callable with no arguments
            timeout_ms: Time budget in milliseconds (0 means a single check)
            message: Error message used on timeout

        Raises:
            WaitTimeoutError: If the deadline elapses without success
            ValueError: If timeout_ms is negative
        """
        if timeout_ms < 0:
            raise ValueError("timeout_ms must not be negative")

        if message is None:
            message = f"Condition not met after {timeout_ms} milliseconds"

        start = time.monotonic()
        deadline = start + timeout_ms / 1000
        interval = self.interval_ms / 1000
        attempt = 0

        while True:
            attempt += 1
            if await check():
                logger.debug(
                    f"Condition met after {attempt} attempt(s) "
                    f"({(time.monotonic() - start) * 1000:.0f}ms)"
                )
                return

            remaining = deadline - time.monotonic()
            if remaining <= 0:
                logger.debug(f"Wait timed out after {attempt} attempt(s): {message}")
                raise WaitTimeoutError(message, timeout_ms=timeout_ms, attempts=attempt)

            await asyncio.sleep(min(interval, remaining))


__all__ = [
    "ConditionPoller",
    "AsyncCheck",
    "DEFAULT_POLL_INTERVAL_MS",
]
