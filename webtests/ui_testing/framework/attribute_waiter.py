"""
================================================================================
Attribute Waiter
================================================================================

Waits for DOM attribute state driven by client-side JavaScript, such as a
``data-busy`` flag on ``<html>`` while a page fetches data.

A missing element and a missing attribute are treated the same way: both
read as None, so ``wait_until_absent`` succeeds in either case.

================================================================================
"""

from __future__ import annotations

from typing import Optional

import allure

from .poller import ConditionPoller
from .remote_document import RemoteDocumentQuery
from .settings import HarnessSettings


class AttributeWaiter:
    """
    Named attribute conditions built on ConditionPoller.

    Usage:
        waiter = AttributeWaiter(query, poller, settings)
        await waiter.wait_until_equals("html", "data-busy", "false", 5000)
    """

    def __init__(
        self,
        query: RemoteDocumentQuery,
        poller: ConditionPoller,
        settings: HarnessSettings,
    ):
        self.query = query
        self.poller = poller
        self.settings = settings

    async def get_attribute_value(self, selector: str, attribute: str) -> Optional[str]:
        """
        Return the value of ``attribute`` on the first match of ``selector``.

        Returns:
            The attribute value, or None when the element or attribute is absent
        """
        return await self.query.get_attribute(selector, attribute)

    async def wait_until_equals(
        self,
        selector: str,
        attribute: str,
        expected: str,
        timeout_ms: Optional[int] = None,
    ) -> None:
        """
        Wait until the attribute equals ``expected``.

        Raises:
            WaitTimeoutError: If the value never matches within the timeout
        """
        timeout = self.settings.resolve_timeout(timeout_ms)

        async def check() -> bool:
            return await self.get_attribute_value(selector, attribute) == expected

        with allure.step(f"Wait until {selector}[{attribute}] == {expected!r}"):
            await self.poller.poll(
                check,
                timeout,
                f"{attribute} does not equal {expected} after {timeout} milliseconds",
            )

    async def wait_until_exists(
        self,
        selector: str,
        attribute: str,
        timeout_ms: Optional[int] = None,
    ) -> None:
        """
        Wait until the attribute is present (any value, including "").
        """
        timeout = self.settings.resolve_timeout(timeout_ms)

        async def check() -> bool:
            return await self.get_attribute_value(selector, attribute) is not None

        with allure.step(f"Wait until {selector}[{attribute}] exists"):
            await self.poller.poll(
                check,
                timeout,
                f"{attribute} does not exist after {timeout} milliseconds",
            )

    async def wait_until_absent(
        self,
        selector: str,
        attribute: str,
        timeout_ms: Optional[int] = None,
    ) -> None:
        """
        Wait until the attribute (or the element itself) is gone.
        """
        timeout = self.settings.resolve_timeout(timeout_ms)

        async def check() -> bool:
            return await self.get_attribute_value(selector, attribute) is None

        with allure.step(f"Wait until {selector}[{attribute}] is absent"):
            await self.poller.poll(
                check,
                timeout,
                f"{attribute} still exists after {timeout} milliseconds",
            )


__all__ = [
    "AttributeWaiter",
]
