"""
================================================================================
DOM Helpers
================================================================================

Single entry point for page objects: page loading, attribute waits,
text queries, pseudo-element inspection, hidden clicks and session cleanup.

One DomHelpers instance belongs to one scenario's page; it holds no state
beyond its collaborators.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import time
from typing import List, Optional, Union

import allure
from loguru import logger
from playwright.async_api import ElementHandle, Page
from playwright.async_api import TimeoutError as PlaywrightTimeoutError

from .attribute_waiter import AttributeWaiter
from .errors import WaitTimeoutError
from .hidden_actuator import HiddenElementActuator
from .poller import ConditionPoller
from .remote_document import PseudoPosition, RemoteDocumentQuery
from .session_hygiene import SessionHygiene
from .settings import HarnessSettings


class DomHelpers:
    """
    Facade over the DOM helper components for one page.

    Usage:
        helpers = DomHelpers(page, settings)
        await helpers.load_page("https://example.test/search?q=boots", 5000)
        empty = await helpers.find_by_text("div.result", "No results")
    """

    def __init__(self, page: Page, settings: HarnessSettings):
        self.page = page
        self.settings = settings
        self.poller = ConditionPoller(settings.poll_interval_ms)
        self.query = RemoteDocumentQuery(page)
        self.attributes = AttributeWaiter(self.query, self.poller, settings)
        self.actuator = HiddenElementActuator(self.query)
        self.hygiene = SessionHygiene(page, self.query)

    # =========================================================================
    # Navigation
    # =========================================================================

    async def load_page(self, url: str, timeout_ms: Optional[int] = None) -> None:
        """
        Navigate to ``url`` and wait for the root marker element.

        Args:
            url: Address to load
            timeout_ms: Time budget for navigation and the marker wait

        Raises:
            WaitTimeoutError: If navigation or the marker wait exceeds the budget
        """
        timeout = self.settings.resolve_timeout(timeout_ms)
        deadline = time.monotonic() + timeout / 1000

        with allure.step(f"Load page: {url}"):
            try:
                await self.page.goto(url, timeout=timeout)
            except PlaywrightTimeoutError as e:
                raise WaitTimeoutError(
                    f"Navigation to {url} not complete after {timeout} milliseconds",
                    timeout_ms=timeout,
                ) from e

            # marker wait gets what is left; 0 still checks once
            remaining = max(0, int((deadline - time.monotonic()) * 1000))
            await self._poll_root_marker(remaining, timeout)
        logger.debug(f"Page loaded: {url}")

    async def wait_for_root_marker(self, timeout_ms: Optional[int] = None) -> None:
        """
        Poll until the configured root marker element is in the document.
        """
        timeout = self.settings.resolve_timeout(timeout_ms)
        await self._poll_root_marker(timeout, timeout)

    async def _poll_root_marker(self, budget_ms: int, reported_ms: int) -> None:
        marker = self.settings.root_marker

        async def marker_present() -> bool:
            return await self.query.is_present(marker)

        await self.poller.poll(
            marker_present,
            budget_ms,
            f"{marker} element not present after {reported_ms} milliseconds",
        )

    # =========================================================================
    # Attributes
    # =========================================================================

    async def get_attribute_value(self, selector: str, attribute: str) -> Optional[str]:
        return await self.attributes.get_attribute_value(selector, attribute)

    async def wait_until_equals(
        self,
        selector: str,
        attribute: str,
        expected: str,
        timeout_ms: Optional[int] = None,
    ) -> None:
        await self.attributes.wait_until_equals(selector, attribute, expected, timeout_ms)

    async def wait_until_exists(
        self,
        selector: str,
        attribute: str,
        timeout_ms: Optional[int] = None,
    ) -> None:
        await self.attributes.wait_until_exists(selector, attribute, timeout_ms)

    async def wait_until_absent(
        self,
        selector: str,
        attribute: str,
        timeout_ms: Optional[int] = None,
    ) -> None:
        await self.attributes.wait_until_absent(selector, attribute, timeout_ms)

    # =========================================================================
    # Document Queries
    # =========================================================================

    async def find_by_text(self, selector: str, text: str) -> List[ElementHandle]:
        """
        Elements matching ``selector`` whose trimmed text equals ``text``.

        WARNING: returned elements may be invisible and therefore have
        restricted interactions. The caller owns the handles; dispose them
        when done if the page outlives the scenario step.
        """
        return await self.query.find_by_text(selector, text)

    async def first_by_text(self, selector: str, text: str) -> Optional[ElementHandle]:
        """First element from find_by_text, or None. The other handles are disposed."""
        elements = await self.find_by_text(selector, text)
        if not elements:
            return None
        for extra in elements[1:]:
            await extra.dispose()
        return elements[0]

    async def get_pseudo_element_value(
        self,
        selector: str,
        position: Union[PseudoPosition, str],
    ) -> str:
        return await self.query.get_pseudo_element_value(selector, position)

    async def get_pseudo_element_before_value(self, selector: str) -> str:
        return await self.get_pseudo_element_value(selector, PseudoPosition.BEFORE)

    async def get_pseudo_element_after_value(self, selector: str) -> str:
        return await self.get_pseudo_element_value(selector, PseudoPosition.AFTER)

    # =========================================================================
    # Actions
    # =========================================================================

    async def click_all(self, selector: str, text_to_match: Optional[str] = None) -> int:
        """
        Click hidden elements (e.g. hover-only menu links) inside the page.
        """
        return await self.actuator.click_all(selector, text_to_match)

    # =========================================================================
    # Session Cleanup
    # =========================================================================

    async def clear_cookies(self) -> None:
        await self.hygiene.clear_cookies()

    async def clear_storage(self) -> bool:
        return await self.hygiene.clear_storage()

    async def clear_all(self) -> None:
        await self.hygiene.clear_all()


__all__ = [
    "DomHelpers",
]
