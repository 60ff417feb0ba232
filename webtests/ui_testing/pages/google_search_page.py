"""
================================================================================
Google Search Page Object
================================================================================

Search box and result list used by the search smoke scenarios.

NOTE:
  Consent dialogs differ per region; run against a profile or region where
  the results page is reached directly.

================================================================================
"""

from __future__ import annotations

from typing import Optional

import allure
from loguru import logger

from webtests.ui_testing.framework.page_base import PageBase


class GoogleSearchPage(PageBase):
    """Google search home and results."""

    SITE_KEY = "google_search"
    DEFAULT_URL = "http://www.google.com"

    ELEMENTS = {
        "search_input": "textarea[name='q'], input[name='q']",
        "result": "div.g",
    }

    @allure.step("Search for: {query}")
    async def perform_search(self, query: str) -> None:
        """Type ``query`` into the search box and submit it."""
        search_input = self.page.locator(self.ELEMENTS["search_input"]).first
        await search_input.fill(query)
        await search_input.press("Enter")
        logger.debug(f"Submitted search: {query}")

    @allure.step("Wait for result link containing: {keywords}")
    async def wait_for_result_link(self, keywords: str, timeout_ms: Optional[int] = None) -> None:
        """Wait until a link whose text contains ``keywords`` is attached."""
        timeout = self.context.settings.resolve_timeout(timeout_ms)
        link = self.page.locator("a", has_text=keywords).first
        await link.wait_for(state="attached", timeout=timeout)

    async def result_count(self, timeout_ms: Optional[int] = None) -> int:
        """Number of result blocks once at least one is attached."""
        timeout = self.context.settings.resolve_timeout(timeout_ms)
        results = self.page.locator(self.ELEMENTS["result"])
        await results.first.wait_for(state="attached", timeout=timeout)
        return await results.count()
