"""
================================================================================
Mammoth Workwear Page Object
================================================================================

Storefront navigation and product listing.

The navigation menu only renders its child links on CSS ``:hover``, so menu
and product links are clicked from inside the page rather than through
Playwright's visible-element click.

================================================================================
"""

from __future__ import annotations

import allure

from webtests.ui_testing.framework.page_base import PageBase


class MammothWorkwearPage(PageBase):
    """Mammoth Workwear storefront."""

    SITE_KEY = "mammoth_workwear"
    DEFAULT_URL = "http://mammothworkwear.com"

    ELEMENTS = {
        "menu_item": 'nav[role="navigation"] ul li a',
        "product_item": "main .pitem a",
    }

    @allure.step("Click navigation item: {containing_text}")
    async def click_navigation_item(self, containing_text: str) -> None:
        """Click a (possibly hover-hidden) navigation link and wait for the new page."""
        await self._click_and_wait(self.ELEMENTS["menu_item"], containing_text)

    @allure.step("Click product item: {containing_text}")
    async def click_product_item(self, containing_text: str) -> None:
        """Click a product tile link and wait for the product page."""
        await self._click_and_wait(self.ELEMENTS["product_item"], containing_text)

    async def _click_and_wait(self, selector: str, text: str) -> None:
        timeout = self.context.settings.default_timeout_ms
        async with self.page.expect_navigation(timeout=timeout):
            clicked = await self.helpers.click_all(selector, text)
            assert clicked, f"No element matching {selector!r} with text {text!r}"
        await self.helpers.wait_for_root_marker(timeout)
