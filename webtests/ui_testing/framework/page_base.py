"""
================================================================================
Base Page Object
================================================================================

Foundation class for Page Object Model implementation.

Provides:
    - Site URL lookup from configuration
    - Page loading through DomHelpers (root marker wait)
    - Title assertions

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from typing import Dict

import allure
from playwright.async_api import Page

from harness_tools.common import get_config

from .dom_helpers import DomHelpers
from .scenario import ScenarioContext


class BasePage:
    """
    Base class for all page objects.

    Subclasses declare the configuration key of their site and their
    selectors; actions go through ``self.helpers``.

    Usage:
        class StorePage(BasePage):
            SITE_KEY = "store"
            ELEMENTS = {"menu_item": "nav a"}

            async def open_menu(self, text: str):
                await self.helpers.click_all(self.ELEMENTS["menu_item"], text)
    """

    # Override in subclasses
    SITE_KEY: str = ""
    DEFAULT_URL: str = ""
    ELEMENTS: Dict[str, str] = {}

    def __init__(self, context: ScenarioContext):
        """
        Initialize page object.

        Args:
            context: Scenario the page object acts in
        """
        self.context = context

    @property
    def page(self) -> Page:
        return self.context.page

    @property
    def helpers(self) -> DomHelpers:
        return self.context.helpers

    @property
    def url(self) -> str:
        """Site URL from ``sites.<SITE_KEY>.url``, falling back to DEFAULT_URL."""
        return get_config(f"sites.{self.SITE_KEY}.url", self.DEFAULT_URL)

    async def open(self) -> "BasePage":
        """Load the site URL and wait for the document to be ready."""
        with allure.step(f"Open {self.__class__.__name__}"):
            await self.helpers.load_page(self.url)
        return self

    async def title(self) -> str:
        return await self.page.title()

    async def title_contains(self, expected: str) -> None:
        """
        Assert the document title contains ``expected``.
        """
        with allure.step(f"Verify title contains: {expected}"):
            title = await self.title()
            assert expected in title, f"Expected title to contain {expected!r}, got {title!r}"


__all__ = [
    "BasePage",
    "PageBase",
]

# Backward-compatible alias (many Page Objects prefer PageBase naming)
PageBase = BasePage
