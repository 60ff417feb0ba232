"""
================================================================================
Browser Manager
================================================================================

Browser lifecycle management for the harness.

Features:
    - Browser launch through the DriverRegistry
    - Isolated contexts (separate cookies, localStorage, ...)
    - Viewport and HTTPS presets from HarnessSettings

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from typing import Any, Callable, Dict, Optional

from loguru import logger
from playwright.async_api import (
    async_playwright,
    Browser,
    BrowserContext,
    Page,
    Playwright,
    Error as PlaywrightError,
)

from .driver_registry import DriverRegistry, default_registry
from .settings import HarnessSettings


class BrowserManager:
    """
    Owns one Playwright instance and one browser.

    Usage:
        async with BrowserManager(settings) as manager:
            page = await manager.new_page()
            await page.goto("https://example.com")
    """

    # Default context options
    DEFAULT_CONTEXT_OPTIONS: Dict[str, Any] = {
        "ignore_https_errors": True,
    }

    def __init__(
        self,
        settings: HarnessSettings,
        registry: Optional[DriverRegistry] = None,
        playwright_factory: Callable[[], Any] = async_playwright,
    ):
        """
        Initialize browser manager.

        Args:
            settings: Harness settings (browser kind, headless, viewport)
            registry: Driver registry; the built-in kinds when omitted
            playwright_factory: Returns an object whose ``start()`` yields Playwright
        """
        self.settings = settings
        self.registry = registry or default_registry()
        self._playwright_factory = playwright_factory

        self._playwright: Optional[Playwright] = None
        self._browser: Optional[Browser] = None
        self._contexts: list[BrowserContext] = []

    async def __aenter__(self) -> "BrowserManager":
        """Async context manager entry - start browser."""
        await self.start()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Async context manager exit - close browser."""
        await self.close()

    async def start(self) -> None:
        """Start Playwright and launch the configured browser kind."""
        self._playwright = await self._playwright_factory().start()
        try:
            self._browser = await self.registry.create(
                self.settings.browser, self._playwright, self.settings
            )
        except BaseException:
            await self._playwright.stop()
            self._playwright = None
            raise

    async def close(self) -> None:
        """Close all contexts and browser."""
        for context in self._contexts:
            try:
                await context.close()
            except PlaywrightError as e:
                logger.warning(f"Failed to close browser context: {e}")
        self._contexts.clear()

        if self._browser:
            await self._browser.close()
            self._browser = None

        if self._playwright:
            await self._playwright.stop()
            self._playwright = None

        logger.debug("Browser closed")

    async def new_context(self, **options: Any) -> BrowserContext:
        """
        Create new browser context.

        Args:
            **options: Additional context options

        Returns:
            New BrowserContext
        """
        if not self._browser:
            raise RuntimeError("Browser not started. Call start() first.")

        context_options = {
            **self.DEFAULT_CONTEXT_OPTIONS,
            "viewport": dict(self.settings.viewport),
            **options,
        }
        context = await self._browser.new_context(**context_options)
        context.set_default_timeout(self.settings.default_timeout_ms)
        self._contexts.append(context)

        return context

    async def new_page(
        self,
        context: Optional[BrowserContext] = None,
        **context_options: Any,
    ) -> Page:
        """
        Create new page in new or existing context.
        """
        if context is None:
            context = await self.new_context(**context_options)

        return await context.new_page()

    @property
    def browser(self) -> Optional[Browser]:
        """Get browser instance."""
        return self._browser

    @property
    def is_running(self) -> bool:
        return self._browser is not None


__all__ = [
    "BrowserManager",
]
