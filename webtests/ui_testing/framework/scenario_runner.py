"""
================================================================================
Scenario Runner
================================================================================

Test-runner independent lifecycle for browser scenarios.

Adapters (pytest fixtures, behave environment hooks) call:

    runner = ScenarioRunner(settings)
    await runner.setup()                        # once per run
    context = await runner.before_scenario(name)
    ...                                         # steps use context
    await runner.after_scenario(result)
    await runner.teardown()                     # once per run

Teardown strategies between scenarios:
    - always: close the browser; the next scenario launches a fresh one
    - clear:  keep the browser, clear cookies and web storage
    - none:   keep everything as is

================================================================================
"""

from __future__ import annotations

from datetime import datetime
from pathlib import Path
from typing import Callable, Optional

from loguru import logger
from playwright.async_api import Error as PlaywrightError, Page

from harness_tools.common import ensure_directory, init_logger
from harness_tools.report_tools.allure_utils import attach_png, attach_text

from .browser_manager import BrowserManager
from .driver_registry import DriverRegistry
from .scenario import ScenarioContext, ScenarioResult
from .settings import HarnessSettings


class ScenarioRunner:
    """
    Creates and tears down the browser around scenarios.

    One runner drives scenarios serially; a page is never shared by two
    scenarios at the same time.
    """

    def __init__(
        self,
        settings: Optional[HarnessSettings] = None,
        registry: Optional[DriverRegistry] = None,
        manager_factory: Callable[..., BrowserManager] = BrowserManager,
    ):
        """
        Args:
            settings: Harness settings; loaded from configuration when omitted
            registry: Driver registry passed to the browser manager
            manager_factory: Builds a BrowserManager(settings, registry)
        """
        self.settings = settings or HarnessSettings.from_config()
        self.registry = registry
        self._manager_factory = manager_factory

        self._manager: Optional[BrowserManager] = None
        self._page: Optional[Page] = None
        self._context: Optional[ScenarioContext] = None

    @property
    def current(self) -> Optional[ScenarioContext]:
        """Context of the scenario in progress, if any."""
        return self._context

    async def setup(self) -> None:
        """Prepare logging and output directories before the first scenario."""
        init_logger()
        ensure_directory(self.settings.reports_dir)
        logger.info(
            f"Scenario runner ready: browser={self.settings.browser}, "
            f"teardown={self.settings.teardown_strategy}"
        )

    async def before_scenario(self, name: str) -> ScenarioContext:
        """
        Make sure a browser page exists and build the scenario context.
        """
        if self._manager is None or self.settings.teardown_strategy == "always":
            await self._open_browser()

        self._context = ScenarioContext.create(name, self._page, self.settings)
        logger.info(f"Scenario started: {name}")
        return self._context

    async def after_scenario(self, result: ScenarioResult) -> None:
        """
        Capture failure details, then apply the teardown strategy.
        """
        context = self._context
        logger.info(f"Scenario finished: {result.name} [{result.status.value}]")
        try:
            if result.failed and self.settings.screenshot_on_failure and context is not None:
                await self._capture_failure(context, result)
        finally:
            await self._teardown_between_scenarios(context)
            self._context = None

    async def teardown(self) -> None:
        """Close the browser if it is still open after the last scenario."""
        if self._manager is not None:
            await self._close_browser()
        logger.info("Scenario runner stopped")

    # =========================================================================
    # Internals
    # =========================================================================

    async def _open_browser(self) -> None:
        if self._manager is not None:
            await self._close_browser()
        manager = self._manager_factory(self.settings, self.registry)
        await manager.start()
        self._manager = manager
        self._page = await manager.new_page()

    async def _close_browser(self) -> None:
        manager, self._manager, self._page = self._manager, None, None
        if manager is not None:
            await manager.close()

    async def _teardown_between_scenarios(self, context: Optional[ScenarioContext]) -> None:
        strategy = self.settings.teardown_strategy
        if strategy == "none" or self._manager is None:
            return
        if strategy == "clear":
            if context is not None:
                await context.helpers.clear_all()
            return
        await self._close_browser()

    async def _capture_failure(self, context: ScenarioContext, result: ScenarioResult) -> None:
        """Attach a screenshot and the current URL to the report."""
        try:
            screenshot = await context.page.screenshot(full_page=True)
        except PlaywrightError as e:
            logger.warning(f"Failed to capture screenshot on failure: {e}")
            return

        screenshots_dir = Path(ensure_directory(str(self.settings.screenshots_dir)))
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        safe_name = "".join(c if c.isalnum() else "_" for c in result.name)[:80]
        path = screenshots_dir / f"failure_{safe_name}_{timestamp}.png"
        path.write_bytes(screenshot)

        attach_png(screenshot, name="failure_screenshot")
        attach_text(context.page.url, name="Current URL")
        if result.error:
            attach_text(result.error, name="Failure")
        logger.debug(f"Failure screenshot saved: {path}")


__all__ = [
    "ScenarioRunner",
]
