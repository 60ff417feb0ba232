"""
================================================================================
Driver Registry
================================================================================

Maps a browser kind tag (``chromium``, ``firefox``, ...) to an async factory
that produces a Playwright ``Browser``.

New kinds are added with the ``register`` decorator; a kind written as
``package.module:function`` is imported on demand, so project-specific
drivers never require editing this module.

Usage:
    registry = default_registry()

    @registry.register("chromium-devtools")
    async def launch_with_devtools(playwright, settings):
        return await playwright.chromium.launch(devtools=True)

    browser = await registry.create("chromium-devtools", playwright, settings)

================================================================================
"""

from __future__ import annotations

import importlib
from typing import Awaitable, Callable, Dict, List, Optional

from loguru import logger
from playwright.async_api import Browser, Playwright

from .errors import ConfigurationError, DriverNotFoundError
from .settings import HarnessSettings


DriverFactory = Callable[[Playwright, HarnessSettings], Awaitable[Browser]]


# Default browser launch options
DEFAULT_LAUNCH_ARGS: List[str] = [
    "--ignore-certificate-errors",
]


class DriverRegistry:
    """Registry of browser factories keyed by kind."""

    def __init__(self):
        self._factories: Dict[str, DriverFactory] = {}

    def register(self, kind: str, factory: Optional[DriverFactory] = None):
        """
        Register ``factory`` under ``kind``; usable as a decorator.

        Re-registering a kind replaces the previous factory.
        """
        def decorator(func: DriverFactory) -> DriverFactory:
            if kind in self._factories:
                logger.debug(f"Replacing browser driver for kind: {kind}")
            self._factories[kind] = func
            return func

        if factory is not None:
            return decorator(factory)
        return decorator

    def kinds(self) -> List[str]:
        return sorted(self._factories)

    def __contains__(self, kind: str) -> bool:
        return kind in self._factories

    def resolve(self, kind: str) -> DriverFactory:
        """
        Return the factory for ``kind``.

        Raises:
            DriverNotFoundError: If the kind is unknown and cannot be imported
        """
        if kind in self._factories:
            return self._factories[kind]
        if ":" in kind:
            return self._load_factory(kind)
        raise DriverNotFoundError(
            kind, f"registered kinds: {', '.join(self.kinds()) or 'none'}"
        )

    async def create(
        self,
        kind: str,
        playwright: Playwright,
        settings: HarnessSettings,
    ) -> Browser:
        factory = self.resolve(kind)
        browser = await factory(playwright, settings)
        logger.debug(f"Browser started: {kind} (headless={settings.headless})")
        return browser

    def _load_factory(self, path: str) -> DriverFactory:
        module_name, _, attr = path.partition(":")
        try:
            module = importlib.import_module(module_name)
        except ImportError as e:
            raise DriverNotFoundError(path, str(e)) from e

        factory = getattr(module, attr, None)
        if not callable(factory):
            raise DriverNotFoundError(path, f"{module_name} has no callable '{attr}'")

        self._factories[path] = factory
        return factory


# =============================================================================
# Built-in Drivers
# =============================================================================

async def launch_chromium(playwright: Playwright, settings: HarnessSettings) -> Browser:
    return await playwright.chromium.launch(
        headless=settings.headless,
        args=DEFAULT_LAUNCH_ARGS,
    )


async def launch_chrome(playwright: Playwright, settings: HarnessSettings) -> Browser:
    """Branded Google Chrome instead of the bundled Chromium."""
    return await playwright.chromium.launch(
        channel="chrome",
        headless=settings.headless,
        args=DEFAULT_LAUNCH_ARGS,
    )


async def launch_firefox(playwright: Playwright, settings: HarnessSettings) -> Browser:
    return await playwright.firefox.launch(headless=settings.headless)


async def launch_webkit(playwright: Playwright, settings: HarnessSettings) -> Browser:
    return await playwright.webkit.launch(headless=settings.headless)


async def connect_remote(playwright: Playwright, settings: HarnessSettings) -> Browser:
    """Connect to a browser server (e.g. a shared grid) over WebSocket."""
    if not settings.remote_endpoint:
        raise ConfigurationError(
            "harness.remote_endpoint must be set for the 'remote' browser kind"
        )
    logger.info(f"Connecting to remote browser: {settings.remote_endpoint}")
    return await playwright.chromium.connect(settings.remote_endpoint)


def default_registry() -> DriverRegistry:
    """A registry holding the built-in browser kinds."""
    registry = DriverRegistry()
    registry.register("chromium", launch_chromium)
    registry.register("chrome", launch_chrome)
    registry.register("firefox", launch_firefox)
    registry.register("webkit", launch_webkit)
    registry.register("remote", connect_remote)
    return registry


__all__ = [
    "DriverRegistry",
    "DriverFactory",
    "default_registry",
    "launch_chromium",
    "launch_chrome",
    "launch_firefox",
    "launch_webkit",
    "connect_remote",
]
