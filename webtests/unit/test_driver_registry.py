import pytest

from webtests.ui_testing.framework.browser_manager import BrowserManager
from webtests.ui_testing.framework.driver_registry import DriverRegistry, default_registry
from webtests.ui_testing.framework.errors import ConfigurationError, DriverNotFoundError
from webtests.ui_testing.framework.settings import HarnessSettings
from webtests.unit.fakes import FakeBrowser, FakePlaywright, FakePlaywrightStarter


async def launch_fake_browser(playwright, settings):
    """Factory loadable as 'webtests.unit.test_driver_registry:launch_fake_browser'."""
    return FakeBrowser("from-path")


not_a_factory = "nope"


def test_default_registry_kinds():
    assert default_registry().kinds() == ["chrome", "chromium", "firefox", "remote", "webkit"]


@pytest.mark.asyncio
async def test_register_decorator_and_create():
    registry = DriverRegistry()

    @registry.register("fake")
    async def launch(playwright, settings):
        return FakeBrowser("fake")

    browser = await registry.create("fake", FakePlaywright(), HarnessSettings())

    assert "fake" in registry
    assert browser.kind == "fake"


def test_register_replaces_existing_kind():
    registry = DriverRegistry()

    async def first(playwright, settings):
        return FakeBrowser("first")

    async def second(playwright, settings):
        return FakeBrowser("second")

    registry.register("kind", first)
    registry.register("kind", second)

    assert registry.resolve("kind") is second


def test_unknown_kind():
    with pytest.raises(DriverNotFoundError, match="electron"):
        default_registry().resolve("electron")


@pytest.mark.asyncio
async def test_dotted_path_is_imported():
    registry = DriverRegistry()
    path = "webtests.unit.test_driver_registry:launch_fake_browser"

    browser = await registry.create(path, FakePlaywright(), HarnessSettings())

    assert browser.kind == "from-path"
    assert path in registry


@pytest.mark.parametrize("path", [
    "webtests.unit.no_such_module:factory",
    "webtests.unit.test_driver_registry:missing",
    "webtests.unit.test_driver_registry:not_a_factory",
])
def test_bad_dotted_paths(path):
    with pytest.raises(DriverNotFoundError):
        DriverRegistry().resolve(path)


@pytest.mark.asyncio
async def test_remote_requires_endpoint():
    with pytest.raises(ConfigurationError, match="remote_endpoint"):
        await default_registry().create("remote", FakePlaywright(), HarnessSettings())


@pytest.mark.asyncio
async def test_browser_manager_lifecycle():
    registry = DriverRegistry()
    registry.register("fake", launch_fake_browser)
    starter = FakePlaywrightStarter()
    settings = HarnessSettings(browser="fake", default_timeout_ms=1234)

    async with BrowserManager(settings, registry, playwright_factory=starter) as manager:
        page = await manager.new_page()
        browser = manager.browser

        assert manager.is_running
        assert page.context.default_timeout == 1234
        assert page.context.options["viewport"] == {"width": 1280, "height": 1024}
        assert page.context.options["ignore_https_errors"] is True

    assert browser.closed
    assert page.context.closed
    assert starter.instances[0].stopped
    assert not manager.is_running


@pytest.mark.asyncio
async def test_browser_manager_stops_playwright_when_launch_fails():
    starter = FakePlaywrightStarter()
    manager = BrowserManager(
        HarnessSettings(browser="electron"), DriverRegistry(), playwright_factory=starter
    )

    with pytest.raises(DriverNotFoundError):
        await manager.start()

    assert starter.instances[0].stopped
    assert not manager.is_running


@pytest.mark.asyncio
async def test_new_context_requires_started_browser():
    manager = BrowserManager(HarnessSettings(), DriverRegistry(), playwright_factory=FakePlaywrightStarter())

    with pytest.raises(RuntimeError, match="not started"):
        await manager.new_context()
