import asyncio
import time

import pytest

from webtests.ui_testing.framework.dom_helpers import DomHelpers
from webtests.ui_testing.framework.errors import WaitTimeoutError
from webtests.ui_testing.framework.settings import HarnessSettings
from webtests.unit.fakes import FakeNode, FakePage


@pytest.fixture
def settings():
    return HarnessSettings(default_timeout_ms=300, poll_interval_ms=10)


@pytest.mark.asyncio
async def test_wait_until_equals_sees_value_flip(settings):
    html = FakeNode({"html"}, attributes={"data-busy": "true"})
    helpers = DomHelpers(FakePage([html]), settings)

    asyncio.get_running_loop().call_later(0.05, html.attributes.update, {"data-busy": "false"})
    await helpers.wait_until_equals("html", "data-busy", "false", 2000)

    assert html.attributes["data-busy"] == "false"


@pytest.mark.asyncio
async def test_wait_until_equals_timeout_message_uses_resolved_timeout(settings):
    helpers = DomHelpers(FakePage([FakeNode({"html"}, attributes={"data-busy": "true"})]), settings)

    with pytest.raises(WaitTimeoutError) as exc_info:
        await helpers.wait_until_equals("html", "data-busy", "false")

    assert str(exc_info.value) == "data-busy does not equal false after 300 milliseconds"
    assert exc_info.value.timeout_ms == 300


@pytest.mark.asyncio
async def test_wait_until_exists_accepts_empty_value(settings):
    html = FakeNode({"html"})
    helpers = DomHelpers(FakePage([html]), settings)

    asyncio.get_running_loop().call_later(0.03, html.attributes.update, {"data-loaded": ""})
    await helpers.wait_until_exists("html", "data-loaded", 2000)


@pytest.mark.asyncio
async def test_wait_until_exists_times_out(settings):
    helpers = DomHelpers(FakePage([FakeNode({"html"})]), settings)

    with pytest.raises(WaitTimeoutError, match="data-loaded does not exist after 50 milliseconds"):
        await helpers.wait_until_exists("html", "data-loaded", 50)


@pytest.mark.asyncio
async def test_wait_until_absent_missing_element_same_as_missing_attribute(settings):
    page = FakePage([FakeNode({"html"})])
    helpers = DomHelpers(page, settings)

    start = time.monotonic()
    await helpers.wait_until_absent("#spinner", "data-busy", 5000)
    await helpers.wait_until_absent("html", "data-busy", 5000)

    assert time.monotonic() - start < 1
    assert len(page.evaluations) == 2


@pytest.mark.asyncio
async def test_wait_until_absent_timeout_message(settings):
    helpers = DomHelpers(FakePage([FakeNode({"html"}, attributes={"data-busy": "true"})]), settings)

    with pytest.raises(WaitTimeoutError, match="data-busy still exists after 300 milliseconds"):
        await helpers.wait_until_absent("html", "data-busy", 0)


@pytest.mark.asyncio
async def test_get_attribute_value(settings):
    helpers = DomHelpers(FakePage([FakeNode({"body"}, attributes={"class": "home"})]), settings)

    assert await helpers.get_attribute_value("body", "class") == "home"
    assert await helpers.get_attribute_value("footer", "class") is None
