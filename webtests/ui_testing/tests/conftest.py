"""
================================================================================
UI Testing Pytest Configuration
================================================================================

Adapts ScenarioRunner to pytest: every test is one scenario, and the test
outcome is reported back so failures get a screenshot in the Allure report.

Key Features:
- Scenario lifecycle per test (setup -> before -> after -> teardown)
- Fixture storefront routed into the page (no network access needed)
- Tests are skipped when no browser binary is installed

================================================================================
"""

from typing import AsyncGenerator

import pytest
from playwright.async_api import Error as PlaywrightError

from harness_tools.common import reset_config, set_config
from webtests.ui_testing.framework import (
    HarnessSettings,
    ScenarioContext,
    ScenarioResult,
    ScenarioRunner,
    ScenarioStatus,
)
from webtests.ui_testing.tests.fixture_site import STORE_ORIGIN, serve_fixture_site


# ================================================================================
# Test Lifecycle Hooks
# ================================================================================

@pytest.hookimpl(hookwrapper=True)
def pytest_runtest_makereport(item, call):
    """
    Keep each phase's report on the item so fixtures can read the outcome.
    """
    outcome = yield
    report = outcome.get_result()
    setattr(item, f"rep_{report.when}", report)


def _scenario_result(request) -> ScenarioResult:
    report = getattr(request.node, "rep_call", None)
    name = request.node.name
    if report is None or report.skipped:
        return ScenarioResult(name, ScenarioStatus.SKIPPED)
    if report.failed:
        return ScenarioResult(name, ScenarioStatus.FAILED, error=report.longreprtext)
    return ScenarioResult(name, ScenarioStatus.PASSED)


# ================================================================================
# Scenario Fixtures
# ================================================================================

@pytest.fixture
def harness_settings(tmp_path) -> HarnessSettings:
    """Settings from configuration, with reports kept in the test's tmp dir."""
    return HarnessSettings.from_config({
        "reports_dir": str(tmp_path / "reports"),
        "default_timeout_ms": 5000,
        "poll_interval_ms": 50,
        "teardown_strategy": "always",
    })


@pytest.fixture
async def scenario(request, harness_settings: HarnessSettings) -> AsyncGenerator[ScenarioContext, None]:
    """
    One scenario with its own browser page and the fixture site routed in.
    """
    runner = ScenarioRunner(harness_settings)
    await runner.setup()
    try:
        context = await runner.before_scenario(request.node.name)
    except PlaywrightError as e:
        await runner.teardown()
        pytest.skip(f"Browser not available: {e.message.splitlines()[0]}")

    await serve_fixture_site(context.page)
    yield context

    try:
        await runner.after_scenario(_scenario_result(request))
    finally:
        await runner.teardown()


@pytest.fixture
def fixture_store():
    """Point the storefront page object at the routed fixture origin."""
    set_config("sites.mammoth_workwear.url", f"{STORE_ORIGIN}/")
    yield STORE_ORIGIN
    reset_config()
