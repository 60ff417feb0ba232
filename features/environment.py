"""
================================================================================
Behave Environment
================================================================================

Adapts behave's hooks to ScenarioRunner.

Behave steps are synchronous while the harness is async, so one event loop
lives for the whole run; steps execute coroutines with ``context.run(...)``.
Each scenario's ScenarioContext is exposed as ``context.world``.

================================================================================
"""

import asyncio

from loguru import logger

from webtests.ui_testing.framework import (
    HarnessSettings,
    ScenarioResult,
    ScenarioRunner,
    ScenarioStatus,
)


_STATUS_MAP = {
    "passed": ScenarioStatus.PASSED,
    "failed": ScenarioStatus.FAILED,
    "skipped": ScenarioStatus.SKIPPED,
}


def before_all(context):
    context.loop = asyncio.new_event_loop()
    context.run = context.loop.run_until_complete

    overrides = {}
    browser = context.config.userdata.get("browser")
    if browser:
        overrides["browser"] = browser

    context.runner = ScenarioRunner(HarnessSettings.from_config(overrides))
    context.run(context.runner.setup())


def before_scenario(context, scenario):
    context.world = context.run(context.runner.before_scenario(scenario.name))


def after_scenario(context, scenario):
    status = _STATUS_MAP.get(scenario.status.name, ScenarioStatus.FAILED)
    error = None
    if status == ScenarioStatus.FAILED:
        failed_steps = [s for s in scenario.steps if s.status.name == "failed"]
        if failed_steps and failed_steps[0].error_message:
            error = failed_steps[0].error_message

    result = ScenarioResult(name=scenario.name, status=status, error=error)
    context.run(context.runner.after_scenario(result))
    context.world = None


def after_all(context):
    try:
        context.run(context.runner.teardown())
    finally:
        context.loop.close()
        logger.debug("Behave event loop closed")
