"""
================================================================================
UI Testing Framework
================================================================================

Playwright-based helpers and scenario lifecycle for the storefront harness.

Components:
    - poller: Bounded-time condition polling
    - remote_document: Closure-free scripts evaluated in the page
    - attribute_waiter: Waits on DOM attribute state
    - hidden_actuator: In-page clicks that bypass visibility checks
    - session_hygiene: Cookie and web storage cleanup
    - dom_helpers: Facade used by page objects
    - driver_registry / browser_manager: Browser creation
    - scenario / scenario_runner: Per-scenario context and lifecycle

Author: Automation Team
License: MIT
================================================================================
"""

from .errors import (
    ConfigurationError,
    DriverNotFoundError,
    HarnessError,
    RemoteExecutionError,
    WaitTimeoutError,
)
from .settings import HarnessSettings
from .poller import ConditionPoller
from .remote_document import DocumentScript, PseudoPosition, RemoteDocumentQuery
from .attribute_waiter import AttributeWaiter
from .hidden_actuator import HiddenElementActuator
from .session_hygiene import SessionHygiene
from .dom_helpers import DomHelpers
from .driver_registry import DriverRegistry, default_registry
from .browser_manager import BrowserManager
from .scenario import ScenarioContext, ScenarioResult, ScenarioStatus
from .scenario_runner import ScenarioRunner
from .page_base import BasePage, PageBase

__all__ = [
    "ConfigurationError",
    "DriverNotFoundError",
    "HarnessError",
    "RemoteExecutionError",
    "WaitTimeoutError",
    "HarnessSettings",
    "ConditionPoller",
    "DocumentScript",
    "PseudoPosition",
    "RemoteDocumentQuery",
    "AttributeWaiter",
    "HiddenElementActuator",
    "SessionHygiene",
    "DomHelpers",
    "DriverRegistry",
    "default_registry",
    "BrowserManager",
    "ScenarioContext",
    "ScenarioResult",
    "ScenarioStatus",
    "ScenarioRunner",
    "BasePage",
    "PageBase",
]
