"""
================================================================================
Scenario Context
================================================================================

Explicit per-scenario state handed to page objects and steps in place of
process-wide globals.

================================================================================
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional, Type, TypeVar

from playwright.async_api import BrowserContext, Page

from .dom_helpers import DomHelpers
from .settings import HarnessSettings


P = TypeVar("P")


class ScenarioStatus(str, Enum):
    """Outcome of a scenario as reported by a test-runner adapter."""
    PASSED = "passed"
    FAILED = "failed"
    SKIPPED = "skipped"


@dataclass
class ScenarioResult:
    """Name and outcome of a finished scenario."""
    name: str
    status: ScenarioStatus = ScenarioStatus.PASSED
    error: Optional[str] = None

    @property
    def failed(self) -> bool:
        return self.status == ScenarioStatus.FAILED


@dataclass
class ScenarioContext:
    """
    Everything one scenario needs to drive the browser.

    Attributes:
        name: Scenario name (used in logs and attachments)
        page: Playwright page owned by this scenario
        settings: Harness settings
        helpers: DomHelpers bound to ``page``
        shared: Free-form values steps pass to each other
    """
    name: str
    page: Page
    settings: HarnessSettings
    helpers: DomHelpers
    shared: Dict[str, Any] = field(default_factory=dict)
    _pages: Dict[type, Any] = field(default_factory=dict, repr=False)

    @classmethod
    def create(cls, name: str, page: Page, settings: HarnessSettings) -> "ScenarioContext":
        return cls(
            name=name,
            page=page,
            settings=settings,
            helpers=DomHelpers(page, settings),
        )

    @property
    def browser_context(self) -> BrowserContext:
        return self.page.context

    def page_object(self, page_class: Type[P]) -> P:
        """
        Return this scenario's instance of ``page_class``, creating it once.

        Example:
            workwear = context.page_object(MammothWorkwearPage)
        """
        if page_class not in self._pages:
            self._pages[page_class] = page_class(self)
        return self._pages[page_class]


__all__ = [
    "ScenarioContext",
    "ScenarioResult",
    "ScenarioStatus",
]
