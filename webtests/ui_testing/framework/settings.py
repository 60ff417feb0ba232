"""
================================================================================
Harness Settings
================================================================================

Typed view over the ``harness`` configuration section.

Values may come from YAML or from environment variables (always strings),
so every field is coerced to the type of its default.

================================================================================
"""

from __future__ import annotations

from dataclasses import MISSING, dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, Optional

from harness_tools.common import get_config

from .errors import ConfigurationError


TEARDOWN_STRATEGIES = ("always", "clear", "none")


def _convert_type(value: Any, reference: Any) -> Any:
    """
    Convert a configured value to match the reference type.

    Used for environment variables which are always strings.
    """
    if value is None or reference is None or not isinstance(value, str):
        return value

    if isinstance(reference, bool):
        return value.strip().lower() in ("true", "1", "yes", "on")
    if isinstance(reference, int):
        try:
            return int(value)
        except ValueError as e:
            raise ConfigurationError(f"Expected an integer, got {value!r}") from e
    if isinstance(reference, float):
        try:
            return float(value)
        except ValueError as e:
            raise ConfigurationError(f"Expected a number, got {value!r}") from e

    return value


@dataclass
class HarnessSettings:
    """
    Runtime settings shared by every helper in a scenario.

    Attributes:
        browser: Driver kind registered in the DriverRegistry
        headless: Launch browsers without a window
        default_timeout_ms: Timeout used whenever a caller omits one
        poll_interval_ms: Pause between condition checks
        root_marker: Selector whose presence marks a loaded document
        teardown_strategy: 'always', 'clear' or 'none'
        remote_endpoint: WebSocket endpoint for the 'remote' browser kind
        screenshot_on_failure: Attach a screenshot when a scenario fails
        reports_dir: Directory for screenshots and report output
        viewport: Page viewport size
    """
    browser: str = "chromium"
    headless: bool = True
    default_timeout_ms: int = 10000
    poll_interval_ms: int = 200
    root_marker: str = "body"
    teardown_strategy: str = "always"
    remote_endpoint: str = ""
    screenshot_on_failure: bool = True
    reports_dir: str = "reports"
    viewport: Dict[str, int] = field(
        default_factory=lambda: {"width": 1280, "height": 1024}
    )

    def __post_init__(self) -> None:
        if self.teardown_strategy not in TEARDOWN_STRATEGIES:
            raise ConfigurationError(
                f"Unknown teardown strategy {self.teardown_strategy!r}; "
                f"expected one of {', '.join(TEARDOWN_STRATEGIES)}"
            )
        if self.default_timeout_ms <= 0:
            raise ConfigurationError("default_timeout_ms must be positive")
        if self.poll_interval_ms < 0:
            raise ConfigurationError("poll_interval_ms must not be negative")

    @classmethod
    def from_config(cls, overrides: Optional[Dict[str, Any]] = None) -> "HarnessSettings":
        """
        Build settings from the ``harness`` config section.

        Args:
            overrides: Values that win over configuration (e.g. CLI flags)
        """
        values: Dict[str, Any] = {}
        for f in fields(cls):
            if f.default is not MISSING:
                reference = f.default
            else:
                reference = f.default_factory()
            raw = get_config(f"harness.{f.name}", reference)
            values[f.name] = _convert_type(raw, reference)

        values.update(overrides or {})
        return cls(**values)

    def resolve_timeout(self, timeout_ms: Optional[int]) -> int:
        """Return ``timeout_ms`` or the default when it is falsy."""
        return timeout_ms or self.default_timeout_ms

    @property
    def screenshots_dir(self) -> Path:
        return Path(self.reports_dir) / "screenshots"


__all__ = [
    "HarnessSettings",
    "TEARDOWN_STRATEGIES",
]
