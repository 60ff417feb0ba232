"""
================================================================================
Harness Errors
================================================================================

Exception types raised by the DOM helpers and the scenario lifecycle.

Absence of an element or attribute is never an error: helpers return None.

================================================================================
"""

from __future__ import annotations

from typing import Optional


class HarnessError(Exception):
    """Base class for harness failures."""
    pass


class WaitTimeoutError(HarnessError, TimeoutError):
    """Raised when a polled condition is not met before its deadline."""

    def __init__(self, message: str, timeout_ms: int, attempts: int = 0):
        super().__init__(message)
        self.message = message
        self.timeout_ms = timeout_ms
        self.attempts = attempts


class RemoteExecutionError(HarnessError):
    """
    Raised when a script evaluated inside the page throws.

    The Playwright error is chained as ``__cause__``.
    """

    def __init__(self, script_name: str, detail: str):
        super().__init__(f"Script '{script_name}' failed in the page: {detail}")
        self.script_name = script_name
        self.detail = detail


class DriverNotFoundError(HarnessError, LookupError):
    """Raised when a browser kind is neither registered nor importable."""

    def __init__(self, kind: str, reason: Optional[str] = None):
        message = f"Could not find browser driver: {kind}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)
        self.kind = kind


class ConfigurationError(HarnessError):
    """Raised when harness settings are invalid."""
    pass


__all__ = [
    "HarnessError",
    "WaitTimeoutError",
    "RemoteExecutionError",
    "DriverNotFoundError",
    "ConfigurationError",
]
