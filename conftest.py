"""
Repository-level pytest configuration.

Keeps configuration state predictable across the session:
  - The GlobalConfig singleton is reloaded at session start and dropped at the end
  - Headed runs are opt-in through HARNESS_HEADLESS=false
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Generator

import pytest

from harness_tools.common import reset_config


@pytest.fixture(scope="session")
def project_root() -> Path:
    """Return repo root path."""
    return Path(__file__).parent


@pytest.fixture(scope="session", autouse=True)
def _session_config() -> Generator[None, None, None]:
    """
    Start the session from freshly loaded configuration.

    Values exported by run_tests.py (HARNESS_*) are picked up here.
    """
    os.environ.setdefault("HARNESS_HEADLESS", "true")
    reset_config()

    yield

    reset_config()
