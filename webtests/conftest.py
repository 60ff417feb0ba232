"""
================================================================================
Suite Pytest Configuration
================================================================================

Registers the project markers and tags collected tests by suite:
``unit`` for webtests/unit and ``ui`` for browser tests under ui_testing.

================================================================================
"""

import pytest


def pytest_configure(config):
    """Configure pytest with project-wide custom markers."""

    # Priority markers
    config.addinivalue_line(
        "markers", "P0: Critical priority tests - must pass for deployment"
    )
    config.addinivalue_line(
        "markers", "P1: High priority tests - important functionality"
    )
    config.addinivalue_line(
        "markers", "P2: Medium priority tests - edge cases and minor features"
    )
    config.addinivalue_line(
        "markers", "P3: Low priority tests - extensive validation"
    )

    # Test type markers
    config.addinivalue_line(
        "markers", "smoke: Quick verification tests"
    )
    config.addinivalue_line(
        "markers", "regression: Full regression test suite"
    )
    config.addinivalue_line(
        "markers", "e2e: End-to-end tests simulating user flows"
    )

    # Suite markers
    config.addinivalue_line(
        "markers", "unit: Framework tests against in-memory fakes (no browser)"
    )
    config.addinivalue_line(
        "markers", "ui: Tests that drive a real browser"
    )


def pytest_collection_modifyitems(config, items):
    """
    Add suite markers based on where the test lives.
    """
    for item in items:
        path = str(item.fspath)

        if "/webtests/unit/" in path.replace("\\", "/"):
            item.add_marker(pytest.mark.unit)

        if "ui_testing" in path:
            item.add_marker(pytest.mark.ui)


def pytest_report_header(config):
    """Add custom header to pytest output."""
    return [
        "",
        "=" * 60,
        "Storefront End-to-End Harness",
        "=" * 60,
        "",
    ]
