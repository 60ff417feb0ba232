"""
================================================================================
Harness Tools
================================================================================

Shared infrastructure for the storefront end-to-end harness.

Modules:
    - common: Configuration (YAML + environment) and loguru setup
    - report_tools: Allure attachments and report generation

Example:
    from harness_tools.common import get_config, init_logger
    from harness_tools.report_tools.allure_utils import generate_allure_report

    init_logger()
    browser = get_config("harness.browser", "chromium")
    generate_allure_report("reports/allure-results", "reports/allure-report")

================================================================================
"""

__version__ = "1.0.0"

__all__ = [
    "common",
    "report_tools",
]
