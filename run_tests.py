#!/usr/bin/env python3
# ================================================================================
# Test Runner Script
# ================================================================================
#
# Main entry point for executing the harness test suites.
#
# Features:
#   - Run framework unit tests (no browser)
#   - Run browser UI tests through pytest
#   - Run behave feature files
#   - Generate Allure reports
#
# Usage:
#   python run_tests.py --suite unit
#   python run_tests.py --suite ui --browser firefox --headed
#   python run_tests.py --suite bdd --teardown clear --tags @smoke
#   python run_tests.py --suite all
#
# ================================================================================

import argparse
import os
import subprocess
import sys
from pathlib import Path
from typing import Dict, List

from loguru import logger

from harness_tools.common import init_logger
from harness_tools.report_tools.allure_utils import generate_allure_report
from webtests.ui_testing.framework import default_registry
from webtests.ui_testing.framework.settings import TEARDOWN_STRATEGIES


SUITES = ("unit", "ui", "bdd", "all")


class TestRunner:
    """
    Orchestrates one harness run.

    Browser options are handed to the test processes as HARNESS_* environment
    variables, which take precedence over config/config.yaml.
    """

    __test__ = False

    def __init__(
        self,
        suite: str = "all",
        tags: List[str] = None,
        browser: str = None,
        headless: bool = True,
        teardown: str = None,
        allure_report: bool = True,
        verbose: bool = False
    ):
        """
        Initialize test runner.

        Args:
            suite: Suite to run - "unit", "ui", "bdd", "all"
            tags: Pytest markers (or behave tags for the bdd suite)
            browser: Registered browser kind or "module:function" factory
            headless: Run browser in headless mode
            teardown: Teardown strategy between scenarios
            allure_report: Collect Allure results and generate the report
            verbose: Enable verbose output
        """
        self.suite = suite
        self.tags = tags or []
        self.browser = browser
        self.headless = headless
        self.teardown = teardown
        self.allure_report = allure_report
        self.verbose = verbose

        # Paths
        self.root_dir = Path(__file__).parent
        self.reports_dir = self.root_dir / "reports"
        self.allure_results = self.reports_dir / "allure-results"
        self.allure_report_dir = self.reports_dir / "allure-report"

    def run(self) -> int:
        """
        Execute the selected suites.

        Returns:
            Exit code (0 for success, the first non-zero code otherwise)
        """
        logger.info("=" * 60)
        logger.info("Starting Test Execution")
        logger.info("=" * 60)
        logger.info(f"Suite: {self.suite}")
        logger.info(f"Tags: {self.tags or 'All'}")
        if self.suite != "unit":
            logger.info(f"Browser: {self.browser or 'from config'}")
            logger.info(f"Headless: {self.headless}")
            logger.info(f"Teardown: {self.teardown or 'from config'}")
        logger.info("=" * 60)

        self._prepare_environment()
        env = self._build_environment()

        commands = []
        if self.suite in ("unit", "all"):
            commands.append(self._build_pytest_command("webtests/unit"))
        if self.suite in ("ui", "all"):
            commands.append(self._build_pytest_command("webtests/ui_testing/tests"))
        if self.suite in ("bdd", "all"):
            commands.append(self._build_behave_command())

        exit_code = 0
        for cmd in commands:
            logger.info(f"Executing: {' '.join(cmd)}")
            try:
                result = subprocess.run(cmd, cwd=str(self.root_dir), env=env)
            except FileNotFoundError as e:
                logger.error(f"Test execution failed: {e}")
                result = subprocess.CompletedProcess(cmd, 1)
            if result.returncode and not exit_code:
                exit_code = result.returncode

        if self.allure_report:
            generate_allure_report(str(self.allure_results), str(self.allure_report_dir))

        self._print_summary(exit_code)
        return exit_code

    def _prepare_environment(self) -> None:
        self.reports_dir.mkdir(parents=True, exist_ok=True)
        if self.allure_report:
            self.allure_results.mkdir(parents=True, exist_ok=True)
        logger.debug("Environment prepared")

    def _build_environment(self) -> Dict[str, str]:
        """Process environment with the harness overrides applied."""
        env = dict(os.environ)
        env["HARNESS_HEADLESS"] = "true" if self.headless else "false"
        env["HARNESS_REPORTS_DIR"] = str(self.reports_dir)
        if self.browser:
            env["HARNESS_BROWSER"] = self.browser
        if self.teardown:
            env["HARNESS_TEARDOWN"] = self.teardown
        return env

    def _build_pytest_command(self, path: str) -> List[str]:
        cmd = [sys.executable, "-m", "pytest", path]

        if self.tags:
            cmd.extend(["-m", " or ".join(self.tags)])

        if self.allure_report:
            cmd.extend(["--alluredir", str(self.allure_results)])

        cmd.append("-v" if self.verbose else "-q")
        return cmd

    def _build_behave_command(self) -> List[str]:
        cmd = [sys.executable, "-m", "behave", "features"]

        for tag in self.tags:
            cmd.extend(["--tags", tag])

        if self.browser:
            cmd.extend(["-D", f"browser={self.browser}"])

        if self.allure_report:
            cmd.extend([
                "-f", "allure_behave.formatter:AllureFormatter",
                "-o", str(self.allure_results),
                "-f", "pretty",
            ])

        return cmd

    def _print_summary(self, exit_code: int) -> None:
        """Print test execution summary."""
        logger.info("=" * 60)
        if exit_code == 0:
            logger.info("✅ TEST EXECUTION COMPLETED SUCCESSFULLY")
        else:
            logger.error(f"❌ TEST EXECUTION FAILED (exit code: {exit_code})")

        if self.allure_report:
            logger.info(f"📊 Report available at: {self.allure_report_dir}")

        logger.info("=" * 60)


def _browser_kind(value: str) -> str:
    """Accept registered kinds and dotted ``module:function`` factories."""
    if ":" in value or value in default_registry():
        return value
    raise argparse.ArgumentTypeError(
        f"unknown browser {value!r} (choose from {', '.join(default_registry().kinds())} "
        "or give module:function)"
    )


def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Storefront E2E Harness Test Runner",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Framework tests only (no browser needed)
  python run_tests.py --suite unit

  # Browser tests in visible Firefox
  python run_tests.py --suite ui --browser firefox --headed

  # Feature files, keeping one browser and clearing the session between scenarios
  python run_tests.py --suite bdd --teardown clear
        """
    )

    parser.add_argument(
        "--suite",
        choices=SUITES,
        default="all",
        help="Test suite to run (default: all)"
    )

    parser.add_argument(
        "--tags",
        nargs="+",
        default=[],
        help="Pytest markers (e.g. P0 smoke) or behave tags for --suite bdd"
    )

    parser.add_argument(
        "--browser",
        type=_browser_kind,
        default=None,
        help=f"Browser kind: {', '.join(default_registry().kinds())} or module:function"
    )

    parser.add_argument(
        "--headed",
        action="store_true",
        help="Show the browser window"
    )

    parser.add_argument(
        "--teardown",
        choices=TEARDOWN_STRATEGIES,
        default=None,
        help="Between-scenario teardown (default: from config)"
    )

    parser.add_argument(
        "--no-allure",
        action="store_true",
        help="Skip Allure results and report generation"
    )

    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Verbose output"
    )

    args = parser.parse_args()

    init_logger(level="DEBUG" if args.verbose else "INFO")

    runner = TestRunner(
        suite=args.suite,
        tags=args.tags,
        browser=args.browser,
        headless=not args.headed,
        teardown=args.teardown,
        allure_report=not args.no_allure,
        verbose=args.verbose
    )

    sys.exit(runner.run())


if __name__ == "__main__":
    main()
