"""
================================================================================
UI Testing Pytest Configuration
================================================================================

This module configures pytest for real-browser UI tests, providing fixtures
for session lifecycle, page objects, and test setup/teardown.

Key Features:
- One isolated browser session per test (acquired before, released after)
- Explicit ExecutionContext handed to page objects and cases
- Page Object fixtures for all pages
- Screenshot capture on failure

Tests here are marked ``e2e`` and only run with ``--run-e2e``.

================================================================================
"""

from typing import Generator

import pytest

from hrm_tools.common import Configuration
from hrm_tools.report_tools import ResultReporter
from hrm_tools.report_tools.allure_utils import attach_screenshot
from hrm_testsuites.ui_testing.cases import LoginCases
from hrm_testsuites.ui_testing.framework.context import ExecutionContext
from hrm_testsuites.ui_testing.framework.session import BrowserSession, SessionLifecycleController
from hrm_testsuites.ui_testing.pages import DashboardPage, LoginPage


# ================================================================================
# Session Fixtures
# ================================================================================

@pytest.fixture(scope="session")
def controller() -> SessionLifecycleController:
    """Shared controller; the session slot inside it is per thread."""
    return SessionLifecycleController()


@pytest.fixture(scope="session")
def reporter(pytestconfig) -> ResultReporter:
    """
    The run's ResultReporter.

    Reuses the reporter of the reporting plugin when ``--ui-report`` is on, so
    log lines from test cases land in the report entries.
    """
    plugin = pytestconfig.pluginmanager.get_plugin("hrm-reporting")
    if plugin is not None:
        return plugin.reporter
    return ResultReporter()


@pytest.fixture
def browser_session(
    controller: SessionLifecycleController,
    configuration: Configuration,
) -> Generator[BrowserSession, None, None]:
    """
    Function-scoped browser session.

    Launches a fresh browser for each test and releases it afterwards, even
    when the test fails.
    """
    with controller.session(configuration) as session:
        yield session


@pytest.fixture
def ctx(
    browser_session: BrowserSession,
    configuration: Configuration,
    reporter: ResultReporter,
) -> ExecutionContext:
    return ExecutionContext(session=browser_session, config=configuration, reporter=reporter)


# ================================================================================
# Page Object Fixtures
# ================================================================================

@pytest.fixture
def login_page(ctx: ExecutionContext) -> LoginPage:
    """
    Provides LoginPage instance.

    Use this fixture for tests that interact with the login page.
    """
    return LoginPage(ctx)


@pytest.fixture
def dashboard_page(ctx: ExecutionContext) -> DashboardPage:
    """
    Provides DashboardPage instance.
    """
    return DashboardPage(ctx)


@pytest.fixture
def login_cases(ctx: ExecutionContext) -> LoginCases:
    return LoginCases(ctx)


@pytest.fixture
def authenticated_dashboard(
    login_page: LoginPage,
    dashboard_page: DashboardPage,
    configuration: Configuration,
) -> DashboardPage:
    """
    Provides DashboardPage with authenticated session.
    """
    login_page.login(configuration.require("username"), configuration.require("password"))
    assert dashboard_page.is_loaded(), "Dashboard did not load after login"
    return dashboard_page


# ================================================================================
# Test Lifecycle Hooks
# ================================================================================

@pytest.hookimpl(hookwrapper=True)
def pytest_runtest_makereport(item, call):
    """
    Hook to capture screenshots on test failure.

    Saves a screenshot named after the test and attaches it to the Allure
    report. Capture problems are logged by the session and never change the
    test outcome.
    """
    outcome = yield
    report = outcome.get_result()

    if report.when == "call" and report.failed:
        session = getattr(item, "funcargs", {}).get("browser_session")
        if session is not None and not session.closed:
            path = session.capture_screenshot(item.name)
            if path is not None:
                attach_screenshot(path, name="failure_screenshot")
