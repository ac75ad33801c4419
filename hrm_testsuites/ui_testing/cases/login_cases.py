"""
================================================================================
Login Test Cases
================================================================================

Login scenarios against the OrangeHRM demo.

Each case:
  - verifies the login page is rendered before acting
  - logs its progress through the Result Reporter
  - fails with an explicitly raised AssertionError (never swallowed) when an
    expectation is not met, also under `python -O`
  - reads credentials with Configuration.require(), so a missing username or
    password fails the case with ConfigurationMissingError

Cases don't wait with fixed sleeps: the dashboard header, the login alert or
the login form are the signals checked after every submit.

================================================================================
"""

from __future__ import annotations

from typing import List

from loguru import logger

from hrm_testsuites.ui_testing.framework.context import ExecutionContext
from hrm_testsuites.ui_testing.framework.suite_runner import TestUnit
from hrm_testsuites.ui_testing.pages import DashboardPage, LoginPage


INVALID_USERNAME = "invaliduser"


def check(condition: bool, message: str) -> None:
    """Fail the running case when an expectation does not hold."""
    if not condition:
        raise AssertionError(message)


class LoginCases:
    """
    Login test bodies bound to one execution context.

    Usage:
        cases = LoginCases(ctx)
        cases.test_valid_login()
    """

    __test__ = False

    def __init__(self, ctx: ExecutionContext):
        self.ctx = ctx
        self.reporter = ctx.reporter
        self.config = ctx.config
        self.login_page = LoginPage(ctx)

    @property
    def username(self) -> str:
        return self.config.require("username")

    @property
    def password(self) -> str:
        return self.config.require("password")

    def _require_login_page(self) -> None:
        check(self.login_page.is_loaded(), "Login page did not load successfully")
        self.reporter.log_pass("Login page loaded successfully")

    def test_valid_login(self) -> DashboardPage:
        """Valid credentials reach the dashboard."""
        self._require_login_page()

        self.login_page.login(self.username, self.password)
        self.reporter.log_pass("User entered credentials and clicked login")

        dashboard = DashboardPage(self.ctx)
        check(dashboard.is_loaded(), "Dashboard did not load after login")
        self.reporter.log_pass("Login successful - Dashboard page is displayed")
        return dashboard

    def test_login_with_invalid_username(self) -> None:
        """An unknown username shows the login alert."""
        self._require_login_page()

        self.login_page.login(INVALID_USERNAME, self.password)
        self.reporter.log_pass("Entered invalid username and correct password")

        message = self.login_page.error_message()
        check(message is not None, "Error message not displayed for invalid username")
        self.reporter.log_pass(f"Error message displayed for invalid username: {message}")

    def test_login_with_empty_credentials(self) -> None:
        """Submitting an empty form keeps the user on the login page."""
        self._require_login_page()

        self.login_page.click_login_button()
        self.reporter.log_pass("Clicked login button without entering credentials")

        hints = self.login_page.required_field_messages()
        if hints:
            self.reporter.log_info(f"Validation messages: {', '.join(hints)}")
        else:
            self.reporter.log_warning("No validation messages rendered")

        check(self.login_page.is_loaded(), "User should remain on login page")
        self.reporter.log_pass("User remained on login page due to empty credentials")

    def test_relogin_after_logout(self) -> None:
        """Logging in, out and in again ends on the dashboard both times."""
        dashboard = self.test_valid_login()

        login_page = dashboard.logout()
        check(login_page.is_loaded(), "Login page not shown after logout")
        self.reporter.log_pass("Logged out to the login page")

        login_page.login(self.username, self.password)
        check(DashboardPage(self.ctx).is_loaded(), "Dashboard did not load after logging in again")
        self.reporter.log_pass("Second login reached the dashboard")
        logger.debug("Re-login after logout verified")


def _unit(method_name: str, description: str) -> TestUnit:
    def body(ctx: ExecutionContext) -> None:
        getattr(LoginCases(ctx), method_name)()

    return TestUnit(name=method_name, body=body, description=description)


def login_units() -> List[TestUnit]:
    """Login cases packaged for the thread-pool runner."""
    return [
        _unit("test_valid_login", "Verify successful login with valid credentials"),
        _unit("test_login_with_invalid_username", "Verify login fails with invalid username"),
        _unit("test_login_with_empty_credentials", "Verify login fails with empty credentials"),
        _unit("test_relogin_after_logout", "Verify login works again after logout"),
    ]


__all__ = [
    "LoginCases",
    "login_units",
    "INVALID_USERNAME",
    "check",
]
