"""
================================================================================
Login Feature UI Tests
================================================================================

Real-browser login scenarios against the OrangeHRM demo. The test bodies
live in LoginCases so the thread-pool runner executes exactly the same steps.

Run with:
    pytest hrm_testsuites/ui_testing/tests --run-e2e --ui-report

================================================================================
"""

import allure
import pytest

from hrm_testsuites.ui_testing.cases import LoginCases


pytestmark = [pytest.mark.e2e, pytest.mark.auth]


@allure.epic("UI Testing")
@allure.feature("Authentication")
class TestLogin:
    """Login UI test suite."""

    @allure.story("Happy Path")
    @allure.title("Login succeeds with valid credentials")
    @allure.severity(allure.severity_level.BLOCKER)
    @pytest.mark.P0
    @pytest.mark.smoke
    def test_valid_login(self, login_cases: LoginCases):
        """Verify successful login with valid credentials."""
        login_cases.test_valid_login()

    @allure.story("Negative Path")
    @allure.title("Login fails with invalid username")
    @allure.severity(allure.severity_level.CRITICAL)
    @pytest.mark.P0
    @pytest.mark.smoke
    def test_login_with_invalid_username(self, login_cases: LoginCases):
        """Verify login fails with invalid username."""
        login_cases.test_login_with_invalid_username()

    @allure.story("Form Validation")
    @allure.title("Login fails with empty credentials")
    @allure.severity(allure.severity_level.NORMAL)
    @pytest.mark.P1
    @pytest.mark.regression
    def test_login_with_empty_credentials(self, login_cases: LoginCases):
        """Verify login fails with empty credentials."""
        login_cases.test_login_with_empty_credentials()

    @allure.story("Happy Path")
    @allure.title("Login works again after logout")
    @allure.severity(allure.severity_level.NORMAL)
    @pytest.mark.P1
    @pytest.mark.regression
    def test_relogin_after_logout(self, login_cases: LoginCases):
        """Verify logging in, out and in again reaches the dashboard."""
        login_cases.test_relogin_after_logout()
