"""
================================================================================
Dashboard UI Tests
================================================================================

Real-browser checks after login:
  - Dashboard renders for an authenticated user
  - Logout returns to the login page

================================================================================
"""

import allure
import pytest

from hrm_testsuites.ui_testing.pages import DashboardPage


pytestmark = [pytest.mark.e2e]


@allure.epic("UI Testing")
@allure.feature("Dashboard")
class TestDashboard:
    """Dashboard UI test suite."""

    @allure.story("Page Load")
    @allure.title("Dashboard loads after login")
    @allure.severity(allure.severity_level.CRITICAL)
    @pytest.mark.P0
    @pytest.mark.smoke
    def test_dashboard_loads(self, authenticated_dashboard: DashboardPage):
        """Verify dashboard loads for authenticated user."""
        assert authenticated_dashboard.is_loaded()
        assert authenticated_dashboard.page_title() == DashboardPage.PAGE_TITLE
        assert "/dashboard" in authenticated_dashboard.session.current_url

    @allure.story("Logout")
    @allure.title("User can logout from dashboard")
    @allure.severity(allure.severity_level.NORMAL)
    @pytest.mark.P1
    @pytest.mark.regression
    def test_logout(self, authenticated_dashboard: DashboardPage):
        """Verify logout returns user to the login page."""
        login_page = authenticated_dashboard.logout()

        assert login_page.is_loaded(), "Login page not shown after logout"
        assert authenticated_dashboard.is_loaded(timeout=0) is False
