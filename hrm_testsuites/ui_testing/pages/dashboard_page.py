"""
================================================================================
Dashboard Page Object
================================================================================

Landing page after a successful login, with the main menu and the user
dropdown that holds Logout.

================================================================================
"""

from __future__ import annotations

import allure
from loguru import logger

from hrm_testsuites.ui_testing.framework.locator import Locator
from hrm_testsuites.ui_testing.framework.page_base import BasePage

from .employees_page import EmployeesPage
from .login_page import LoginPage


class DashboardPage(BasePage):
    """Dashboard page object."""

    URL_PATH = "/web/index.php/dashboard/index"
    PAGE_TITLE = "OrangeHRM"

    HEADER = Locator.by_xpath("//h6[contains(text(), 'Dashboard')]", name="dashboard_header")
    EMPLOYEES_MENU = Locator.by_link_text("Employees", name="employees_menu")
    ADMIN_MENU = Locator.by_link_text("Admin", name="admin_menu")
    MY_INFO_MENU = Locator.by_link_text("My Info", name="my_info_menu")
    USER_DROPDOWN = Locator.by_css(".oxd-userdropdown-tab", name="user_dropdown")
    LOGOUT_LINK = Locator.by_link_text("Logout", name="logout_link")

    LOADED_MARKER = HEADER

    @allure.step("Open Employees")
    def open_employees(self) -> EmployeesPage:
        self.click(self.EMPLOYEES_MENU)
        return EmployeesPage(self.ctx)

    def open_admin(self) -> None:
        self.click(self.ADMIN_MENU)

    def open_my_info(self) -> None:
        self.click(self.MY_INFO_MENU)

    def open_user_menu(self) -> None:
        self.click(self.USER_DROPDOWN)

    @allure.step("Logout")
    def logout(self) -> LoginPage:
        """Log out through the user dropdown. Does not wait for the login page."""
        self.open_user_menu()
        self.click(self.LOGOUT_LINK)
        logger.info("Logout clicked")
        return LoginPage(self.ctx)


__all__ = ["DashboardPage"]
