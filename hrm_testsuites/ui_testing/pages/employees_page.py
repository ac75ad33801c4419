"""
================================================================================
Employees Page Object
================================================================================

Employee list and the add-employee form.

================================================================================
"""

from __future__ import annotations

import allure
from loguru import logger

from hrm_testsuites.ui_testing.framework.locator import Locator
from hrm_testsuites.ui_testing.framework.page_base import BasePage


class EmployeesPage(BasePage):
    """Employees page object."""

    URL_PATH = "/web/index.php/pim/viewEmployeeList"
    PAGE_TITLE = "OrangeHRM"

    PAGE_HEADING = Locator.by_xpath("//h6[contains(text(), 'Employee')]", name="employees_heading")
    ADD_EMPLOYEE_BUTTON = Locator.by_link_text("Add Employee", name="add_employee_button")
    EMPLOYEE_TABLE = Locator.by_id("tblEmployee", name="employee_table")
    SEARCH_FIELD = Locator.by_id("empsearch_id", name="employee_id_search")
    SEARCH_BUTTON = Locator.by_id("searchBtn", name="search_button")
    FIRST_NAME_INPUT = Locator.by_id("firstName", name="first_name_input")
    LAST_NAME_INPUT = Locator.by_id("lastName", name="last_name_input")
    EMPLOYEE_ID_INPUT = Locator.by_id("employeeId", name="employee_id_input")
    SAVE_BUTTON = Locator.by_id("btnSave", name="save_button")

    LOADED_MARKER = PAGE_HEADING

    def click_add_employee(self) -> None:
        self.click(self.ADD_EMPLOYEE_BUTTON)

    def enter_first_name(self, first_name: str) -> None:
        self.enter_text(self.FIRST_NAME_INPUT, first_name)

    def enter_last_name(self, last_name: str) -> None:
        self.enter_text(self.LAST_NAME_INPUT, last_name)

    def enter_employee_id(self, employee_id: str) -> None:
        self.enter_text(self.EMPLOYEE_ID_INPUT, employee_id)

    def save_employee(self) -> None:
        self.click(self.SAVE_BUTTON)

    @allure.step("Add employee {first_name} {last_name} ({employee_id})")
    def add_employee(self, first_name: str, last_name: str, employee_id: str) -> None:
        """Open the add form, fill it and save."""
        self.click_add_employee()
        self.enter_first_name(first_name)
        self.enter_last_name(last_name)
        self.enter_employee_id(employee_id)
        self.save_employee()
        logger.info(f"Employee submitted: {first_name} {last_name} ({employee_id})")

    @allure.step("Search employee by id {employee_id}")
    def search_by_id(self, employee_id: str) -> None:
        self.enter_text(self.SEARCH_FIELD, employee_id)
        self.click(self.SEARCH_BUTTON)

    def results_displayed(self) -> bool:
        return self.is_displayed(self.EMPLOYEE_TABLE)


__all__ = ["EmployeesPage"]
