"""
================================================================================
Login Page Object
================================================================================

OrangeHRM login screen.

Behavior:
  - `login()` clears both fields before typing, so repeating it with the same
    arguments leaves the page in the same state
  - `login()` triggers navigation but does not wait for the destination;
    callers check `DashboardPage.is_loaded()` or `error_message()`
  - `error_message()` returns None when no alert appears (no exception flow)

================================================================================
"""

from __future__ import annotations

from typing import List, Optional

import allure
from loguru import logger

from hrm_testsuites.ui_testing.framework.locator import Locator
from hrm_testsuites.ui_testing.framework.page_base import BasePage
from hrm_testsuites.ui_testing.framework.wait_policy import WaitSpec


class LoginPage(BasePage):
    """Login page object."""

    URL_PATH = "/web/index.php/auth/login"
    PAGE_TITLE = "OrangeHRM"

    USERNAME_INPUT = Locator.by_xpath("//input[@name='username']", name="username_input")
    PASSWORD_INPUT = Locator.by_xpath("//input[@name='password']", name="password_input")
    LOGIN_BUTTON = Locator.by_xpath("//button[contains(text(), 'Login')]", name="login_button")
    ERROR_ALERT = Locator.by_xpath("//div[@role='alert']//p", name="error_alert")
    FIELD_ERRORS = Locator.by_css(".oxd-input-field-error-message", name="field_error_message")

    LOADED_MARKER = USERNAME_INPUT

    @allure.step("Open login page")
    def open(self) -> "LoginPage":
        super().open()
        return self

    def is_loaded(self, timeout: Optional[float] = None) -> bool:
        """Whether username, password and login button are all visible. Never raises."""
        try:
            for locator in (self.USERNAME_INPUT, self.PASSWORD_INPUT, self.LOGIN_BUTTON):
                self.wait.visible(locator, timeout)
        except Exception as e:
            logger.warning(f"Login page not displayed: {e}")
            return False
        logger.info("Login page verified")
        return True

    def enter_username(self, username: str) -> None:
        self.enter_text(self.USERNAME_INPUT, username)

    def enter_password(self, password: str) -> None:
        self.enter_text(self.PASSWORD_INPUT, password, sensitive=True)

    def click_login_button(self) -> None:
        self.click(self.LOGIN_BUTTON)

    @allure.step("Login (username={username})")
    def login(self, username: str, password: str) -> None:
        """
        Fill the credentials and submit.

        Raises:
            TimeoutExceededError: A form element never became ready
            ElementNotInteractableError: A form element rejected input
        """
        logger.info(f"Attempting login with username: {username!r}")
        self.enter_username(username)
        self.enter_password(password)
        self.click_login_button()
        logger.info("Login button clicked")

    def error_message(self, timeout: Optional[float] = None) -> Optional[str]:
        """
        Text of the login alert, or None when no alert became visible.

        Args:
            timeout: Seconds to wait; the configured wait timeout when None
        """
        message = self.visible_text(self.ERROR_ALERT, timeout)
        if message is None:
            logger.info("No error message found")
        else:
            logger.info(f"Error message displayed: {message}")
        return message

    def required_field_messages(self, timeout: Optional[float] = None) -> List[str]:
        """Inline validation hints under the form fields, e.g. ["Required", "Required"]."""
        if self.wait.poll(WaitSpec.visible(self.FIELD_ERRORS, timeout)) is None:
            return []
        return self.visible_texts(self.FIELD_ERRORS)


__all__ = ["LoginPage"]
