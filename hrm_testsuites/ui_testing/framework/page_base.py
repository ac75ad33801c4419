"""
================================================================================
Base Page Object
================================================================================

Foundation class for Page Object Model implementation.

Provides:
    - Navigation relative to the configured application URL
    - Wait-first element interactions (clear before typing)
    - Safe boolean probes that never raise
    - Optional-text lookups for expected-absent elements
    - Screenshot utilities

Page Objects declare their Locators once, on the class, and expose only
behavior-level operations to Test Cases.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional

import allure
from loguru import logger
from playwright.sync_api import Error as PlaywrightError
from playwright.sync_api import Page

from hrm_tools.report_tools.allure_utils import attach_screenshot

from .context import ExecutionContext
from .locator import Locator
from .wait_policy import WaitPolicy, WaitSpec


class ElementNotInteractableError(Exception):
    """Raised when an element was found but could not be operated."""
    pass


class BasePage:
    """
    Base class for all page objects.

    Subclasses declare their Locators as class attributes and set
    LOADED_MARKER to the element whose visibility proves the page is rendered.

    Usage:
        class LoginPage(BasePage):
            URL_PATH = "/web/index.php/auth/login"
            USERNAME_INPUT = Locator.by_name("username", name="username_input")
            LOADED_MARKER = USERNAME_INPUT

            def enter_username(self, username: str) -> None:
                self.enter_text(self.USERNAME_INPUT, username)
    """

    # Override in subclasses
    URL_PATH: str = "/"
    PAGE_TITLE: str = ""
    LOADED_MARKER: Optional[Locator] = None

    def __init__(self, ctx: ExecutionContext):
        """
        Initialize page object.

        Args:
            ctx: Execution context of the running test unit
        """
        self.ctx = ctx
        self.session = ctx.session
        self.reporter = ctx.reporter
        self.base_url = (ctx.config.application_url or "").rstrip("/")

    @property
    def page(self) -> Page:
        return self.session.page

    @property
    def wait(self) -> WaitPolicy:
        return self.session.wait

    @property
    def url(self) -> str:
        """Get full page URL."""
        return f"{self.base_url}{self.URL_PATH}"

    def open(self) -> "BasePage":
        """Navigate to this page."""
        with allure.step(f"Navigate to {self.URL_PATH}"):
            self.session.navigate(self.url)
        return self

    # =========================================================================
    # Probes
    # =========================================================================

    def is_loaded(self, timeout: Optional[float] = None) -> bool:
        """
        Whether the page is rendered. Never raises.

        Args:
            timeout: Seconds to wait for the marker; policy default when None
        """
        if self.LOADED_MARKER is None:
            return False
        try:
            self.wait.visible(self.LOADED_MARKER, timeout)
            return True
        except Exception as e:
            logger.debug(f"{type(self).__name__} not loaded: {e}")
            return False

    def is_displayed(self, locator: Locator, timeout: Optional[float] = None) -> bool:
        """Whether an element becomes visible within the timeout. Never raises."""
        try:
            return self.wait.poll(WaitSpec.visible(locator, timeout)) is not None
        except Exception as e:
            logger.debug(f"Visibility probe for '{locator}' failed: {e}")
            return False

    def visible_text(self, locator: Locator, timeout: Optional[float] = None) -> Optional[str]:
        """Text of an element if it becomes visible, otherwise None."""
        element = self.wait.poll(WaitSpec.visible(locator, timeout))
        if element is None:
            return None
        return (element.inner_text() or "").strip()

    def visible_texts(self, locator: Locator) -> List[str]:
        """Texts of all elements currently matching a locator."""
        texts = self.page.locator(locator.selector).all_inner_texts()
        return [text.strip() for text in texts if text and text.strip()]

    # =========================================================================
    # Interactions
    # =========================================================================

    def enter_text(self, locator: Locator, text: str, sensitive: bool = False) -> None:
        """
        Clear an input and type into it, after waiting for visibility.

        Raises:
            TypeError: text is None
            TimeoutExceededError: Element never became visible
            ElementNotInteractableError: Element could not be edited
        """
        if text is None:
            raise TypeError(f"Text for '{locator}' must be a string, got None")
        shown = "*" * len(text) if sensitive else text
        with allure.step(f"Fill {locator}: {shown}"):
            element = self.wait.visible(locator)
            try:
                element.clear()
                element.fill(text)
            except PlaywrightError as e:
                raise ElementNotInteractableError(
                    f"Cannot type into '{locator}': {e}"
                ) from e
            logger.debug(f"Entered text into {locator}: {shown}")

    def click(self, locator: Locator) -> None:
        """
        Click an element after waiting for it to be clickable.

        Raises:
            TimeoutExceededError: Element never became clickable
            ElementNotInteractableError: Click was rejected
        """
        with allure.step(f"Click: {locator}"):
            element = self.wait.clickable(locator)
            try:
                element.click()
            except PlaywrightError as e:
                raise ElementNotInteractableError(
                    f"Cannot click '{locator}': {e}"
                ) from e
            logger.debug(f"Clicked: {locator}")

    def get_text(self, locator: Locator) -> str:
        """Text content of a visible element."""
        element = self.wait.visible(locator)
        return (element.inner_text() or "").strip()

    def page_title(self) -> str:
        return self.page.title()

    # =========================================================================
    # Screenshot Utilities
    # =========================================================================

    def screenshot(self, name: str, attach_to_allure: bool = True) -> Optional[Path]:
        """
        Take a screenshot named after the test and optionally attach it.

        Returns:
            Path to saved screenshot, or None when capture failed
        """
        filepath = self.session.capture_screenshot(name)
        if filepath is not None and attach_to_allure:
            attach_screenshot(filepath, name=name)
        return filepath


__all__ = [
    "BasePage",
    "ElementNotInteractableError",
]
