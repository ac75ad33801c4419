"""
================================================================================
Fake Browser for Unit Tests
================================================================================

In-memory stand-ins for the slice of Playwright's sync API the framework
uses (Page.locator / evaluate / goto / screenshot / wait_for_url /
wait_for_load_state, Locator.count / first / is_visible / is_enabled /
inner_text / fill / clear / click / wait_for), plus a small simulation of
the OrangeHRM login flow and a launcher that hands out fake pages.

Built-in waits never block: pending changes registered in FakePage.on_wait
run first, then the state is checked once and a Playwright TimeoutError is
raised when it does not hold.

Elements are registered under the exact Playwright selector a Locator
produces, so page objects run unchanged against this fake.

================================================================================
"""

from __future__ import annotations

import threading
from pathlib import Path
from typing import Callable, Dict, List, Optional

from playwright.sync_api import Error as PlaywrightError
from playwright.sync_api import TimeoutError as PlaywrightTimeoutError

from hrm_testsuites.ui_testing.framework.locator import Locator
from hrm_testsuites.ui_testing.framework.session import LaunchedBrowser, LaunchOptions
from hrm_testsuites.ui_testing.pages import DashboardPage, EmployeesPage, LoginPage


BASE_URL = "https://hrm.test"
PNG_BYTES = b"\x89PNG\r\n\x1a\n"


class FakeElement:
    def __init__(
        self,
        text: str = "",
        visible: bool = True,
        enabled: bool = True,
        editable: bool = False,
        on_click: Optional[Callable[[], None]] = None,
    ):
        self.text = text
        self.visible = visible
        self.enabled = enabled
        self.editable = editable
        self.value = ""
        self.on_click = on_click
        self.clicks = 0
        self.fills: List[str] = []


class FakeLocator:
    def __init__(self, page: "FakePage", selector: str, index: Optional[int] = None):
        self._page = page
        self.selector = selector
        self._index = index

    def _matches(self) -> List[FakeElement]:
        elements = self._page.elements.get(self.selector, [])
        if self._index is None:
            return list(elements)
        return elements[self._index:self._index + 1]

    def _element(self) -> FakeElement:
        matches = self._matches()
        if not matches:
            raise PlaywrightError(f"No element matches selector {self.selector}")
        return matches[0]

    def count(self) -> int:
        return len(self._matches())

    @property
    def first(self) -> "FakeLocator":
        return FakeLocator(self._page, self.selector, index=0)

    def is_visible(self) -> bool:
        matches = self._matches()
        return bool(matches) and matches[0].visible

    def is_enabled(self) -> bool:
        return self._element().enabled

    def inner_text(self) -> str:
        return self._element().text

    def all_inner_texts(self) -> List[str]:
        return [element.text for element in self._matches()]

    def input_value(self) -> str:
        return self._element().value

    def clear(self) -> None:
        element = self._element()
        if not element.editable:
            raise PlaywrightError(f"Element is not an <input>: {self.selector}")
        element.value = ""

    def fill(self, value: str) -> None:
        element = self._element()
        if not element.editable:
            raise PlaywrightError(f"Element is not an <input>: {self.selector}")
        element.value = value
        element.fills.append(value)

    def wait_for(self, state: str = "visible", timeout: Optional[float] = None) -> None:
        self._page.waits.append((self.selector, state, timeout))
        self._page.run_wait_hooks()
        matches = self._matches()
        reached = {
            "attached": bool(matches),
            "detached": not matches,
            "visible": bool(matches) and matches[0].visible,
            "hidden": not matches or not matches[0].visible,
        }[state]
        if not reached:
            raise PlaywrightTimeoutError(
                f"Timeout {timeout}ms exceeded waiting for {self.selector} to be {state}"
            )

    def click(self) -> None:
        element = self._element()
        if not element.enabled:
            raise PlaywrightError(f"Element is disabled: {self.selector}")
        element.clicks += 1
        if element.on_click is not None:
            element.on_click()


class FakePage:
    def __init__(self, url: str = "about:blank"):
        self.url = url
        self.elements: Dict[str, List[FakeElement]] = {}
        self.ready_state = "complete"
        self.title_text = "OrangeHRM"
        self.default_timeout: Optional[float] = None
        self.default_navigation_timeout: Optional[float] = None
        self.visited: List[str] = []
        self.scripts: List[str] = []
        self.screenshots: List[str] = []
        self.goto_error: Optional[Exception] = None
        self.screenshot_error: Optional[Exception] = None
        self.on_goto: Optional[Callable[[str], None]] = None
        self.on_wait: List[Callable[[], None]] = []
        self.waits: List[tuple] = []
        self.thread_name = threading.current_thread().name

    # element registry

    def add(self, locator: Locator, *elements: FakeElement) -> List[FakeElement]:
        self.elements.setdefault(locator.selector, []).extend(elements)
        return list(elements)

    def remove(self, locator: Locator) -> None:
        self.elements.pop(locator.selector, None)

    def clear(self) -> None:
        self.elements.clear()

    def element(self, locator: Locator) -> FakeElement:
        return self.elements[locator.selector][0]

    def run_wait_hooks(self) -> None:
        hooks, self.on_wait = self.on_wait, []
        for hook in hooks:
            hook()

    # Playwright Page surface

    def locator(self, selector: str) -> FakeLocator:
        return FakeLocator(self, selector)

    def evaluate(self, script: str, arg=None):
        self.scripts.append(script)
        if "document.readyState" in script:
            return self.ready_state
        return arg

    def goto(self, url: str, wait_until: Optional[str] = None, timeout: Optional[float] = None) -> None:
        if self.goto_error is not None:
            raise self.goto_error
        self.url = url
        self.visited.append(url)
        if self.on_goto is not None:
            self.on_goto(url)

    def wait_for_load_state(self, state: str = "load", timeout: Optional[float] = None) -> None:
        self.waits.append(("load_state", state, timeout))
        self.run_wait_hooks()
        if self.ready_state != "complete":
            raise PlaywrightTimeoutError(f"Timeout {timeout}ms exceeded waiting for '{state}'")

    def wait_for_url(self, url, wait_until: Optional[str] = None, timeout: Optional[float] = None) -> None:
        self.waits.append(("url", wait_until, timeout))
        self.run_wait_hooks()
        matched = url(self.url) if callable(url) else url == self.url
        if not matched:
            raise PlaywrightTimeoutError(f"Timeout {timeout}ms exceeded waiting for URL, now {self.url}")

    def title(self) -> str:
        return self.title_text

    def screenshot(self, path: Optional[str] = None, full_page: bool = False) -> bytes:
        if self.screenshot_error is not None:
            raise self.screenshot_error
        if path:
            Path(path).write_bytes(PNG_BYTES)
            self.screenshots.append(path)
        return PNG_BYTES

    def set_default_timeout(self, timeout: float) -> None:
        self.default_timeout = timeout

    def set_default_navigation_timeout(self, timeout: float) -> None:
        self.default_navigation_timeout = timeout


class FakeOrangeHRM:
    """
    Minimal OrangeHRM behavior on top of a FakePage.

    - valid credentials -> dashboard (username is case-insensitive)
    - wrong credentials -> "Invalid credentials" alert
    - empty field(s) -> one "Required" hint per empty field
    """

    def __init__(self, page: FakePage, username: str = "Admin", password: str = "admin123"):
        self.page = page
        self.username = username
        self.password = password
        self.logged_in = False
        self.login_attempts = 0
        self.employees: List[tuple] = []
        page.on_goto = self._on_goto

    def _on_goto(self, url: str) -> None:
        if self.logged_in:
            self.show_dashboard()
        else:
            self.show_login()

    def show_login(self) -> None:
        page = self.page
        page.clear()
        page.url = f"{BASE_URL}{LoginPage.URL_PATH}"
        page.add(LoginPage.USERNAME_INPUT, FakeElement(editable=True))
        page.add(LoginPage.PASSWORD_INPUT, FakeElement(editable=True))
        page.add(LoginPage.LOGIN_BUTTON, FakeElement(text="Login", on_click=self._submit))

    def _submit(self) -> None:
        page = self.page
        self.login_attempts += 1
        page.remove(LoginPage.ERROR_ALERT)
        page.remove(LoginPage.FIELD_ERRORS)

        username = page.element(LoginPage.USERNAME_INPUT).value
        password = page.element(LoginPage.PASSWORD_INPUT).value
        empty = [value for value in (username, password) if not value]
        if empty:
            page.add(LoginPage.FIELD_ERRORS, *[FakeElement(text="Required") for _ in empty])
            return

        if username.lower() == self.username.lower() and password == self.password:
            self.logged_in = True
            self.show_dashboard()
        else:
            page.add(LoginPage.ERROR_ALERT, FakeElement(text="Invalid credentials"))

    def show_dashboard(self) -> None:
        page = self.page
        page.clear()
        page.url = f"{BASE_URL}{DashboardPage.URL_PATH}"
        page.add(DashboardPage.HEADER, FakeElement(text="Dashboard"))
        page.add(DashboardPage.EMPLOYEES_MENU, FakeElement(text="Employees", on_click=self.show_employees))
        page.add(DashboardPage.ADMIN_MENU, FakeElement(text="Admin"))
        page.add(DashboardPage.MY_INFO_MENU, FakeElement(text="My Info"))
        logout = FakeElement(text="Logout", visible=False, on_click=self._logout)

        def open_dropdown() -> None:
            logout.visible = True

        page.add(DashboardPage.USER_DROPDOWN, FakeElement(text="Paul Collings", on_click=open_dropdown))
        page.add(DashboardPage.LOGOUT_LINK, logout)

    def _logout(self) -> None:
        self.logged_in = False
        self.show_login()

    def show_employees(self) -> None:
        page = self.page
        page.clear()
        page.url = f"{BASE_URL}{EmployeesPage.URL_PATH}"
        page.add(EmployeesPage.PAGE_HEADING, FakeElement(text="Employee Information"))
        page.add(EmployeesPage.ADD_EMPLOYEE_BUTTON, FakeElement(text="Add Employee", on_click=self._show_form))
        page.add(EmployeesPage.SEARCH_FIELD, FakeElement(editable=True))
        page.add(EmployeesPage.SEARCH_BUTTON, FakeElement(text="Search", on_click=self._search))

    def _show_form(self) -> None:
        page = self.page
        for locator in (EmployeesPage.FIRST_NAME_INPUT, EmployeesPage.LAST_NAME_INPUT, EmployeesPage.EMPLOYEE_ID_INPUT):
            page.remove(locator)
            page.add(locator, FakeElement(editable=True))
        page.remove(EmployeesPage.SAVE_BUTTON)
        page.add(EmployeesPage.SAVE_BUTTON, FakeElement(text="Save", on_click=self._save))

    def _save(self) -> None:
        page = self.page
        self.employees.append((
            page.element(EmployeesPage.FIRST_NAME_INPUT).value,
            page.element(EmployeesPage.LAST_NAME_INPUT).value,
            page.element(EmployeesPage.EMPLOYEE_ID_INPUT).value,
        ))

    def _search(self) -> None:
        wanted = self.page.element(EmployeesPage.SEARCH_FIELD).value
        self.page.remove(EmployeesPage.EMPLOYEE_TABLE)
        if any(employee[2] == wanted for employee in self.employees):
            self.page.add(EmployeesPage.EMPLOYEE_TABLE, FakeElement(text=wanted))


class FakeContext:
    def __init__(self, close_error: Optional[Exception] = None):
        self.close_error = close_error
        self.closed = 0

    def close(self) -> None:
        self.closed += 1
        if self.close_error is not None:
            raise self.close_error


class FakeLauncher:
    """
    BrowserLauncher handing out FakePages driven by FakeOrangeHRM.

    Attributes:
        launches: Options of every launch, in order
        pages: Pages created, in order
        apps: Simulated applications, aligned with pages
        contexts: Contexts created, aligned with pages
    """

    def __init__(
        self,
        launch_error: Optional[Exception] = None,
        close_error: Optional[Exception] = None,
        goto_error: Optional[Exception] = None,
    ):
        self.launch_error = launch_error
        self.close_error = close_error
        self.goto_error = goto_error
        self.launches: List[LaunchOptions] = []
        self.pages: List[FakePage] = []
        self.apps: List[FakeOrangeHRM] = []
        self.contexts: List[FakeContext] = []
        self._lock = threading.Lock()

    def launch(self, options: LaunchOptions) -> LaunchedBrowser:
        with self._lock:
            self.launches.append(options)
        if self.launch_error is not None:
            raise self.launch_error

        page = FakePage()
        page.goto_error = self.goto_error
        app = FakeOrangeHRM(page)
        context = FakeContext(self.close_error)
        with self._lock:
            self.pages.append(page)
            self.apps.append(app)
            self.contexts.append(context)
        return LaunchedBrowser(page=page, context=context)
