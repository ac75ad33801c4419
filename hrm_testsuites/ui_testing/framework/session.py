"""
================================================================================
Session Lifecycle Controller
================================================================================

Owns creation, configuration and teardown of one isolated browser session
per test execution unit.

Features:
    - One Playwright instance, browser, context and page per session
    - Per-thread session slot: concurrent units never see each other's session
    - Scoped acquisition (context manager) with release on every exit path
    - Engine switch over Chrome / Firefox / Edge / Safari (WebKit)
    - Explicit launch timeout, implicit element timeout and page-load timeout
    - Best-effort teardown that never masks the test's real outcome

Usage:
    controller = SessionLifecycleController()

    with controller.session(config) as session:
        LoginPage(ExecutionContext(session, config, reporter)).login("Admin", "admin123")

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import re
import threading
import uuid
from contextlib import contextmanager
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional, Protocol

from loguru import logger
from playwright.sync_api import Browser, BrowserContext, Page, Playwright, sync_playwright

from hrm_tools.common import BrowserEngine, Configuration, ensure_directory

from .wait_policy import WaitPolicy


class SetupFailureError(Exception):
    """Raised when a browser session could not be acquired."""
    pass


class TeardownFailureError(Exception):
    """Describes a failed session release. Logged, never raised."""
    pass


class SessionNotAcquiredError(RuntimeError):
    """Raised when a session is used before acquisition or after release."""
    pass


# =============================================================================
# Launching
# =============================================================================

@dataclass(frozen=True)
class LaunchOptions:
    """Everything needed to start one browser."""

    engine: BrowserEngine
    headless: bool = True
    launch_timeout: int = 30
    viewport: Dict[str, int] = field(default_factory=lambda: {"width": 1920, "height": 1080})
    downloads_path: Optional[Path] = None

    @classmethod
    def from_config(cls, config: Configuration) -> "LaunchOptions":
        return cls(
            engine=config.browser_engine,
            headless=config.headless,
            launch_timeout=config.launch_timeout,
            viewport=config.window_size,
            downloads_path=config.download_path,
        )


@dataclass
class LaunchedBrowser:
    """Handles created by a launcher, closed innermost first."""

    page: Page
    context: Optional[BrowserContext] = None
    browser: Optional[Browser] = None
    playwright: Optional[Playwright] = None

    def close(self) -> None:
        """
        Close page context, browser and Playwright driver.

        Every step is attempted; the first error is re-raised at the end.
        """
        errors: List[Exception] = []
        for closer in (
            getattr(self.context, "close", None),
            getattr(self.browser, "close", None),
            getattr(self.playwright, "stop", None),
        ):
            if closer is None:
                continue
            try:
                closer()
            except Exception as e:
                errors.append(e)
        if errors:
            raise errors[0]


class BrowserLauncher(Protocol):
    def launch(self, options: LaunchOptions) -> LaunchedBrowser:
        ...


class PlaywrightLauncher:
    """
    Starts a browser through Playwright's sync API.

    Each call starts its own Playwright driver, so every worker thread owns a
    private driver, browser and context.
    """

    # engine -> (playwright browser type, channel)
    ENGINES: Dict[BrowserEngine, tuple] = {
        BrowserEngine.CHROME: ("chromium", None),
        BrowserEngine.EDGE: ("chromium", "msedge"),
        BrowserEngine.FIREFOX: ("firefox", None),
        BrowserEngine.SAFARI: ("webkit", None),
    }

    CHROMIUM_ARGS: List[str] = [
        "--ignore-certificate-errors",
        "--disable-gpu",
        "--disable-popup-blocking",
    ]

    def launch(self, options: LaunchOptions) -> LaunchedBrowser:
        browser_type_name, channel = self.ENGINES[options.engine]
        playwright = sync_playwright().start()
        try:
            launch_kwargs: Dict[str, Any] = {
                "headless": options.headless,
                "timeout": options.launch_timeout * 1000,
            }
            if channel:
                launch_kwargs["channel"] = channel
            if options.downloads_path:
                launch_kwargs["downloads_path"] = str(options.downloads_path)
            if browser_type_name == "chromium":
                launch_kwargs["args"] = list(self.CHROMIUM_ARGS)
            elif browser_type_name == "firefox" and options.downloads_path:
                launch_kwargs["firefox_user_prefs"] = {
                    "browser.download.folderList": 2,
                    "browser.download.dir": str(options.downloads_path),
                    "browser.helperApps.neverAsk.saveToDisk":
                        "application/pdf,application/x-pdf,application/octet-stream",
                }

            browser = getattr(playwright, browser_type_name).launch(**launch_kwargs)
            context = browser.new_context(
                viewport=options.viewport,
                accept_downloads=True,
                ignore_https_errors=True,
            )
            page = context.new_page()
        except Exception:
            playwright.stop()
            raise

        return LaunchedBrowser(page=page, context=context, browser=browser, playwright=playwright)


# =============================================================================
# Session
# =============================================================================

class BrowserSession:
    """
    One browser instance with its timeouts and capability handles.

    Owned by the thread that acquired it. After release every operation
    raises SessionNotAcquiredError.
    """

    def __init__(
        self,
        launched: LaunchedBrowser,
        config: Configuration,
        wait_timeout: Optional[float] = None,
    ):
        self.session_id = uuid.uuid4().hex
        self.config = config
        self.engine = config.browser_engine
        self.thread_name = threading.current_thread().name
        self.created_at = datetime.now()
        self._launched = launched
        self._closed = False
        self._wait = WaitPolicy(
            launched.page,
            timeout=config.wait_timeout if wait_timeout is None else wait_timeout,
        )

    def __repr__(self) -> str:
        state = "closed" if self._closed else "open"
        return f"BrowserSession(id={self.session_id[:8]}, engine={self.engine.value}, {state})"

    def _ensure_open(self) -> None:
        if self._closed:
            raise SessionNotAcquiredError(
                f"Session {self.session_id[:8]} has been released"
            )

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def page(self) -> Page:
        self._ensure_open()
        return self._launched.page

    @property
    def wait(self) -> WaitPolicy:
        self._ensure_open()
        return self._wait

    @property
    def current_url(self) -> str:
        return self.page.url

    def navigate(self, url: str) -> None:
        """Open a URL and wait for the document to be ready."""
        logger.debug(f"Navigating to: {url}")
        self.page.goto(url, wait_until="domcontentloaded")
        self.wait.document_ready(timeout=self.config.page_load_timeout)

    def execute_script(self, script: str, arg: Any = None) -> Any:
        """Evaluate JavaScript in the page."""
        if arg is None:
            return self.page.evaluate(script)
        return self.page.evaluate(script, arg)

    def capture_screenshot(
        self,
        name: str,
        directory: Optional[Path] = None,
        full_page: bool = True,
    ) -> Optional[Path]:
        """
        Save a screenshot named after a test identifier.

        Failures are logged and swallowed: screenshot capture must never
        affect reporting or the test outcome.

        Returns:
            Path to the PNG, or None when capture failed
        """
        directory = Path(directory or self.config.screenshot_path)
        filepath = directory / f"{_safe_file_name(name)}.png"
        try:
            ensure_directory(directory)
            self.page.screenshot(path=str(filepath), full_page=full_page)
        except Exception as e:
            logger.warning(f"Failed to take screenshot '{name}': {e}")
            return None
        logger.info(f"Screenshot saved at: {filepath}")
        return filepath

    def close(self) -> None:
        """Close all browser resources. Idempotent."""
        if self._closed:
            return
        self._closed = True
        self._launched.close()


def _safe_file_name(name: str) -> str:
    return re.sub(r"[^A-Za-z0-9_.-]+", "_", name).strip("_") or "screenshot"


# =============================================================================
# Controller
# =============================================================================

class SessionLifecycleController:
    """
    Provisions and tears down one browser session per execution unit.

    The controller itself is shared; the session slot is thread-local.
    """

    def __init__(self, launcher: Optional[BrowserLauncher] = None):
        """
        Args:
            launcher: Browser launcher; PlaywrightLauncher when omitted
        """
        self._launcher = launcher or PlaywrightLauncher()
        self._local = threading.local()

    def acquire_session(self, config: Configuration) -> BrowserSession:
        """
        Launch and configure a browser for the calling thread.

        Applies window size, implicit element timeout and page-load timeout,
        then opens ``application.url`` when configured.

        Raises:
            SetupFailureError: Launch or initial navigation failed, or the
                thread already holds a session
        """
        if self.has_session():
            raise SetupFailureError(
                f"Thread '{threading.current_thread().name}' already holds a session; "
                f"release it before acquiring another"
            )

        options = LaunchOptions.from_config(config)
        logger.info(
            f"Launching {options.engine.value} (headless={options.headless}) "
            f"on thread {threading.current_thread().name}"
        )

        try:
            launched = self._launcher.launch(options)
        except Exception as e:
            logger.error(f"Browser launch failed: {e}")
            raise SetupFailureError(
                f"Failed to launch {options.engine.value}: {e}"
            ) from e

        session = BrowserSession(launched, config)
        try:
            launched.page.set_default_timeout(config.implicit_timeout * 1000)
            launched.page.set_default_navigation_timeout(config.page_load_timeout * 1000)
            if config.application_url:
                session.navigate(config.application_url)
        except Exception as e:
            logger.error(f"Session initialization failed: {e}")
            self._close_quietly(session)
            raise SetupFailureError(
                f"Failed to initialize {options.engine.value} session: {e}"
            ) from e

        self._local.session = session
        logger.info(f"Session {session.session_id[:8]} stored for thread {session.thread_name}")
        return session

    def release_session(self, session: Optional[BrowserSession] = None) -> None:
        """
        Tear down a session. Never raises.

        The calling thread's slot is cleared, even when closing the browser
        fails, if it holds this session. A stale handle released on a thread
        that now owns another session leaves that session in place.
        """
        current = getattr(self._local, "session", None)
        session = session or current
        logger.info("========== Session Teardown Started ==========")
        try:
            if session is not None:
                session.close()
                logger.info(f"Session {session.session_id[:8]} closed successfully")
        except Exception as e:
            failure = TeardownFailureError(f"Error during teardown: {e}")
            logger.warning(str(failure))
        finally:
            if current is session:
                self._local.session = None
            logger.info("========== Session Teardown Completed ==========")

    def current(self) -> BrowserSession:
        """
        Session of the calling thread.

        Raises:
            SessionNotAcquiredError: No session acquired, or it was released
        """
        session = getattr(self._local, "session", None)
        if session is None or session.closed:
            raise SessionNotAcquiredError(
                "Browser session not initialized for this thread. Call acquire_session() first."
            )
        return session

    def has_session(self) -> bool:
        session = getattr(self._local, "session", None)
        return session is not None and not session.closed

    @contextmanager
    def session(self, config: Configuration) -> Iterator[BrowserSession]:
        """Scoped acquisition: the session is released on every exit path."""
        session = self.acquire_session(config)
        try:
            yield session
        finally:
            self.release_session(session)

    def _close_quietly(self, session: BrowserSession) -> None:
        try:
            session.close()
        except Exception as e:
            logger.warning(f"Cleanup after failed setup raised: {e}")


__all__ = [
    "SetupFailureError",
    "TeardownFailureError",
    "SessionNotAcquiredError",
    "LaunchOptions",
    "LaunchedBrowser",
    "BrowserLauncher",
    "PlaywrightLauncher",
    "BrowserSession",
    "SessionLifecycleController",
]
