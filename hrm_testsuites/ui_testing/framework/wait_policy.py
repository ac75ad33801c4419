"""
================================================================================
Wait Policy
================================================================================

Waits until a browser condition holds or a timeout elapses, turning
asynchronous UI rendering into a deterministic pass / TimeoutExceededError.

Element state, URL and load-state conditions use Playwright's own waits
(Locator.wait_for, Page.wait_for_url, Page.wait_for_load_state). CLICKABLE
and CONTAINS_TEXT have no single Playwright wait and are polled. A timeout of
0 probes the page once without waiting, since Playwright reads 0 as "no
timeout".

Every element interaction is preceded by an explicit wait. Fixed sleeps are
not a substitute: pause() exists for the rare unconditional delay and logs a
warning each time it is used.

Supported conditions:
    - VISIBLE              element present and visible        -> Locator
    - CLICKABLE            element visible and enabled         -> Locator
    - PRESENT              element attached to the DOM         -> Locator
    - INVISIBLE_OR_ABSENT  element hidden or not in the DOM    -> True
    - CONTAINS_TEXT        element text contains a substring   -> True
    - DOCUMENT_READY       document.readyState == "complete"   -> True
    - URL_CONTAINS         current URL contains a substring    -> True

Usage:
    wait = WaitPolicy(page, timeout=10)
    button = wait.clickable(LOGIN_BUTTON)
    button.click()

    wait.url_contains("/dashboard")
    message = wait.poll(WaitSpec.visible(ERROR_ALERT, timeout=3))  # Optional

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Optional, Tuple, Union

from loguru import logger
from playwright.sync_api import Error as PlaywrightError
from playwright.sync_api import Locator as ElementHandle
from playwright.sync_api import Page

from .locator import Locator


DEFAULT_POLL_INTERVAL = 0.5


class TimeoutExceededError(Exception):
    """Raised when a wait condition never became true."""

    def __init__(self, description: str, timeout: float):
        super().__init__(
            f"Timed out after {timeout}s waiting for {description}"
        )
        self.description = description
        self.timeout = timeout


class WaitCondition(str, Enum):
    VISIBLE = "visible"
    CLICKABLE = "clickable"
    PRESENT = "present"
    INVISIBLE_OR_ABSENT = "invisible_or_absent"
    CONTAINS_TEXT = "contains_text"
    DOCUMENT_READY = "document_ready"
    URL_CONTAINS = "url_contains"


_ELEMENT_CONDITIONS = {
    WaitCondition.VISIBLE,
    WaitCondition.CLICKABLE,
    WaitCondition.PRESENT,
    WaitCondition.INVISIBLE_OR_ABSENT,
    WaitCondition.CONTAINS_TEXT,
}

# conditions without a matching Playwright wait
_POLLED_CONDITIONS = {WaitCondition.CLICKABLE, WaitCondition.CONTAINS_TEXT}

_ELEMENT_STATES = {
    WaitCondition.VISIBLE: "visible",
    WaitCondition.PRESENT: "attached",
    WaitCondition.INVISIBLE_OR_ABSENT: "hidden",
}


@dataclass(frozen=True)
class WaitSpec:
    """
    What to wait for and for how long.

    Attributes:
        condition: Condition kind
        timeout: Seconds to wait; None uses the policy default
        locator: Target element for element conditions
        text: Expected substring for CONTAINS_TEXT / URL_CONTAINS
    """

    condition: WaitCondition
    timeout: Optional[float] = None
    locator: Optional[Locator] = None
    text: Optional[str] = None

    def __post_init__(self) -> None:
        if self.condition in _ELEMENT_CONDITIONS and self.locator is None:
            raise ValueError(f"{self.condition.value} requires a locator")
        if self.condition in (WaitCondition.CONTAINS_TEXT, WaitCondition.URL_CONTAINS) and self.text is None:
            raise ValueError(f"{self.condition.value} requires text")
        if self.timeout is not None and self.timeout < 0:
            raise ValueError("timeout must not be negative")

    def describe(self) -> str:
        if self.condition is WaitCondition.DOCUMENT_READY:
            return "document ready state 'complete'"
        if self.condition is WaitCondition.URL_CONTAINS:
            return f"URL to contain '{self.text}'"
        if self.condition is WaitCondition.CONTAINS_TEXT:
            return f"'{self.locator}' to contain text '{self.text}'"
        if self.condition is WaitCondition.INVISIBLE_OR_ABSENT:
            return f"'{self.locator}' to be invisible or absent"
        return f"'{self.locator}' to be {self.condition.value}"

    # =========================================================================
    # Factories
    # =========================================================================

    @classmethod
    def visible(cls, locator: Locator, timeout: Optional[float] = None) -> "WaitSpec":
        return cls(WaitCondition.VISIBLE, timeout, locator)

    @classmethod
    def clickable(cls, locator: Locator, timeout: Optional[float] = None) -> "WaitSpec":
        return cls(WaitCondition.CLICKABLE, timeout, locator)

    @classmethod
    def present(cls, locator: Locator, timeout: Optional[float] = None) -> "WaitSpec":
        return cls(WaitCondition.PRESENT, timeout, locator)

    @classmethod
    def invisible(cls, locator: Locator, timeout: Optional[float] = None) -> "WaitSpec":
        return cls(WaitCondition.INVISIBLE_OR_ABSENT, timeout, locator)

    @classmethod
    def contains_text(cls, locator: Locator, text: str, timeout: Optional[float] = None) -> "WaitSpec":
        return cls(WaitCondition.CONTAINS_TEXT, timeout, locator, text)

    @classmethod
    def document_ready(cls, timeout: Optional[float] = None) -> "WaitSpec":
        return cls(WaitCondition.DOCUMENT_READY, timeout)

    @classmethod
    def url_contains(cls, fragment: str, timeout: Optional[float] = None) -> "WaitSpec":
        return cls(WaitCondition.URL_CONTAINS, timeout, text=fragment)


WaitResult = Union[ElementHandle, bool]


class WaitPolicy:
    """
    Condition-based waits bound to one browser page.

    A WaitPolicy belongs to the session that created it and is never shared
    between worker threads.
    """

    def __init__(
        self,
        page: Page,
        timeout: float = 10,
        poll_interval: float = DEFAULT_POLL_INTERVAL,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ):
        """
        Args:
            page: Playwright page to probe
            timeout: Default timeout in seconds
            poll_interval: Delay between probes in seconds
            clock: Monotonic clock (injectable for tests)
            sleep: Sleep function (injectable for tests)
        """
        self.page = page
        self.timeout = timeout
        self.poll_interval = poll_interval
        self._clock = clock
        self._sleep = sleep

    # =========================================================================
    # Core contract
    # =========================================================================

    def wait_until(self, spec: WaitSpec) -> WaitResult:
        """
        Wait until the condition holds.

        Args:
            spec: Condition and timeout

        Returns:
            The resolved element for element conditions, True otherwise

        Raises:
            TimeoutExceededError: Condition still false when the timeout elapsed
        """
        timeout = self.timeout if spec.timeout is None else spec.timeout
        ok, result, last_error = self._resolve(spec, timeout)
        if ok:
            return result

        logger.debug(f"Wait failed: {spec.describe()} ({timeout}s)")
        raise TimeoutExceededError(spec.describe(), timeout) from last_error

    def poll(self, spec: WaitSpec) -> Optional[WaitResult]:
        """
        Like wait_until(), but an unmet condition yields None.

        Use for expected-absent cases (e.g. "is there an error message?").
        """
        timeout = self.timeout if spec.timeout is None else spec.timeout
        ok, result, _ = self._resolve(spec, timeout)
        return result if ok else None

    def _resolve(
        self,
        spec: WaitSpec,
        timeout: float,
    ) -> Tuple[bool, Any, Optional[BaseException]]:
        if timeout == 0 or spec.condition in _POLLED_CONDITIONS:
            return self._poll_until(spec, timeout)
        try:
            return True, self._playwright_wait(spec, timeout * 1000), None
        except PlaywrightError as e:
            # playwright TimeoutError subclasses Error
            return False, None, e

    def _playwright_wait(self, spec: WaitSpec, timeout_ms: float) -> WaitResult:
        condition = spec.condition

        if condition is WaitCondition.DOCUMENT_READY:
            self.page.wait_for_load_state("load", timeout=timeout_ms)
            return True
        if condition is WaitCondition.URL_CONTAINS:
            self.page.wait_for_url(
                lambda url: spec.text in url,
                wait_until="commit",
                timeout=timeout_ms,
            )
            return True

        element = self.page.locator(spec.locator.selector).first
        element.wait_for(state=_ELEMENT_STATES[condition], timeout=timeout_ms)
        if condition is WaitCondition.INVISIBLE_OR_ABSENT:
            return True
        return element

    def _poll_until(
        self,
        spec: WaitSpec,
        timeout: float,
    ) -> Tuple[bool, Any, Optional[BaseException]]:
        deadline = self._clock() + timeout
        last_error: Optional[BaseException] = None

        while True:
            try:
                ok, result = self._probe(spec)
                if ok:
                    return True, result, None
            except PlaywrightError as e:
                # detached / navigating elements count as "not yet"
                last_error = e

            remaining = deadline - self._clock()
            if remaining <= 0:
                return False, None, last_error
            self._sleep(min(self.poll_interval, remaining))

    def _probe(self, spec: WaitSpec) -> Tuple[bool, Any]:
        condition = spec.condition

        if condition is WaitCondition.DOCUMENT_READY:
            return self.page.evaluate("document.readyState") == "complete", True
        if condition is WaitCondition.URL_CONTAINS:
            return spec.text in (self.page.url or ""), True

        matches = self.page.locator(spec.locator.selector)
        present = matches.count() > 0
        element = matches.first

        if condition is WaitCondition.PRESENT:
            return present, element
        if condition is WaitCondition.INVISIBLE_OR_ABSENT:
            return (not present or not element.is_visible()), True
        if condition is WaitCondition.CONTAINS_TEXT:
            return present and spec.text in (element.inner_text() or ""), True

        visible = present and element.is_visible()
        if condition is WaitCondition.VISIBLE:
            return visible, element
        return visible and element.is_enabled(), element

    # =========================================================================
    # Convenience
    # =========================================================================

    def visible(self, locator: Locator, timeout: Optional[float] = None) -> ElementHandle:
        return self.wait_until(WaitSpec.visible(locator, timeout))

    def clickable(self, locator: Locator, timeout: Optional[float] = None) -> ElementHandle:
        return self.wait_until(WaitSpec.clickable(locator, timeout))

    def present(self, locator: Locator, timeout: Optional[float] = None) -> ElementHandle:
        return self.wait_until(WaitSpec.present(locator, timeout))

    def invisible(self, locator: Locator, timeout: Optional[float] = None) -> bool:
        return self.wait_until(WaitSpec.invisible(locator, timeout))

    def text_present(self, locator: Locator, text: str, timeout: Optional[float] = None) -> bool:
        return self.wait_until(WaitSpec.contains_text(locator, text, timeout))

    def document_ready(self, timeout: Optional[float] = None) -> bool:
        return self.wait_until(WaitSpec.document_ready(timeout))

    def url_contains(self, fragment: str, timeout: Optional[float] = None) -> bool:
        return self.wait_until(WaitSpec.url_contains(fragment, timeout))

    def pause(self, seconds: float) -> None:
        """Unconditional delay. Prefer wait_until() on an observable signal."""
        logger.warning(f"Fixed pause of {seconds}s; prefer a condition-based wait")
        self._sleep(seconds)


__all__ = [
    "TimeoutExceededError",
    "WaitCondition",
    "WaitSpec",
    "WaitPolicy",
]
