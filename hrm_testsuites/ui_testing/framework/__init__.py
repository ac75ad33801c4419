"""
================================================================================
UI Testing Framework
================================================================================

Playwright-based UI automation framework for the OrangeHRM application.

Components:
    - locator: Immutable element locators
    - wait_policy: Condition-based waits with explicit timeouts
    - session: Per-thread browser session lifecycle
    - context: Explicit per-test execution context
    - page_base: Base page object for common operations
    - listener: Execution events to result reporter binding
    - pytest_plugin: pytest hooks feeding the listener
    - suite_runner: Thread-pool runner for test units

Author: Automation Team
License: MIT
================================================================================
"""

from .locator import By, Locator
from .wait_policy import TimeoutExceededError, WaitCondition, WaitPolicy, WaitSpec
from .session import (
    BrowserSession,
    LaunchedBrowser,
    LaunchOptions,
    PlaywrightLauncher,
    SessionLifecycleController,
    SessionNotAcquiredError,
    SetupFailureError,
    TeardownFailureError,
)
from .context import ExecutionContext
from .page_base import BasePage, ElementNotInteractableError
from .listener import ExecutionRecord, LifecycleListener, format_cause_chain
from .pytest_plugin import ReportingPlugin
from .suite_runner import ParallelSuiteRunner, TestUnit, run_units

__all__ = [
    "By",
    "Locator",
    "TimeoutExceededError",
    "WaitCondition",
    "WaitPolicy",
    "WaitSpec",
    "BrowserSession",
    "LaunchedBrowser",
    "LaunchOptions",
    "PlaywrightLauncher",
    "SessionLifecycleController",
    "SessionNotAcquiredError",
    "SetupFailureError",
    "TeardownFailureError",
    "ExecutionContext",
    "BasePage",
    "ElementNotInteractableError",
    "ExecutionRecord",
    "LifecycleListener",
    "format_cause_chain",
    "ReportingPlugin",
    "ParallelSuiteRunner",
    "TestUnit",
    "run_units",
]
