"""
================================================================================
Lifecycle Listener
================================================================================

Translates test execution events into Result Reporter calls, so test cases
never talk to reporting directly.

Events:
    on_suite_start                -> reporter.initialize()
    on_test_start                 -> reporter.start_test()
    on_test_success               -> PASSED
    on_test_failure               -> FAILED (message + full cause chain)
    on_test_skipped               -> SKIPPED (skip reason)
    on_test_passed_with_warnings  -> PASSED_WITH_WARNINGS
    on_suite_finish               -> reporter.flush()

The listener holds no state besides the reporter reference; everything it
needs arrives in the ExecutionRecord of each event.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import traceback
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Dict, List, Optional

from loguru import logger

from hrm_tools.report_tools import FailureDetail, Outcome, ReportSummary, ResultReporter
from hrm_tools.report_tools.allure_utils import attach_failure


@dataclass
class ExecutionRecord:
    """
    What the test framework observed about one test.

    Attributes:
        name: Test identifier
        description: Human readable description
        started_at: Start timestamp
        finished_at: End timestamp, set when the outcome is known
        error: Raised exception, when the test failed
        failure_text: Preformatted failure text when no exception object exists
        skip_reason: Reason reported for a skip
        warning: Note attached to a pass with warnings
    """

    name: str
    description: str = ""
    started_at: datetime = field(default_factory=datetime.now)
    finished_at: Optional[datetime] = None
    error: Optional[BaseException] = None
    failure_text: str = ""
    skip_reason: str = ""
    warning: str = ""

    @property
    def duration_ms(self) -> Optional[float]:
        if self.finished_at is None:
            return None
        return (self.finished_at - self.started_at).total_seconds() * 1000


def format_cause_chain(error: BaseException) -> str:
    """
    Serialize an exception with its whole __cause__ / __context__ chain.

    Each link is rendered with its traceback, outermost exception first.
    """
    parts: List[str] = []
    seen = set()
    current: Optional[BaseException] = error
    while current is not None and id(current) not in seen:
        seen.add(id(current))
        parts.append("".join(
            traceback.format_exception(type(current), current, current.__traceback__, chain=False)
        ).rstrip())
        if current.__cause__ is not None:
            current = current.__cause__
        elif not current.__suppress_context__:
            current = current.__context__
        else:
            current = None
    return "\n\nCaused by:\n".join(parts)


def _error_message(error: BaseException) -> str:
    message = str(error).strip()
    return f"{type(error).__name__}: {message}" if message else type(error).__name__


class LifecycleListener:
    """
    Binds execution events to a ResultReporter.

    Usage:
        listener = LifecycleListener(reporter)
        listener.on_suite_start()

        record = ExecutionRecord("test_valid_login")
        listener.on_test_start(record)
        ...
        listener.on_test_success(record)

        listener.on_suite_finish()
    """

    def __init__(self, reporter: ResultReporter):
        self.reporter = reporter

    # =========================================================================
    # Suite events
    # =========================================================================

    def on_suite_start(self, system_info: Optional[Dict[str, str]] = None) -> None:
        logger.info("========== Test Suite Started ==========")
        self.reporter.initialize(system_info)

    def on_suite_finish(self) -> Path:
        summary: ReportSummary = self.reporter.summary()
        logger.info(
            f"========== Test Suite Finished: {summary.total} tests, "
            f"{summary.passed} passed, {summary.failed} failed, "
            f"{summary.skipped} skipped, {summary.passed_with_warnings} with warnings =========="
        )
        return self.reporter.flush()

    # =========================================================================
    # Test events
    # =========================================================================

    def on_test_start(self, record: ExecutionRecord) -> None:
        logger.info(f"Test Started: {record.name}")
        self.reporter.start_test(record.name, record.description)

    def on_test_success(self, record: ExecutionRecord) -> None:
        self._stamp(record)
        logger.info(f"Test Passed: {record.name} ({record.duration_ms:.0f} ms)")
        self.reporter.log_pass(f"Test Passed: {record.name}")
        self.reporter.finish_test(Outcome.PASSED, record.duration_ms)

    def on_test_failure(self, record: ExecutionRecord) -> None:
        self._stamp(record)
        if record.error is not None:
            message = _error_message(record.error)
            cause_chain = format_cause_chain(record.error)
        else:
            text = record.failure_text.strip() or "Unknown failure"
            message = text.splitlines()[-1]
            cause_chain = text

        logger.error(f"Test Failed: {record.name} - {message}")
        self.reporter.log_fail(f"Test Failed: {record.name}")
        self.reporter.log_fail(message)
        self.reporter.finish_test(
            Outcome.FAILED,
            record.duration_ms,
            FailureDetail(message=message, cause_chain=cause_chain),
        )
        attach_failure(record.name, message, cause_chain)

    def on_test_skipped(self, record: ExecutionRecord) -> None:
        self._stamp(record)
        reason = record.skip_reason or "no reason given"
        logger.warning(f"Test Skipped: {record.name} - {reason}")
        self.reporter.log_skip(f"Test Skipped: {record.name}")
        self.reporter.log_skip(f"Reason: {reason}")
        self.reporter.finish_test(Outcome.SKIPPED, record.duration_ms)

    def on_test_passed_with_warnings(self, record: ExecutionRecord) -> None:
        self._stamp(record)
        logger.warning(f"Test Passed With Warnings: {record.name}")
        self.reporter.log_warning(f"Test Passed With Warnings: {record.name}")
        if record.warning:
            self.reporter.log_warning(record.warning)
        self.reporter.finish_test(Outcome.PASSED_WITH_WARNINGS, record.duration_ms)

    @staticmethod
    def _stamp(record: ExecutionRecord) -> None:
        if record.finished_at is None:
            record.finished_at = datetime.now()


__all__ = [
    "ExecutionRecord",
    "LifecycleListener",
    "format_cause_chain",
]
