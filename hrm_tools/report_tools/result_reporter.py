"""
================================================================================
Result Reporter
================================================================================

Thread-safe sink that aggregates per-test outcomes and log lines into a
single static HTML report.

State machine per test:

    Unstarted --start_test()--> Started --finish_test()--> terminal

Terminal outcomes are PASSED, FAILED, SKIPPED and PASSED_WITH_WARNINGS. A
terminal transition happens at most once; later attempts are ignored.

Concurrency:
    - The aggregate store is shared by all worker threads; every mutation
      goes through a single lock.
    - The "current test" pointer is thread-local, so log lines from one
      worker never land in another worker's entry.

Known gap:
    A test that started but never reached a terminal outcome (e.g. the
    worker crashed) is left out of the flushed report. It is logged as a
    warning at flush time, never reported as passed.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import platform
import threading
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional

from loguru import logger

from hrm_tools.common import ensure_directory
from hrm_tools.report_tools.html_report import render_report


REPORT_FILE_NAME = "UIAutomationReport.html"


class Outcome(str, Enum):
    """Outcome of a single test."""

    STARTED = "started"
    PASSED = "passed"
    FAILED = "failed"
    SKIPPED = "skipped"
    PASSED_WITH_WARNINGS = "passed_with_warnings"

    @property
    def is_terminal(self) -> bool:
        return self is not Outcome.STARTED


class LogLevel(str, Enum):
    PASS = "pass"
    FAIL = "fail"
    INFO = "info"
    WARNING = "warning"
    SKIP = "skip"


@dataclass(frozen=True)
class LogEntry:
    level: LogLevel
    message: str
    timestamp: datetime = field(default_factory=datetime.now)


@dataclass(frozen=True)
class FailureDetail:
    """Failure message plus the serialized cause chain."""

    message: str
    cause_chain: str = ""


@dataclass
class ReportEntry:
    """One test in the report."""

    name: str
    description: str = ""
    outcome: Outcome = Outcome.STARTED
    thread_name: str = ""
    started_at: datetime = field(default_factory=datetime.now)
    duration_ms: Optional[float] = None
    failure: Optional[FailureDetail] = None
    logs: List[LogEntry] = field(default_factory=list)


@dataclass
class ReportSummary:
    """Summary of the terminal outcomes in a report."""

    total: int = 0
    passed: int = 0
    failed: int = 0
    skipped: int = 0
    passed_with_warnings: int = 0
    incomplete: int = 0

    @property
    def pass_rate(self) -> float:
        """Calculate pass rate percentage."""
        if self.total == 0:
            return 0.0
        return ((self.passed + self.passed_with_warnings) / self.total) * 100

    def to_dict(self) -> Dict[str, Any]:
        return {
            "total": self.total,
            "passed": self.passed,
            "failed": self.failed,
            "skipped": self.skipped,
            "passed_with_warnings": self.passed_with_warnings,
            "incomplete": self.incomplete,
            "pass_rate": f"{self.pass_rate:.2f}%",
        }


class ResultReporter:
    """
    Process-wide report sink, passed explicitly to listeners and test cases.

    Usage:
        reporter = ResultReporter(report_dir=Path("reports"))
        reporter.initialize({"Environment": "QA"})

        reporter.start_test("test_valid_login", "Valid credentials reach dashboard")
        reporter.log_pass("Login page loaded successfully")
        reporter.finish_test(Outcome.PASSED, duration_ms=1520)

        report_file = reporter.flush()
    """

    def __init__(
        self,
        report_dir: Path = Path("reports"),
        title: str = "OrangeHRM UI Automation Report",
        report_name: str = "UI Test Execution Report",
    ):
        self.report_dir = Path(report_dir)
        self.title = title
        self.report_name = report_name

        self._lock = threading.Lock()
        self._local = threading.local()
        self._entries: List[ReportEntry] = []
        self._system_info: Dict[str, str] = {}
        self._initialized = False
        self._report_file: Optional[Path] = None
        self._flushed = False

    # =========================================================================
    # Initialization
    # =========================================================================

    def initialize(self, system_info: Optional[Dict[str, str]] = None) -> None:
        """
        One-time setup. Later calls only merge extra system info.

        Args:
            system_info: Key/value pairs shown in the report header
        """
        with self._lock:
            self._ensure_initialized()
            if system_info:
                self._system_info.update({k: str(v) for k, v in system_info.items()})

    def _ensure_initialized(self) -> None:
        # caller holds the lock
        if self._initialized:
            return
        timestamp = datetime.now().strftime("%Y-%m-%d_%H-%M-%S")
        self._report_file = self.report_dir / f"{timestamp}_{REPORT_FILE_NAME}"
        self._system_info.update({
            "OS": platform.platform(),
            "Python Version": platform.python_version(),
            "Framework": "Playwright + pytest + Loguru",
        })
        self._initialized = True
        logger.debug(f"Result reporter initialized: {self._report_file}")

    @property
    def initialized(self) -> bool:
        return self._initialized

    @property
    def report_file(self) -> Optional[Path]:
        return self._report_file

    @property
    def flushed(self) -> bool:
        return self._flushed

    def set_system_info(self, key: str, value: Any) -> None:
        with self._lock:
            self._ensure_initialized()
            self._system_info[key] = str(value)

    # =========================================================================
    # Test lifecycle
    # =========================================================================

    def start_test(self, name: str, description: str = "") -> ReportEntry:
        """
        Create a Started entry and bind it to the calling thread.

        Args:
            name: Test name
            description: Human readable description

        Returns:
            The new ReportEntry
        """
        entry = ReportEntry(
            name=name,
            description=description or f"Test: {name}",
            thread_name=threading.current_thread().name,
        )
        entry.logs.append(LogEntry(LogLevel.INFO, f"Test Case Started: {name}"))

        with self._lock:
            self._ensure_initialized()
            self._entries.append(entry)

        self._local.current = entry
        return entry

    def finish_test(
        self,
        outcome: Outcome,
        duration_ms: Optional[float] = None,
        failure: Optional[FailureDetail] = None,
    ) -> Optional[ReportEntry]:
        """
        Record the terminal outcome of the calling thread's current test.

        Returns:
            The finished entry, or None when there was no Started test
        """
        if not outcome.is_terminal:
            raise ValueError(f"Not a terminal outcome: {outcome}")

        entry = self.current_test()
        if entry is None:
            logger.debug(f"Dropped terminal outcome {outcome.value}: no active test on this thread")
            return None

        with self._lock:
            entry.outcome = outcome
            entry.duration_ms = duration_ms
            entry.failure = failure

        self._local.current = None
        return entry

    def current_test(self) -> Optional[ReportEntry]:
        """Started test bound to the calling thread, if any."""
        entry = getattr(self._local, "current", None)
        if entry is None or entry.outcome.is_terminal:
            return None
        return entry

    # =========================================================================
    # Logging
    # =========================================================================

    def _log(self, level: LogLevel, message: str) -> None:
        entry = self.current_test()
        if entry is None:
            logger.debug(f"Dropped report log ({level.value}) with no active test: {message}")
            return
        with self._lock:
            entry.logs.append(LogEntry(level, message))

    def log_pass(self, message: str) -> None:
        self._log(LogLevel.PASS, message)

    def log_fail(self, message: str) -> None:
        self._log(LogLevel.FAIL, message)

    def log_info(self, message: str) -> None:
        self._log(LogLevel.INFO, message)

    def log_warning(self, message: str) -> None:
        self._log(LogLevel.WARNING, message)

    def log_skip(self, message: str) -> None:
        self._log(LogLevel.SKIP, message)

    # =========================================================================
    # Aggregation
    # =========================================================================

    def entries(self) -> List[ReportEntry]:
        """Snapshot of all entries, including incomplete ones."""
        with self._lock:
            return list(self._entries)

    def summary(self) -> ReportSummary:
        with self._lock:
            return self._build_summary()

    def _build_summary(self) -> ReportSummary:
        summary = ReportSummary()
        for entry in self._entries:
            if not entry.outcome.is_terminal:
                summary.incomplete += 1
                continue
            summary.total += 1
            if entry.outcome is Outcome.PASSED:
                summary.passed += 1
            elif entry.outcome is Outcome.FAILED:
                summary.failed += 1
            elif entry.outcome is Outcome.SKIPPED:
                summary.skipped += 1
            else:
                summary.passed_with_warnings += 1
        return summary

    def flush(self) -> Path:
        """
        Write the consolidated report.

        Safe with zero tests. Calling again re-renders the same file.

        Returns:
            Path of the written report
        """
        with self._lock:
            self._ensure_initialized()

            finished = [e for e in self._entries if e.outcome.is_terminal]
            incomplete = [e for e in self._entries if not e.outcome.is_terminal]
            for entry in incomplete:
                logger.warning(
                    f"Test '{entry.name}' started but never finished; "
                    f"it is excluded from the report"
                )

            html = render_report(
                title=self.title,
                report_name=self.report_name,
                entries=finished,
                summary=self._build_summary(),
                system_info=dict(self._system_info),
            )

            ensure_directory(self.report_dir)
            self._report_file.write_text(html, encoding="utf-8")
            self._flushed = True

        self._local.current = None
        logger.info(f"Report written: {self._report_file}")
        return self._report_file


__all__ = [
    "Outcome",
    "LogLevel",
    "LogEntry",
    "FailureDetail",
    "ReportEntry",
    "ReportSummary",
    "ResultReporter",
]
