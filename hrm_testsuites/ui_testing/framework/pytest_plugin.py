"""
================================================================================
Reporting Plugin for pytest
================================================================================

Feeds pytest's execution events into the Lifecycle Listener so a pytest run
produces the consolidated HTML report.

Hook mapping:
    pytest_sessionstart       -> on_suite_start
    pytest_runtest_logstart   -> on_test_start
    pytest_runtest_logreport  -> success / failure / skipped / passed-with-warnings
    pytest_sessionfinish      -> on_suite_finish (report flush)

Outcome rules:
    - setup or call phase failed          -> FAILED
    - skipped before or during the call   -> SKIPPED
    - xfail / xpass (non-strict)          -> PASSED_WITH_WARNINGS
    - teardown failures after an outcome  -> logged only

Registered by the root conftest when ``--ui-report`` is given.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from pathlib import Path
from typing import Dict, Optional

import pytest
from loguru import logger

from hrm_tools.common import Configuration
from hrm_tools.report_tools import ResultReporter

from .listener import ExecutionRecord, LifecycleListener


def _skip_reason(report: pytest.TestReport) -> str:
    longrepr = report.longrepr
    if isinstance(longrepr, tuple) and len(longrepr) == 3:
        reason = str(longrepr[2])
    else:
        reason = str(longrepr or "")
    return reason.replace("Skipped: ", "", 1).strip()


class ReportingPlugin:
    """
    pytest plugin object bridging test events to a LifecycleListener.

    Usage (conftest.py):
        def pytest_configure(config):
            reporter = ResultReporter(report_dir=Path("reports"))
            config.pluginmanager.register(ReportingPlugin(reporter), "hrm-reporting")
    """

    def __init__(self, reporter: ResultReporter, configuration: Optional[Configuration] = None):
        self.reporter = reporter
        self.listener = LifecycleListener(reporter)
        self.configuration = configuration
        self.report_file: Optional[Path] = None
        self._records: Dict[str, ExecutionRecord] = {}
        self._errors: Dict[str, BaseException] = {}

    # =========================================================================
    # Suite
    # =========================================================================

    def pytest_sessionstart(self, session: pytest.Session) -> None:
        system_info = {"Runner": "pytest"}
        if self.configuration is not None:
            system_info.update({
                "Application URL": self.configuration.application_url,
                "Browser": self.configuration.browser_type,
                "Headless": str(self.configuration.headless),
            })
        self.listener.on_suite_start(system_info)

    def pytest_sessionfinish(self, session: pytest.Session, exitstatus: int) -> None:
        for nodeid in list(self._records):
            logger.warning(f"No outcome observed for {nodeid}")
        self.report_file = self.listener.on_suite_finish()

    def pytest_terminal_summary(self, terminalreporter) -> None:
        if self.report_file is not None:
            terminalreporter.write_line(f"UI report: {self.report_file}")

    # =========================================================================
    # Tests
    # =========================================================================

    def pytest_runtest_logstart(self, nodeid: str, location) -> None:
        record = ExecutionRecord(name=nodeid.split("::")[-1], description=nodeid)
        self._records[nodeid] = record
        self.listener.on_test_start(record)

    @pytest.hookimpl(hookwrapper=True)
    def pytest_runtest_makereport(self, item: pytest.Item, call: pytest.CallInfo):
        # keep the exception object so the report can show its cause chain
        yield
        if call.excinfo is not None and not call.excinfo.errisinstance(pytest.skip.Exception):
            self._errors.setdefault(item.nodeid, call.excinfo.value)

    def pytest_runtest_logreport(self, report: pytest.TestReport) -> None:
        record = self._records.get(report.nodeid)
        if record is None:
            if report.when == "teardown" and report.failed:
                logger.warning(f"Teardown failed after outcome of {report.nodeid}: {report.longreprtext}")
            return

        xfail_reason = getattr(report, "wasxfail", None)

        if report.when == "setup":
            if report.failed:
                self._fail(report, record)
            elif report.skipped and xfail_reason is None:
                record.skip_reason = _skip_reason(report)
                self._finish(report.nodeid, self.listener.on_test_skipped, record)
            elif report.skipped:
                record.warning = f"Expected failure: {xfail_reason or _skip_reason(report)}"
                self._finish(report.nodeid, self.listener.on_test_passed_with_warnings, record)
            return

        if report.when == "call":
            if xfail_reason is not None:
                record.warning = (
                    f"Expected failure: {xfail_reason}" if report.skipped
                    else f"Unexpectedly passed: {xfail_reason}"
                )
                self._finish(report.nodeid, self.listener.on_test_passed_with_warnings, record)
            elif report.passed:
                self._finish(report.nodeid, self.listener.on_test_success, record)
            elif report.failed:
                self._fail(report, record)
            else:
                record.skip_reason = _skip_reason(report)
                self._finish(report.nodeid, self.listener.on_test_skipped, record)
            return

        # teardown phase with the outcome still open means call never ran
        if report.failed:
            self._fail(report, record)

    def _fail(self, report: pytest.TestReport, record: ExecutionRecord) -> None:
        record.error = self._errors.pop(report.nodeid, None)
        record.failure_text = report.longreprtext
        self._finish(report.nodeid, self.listener.on_test_failure, record)

    def _finish(self, nodeid: str, event, record: ExecutionRecord) -> None:
        self._records.pop(nodeid, None)
        self._errors.pop(nodeid, None)
        event(record)


__all__ = ["ReportingPlugin"]
