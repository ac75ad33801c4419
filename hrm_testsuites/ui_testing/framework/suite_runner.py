"""
================================================================================
Parallel Suite Runner
================================================================================

Runs test units on a thread pool, one isolated browser session per unit,
reporting every outcome into one shared ResultReporter.

Per unit, on its worker thread:

    on_test_start -> acquire session -> body -> outcome event
                  -> screenshot on failure -> release session

A unit whose session cannot be acquired is reported as failed with the setup
error; the other units keep running. pytest.skip() inside a body is reported
as skipped.

Usage:
    runner = ParallelSuiteRunner(config, reporter, workers=3)
    runner.run([TestUnit("test_valid_login", LoginCases.test_valid_login)])
    sys.exit(runner.exit_code())

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Dict, List, Optional, Sequence

import pytest
from loguru import logger

from hrm_tools.common import Configuration
from hrm_tools.report_tools import Outcome, ResultReporter

from .context import ExecutionContext
from .listener import ExecutionRecord, LifecycleListener
from .session import BrowserSession, SessionLifecycleController


@dataclass(frozen=True)
class TestUnit:
    """A named test body taking the unit's ExecutionContext."""

    __test__ = False

    name: str
    body: Callable[[ExecutionContext], None]
    description: str = ""


class ParallelSuiteRunner:
    """
    Thread-pool executor for TestUnits.

    Attributes:
        outcomes: Test name -> terminal outcome, filled by run()
        report_file: Path of the flushed report after run()
    """

    def __init__(
        self,
        config: Configuration,
        reporter: ResultReporter,
        workers: int = 1,
        controller: Optional[SessionLifecycleController] = None,
    ):
        if workers < 1:
            raise ValueError("workers must be at least 1")
        self.config = config
        self.reporter = reporter
        self.workers = workers
        self.controller = controller or SessionLifecycleController()
        self.listener = LifecycleListener(reporter)
        self.outcomes: Dict[str, Outcome] = {}
        self.report_file: Optional[Path] = None

    def run(self, units: Sequence[TestUnit]) -> Dict[str, Outcome]:
        """
        Execute all units and flush the report.

        Returns:
            Mapping of unit name to outcome
        """
        self.listener.on_suite_start({
            "Runner": f"threads ({self.workers} workers)",
            "Application URL": self.config.application_url,
            "Browser": self.config.browser_type,
            "Headless": str(self.config.headless),
        })

        with ThreadPoolExecutor(max_workers=self.workers, thread_name_prefix="ui-worker") as pool:
            results = list(pool.map(self._run_unit, units))

        for unit, outcome in zip(units, results):
            self.outcomes[unit.name] = outcome

        self.report_file = self.listener.on_suite_finish()
        return dict(self.outcomes)

    def exit_code(self) -> int:
        """0 when no unit failed, 1 otherwise."""
        return 1 if Outcome.FAILED in self.outcomes.values() else 0

    def _run_unit(self, unit: TestUnit) -> Outcome:
        record = ExecutionRecord(name=unit.name, description=unit.description)
        self.listener.on_test_start(record)

        try:
            session = self.controller.acquire_session(self.config)
        except Exception as e:
            record.error = e
            self.listener.on_test_failure(record)
            return Outcome.FAILED

        try:
            ctx = ExecutionContext(session=session, config=self.config, reporter=self.reporter)
            outcome = self._execute(unit, ctx, record)
            if outcome is Outcome.FAILED:
                self._screenshot(session, unit.name)
            return outcome
        finally:
            self.controller.release_session(session)

    def _execute(self, unit: TestUnit, ctx: ExecutionContext, record: ExecutionRecord) -> Outcome:
        try:
            unit.body(ctx)
        except pytest.skip.Exception as e:
            record.skip_reason = e.msg or ""
            self.listener.on_test_skipped(record)
            return Outcome.SKIPPED
        except (Exception, pytest.fail.Exception) as e:
            record.error = e
            self.listener.on_test_failure(record)
            return Outcome.FAILED
        self.listener.on_test_success(record)
        return Outcome.PASSED

    @staticmethod
    def _screenshot(session: BrowserSession, name: str) -> None:
        path = session.capture_screenshot(f"{name}_failure")
        if path is not None:
            logger.info(f"Failure screenshot for {name}: {path}")


def run_units(
    config: Configuration,
    reporter: ResultReporter,
    units: List[TestUnit],
    workers: int = 1,
) -> int:
    """Run units and return a process exit code."""
    runner = ParallelSuiteRunner(config, reporter, workers=workers)
    runner.run(units)
    return runner.exit_code()


__all__ = [
    "TestUnit",
    "ParallelSuiteRunner",
    "run_units",
]
