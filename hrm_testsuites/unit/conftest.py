"""
================================================================================
Unit Test Fixtures
================================================================================

Fixtures wiring the framework to the in-memory fake browser, so sessions,
pages, cases and reporting run without launching a real browser.

================================================================================
"""

from pathlib import Path
from typing import Generator

import pytest

from hrm_tools.common import Configuration
from hrm_tools.report_tools import ResultReporter
from hrm_testsuites.ui_testing.framework.context import ExecutionContext
from hrm_testsuites.ui_testing.framework.session import BrowserSession, SessionLifecycleController

from .fake_browser import BASE_URL, FakeLauncher


@pytest.fixture
def fake_config(tmp_path: Path) -> Configuration:
    """Configuration pointing at the fake application; waits probe once."""
    return Configuration({
        "application.url": f"{BASE_URL}/",
        "browser.type": "chrome",
        "wait.timeout": 0,
        "username": "Admin",
        "password": "admin123",
        "screenshot.path": str(tmp_path / "screenshots"),
        "report.path": str(tmp_path / "reports"),
        "download.path": str(tmp_path / "downloads"),
    })


@pytest.fixture
def launcher() -> FakeLauncher:
    return FakeLauncher()


@pytest.fixture
def controller(launcher: FakeLauncher) -> SessionLifecycleController:
    return SessionLifecycleController(launcher=launcher)


@pytest.fixture
def reporter(tmp_path: Path) -> ResultReporter:
    return ResultReporter(report_dir=tmp_path / "reports")


@pytest.fixture
def fake_session(
    controller: SessionLifecycleController,
    fake_config: Configuration,
) -> Generator[BrowserSession, None, None]:
    session = controller.acquire_session(fake_config)
    yield session
    controller.release_session(session)


@pytest.fixture
def ctx(fake_session: BrowserSession, fake_config: Configuration, reporter: ResultReporter) -> ExecutionContext:
    return ExecutionContext(session=fake_session, config=fake_config, reporter=reporter)
