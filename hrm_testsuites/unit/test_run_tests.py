import subprocess
import sys

import pytest

import run_tests
from hrm_testsuites.ui_testing.framework.session import SessionLifecycleController

from .fake_browser import FakeLauncher


def test_ui_command_carries_browser_options():
    runner = run_tests.UITestRunner(
        suite="ui",
        tags=["P0", "smoke"],
        browser="firefox",
        headless=False,
        allure_report=True,
    )
    cmd = runner.build_pytest_command("ui")

    assert cmd[:4] == [sys.executable, "-m", "pytest", "hrm_testsuites/ui_testing/tests"]
    assert cmd[cmd.index("-m", 4) + 1] == "P0 or smoke"
    assert "--alluredir" in cmd
    assert {"--run-e2e", "--ui-report", "--ui-browser=firefox", "--ui-headed"} <= set(cmd)


def test_unit_command_needs_no_browser():
    cmd = run_tests.UITestRunner(suite="unit", allure_report=False).build_pytest_command("unit")

    assert "hrm_testsuites/unit" in cmd
    assert "--run-e2e" not in cmd
    assert "--alluredir" not in cmd
    assert "-q" in cmd


def test_all_suite_keeps_ui_options_off_unit_tests():
    unit_cmd, ui_cmd = run_tests.UITestRunner(suite="all", allure_report=False).build_pytest_commands()

    assert "hrm_testsuites/unit" in unit_cmd and "hrm_testsuites/ui_testing/tests" not in unit_cmd
    assert "--run-e2e" not in unit_cmd and "--ui-report" not in unit_cmd
    assert "hrm_testsuites/ui_testing/tests" in ui_cmd
    assert {"--run-e2e", "--ui-report"} <= set(ui_cmd)


@pytest.mark.parametrize("returncodes, expected", [
    ([0, 0], 0),
    ([1, 0], 1),
    ([5, 0], 0),
    ([0, 2], 2),
])
def test_all_suite_runs_one_pytest_per_suite(monkeypatch, returncodes, expected):
    calls = []

    def fake_run(cmd, cwd=None):
        calls.append(cmd)
        return subprocess.CompletedProcess(cmd, returncodes[len(calls) - 1])

    monkeypatch.setattr(run_tests.subprocess, "run", fake_run)
    runner = run_tests.UITestRunner(suite="all", tags=["P0"], allure_report=False)

    assert runner.run() == expected
    assert [cmd[3] for cmd in calls] == ["hrm_testsuites/unit", "hrm_testsuites/ui_testing/tests"]


def test_thread_runner_exit_code(monkeypatch, tmp_path):
    monkeypatch.setenv("UI_REPORT_PATH", str(tmp_path / "reports"))
    monkeypatch.setenv("UI_SCREENSHOT_PATH", str(tmp_path / "screenshots"))
    launcher = FakeLauncher()

    runner = run_tests.UITestRunner(
        suite="ui",
        runner="threads",
        parallel=2,
        allure_report=False,
        controller=SessionLifecycleController(launcher=launcher),
    )

    assert runner.run() == 0
    assert len(launcher.pages) == 4
    assert len(list((tmp_path / "reports").glob("*_UIAutomationReport.html"))) == 1


def test_parser_rejects_unknown_browser():
    with pytest.raises(SystemExit):
        run_tests.build_parser().parse_args(["--browser", "opera"])


def test_parser_defaults():
    args = run_tests.build_parser().parse_args([])
    assert (args.suite, args.runner, args.parallel, args.browser) == ("all", "pytest", 1, None)
