from hrm_tools.report_tools import Outcome, ResultReporter
from hrm_testsuites.ui_testing.framework.pytest_plugin import ReportingPlugin


SAMPLE_SUITE = '''
import pytest


@pytest.fixture
def broken_session():
    raise RuntimeError("launch failed")


def test_pass():
    pass


def test_fail():
    try:
        raise KeyError("inner")
    except KeyError as e:
        raise AssertionError("outer") from e


def test_setup_error(broken_session):
    pass


@pytest.mark.skip(reason="not today")
def test_marked_skip():
    pass


def test_runtime_skip():
    pytest.skip("runtime reason")


@pytest.mark.xfail(reason="known bug")
def test_expected_failure():
    assert False
'''


def _run(pytester, tmp_path):
    pytester.makepyfile(test_sample=SAMPLE_SUITE)
    reporter = ResultReporter(report_dir=tmp_path / "reports")
    plugin = ReportingPlugin(reporter)
    pytester.inline_run("-p", "no:cacheprovider", plugins=[plugin])
    return plugin, {entry.name: entry for entry in reporter.entries()}


def test_outcomes_mapped_from_pytest(pytester, tmp_path):
    plugin, entries = _run(pytester, tmp_path)

    assert {name: entry.outcome for name, entry in entries.items()} == {
        "test_pass": Outcome.PASSED,
        "test_fail": Outcome.FAILED,
        "test_setup_error": Outcome.FAILED,
        "test_marked_skip": Outcome.SKIPPED,
        "test_runtime_skip": Outcome.SKIPPED,
        "test_expected_failure": Outcome.PASSED_WITH_WARNINGS,
    }
    assert plugin.report_file is not None
    assert plugin.report_file.exists()


def test_failure_details_and_reasons(pytester, tmp_path):
    _, entries = _run(pytester, tmp_path)

    failure = entries["test_fail"].failure
    assert failure.message == "AssertionError: outer"
    assert "KeyError: 'inner'" in failure.cause_chain

    assert entries["test_setup_error"].failure.message == "RuntimeError: launch failed"

    skip_logs = [log.message for log in entries["test_marked_skip"].logs]
    assert "Reason: not today" in skip_logs
    runtime_logs = [log.message for log in entries["test_runtime_skip"].logs]
    assert "Reason: runtime reason" in runtime_logs

    xfail_logs = [log.message for log in entries["test_expected_failure"].logs]
    assert "Expected failure: known bug" in xfail_logs


def test_every_started_test_is_finished(pytester, tmp_path):
    _, entries = _run(pytester, tmp_path)
    assert all(entry.outcome.is_terminal for entry in entries.values())
    assert all(entry.duration_ms is not None for entry in entries.values())
