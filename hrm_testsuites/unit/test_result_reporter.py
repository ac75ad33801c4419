import re
import threading

import pytest

from hrm_tools.report_tools import FailureDetail, LogLevel, Outcome, ResultReporter


def test_state_machine_started_to_terminal(reporter):
    entry = reporter.start_test("test_valid_login", "Valid credentials reach the dashboard")
    assert entry.outcome is Outcome.STARTED
    assert reporter.current_test() is entry

    reporter.log_pass("Login page loaded successfully")
    finished = reporter.finish_test(Outcome.PASSED, duration_ms=1520)

    assert finished is entry
    assert entry.outcome is Outcome.PASSED
    assert entry.duration_ms == 1520
    assert reporter.current_test() is None
    assert [log.level for log in entry.logs] == [LogLevel.INFO, LogLevel.PASS]


def test_terminal_transition_happens_once(reporter):
    reporter.start_test("test_login_with_invalid_username")
    reporter.finish_test(Outcome.FAILED, failure=FailureDetail("AssertionError: no alert"))

    assert reporter.finish_test(Outcome.PASSED) is None
    assert reporter.entries()[0].outcome is Outcome.FAILED


def test_started_is_not_a_terminal_outcome(reporter):
    reporter.start_test("test_x")
    with pytest.raises(ValueError):
        reporter.finish_test(Outcome.STARTED)


def test_logs_without_active_test_are_dropped(reporter):
    reporter.log_info("before any test")
    reporter.start_test("test_x")
    reporter.finish_test(Outcome.SKIPPED)
    reporter.log_fail("after the test finished")

    entry = reporter.entries()[0]
    assert all("after the test" not in log.message for log in entry.logs)
    assert all("before any test" not in log.message for log in entry.logs)


def test_initialize_is_idempotent(reporter):
    reporter.initialize({"Environment": "QA"})
    first_file = reporter.report_file
    reporter.initialize({"Browser": "chrome"})

    assert reporter.report_file == first_file
    assert re.fullmatch(
        r"\d{4}-\d{2}-\d{2}_\d{2}-\d{2}-\d{2}_UIAutomationReport\.html",
        first_file.name,
    )


def test_flush_with_zero_tests_writes_report(reporter):
    report_file = reporter.flush()

    assert report_file.exists()
    assert "No tests were executed." in report_file.read_text(encoding="utf-8")
    assert reporter.summary().total == 0


def test_incomplete_tests_excluded_from_report(reporter):
    reporter.start_test("test_finished")
    reporter.finish_test(Outcome.PASSED)

    worker = threading.Thread(target=reporter.start_test, args=("test_crashed_worker",))
    worker.start()
    worker.join()

    summary = reporter.summary()
    assert summary.total == 1
    assert summary.incomplete == 1

    html = reporter.flush().read_text(encoding="utf-8")
    assert "test_finished" in html
    assert "test_crashed_worker" not in html


def test_failure_detail_rendered_escaped(reporter):
    reporter.start_test("test_empty_credentials")
    reporter.finish_test(
        Outcome.FAILED,
        failure=FailureDetail("AssertionError: <div> missing", "Traceback ...\nCaused by: TimeoutExceededError"),
    )

    html = reporter.flush().read_text(encoding="utf-8")
    assert "&lt;div&gt; missing" in html
    assert "Caused by: TimeoutExceededError" in html


def test_summary_counts_and_pass_rate(reporter):
    for name, outcome in [
        ("a", Outcome.PASSED),
        ("b", Outcome.PASSED_WITH_WARNINGS),
        ("c", Outcome.FAILED),
        ("d", Outcome.SKIPPED),
    ]:
        reporter.start_test(name)
        reporter.finish_test(outcome)

    summary = reporter.summary()
    assert (summary.total, summary.passed, summary.failed, summary.skipped, summary.passed_with_warnings) == (4, 1, 1, 1, 1)
    assert summary.pass_rate == pytest.approx(50.0)
    assert summary.to_dict()["pass_rate"] == "50.00%"


def test_concurrent_logs_stay_with_their_own_test(reporter):
    workers = 8
    lines = 50
    barrier = threading.Barrier(workers)

    def worker(index):
        name = f"test_{index}"
        reporter.start_test(name)
        barrier.wait(timeout=5)
        for line in range(lines):
            reporter.log_info(f"{name} line {line}")
        reporter.finish_test(Outcome.PASSED)

    threads = [threading.Thread(target=worker, args=(i,)) for i in range(workers)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    entries = reporter.entries()
    assert len(entries) == workers
    for entry in entries:
        messages = [log.message for log in entry.logs[1:]]
        assert len(messages) == lines
        assert all(message.startswith(f"{entry.name} line") for message in messages)
    assert reporter.summary().passed == workers


def test_flush_is_repeatable(tmp_path):
    reporter = ResultReporter(report_dir=tmp_path / "nested" / "reports")
    reporter.start_test("test_x")
    reporter.finish_test(Outcome.PASSED)

    first = reporter.flush()
    second = reporter.flush()

    assert first == second
    assert reporter.flushed
    assert first.parent == tmp_path / "nested" / "reports"
