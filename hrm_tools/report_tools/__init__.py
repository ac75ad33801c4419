"""
================================================================================
Report Tools
================================================================================

Result aggregation and report output for UI test runs.

Modules:
    - result_reporter: Thread-safe per-test outcome and log aggregation
    - html_report: Static HTML rendering of the consolidated report
    - allure_utils: Allure attachment helpers

================================================================================
"""

from .result_reporter import (
    FailureDetail,
    LogEntry,
    LogLevel,
    Outcome,
    ReportEntry,
    ReportSummary,
    ResultReporter,
)

__all__ = [
    "FailureDetail",
    "LogEntry",
    "LogLevel",
    "Outcome",
    "ReportEntry",
    "ReportSummary",
    "ResultReporter",
]
