"""
================================================================================
HRM Tools
================================================================================

Infrastructure shared by the OrangeHRM UI automation suites.

Modules:
    - common: Configuration loading and logging setup
    - report_tools: Result reporter, HTML report rendering, Allure helpers

Example:
    from hrm_tools.common import init_logger, load_configuration
    from hrm_tools.report_tools import ResultReporter

    init_logger()
    config = load_configuration()
    reporter = ResultReporter(report_dir=config.report_path)

================================================================================
"""

__version__ = "1.0.0"

__all__ = [
    "common",
    "report_tools",
]
