"""
Repository-level pytest configuration.

Why this exists:
  - Register the command line options shared by every suite
  - Configure logging once per run
  - Attach the consolidated HTML report when ``--ui-report`` is given
  - Keep real-browser tests opt-in (``--run-e2e``) so a plain ``pytest`` run
    never needs a browser or network access

Important:
  Credentials in config/config.yaml are the public OrangeHRM demo account.
  Real projects should load secrets from a secure secret manager in CI/CD
  (UI_USERNAME / UI_PASSWORD environment variables override the file).
"""

from __future__ import annotations

from pathlib import Path

import pytest

from hrm_tools.common import Configuration, init_logger, load_configuration
from hrm_tools.report_tools import ResultReporter
from hrm_testsuites.ui_testing.framework.pytest_plugin import ReportingPlugin


pytest_plugins = ["pytester"]

CONFIGURATION_KEY = pytest.StashKey[Configuration]()


def pytest_addoption(parser):
    group = parser.getgroup("hrm", "OrangeHRM UI automation")
    group.addoption(
        "--run-e2e",
        action="store_true",
        default=False,
        help="Run tests marked e2e against a real browser",
    )
    group.addoption(
        "--ui-report",
        action="store_true",
        default=False,
        help="Write the consolidated HTML report for this run",
    )
    group.addoption(
        "--ui-browser",
        default=None,
        help="Browser engine: chrome, firefox, edge or safari (overrides BROWSER and the config file)",
    )
    group.addoption(
        "--ui-headed",
        action="store_true",
        default=False,
        help="Show the browser window",
    )


def build_configuration(config: pytest.Config) -> Configuration:
    configuration = load_configuration(browser=config.getoption("--ui-browser"))
    if config.getoption("--ui-headed"):
        configuration = configuration.with_overrides(browser__headless=False)
    return configuration


def pytest_configure(config):
    configuration = build_configuration(config)
    config.stash[CONFIGURATION_KEY] = configuration
    init_logger(
        level=configuration.get("logging.level"),
        log_file=configuration.get("logging.file"),
    )
    config.addinivalue_line("markers", "e2e: End-to-end tests simulating user flows")

    if config.getoption("--ui-report"):
        reporter = ResultReporter(report_dir=configuration.report_path)
        config.pluginmanager.register(ReportingPlugin(reporter, configuration), "hrm-reporting")


def pytest_collection_modifyitems(config, items):
    """Skip real-browser tests unless --run-e2e is given."""
    if config.getoption("--run-e2e"):
        return
    skip_e2e = pytest.mark.skip(reason="real-browser test: pass --run-e2e to run")
    for item in items:
        if "e2e" in item.keywords:
            item.add_marker(skip_e2e)


@pytest.fixture(scope="session")
def project_root() -> Path:
    """Return repo root path."""
    return Path(__file__).parent


@pytest.fixture(scope="session")
def configuration(pytestconfig) -> Configuration:
    """Run configuration: config file, environment and command line options."""
    return pytestconfig.stash[CONFIGURATION_KEY]
