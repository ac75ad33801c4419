"""
Per-execution-unit context.

Bundles the session, configuration and reporter a test unit works with, and
is passed explicitly into Page Objects and Test Cases instead of being looked
up from ambient global state.
"""

from __future__ import annotations

from dataclasses import dataclass

from hrm_tools.common import Configuration
from hrm_tools.report_tools import ResultReporter

from .session import BrowserSession
from .wait_policy import WaitPolicy


@dataclass(frozen=True)
class ExecutionContext:
    session: BrowserSession
    config: Configuration
    reporter: ResultReporter

    @property
    def wait(self) -> WaitPolicy:
        return self.session.wait


__all__ = ["ExecutionContext"]
