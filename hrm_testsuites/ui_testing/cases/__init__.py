"""
Test Cases

Runner-agnostic test bodies. Each case class takes an ExecutionContext and is
driven either by the pytest suite under ``ui_testing/tests`` or by the
thread-pool runner.
"""

from .login_cases import LoginCases, login_units

__all__ = [
    "LoginCases",
    "login_units",
]
