"""
================================================================================
Page Objects
================================================================================

Page Object Model implementations for OrangeHRM pages.

Each page class encapsulates:
    - Element locators
    - Page-specific actions
    - Load verification

Author: Automation Team
License: MIT
================================================================================
"""

from .login_page import LoginPage
from .dashboard_page import DashboardPage
from .employees_page import EmployeesPage

__all__ = [
    "LoginPage",
    "DashboardPage",
    "EmployeesPage",
]
