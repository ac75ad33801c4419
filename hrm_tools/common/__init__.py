"""
================================================================================
HRM Tools Common Utilities
================================================================================

Shared configuration management and logging setup for the UI automation
framework.

Exports:
    - Configuration: Immutable configuration object
    - load_configuration: Build a Configuration from YAML + environment
    - BrowserEngine: Supported browser engines
    - init_logger: Initialize loguru with standard settings
    - ensure_directory: Create a directory if it does not exist

Usage:
    from hrm_tools.common import init_logger, load_configuration

    init_logger()
    config = load_configuration(browser="firefox")
    timeout = config.wait_timeout

================================================================================
"""

from pathlib import Path
from typing import Union

from .global_config import (
    BrowserEngine,
    Configuration,
    ConfigurationError,
    ConfigurationMissingError,
    init_logger,
    load_configuration,
)


def ensure_directory(path: Union[str, Path]) -> Path:
    """
    Ensures a directory exists, creating it if necessary.

    Args:
        path: Directory path

    Returns:
        The path (for chaining)
    """
    directory = Path(path)
    directory.mkdir(parents=True, exist_ok=True)
    return directory


__all__ = [
    "BrowserEngine",
    "Configuration",
    "ConfigurationError",
    "ConfigurationMissingError",
    "init_logger",
    "load_configuration",
    "ensure_directory",
]
