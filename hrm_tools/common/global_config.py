"""
================================================================================
Global Configuration for UI Automation
================================================================================

Centralized configuration management and logging setup for the UI automation
framework.

Features:
    - Immutable Configuration object, loaded once per process
    - YAML-based configuration loading with dot-notation access
    - Environment variable overrides (UI_BASE_URL, UI_USERNAME, UI_PASSWORD, BROWSER)
    - Browser engine resolved once at parse time
    - Centralized Loguru logging configuration

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import os
import sys
from enum import Enum
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional

import yaml
from loguru import logger


# Default configuration file path
DEFAULT_CONFIG_PATH = Path(__file__).parent.parent.parent / "config" / "config.yaml"

DEFAULT_WAIT_TIMEOUT = 10
DEFAULT_IMPLICIT_TIMEOUT = 20
DEFAULT_PAGE_LOAD_TIMEOUT = 30
DEFAULT_LAUNCH_TIMEOUT = 30

# Environment variable -> configuration key
ENV_OVERRIDES: Dict[str, str] = {
    "UI_BASE_URL": "application.url",
    "UI_USERNAME": "username",
    "UI_PASSWORD": "password",
    "UI_REPORT_PATH": "report.path",
    "UI_SCREENSHOT_PATH": "screenshot.path",
    "LOG_LEVEL": "logging.level",
    "LOG_FILE": "logging.file",
}

BROWSER_ENV_VAR = "BROWSER"

_logger_initialized: bool = False


class ConfigurationError(Exception):
    """Raised when the configuration file cannot be parsed."""
    pass


class ConfigurationMissingError(ConfigurationError):
    """Raised by Configuration.require() when a key is absent."""

    def __init__(self, key: str):
        super().__init__(f"Required configuration key is missing: {key}")
        self.key = key


class BrowserEngine(str, Enum):
    """
    Supported browser engines.

    Unknown names resolve to CHROME (with a warning) rather than failing:
    the default engine is a deliberate fallback, not a validation gate.
    """

    CHROME = "chrome"
    FIREFOX = "firefox"
    EDGE = "edge"
    SAFARI = "safari"

    @classmethod
    def default(cls) -> "BrowserEngine":
        return cls.CHROME

    @classmethod
    def resolve(cls, name: Optional[str]) -> "BrowserEngine":
        """Resolve a user-supplied browser name to an engine."""
        if not name or not str(name).strip():
            return cls.default()

        normalized = str(name).strip().lower()
        aliases = {
            "chromium": cls.CHROME,
            "msedge": cls.EDGE,
            "webkit": cls.SAFARI,
        }
        if normalized in aliases:
            return aliases[normalized]

        try:
            return cls(normalized)
        except ValueError:
            logger.warning(
                f"Unknown browser '{name}'. Defaulting to {cls.default().value}"
            )
            return cls.default()


class Configuration:
    """
    Immutable key/value configuration.

    Keys use dot notation ("application.url"). Values may be stored either as
    flat dotted keys or as nested YAML sections; both are resolved by get().

    A Configuration is never mutated after construction. Use with_overrides()
    or load_configuration() to obtain a new one.

    Usage:
        >>> config = load_configuration()
        >>> config.application_url
        'https://opensource-demo.orangehrmlive.com/'
        >>> config.wait_timeout
        10
    """

    def __init__(
        self,
        values: Optional[Mapping[str, Any]] = None,
        browser: Optional[str] = None,
        source: Optional[Path] = None,
    ):
        """
        Args:
            values: Raw configuration mapping (nested or flat)
            browser: Effective browser name after precedence resolution.
                Falls back to the "browser.type" value when omitted.
            source: File the values were loaded from (informational)
        """
        self._values = MappingProxyType(dict(values or {}))
        self.source = source
        if browser is None:
            browser = self.get("browser.type")
        self._browser_engine = BrowserEngine.resolve(browser)

    def __repr__(self) -> str:
        return f"Configuration(source={self.source}, browser={self._browser_engine.value})"

    # =========================================================================
    # Generic access
    # =========================================================================

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get configuration value by dot-notation path.

        Args:
            key: Dot-notation path (e.g., "wait.timeout")
            default: Default value if key not found

        Returns:
            Configuration value or default
        """
        if key in self._values:
            value = self._values[key]
            return default if value is None else value

        value = self._values
        for part in key.split("."):
            if isinstance(value, Mapping) and part in value:
                value = value[part]
            else:
                return default
        return default if value is None else value

    def require(self, key: str) -> Any:
        """Get a value that must be present."""
        value = self.get(key)
        if value is None or value == "":
            raise ConfigurationMissingError(key)
        return value

    def get_int(self, key: str, default: int) -> int:
        """Get an integer value; absent or malformed values yield the default."""
        raw = self.get(key)
        if raw is None or isinstance(raw, bool):
            return default
        try:
            return int(str(raw).strip())
        except ValueError:
            logger.warning(
                f"Invalid integer for '{key}': {raw!r}. Using default {default}"
            )
            return default

    def get_bool(self, key: str, default: bool) -> bool:
        raw = self.get(key)
        if raw is None:
            return default
        if isinstance(raw, bool):
            return raw
        return str(raw).strip().lower() in ("true", "1", "yes", "on")

    def as_dict(self) -> Dict[str, Any]:
        return dict(self._values)

    def with_overrides(self, browser: Optional[str] = None, **values: Any) -> "Configuration":
        """
        Return a new Configuration with flat dotted overrides applied.

        Keyword names use double underscores for dots:
        ``with_overrides(wait__timeout=5)`` sets "wait.timeout".
        """
        merged = _flatten(self._values)
        for name, value in values.items():
            merged[name.replace("__", ".")] = value
        effective_browser = browser if browser is not None else self._browser_engine.value
        return Configuration(merged, browser=effective_browser, source=self.source)

    # =========================================================================
    # Typed accessors
    # =========================================================================

    @property
    def application_url(self) -> Optional[str]:
        return self.get("application.url")

    @property
    def browser_engine(self) -> BrowserEngine:
        return self._browser_engine

    @property
    def browser_type(self) -> str:
        return self._browser_engine.value

    @property
    def wait_timeout(self) -> int:
        """Explicit wait timeout in seconds (default 10)."""
        return self.get_int("wait.timeout", DEFAULT_WAIT_TIMEOUT)

    def get_wait_timeout(self) -> int:
        return self.wait_timeout

    @property
    def implicit_timeout(self) -> int:
        return self.get_int("implicit.timeout", DEFAULT_IMPLICIT_TIMEOUT)

    @property
    def page_load_timeout(self) -> int:
        return self.get_int("page_load.timeout", DEFAULT_PAGE_LOAD_TIMEOUT)

    @property
    def launch_timeout(self) -> int:
        return self.get_int("browser.launch_timeout", DEFAULT_LAUNCH_TIMEOUT)

    @property
    def headless(self) -> bool:
        return self.get_bool("browser.headless", True)

    @property
    def window_size(self) -> Dict[str, int]:
        return {
            "width": self.get_int("window.width", 1920),
            "height": self.get_int("window.height", 1080),
        }

    @property
    def username(self) -> Optional[str]:
        return self.get("username")

    @property
    def password(self) -> Optional[str]:
        return self.get("password")

    @property
    def screenshot_path(self) -> Path:
        return Path(self.get("screenshot.path", "screenshots"))

    @property
    def report_path(self) -> Path:
        return Path(self.get("report.path", "reports"))

    @property
    def download_path(self) -> Path:
        return Path(self.get("download.path", "downloads"))


# =============================================================================
# Loading
# =============================================================================

def load_configuration(
    config_path: Optional[Path] = None,
    browser: Optional[str] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> Configuration:
    """
    Load configuration from YAML and environment variables.

    Loading order (later wins):
        1. YAML file (UI_CONFIG_PATH, or config/config.yaml)
        2. Environment variables (see ENV_OVERRIDES)

    Browser precedence (highest first):
        explicit ``browser`` argument > BROWSER env var > "browser.type" > chrome

    Args:
        config_path: Path to YAML configuration file
        browser: Explicit per-run browser parameter
        environ: Environment mapping (defaults to os.environ)

    Returns:
        New immutable Configuration

    Raises:
        ConfigurationError: If the file exists but is not valid YAML
    """
    env = os.environ if environ is None else environ
    if config_path is None:
        config_path = Path(env.get("UI_CONFIG_PATH") or DEFAULT_CONFIG_PATH)
    config_path = Path(config_path)

    values: Dict[str, Any] = {}
    if config_path.exists():
        try:
            with open(config_path, "r", encoding="utf-8") as f:
                values = _flatten(yaml.safe_load(f) or {})
            logger.debug(f"Loaded configuration from: {config_path}")
        except yaml.YAMLError as e:
            raise ConfigurationError(
                f"Invalid YAML in configuration file: {e}"
            ) from e
    else:
        logger.warning(
            f"Configuration file not found: {config_path}. "
            f"Using defaults and environment variables only."
        )

    for env_key, config_key in ENV_OVERRIDES.items():
        if env.get(env_key):
            values[config_key] = env[env_key]

    effective_browser = browser or env.get(BROWSER_ENV_VAR) or values.get("browser.type")
    return Configuration(values, browser=effective_browser, source=config_path)


def _flatten(data: Mapping[str, Any], prefix: str = "") -> Dict[str, Any]:
    """Flatten nested sections into dotted keys."""
    flat: Dict[str, Any] = {}
    for key, value in data.items():
        full_key = f"{prefix}{key}"
        if isinstance(value, Mapping):
            flat.update(_flatten(value, f"{full_key}."))
        else:
            flat[full_key] = value
    return flat


# =============================================================================
# Logging
# =============================================================================

def init_logger(
    level: Optional[str] = None,
    log_file: Optional[str] = None,
    format_str: Optional[str] = None,
) -> None:
    """
    Initializes the global Loguru logger with consistent configuration.

    Safe to call repeatedly; only the first call configures sinks.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR). Defaults to LOG_LEVEL env or INFO.
        log_file: Optional file sink with rotation.
        format_str: Custom log format string.
    """
    global _logger_initialized

    if _logger_initialized:
        return

    log_level = (level or os.getenv("LOG_LEVEL", "INFO")).upper()
    log_format = format_str or (
        "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
        "<level>{level: <8}</level> | "
        "{thread.name} | "
        "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
        "<level>{message}</level>"
    )

    logger.remove()
    logger.add(
        sys.stderr,
        level=log_level,
        format=log_format,
        colorize=True,
        backtrace=True,
        diagnose=False,
        enqueue=False,
    )

    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        logger.add(
            log_file,
            level=log_level,
            format=log_format,
            rotation="10 MB",
            retention="7 days",
            compression="zip",
        )

    _logger_initialized = True
    logger.debug(f"Logger initialized with level: {log_level}")


__all__ = [
    "BrowserEngine",
    "Configuration",
    "ConfigurationError",
    "ConfigurationMissingError",
    "load_configuration",
    "init_logger",
]
