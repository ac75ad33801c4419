"""
================================================================================
Locator Model
================================================================================

Declarative description of where a UI element lives.

A Locator is an immutable (strategy, value) pair with a human-readable name.
It carries no runtime behavior: Page Objects declare their locators once at
construction and the Wait Policy resolves them against a live page.

Locator strategies map onto Playwright selector engines:

    ID         -> [id="..."]
    NAME       -> [name="..."]
    CSS        -> raw CSS selector
    XPATH      -> xpath=...
    TEXT       -> text=...
    LINK_TEXT  -> a:text-is("...")

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class By(str, Enum):
    """Locator strategies."""

    ID = "id"
    NAME = "name"
    CSS = "css"
    XPATH = "xpath"
    TEXT = "text"
    LINK_TEXT = "link_text"


def _quote(value: str) -> str:
    return '"' + value.replace("\\", "\\\\").replace('"', '\\"') + '"'


@dataclass(frozen=True)
class Locator:
    """
    Immutable element locator.

    Attributes:
        strategy: How to find the element
        value: Strategy-specific expression
        name: Human-readable element name for logs and reports

    Usage:
        >>> USERNAME = Locator.by_name("username", name="username_input")
        >>> USERNAME.selector
        '[name="username"]'
    """

    strategy: By
    value: str
    name: str = ""

    def __post_init__(self) -> None:
        if not self.value:
            raise ValueError("Locator value must not be empty")
        if not self.name:
            object.__setattr__(self, "name", f"{self.strategy.value}={self.value}")

    def __str__(self) -> str:
        return self.name

    @property
    def selector(self) -> str:
        """Playwright selector for this locator."""
        if self.strategy is By.ID:
            return f"[id={_quote(self.value)}]"
        if self.strategy is By.NAME:
            return f"[name={_quote(self.value)}]"
        if self.strategy is By.XPATH:
            return f"xpath={self.value}"
        if self.strategy is By.TEXT:
            return f"text={self.value}"
        if self.strategy is By.LINK_TEXT:
            return f"a:text-is({_quote(self.value)})"
        return self.value

    # =========================================================================
    # Factories
    # =========================================================================

    @classmethod
    def by_id(cls, value: str, name: str = "") -> "Locator":
        return cls(By.ID, value, name)

    @classmethod
    def by_name(cls, value: str, name: str = "") -> "Locator":
        return cls(By.NAME, value, name)

    @classmethod
    def by_css(cls, value: str, name: str = "") -> "Locator":
        return cls(By.CSS, value, name)

    @classmethod
    def by_xpath(cls, value: str, name: str = "") -> "Locator":
        return cls(By.XPATH, value, name)

    @classmethod
    def by_text(cls, value: str, name: str = "") -> "Locator":
        return cls(By.TEXT, value, name)

    @classmethod
    def by_link_text(cls, value: str, name: str = "") -> "Locator":
        return cls(By.LINK_TEXT, value, name)


__all__ = [
    "By",
    "Locator",
]
