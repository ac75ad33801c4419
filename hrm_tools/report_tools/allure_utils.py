"""
================================================================================
Allure Report Utilities
================================================================================

Attachment helpers that mirror UI failure artifacts (screenshots, cause
chains, page URLs) into Allure results alongside the HTML report.

All helpers are best-effort: an attachment problem is logged and never
affects the test outcome.

================================================================================
"""

from pathlib import Path
from typing import Union

import allure
from loguru import logger


def attach_text(text: str, name: str = "Text") -> None:
    """
    Attach text content to Allure report.

    Args:
        text: Text to attach
        name: Attachment name
    """
    try:
        allure.attach(
            text,
            name=name,
            attachment_type=allure.attachment_type.TEXT
        )
    except Exception as e:
        logger.warning(f"Failed to attach '{name}' to Allure: {e}")


def attach_screenshot(screenshot: Union[bytes, Path], name: str = "Screenshot") -> None:
    """
    Attach a PNG screenshot to Allure report.

    Args:
        screenshot: PNG bytes or path of a PNG file
        name: Attachment name
    """
    try:
        if isinstance(screenshot, Path):
            screenshot = screenshot.read_bytes()
        allure.attach(
            screenshot,
            name=name,
            attachment_type=allure.attachment_type.PNG
        )
    except Exception as e:
        logger.warning(f"Failed to attach screenshot '{name}' to Allure: {e}")


def attach_failure(test_name: str, message: str, cause_chain: str = "") -> None:
    """
    Attach the failure message and full cause chain of a test.

    Args:
        test_name: Test identifier
        message: Top-level failure message
        cause_chain: Serialized exception chain
    """
    try:
        with allure.step(f"Failure details: {test_name}"):
            attach_text(message, name="Failure Message")
            if cause_chain:
                attach_text(cause_chain, name="Cause Chain")
    except Exception as e:
        logger.warning(f"Failed to record failure of {test_name} in Allure: {e}")


__all__ = [
    "attach_text",
    "attach_screenshot",
    "attach_failure",
]
