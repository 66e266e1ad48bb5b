"""Browser session module.

This module launches browser sessions and binds them to concurrent workers.
"""

from qa_tools.browser.interface import BrowserSessionFactory
from qa_tools.browser.factory import SeleniumSessionFactory, merge_flags
from qa_tools.browser.driver_manager import DriverManager
from qa_tools.browser.types import SessionOptions, BrowserType

__all__ = [
    "BrowserSessionFactory",
    "SeleniumSessionFactory",
    "merge_flags",
    "DriverManager",
    "SessionOptions",
    "BrowserType",
]
