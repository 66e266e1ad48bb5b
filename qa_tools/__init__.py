"""QA Tools - browser sessions, waits and an API client for test suites."""

from qa_tools.browser import DriverManager, SeleniumSessionFactory, SessionOptions
from qa_tools.waits import WaitEngine, PollingWait, NOT_YET, Fatal
from qa_tools.api import ApiClient
from qa_tools.pages import PageActions, ElementState

from config import env

__all__ = [
    "DriverManager",
    "SeleniumSessionFactory",
    "SessionOptions",
    "WaitEngine",
    "PollingWait",
    "NOT_YET",
    "Fatal",
    "ApiClient",
    "PageActions",
    "ElementState",
    "env",
]
