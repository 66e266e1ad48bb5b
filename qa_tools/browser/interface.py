"""Browser session factory interface.

This module defines the contract between the session lifecycle manager and
whatever actually launches a browser.
"""

from abc import ABC, abstractmethod
from typing import Any

from qa_tools.browser.types import SessionOptions


class BrowserSessionFactory(ABC):
    """Interface for objects that launch browser sessions.

    The returned session is an opaque handle; the only operation the
    lifecycle manager relies on is ``quit()``, which must terminate the
    underlying browser process.
    """

    @abstractmethod
    def create_session(self, options: SessionOptions) -> Any:
        """Launch a new browser session.

        Args:
            options: Browser type, headless flag and extra command line flags

        Returns:
            A live session handle (a Selenium WebDriver for the default factory)

        Raises:
            Exception: Any launch failure; callers treat it as fatal
        """
        pass
