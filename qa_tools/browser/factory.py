"""Selenium-based browser session factory.

This module launches Chrome, Firefox or Edge WebDriver sessions, resolving
driver binaries through webdriver-manager.
"""

import logging
import threading
from typing import Dict, List, Optional, Union

from selenium import webdriver
from selenium.webdriver.chrome.options import Options as ChromeOptions
from selenium.webdriver.chrome.service import Service as ChromeService
from selenium.webdriver.edge.options import Options as EdgeOptions
from selenium.webdriver.edge.service import Service as EdgeService
from selenium.webdriver.firefox.options import Options as FirefoxOptions
from selenium.webdriver.firefox.service import Service as FirefoxService
from webdriver_manager.chrome import ChromeDriverManager
from webdriver_manager.firefox import GeckoDriverManager
from webdriver_manager.microsoft import EdgeChromiumDriverManager

from qa_tools.browser.interface import BrowserSessionFactory
from qa_tools.browser.types import SessionOptions

logger = logging.getLogger(__name__)

SUPPORTED_BROWSERS = ("chrome", "firefox", "edge")

# Flags required to run Chromium-based browsers inside containers and CI
CHROMIUM_DEFAULT_FLAGS = ["--no-sandbox", "--disable-dev-shm-usage"]

HEADLESS_FLAG = "--headless"


def merge_flags(defaults: List[str], overrides: List[str]) -> List[str]:
    """Merge command line flags, letting overrides replace same-named defaults.

    A flag's name is the part before ``=``, so ``--window-size=800,600``
    replaces an earlier ``--window-size=1920,1080``.

    Args:
        defaults: Flags applied first
        overrides: Flags applied last

    Returns:
        The merged flag list, without duplicates
    """
    merged: List[str] = []
    for flag in list(defaults) + list(overrides):
        name = flag.split("=", 1)[0]
        merged = [f for f in merged if f.split("=", 1)[0] != name]
        merged.append(flag)
    return merged


class SeleniumSessionFactory(BrowserSessionFactory):
    """Launches Selenium WebDriver sessions.

    Driver binaries are downloaded by webdriver-manager on first use and the
    resolved path is cached per browser type for the life of the process.
    """

    # Class-level cache for WebDriver paths, shared by all factories
    _driver_cache: Dict[str, str] = {}
    _cache_lock = threading.Lock()

    def __init__(self, driver_path: Optional[str] = None):
        """Initialize the factory.

        Args:
            driver_path: Explicit driver binary. When set, webdriver-manager is
                         not consulted.
        """
        self.driver_path = driver_path

    def create_session(self, options: SessionOptions) -> Union[webdriver.Chrome, webdriver.Firefox, webdriver.Edge]:
        browser_type = options.browser_type
        if browser_type not in SUPPORTED_BROWSERS:
            raise ValueError(f"Unsupported browser type: {browser_type}")

        browser_options = self.build_options(options)
        driver_path = self._resolve_driver_path(browser_type)

        logger.info(
            f"Starting {browser_type} session (headless={options.headless}, driver={driver_path})"
        )
        if browser_type == "firefox":
            return webdriver.Firefox(service=FirefoxService(driver_path), options=browser_options)
        if browser_type == "edge":
            return webdriver.Edge(service=EdgeService(driver_path), options=browser_options)
        return webdriver.Chrome(service=ChromeService(driver_path), options=browser_options)

    def build_options(self, options: SessionOptions) -> Union[ChromeOptions, FirefoxOptions, EdgeOptions]:
        """Build the Selenium options object for the requested browser.

        Args:
            options: Session options

        Returns:
            Browser-specific Selenium options with all flags applied
        """
        browser_type = options.browser_type
        if browser_type == "firefox":
            browser_options = FirefoxOptions()
            defaults: List[str] = []
        elif browser_type == "edge":
            browser_options = EdgeOptions()
            defaults = list(CHROMIUM_DEFAULT_FLAGS)
        elif browser_type == "chrome":
            browser_options = ChromeOptions()
            defaults = list(CHROMIUM_DEFAULT_FLAGS)
        else:
            raise ValueError(f"Unsupported browser type: {browser_type}")

        if options.headless:
            defaults.append(HEADLESS_FLAG)

        for flag in merge_flags(defaults, options.platform_flags):
            browser_options.add_argument(flag)
        return browser_options

    def _resolve_driver_path(self, browser_type: str) -> str:
        """Return the driver binary path, installing it if necessary."""
        if self.driver_path:
            return self.driver_path

        with self._cache_lock:
            cached_path = self._driver_cache.get(browser_type)
            if cached_path:
                return cached_path

            logger.info(f"Resolving {browser_type} driver with webdriver-manager...")
            if browser_type == "firefox":
                driver_path = GeckoDriverManager().install()
            elif browser_type == "edge":
                driver_path = EdgeChromiumDriverManager().install()
            else:
                driver_path = ChromeDriverManager().install()

            self._driver_cache[browser_type] = driver_path
            logger.debug(f"Caching {browser_type} driver path: {driver_path}")
            return driver_path
