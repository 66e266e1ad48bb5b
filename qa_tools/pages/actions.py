"""Wait-backed browser actions for page objects.

Page objects hold a ``PageActions`` instead of inheriting from a base page:

    class LoginPage:
        USERNAME = (By.ID, "username")
        PASSWORD = (By.ID, "password")
        SUBMIT = (By.CSS_SELECTOR, "button[type='submit']")

        def __init__(self, driver):
            self.actions = PageActions(driver)

        def login(self, username, password):
            self.actions.open("/login")
            self.actions.type(self.USERNAME, username)
            self.actions.type(self.PASSWORD, password)
            self.actions.click(self.SUBMIT)
"""

import logging
from enum import Enum
from typing import Any, Optional

from selenium.common.exceptions import (
    NoSuchElementException,
    StaleElementReferenceException,
    WebDriverException,
)

from config import env_manager
from qa_tools.waits.conditions import (
    Locator,
    element_to_be_clickable,
    invisibility_of,
    presence_of,
    text_to_be_present_in,
    visibility_of,
)
from qa_tools.waits.engine import PollingWait, WaitEngine

logger = logging.getLogger(__name__)

FLUENT_POLL_INTERVAL = 0.5


class ElementState(Enum):
    """What a single, non-waiting lookup found."""
    MISSING = "missing"
    HIDDEN = "hidden"
    VISIBLE = "visible"
    STALE = "stale"


class PageActions:
    """Common waits and interactions over one WebDriver."""

    def __init__(
        self,
        driver: Any,
        base_url: Optional[str] = None,
        wait: Optional[WaitEngine] = None,
    ):
        env_manager.load()
        self.driver = driver
        self.base_url = (base_url or env_manager.get_base_url()).rstrip("/")
        self.wait = wait or WaitEngine(driver)
        self.fluent: PollingWait = self.wait.fluent(
            poll_interval=FLUENT_POLL_INTERVAL,
            ignoring=(NoSuchElementException,),
        )

    # Implicit wait. Mixing it with the explicit waits below makes timeouts
    # add up unpredictably.

    def set_implicit_wait(self, seconds: float) -> None:
        self.driver.implicitly_wait(seconds)

    def clear_implicit_wait(self) -> None:
        self.driver.implicitly_wait(0)

    # Explicit waits

    def wait_for_visible(self, locator: Locator) -> Any:
        return self.wait.until(visibility_of(locator))

    def wait_for_clickable(self, locator: Locator) -> Any:
        return self.wait.until(element_to_be_clickable(locator))

    def wait_for_invisible(self, locator: Locator) -> bool:
        return self.wait.until(invisibility_of(locator))

    def wait_for_presence(self, locator: Locator) -> Any:
        return self.wait.until(presence_of(locator))

    def wait_for_text(self, locator: Locator, text: str) -> bool:
        return self.wait.until(text_to_be_present_in(locator, text))

    def fluent_wait_for(self, locator: Locator) -> Any:
        """Wait for an element that appears at unpredictable times."""
        by, value = locator
        return self.fluent.until(
            lambda driver: driver.find_element(by, value),
            description="presence",
            target_description=f"{by}={value}",
        )

    # Actions

    def open(self, path: str = "") -> None:
        url = f"{self.base_url}/{path.lstrip('/')}" if path else self.base_url
        logger.debug(f"Opening {url}")
        self.driver.get(url)

    def click(self, locator: Locator) -> None:
        self.wait_for_clickable(locator).click()

    def type(self, locator: Locator, text: str) -> None:
        """Replace the element's current value with ``text``."""
        element = self.wait_for_visible(locator)
        element.clear()
        element.send_keys(text)

    def get_text(self, locator: Locator) -> str:
        return self.wait_for_visible(locator).text

    def title(self) -> str:
        return self.driver.title

    def element_state(self, locator: Locator) -> ElementState:
        """Look the element up once, without waiting."""
        try:
            element = self.driver.find_element(*locator)
        except NoSuchElementException:
            return ElementState.MISSING
        try:
            return ElementState.VISIBLE if element.is_displayed() else ElementState.HIDDEN
        except StaleElementReferenceException:
            return ElementState.STALE

    def is_displayed(self, locator: Locator) -> bool:
        """True only if the element exists and is visible right now.

        Never raises for lookup problems; a missing, hidden or stale element
        and any other driver error all report False.
        """
        try:
            return self.element_state(locator) is ElementState.VISIBLE
        except WebDriverException as e:
            logger.debug(f"is_displayed({locator}) treated as False: {e}")
            return False
