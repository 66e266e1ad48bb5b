"""Condition library for waits.

An evaluator is any callable that takes the wait target (usually a WebDriver)
and returns one of three outcomes:

- a resolved value: the condition is satisfied and the wait returns it
- ``NOT_YET``: keep polling
- a ``Fatal`` marker: stop immediately with ``WaitFatalError``

The built-in conditions below never raise for a missing or stale element;
they report ``NOT_YET`` (or satisfaction, for invisibility) instead.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Optional, Tuple

from selenium.common.exceptions import (
    NoSuchElementException,
    StaleElementReferenceException,
)

Locator = Tuple[str, str]


class _NotYet:
    """Sentinel returned by evaluators whose condition is not satisfied yet."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "NOT_YET"


NOT_YET = _NotYet()


@dataclass(frozen=True)
class Fatal:
    """Evaluator outcome that aborts the wait."""
    reason: str
    error: Optional[BaseException] = None


class ConditionKind(Enum):
    """Built-in condition kinds."""
    PRESENT = "presence"
    VISIBLE = "visibility"
    CLICKABLE = "clickable"
    INVISIBLE = "invisibility"
    TEXT_PRESENT = "text_present"


def describe_locator(locator: Locator) -> str:
    by, value = locator
    return f"{by}={value}"


@dataclass(frozen=True)
class Condition:
    """A built-in condition bound to its target locator."""
    kind: ConditionKind
    locator: Locator
    evaluate: Callable[[Any], Any]
    text: Optional[str] = None

    @property
    def target(self) -> str:
        return describe_locator(self.locator)

    @property
    def description(self) -> str:
        if self.text is not None:
            return f"{self.kind.value}({self.text!r})"
        return self.kind.value

    def __call__(self, driver: Any) -> Any:
        return self.evaluate(driver)


def presence_of(locator: Locator) -> Condition:
    """Element exists in the DOM; resolves to the element."""

    def _evaluate(driver):
        try:
            return driver.find_element(*locator)
        except NoSuchElementException:
            return NOT_YET

    return Condition(ConditionKind.PRESENT, locator, _evaluate)


def visibility_of(locator: Locator) -> Condition:
    """Element exists and is displayed; resolves to the element."""

    def _evaluate(driver):
        try:
            element = driver.find_element(*locator)
            return element if element.is_displayed() else NOT_YET
        except (NoSuchElementException, StaleElementReferenceException):
            return NOT_YET

    return Condition(ConditionKind.VISIBLE, locator, _evaluate)


def element_to_be_clickable(locator: Locator) -> Condition:
    """Element is displayed and enabled; resolves to the element."""

    def _evaluate(driver):
        try:
            element = driver.find_element(*locator)
            if element.is_displayed() and element.is_enabled():
                return element
            return NOT_YET
        except (NoSuchElementException, StaleElementReferenceException):
            return NOT_YET

    return Condition(ConditionKind.CLICKABLE, locator, _evaluate)


def invisibility_of(locator: Locator) -> Condition:
    """Element is missing, stale or hidden; resolves to True."""

    def _evaluate(driver):
        try:
            return NOT_YET if driver.find_element(*locator).is_displayed() else True
        except (NoSuchElementException, StaleElementReferenceException):
            return True

    return Condition(ConditionKind.INVISIBLE, locator, _evaluate)


def text_to_be_present_in(locator: Locator, text: str) -> Condition:
    """Element's visible text contains ``text``; resolves to True."""

    def _evaluate(driver):
        try:
            return True if text in driver.find_element(*locator).text else NOT_YET
        except (NoSuchElementException, StaleElementReferenceException):
            return NOT_YET

    return Condition(ConditionKind.TEXT_PRESENT, locator, _evaluate, text=text)
