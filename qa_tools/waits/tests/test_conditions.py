"""Tests for the built-in wait conditions."""

from selenium.common.exceptions import StaleElementReferenceException
from selenium.webdriver.common.by import By

from qa_tools.tests.fakes import FakeElement
from qa_tools.waits.conditions import (
    NOT_YET,
    ConditionKind,
    element_to_be_clickable,
    invisibility_of,
    presence_of,
    text_to_be_present_in,
    visibility_of,
)

LOCATOR = (By.ID, "finish")


class StaleElement(FakeElement):
    def is_displayed(self):
        raise StaleElementReferenceException("element is stale")


class TestNotYet:
    def test_sentinel_is_singleton_and_falsy(self):
        assert type(NOT_YET)() is NOT_YET
        assert not NOT_YET
        assert repr(NOT_YET) == "NOT_YET"


class TestPresence:
    def test_missing_element_is_not_yet(self, fake_driver):
        assert presence_of(LOCATOR)(fake_driver) is NOT_YET

    def test_hidden_element_is_present(self, fake_driver):
        element = fake_driver.add(LOCATOR, FakeElement(displayed=False))

        assert presence_of(LOCATOR)(fake_driver) is element


class TestVisibility:
    def test_hidden_element_is_not_yet(self, fake_driver):
        fake_driver.add(LOCATOR, FakeElement(displayed=False))

        assert visibility_of(LOCATOR)(fake_driver) is NOT_YET

    def test_visible_element_resolves(self, fake_driver):
        element = fake_driver.add(LOCATOR, FakeElement())

        assert visibility_of(LOCATOR)(fake_driver) is element

    def test_stale_element_is_not_yet(self, fake_driver):
        fake_driver.add(LOCATOR, StaleElement())

        assert visibility_of(LOCATOR)(fake_driver) is NOT_YET


class TestClickable:
    def test_disabled_element_is_not_yet(self, fake_driver):
        fake_driver.add(LOCATOR, FakeElement(enabled=False))

        assert element_to_be_clickable(LOCATOR)(fake_driver) is NOT_YET

    def test_enabled_visible_element_resolves(self, fake_driver):
        element = fake_driver.add(LOCATOR, FakeElement())

        assert element_to_be_clickable(LOCATOR)(fake_driver) is element


class TestInvisibility:
    def test_missing_element_is_invisible(self, fake_driver):
        assert invisibility_of(LOCATOR)(fake_driver) is True

    def test_stale_element_is_invisible(self, fake_driver):
        fake_driver.add(LOCATOR, StaleElement())

        assert invisibility_of(LOCATOR)(fake_driver) is True

    def test_displayed_element_is_not_yet(self, fake_driver):
        fake_driver.add(LOCATOR, FakeElement())

        assert invisibility_of(LOCATOR)(fake_driver) is NOT_YET


class TestTextPresent:
    def test_partial_text_match(self, fake_driver):
        fake_driver.add(LOCATOR, FakeElement(text="Hello World!"))

        assert text_to_be_present_in(LOCATOR, "World")(fake_driver) is True

    def test_text_absent_is_not_yet(self, fake_driver):
        fake_driver.add(LOCATOR, FakeElement(text="Loading..."))

        assert text_to_be_present_in(LOCATOR, "World")(fake_driver) is NOT_YET


class TestDescriptions:
    def test_condition_carries_kind_and_target(self):
        condition = text_to_be_present_in(LOCATOR, "Done")

        assert condition.kind is ConditionKind.TEXT_PRESENT
        assert condition.target == "id=finish"
        assert condition.description == "text_present('Done')"
        assert visibility_of(LOCATOR).description == "visibility"
