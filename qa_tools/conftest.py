"""Shared fixtures for the qa_tools test suites."""

import pytest

from qa_tools.tests.fakes import FakeClock, FakeDriver


@pytest.fixture
def fake_clock():
    return FakeClock()


@pytest.fixture
def fake_driver(fake_clock):
    return FakeDriver(fake_clock)
