"""Condition-based waits for synchronizing with a live browser."""

from qa_tools.waits.conditions import (
    NOT_YET,
    Fatal,
    Condition,
    ConditionKind,
    Locator,
    describe_locator,
    presence_of,
    visibility_of,
    element_to_be_clickable,
    invisibility_of,
    text_to_be_present_in,
)
from qa_tools.waits.engine import (
    DEFAULT_POLL_INTERVAL,
    DEFAULT_IGNORED_EXCEPTIONS,
    PollingWait,
    WaitEngine,
)

__all__ = [
    "NOT_YET",
    "Fatal",
    "Condition",
    "ConditionKind",
    "Locator",
    "describe_locator",
    "presence_of",
    "visibility_of",
    "element_to_be_clickable",
    "invisibility_of",
    "text_to_be_present_in",
    "DEFAULT_POLL_INTERVAL",
    "DEFAULT_IGNORED_EXCEPTIONS",
    "PollingWait",
    "WaitEngine",
]
