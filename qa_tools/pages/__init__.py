"""Composable actions for page objects."""

from qa_tools.pages.actions import PageActions, ElementState

__all__ = [
    "PageActions",
    "ElementState",
]
