"""Core types shared by the qa_tools components."""

from qa_core.errors import (
    HarnessError,
    ResourceAcquisitionFailure,
    RequestFailure,
    AuthenticationFailure,
    AsyncSubmissionRejected,
    WaitError,
    WaitTimedOut,
    WaitFatalError,
)

__all__ = [
    "HarnessError",
    "ResourceAcquisitionFailure",
    "RequestFailure",
    "AuthenticationFailure",
    "AsyncSubmissionRejected",
    "WaitError",
    "WaitTimedOut",
    "WaitFatalError",
]
