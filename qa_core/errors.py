"""Exceptions raised by the test-execution harness."""

from typing import Optional, Any, Dict


class HarnessError(Exception):
    """Base exception for all harness errors."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ResourceAcquisitionFailure(HarnessError):
    """Raised when the session factory cannot produce a browser session."""

    def __init__(self, message: str, browser_type: Optional[str] = None, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, details)
        self.browser_type = browser_type


class RequestFailure(HarnessError):
    """Raised when the HTTP transport fails (connection refused, DNS, read timeout).

    A response with an unexpected status code is not a failure; it is returned
    to the caller as-is.
    """

    def __init__(self, message: str, method: Optional[str] = None, url: Optional[str] = None, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, details)
        self.method = method
        self.url = url


class AuthenticationFailure(HarnessError):
    """Raised when the login exchange does not yield a token."""

    def __init__(self, message: str, response: Any = None, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, details)
        self.response = response

    @property
    def status_code(self) -> Optional[int]:
        return getattr(self.response, "status_code", None)


class AsyncSubmissionRejected(HarnessError):
    """Raised when an async call is submitted to a client that has been shut down."""


class WaitError(HarnessError):
    """Base exception for wait failures."""

    def __init__(self, message: str, condition: Optional[str] = None, target: Optional[str] = None, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, details)
        self.condition = condition
        self.target = target


class WaitTimedOut(WaitError):
    """Raised when a condition is not satisfied before the deadline."""

    def __init__(
        self,
        message: str,
        condition: Optional[str] = None,
        target: Optional[str] = None,
        timeout: Optional[float] = None,
        last_error: Optional[BaseException] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message, condition, target, details)
        self.timeout = timeout
        self.last_error = last_error


class WaitFatalError(WaitError):
    """Raised when a non-tolerated error or a fatal outcome stops a wait."""

    def __init__(
        self,
        message: str,
        condition: Optional[str] = None,
        target: Optional[str] = None,
        reason: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message, condition, target, details)
        self.reason = reason
