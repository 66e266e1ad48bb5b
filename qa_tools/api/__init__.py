"""HTTP client for API tests."""

from qa_tools.api.client import ApiClient, DEFAULT_POOL_SIZE, LOGIN_PATH

__all__ = [
    "ApiClient",
    "DEFAULT_POOL_SIZE",
    "LOGIN_PATH",
]
