"""HTTP client for API tests.

``ApiClient`` sends JSON requests to one base URL, attaches a bearer token
when one is set, and can run calls on a small worker pool so several
requests are in flight at once.

Example:
    with ApiClient("https://api.example.com") as api:
        api.authenticate("admin", "secret")
        user = api.get_async("/users/1")
        posts = api.get_async("/users/1/posts")
        api.await_all(user, posts)
        assert user.result().status_code == 200

Subclass or wrap it per API domain to give endpoints names:

    class UserApi:
        def __init__(self, client: ApiClient):
            self.client = client

        def get_user(self, user_id: int):
            return self.client.get(f"/users/{user_id}")
"""

import logging
import threading
import time
from concurrent import futures
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Any, Callable, Dict, List, Optional

import requests

from config import env_manager
from qa_core.errors import AsyncSubmissionRejected, AuthenticationFailure, RequestFailure

logger = logging.getLogger(__name__)

DEFAULT_POOL_SIZE = 5
LOGIN_PATH = "/auth/login"
JSON_CONTENT_TYPE = "application/json"


class ApiClient:
    """Blocking and non-blocking JSON HTTP client with bearer-token auth.

    The token belongs to this instance only. It is read when each request is
    built, so changing it affects only calls built afterwards. Async calls run
    on a fixed pool of worker threads; submissions beyond its size queue.
    ``shutdown()`` must be called (or the client used as a context manager)
    to release the workers.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        pool_size: Optional[int] = None,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
        login_path: str = LOGIN_PATH,
    ):
        """Initialize the client.

        Args:
            base_url: Root for all request paths; defaults to the ``api_base_url`` setting
            pool_size: Number of async workers; defaults to the ``http_pool_size`` setting
            timeout: Transport timeout in seconds; defaults to the ``http_timeout`` setting
            session: requests session used as the transport
            login_path: Path of the login endpoint used by ``authenticate``
        """
        env_manager.load()
        self.base_url = (base_url or env_manager.get_api_base_url()).rstrip("/")
        self.pool_size = pool_size or env_manager.get_setting("http_pool_size", DEFAULT_POOL_SIZE)
        self.timeout = timeout if timeout is not None else env_manager.get_setting("http_timeout")
        self.login_path = login_path
        self._session = session or requests.Session()
        self._token: Optional[str] = None
        self._token_lock = threading.Lock()
        self._closed = False
        self._state_lock = threading.Lock()
        self._executor = ThreadPoolExecutor(
            max_workers=self.pool_size, thread_name_prefix="api-client"
        )

    # Authentication

    def authenticate(self, username: str, password: str) -> str:
        """Log in and store the returned token for subsequent requests.

        Sends ``POST {base_url}/auth/login`` with ``{"username", "password"}``
        and reads the ``token`` field of the JSON response.

        Returns:
            The token

        Raises:
            AuthenticationFailure: Non-2xx status, non-JSON body, or no token field
            RequestFailure: The request could not be sent
        """
        response = self._send(
            "POST",
            self.login_path,
            {"username": username, "password": password},
            authenticated=False,
        )
        if not response.ok:
            raise AuthenticationFailure(
                f"Login failed with status {response.status_code}", response=response
            )

        try:
            payload = response.json()
        except ValueError as e:
            raise AuthenticationFailure(
                f"Login response is not JSON: {e}", response=response
            ) from e

        token = payload.get("token") if isinstance(payload, dict) else None
        if not isinstance(token, str) or not token:
            raise AuthenticationFailure(
                "Login response does not contain a token", response=response
            )

        self.set_token(token)
        logger.info(f"Authenticated as {username}")
        return token

    def set_token(self, token: Optional[str]) -> None:
        """Set the bearer token; None clears authentication."""
        with self._token_lock:
            self._token = token or None

    def get_token(self) -> Optional[str]:
        with self._token_lock:
            return self._token

    # Synchronous requests

    def get(self, path: str) -> requests.Response:
        return self._send("GET", path)

    def post(self, path: str, body: Any = None) -> requests.Response:
        return self._send("POST", path, body)

    def put(self, path: str, body: Any = None) -> requests.Response:
        return self._send("PUT", path, body)

    def patch(self, path: str, body: Any = None) -> requests.Response:
        return self._send("PATCH", path, body)

    def delete(self, path: str) -> requests.Response:
        return self._send("DELETE", path)

    # Asynchronous requests

    def get_async(self, path: str) -> "Future[requests.Response]":
        return self._submit(self.get, path)

    def post_async(self, path: str, body: Any = None) -> "Future[requests.Response]":
        return self._submit(self.post, path, body)

    def put_async(self, path: str, body: Any = None) -> "Future[requests.Response]":
        return self._submit(self.put, path, body)

    def patch_async(self, path: str, body: Any = None) -> "Future[requests.Response]":
        return self._submit(self.patch, path, body)

    def delete_async(self, path: str) -> "Future[requests.Response]":
        return self._submit(self.delete, path)

    def await_all(self, *calls: Future) -> List[Future]:
        """Block until every given call has finished, successfully or not.

        Failures do not cut the wait short. Read each outcome afterwards with
        ``future.result()`` or ``future.exception()``.

        Returns:
            The calls, in the order given
        """
        if calls:
            futures.wait(calls, return_when=futures.ALL_COMPLETED)
        return list(calls)

    # Lifecycle

    def shutdown(self, wait: bool = True) -> None:
        """Stop accepting async calls and release the worker threads.

        Calls already submitted still run to completion. The transport is
        closed only when waiting for them. Safe to call more than once; never
        raises.
        """
        with self._state_lock:
            if self._closed:
                return
            self._closed = True

        try:
            self._executor.shutdown(wait=wait)
        except Exception as e:
            logger.warning(f"Error shutting down API client workers: {e}")
        if wait:
            try:
                self._session.close()
            except Exception as e:
                logger.warning(f"Error closing API client session: {e}")
        logger.info(f"API client for {self.base_url} shut down")

    @property
    def closed(self) -> bool:
        return self._closed

    def __enter__(self) -> "ApiClient":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.shutdown()

    # Internals

    def build_url(self, path: str) -> str:
        if not path:
            return self.base_url
        return f"{self.base_url}/{path.lstrip('/')}"

    def build_headers(self, authenticated: bool = True) -> Dict[str, str]:
        headers = {
            "Content-Type": JSON_CONTENT_TYPE,
            "Accept": JSON_CONTENT_TYPE,
        }
        token = self.get_token() if authenticated else None
        if token:
            headers["Authorization"] = f"Bearer {token}"
        return headers

    def _send(self, method: str, path: str, body: Any = None, authenticated: bool = True) -> requests.Response:
        url = self.build_url(path)
        headers = self.build_headers(authenticated)
        kwargs: Dict[str, Any] = {"headers": headers, "timeout": self.timeout}
        if isinstance(body, (str, bytes)):
            kwargs["data"] = body
        elif body is not None:
            kwargs["json"] = body

        logger.debug(
            f"{method} {url} (auth={'Authorization' in headers}, body={'yes' if body is not None else 'no'})"
        )
        start = time.monotonic()
        try:
            response = self._session.request(method, url, **kwargs)
        except requests.RequestException as e:
            logger.error(f"{method} {url} failed: {e}")
            raise RequestFailure(f"{method} {url} failed: {e}", method=method, url=url) from e

        elapsed_ms = (time.monotonic() - start) * 1000
        logger.debug(f"{method} {url} -> {response.status_code} in {elapsed_ms:.0f}ms")
        return response

    def _submit(self, call: Callable[..., requests.Response], *args: Any) -> "Future[requests.Response]":
        with self._state_lock:
            if self._closed:
                raise AsyncSubmissionRejected(
                    f"API client for {self.base_url} is shut down; cannot submit {call.__name__}"
                )
            try:
                return self._executor.submit(call, *args)
            except RuntimeError as e:
                raise AsyncSubmissionRejected(
                    f"API client for {self.base_url} rejected {call.__name__}: {e}"
                ) from e
