"""Per-worker browser session lifecycle.

Each concurrently running worker (by default, each thread) owns at most one
browser session. Sessions are created lazily on the first ``acquire()`` and
destroyed by ``release()``.

Example:
    manager = DriverManager()

    driver = manager.acquire()      # launches a browser for this thread
    driver.get("https://example.com")
    manager.release()               # closes it and forgets the mapping
"""

import logging
import threading
from contextlib import contextmanager
from typing import Any, Callable, Dict, Hashable, Iterator, Optional

from config import env_manager
from qa_core.errors import ResourceAcquisitionFailure
from qa_tools.browser.factory import SeleniumSessionFactory
from qa_tools.browser.interface import BrowserSessionFactory
from qa_tools.browser.types import SessionOptions

logger = logging.getLogger(__name__)


class DriverManager:
    """Maps execution contexts to their browser sessions.

    The map is the only state shared between workers. Inserts and removals
    are done under a lock; launching a browser happens outside of it so
    workers can start their sessions in parallel. A context only ever reads
    or writes its own entry.
    """

    def __init__(
        self,
        factory: Optional[BrowserSessionFactory] = None,
        options: Optional[SessionOptions] = None,
        context_resolver: Callable[[], Hashable] = threading.get_ident,
    ):
        """Initialize the manager.

        Args:
            factory: Launches sessions. Defaults to SeleniumSessionFactory.
            options: Launch options. When None, browser type and headless mode
                     are read from configuration at launch time.
            context_resolver: Returns the identity of the calling worker.
        """
        self._factory = factory or SeleniumSessionFactory()
        self._options = options
        self._context_resolver = context_resolver
        self._sessions: Dict[Hashable, Any] = {}
        self._lock = threading.Lock()

    def acquire(self) -> Any:
        """Return the calling context's session, launching one if needed.

        Repeated calls from the same context return the same session until
        ``release()`` is called.

        Raises:
            ResourceAcquisitionFailure: If the session could not be launched
        """
        context = self._context_resolver()
        with self._lock:
            session = self._sessions.get(context)
        if session is not None:
            return session

        browser_type = None
        try:
            options = self._session_options()
            browser_type = options.browser_type
            session = self._factory.create_session(options)
        except Exception as e:
            logger.error(f"Failed to start {browser_type or 'browser'} session for context {context}: {e}")
            raise ResourceAcquisitionFailure(
                f"Could not start {browser_type or 'browser'} session: {e}",
                browser_type=browser_type,
            ) from e

        with self._lock:
            current = self._sessions.setdefault(context, session)
        if current is not session:
            # Another caller resolved to the same context and won the insert
            logger.warning(f"Discarding duplicate {browser_type} session for context {context}")
            self._quit(session, context)
            return current
        logger.info(f"Started {browser_type} session for context {context}")
        return session

    def release(self) -> None:
        """Close and forget the calling context's session.

        Safe to call when no session exists. Never raises: a failure while
        closing the browser is logged and the mapping is dropped regardless.
        """
        context = self._context_resolver()
        with self._lock:
            session = self._sessions.pop(context, None)
        if session is None:
            return
        if self._quit(session, context):
            logger.info(f"Closed session for context {context}")

    def has_session(self) -> bool:
        """Whether the calling context currently owns a session."""
        context = self._context_resolver()
        with self._lock:
            return context in self._sessions

    def active_count(self) -> int:
        """Number of contexts that currently own a session."""
        with self._lock:
            return len(self._sessions)

    @contextmanager
    def session(self) -> Iterator[Any]:
        """Acquire a session for the duration of a ``with`` block."""
        driver = self.acquire()
        try:
            yield driver
        finally:
            self.release()

    def _quit(self, session: Any, context: Hashable) -> bool:
        try:
            session.quit()
            return True
        except Exception as e:
            logger.warning(f"Error closing session for context {context}: {e}")
            return False

    def _session_options(self) -> SessionOptions:
        if self._options is not None:
            return self._options
        env_manager.load()
        return SessionOptions(
            browser_type=env_manager.get_browser_type(),
            headless=env_manager.is_headless(),
        )
