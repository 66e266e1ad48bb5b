"""Polling wait engine.

Two modes share one polling loop:

- ``WaitEngine.until(condition)`` waits on a built-in condition with the
  configured timeout and the default polling cadence.
- ``WaitEngine.fluent(...)`` returns a ``PollingWait`` with a caller-chosen
  poll interval and set of tolerated exceptions, for arbitrary evaluators.

Example:
    wait = WaitEngine(driver, timeout=5)
    button = wait.until(element_to_be_clickable((By.ID, "start")))

    banner = wait.fluent(poll_interval=0.2).until(
        lambda d: d.find_element(By.ID, "finish"), description="finish banner"
    )
"""

import logging
import time
from typing import Any, Callable, Iterable, Optional, Tuple, Type

from selenium.common.exceptions import NoSuchElementException

from config import env_manager
from qa_core.errors import WaitFatalError, WaitTimedOut
from qa_tools.waits.conditions import NOT_YET, Condition, Fatal

logger = logging.getLogger(__name__)

DEFAULT_POLL_INTERVAL = 0.5

# Exceptions treated as "not yet" when the caller does not choose
DEFAULT_IGNORED_EXCEPTIONS: Tuple[Type[BaseException], ...] = (NoSuchElementException,)


class PollingWait:
    """Evaluates a condition repeatedly until it resolves, fails or times out.

    Each invocation of ``until`` moves through ``Polling`` to exactly one of
    Satisfied (returns the value), TimedOut (raises ``WaitTimedOut``) or
    FatalError (raises ``WaitFatalError``).
    """

    def __init__(
        self,
        target: Any,
        timeout: float,
        poll_interval: float = DEFAULT_POLL_INTERVAL,
        ignored_exceptions: Iterable[Type[BaseException]] = DEFAULT_IGNORED_EXCEPTIONS,
        target_description: Optional[str] = None,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ):
        if timeout < 0:
            raise ValueError(f"timeout must be non-negative, got {timeout}")
        if poll_interval <= 0:
            raise ValueError(f"poll_interval must be positive, got {poll_interval}")

        self.target = target
        self.timeout = timeout
        self.poll_interval = poll_interval
        self.ignored_exceptions = tuple(ignored_exceptions)
        self.target_description = target_description
        self._clock = clock
        self._sleep = sleep

    def until(
        self,
        evaluator: Callable[[Any], Any],
        description: Optional[str] = None,
        target_description: Optional[str] = None,
    ) -> Any:
        """Poll ``evaluator`` against the target.

        Args:
            evaluator: Returns a value, ``NOT_YET`` or a ``Fatal`` marker
            description: Name of the condition, used in errors
            target_description: What is being observed, used in errors

        Returns:
            The first value the evaluator resolves to

        Raises:
            WaitTimedOut: The evaluator kept returning ``NOT_YET`` (or a
                tolerated exception) until the deadline
            WaitFatalError: The evaluator returned ``Fatal`` or raised a
                non-tolerated exception
        """
        description = description or getattr(evaluator, "__name__", "condition")
        target_description = target_description or self.target_description or repr(self.target)
        deadline = self._clock() + self.timeout
        last_error: Optional[BaseException] = None
        attempts = 0

        while True:
            attempts += 1
            try:
                outcome = evaluator(self.target)
            except self.ignored_exceptions as e:
                last_error = e
                outcome = NOT_YET
            except Exception as e:
                raise WaitFatalError(
                    f"Error while waiting for {description} on {target_description}: {e}",
                    condition=description,
                    target=target_description,
                    reason=str(e),
                ) from e

            if isinstance(outcome, Fatal):
                raise WaitFatalError(
                    f"Fatal outcome while waiting for {description} on {target_description}: {outcome.reason}",
                    condition=description,
                    target=target_description,
                    reason=outcome.reason,
                ) from outcome.error

            if outcome is not NOT_YET:
                logger.debug(f"{description} on {target_description} satisfied after {attempts} attempt(s)")
                return outcome

            remaining = deadline - self._clock()
            if remaining <= 0:
                raise WaitTimedOut(
                    f"Timed out after {self.timeout}s waiting for {description} on {target_description}",
                    condition=description,
                    target=target_description,
                    timeout=self.timeout,
                    last_error=last_error,
                ) from last_error

            self._sleep(min(self.poll_interval, remaining))


class WaitEngine:
    """Entry point for waiting on a live target such as a WebDriver."""

    def __init__(
        self,
        target: Any,
        timeout: Optional[float] = None,
        poll_interval: Optional[float] = None,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ):
        """Initialize the engine.

        Args:
            target: Object passed to every evaluator
            timeout: Seconds before giving up; defaults to the ``timeout`` setting
            poll_interval: Seconds between evaluations; defaults to the
                ``poll_interval`` setting
        """
        env_manager.load()
        self.target = target
        self.timeout = env_manager.get_timeout() if timeout is None else timeout
        if poll_interval is None:
            poll_interval = env_manager.get_setting("poll_interval", DEFAULT_POLL_INTERVAL)
        self.poll_interval = poll_interval
        self._clock = clock
        self._sleep = sleep

    def until(self, condition: Condition) -> Any:
        """Wait for a built-in condition and return what it resolves to."""
        wait = PollingWait(
            self.target,
            timeout=self.timeout,
            poll_interval=self.poll_interval,
            clock=self._clock,
            sleep=self._sleep,
        )
        return wait.until(
            condition,
            description=condition.description,
            target_description=condition.target,
        )

    def fluent(
        self,
        poll_interval: Optional[float] = None,
        ignoring: Iterable[Type[BaseException]] = DEFAULT_IGNORED_EXCEPTIONS,
        timeout: Optional[float] = None,
    ) -> PollingWait:
        """Build a wait with a custom interval and tolerated exceptions."""
        return PollingWait(
            self.target,
            timeout=self.timeout if timeout is None else timeout,
            poll_interval=self.poll_interval if poll_interval is None else poll_interval,
            ignored_exceptions=ignoring,
            clock=self._clock,
            sleep=self._sleep,
        )
