"""Generic retry-with-backoff combinator.

The policy is plain data so it can be exercised without any network call::

    policy = RetryPolicy(max_attempts=3, backoff=linear_backoff(2.0))
    retry_call(lambda attempt: flaky(), policy, sleep=lambda s: None)
"""
import logging
import time
from dataclasses import dataclass, field
from typing import Callable, Optional, TypeVar

from contentgen.errors import RetryExhaustedError

logger = logging.getLogger(__name__)

T = TypeVar("T")


def linear_backoff(base: float) -> Callable[[int], float]:
    """Delay of ``base * attempt`` seconds after the given failed attempt."""
    def _backoff(attempt: int) -> float:
        return base * attempt
    return _backoff


@dataclass
class RetryPolicy:
    max_attempts: int = 5
    backoff: Callable[[int], float] = field(default_factory=lambda: linear_backoff(2.0))

    def __post_init__(self):
        if self.max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")


def retry_call(
    fn: Callable[[int], T],
    policy: RetryPolicy,
    *,
    sleep: Callable[[float], None] = time.sleep,
    on_failure: Optional[Callable[[int, Exception], None]] = None,
) -> T:
    """
    Call ``fn(attempt)`` until it returns, for at most ``policy.max_attempts``
    calls. Attempts are numbered from 1. Between attempts ``sleep`` is called
    with ``policy.backoff(attempt)``; no delay follows the final failure.

    Raises:
        RetryExhaustedError: every attempt raised; chained to the last error.
    """
    last_error: Optional[Exception] = None
    for attempt in range(1, policy.max_attempts + 1):
        try:
            return fn(attempt)
        except Exception as e:
            last_error = e
            if on_failure is not None:
                on_failure(attempt, e)
            if attempt < policy.max_attempts:
                delay = policy.backoff(attempt)
                logger.debug(f"Attempt {attempt}/{policy.max_attempts} failed, retrying in {delay:.1f}s")
                sleep(delay)

    raise RetryExhaustedError(policy.max_attempts, last_error) from last_error
