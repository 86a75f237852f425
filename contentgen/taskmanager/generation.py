import logging
import time
from typing import Callable

from contentgen.errors import EmptyGenerationError
from .backend.base import BackendManager
from .backend.request import Request
from .credentials import CredentialRotator
from .retry import RetryPolicy, linear_backoff, retry_call


class GenerationClient:
    """
    Turns a prompt into generated text, retrying with a fresh credential and a
    linear backoff until the retry policy gives up.
    """

    def __init__(self,
                 backend: BackendManager,
                 rotator: CredentialRotator,
                 max_attempts: int = 5,
                 request_delay: float = 2.0,
                 backoff_base: float = 2.0,
                 sleep: Callable[[float], None] = time.sleep):
        """
        Args:
            backend: Service performing the actual generation call
            rotator: Source of credentials, advanced once per attempt
            max_attempts: Upper bound on backend calls per prompt
            request_delay: Seconds waited before every attempt (rate limiting)
            backoff_base: Backoff after attempt n is backoff_base * n seconds
            sleep: Injected for tests
        """
        self.backend = backend
        self.rotator = rotator
        self.policy = RetryPolicy(max_attempts=max_attempts, backoff=linear_backoff(backoff_base))
        self.request_delay = request_delay
        self.sleep = sleep

        self.logger = logging.getLogger(__name__)

    def generate(self, prompt: str, model: str) -> str:
        """
        Raises:
            RetryExhaustedError: after max_attempts failed calls
        """
        def attempt(number: int) -> str:
            request = Request(prompt=prompt, model=model, credential=self.rotator.next(), attempt=number)
            if self.request_delay > 0:
                self.sleep(self.request_delay)

            response = self.backend.process(request)
            if response.error is not None:
                raise response.error
            if not response.is_success:
                raise EmptyGenerationError()
            return response.text

        return retry_call(attempt, self.policy, sleep=self.sleep, on_failure=self._log_failure)

    def _log_failure(self, attempt: int, error: Exception) -> None:
        if self.backend.is_rate_limited(error):
            self.logger.warning(f"Rate limited on attempt {attempt}/{self.policy.max_attempts}, rotating credential")
        else:
            self.logger.warning(f"Generation attempt {attempt}/{self.policy.max_attempts} failed: {error}")
