import logging
import threading
from typing import Dict, Optional

from openai import OpenAI, RateLimitError
from openai.types.chat import ChatCompletion

from .base import BackendManager
from .request import Request, Response

logger = logging.getLogger(__name__)

GEMINI_OPENAI_BASE_URL = "https://generativelanguage.googleapis.com/v1beta/openai/"


class GeminiBackendManager(BackendManager):
    """Backend for Gemini models through their OpenAI-compatible API.

    One OpenAI client is kept per credential, so rotating keys does not
    rebuild connection pools on every attempt. The SDK's own retries are
    disabled; retrying is the caller's job.
    """

    def __init__(self,
                 base_url: str = GEMINI_OPENAI_BASE_URL,
                 request_timeout: float = 120):
        """
        Args:
            base_url: OpenAI-compatible endpoint serving the model
            request_timeout: Request timeout in seconds
        """
        self.base_url = base_url
        self.request_timeout = request_timeout
        self.logger = logging.getLogger(__name__)

        self._clients: Dict[str, OpenAI] = {}
        self._clients_lock = threading.Lock()

    def _client_for(self, credential: str) -> OpenAI:
        with self._clients_lock:
            client = self._clients.get(credential)
            if client is None:
                client = OpenAI(
                    base_url=self.base_url,
                    api_key=credential,
                    timeout=self.request_timeout,
                    max_retries=0,
                )
                self._clients[credential] = client
            return client

    def process(self, request: Request) -> Response:
        """
        Run one chat completion for the request's prompt.

        Returns:
            Response carrying the generated text, or the error raised
        """
        try:
            completion = self._client_for(request.credential).chat.completions.create(
                model=request.model,
                messages=request.to_messages(),
            )
            return Response(request=request, text=self._extract_text(completion))
        except Exception as e:
            self.logger.error(f"Error calling generation API (attempt {request.attempt}): {e}")
            return Response.from_error(request, e)

    @staticmethod
    def _extract_text(completion: ChatCompletion) -> Optional[str]:
        if not completion.choices:
            return None
        message = completion.choices[0].message
        return message.content if message else None

    def is_rate_limited(self, error: Exception) -> bool:
        return isinstance(error, RateLimitError)

    def close(self):
        with self._clients_lock:
            for client in self._clients.values():
                client.close()
            self._clients.clear()
