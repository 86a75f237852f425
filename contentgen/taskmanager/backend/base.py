from abc import ABC, abstractmethod

from .request import Request, Response


class BackendManager(ABC):
    """Sends generation requests to a text-in, text-out service."""

    @abstractmethod
    def process(self, request: Request) -> Response:
        """
        Process a request and return a response.

        Implementations should not raise: transport and API failures are
        wrapped in the returned Response.
        """
        pass

    def is_rate_limited(self, error: Exception) -> bool:
        """True if error is the upstream asking us to slow down."""
        return False

    def close(self) -> None:
        pass
