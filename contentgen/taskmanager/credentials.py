import logging
from typing import List, Mapping, Sequence

from contentgen.errors import ConfigurationError
from .counter import AtomicCounter

logger = logging.getLogger(__name__)

DEFAULT_PREFIX = "GEMINI_API_KEY"


def load_credentials(environ: Mapping[str, str], prefix: str = DEFAULT_PREFIX) -> List[str]:
    """
    Collect every non-empty value whose variable name starts with prefix.

    Values are ordered by variable name (GEMINI_API_KEY, GEMINI_API_KEY_2, ...)
    and duplicates keep their first position.
    """
    names = sorted(name for name in environ if name.startswith(prefix))
    credentials: List[str] = []
    for name in names:
        value = (environ[name] or "").strip()
        if value and value not in credentials:
            credentials.append(value)
    logger.debug(f"Found {len(credentials)} credentials under prefix {prefix}")
    return credentials


class CredentialRotator:
    """Hands out credentials round-robin; safe to call from several workers."""

    def __init__(self, credentials: Sequence[str]):
        if not credentials:
            raise ConfigurationError("No API credentials configured")
        self._credentials = tuple(credentials)
        self._cursor = AtomicCounter(modulus=len(self._credentials))

    @classmethod
    def from_environ(cls, environ: Mapping[str, str], prefix: str = DEFAULT_PREFIX) -> "CredentialRotator":
        credentials = load_credentials(environ, prefix)
        if not credentials:
            raise ConfigurationError(f"No API credentials found in environment variables starting with {prefix}")
        return cls(credentials)

    def next(self) -> str:
        return self._credentials[self._cursor.next()]

    @property
    def position(self) -> int:
        return self._cursor.value

    def __len__(self) -> int:
        return len(self._credentials)
