import threading
from typing import Optional


class AtomicCounter:
    """
    Lock-guarded counter shared between worker threads.

    ``next()`` returns the current value and advances it in one step, wrapping
    at ``modulus`` when one is given.
    """

    def __init__(self, start: int = 0, modulus: Optional[int] = None):
        if modulus is not None and modulus <= 0:
            raise ValueError("modulus must be positive")
        self._modulus = modulus
        self._value = start % modulus if modulus else start
        self._lock = threading.Lock()

    def next(self) -> int:
        with self._lock:
            value = self._value
            self._value = value + 1
            if self._modulus:
                self._value %= self._modulus
            return value

    @property
    def value(self) -> int:
        with self._lock:
            return self._value
