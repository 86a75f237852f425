import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Callable, List, Optional, Sequence, TypeVar

from .counter import AtomicCounter

T = TypeVar("T")
R = TypeVar("R")


class QueueRunner:
    """
    Drives a fixed pool of worker threads over a list of items.

    Workers pull from one shared cursor: each claims the next unclaimed index,
    processes that item, and claims again until the cursor passes the end.
    Every item is processed exactly once; faster workers simply claim more.
    """

    def __init__(self, num_workers: int = 3):
        """
        Args:
            num_workers: Number of concurrent worker threads
        """
        if num_workers < 1:
            raise ValueError("num_workers must be at least 1")
        self.num_workers = num_workers
        self.logger = logging.getLogger(__name__)

    def run(self, items: Sequence[T], process: Callable[[T], R]) -> List[R]:
        """
        Process every item and return the results in input order.

        ``process`` is expected to turn per-item problems into its return
        value. Anything it raises is treated as fatal: it is re-raised here
        once all workers have stopped.
        """
        if not items:
            self.logger.info("Queue is empty, nothing to run")
            return []

        cursor = AtomicCounter()
        results: List[Optional[R]] = [None] * len(items)
        workers = min(self.num_workers, len(items))
        self.logger.info(f"Processing {len(items)} items with {workers} workers")

        with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="contentgen-worker") as executor:
            futures = [
                executor.submit(self._worker, worker_id, items, cursor, results, process)
                for worker_id in range(workers)
            ]
            # Join barrier: wait for every worker before surfacing a fatal error.
            errors = [f.exception() for f in futures]

        for error in errors:
            if error is not None:
                raise error

        return results

    def _worker(self, worker_id: int, items: Sequence[T], cursor: AtomicCounter,
                results: List[Optional[R]], process: Callable[[T], R]) -> int:
        handled = 0
        while True:
            index = cursor.next()
            if index >= len(items):
                break
            results[index] = process(items[index])
            handled += 1
        self.logger.debug(f"Worker {worker_id} finished after {handled} items")
        return handled
