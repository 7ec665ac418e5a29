# Thumper Worker Pool
# Fixed-size thread pool over a work queue and a result queue

import queue
import threading
from collections.abc import Callable
from typing import Generic, TypeVar

T = TypeVar("T")
R = TypeVar("R")

_STOP = object()


class WorkerPool(Generic[T, R]):
    """
    Fixed set of threads consuming one work queue and feeding one result queue.

    Workers never touch each other's state: each takes an item, runs the
    handler and posts either the return value or the raised exception.
    The coordinator owns the bookkeeping of how many results to expect.

    Use as a context manager; threads start on enter and are joined on
    exit, so none outlives the block. When the block exits with an
    exception, items still queued are discarded; items already taken by a
    worker run to completion.
    """

    def __init__(self, handler: Callable[[T], R], concurrency: int, *, name: str = "thumper-worker"):
        """
        Initialize worker pool.

        Args:
            handler: Callable run by a worker for every submitted item.
            concurrency: Number of worker threads.
            name: Thread name prefix.
        """
        if concurrency < 1:
            raise ValueError(f"concurrency must be at least 1, got {concurrency}")

        self.concurrency = concurrency
        self._handler = handler
        self._name = name
        self._work: queue.Queue = queue.Queue()
        self._results: queue.Queue = queue.Queue()
        self._threads: list[threading.Thread] = []

    def __enter__(self) -> "WorkerPool[T, R]":
        self.start()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.shutdown(cancel_pending=exc_type is not None)

    def start(self) -> None:
        """Start the worker threads."""
        for index in range(self.concurrency):
            thread = threading.Thread(target=self._run, name=f"{self._name}-{index}", daemon=True)
            thread.start()
            self._threads.append(thread)

    def submit(self, item: T) -> None:
        """Queue an item for the workers."""
        self._work.put(item)

    def next_result(self) -> R:
        """
        Wait for the next result from any worker.

        Returns:
            The handler's return value.

        Raises:
            Exception: Whatever the handler raised for that item.
        """
        result, error = self._results.get()
        if error is not None:
            raise error
        return result

    def shutdown(self, *, cancel_pending: bool = False) -> None:
        """
        Stop the workers and wait for them to exit.

        Args:
            cancel_pending: Discard queued items that no worker has taken yet.
        """
        if cancel_pending:
            self._drain()

        for _ in self._threads:
            self._work.put(_STOP)
        for thread in self._threads:
            thread.join()
        self._threads.clear()

    def _drain(self) -> None:
        while True:
            try:
                self._work.get_nowait()
            except queue.Empty:
                return

    def _run(self) -> None:
        while True:
            item = self._work.get()
            if item is _STOP:
                return
            try:
                result = self._handler(item)
            except Exception as e:
                self._results.put((None, e))
            else:
                self._results.put((result, None))
