"""
Background worker utilities.

A shared thread pool runs blocking API calls off the caller's thread;
results and errors are delivered through callbacks.
"""
from concurrent.futures import Future, ThreadPoolExecutor
from threading import Lock
from typing import Any, Callable, Optional

from pokecollect.config.settings import settings
from pokecollect.utils.logger import logger

_pool: Optional[ThreadPoolExecutor] = None
_pool_lock = Lock()


def global_thread_pool() -> ThreadPoolExecutor:
    """Return the process-wide worker pool, creating it on first use."""
    global _pool
    with _pool_lock:
        if _pool is None:
            _pool = ThreadPoolExecutor(max_workers=settings.WORKER_THREADS,
                                       thread_name_prefix="pokecollect-worker")
        return _pool


class ApiWorker:
    """
    Generic background task for blocking API calls.

    Usage::

        worker = ApiWorker(session_service.validate_session)
        worker.on_error = lambda exc: logger.error(exc)
        future = worker.start()

    ``on_result`` receives the return value, ``on_error`` the exception,
    and ``on_finished`` always runs last.
    """

    def __init__(self, fn: Callable, *args: Any, **kwargs: Any):
        self.fn = fn
        self.args = args
        self.kwargs = kwargs
        self.on_result: Optional[Callable[[Any], None]] = None
        self.on_error: Optional[Callable[[Exception], None]] = None
        self.on_finished: Optional[Callable[[], None]] = None

    def run(self) -> Any:
        try:
            result = self.fn(*self.args, **self.kwargs)
            if self.on_result:
                self.on_result(result)
            return result
        except Exception as exc:
            logger.error(f"Background task {getattr(self.fn, '__name__', self.fn)} failed: {exc}")
            if self.on_error:
                self.on_error(exc)
            return None
        finally:
            if self.on_finished:
                self.on_finished()

    def start(self, executor: Optional[ThreadPoolExecutor] = None) -> Future:
        """Submit the task to ``executor`` (or the global pool)."""
        return (executor or global_thread_pool()).submit(self.run)
