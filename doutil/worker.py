"""A worker pool running queued jobs with a concurrency limit."""

import logging
import queue
import threading
import time
from collections.abc import Callable
from typing import Any

logger = logging.getLogger(__name__)

DEFAULT_LIMIT = 50


class WorkerStoppedError(RuntimeError):
    """Raised when a job is pushed to a stopped worker."""


class NilJobError(ValueError):
    """Raised when a job has nothing to run."""


class JobContext:
    """Passed to a job; tells it whether its time limit has passed."""

    def __init__(self, timeout: float = 0) -> None:
        self.deadline: float | None = time.monotonic() + timeout if timeout > 0 else None

    def done(self) -> bool:
        """Report whether the job's time limit has passed."""
        return self.deadline is not None and time.monotonic() >= self.deadline


class Job:
    """A callable taking a JobContext, with an optional timeout and error handler."""

    def __init__(
        self,
        do: Callable[[JobContext], Any] | None,
        timeout: float = 0,
        error_handler: Callable[[Exception], None] | None = None,
    ) -> None:
        self.do = do
        self.timeout = timeout
        self.error_handler = error_handler

    def __repr__(self) -> str:
        return f"Job(do={self.do!r}, timeout={self.timeout!r})"

    def _run(self, ctx: JobContext) -> None:
        if self.do is None:
            raise NilJobError("job has no function to run")
        try:
            self.do(ctx)
        except Exception as exc:
            if self.error_handler is None:
                raise
            self.error_handler(exc)


_STOP = object()


class Worker:
    """Runs pushed jobs on threads, at most limit at a time."""

    def __init__(self, limit: int = 0) -> None:
        if limit <= 0:
            limit = DEFAULT_LIMIT
        self.limit = limit
        self._slots = threading.BoundedSemaphore(limit)
        self._jobs: queue.SimpleQueue = queue.SimpleQueue()
        self._pending = 0
        self._idle = threading.Condition()
        self._stopped = False
        self._dispatcher: threading.Thread | None = None

    def __enter__(self) -> "Worker":
        self.start()
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.stop()

    def start(self) -> None:
        """Begin taking jobs from the queue."""
        if self._dispatcher is not None:
            raise RuntimeError("worker already started")
        self._dispatcher = threading.Thread(
            target=self._dispatch, name="worker-dispatch", daemon=True
        )
        self._dispatcher.start()
        logger.info("Start.")

    def _dispatch(self) -> None:
        while True:
            job = self._jobs.get()
            if job is _STOP:
                return
            self._slots.acquire()
            threading.Thread(target=self._execute, args=(job,), daemon=True).start()

    def _execute(self, job: Job) -> None:
        try:
            job._run(JobContext(job.timeout))
        except Exception as exc:
            logger.error("job failed: %s", exc)
        finally:
            self._slots.release()
            with self._idle:
                self._pending -= 1
                self._idle.notify_all()

    def stop(self) -> None:
        """Refuse new jobs, wait for pushed ones to finish, then stop."""
        if self._stopped:
            return
        self._stopped = True
        if self._dispatcher is None:
            return
        with self._idle:
            self._idle.wait_for(lambda: self._pending == 0)
        self._jobs.put(_STOP)
        self._dispatcher.join()
        logger.info("Stop.")

    def push(self, job: Job) -> None:
        """Queue job; raise WorkerStoppedError or NilJobError if it cannot run."""
        if self._stopped:
            raise WorkerStoppedError("worker is stopped")
        if job.do is None:
            raise NilJobError("job has no function to run")
        with self._idle:
            self._pending += 1
        self._jobs.put(job)