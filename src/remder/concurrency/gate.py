"""Bounded render gate — run work on a shared pool with a hard wait budget."""

from __future__ import annotations

import logging
import threading
import time
from collections.abc import Callable
from concurrent.futures import Future, ThreadPoolExecutor
from concurrent.futures import TimeoutError as FutureTimeoutError
from dataclasses import dataclass
from typing import Generic, TypeVar

from remder.errors.exceptions import RenderTimeoutError

logger = logging.getLogger(__name__)

T = TypeVar("T")

_DEFAULT_BUDGET = 3.0
_DEFAULT_MAX_WORKERS = 4
_DEFAULT_MAX_OUTSTANDING = 16


@dataclass(frozen=True)
class Completed(Generic[T]):
    value: T


@dataclass(frozen=True)
class Failed:
    error: BaseException


GateResult = Completed[T] | Failed


class RenderGate:
    """Runs each unit of work on a shared thread pool and waits a fixed budget.

    Timed-out work is not cancelled. It finishes in the background (warming
    the cache for the next render) and keeps its outstanding slot until it
    does, so at most ``max_outstanding`` renders are ever in flight.
    """

    def __init__(
        self,
        budget: float = _DEFAULT_BUDGET,
        max_workers: int = _DEFAULT_MAX_WORKERS,
        max_outstanding: int = _DEFAULT_MAX_OUTSTANDING,
    ) -> None:
        if budget <= 0:
            raise ValueError(f"budget must be positive, got {budget}")
        if max_outstanding < 1:
            raise ValueError(f"max_outstanding must be at least 1, got {max_outstanding}")
        self._budget = budget
        self._max_outstanding = max_outstanding
        self._executor = ThreadPoolExecutor(
            max_workers=max_workers, thread_name_prefix="remder-render"
        )
        self._slots = threading.BoundedSemaphore(max_outstanding)
        self._outstanding = 0
        self._lock = threading.Lock()

    @property
    def budget(self) -> float:
        return self._budget

    @property
    def max_outstanding(self) -> int:
        return self._max_outstanding

    @property
    def outstanding(self) -> int:
        """Work units submitted and not yet finished, including timed-out ones."""
        with self._lock:
            return self._outstanding

    def guard(self, work: Callable[[], T], budget: float | None = None) -> GateResult[T]:
        """Run ``work`` and wait at most ``budget`` seconds for it.

        Returns Completed(value), or Failed(error) on timeout or if the work
        raised. Never raises itself.
        """
        budget = self._budget if budget is None else budget
        # One deadline covers both the slot wait and the result wait
        deadline = time.monotonic() + budget

        if not self._slots.acquire(timeout=budget):
            logger.warning("Render capacity exhausted (%d in flight)", self.outstanding)
            return Failed(
                RenderTimeoutError(
                    f"No render slot freed up within {budget:g}s", budget=budget
                )
            )

        try:
            future = self._submit(work)
        except RuntimeError as e:
            # Executor already shut down
            return Failed(e)

        try:
            return Completed(future.result(timeout=max(0.0, deadline - time.monotonic())))
        except FutureTimeoutError:
            logger.debug("Render still running after %gs; leaving it in the background", budget)
            return Failed(RenderTimeoutError(f"Render exceeded {budget:g}s", budget=budget))
        except Exception as e:
            return Failed(e)

    def _submit(self, work: Callable[[], T]) -> Future[T]:
        with self._lock:
            self._outstanding += 1
        try:
            future = self._executor.submit(work)
        except RuntimeError:
            self._release()
            raise
        future.add_done_callback(self._release)
        return future

    def _release(self, _future: Future | None = None) -> None:
        with self._lock:
            self._outstanding -= 1
        self._slots.release()

    def close(self, wait: bool = False) -> None:
        """Stop accepting work and drop renders still queued.

        A render already running is not interrupted. Interpreter exit still
        joins the worker threads, so a stuck local engine can delay exit by
        up to its own ``engine_timeout``.
        """
        self._executor.shutdown(wait=wait, cancel_futures=True)

    def __enter__(self) -> RenderGate:
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()
