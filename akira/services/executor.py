# akira/services/executor.py
import asyncio
from concurrent.futures import ThreadPoolExecutor
from functools import partial
from typing import Callable, TypeVar

from akira.logger import logger
from akira.utils import ExecutorShutdown

T = TypeVar("T")


class TransformExecutor:
    """
    Process-wide bounded executor for blocking image work.

    Every request's dispatcher submits into the same pool, so the number of
    transforms running at once is capped at ``max_workers`` no matter how
    many requests are in flight. Extra submissions wait in the pool's queue.
    """

    def __init__(self, max_workers: int = 8):
        if max_workers < 1:
            raise ValueError("max_workers must be at least 1")
        self.max_workers = max_workers
        self._pool: ThreadPoolExecutor | None = None
        self._stopping = False

    def start(self):
        if self._pool is None:
            self._stopping = False
            self._pool = ThreadPoolExecutor(max_workers=self.max_workers, thread_name_prefix="akira-transform")
            logger.info(f"[Executor] Started with {self.max_workers} transform threads.")

    def stop(self):
        if self._pool is not None:
            self._stopping = True
            self._pool.shutdown(wait=True, cancel_futures=True)
            self._pool = None
            logger.info("[Executor] Stopped.")

    @property
    def running(self) -> bool:
        return self._pool is not None

    async def run(self, func: Callable[..., T], *args, **kwargs) -> T:
        if self._pool is None:
            if self._stopping:
                raise ExecutorShutdown("TransformExecutor is stopped")
            raise RuntimeError("TransformExecutor is not started")
        future = self._pool.submit(partial(func, *args, **kwargs))
        try:
            return await asyncio.wrap_future(future)
        except asyncio.CancelledError:
            # Queued jobs dropped by stop() surface as a cancelled future
            if self._stopping and future.cancelled():
                raise ExecutorShutdown("TransformExecutor stopped before the job ran") from None
            raise
