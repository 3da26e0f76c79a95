# akira/services/dispatcher.py
import asyncio
import time
from typing import Iterable, List, Sequence

from akira.logger import logger
from akira.models import ResultItem
from akira.utils import CancelToken, ExecutorShutdown, OutputFormat, TransformCancelled, TransformError
from .executor import TransformExecutor
from .image_engine import ImageEngine
from .size_parser import is_blank
from .transformer import transform


class Dispatcher:
    """
    Fans one uploaded image out to one transform job per size token and
    collects exactly one ResultItem per job.

    At most ``pool_size`` jobs of a request are in flight at once. The
    blocking work runs on the shared ``executor`` (or the loop's default
    executor when none is given), which bounds transforms across requests.
    """

    def __init__(
        self,
        engine: ImageEngine,
        pool_size: int = 5,
        output_format: OutputFormat = OutputFormat.JPEG,
        executor: TransformExecutor | None = None,
        timeout: float | None = None,
    ):
        if pool_size < 1:
            raise ValueError("pool_size must be at least 1")
        self.engine = engine
        self.pool_size = pool_size
        self.output_format = output_format
        self.executor = executor
        self.timeout = timeout

    async def resize_all(
        self,
        raw_image: bytes,
        tokens: Sequence[str],
        quality: int,
        cancel_token: CancelToken | None = None,
    ) -> List[ResultItem]:
        """
        Run every token and wait for all of them.

        Args:
            raw_image (bytes): Encoded source image shared by all jobs.
            tokens (Sequence[str]): Size tokens, blanks included.
            quality (int): Encoder quality, already validated.
            cancel_token (CancelToken): Optional flag; once set no new
                transform is started.
        Returns:
            One ResultItem per token in completion order. Failed and blank
            tokens come back with an empty payload.
        """
        count = len(tokens)
        if count == 0:
            return []

        cancel = cancel_token or CancelToken()
        jobs: asyncio.Queue[str] = asyncio.Queue(maxsize=count)
        results: asyncio.Queue[ResultItem] = asyncio.Queue(maxsize=count)

        for token in tokens:
            jobs.put_nowait(token)

        loop = asyncio.get_running_loop()
        deadline = None
        if self.timeout:
            deadline = loop.call_later(self.timeout, cancel.cancel, f"deadline of {self.timeout}s exceeded")

        workers = [
            asyncio.create_task(self._worker(raw_image, quality, jobs, results, cancel))
            for _ in range(min(self.pool_size, count))
        ]

        collected: List[ResultItem] = []
        try:
            for _ in range(count):
                collected.append(await results.get())
        except asyncio.CancelledError:
            # Remaining workers drain the queue without starting new transforms
            cancel.cancel("request cancelled")
            raise
        finally:
            if deadline is not None:
                deadline.cancel()

        await asyncio.gather(*workers)
        return collected

    async def _worker(
        self,
        raw_image: bytes,
        quality: int,
        jobs: asyncio.Queue,
        results: asyncio.Queue,
        cancel: CancelToken,
    ) -> None:
        while True:
            try:
                token = jobs.get_nowait()
            except asyncio.QueueEmpty:
                return
            item = await self._run_job(raw_image, token, quality, cancel)
            results.put_nowait(item)
            jobs.task_done()

    async def _run_job(self, raw_image: bytes, token: str, quality: int, cancel: CancelToken) -> ResultItem:
        if is_blank(token):
            return ResultItem(label=token)
        if cancel.cancelled:
            logger.warning(f"[Dispatcher] Skipping size {token!r}: {cancel.reason}")
            return ResultItem(label=token, error=TransformCancelled.kind)

        start = time.perf_counter()
        try:
            item = await self._submit(raw_image, token, quality, cancel)
        except TransformError as e:
            logger.error(f"[Dispatcher] {e}")
            return ResultItem(label=token, error=e.kind)
        except Exception as e:
            logger.exception(f"[Dispatcher] Unexpected error while processing size {token!r}: {e}")
            return ResultItem(label=token, error="internal_error")

        logger.info(f"Processed image in {time.perf_counter() - start:.3f}s | The size requested was {token}")
        return item

    async def _submit(self, raw_image: bytes, token: str, quality: int, cancel: CancelToken) -> ResultItem:
        args = (self.engine, raw_image, token, quality, self.output_format, cancel)
        if self.executor is None:
            return await asyncio.to_thread(transform, *args)
        try:
            return await self.executor.run(transform, *args)
        except ExecutorShutdown as e:
            cancel.cancel(str(e))
            raise TransformCancelled(token, str(e)) from e


def filter_results(items: Iterable[ResultItem]) -> List[ResultItem]:
    """Drop items without a payload (blank tokens and failed transforms)."""
    return [item for item in items if item.ok]


def failed_labels(items: Iterable[ResultItem]) -> List[str]:
    """Labels of non-blank tokens whose transform failed."""
    return [item.label for item in items if item.failed]
