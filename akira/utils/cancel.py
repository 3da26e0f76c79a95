# akira/utils/cancel.py
import threading

from .errors import TransformCancelled


class CancelToken:
    """
    Thread-safe cancellation flag shared by the dispatcher and the transforms
    it runs on executor threads.
    """

    def __init__(self):
        self._event = threading.Event()
        self.reason: str | None = None

    def cancel(self, reason: str = "cancelled") -> None:
        if not self._event.is_set():
            self.reason = reason
            self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def raise_if_cancelled(self, token: str) -> None:
        if self._event.is_set():
            raise TransformCancelled(token, self.reason or "")
