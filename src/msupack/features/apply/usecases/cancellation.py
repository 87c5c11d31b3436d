"""
Summary: Cooperative cancellation signal shared between a caller and a run.
Why: Let the engine stop between steps without interrupting a write midway.
"""

from __future__ import annotations

import threading
from typing import Callable

from ..domain.errors import ApplyCancelledError


class CancellationToken:
    """Thread-safe, one-way cancellation flag with callbacks."""

    def __init__(self) -> None:
        self._event: threading.Event = threading.Event()
        self._lock: threading.Lock = threading.Lock()
        self._callbacks: list[Callable[[], None]] = []

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def cancel(self) -> None:
        """Request cancellation; registered callbacks run once on the cancelling thread."""

        with self._lock:
            if self._event.is_set():
                return
            self._event.set()
            callbacks, self._callbacks = self._callbacks, []
        for callback in callbacks:
            callback()

    def raise_if_cancelled(self) -> None:
        if self._event.is_set():
            raise ApplyCancelledError()

    def register(self, callback: Callable[[], None]) -> Callable[[], None]:
        """Run ``callback`` on cancellation (immediately if already cancelled).

        Returns:
            A function that unregisters ``callback``.
        """

        with self._lock:
            if not self._event.is_set():
                self._callbacks.append(callback)

                def _unregister() -> None:
                    with self._lock:
                        if callback in self._callbacks:
                            self._callbacks.remove(callback)

                return _unregister
        callback()
        return lambda: None


__all__ = ["CancellationToken"]
