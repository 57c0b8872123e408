"""Ordered single-producer/single-consumer stream of install progress events."""

from __future__ import annotations

import queue
import threading
from collections.abc import Iterator
from typing import Protocol, cast

from services.installer.constants import PROGRESS_QUEUE_SIZE
from services.installer.models import InstallProgress


__all__ = ["ProgressSink", "ProgressStream", "ProgressStreamClosed"]

_END_OF_STREAM = object()


class ProgressSink(Protocol):
    """Receiver of pipeline events; closed exactly once by the producer."""

    def emit(self, event: InstallProgress) -> None:
        """Deliver the next event in order."""

    def close(self) -> None:
        """Signal that no further events will follow."""


class ProgressStreamClosed(RuntimeError):
    """Raised when an event is emitted after the stream was closed."""


class ProgressStream:
    """Bounded FIFO of :class:`InstallProgress` with an explicit end marker.

    The producer calls :meth:`emit` for each event and :meth:`close` once when
    it is finished. Iterating yields events in emission order and stops at the
    close marker. :meth:`emit` blocks while the buffer is full.
    """

    def __init__(self, maxsize: int = PROGRESS_QUEUE_SIZE) -> None:
        self._queue: queue.Queue[object] = queue.Queue(maxsize=max(1, maxsize))
        self._lock = threading.Lock()
        self._closed = False

    @property
    def closed(self) -> bool:
        with self._lock:
            return self._closed

    def emit(self, event: InstallProgress) -> None:
        with self._lock:
            if self._closed:
                raise ProgressStreamClosed("progress stream is already closed")
        self._queue.put(event)

    def close(self) -> None:
        with self._lock:
            if self._closed:
                return
            self._closed = True
        self._queue.put(_END_OF_STREAM)

    def __iter__(self) -> Iterator[InstallProgress]:
        while True:
            item = self._queue.get()
            if item is _END_OF_STREAM:
                self._queue.put_nowait(_END_OF_STREAM)
                return
            yield cast(InstallProgress, item)

