"""Bounded, closable buffer between discovery and the worker pool."""

from __future__ import annotations

import threading
from collections import deque
from typing import Deque, Optional

from subextract.errors import QueueClosedError
from subextract.types import WorkItem


class WorkQueue:
    """FIFO with fixed capacity and an explicit end-of-stream.

    ``put`` blocks while the buffer is full. ``get`` blocks while the buffer is
    empty and the queue is still open, and returns ``None`` once the queue is
    closed and drained.
    """

    def __init__(self, capacity: int = 100) -> None:
        if capacity < 1:
            raise ValueError(f"capacity must be positive, got {capacity}")
        self.capacity = capacity
        self._items: Deque[WorkItem] = deque()
        self._closed = False
        self._cond = threading.Condition()

    def put(self, item: WorkItem) -> None:
        with self._cond:
            while len(self._items) >= self.capacity and not self._closed:
                self._cond.wait()
            if self._closed:
                raise QueueClosedError(f"enqueue after close: {item.path}")
            self._items.append(item)
            self._cond.notify_all()

    def get(self) -> Optional[WorkItem]:
        with self._cond:
            while not self._items and not self._closed:
                self._cond.wait()
            if not self._items:
                return None
            item = self._items.popleft()
            self._cond.notify_all()
            return item

    def close(self) -> None:
        with self._cond:
            self._closed = True
            self._cond.notify_all()

    @property
    def closed(self) -> bool:
        with self._cond:
            return self._closed

    def __len__(self) -> int:
        with self._cond:
            return len(self._items)
