"""Frame replacement policies for the buffer pool."""

from __future__ import annotations

import abc
import threading
from collections import OrderedDict

from rmstore.errors import InternalError


class Replacer(abc.ABC):
    """Tracks which frames may be evicted."""

    @abc.abstractmethod
    def victim(self) -> int | None:
        """Remove and return the frame chosen for eviction, or None."""

    @abc.abstractmethod
    def pin(self, frame_id: int) -> None:
        """Mark a frame as in use so it cannot be evicted."""

    @abc.abstractmethod
    def unpin(self, frame_id: int) -> None:
        """Mark a frame as evictable."""

    @abc.abstractmethod
    def __len__(self) -> int:
        """Number of evictable frames."""


class LRUReplacer(Replacer):
    """Evicts the frame that was unpinned longest ago."""

    def __init__(self, num_pages: int) -> None:
        self._max_size = num_pages
        self._frames: OrderedDict[int, None] = OrderedDict()
        self._latch = threading.Lock()

    def _check(self, frame_id: int, action: str) -> None:
        if frame_id < 0 or frame_id >= self._max_size:
            raise InternalError(f"LRUReplacer.{action} invalid frame_id: {frame_id}")

    def victim(self) -> int | None:
        with self._latch:
            if not self._frames:
                return None
            frame_id, _ = self._frames.popitem(last=False)
            return frame_id

    def pin(self, frame_id: int) -> None:
        with self._latch:
            if frame_id in self._frames:
                del self._frames[frame_id]
            else:
                self._check(frame_id, "pin")

    def unpin(self, frame_id: int) -> None:
        with self._latch:
            self._check(frame_id, "unpin")
            if frame_id not in self._frames:
                self._frames[frame_id] = None

    def __len__(self) -> int:
        with self._latch:
            return len(self._frames)