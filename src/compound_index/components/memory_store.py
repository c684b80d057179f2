"""In-memory ordered key-value store.

Uses sortedcontainers.SortedDict for efficient sorted operations.
"""

from __future__ import annotations

import logging
import threading
from typing import TYPE_CHECKING

from sortedcontainers import SortedDict

if TYPE_CHECKING:
    from collections.abc import Iterator

    from ..core.types import PhysicalKey

logger = logging.getLogger(__name__)


class MemoryKVStore:
    """Sorted in-memory store satisfying the OrderedKVStore protocol.

    Single writer, read-your-writes. Range scans iterate a snapshot of the
    matching keys taken when iteration starts, so concurrent puts never
    invalidate an open scan.

    Invariants:
        - Keys are always maintained in byte order
        - A put is visible to every get or range started after it returns
    """

    def __init__(self):
        self._data: SortedDict = SortedDict()
        self._lock = threading.Lock()

    def put(self, key: PhysicalKey, value: bytes) -> None:
        if not isinstance(key, bytes) or not isinstance(value, bytes):
            raise TypeError("MemoryKVStore keys and values must be bytes")
        with self._lock:
            self._data[key] = value

    def get(self, key: PhysicalKey) -> bytes | None:
        return self._data.get(key)

    def delete(self, key: PhysicalKey) -> None:
        with self._lock:
            self._data.pop(key, None)

    def range(self, start: PhysicalKey | None, end: PhysicalKey | None) -> Iterator[tuple[PhysicalKey, bytes]]:
        """Iterate (key, value) pairs in key order between start and end.

        Args:
            start: Start key (inclusive), or None for beginning
            end: End key (exclusive), or None for end
        """
        with self._lock:
            keys = list(self._data.irange(start, end, inclusive=(True, False)))
        for key in keys:
            value = self._data.get(key)
            # Deleted after the snapshot was taken
            if value is not None:
                yield key, value

    def __len__(self) -> int:
        return len(self._data)

    def clear(self) -> None:
        with self._lock:
            self._data.clear()

    def close(self) -> None:
        logger.debug(f"Closing memory store with {len(self._data)} keys")

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False
