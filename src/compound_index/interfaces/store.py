"""Protocol definition for the ordered key-value store."""

from __future__ import annotations

from collections.abc import Iterator
from typing import Protocol

from ..core.types import PhysicalKey


class OrderedKVStore(Protocol):
    """Minimal contract composite-key indexes need from a backing store."""

    def put(self, key: PhysicalKey, value: bytes) -> None:
        """Insert or overwrite key with value."""
        ...

    def get(self, key: PhysicalKey) -> bytes | None:
        """Return the value for key or None if not present."""
        ...

    def delete(self, key: PhysicalKey) -> None:
        """Remove key; absent keys are ignored."""
        ...

    def range(self, start: PhysicalKey | None, end: PhysicalKey | None) -> Iterator[tuple[PhysicalKey, bytes]]:
        """Ordered iterator over keys in ``[start, end)``; None leaves a side open."""
        ...
