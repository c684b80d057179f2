"""Common type definitions for compound_index.

Key, range and record shapes shared by the codec, planner and store.
"""

from __future__ import annotations

from typing import NamedTuple

# Core primitive types
ObjectType = str
KeyTuple = tuple[str, ...]
PhysicalKey = bytes
Payload = bytes


class KeyRange(NamedTuple):
    """Half-open byte range ``[start, end)``; ``end=None`` means unbounded."""

    start: PhysicalKey
    end: PhysicalKey | None

    def __contains__(self, key: object) -> bool:
        if not isinstance(key, bytes):
            return False
        if key < self.start:
            return False
        return self.end is None or key < self.end


class StoredRecord(NamedTuple):
    """A decoded record as returned by full scans."""

    fields: KeyTuple
    payload: Payload
