"""Prefix range planner.

Turns "all keys of an object type whose first k fields equal p" into one
half-open range scan over the physical keyspace.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from .codec import CompoundKeyCodec
from .errors import PrefixLengthError
from .types import KeyRange, ObjectType, PhysicalKey

logger = logging.getLogger(__name__)


def prefix_successor(prefix: PhysicalKey) -> PhysicalKey | None:
    """Return the smallest key greater than every key starting with ``prefix``.

    Increments the last byte; trailing 0xFF bytes are dropped and the carry
    moves left. Returns None when no such key exists (empty or all 0xFF),
    meaning the range has no upper bound.
    """
    buf = bytearray(prefix)
    while buf:
        if buf[-1] < 0xFF:
            buf[-1] += 1
            return bytes(buf)
        buf.pop()
    return None


def is_exact(prefix: Sequence[str], arity: int) -> bool:
    """True when the prefix names every key field."""
    return len(prefix) == arity


class RangeQueryPlanner:
    """Compute scan ranges for partial key tuples.

    Args:
        codec: Codec that produced the stored keys

    Invariants:
        - plan() contains the key of every full tuple starting with the prefix
        - plan() excludes keys of other object types and non-matching tuples
    """

    def __init__(self, codec: CompoundKeyCodec | None = None):
        self.codec = codec or CompoundKeyCodec()

    def plan(self, object_type: ObjectType, prefix: Sequence[str], arity: int) -> KeyRange:
        """Return ``[start, end)`` covering every full tuple that extends ``prefix``.

        Raises:
            PrefixLengthError: the prefix is longer than the tuple arity
        """
        if arity < 1:
            raise PrefixLengthError(f"Arity of {object_type!r} must be positive, got {arity}")
        if len(prefix) > arity:
            raise PrefixLengthError(
                f"Prefix of {len(prefix)} fields exceeds {arity} key fields of {object_type!r}"
            )
        start = self.codec.encode_prefix(object_type, prefix)
        end = prefix_successor(start)
        logger.debug(
            f"Planned {object_type} prefix k={len(prefix)}/{arity}: "
            f"[{start.hex()}, {end.hex() if end is not None else 'inf'})"
        )
        return KeyRange(start, end)
