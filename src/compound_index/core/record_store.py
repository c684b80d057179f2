"""Record store - main public API.

Orchestrates the key codec, the range planner and a backing ordered store.
"""

from __future__ import annotations

import logging
from collections.abc import Generator, Iterator, Sequence
from typing import TYPE_CHECKING

from .config import IndexConfig
from .planner import RangeQueryPlanner, is_exact
from .types import KeyRange, KeyTuple, ObjectType, Payload, StoredRecord

if TYPE_CHECKING:
    from ..interfaces.store import OrderedKVStore
    from .schema import SchemaRegistry

logger = logging.getLogger(__name__)


class RecordStore:
    """Records keyed by an ordered tuple of fields, queryable by prefix.

    Args:
        store: Backing ordered key-value store
        registry: Declared key fields per object type
        config: Key encoding configuration

    Public API:
        - put(object_type, fields, payload): Insert or overwrite
        - get_exact(object_type, fields): Payload or None
        - scan_by_prefix(object_type, prefix): Lazy (tail fields, payload) pairs
        - scan_records(object_type, prefix): Lazy (fields, payload) records
        - delete(object_type, fields): Remove a record

    Store errors propagate unchanged; nothing here retries or locks.
    """

    def __init__(self, store: OrderedKVStore, registry: SchemaRegistry, config: IndexConfig | None = None):
        self.store = store
        self.registry = registry
        self.config = config or IndexConfig()
        self.codec = self.config.codec()
        self.planner = RangeQueryPlanner(self.codec)
        logger.info(f"Initialized record store with {len(registry)} object types ({self.codec!r})")

    @classmethod
    def from_config(cls, store: OrderedKVStore, config: IndexConfig) -> RecordStore:
        """Build a record store whose schemas come from config.schema_path."""
        from .schema import SchemaRegistry

        if config.schema_path is None:
            raise ValueError("IndexConfig.schema_path is not set")
        return cls(store, SchemaRegistry.load_toml(config.schema_path), config)

    def _full_key(self, object_type: ObjectType, fields: Sequence[str]) -> bytes:
        fields = self.registry.get(object_type).check_full(fields)
        return self.codec.encode(object_type, fields)

    def put(self, object_type: ObjectType, fields: Sequence[str], payload: Payload) -> None:
        """Write payload under the full key tuple, replacing any previous record."""
        key = self._full_key(object_type, fields)
        logger.debug(f"put {object_type} {key.hex()} ({len(payload)} bytes)")
        self.store.put(key, payload)

    def get_exact(self, object_type: ObjectType, fields: Sequence[str]) -> Payload | None:
        """Return the payload stored under the full key tuple, or None."""
        key = self._full_key(object_type, fields)
        payload = self.store.get(key)
        logger.debug(f"get {object_type} {key.hex()}: {'hit' if payload is not None else 'miss'}")
        return payload

    def delete(self, object_type: ObjectType, fields: Sequence[str]) -> None:
        key = self._full_key(object_type, fields)
        logger.debug(f"delete {object_type} {key.hex()}")
        self.store.delete(key)

    def _scan(self, object_type: ObjectType, prefix: Sequence[str], skip: int) -> Generator[tuple[KeyTuple, Payload], None, None]:
        # Plan before returning so bad prefixes fail at the call site
        schema = self.registry.get(object_type)
        key_range = self.planner.plan(object_type, prefix, schema.arity)
        if is_exact(prefix, schema.arity):
            return self._iter_exact(key_range.start, tuple(prefix), skip)
        return self._iter_range(key_range, skip)

    def _iter_exact(self, key: bytes, fields: KeyTuple, skip: int) -> Iterator[tuple[KeyTuple, Payload]]:
        # A full tuple names one key; a point get avoids opening a cursor
        payload = self.store.get(key)
        if payload is not None:
            yield fields[skip:], payload

    def _iter_range(self, key_range: KeyRange, skip: int) -> Iterator[tuple[KeyTuple, Payload]]:
        cursor = iter(self.store.range(key_range.start, key_range.end))
        try:
            for key, payload in cursor:
                yield self.codec.decode_fields(key, skip), payload
        finally:
            close = getattr(cursor, "close", None)
            if close is not None:
                close()

    def scan_by_prefix(self, object_type: ObjectType, prefix: Sequence[str]) -> Iterator[tuple[KeyTuple, Payload]]:
        """Iterate records whose first len(prefix) fields equal prefix.

        Yields (tail fields, payload) pairs in ascending key order, where the
        tail is the key fields after the prefix. Closing the iterator early
        closes the underlying store cursor.

        Raises:
            PrefixLengthError: prefix is longer than the declared key fields
        """
        return self._scan(object_type, prefix, len(prefix))

    def scan_records(self, object_type: ObjectType, prefix: Sequence[str] = ()) -> Iterator[StoredRecord]:
        """Like scan_by_prefix but yields full key tuples."""
        return self._iter_records(self._scan(object_type, prefix, 0))

    def _iter_records(self, records: Generator[tuple[KeyTuple, Payload], None, None]) -> Iterator[StoredRecord]:
        try:
            for fields, payload in records:
                yield StoredRecord(fields, payload)
        finally:
            records.close()

    def count(self, object_type: ObjectType, prefix: Sequence[str] = ()) -> int:
        return sum(1 for _ in self._scan(object_type, prefix, len(prefix)))
