"""compound_index - multi-column secondary indexes over a flat ordered key-value store."""

from .core.codec import CompoundKeyCodec, decode_key, encode_key
from .core.config import IndexConfig
from .core.errors import (
    CompoundKeyError,
    KeyEncodingError,
    EmptyTupleError,
    FieldTooLongError,
    KeyDecodeError,
    PrefixLengthError,
    SchemaError,
    UnknownObjectTypeError,
    KeyArityError,
    PayloadError,
    RecordNotFoundError,
)
from .core.planner import RangeQueryPlanner, prefix_successor
from .core.record_store import RecordStore
from .core.schema import ObjectSchema, SchemaRegistry
from .core.types import KeyRange, KeyTuple, ObjectType, Payload, PhysicalKey, StoredRecord

__all__ = [
    "CompoundKeyCodec",
    "decode_key",
    "encode_key",
    "IndexConfig",
    "CompoundKeyError",
    "KeyEncodingError",
    "EmptyTupleError",
    "FieldTooLongError",
    "KeyDecodeError",
    "PrefixLengthError",
    "SchemaError",
    "UnknownObjectTypeError",
    "KeyArityError",
    "PayloadError",
    "RecordNotFoundError",
    "RangeQueryPlanner",
    "prefix_successor",
    "RecordStore",
    "ObjectSchema",
    "SchemaRegistry",
    "KeyRange",
    "KeyTuple",
    "ObjectType",
    "Payload",
    "PhysicalKey",
    "StoredRecord",
]
