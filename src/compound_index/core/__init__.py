"""Composite key core package."""

from .codec import CompoundKeyCodec
from .planner import RangeQueryPlanner
from .record_store import RecordStore
from .schema import ObjectSchema, SchemaRegistry

__all__ = ["CompoundKeyCodec", "RangeQueryPlanner", "RecordStore", "ObjectSchema", "SchemaRegistry"]
