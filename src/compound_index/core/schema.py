"""Declared key schemas per object type.

Each object type names its key fields in order. The order decides which
prefixes are queryable and must not change while data exists.
"""

from __future__ import annotations

import logging
import tomllib
from collections.abc import Iterator, Mapping, Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from .errors import KeyArityError, SchemaError, UnknownObjectTypeError
from .types import KeyTuple, ObjectType

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ObjectSchema:
    """Ordered key fields of one object type.

    Attributes:
        object_type: Namespace tag of the record family
        key_fields: Field names, most significant first
    """

    object_type: ObjectType
    key_fields: tuple[str, ...]

    def __post_init__(self):
        if not self.object_type:
            raise SchemaError("object_type must be a non-empty string")
        # Accept lists from callers and TOML documents, but not a bare string
        if isinstance(self.key_fields, (str, bytes)) or not isinstance(self.key_fields, Sequence):
            raise SchemaError(
                f"{self.object_type!r} key_fields must be a list of names, "
                f"got {type(self.key_fields).__name__}"
            )
        object.__setattr__(self, "key_fields", tuple(self.key_fields))
        bad = [name for name in self.key_fields if not isinstance(name, str) or not name]
        if bad:
            raise SchemaError(f"{self.object_type!r} has invalid key field names {bad!r}")
        if not self.key_fields:
            raise SchemaError(f"{self.object_type!r} declares no key fields")
        if len(set(self.key_fields)) != len(self.key_fields):
            raise SchemaError(f"{self.object_type!r} declares duplicate key fields")

    @property
    def arity(self) -> int:
        return len(self.key_fields)

    def check_full(self, fields: Sequence[str]) -> KeyTuple:
        """Return fields as a tuple, or raise KeyArityError if any are missing."""
        if len(fields) != self.arity:
            raise KeyArityError(
                f"{self.object_type!r} expects {self.arity} key fields "
                f"{self.key_fields}, got {len(fields)}"
            )
        return tuple(fields)

    def key_from_mapping(self, values: Mapping[str, Any]) -> KeyTuple:
        """Pick the key fields out of a record mapping, in declared order."""
        missing = [name for name in self.key_fields if name not in values]
        if missing:
            raise KeyArityError(f"{self.object_type!r} record is missing key fields {missing}")
        return tuple(str(values[name]) for name in self.key_fields)


class SchemaRegistry:
    """Registry of object schemas keyed by object type.

    Invariants:
        - An object type maps to exactly one schema for the registry's lifetime
    """

    def __init__(self, schemas: Sequence[ObjectSchema] = ()):
        self._schemas: dict[ObjectType, ObjectSchema] = {}
        for schema in schemas:
            self.register(schema)

    def register(self, schema: ObjectSchema) -> ObjectSchema:
        existing = self._schemas.get(schema.object_type)
        if existing is not None:
            if existing != schema:
                raise SchemaError(
                    f"{schema.object_type!r} already registered with key fields "
                    f"{existing.key_fields}"
                )
            logger.warning(f"Schema for {schema.object_type} registered twice")
            return existing
        self._schemas[schema.object_type] = schema
        logger.info(f"Registered {schema.object_type} with key fields {schema.key_fields}")
        return schema

    def get(self, object_type: ObjectType) -> ObjectSchema:
        try:
            return self._schemas[object_type]
        except KeyError:
            raise UnknownObjectTypeError(f"No schema registered for {object_type!r}") from None

    def __contains__(self, object_type: object) -> bool:
        return object_type in self._schemas

    def __iter__(self) -> Iterator[ObjectSchema]:
        return iter(self._schemas.values())

    def __len__(self) -> int:
        return len(self._schemas)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> SchemaRegistry:
        """Build a registry from ``{"object_types": {name: {"key_fields": [...]}}}``."""
        object_types = data.get("object_types")
        if not isinstance(object_types, Mapping):
            raise SchemaError("Schema document needs an [object_types] table")
        registry = cls()
        for name, body in object_types.items():
            if not isinstance(body, Mapping) or "key_fields" not in body:
                raise SchemaError(f"Object type {name!r} needs a key_fields list")
            registry.register(ObjectSchema(name, body["key_fields"]))
        return registry

    @classmethod
    def load_toml(cls, path: str | Path) -> SchemaRegistry:
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Schema file not found: {path}")
        try:
            data = tomllib.loads(path.read_text(encoding="utf-8"))
        except tomllib.TOMLDecodeError as e:
            raise SchemaError(f"Invalid schema file {path}: {e}") from e
        logger.info(f"Loading schemas from {path}")
        return cls.from_dict(data)
