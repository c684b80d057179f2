"""Exception hierarchy for compound_index.

Every error raised by key encoding, range planning and schema checks.
"""

from __future__ import annotations


class CompoundKeyError(Exception):
    """Base exception for all compound_index errors."""
    pass


class KeyEncodingError(CompoundKeyError):
    """Raised when a key tuple cannot be encoded."""
    pass


class EmptyTupleError(KeyEncodingError):
    """Raised when a full key is requested for a tuple with no fields."""
    pass


class FieldTooLongError(KeyEncodingError):
    """Raised when a field does not fit the fixed-width length prefix."""

    def __init__(self, value: str, length: int, limit: int):
        self.value = value
        self.length = length
        self.limit = limit
        super().__init__(
            f"Field of {length} bytes exceeds the {limit} byte limit: {value[:32]!r}"
        )


class KeyDecodeError(CompoundKeyError):
    """Raised when a physical key is malformed."""
    pass


class PrefixLengthError(CompoundKeyError):
    """Raised when a prefix supplies more fields than the object type has."""
    pass


class SchemaError(CompoundKeyError):
    """Raised when a schema definition is invalid or conflicting."""
    pass


class UnknownObjectTypeError(SchemaError):
    """Raised when no schema is registered for an object type."""
    pass


class KeyArityError(SchemaError):
    """Raised when a key tuple does not match the declared field count."""
    pass


class PayloadError(CompoundKeyError):
    """Raised when a record payload cannot be serialized or parsed."""
    pass


class RecordNotFoundError(CompoundKeyError):
    """Raised when an update targets a record that does not exist."""
    pass
