"""Composite key codec.

Packs an object type and an ordered tuple of field values into a single
physical key for a flat ordered key-value store.

Key format:
    [len(object_type)][object_type][len(f1)][f1]...[len(fN)][fN]

Every length header is a zero-padded ASCII decimal number of fixed width
(4 digits by default), so each segment is self-delimiting and no byte value
is reserved as a separator. Keys of the same object type compare field by
field, first by field byte length and then by field content.
"""

from __future__ import annotations

from collections.abc import Sequence

from .errors import EmptyTupleError, FieldTooLongError, KeyDecodeError
from .types import KeyTuple, ObjectType, PhysicalKey


DEFAULT_WIDTH = 4


class CompoundKeyCodec:
    """Fixed-width length-prefixed encoding of (object type, key tuple).

    Args:
        width: Number of decimal digits in each length header
        encoding: Text encoding applied to the object type and field values

    Invariants:
        - Distinct tuples of one object type never share a key (injective)
        - A full key is never a byte-prefix of another full key of the
          same arity
        - The key of any prefix of a tuple is a byte-prefix of the tuple's key
    """

    def __init__(self, width: int = DEFAULT_WIDTH, encoding: str = "utf-8"):
        if width < 1:
            raise ValueError(f"width must be positive, got {width}")
        self.width = width
        self.encoding = encoding
        self.max_length = 10 ** width - 1

    def __repr__(self) -> str:
        return f"CompoundKeyCodec(width={self.width}, encoding={self.encoding!r})"

    def segment(self, value: str) -> bytes:
        """Encode one value as ``length header + raw bytes``."""
        if not isinstance(value, str):
            raise TypeError(f"Key values must be str, got {type(value).__name__}")
        raw = value.encode(self.encoding)
        if len(raw) > self.max_length:
            raise FieldTooLongError(value, len(raw), self.max_length)
        return str(len(raw)).zfill(self.width).encode("ascii") + raw

    def encode_prefix(self, object_type: ObjectType, fields: Sequence[str]) -> PhysicalKey:
        """Encode the object type and any number of leading fields (zero allowed)."""
        parts = [self.segment(object_type)]
        parts.extend(self.segment(value) for value in fields)
        return b"".join(parts)

    def encode(self, object_type: ObjectType, fields: Sequence[str]) -> PhysicalKey:
        """Encode a full key tuple.

        Raises:
            EmptyTupleError: fields is empty
            FieldTooLongError: a value exceeds the length header capacity
        """
        if len(fields) == 0:
            raise EmptyTupleError(f"Key tuple for {object_type!r} has no fields")
        return self.encode_prefix(object_type, fields)

    def _read_segment(self, key: bytes, offset: int) -> tuple[str, int]:
        header_end = offset + self.width
        header = key[offset:header_end]
        if len(header) != self.width or not header.isdigit():
            raise KeyDecodeError(
                f"Bad length header at offset {offset} in key {key.hex()}"
            )
        end = header_end + int(header)
        if end > len(key):
            raise KeyDecodeError(
                f"Truncated segment at offset {offset} in key {key.hex()}"
            )
        try:
            value = key[header_end:end].decode(self.encoding)
        except UnicodeDecodeError as e:
            raise KeyDecodeError(f"Undecodable segment in key {key.hex()}: {e}") from e
        return value, end

    def decode(self, key: PhysicalKey) -> tuple[ObjectType, KeyTuple]:
        """Split a physical key back into (object type, fields)."""
        object_type, offset = self._read_segment(key, 0)
        fields = []
        while offset < len(key):
            value, offset = self._read_segment(key, offset)
            fields.append(value)
        return object_type, tuple(fields)

    def decode_fields(self, key: PhysicalKey, skip: int = 0) -> KeyTuple:
        """Decode only the key fields, dropping the first ``skip`` of them."""
        _object_type, fields = self.decode(key)
        return fields[skip:]


_default_codec = CompoundKeyCodec()


def encode_key(object_type: ObjectType, fields: Sequence[str]) -> PhysicalKey:
    """Encode with the default 4-digit codec."""
    return _default_codec.encode(object_type, fields)


def decode_key(key: PhysicalKey) -> tuple[ObjectType, KeyTuple]:
    """Decode with the default 4-digit codec."""
    return _default_codec.decode(key)
