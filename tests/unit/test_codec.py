"""Unit tests for the composite key codec."""

import itertools

import pytest

from compound_index import decode_key, encode_key
from compound_index.core.codec import CompoundKeyCodec
from compound_index.core.errors import EmptyTupleError, FieldTooLongError, KeyDecodeError

# Values chosen to look like length headers and to collide under naive schemes
TRICKY_VALUES = ["", "0", "1", "a", "00", "01", "10", "0001", "a1", "1a", "0004blue"]


@pytest.fixture
def codec():
    """Create default 4-digit codec."""
    return CompoundKeyCodec()


def test_encode_layout(codec):
    """Test that every segment is a 4-digit length followed by raw bytes."""
    key = codec.encode("Marble", ["blue", "rose"])
    assert key == b"0006Marble0004blue0004rose"


def test_encode_prefix_allows_zero_fields(codec):
    """Test that a prefix may consist of the object type alone."""
    assert codec.encode_prefix("Marble", []) == b"0006Marble"


def test_encode_empty_tuple_rejected(codec):
    """Test that full keys need at least one field."""
    with pytest.raises(EmptyTupleError):
        codec.encode("Marble", [])


def test_empty_string_field_is_legal(codec):
    """Test that an empty field value still gets a segment."""
    assert codec.encode("T", [""]) == b"0001T0000"


def test_field_length_counts_bytes_not_characters(codec):
    """Test that multi-byte characters are measured after encoding."""
    assert codec.encode("T", ["é"]) == b"0001T0002" + "é".encode("utf-8")


def test_field_too_long(codec):
    """Test that the fixed width caps field size."""
    codec.encode("T", ["x" * 9999])
    with pytest.raises(FieldTooLongError) as exc_info:
        codec.encode("T", ["x" * 10000])
    assert exc_info.value.length == 10000
    assert exc_info.value.limit == 9999


def test_object_type_too_long():
    """Test that the object type segment is bounded too."""
    narrow = CompoundKeyCodec(width=1)
    with pytest.raises(FieldTooLongError):
        narrow.encode("Marble" * 2, ["a"])


def test_narrow_width():
    """Test a 2-digit codec."""
    narrow = CompoundKeyCodec(width=2)
    assert narrow.encode("T", ["abc"]) == b"01T03abc"
    with pytest.raises(FieldTooLongError):
        narrow.encode("T", ["x" * 100])


def test_invalid_width():
    """Test that a zero-digit header is refused."""
    with pytest.raises(ValueError):
        CompoundKeyCodec(width=0)


def test_non_string_field_rejected(codec):
    """Test that only str values are encoded."""
    with pytest.raises(TypeError):
        codec.encode("T", [42])


def test_decode_inverts_encode(codec):
    """Test decoding of keys containing digit-like and empty fields."""
    for fields in [("blue", "rose"), ("", "0004ab"), ("10",), ("é", "", "x")]:
        assert codec.decode(codec.encode("Marble", fields)) == ("Marble", fields)


def test_decode_fields_skip(codec):
    """Test that decode_fields drops leading fields."""
    key = codec.encode("Marble", ["blue", "rose"])
    assert codec.decode_fields(key) == ("blue", "rose")
    assert codec.decode_fields(key, skip=1) == ("rose",)
    assert codec.decode_fields(key, skip=2) == ()


@pytest.mark.parametrize(
    "key",
    [
        b"",
        b"00",
        b"00x6Marble",
        b"0006Marb",
        b"0006Marble0004blu",
        b"0006Marble00",
        b"0001\xff",
    ],
)
def test_decode_malformed(codec, key):
    """Test that malformed keys raise KeyDecodeError."""
    with pytest.raises(KeyDecodeError):
        codec.decode(key)


def test_injective_across_arities(codec):
    """Test that distinct tuples (any arity) never share a key."""
    tuples = []
    for arity in (1, 2, 3):
        tuples.extend(itertools.product(TRICKY_VALUES[:6], repeat=arity))
    keys = {codec.encode("T", t) for t in tuples}
    assert len(keys) == len(tuples)


def test_prefix_free_same_arity(codec):
    """Test that no full key is a byte-prefix of another of the same arity."""
    tuples = list(itertools.product(TRICKY_VALUES, repeat=2))
    keys = [codec.encode("T", t) for t in tuples]
    for i, a in enumerate(keys):
        for j, b in enumerate(keys):
            if i != j:
                assert not b.startswith(a), (tuples[i], tuples[j])


def test_prefix_key_is_byte_prefix(codec):
    """Test that encoding the first k fields yields a prefix of the full key."""
    fields = ("blue", "", "rose")
    full = codec.encode("Marble", fields)
    for k in range(len(fields) + 1):
        assert full.startswith(codec.encode_prefix("Marble", fields[:k]))


def test_object_types_do_not_collide(codec):
    """Test that object type names sharing a prefix stay apart."""
    a = codec.encode("Marble", ["s"])
    b = codec.encode("Marbles", [""])
    assert a != b
    assert not b.startswith(codec.encode_prefix("Marble", []))


def test_fixed_width_orders_by_length_then_content(codec):
    """Test that shorter fields sort first regardless of the length digits."""
    short = codec.encode("T", ["ab"])
    long = codec.encode("T", ["abcdefghij"])
    assert short < long
    assert codec.encode("T", ["rose"]) < codec.encode("T", ["tulip"])
    assert codec.encode("T", ["rose"]) < codec.encode("T", ["ruby"])


def test_module_level_helpers():
    """Test the default-codec convenience functions."""
    key = encode_key("Marble", ("blue", "rose"))
    assert key == b"0006Marble0004blue0004rose"
    assert decode_key(key) == ("Marble", ("blue", "rose"))
