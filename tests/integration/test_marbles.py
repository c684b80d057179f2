"""Integration tests for the marble registry."""

import json

import pytest

from compound_index import PayloadError, RecordNotFoundError, RecordStore, SchemaRegistry
from compound_index.components.memory_store import MemoryKVStore
from compound_index.marbles import MARBLE_TYPE, Marble, MarbleRegistry


@pytest.fixture
def kv():
    """Create empty backing store."""
    return MemoryKVStore()


@pytest.fixture
def marbles(kv):
    """Create marble registry on a fresh record store."""
    return MarbleRegistry(RecordStore(kv, SchemaRegistry()))


def test_schema_registered(marbles):
    """Test that the registry declares (color, name) as the key."""
    assert marbles.records.registry.get(MARBLE_TYPE).key_fields == ("color", "name")


def test_init_and_get(marbles):
    """Test creating a marble and reading it back."""
    created = marbles.init_marble("rose", "Blue", 35, "Bob")
    assert created == Marble(name="rose", color="blue", size=35, owner="bob")
    assert marbles.get_marble("rose", "blue") == created
    assert marbles.get_marble("rose", "BLUE") == created
    assert marbles.get_marble("tulip", "blue") is None


def test_stored_document(marbles, kv):
    """Test the JSON body written under the compound key."""
    marbles.init_marble("rose", "blue", 35, "bob")
    raw = kv.get(b"0006Marble0004blue0004rose")
    assert json.loads(raw) == {"docType": "Marble", "name": "rose", "color": "blue", "size": 35, "owner": "bob"}


def test_marbles_by_color(marbles):
    """Test the blue marble query."""
    marbles.init_marble("tulip", "blue", 20, "alice")
    marbles.init_marble("rose", "blue", 35, "bob")
    marbles.init_marble("poppy", "red", 10, "carol")

    blue = marbles.marbles_by_color("blue")
    assert [m.name for m in blue] == ["rose", "tulip"]
    assert marbles.marbles_by_color("green") == []


def test_all_marbles(marbles):
    """Test listing every marble."""
    marbles.init_marble("rose", "blue", 35, "bob")
    marbles.init_marble("poppy", "red", 10, "carol")
    assert sorted(m.name for m in marbles.all_marbles()) == ["poppy", "rose"]


def test_set_owner(marbles):
    """Test transferring a marble."""
    marbles.init_marble("rose", "blue", 35, "bob")
    updated = marbles.set_owner("rose", "blue", "Alice")
    assert updated.owner == "alice"
    assert marbles.get_marble("rose", "blue").owner == "alice"
    assert len(marbles.marbles_by_color("blue")) == 1


def test_set_owner_missing(marbles):
    """Test transferring a marble that does not exist."""
    with pytest.raises(RecordNotFoundError):
        marbles.set_owner("rose", "blue", "alice")


def test_delete_marble(marbles):
    """Test removing a marble."""
    marbles.init_marble("rose", "blue", 35, "bob")
    marbles.delete_marble("rose", "blue")
    assert marbles.get_marble("rose", "blue") is None
    assert marbles.all_marbles() == []


def test_marble_from_dict_malformed():
    """Test that incomplete documents are rejected."""
    with pytest.raises(PayloadError):
        Marble.from_dict({"name": "rose"})
