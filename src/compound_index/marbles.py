"""Marble asset registry.

Marbles are keyed by (color, name), so "all blue marbles" is a prefix scan
and a single marble is an exact lookup. Bodies are stored as JSON.
"""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass
from typing import TYPE_CHECKING, Any

from .components.payload import JsonPayloadCodec
from .core.errors import PayloadError, RecordNotFoundError
from .core.schema import ObjectSchema

if TYPE_CHECKING:
    from .core.record_store import RecordStore
    from .interfaces.payload import PayloadCodec

logger = logging.getLogger(__name__)

MARBLE_TYPE = "Marble"
MARBLE_SCHEMA = ObjectSchema(MARBLE_TYPE, ("color", "name"))


@dataclass
class Marble:
    """A marble asset.

    Attributes:
        name: Marble name, unique within a color
        color: Lower-cased color
        size: Size in millimetres
        owner: Lower-cased owner name
        object_type: Stored as ``docType`` to tell record families apart
    """

    name: str
    color: str
    size: int
    owner: str
    object_type: str = MARBLE_TYPE

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["docType"] = data.pop("object_type")
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Marble:
        try:
            return cls(
                name=data["name"],
                color=data["color"],
                size=int(data["size"]),
                owner=data["owner"],
                object_type=data.get("docType", MARBLE_TYPE),
            )
        except (KeyError, TypeError, ValueError) as e:
            raise PayloadError(f"Malformed marble document: {e}") from e


class MarbleRegistry:
    """Create, look up and transfer marbles on a RecordStore.

    Args:
        records: Record store; the Marble schema is registered on it
        codec: Payload serializer for marble bodies
    """

    def __init__(self, records: RecordStore, codec: PayloadCodec | None = None):
        self.records = records
        self.codec = codec or JsonPayloadCodec()
        records.registry.register(MARBLE_SCHEMA)

    def _save(self, marble: Marble) -> None:
        document = marble.to_dict()
        self.records.put(MARBLE_TYPE, MARBLE_SCHEMA.key_from_mapping(document), self.codec.dumps(document))

    def init_marble(self, name: str, color: str, size: int, owner: str) -> Marble:
        """Create or overwrite a marble; color and owner are lower-cased."""
        marble = Marble(name=name, color=color.lower(), size=int(size), owner=owner.lower())
        self._save(marble)
        logger.info(f"Stored marble {marble.name} ({marble.color})")
        return marble

    def get_marble(self, name: str, color: str) -> Marble | None:
        payload = self.records.get_exact(MARBLE_TYPE, (color.lower(), name))
        if payload is None:
            return None
        return Marble.from_dict(self.codec.loads(payload))

    def marbles_by_color(self, color: str) -> list[Marble]:
        """All marbles of one color, shorter names first, then by name."""
        return [
            Marble.from_dict(self.codec.loads(payload))
            for _name, payload in self.records.scan_by_prefix(MARBLE_TYPE, (color.lower(),))
        ]

    def all_marbles(self) -> list[Marble]:
        return [
            Marble.from_dict(self.codec.loads(payload))
            for _fields, payload in self.records.scan_by_prefix(MARBLE_TYPE, ())
        ]

    def set_owner(self, name: str, color: str, owner: str) -> Marble:
        """Transfer a marble to a new owner.

        Raises:
            RecordNotFoundError: no marble with that color and name
        """
        marble = self.get_marble(name, color)
        if marble is None:
            raise RecordNotFoundError(f"No {color.lower()} marble named {name!r}")
        marble.owner = owner.lower()
        self._save(marble)
        logger.info(f"Transferred marble {name} ({marble.color}) to {marble.owner}")
        return marble

    def delete_marble(self, name: str, color: str) -> None:
        self.records.delete(MARBLE_TYPE, (color.lower(), name))
