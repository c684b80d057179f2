"""JSON payload serialization for record bodies."""

from __future__ import annotations

import json
from typing import Any

from ..core.errors import PayloadError


class JsonPayloadCodec:
    """Encode record attributes as UTF-8 JSON documents.

    Args:
        sort_keys: Emit object members in sorted order for stable bytes
    """

    def __init__(self, sort_keys: bool = True):
        self.sort_keys = sort_keys

    def dumps(self, obj: Any) -> bytes:
        try:
            return json.dumps(obj, sort_keys=self.sort_keys, separators=(",", ":")).encode("utf-8")
        except (TypeError, ValueError) as e:
            raise PayloadError(f"Cannot serialize payload: {e}") from e

    def loads(self, data: bytes) -> Any:
        try:
            return json.loads(data.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError) as e:
            raise PayloadError(f"Cannot parse payload: {e}") from e
