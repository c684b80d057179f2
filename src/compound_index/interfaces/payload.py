"""Protocol definition for record payload serializers."""

from __future__ import annotations

from typing import Any, Protocol


class PayloadCodec(Protocol):
    """Turns non-key record attributes into opaque bytes and back."""

    def dumps(self, obj: Any) -> bytes:
        """Serialize obj to bytes."""
        ...

    def loads(self, data: bytes) -> Any:
        """Parse bytes produced by dumps()."""
        ...
