"""Configuration for compound_index.

Defines the tunable parameters of the key encoding.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .codec import CompoundKeyCodec


@dataclass
class IndexConfig:
    """Configuration parameters for composite-key indexes.

    Attributes:
        length_prefix_width: Number of decimal digits in each segment's length header
        field_encoding: Text encoding used to turn field values into bytes
        schema_path: Optional TOML file declaring the key fields per object type
    """

    length_prefix_width: int = 4  # fields up to 9999 bytes
    field_encoding: str = "utf-8"
    schema_path: str | None = None

    def __post_init__(self):
        if self.length_prefix_width < 1:
            raise ValueError(
                f"length_prefix_width must be positive, got {self.length_prefix_width}"
            )

    def codec(self) -> CompoundKeyCodec:
        """Build a codec matching this configuration."""
        from .codec import CompoundKeyCodec

        return CompoundKeyCodec(
            width=self.length_prefix_width,
            encoding=self.field_encoding,
        )
