"""Decode-time error taxonomy for protocol v1."""

from __future__ import annotations

from enum import Enum
from typing import Any


class PacketErrorKind(Enum):
    """Closed set of data-quality failures reported while decoding."""

    INVALID_PACKET = "Invalid packet"
    INVALID_CHECKSUM = "Checksum invalid"
    UNKNOWN_PROTOCOL_VERSION = "Unknown protocol version"
    CORRUPTED_MESSAGE = "Data is corrupted"


class PacketError(Exception):
    """Raised when packet data cannot be decoded.

    Args:
        kind: Which of the four failure kinds occurred.
        detail: Optional human-readable context.
        offset: Byte offset into the packet data of the failing frame,
            when known.
    """

    def __init__(
        self,
        kind: PacketErrorKind,
        detail: str = "",
        offset: int | None = None,
    ) -> None:
        self.kind = kind
        self.detail = detail
        self.offset = offset
        super().__init__(str(self))

    def __str__(self) -> str:
        if self.detail:
            return f"{self.kind.value}: {self.detail}"
        return self.kind.value

    def __repr__(self) -> str:
        return f"PacketError({self.kind.name}, offset={self.offset})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PacketError):
            return NotImplemented
        return self.kind is other.kind

    def __hash__(self) -> int:
        return hash(self.kind)

    def with_offset(self, offset: int) -> PacketError:
        """Return a copy of this error located at *offset*."""
        return PacketError(self.kind, self.detail, offset)

    def to_dict(self) -> dict[str, Any]:
        """Map the error into a JSON-friendly fragment."""
        return {
            "error": str(self),
            "kind": self.kind.name,
            "offset": self.offset,
        }
