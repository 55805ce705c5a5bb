"""Versioned binary framing ("protocol v1") with an MCP tool server."""

from .protocol import (
    Packet,
    PacketBytes,
    PacketDeserializer,
    PacketError,
    PacketErrorKind,
    Packetable,
    PacketSerializer,
    PacketString,
    join,
    split,
)

__version__ = "0.1.0"
