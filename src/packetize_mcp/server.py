"""MCP server entry point for protocol v1 packet tools.

Exposes tools, resources, and prompts via the Model Context Protocol
using the official Python MCP SDK with stdio transport. Binary data
crosses the tool boundary as hex strings.
"""

from __future__ import annotations

import json
import logging
from typing import Any

from mcp.server.fastmcp import FastMCP

from .config import Settings, load_settings
from .protocol.errors import PacketError
from .protocol.framing import (
    FRAME_OVERHEAD,
    MAX_PAYLOAD_SIZE,
    PROTOCOL_VERSION,
    Packet,
)
from .protocol.packetable import PacketString
from .protocol.serializer import PacketDeserializer

logger = logging.getLogger(__name__)

mcp = FastMCP(
    "packetize",
    instructions="Split text into protocol v1 packets and join them back",
)

_settings = Settings()


def _resolve_chunk_size(chunk_size: int | None) -> int | None:
    """Fall back to the configured default; None if out of range."""
    if chunk_size is None:
        return _settings.default_chunk_size
    if not 1 <= chunk_size <= MAX_PAYLOAD_SIZE:
        return None
    return chunk_size


def _chunk_size_error(chunk_size: int | None) -> dict[str, Any]:
    return {"error": f"Chunk size must be 1-{MAX_PAYLOAD_SIZE}, got {chunk_size}"}


def _packet_to_dict(packet: Packet) -> dict[str, Any]:
    return {
        "version": packet.version,
        "size": packet.size,
        "payload_hex": packet.payload.hex(),
        "checksum_hex": packet.checksum.hex(),
        "serialized_hex": packet.serialize().hex(),
    }


# ─── FRAME TOOLS ─────────────────────────────────────────────────────

@mcp.tool()
def encode_frame(text: str, chunk_size: int | None = None) -> dict[str, Any]:
    """Build a single frame from the start of some text.

    Takes at most ``chunk_size`` bytes of the UTF-8 encoded text as the
    payload and reports what is left over.

    Args:
        text: Source text.
        chunk_size: Maximum payload bytes (1-255, default from settings).
    """
    size = _resolve_chunk_size(chunk_size)
    if size is None:
        return _chunk_size_error(chunk_size)

    packet, remainder = Packet.from_source(text.encode("utf-8"), size)
    result = _packet_to_dict(packet)
    result["remainder_hex"] = remainder.hex()
    return result


@mcp.tool()
def decode_frame(data_hex: str) -> dict[str, Any]:
    """Decode the first frame found at the front of some hex data.

    Args:
        data_hex: Hex-encoded bytes, whitespace allowed.
    """
    try:
        data = bytes.fromhex(data_hex)
    except ValueError as e:
        return {"error": f"Invalid hex: {e}"}

    try:
        packet, remainder = Packet.deserialize(data)
    except PacketError as e:
        return e.to_dict()

    result = _packet_to_dict(packet)
    result["remainder_hex"] = remainder.hex()
    return result


# ─── MESSAGE TOOLS ───────────────────────────────────────────────────

@mcp.tool()
def split_text(text: str, chunk_size: int | None = None) -> dict[str, Any]:
    """Split text into packet data, one frame per chunk.

    Args:
        text: Message to split.
        chunk_size: Maximum payload bytes per frame (1-255, default from settings).
    """
    size = _resolve_chunk_size(chunk_size)
    if size is None:
        return _chunk_size_error(chunk_size)

    message = PacketString(text)
    packet_data = message.to_packet_data(size)
    return {
        "chunk_size": size,
        "frame_count": sum(1 for _ in message.to_packets(size)),
        "packet_data_hex": packet_data.hex(),
        "length": len(packet_data),
    }


@mcp.tool()
def list_packets(text: str, chunk_size: int | None = None) -> dict[str, Any]:
    """List every frame the text splits into.

    Args:
        text: Message to split.
        chunk_size: Maximum payload bytes per frame (1-255, default from settings).
    """
    size = _resolve_chunk_size(chunk_size)
    if size is None:
        return _chunk_size_error(chunk_size)

    packets = [_packet_to_dict(p) for p in PacketString(text).to_packets(size)]
    return {"chunk_size": size, "packets": packets}


@mcp.tool()
def join_packet_data(data_hex: str) -> dict[str, Any]:
    """Join hex-encoded packet data back into the original text.

    Args:
        data_hex: Concatenated frames as hex, whitespace allowed.
    """
    try:
        data = bytes.fromhex(data_hex)
    except ValueError as e:
        return {"error": f"Invalid hex: {e}"}

    try:
        text = PacketString.from_packet_data(data)
    except PacketError as e:
        return e.to_dict()
    return {"text": str(text)}


@mcp.tool()
def inspect_packet_data(data_hex: str) -> dict[str, Any]:
    """Walk packet data frame by frame, stopping at the first bad frame.

    Frames decoded before a failure are still reported.

    Args:
        data_hex: Concatenated frames as hex, whitespace allowed.
    """
    try:
        data = bytes.fromhex(data_hex)
    except ValueError as e:
        return {"error": f"Invalid hex: {e}"}

    frames: list[dict[str, Any]] = []
    frames_iter = PacketDeserializer(data)
    result: dict[str, Any] = {"frames": frames}
    try:
        for packet in frames_iter:
            entry = _packet_to_dict(packet)
            entry["offset"] = frames_iter.offset - len(packet)
            frames.append(entry)
    except PacketError as e:
        result.update(e.to_dict())
    return result


# ─── MCP RESOURCES ───────────────────────────────────────────────────

@mcp.resource("packetize://protocol/v1")
def resource_protocol_v1() -> str:
    """Wire format description for protocol v1."""
    return json.dumps({
        "version": PROTOCOL_VERSION,
        "layout": [
            {"field": "version", "bytes": 1},
            {"field": "size", "bytes": 1},
            {"field": "payload", "bytes": "size"},
            {"field": "checksum", "bytes": 4, "encoding": "big-endian u32 sum of payload"},
        ],
        "frame_overhead": FRAME_OVERHEAD,
        "max_payload": MAX_PAYLOAD_SIZE,
    })


@mcp.resource("packetize://settings")
def resource_settings() -> str:
    """Current server defaults."""
    return json.dumps({
        "default_chunk_size": _settings.default_chunk_size,
        "log_level": _settings.log_level,
    })


# ─── MCP PROMPTS ─────────────────────────────────────────────────────

@mcp.prompt()
def explain_packet_data(data_hex: str) -> str:
    """Walk through a captured packet data buffer and explain each frame.

    Args:
        data_hex: Concatenated frames as hex.
    """
    return f"""Explain this protocol v1 packet data: {data_hex}

Use the inspect_packet_data tool to list the frames, then for each frame:
- Point out the version byte, size byte, payload and checksum
- Check that the checksum is the sum of the payload bytes
- Say where decoding stopped and why, if it failed

Finish with join_packet_data to show the reassembled text."""


# ─── ENTRY POINT ─────────────────────────────────────────────────────

def main():
    """Run the MCP server with stdio transport."""
    global _settings
    _settings = load_settings()
    logging.basicConfig(level=_settings.log_level)
    logger.info(
        "Starting packetize server (default chunk size %d)",
        _settings.default_chunk_size,
    )
    mcp.run(transport="stdio")


if __name__ == "__main__":
    main()
