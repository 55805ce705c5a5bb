"""Lazy iterators that turn buffers into frames and packet data back into frames."""

from __future__ import annotations

import logging
from collections.abc import Iterator

from .errors import PacketError
from .framing import Buffer, Packet, as_view, validate_chunk_size

logger = logging.getLogger(__name__)


class PacketSerializer(Iterator[Packet]):
    """Split a buffer into successive frames of at most ``chunk_size`` bytes.

    The iterator is one-shot and forward-only. Each frame borrows a slice of
    the original buffer; concatenating their payloads in order gives the
    buffer back exactly.

    Usage::

        for packet in PacketSerializer(b"hello world", 4):
            wire += packet.serialize()
    """

    def __init__(self, source: Buffer, chunk_size: int) -> None:
        self._chunk_size = validate_chunk_size(chunk_size)
        self._remaining = as_view(source)

    @property
    def chunk_size(self) -> int:
        return self._chunk_size

    @property
    def remaining(self) -> memoryview:
        """The bytes not yet handed out as frames."""
        return self._remaining

    def __iter__(self) -> PacketSerializer:
        return self

    def __next__(self) -> Packet:
        if not self._remaining:
            raise StopIteration
        packet, self._remaining = Packet.from_source(self._remaining, self._chunk_size)
        return packet

    def __repr__(self) -> str:
        return (
            f"PacketSerializer(chunk_size={self._chunk_size}, "
            f"remaining={len(self._remaining)})"
        )


class PacketDeserializer(Iterator[Packet]):
    """Decode frames one after another from the front of packet data.

    Stops when the data is exhausted. The first frame that fails to decode
    raises :class:`PacketError` carrying the frame's byte offset, and the
    iterator yields nothing further.
    """

    def __init__(self, packet_data: Buffer) -> None:
        self._remaining = as_view(packet_data)
        self._offset = 0

    @property
    def offset(self) -> int:
        """Byte offset of the next frame within the packet data."""
        return self._offset

    def __iter__(self) -> PacketDeserializer:
        return self

    def __next__(self) -> Packet:
        if not self._remaining:
            raise StopIteration
        try:
            packet, remainder = Packet.deserialize(self._remaining)
        except PacketError as e:
            logger.debug("Rejected frame at offset %d: %s", self._offset, e)
            self._remaining = self._remaining[:0]
            raise e.with_offset(self._offset) from e
        self._offset += len(packet)
        self._remaining = remainder
        return packet
