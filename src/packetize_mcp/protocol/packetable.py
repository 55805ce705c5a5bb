"""Split content into packet data and join packet data back into content."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import TypeVar

from .errors import PacketError, PacketErrorKind
from .framing import Buffer
from .serializer import PacketDeserializer, PacketSerializer

logger = logging.getLogger(__name__)

TEXT_ENCODING = "utf-8"

P = TypeVar("P", bound="Packetable")


class Packetable(ABC):
    """Content that can travel as protocol v1 packet data.

    Subclasses expose their raw encoding through :meth:`to_bytes` and
    rebuild themselves from joined payload bytes in :meth:`from_payload`.
    """

    @abstractmethod
    def to_bytes(self) -> Buffer:
        """Return the raw bytes that get split into frames."""

    @classmethod
    @abstractmethod
    def from_payload(cls: type[P], payload: bytes) -> P:
        """Rebuild the content from the joined payload bytes."""

    def to_packets(self, chunk_size: int) -> PacketSerializer:
        """Return a lazy sequence of frames over this content."""
        return PacketSerializer(self.to_bytes(), chunk_size)

    def to_packet_data(self, chunk_size: int) -> bytes:
        """Encode the whole content as concatenated frames."""
        return b"".join(packet.serialize() for packet in self.to_packets(chunk_size))

    @classmethod
    def from_packet_data(cls: type[P], packet_data: Buffer) -> P:
        """Decode every frame in *packet_data* and rebuild the content.

        Raises:
            PacketError: From the first frame that fails to decode, or
                ``CORRUPTED_MESSAGE`` if the joined payload is not valid
                content.
        """
        message = bytearray()
        count = 0
        for packet in PacketDeserializer(packet_data):
            message += packet.payload
            count += 1
        logger.debug("Joined %d frame(s) into %d byte(s)", count, len(message))
        return cls.from_payload(bytes(message))


class PacketString(str, Packetable):
    """Text that splits into packet data as UTF-8.

    Usage::

        data = PacketString("hello").to_packet_data(4)
        text = PacketString.from_packet_data(data)
    """

    def to_bytes(self) -> bytes:
        return self.encode(TEXT_ENCODING)

    @classmethod
    def from_payload(cls, payload: bytes) -> PacketString:
        try:
            return cls(payload.decode(TEXT_ENCODING))
        except UnicodeDecodeError as e:
            raise PacketError(
                PacketErrorKind.CORRUPTED_MESSAGE,
                f"joined payload is not valid {TEXT_ENCODING} at byte {e.start}",
            ) from e


class PacketBytes(bytes, Packetable):
    """Binary content; any joined payload is valid."""

    def to_bytes(self) -> bytes:
        return self

    @classmethod
    def from_payload(cls, payload: bytes) -> PacketBytes:
        return cls(payload)


def split(text: str, chunk_size: int) -> bytes:
    """Encode *text* as packet data with at most *chunk_size* bytes per frame."""
    return PacketString(text).to_packet_data(chunk_size)


def join(packet_data: Buffer) -> str:
    """Decode packet data produced by :func:`split` back into text."""
    return str(PacketString.from_packet_data(packet_data))
