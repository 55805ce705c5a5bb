"""Protocol v1 frame builder and parser.

Frame layout::

    +---------+--------+--------------------+-----------+
    | Version |  Size  |      Payload       | Checksum  |
    | 1 byte  | 1 byte |  ``size`` bytes    |  4 bytes  |
    +---------+--------+--------------------+-----------+

- Version: always 1
- Size: payload length, 0-255
- Checksum: big-endian unsigned 32-bit sum of the payload bytes

Frames carry no outer delimiter. Packet data is the back-to-back
concatenation of frames, each one delimited by its own size byte.

Payloads are read-only ``memoryview`` slices of the buffer the frame was
built from or decoded from. The buffer must stay alive and unmodified for
as long as the frame is in use.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from ..utils.checksum import CHECKSUM_SIZE, checksum32
from .errors import PacketError, PacketErrorKind

PROTOCOL_VERSION = 1
HEADER_SIZE = 2  # version + size
FRAME_OVERHEAD = HEADER_SIZE + CHECKSUM_SIZE
MAX_PAYLOAD_SIZE = 0xFF

Buffer = bytes | bytearray | memoryview


def as_view(data: Buffer) -> memoryview:
    """Return a read-only byte view over *data* without copying it."""
    view = data if isinstance(data, memoryview) else memoryview(data)
    if view.format != "B" or view.ndim != 1:
        view = view.cast("B")
    return view.toreadonly()


def validate_chunk_size(chunk_size: int) -> int:
    """Check that *chunk_size* is a usable per-frame payload bound.

    A zero chunk size is a programming error and aborts with
    ``AssertionError``. Values that do not fit in the size byte raise
    ``ValueError``.
    """
    if not isinstance(chunk_size, int) or isinstance(chunk_size, bool):
        raise TypeError(
            f"Chunk size must be an int, got {type(chunk_size).__name__}"
        )
    if chunk_size == 0:
        raise AssertionError("Chunk size must be non-zero")
    if not 0 < chunk_size <= MAX_PAYLOAD_SIZE:
        raise ValueError(
            f"Chunk size must be 1-{MAX_PAYLOAD_SIZE}, got {chunk_size}"
        )
    return chunk_size


@dataclass(frozen=True)
class Packet:
    """A single protocol v1 frame.

    Only the payload is supplied by the caller. Version, size and checksum
    are derived from it so they can never disagree.
    """

    payload: memoryview
    version: int = field(init=False, default=PROTOCOL_VERSION)
    size: int = field(init=False)
    checksum: bytes = field(init=False)

    def __post_init__(self) -> None:
        payload = as_view(self.payload)
        if len(payload) > MAX_PAYLOAD_SIZE:
            raise ValueError(
                f"Payload must be 0-{MAX_PAYLOAD_SIZE} bytes, got {len(payload)}"
            )
        object.__setattr__(self, "payload", payload)
        object.__setattr__(self, "size", len(payload))
        object.__setattr__(
            self, "checksum", checksum32(payload).to_bytes(CHECKSUM_SIZE, "big")
        )

    def __len__(self) -> int:
        return FRAME_OVERHEAD + self.size

    def __repr__(self) -> str:
        return (
            f"Packet(version={self.version}, size={self.size}, "
            f"payload={self.payload.hex(' ') if self.size else '(empty)'}, "
            f"checksum={self.checksum.hex()})"
        )

    @classmethod
    def from_source(cls, source: Buffer, chunk_size: int) -> tuple[Packet, memoryview]:
        """Build a frame from the front of *source*.

        Args:
            source: Bytes to take the payload from. Not copied.
            chunk_size: Maximum payload length, 1-255.

        Returns:
            The frame and the untaken remainder of *source*.
        """
        validate_chunk_size(chunk_size)
        view = as_view(source)
        return cls(view[:chunk_size]), view[chunk_size:]

    def serialize(self) -> bytes:
        """Encode the frame as ``version | size | payload | checksum``."""
        return bytes([self.version, self.size]) + self.payload.tobytes() + self.checksum

    @classmethod
    def deserialize(cls, data: Buffer) -> tuple[Packet, memoryview]:
        """Decode one frame from the front of *data*.

        Trailing bytes are returned untouched as the remainder, since they
        may belong to the frames that follow.

        A size byte that understates the encoded payload still parses; the
        mismatch only shows up as ``INVALID_CHECKSUM``.

        Raises:
            PacketError: ``INVALID_PACKET`` when there are too few bytes,
                ``UNKNOWN_PROTOCOL_VERSION`` when the version byte is not 1,
                ``INVALID_CHECKSUM`` when the stored checksum disagrees.
        """
        view = as_view(data)
        if len(view) < FRAME_OVERHEAD:
            raise PacketError(
                PacketErrorKind.INVALID_PACKET,
                f"need at least {FRAME_OVERHEAD} bytes, got {len(view)}",
            )

        version = view[0]
        if version != PROTOCOL_VERSION:
            raise PacketError(
                PacketErrorKind.UNKNOWN_PROTOCOL_VERSION, f"version byte is {version}"
            )

        size = view[1]
        if size > len(view) - FRAME_OVERHEAD:
            raise PacketError(
                PacketErrorKind.INVALID_PACKET,
                f"declared size {size} overruns {len(view) - FRAME_OVERHEAD} available bytes",
            )

        end = HEADER_SIZE + size
        packet = cls(view[HEADER_SIZE:end])
        stored_checksum = view[end : end + CHECKSUM_SIZE].tobytes()
        if packet.checksum != stored_checksum:
            raise PacketError(
                PacketErrorKind.INVALID_CHECKSUM,
                f"expected {packet.checksum.hex()}, got {stored_checksum.hex()}",
            )

        return packet, view[end + CHECKSUM_SIZE :]
