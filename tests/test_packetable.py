"""Tests for splitting content into packet data and joining it back."""

import pytest

from packetize_mcp.protocol.errors import PacketError, PacketErrorKind
from packetize_mcp.protocol.framing import Packet
from packetize_mcp.protocol.packetable import (
    PacketBytes,
    Packetable,
    PacketString,
    join,
    split,
)

MESSAGES = [
    "hello",
    "asdfrtyuioasd;235'zx",
    "адяявея12124жз'd;ч",
    " ᾠ ᾡ ᾢ ᾣ ᾤ ᾥ ᾦ ᾧ ᾨ ᾩ ᾪ ᾫ ᾬ ᾭ ᾮ ᾯ ᾰ ᾱ ᾲ ᾳ ᾴ ᾵ ᾶ",
    "",
]


def test_to_packets_yields_frames():
    packets = list(PacketString("hello").to_packets(100))
    assert len(packets) == 1
    assert packets[0].payload == b"hello"


def test_to_packet_data_matches_single_frame():
    """One chunk of packet data is exactly one serialized frame."""
    packet, _ = Packet.from_source(b"rbcd", 4)
    assert PacketString("rbcd").to_packet_data(4) == packet.serialize()


def test_to_packet_data_concatenates_frames():
    data = PacketString("asdf").to_packet_data(3)
    assert data == Packet(b"asd").serialize() + Packet(b"f").serialize()


@pytest.mark.parametrize("message", MESSAGES)
@pytest.mark.parametrize("chunk_size", [1, 4, 7, 255])
def test_round_trip(message, chunk_size):
    """Joining split text gives the original text back."""
    assert join(split(message, chunk_size)) == message


def test_from_packet_data_returns_packet_string():
    restored = PacketString.from_packet_data(PacketString("hi").to_packet_data(1))
    assert isinstance(restored, PacketString)
    assert restored == "hi"


def test_incoming_zero():
    """A frame holding a single null byte joins to a one-character string."""
    assert PacketString.from_packet_data(bytes([1, 1, 0, 0, 0, 0, 0])) == "\u0000"


def test_empty_text_has_no_frames():
    assert PacketString("").to_packet_data(4) == b""
    assert join(b"") == ""


@pytest.mark.parametrize(
    "index, kind",
    [
        (3, PacketErrorKind.INVALID_CHECKSUM),
        (0, PacketErrorKind.UNKNOWN_PROTOCOL_VERSION),
        (1, PacketErrorKind.INVALID_PACKET),
    ],
)
def test_tampered_data(index, kind):
    """Corrupting a byte of the first frame aborts with the matching kind."""
    packet_data = bytearray(PacketString("messageсда").to_packet_data(4))
    packet_data[index] = 100
    with pytest.raises(PacketError) as excinfo:
        PacketString.from_packet_data(bytes(packet_data))
    assert excinfo.value.kind is kind
    assert excinfo.value.offset == 0


def test_dropped_frame_corrupts_message():
    """Losing a frame in the middle of a character is caught at join time."""
    packet_data = PacketString("сда").to_packet_data(1)
    frame_size = len(Packet(b"x"))
    with pytest.raises(PacketError) as excinfo:
        PacketString.from_packet_data(packet_data[frame_size:])
    assert excinfo.value.kind is PacketErrorKind.CORRUPTED_MESSAGE


def test_reordered_frames_corrupt_message():
    frames = [p.serialize() for p in PacketString("д").to_packets(1)]
    with pytest.raises(PacketError) as excinfo:
        join(b"".join(reversed(frames)))
    assert excinfo.value.kind is PacketErrorKind.CORRUPTED_MESSAGE


def test_packet_bytes_round_trip():
    """Binary content joins back even when it is not valid text."""
    payload = PacketBytes(b"\xff\xfe\x00\x81" * 70)
    data = payload.to_packet_data(255)
    restored = PacketBytes.from_packet_data(data)
    assert isinstance(restored, PacketBytes)
    assert restored == payload


def test_custom_packetable():
    """Any subclass providing to_bytes/from_payload gets split and join."""

    class Numbers(Packetable):
        def __init__(self, values):
            self.values = list(values)

        def to_bytes(self):
            return bytes(self.values)

        @classmethod
        def from_payload(cls, payload):
            return cls(payload)

    data = Numbers([1, 2, 3, 4, 5]).to_packet_data(2)
    assert Numbers.from_packet_data(data).values == [1, 2, 3, 4, 5]


def test_zero_chunk_size_aborts():
    with pytest.raises(AssertionError):
        PacketString("abc").to_packets(0)
