"""Tests for the additive 32-bit checksum."""

from packetize_mcp.utils.checksum import CHECKSUM_SIZE, checksum32


def test_checksum_empty():
    """An empty payload sums to zero."""
    assert checksum32(b"") == 0


def test_checksum_known_value():
    """Sum of b"rbc" is 114 + 98 + 99 = 311."""
    assert checksum32(b"rbc") == 311
    assert checksum32(b"rbc").to_bytes(CHECKSUM_SIZE, "big") == bytes([0, 0, 1, 55])


def test_checksum_largest_frame():
    """A full 255-byte payload of 0xFF stays well inside 32 bits."""
    assert checksum32(b"\xff" * 255) == 65025


def test_checksum_wraps_at_32_bits():
    """Sums past 2**32 wrap around instead of growing."""

    class _Huge:
        def __iter__(self):
            yield 0xFFFFFFFF
            yield 2

    assert checksum32(_Huge()) == 1


def test_checksum_accepts_memoryview():
    """Views are summed the same as bytes."""
    data = b"hello world"
    assert checksum32(memoryview(data)[6:]) == checksum32(b"world")
