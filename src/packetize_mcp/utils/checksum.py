"""Additive checksum used by protocol v1 frames.

The checksum is the plain sum of every payload byte, kept as an unsigned
32-bit integer. Sums that exceed 32 bits wrap around modulo 2**32. With a
255-byte payload cap the largest reachable value is 255 * 255 = 65025, so
wraparound only matters if the payload bound is ever relaxed.
"""

from __future__ import annotations

CHECKSUM_SIZE = 4
CHECKSUM_MASK = 0xFFFFFFFF


def checksum32(data: bytes | bytearray | memoryview) -> int:
    """Compute the additive 32-bit checksum of *data*."""
    return sum(data) & CHECKSUM_MASK
