"""Low-level helpers shared by the protocol layer."""

from .checksum import checksum32, CHECKSUM_SIZE
