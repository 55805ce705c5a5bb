"""Protocol layer: frame encoding, checksums, chunking and text split/join."""

from .errors import PacketError, PacketErrorKind
from .framing import Packet, PROTOCOL_VERSION, FRAME_OVERHEAD, MAX_PAYLOAD_SIZE
from .serializer import PacketSerializer, PacketDeserializer
from .packetable import Packetable, PacketString, PacketBytes, split, join
