"""
Bencode encoder for BitTorrent metainfo and tracker responses.
"""
import logging

from .adapter import to_dict_value, to_value
from .config import DEFAULT_MAX_DEPTH, DEFAULT_MAX_SIZE
from .digits import int_to_digits
from .errors import ResourceLimitExceeded
from .structure import BencodeDict, BencodeInt, BencodeList, BencodeString, BencodeType

logger = logging.getLogger(__name__)


class _Output:
    """Chunk accumulator that stops once max_size would be exceeded."""
    def __init__(self, max_size=None):
        self.chunks = []
        self.size = 0
        self.max_size = max_size

    def write(self, chunk: bytes):
        self.size += len(chunk)
        if self.max_size is not None and self.size > self.max_size:
            raise ResourceLimitExceeded(
                f"Encoded output larger than {self.max_size} bytes", self.max_size
            )
        self.chunks.append(chunk)

    def getvalue(self) -> bytes:
        return b"".join(self.chunks)


def encode(obj, max_size=DEFAULT_MAX_SIZE, max_depth=DEFAULT_MAX_DEPTH) -> bytes:
    """
    Encodes a BencodeType tree, or a plain Python object, into bencoded bytes.

    Plain objects are converted with ``to_value`` first, which may raise
    BencodeEncodeError. Dictionary keys are always written in ascending
    byte order. Lists and dicts nested deeper than ``max_depth`` raise
    ResourceLimitExceeded.
    """
    value = obj if isinstance(obj, BencodeType) else to_value(obj, max_depth=max_depth)

    out = _Output(max_size)
    _write_value(value, out, 0, max_depth)
    data = out.getvalue()

    logger.debug("Encoded %s into %d bytes", type(value).__name__, len(data))
    return data


def _write_value(value: BencodeType, out: _Output, depth, max_depth):
    if isinstance(value, (BencodeList, BencodeDict)):
        depth += 1
        if max_depth is not None and depth > max_depth:
            raise ResourceLimitExceeded(
                f"Value nested deeper than {max_depth} levels", max_depth
            )

    if isinstance(value, BencodeInt):
        out.write(encode_int(value.value))
    elif isinstance(value, BencodeString):
        out.write(encode_bytes(value.value))
    elif isinstance(value, BencodeList):
        out.write(b"l")
        for item in value.value:
            _write_value(item, out, depth, max_depth)
        out.write(b"e")
    elif isinstance(value, BencodeDict):
        out.write(b"d")
        for key, item in sorted(value.value.items(), key=lambda kv: kv[0]):
            out.write(encode_bytes(key))
            _write_value(item, out, depth, max_depth)
        out.write(b"e")
    else:
        raise TypeError(f"Cannot bencode object of type {type(value)}")


# ------------------------------------------------------------
#   Encoding primitives
# ------------------------------------------------------------

def encode_int(n: int) -> bytes:
    """Encodes an integer to bencoded bytes (e.g., i123e)."""
    return f"i{int_to_digits(n)}e".encode()


def encode_bytes(b: bytes) -> bytes:
    """Encodes bytes to bencoded bytes (e.g., 4:spam)."""
    return str(len(b)).encode() + b":" + bytes(b)


def encode_str(s: str) -> bytes:
    """Encodes a string to bencoded bytes (e.g., 4:spam)."""
    b = s.encode()
    return encode_bytes(b)


def encode_list(lst: list) -> bytes:
    """Encodes a list to bencoded bytes (e.g., l4:spame)."""
    encoded_items = b''.join(encode(x) for x in lst)
    return b"l" + encoded_items + b"e"


def encode_dict(d: dict) -> bytes:
    """Encodes a dictionary to bencoded bytes (e.g., d3:cow3:moo4:spam4:eggse)."""
    value = d if isinstance(d, BencodeDict) else to_dict_value(d)
    return encode(value)
