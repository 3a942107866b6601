"""
Bencode decoder for BitTorrent metainfo and tracker responses.

The decoder is strict: it accepts exactly one canonical entity and rejects
everything else with a BencodeDecodeError that records where the offending
construct starts.
"""
import logging

from .config import DEFAULT_MAX_DEPTH
from .digits import digits_to_int
from .errors import BencodeDecodeError, ErrorReason, ResourceLimitExceeded
from .structure import BencodeDict, BencodeInt, BencodeList, BencodeString

logger = logging.getLogger(__name__)

DIGITS = b"0123456789"


class BencodeDecoder:
    """
    Decodes Bencoded byte strings into BencodeType trees.
    """
    def __init__(self, data: bytes, max_depth=DEFAULT_MAX_DEPTH):
        if not isinstance(data, (bytes, bytearray, memoryview)):
            raise BencodeDecodeError(
                ErrorReason.INVALID_INPUT_TYPE, 0, f"got {type(data).__name__}"
            )
        self.data = bytes(data)
        self.length = len(self.data)
        self.max_depth = max_depth
        self.i = 0  # cursor index
        self.depth = 0

    def decode(self):
        """Main decode entry point. Decodes the entire Bencoded data."""
        result = self._parse_value()

        if self.i != self.length:
            raise BencodeDecodeError(ErrorReason.TRAILING_DATA, self.i)

        return result

    # --------------------------
    # Low-level utilities
    # --------------------------

    def _peek(self, offset=None):
        """Returns the byte at offset (default: cursor), or b'' past the end."""
        if offset is None:
            offset = self.i
        return self.data[offset:offset+1]

    def _consume(self, n=1):
        """Moves cursor forward by n bytes and returns the consumed chunk."""
        chunk = self.data[self.i:self.i+n]
        self.i += n
        return chunk

    def _at_end(self):
        return self.i >= self.length

    def _enter(self, start):
        self.depth += 1
        if self.max_depth is not None and self.depth > self.max_depth:
            raise ResourceLimitExceeded(
                f"Nesting deeper than {self.max_depth} levels", self.max_depth, start
            )

    # --------------------------
    # Parsing functions
    # --------------------------

    def _parse_value(self):
        ch = self._peek()

        if ch == b'i':
            return self._parse_int()

        if ch and ch in DIGITS:  # Bencode strings start with length, which is a digit
            return self._parse_string()

        if ch == b'l':
            return self._parse_list()

        if ch == b'd':
            return self._parse_dict()

        raise BencodeDecodeError(ErrorReason.UNKNOWN_ENTITY, self.i)

    def _parse_int(self):
        """Parses an integer: i<digits>e or i-<digits>e."""
        start = self.i
        self._consume(1)  # skip 'i'

        end_pos = self.data.find(b'e', self.i)
        if end_pos == -1:
            raise BencodeDecodeError(ErrorReason.UNTERMINATED_INTEGER, start)

        digits_start = self.i
        if self._peek() == b'-':
            digits_start += 1

        digits = self.data[digits_start:end_pos]
        if not digits:
            raise BencodeDecodeError(ErrorReason.EMPTY_INTEGER, start)

        if not digits.isdigit():
            raise BencodeDecodeError(ErrorReason.NON_NUMERIC_CHARACTER, start)

        # i0e is fine, i03e is not
        if len(digits) > 1 and digits[:1] == b'0':
            raise BencodeDecodeError(ErrorReason.ILLEGAL_ZERO_PADDING, start)

        num = digits_to_int(digits)
        if digits_start != self.i:
            num = -num
        self.i = end_pos + 1  # skip 'e'
        return BencodeInt(num)

    def _parse_string(self):
        """Parses a byte string: <length>:<content>."""
        start = self.i

        if self._peek() == b'0' and self._peek(start + 1) != b':':
            raise BencodeDecodeError(
                ErrorReason.ILLEGAL_ZERO_PADDING, start, "string length"
            )

        # read length until ':'
        colon = self.data.find(b':', start)
        if colon == -1:
            raise BencodeDecodeError(ErrorReason.UNTERMINATED_STRING, start)

        length_bytes = self.data[start:colon]
        if not length_bytes.isdigit():
            raise BencodeDecodeError(
                ErrorReason.NON_NUMERIC_CHARACTER, start, "string length"
            )

        # a length wider than the whole input can never fit
        if len(length_bytes) > len(str(self.length)):
            raise BencodeDecodeError(ErrorReason.UNEXPECTED_END_OF_STRING, start)

        length = int(length_bytes)
        if length + colon + 1 > self.length:
            raise BencodeDecodeError(ErrorReason.UNEXPECTED_END_OF_STRING, start)

        self.i = colon + 1
        string_bytes = self._consume(length)

        return BencodeString(string_bytes)

    def _parse_list(self):
        """Parses a list from the Bencoded data."""
        start = self.i
        self._enter(start)
        self._consume(1)  # skip 'l'
        items = []

        while not self._at_end():
            if self._peek() == b'e':
                break
            items.append(self._parse_value())
        else:
            raise BencodeDecodeError(ErrorReason.UNTERMINATED_LIST, start)

        self._consume(1)  # skip 'e'
        self.depth -= 1
        return BencodeList(items)

    def _parse_dict(self):
        """Parses a dictionary from the Bencoded data."""
        start = self.i
        self._enter(start)
        self._consume(1)  # skip 'd'
        obj = {}

        while not self._at_end():
            if self._peek() == b'e':
                break

            # keys MUST be strings
            key_offset = self.i
            if self._peek() not in DIGITS:
                raise BencodeDecodeError(ErrorReason.INVALID_DICTIONARY_KEY, key_offset)

            key = self._parse_string().value
            if key in obj:
                raise BencodeDecodeError(
                    ErrorReason.DUPLICATE_DICTIONARY_KEY, key_offset, repr(key)
                )

            obj[key] = self._parse_value()
        else:
            raise BencodeDecodeError(ErrorReason.UNTERMINATED_DICTIONARY, start)

        self._consume(1)  # skip 'e'
        self.depth -= 1
        return BencodeDict(obj)


def decode(data: bytes, max_depth=DEFAULT_MAX_DEPTH):
    """
    Convenience function to decode Bencoded data.

    Raises BencodeDecodeError for malformed or non-canonical input and
    ResourceLimitExceeded when nesting goes past ``max_depth``.
    """
    logger.debug("Decoding %d bytes", len(data) if hasattr(data, "__len__") else -1)
    try:
        result = BencodeDecoder(data, max_depth=max_depth).decode()
    except BencodeDecodeError as exc:
        logger.debug("Rejected input: %s at offset %d", exc.reason.name, exc.offset)
        raise

    logger.debug("Decoded %s", type(result).__name__)
    return result
