"""
Exceptions raised by the bencode package.
"""
from enum import Enum
from typing import Optional


class ErrorReason(Enum):
    """Why a decode attempt was rejected."""
    UNKNOWN_ENTITY = "Unknown entity"
    UNTERMINATED_INTEGER = "Unterminated integer entity"
    EMPTY_INTEGER = "Empty integer entity"
    NON_NUMERIC_CHARACTER = "Non-numeric character"
    ILLEGAL_ZERO_PADDING = "Illegal zero-padding"
    UNTERMINATED_STRING = "Unterminated string entity"
    UNEXPECTED_END_OF_STRING = "Unexpected end of string entity"
    UNTERMINATED_LIST = "Unterminated list definition"
    UNTERMINATED_DICTIONARY = "Unterminated dictionary definition"
    INVALID_DICTIONARY_KEY = "Invalid dictionary key"
    DUPLICATE_DICTIONARY_KEY = "Duplicate dictionary key"
    TRAILING_DATA = "Found multiple entities outside list or dict definitions"
    INVALID_INPUT_TYPE = "Argument expected to be bytes"


class BencodeError(Exception):
    """Base class for every error raised by this package."""
    pass


class BencodeDecodeError(BencodeError, ValueError):
    """
    Raised when the input is not canonical Bencode.

    ``offset`` is the position where the offending construct begins,
    not where the parser noticed the problem.
    """
    def __init__(self, reason: ErrorReason, offset: int, detail: Optional[str] = None):
        self.reason = reason
        self.offset = offset
        self.detail = detail
        message = f"{reason.value} at offset {offset}"
        if detail:
            message += f" ({detail})"
        super().__init__(message)


class ResourceLimitExceeded(BencodeError):
    """Raised when nesting depth or output size goes past a configured limit."""
    def __init__(self, message: str, limit: int, offset: Optional[int] = None):
        self.limit = limit
        self.offset = offset
        if offset is not None:
            message = f"{message} at offset {offset}"
        super().__init__(message)


class BencodeEncodeError(BencodeError, TypeError):
    """Raised when a host object cannot be turned into a Bencode value."""
    pass
