"""
Bencode package for encoding and decoding BitTorrent data.
"""
from .adapter import to_value
from .decoder import BencodeDecoder, decode
from .encoder import encode
from .errors import (BencodeDecodeError, BencodeEncodeError, BencodeError, ErrorReason,
                     ResourceLimitExceeded)
from .structure import BencodeDict, BencodeInt, BencodeList, BencodeString, BencodeType

__all__ = [
    'decode', 'encode', 'to_value', 'BencodeDecoder',
    'BencodeType', 'BencodeInt', 'BencodeString', 'BencodeList', 'BencodeDict',
    'BencodeError', 'BencodeDecodeError', 'BencodeEncodeError', 'ErrorReason',
    'ResourceLimitExceeded',
]
