"""
Converts host Python objects into BencodeType trees.

This is the boundary in front of the encoder. Anything that reaches
``encode`` as a plain object comes through here first, so the encoder
itself only ever sees the four Bencode value types.
"""
import math
from collections.abc import Mapping
from dataclasses import fields, is_dataclass

from .config import DEFAULT_MAX_DEPTH
from .digits import int_to_digits
from .errors import BencodeEncodeError, ResourceLimitExceeded
from .structure import BencodeDict, BencodeInt, BencodeList, BencodeString, BencodeType


def to_value(obj, max_depth=DEFAULT_MAX_DEPTH) -> BencodeType:
    """
    Converts ``obj`` into a BencodeType.

    Mappings whose keys are exactly 0..n-1 in order become lists; every
    other mapping becomes a dictionary. An empty mapping is a dictionary,
    not a list: use ``[]`` for an empty list.
    """
    return _convert(obj, 0, max_depth)


def to_dict_value(mapping, max_depth=DEFAULT_MAX_DEPTH) -> BencodeDict:
    """Like ``to_value`` but always yields a dictionary for a mapping."""
    if not isinstance(mapping, Mapping):
        raise BencodeEncodeError(f"Expected a mapping, got {type(mapping)}")
    return _convert_mapping(mapping, 1, max_depth)


def _is_list_like(mapping) -> bool:
    if not mapping:
        return False
    for expected, key in enumerate(mapping):
        if isinstance(key, bool) or key != expected or not isinstance(key, int):
            return False
    return True


def _key_to_bytes(key) -> bytes:
    if isinstance(key, (bytes, bytearray)):
        return bytes(key)
    if isinstance(key, str):
        return key.encode("utf-8")
    if isinstance(key, int) and not isinstance(key, bool):
        return int_to_digits(key).encode()
    raise BencodeEncodeError(f"Dictionary keys must be bytes, str or int, not {type(key)}")


def _round_half_away(number: float) -> int:
    if not math.isfinite(number):
        raise BencodeEncodeError(f"Cannot bencode non-finite number {number!r}")
    return int(math.copysign(math.floor(abs(number) + 0.5), number))


def _object_fields(obj):
    """Returns a field mapping for structured objects, or None."""
    hook = getattr(obj, "to_dict", None)
    if callable(hook):
        return hook()

    if is_dataclass(obj) and not isinstance(obj, type):
        return {f.name: getattr(obj, f.name) for f in fields(obj)}

    if hasattr(obj, "__dict__") and not callable(obj):
        return {k: v for k, v in vars(obj).items() if not k.startswith("_")}

    return None


def _convert(obj, depth, max_depth):
    if isinstance(obj, BencodeType):
        return obj

    if isinstance(obj, bool):
        raise BencodeEncodeError("Cannot bencode a bool; use 0 or 1 explicitly")

    if isinstance(obj, int):
        return BencodeInt(obj)

    if isinstance(obj, float):
        return BencodeInt(_round_half_away(obj))

    if isinstance(obj, (bytes, bytearray, memoryview)):
        return BencodeString(obj)

    if isinstance(obj, str):
        return BencodeString(obj.encode("utf-8"))

    depth += 1
    if max_depth is not None and depth > max_depth:
        raise ResourceLimitExceeded(
            f"Object nested deeper than {max_depth} levels", max_depth
        )

    if isinstance(obj, (list, tuple)):
        items = []
        for item in obj:
            items.append(_convert(item, depth, max_depth))
        return BencodeList(items)

    if isinstance(obj, Mapping):
        if _is_list_like(obj):
            items = []
            for item in obj.values():
                items.append(_convert(item, depth, max_depth))
            return BencodeList(items)
        return _convert_mapping(obj, depth, max_depth)

    mapped = _object_fields(obj)
    if mapped is not None:
        if isinstance(mapped, Mapping):
            return _convert_mapping(mapped, depth, max_depth)
        return _convert(mapped, depth, max_depth)

    raise BencodeEncodeError(f"Cannot bencode object of type {type(obj)}")


def _convert_mapping(mapping, depth, max_depth):
    result = {}
    for key, item in mapping.items():
        key_bytes = _key_to_bytes(key)
        if key_bytes in result:
            raise BencodeEncodeError(f"Duplicate dictionary key {key_bytes!r}")
        result[key_bytes] = _convert(item, depth, max_depth)
    return BencodeDict(result)
