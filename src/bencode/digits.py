"""
Decimal conversion for integers of any size.

CPython refuses int <-> str conversions past a few thousand digits
(sys.get_int_max_str_digits). Both helpers work in fixed-size chunks so
large torrent fields still round-trip without touching that global.
"""

CHUNK_DIGITS = 1000
CHUNK_BASE = 10 ** CHUNK_DIGITS


def digits_to_int(digits: bytes) -> int:
    """Converts a span of ASCII digits (already validated) to an int."""
    if len(digits) <= CHUNK_DIGITS:
        return int(digits)

    value = 0
    for pos in range(0, len(digits), CHUNK_DIGITS):
        chunk = digits[pos:pos+CHUNK_DIGITS]
        value = value * 10 ** len(chunk) + int(chunk)
    return value


def int_to_digits(n: int) -> str:
    """Minimal decimal form of n, '-' only for negatives."""
    if -CHUNK_BASE < n < CHUNK_BASE:
        return str(n)

    sign = "-" if n < 0 else ""
    n = abs(n)
    chunks = []
    while n >= CHUNK_BASE:
        n, rem = divmod(n, CHUNK_BASE)
        chunks.append(f"{rem:0{CHUNK_DIGITS}d}")
    chunks.append(str(n))
    return sign + "".join(reversed(chunks))
