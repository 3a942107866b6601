import pytest

from bencode.decoder import BencodeDecoder, decode
from bencode.errors import BencodeDecodeError, ErrorReason, ResourceLimitExceeded


@pytest.mark.parametrize("raw, reason, offset", [
    (b"a3:fooe", ErrorReason.UNKNOWN_ENTITY, 0),
    (b"", ErrorReason.UNKNOWN_ENTITY, 0),
    (b"i42", ErrorReason.UNTERMINATED_INTEGER, 0),
    (b"ie", ErrorReason.EMPTY_INTEGER, 0),
    (b"i-e", ErrorReason.EMPTY_INTEGER, 0),
    (b"iae", ErrorReason.NON_NUMERIC_CHARACTER, 0),
    (b"i4-2e", ErrorReason.NON_NUMERIC_CHARACTER, 0),
    (b"i--2e", ErrorReason.NON_NUMERIC_CHARACTER, 0),
    (b"i042e", ErrorReason.ILLEGAL_ZERO_PADDING, 0),
    (b"i-042e", ErrorReason.ILLEGAL_ZERO_PADDING, 0),
    (b"i00e", ErrorReason.ILLEGAL_ZERO_PADDING, 0),
    (b"03:foo", ErrorReason.ILLEGAL_ZERO_PADDING, 0),
    (b"3foo", ErrorReason.UNTERMINATED_STRING, 0),
    (b"3x:foo", ErrorReason.NON_NUMERIC_CHARACTER, 0),
    (b"6:stri", ErrorReason.UNEXPECTED_END_OF_STRING, 0),
    (b"1" * 5000 + b":x", ErrorReason.UNEXPECTED_END_OF_STRING, 0),
    (b"99999:x", ErrorReason.UNEXPECTED_END_OF_STRING, 0),
    (b"l3:foo3:bar", ErrorReason.UNTERMINATED_LIST, 0),
    (b"li1ei2e", ErrorReason.UNTERMINATED_LIST, 0),
    (b"d3:foo3:bar", ErrorReason.UNTERMINATED_DICTIONARY, 0),
    (b"d3:foo3:bar3:foo3:bare", ErrorReason.DUPLICATE_DICTIONARY_KEY, 11),
    (b"di42e3:bare", ErrorReason.INVALID_DICTIONARY_KEY, 1),
    (b"dle", ErrorReason.INVALID_DICTIONARY_KEY, 1),
    (b"3:foo3:bar", ErrorReason.TRAILING_DATA, 5),
    (b"i1ei2e", ErrorReason.TRAILING_DATA, 3),
    (b"i1ee", ErrorReason.TRAILING_DATA, 3),
])
def test_rejects_malformed_input(raw, reason, offset):
    with pytest.raises(BencodeDecodeError) as excinfo:
        decode(raw)
    print("Rejected:", raw, "->", excinfo.value)
    assert excinfo.value.reason is reason
    assert excinfo.value.offset == offset


def test_error_offset_points_at_start_of_nested_construct():
    with pytest.raises(BencodeDecodeError) as excinfo:
        decode(b"l4:spami042ee")
    assert excinfo.value.reason is ErrorReason.ILLEGAL_ZERO_PADDING
    assert excinfo.value.offset == 7


def test_unterminated_outer_list_reports_outer_offset():
    with pytest.raises(BencodeDecodeError) as excinfo:
        decode(b"ll3:fooe")
    assert excinfo.value.reason is ErrorReason.UNTERMINATED_LIST
    assert excinfo.value.offset == 0


def test_unterminated_inner_dict_reports_inner_offset():
    with pytest.raises(BencodeDecodeError) as excinfo:
        decode(b"l3:food1:ai1e")
    assert excinfo.value.reason is ErrorReason.UNTERMINATED_DICTIONARY
    assert excinfo.value.offset == 6


def test_missing_dict_value():
    with pytest.raises(BencodeDecodeError) as excinfo:
        decode(b"d3:fooe")
    assert excinfo.value.reason is ErrorReason.UNKNOWN_ENTITY
    assert excinfo.value.offset == 6


def test_error_message_includes_offset():
    with pytest.raises(BencodeDecodeError, match="at offset 5"):
        decode(b"3:foo3:bar")


def test_decode_error_is_a_value_error():
    with pytest.raises(ValueError):
        decode(b"ie")


@pytest.mark.parametrize("bad_input", ["i42e", None, 42, [b"i1e"]])
def test_rejects_non_bytes_input(bad_input):
    with pytest.raises(BencodeDecodeError) as excinfo:
        decode(bad_input)
    assert excinfo.value.reason is ErrorReason.INVALID_INPUT_TYPE
    assert excinfo.value.offset == 0


def test_unsorted_keys_are_accepted():
    obj = decode(b"d1:bi1e1:ai2ee")
    assert obj.to_python() == {b"a": 2, b"b": 1}


def test_nesting_within_limit():
    raw = b"l" * 10 + b"e" * 10
    assert BencodeDecoder(raw, max_depth=10).decode() is not None


def test_nesting_past_limit():
    raw = b"l" * 10 + b"e" * 10
    with pytest.raises(ResourceLimitExceeded) as excinfo:
        decode(raw, max_depth=9)
    assert excinfo.value.limit == 9
    assert excinfo.value.offset == 9


def test_default_limit_stops_deep_input():
    raw = b"d1:a" * 1000 + b"i1e" + b"e" * 1000
    with pytest.raises(ResourceLimitExceeded):
        decode(raw)


def test_depth_limit_can_be_disabled():
    raw = b"l" * 300 + b"e" * 300
    obj = decode(raw, max_depth=None)
    for _ in range(299):
        obj = obj[0]
    assert len(obj) == 0
