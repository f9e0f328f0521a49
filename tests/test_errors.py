import pickle

import pytest

from zalgo_codec.core import errors
from zalgo_codec.core.errors import (
    DecodeError,
    EmptyInputError,
    EncodeError,
    InvalidCharacterError,
    MalformedEncodingError,
    ZalgoError,
)
from zalgo_codec.core.transform import decode, encode


def test_hierarchy():
    for cls in (EmptyInputError, MalformedEncodingError, InvalidCharacterError):
        assert issubclass(cls, DecodeError)
        assert issubclass(cls, ValueError)
    assert issubclass(EncodeError, ZalgoError)
    assert issubclass(EncodeError, ValueError)
    assert not issubclass(EncodeError, DecodeError)


def test_unencodable_ascii_message():
    err = EncodeError(13, 1, 1, 2)
    assert err.is_unencodable_ascii()
    assert not err.is_not_ascii()
    assert err.char == '\r'
    assert err.representation == 'Carriage Return'
    assert str(err) == ("line 1 at column 2: can not encode ascii 'Carriage Return' "
                        "character with byte value 13 (index 1)")


def test_not_ascii_message():
    err = EncodeError(0xC3, 6, 1, 7, '\u00e5')
    assert err.is_not_ascii()
    assert err.representation is None
    assert str(err) == "line 1 at column 7: can not encode non-ascii character '\u00e5' (U+E5) (index 6)"


def test_delete_has_a_name():
    assert errors.control_name(127) == 'Delete'
    assert errors.control_name(9) == 'Horizontal Tab'
    assert errors.control_name(65) is None


def test_line_and_column():
    with pytest.raises(EncodeError) as exc_info:
        encode('a\nb\nc\r\n')
    assert exc_info.value.line == 3
    assert exc_info.value.column == 2

    with pytest.raises(EncodeError) as exc_info:
        encode('I \u2764\ufe0f \U0001f382')
    assert exc_info.value.line == 1
    assert exc_info.value.column == 3
    assert exc_info.value.char == '\u2764'

    with pytest.raises(EncodeError) as exc_info:
        encode('I\n\u2764\ufe0f\n\U0001f382')
    assert exc_info.value.column == 1


def test_combining_accent_points_at_accent():
    with pytest.raises(EncodeError) as exc_info:
        encode('a\u0301')
    assert exc_info.value.char == '\u0301'
    assert exc_info.value.index == 1


def test_bytes_input_non_utf8():
    with pytest.raises(EncodeError) as exc_info:
        encode(b'ok\xff')
    err = exc_info.value
    assert err.byte == 0xFF
    assert err.char is None
    assert 'byte value 255' in str(err)


def test_decode_error_messages():
    assert 'empty' in str(EmptyInputError())
    assert str(MalformedEncodingError(3)) == 'malformed encoding at byte 3: invalid 2-byte UTF-8 sequence'
    assert str(InvalidCharacterError(0x360, 4)) == 'invalid character U+0360 at symbol 4'


def test_errors_pickle():
    for err in (EncodeError(9, 5, 1, 6), EmptyInputError(), MalformedEncodingError(1, 'why'),
                InvalidCharacterError(0x360, 2)):
        clone = pickle.loads(pickle.dumps(err))
        assert type(clone) is type(err)
        assert str(clone) == str(err)


def test_no_backtrace_by_default():
    with pytest.raises(DecodeError) as exc_info:
        decode('')
    assert exc_info.value.backtrace is None


def test_backtrace_capture():
    errors.capture_backtraces(True)
    assert errors.backtraces_enabled()
    with pytest.raises(EmptyInputError) as exc_info:
        decode('')
    backtrace = exc_info.value.backtrace
    assert 'test_backtrace_capture' in backtrace
    assert '_check_frame' in backtrace
    # Identity and matching are unchanged.
    assert isinstance(exc_info.value, DecodeError)


def test_encode_error_defaults():
    err = EncodeError(9, 4)
    assert (err.line, err.column, err.char) == (1, 5, '\t')
    err = EncodeError(200, 0)
    assert err.char is None
    assert 'can not encode byte value 200' in str(err)
