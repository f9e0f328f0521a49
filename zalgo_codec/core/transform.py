"""Zalgo encoding/decoding of printable ASCII.

Every accepted byte (line feed plus printable ASCII) maps to one combining
mark in U+0300-U+036F. The encoded text is a plain 'E' followed by those
marks, which renders as a single grapheme cluster.

    offset(c) = ((c - 11) mod 133) - 21
    byte(cp)  = ((cp - 0x300 + 22) mod 133) + 10

Each mark takes 2 bytes in UTF-8, so an encoded string of n symbols is
always 2*n + 1 bytes long.
"""

import re

from .errors import (
    EmptyInputError,
    EncodeError,
    InvalidCharacterError,
    MalformedEncodingError,
)

ANCHOR = 'E'
ANCHOR_BYTES = b'E'

COMBINING_BASE = 0x300
# Offsets run 0..111; only 96 of them are reachable from the alphabet.
MAX_OFFSET = 111

_INVALID_BYTE = re.compile(rb'[^\n\x20-\x7e]')


def is_encodable(byte: int) -> bool:
    """Check whether a byte is in the accepted alphabet."""
    return byte == 0x0A or 0x20 <= byte <= 0x7E


def _offset(byte: int) -> int:
    return (byte - 11) % 133 - 21


def _mark_bytes(byte: int) -> bytes:
    v = _offset(byte)
    return bytes(((v >> 6) & 1 | 0b1100_1100, (v & 63) | 0b1000_0000))


# 2-byte UTF-8 encoding of the mark for every encodable byte.
_ENCODE_TABLE = [_mark_bytes(b) if is_encodable(b) else None for b in range(256)]


def decode_byte_pair(lead: int, trail: int) -> int:
    """Decode the two UTF-8 bytes of a mark without validating them."""
    return ((lead << 6 & 64 | trail & 63) + 22) % 133 + 10


def encode_byte(byte: int) -> str:
    """Encode one byte to its combining mark.

    Raises:
        EncodeError: If the byte is not line feed or printable ASCII.
    """
    if not 0 <= byte <= 255:
        raise ValueError(f'byte must be in range(256), got {byte}')
    if not is_encodable(byte):
        raise EncodeError(byte, 0)
    return chr(COMBINING_BASE + _offset(byte))


def decode_codepoint(codepoint: int, index: int = 0) -> int:
    """Decode one combining mark back into its byte.

    Args:
        codepoint: Unicode scalar value of the mark.
        index: Symbol index, only used for error reporting.

    Raises:
        InvalidCharacterError: If the codepoint is outside U+0300-U+036F or
            lands in the unused part of that block.
    """
    offset = codepoint - COMBINING_BASE
    if not 0 <= offset <= MAX_OFFSET:
        raise InvalidCharacterError(codepoint, index)
    byte = (offset + 22) % 133 + 10
    if not is_encodable(byte):
        raise InvalidCharacterError(codepoint, index)
    return byte


def _as_bytes(text) -> bytes:
    if isinstance(text, str):
        return text.encode('utf-8', 'surrogatepass')
    if isinstance(text, (bytes, bytearray, memoryview)):
        return bytes(text)
    raise TypeError(f'expected str or bytes-like, got {type(text).__name__}')


def _encode_error(data: bytes, index: int, text=None) -> EncodeError:
    line = data.count(b'\n', 0, index) + 1
    column = index - data.rfind(b'\n', 0, index)
    if isinstance(text, str):
        # Everything before index is ASCII, so byte and char offsets agree.
        char = text[index]
    else:
        char = data[index:index + 4].decode('utf-8', 'ignore')[:1] or None
    return EncodeError(data[index], index, line, column, char)


def encode_to_bytes(text) -> bytes:
    """Encode text and return the encoded UTF-8 bytes."""
    data = _as_bytes(text)
    match = _INVALID_BYTE.search(data)
    if match is not None:
        raise _encode_error(data, match.start(), text)
    return ANCHOR_BYTES + b''.join(map(_ENCODE_TABLE.__getitem__, data))


def encode(text) -> str:
    """Encode printable ASCII and newlines into a single grapheme cluster.

    Args:
        text: A str or bytes-like object.

    Returns:
        'E' followed by one combining mark per input byte.

    Raises:
        EncodeError: At the first byte outside the accepted alphabet.
    """
    return encode_to_bytes(text).decode('utf-8')


def _check_frame(data: bytes) -> int:
    if not data:
        raise EmptyInputError()
    anchor = data[0]
    if not 0x20 <= anchor <= 0x7E:
        raise MalformedEncodingError(0, f'anchor byte {anchor:#04x} is not a printable ASCII character')
    if len(data) % 2 == 0:
        raise MalformedEncodingError(len(data) - 1, 'truncated 2-byte sequence')
    return (len(data) - 1) // 2


def validate_encoded(data: bytes) -> int:
    """Check that data is a well-formed encoded string.

    Returns:
        The number of encoded symbols.

    Raises:
        EmptyInputError, MalformedEncodingError, InvalidCharacterError
    """
    count = _check_frame(data)
    for i in range(count):
        _decode_pair(data, i)
    return count


def _decode_pair(data: bytes, i: int) -> int:
    pos = 2 * i + 1
    lead, trail = data[pos], data[pos + 1]
    if not (0xC2 <= lead <= 0xDF and 0x80 <= trail <= 0xBF):
        raise MalformedEncodingError(pos)
    return decode_codepoint((lead & 0x1F) << 6 | (trail & 0x3F), i)


def decode_to_bytes(encoded) -> bytes:
    """Decode an encoded grapheme cluster and return the raw ASCII bytes."""
    data = _as_bytes(encoded)
    result = bytearray(_check_frame(data))
    for i in range(len(result)):
        result[i] = _decode_pair(data, i)
    return bytes(result)


def decode(encoded) -> str:
    """Decode a grapheme cluster produced by :func:`encode`.

    Args:
        encoded: The encoded text as str or UTF-8 bytes.

    Returns:
        The original text.

    Raises:
        EmptyInputError: If the input is empty.
        MalformedEncodingError: If the anchor is missing or a mark is not a
            valid 2-byte UTF-8 sequence.
        InvalidCharacterError: If a mark does not decode into the alphabet.
    """
    return decode_to_bytes(encoded).decode('ascii')
