"""Hide printable ASCII text inside a single grapheme cluster.

Every character of the input becomes a Unicode combining mark stacked on a
plain 'E', so the whole text renders as one (very tall) glyph::

    >>> from zalgo_codec import encode, decode, ZalgoString
    >>> encoded = encode('Zalgo')
    >>> encoded == 'E\\u033a\\u0341\\u034c\\u0347\\u034f'
    True
    >>> decode(encoded)
    'Zalgo'
    >>> ZalgoString('Zalgo') + ZalgoString(', He comes!') == 'Zalgo, He comes!'
    True

Only line feeds and printable ASCII (0x20-0x7E) can be encoded. The encoded
form takes 2 * n + 1 bytes of UTF-8.
"""

from .core import (
    ANCHOR,
    DecodeError,
    DecodedBytes,
    DecodedChars,
    EmptyInputError,
    EncodeError,
    InvalidCharacterError,
    MalformedEncodingError,
    ZalgoError,
    ZalgoString,
    capture_backtraces,
    compile_embedded,
    decode,
    decode_codepoint,
    decode_file,
    decode_to_bytes,
    encode,
    encode_byte,
    encode_file,
    encode_to_bytes,
    unwrap_python,
    wrap_python,
    wrap_python_file,
    zalgo_embed,
)

__version__ = '0.1.0'

__all__ = [
    'ANCHOR',
    'DecodeError',
    'DecodedBytes',
    'DecodedChars',
    'EmptyInputError',
    'EncodeError',
    'InvalidCharacterError',
    'MalformedEncodingError',
    'ZalgoError',
    'ZalgoString',
    'capture_backtraces',
    'compile_embedded',
    'decode',
    'decode_codepoint',
    'decode_file',
    'decode_to_bytes',
    'encode',
    'encode_byte',
    'encode_file',
    'encode_to_bytes',
    'unwrap_python',
    'wrap_python',
    'wrap_python_file',
    'zalgo_embed',
]
