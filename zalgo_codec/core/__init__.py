from .errors import (
    DecodeError,
    EmptyInputError,
    EncodeError,
    InvalidCharacterError,
    MalformedEncodingError,
    ZalgoError,
    capture_backtraces,
)
from .transform import (
    ANCHOR,
    decode,
    decode_codepoint,
    decode_to_bytes,
    encode,
    encode_byte,
    encode_to_bytes,
)
from .zalgo_string import DecodedBytes, DecodedChars, ZalgoString
from .embed import compile_embedded, unwrap_python, wrap_python, zalgo_embed
from .files import decode_file, encode_file, wrap_python_file
