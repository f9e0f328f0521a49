"""Plain-data and JSON serialization of ZalgoString.

A ZalgoString is stored as its encoded text plus its encoded length in
bytes::

    {"encoded": "E\\u033a\\u0341\\u034c\\u0347\\u034f", "len": 11}
"""

import json

from ..core.errors import MalformedEncodingError
from ..core.zalgo_string import ZalgoString


def to_dict(zs: ZalgoString) -> dict:
    return {'encoded': zs.as_str(), 'len': zs.len()}


def from_dict(data: dict) -> ZalgoString:
    """Rebuild a ZalgoString, validating everything about the buffer.

    Raises:
        DecodeError: If the encoded text is not well formed or does not
            match the recorded length.
        KeyError: If a field is missing.
    """
    encoded = data['encoded']
    if isinstance(encoded, str):
        raw = encoded.encode('utf-8', 'surrogatepass')
    else:
        raw = bytes(encoded)
    expected = data.get('len')
    if expected is not None and expected != len(raw):
        raise MalformedEncodingError(min(expected, len(raw)),
                                     f'length mismatch: expected {expected} bytes, got {len(raw)}')
    return ZalgoString.from_encoded(raw)


def dumps(zs: ZalgoString, **kwargs) -> str:
    """Serialize to JSON. Keyword arguments go to :func:`json.dumps`."""
    kwargs.setdefault('ensure_ascii', False)
    return json.dumps(to_dict(zs), **kwargs)


def loads(text) -> ZalgoString:
    data = json.loads(text)
    if not isinstance(data, dict):
        raise MalformedEncodingError(0, f'expected a JSON object, got {type(data).__name__}')
    return from_dict(data)
