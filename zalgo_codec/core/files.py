"""Encode, decode and wrap whole text files.

Source files often contain characters the codec can not represent. Before
encoding, tabs are expanded to four spaces and carriage returns are dropped;
both rewrites are logged as warnings since the decoded file will differ from
the original.
"""

import logging
from pathlib import Path

from .embed import wrap_python
from .transform import decode, encode

logger = logging.getLogger(__name__)

TAB_REPLACEMENT = '    '


def normalize_for_encoding(text: str, expand_tabs: bool = True, source: str = '<text>') -> str:
    """Replace the characters that commonly break encoding of text files."""
    if expand_tabs and '\t' in text:
        logger.warning('%s: found tabs, replacing with four spaces', source)
        text = text.replace('\t', TAB_REPLACEMENT)
    if '\r' in text:
        logger.warning('%s: dropping carriage return characters (\\r)', source)
        text = text.replace('\r', '')
    return text


def read_text(path) -> str:
    path = Path(path)
    logger.debug('Reading %s', path)
    # newline='' so carriage returns reach normalize_for_encoding().
    with open(path, 'r', encoding='utf-8', newline='') as f:
        return f.read()


def write_text(path, text: str) -> None:
    path = Path(path)
    # newline='' keeps line feeds as is on every platform.
    with open(path, 'w', encoding='utf-8', newline='') as f:
        f.write(text)
    logger.debug('Wrote %d characters to %s', len(text), path)


def encode_file(src, dst) -> None:
    """Encode the text file ``src`` into ``dst``.

    Raises:
        OSError: If reading or writing fails.
        EncodeError: If the file holds characters that can not be encoded
            even after normalization.
    """
    text = normalize_for_encoding(read_text(src), source=str(src))
    write_text(dst, encode(text))


def decode_file(src, dst) -> None:
    """Decode the encoded file ``src`` into ``dst``.

    Raises:
        OSError: If reading or writing fails.
        DecodeError: If the file is not a valid encoded grapheme cluster.
    """
    encoded = read_text(src)
    if '\r' in encoded:
        logger.warning('%s: dropping carriage return characters (\\r)', src)
        encoded = encoded.replace('\r', '')
    # Editors like to add a final newline, which is not part of the cluster.
    encoded = encoded.rstrip('\n')
    write_text(dst, decode(encoded))


def wrap_python_file(src, dst) -> None:
    """Turn the Python file ``src`` into a self-decoding program at ``dst``."""
    source = normalize_for_encoding(read_text(src), source=str(src))
    write_text(dst, wrap_python(source))
