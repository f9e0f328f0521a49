import pytest

from zalgo_codec.core import errors

ZALGO = 'E\u033a\u0341\u034c\u0347\u034f'
ZALGO_BYTES = bytes([69, 204, 186, 205, 129, 205, 140, 205, 135, 205, 143])

# Every byte the codec accepts: line feed and printable ASCII.
ALPHABET = '\n' + ''.join(chr(b) for b in range(0x20, 0x7F))


@pytest.fixture(autouse=True)
def no_backtraces():
    errors.capture_backtraces(False)
    yield
    errors.capture_backtraces(False)
