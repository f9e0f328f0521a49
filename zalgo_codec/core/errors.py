"""Error types raised by the zalgo codec.

Encoding has a single failure mode: a byte outside the accepted alphabet
(line feed plus printable ASCII). Decoding can fail in three ways, each with
its own subclass of DecodeError so callers can catch exactly what they expect.
"""

import traceback
from typing import Optional

_capture_backtraces = False

# Names for the ASCII bytes that can not be encoded, indexed by byte value.
_CONTROL_NAMES = (
    'Null', 'Start Of Heading', 'Start Of Text', 'End Of Text',
    'End Of Transmission', 'Enquiry', 'Acknowledge', 'Bell', 'Backspace',
    'Horizontal Tab', 'Line Feed', 'Vertical Tab', 'Form Feed',
    'Carriage Return', 'Shift Out', 'Shift In', 'Data Link Escape',
    'Data Control 1', 'Data Control 2', 'Data Control 3', 'Data Control 4',
    'Negative Acknowledge', 'Synchronous Idle', 'End Of Transmission Block',
    'Cancel', 'End Of Medium', 'Substitute', 'Escape', 'File Separator',
    'Group Separator', 'Record Separator', 'Unit Separator',
)


def capture_backtraces(enabled: bool = True) -> None:
    """Record the call stack on every error created from now on.

    The captured stack is stored as text on ``error.backtrace``. It is purely
    diagnostic and has no effect on how errors compare or are caught.
    """
    global _capture_backtraces
    _capture_backtraces = bool(enabled)


def backtraces_enabled() -> bool:
    return _capture_backtraces


def control_name(byte: int):
    """Return the name of an unencodable ASCII byte, or None if it is not ASCII."""
    if byte < 32:
        return _CONTROL_NAMES[byte]
    if byte == 127:
        return 'Delete'
    return None


class ZalgoError(Exception):
    """Base class for every error raised by this package."""

    def __init__(self, message: str):
        super().__init__(message)
        self.backtrace = None
        if _capture_backtraces:
            # Drop this frame and the subclass __init__.
            self.backtrace = ''.join(traceback.format_stack()[:-2])


class EncodeError(ZalgoError, ValueError):
    """A byte outside ``{0x0A} | [0x20, 0x7E]`` was found while encoding.

    Attributes:
        byte: Value of the offending byte.
        index: Zero-based byte offset of the offending byte in the input.
        line: 1-based line on which it occurred.
        column: 1-based column, counted from the last line feed.
        char: The offending character, when it could be recovered.
        representation: Name of the ASCII control character, None for non-ASCII.
    """

    def __init__(self, byte: int, index: int, line: int = 1,
                 column: Optional[int] = None, char: Optional[str] = None):
        self.byte = byte
        self.index = index
        self.line = line
        self.column = index + 1 if column is None else column
        if char is None and byte < 128:
            char = chr(byte)
        self.char = char
        self.representation = control_name(byte)

        if self.representation is not None:
            message = (f"line {self.line} at column {self.column}: can not encode ascii "
                       f"'{self.representation}' character with byte value {byte} (index {index})")
        elif char is not None:
            message = (f"line {self.line} at column {self.column}: can not encode non-ascii "
                       f"character '{char}' (U+{ord(char):X}) (index {index})")
        else:
            message = (f"line {self.line} at column {self.column}: can not encode byte "
                       f"value {byte} (index {index})")
        super().__init__(message)

    def is_not_ascii(self) -> bool:
        return self.byte >= 128

    def is_unencodable_ascii(self) -> bool:
        return self.byte < 128

    def __reduce__(self):
        return (type(self), (self.byte, self.index, self.line, self.column, self.char))


class DecodeError(ZalgoError, ValueError):
    """Base class for failures while decoding an encoded grapheme cluster."""


class EmptyInputError(DecodeError):
    """The encoded text is empty and does not even contain the anchor."""

    def __init__(self):
        super().__init__('can not decode empty input: missing anchor character')

    def __reduce__(self):
        return (type(self), ())


class MalformedEncodingError(DecodeError):
    """The encoded text is not an anchor followed by 2-byte UTF-8 sequences.

    Attributes:
        index: Byte offset in the encoded text where the problem starts.
    """

    def __init__(self, index: int, reason: str = 'invalid 2-byte UTF-8 sequence'):
        self.index = index
        self.reason = reason
        super().__init__(f'malformed encoding at byte {index}: {reason}')

    def __reduce__(self):
        return (type(self), (self.index, self.reason))


class InvalidCharacterError(DecodeError):
    """A well-formed codepoint does not map back into the accepted alphabet.

    Attributes:
        codepoint: The decoded Unicode scalar value.
        index: Zero-based index of the symbol (not the byte offset).
    """

    def __init__(self, codepoint: int, index: int):
        self.codepoint = codepoint
        self.index = index
        super().__init__(f'invalid character U+{codepoint:04X} at symbol {index}')

    def __reduce__(self):
        return (type(self), (self.codepoint, self.index))
