"""ZalgoString: an owned, always-valid encoded buffer.

A ZalgoString holds the UTF-8 bytes of an encoded grapheme cluster: the 'E'
anchor followed by one 2-byte combining mark per decoded character. Every
operation keeps the buffer in that shape, so the only valid byte boundaries
are 0, the odd offsets 1, 3, 5, ... and the total length.
"""

from functools import total_ordering
from typing import Optional

from .errors import MalformedEncodingError
from .transform import (
    ANCHOR_BYTES,
    decode_byte_pair,
    encode_to_bytes,
    validate_encoded,
)


class DecodedBytes:
    """Double-ended iterator over the decoded bytes of a ZalgoString.

    Symbols are fixed width, so consuming from the back is as cheap as from
    the front. The iterator works on a snapshot of the buffer taken when it
    was created.
    """

    __slots__ = ('_data', '_front', '_back')

    def __init__(self, data: bytes, front: int = 0, back: Optional[int] = None):
        self._data = data
        self._front = front
        self._back = (len(data) - 1) // 2 if back is None else back

    def _decode_at(self, i: int) -> int:
        pos = 2 * i + 1
        return decode_byte_pair(self._data[pos], self._data[pos + 1])

    def __iter__(self):
        return self

    def __next__(self) -> int:
        if self._front >= self._back:
            raise StopIteration
        value = self._decode_at(self._front)
        self._front += 1
        return value

    def next_back(self) -> int:
        """Consume and return the last remaining item.

        Raises:
            StopIteration: If the iterator is exhausted.
        """
        if self._front >= self._back:
            raise StopIteration
        self._back -= 1
        return self._decode_at(self._back)

    def __reversed__(self):
        # Shares state with self, like consuming it from the back.
        while self._front < self._back:
            yield self.next_back()

    def __len__(self) -> int:
        return self._back - self._front

    def nth(self, n: int):
        """Skip n items and return the next one, or None if there is none."""
        if n < 0:
            raise ValueError('n must be non-negative')
        self._front = min(self._front + n, self._back)
        return next(self, None)

    def last(self):
        """Return the last remaining item without decoding the rest."""
        if self._front >= self._back:
            return None
        return self._decode_at(self._back - 1)

    def count(self) -> int:
        remaining = len(self)
        self._front = self._back
        return remaining

    def copy(self):
        return type(self)(self._data, self._front, self._back)

    __copy__ = copy

    def __repr__(self):
        return f'{type(self).__name__}(remaining={len(self)})'


class DecodedChars(DecodedBytes):
    """Double-ended iterator over the decoded characters of a ZalgoString."""

    __slots__ = ()

    def _decode_at(self, i: int) -> str:
        return chr(super()._decode_at(i))


@total_ordering
class ZalgoString:
    """An encoded grapheme cluster that can be inspected and grown in place.

    Example:
        >>> zs = ZalgoString('Zalgo')
        >>> zs.len(), zs.decoded_len()
        (11, 5)
        >>> zs == 'Zalgo'
        True
        >>> ''.join(reversed(zs.decoded_chars()))
        'oglaZ'
    """

    __slots__ = ('_buf', '_capacity')

    def __init__(self, text=''):
        """Encode text into a new ZalgoString.

        Raises:
            EncodeError: If text holds anything other than printable ASCII
                and newlines.
        """
        self._buf = bytearray(encode_to_bytes(text))
        self._capacity = len(self._buf)

    @classmethod
    def new(cls, text=''):
        return cls(text)

    @classmethod
    def with_capacity(cls, capacity: int):
        """Create an empty ZalgoString with room for ``capacity`` encoded bytes."""
        zs = cls()
        zs.reserve_exact(max(capacity - 1, 0))
        return zs

    @classmethod
    def from_encoded(cls, encoded):
        """Adopt an already encoded string after checking that it is well formed.

        Unlike decode(), only the 'E' anchor is accepted, so the buffer is
        exactly what encoding its decoded text would produce.

        Raises:
            DecodeError: If the input is not a valid encoded grapheme cluster.
        """
        if isinstance(encoded, str):
            data = encoded.encode('utf-8', 'surrogatepass')
        else:
            data = bytes(encoded)
        validate_encoded(data)
        if data[:1] != ANCHOR_BYTES:
            raise MalformedEncodingError(0, f"anchor byte {data[0]:#04x} is not 'E'")
        return cls.from_encoded_unchecked(data)

    @classmethod
    def from_encoded_unchecked(cls, encoded):
        """Adopt an encoded string without validation.

        The caller guarantees that the input is an anchor followed by valid
        2-byte combining marks. Use :meth:`from_encoded` for untrusted data.
        """
        if isinstance(encoded, str):
            encoded = encoded.encode('utf-8')
        zs = cls.__new__(cls)
        zs._buf = bytearray(encoded)
        zs._capacity = len(zs._buf)
        return zs

    # Metadata

    def len(self) -> int:
        """Length of the encoded form in bytes, always 2 * decoded_len() + 1."""
        return len(self._buf)

    def decoded_len(self) -> int:
        return (len(self._buf) - 1) // 2

    def is_empty(self) -> bool:
        """True if there is nothing but the anchor."""
        return len(self._buf) == 1

    decoded_is_empty = is_empty

    def capacity(self) -> int:
        return self._capacity

    # Encoded access

    def as_str(self) -> str:
        return self._buf.decode('utf-8')

    def as_bytes(self) -> bytes:
        return bytes(self._buf)

    def as_combining_chars(self) -> str:
        """The encoded text without the leading anchor.

        The result can not be passed to decode() as is.
        """
        return self._buf[1:].decode('utf-8')

    def into_combining_chars(self) -> str:
        # str is immutable, so there is nothing to reuse; same as the view.
        return self.as_combining_chars()

    def chars(self):
        """Iterate over the encoded characters: 'E', then the marks."""
        return iter(self.as_str())

    def char_indices(self):
        """Iterate over ``(byte_offset, char)`` pairs of the encoded form."""
        text = self.as_str()
        yield 0, text[0]
        for i, mark in enumerate(text[1:]):
            yield 2 * i + 1, mark

    # Decoded access

    def decoded_bytes(self) -> DecodedBytes:
        return DecodedBytes(bytes(self._buf))

    def decoded_chars(self) -> DecodedChars:
        return DecodedChars(bytes(self._buf))

    def into_decoded_bytes(self) -> bytes:
        buf = self._buf
        result = bytearray(self.decoded_len())
        for w, r in enumerate(range(1, len(buf), 2)):
            result[w] = decode_byte_pair(buf[r], buf[r + 1])
        return bytes(result)

    def into_decoded_string(self) -> str:
        return self.into_decoded_bytes().decode('ascii')

    # Slicing

    def _is_boundary(self, pos: int) -> bool:
        return pos == 0 or (pos % 2 == 1 and pos <= len(self._buf))

    def _resolve(self, index):
        if not isinstance(index, slice):
            raise TypeError(f'{type(self).__name__} indices must be slices, not {type(index).__name__}')
        if index.step not in (None, 1):
            raise ValueError('slice step is not supported')
        size = len(self._buf)
        start = 0 if index.start is None else index.start
        stop = size if index.stop is None else index.stop
        if start < 0:
            start += size
        if stop < 0:
            stop += size
        return start, stop

    def get(self, index: slice):
        """Return the encoded substring for a byte range, or None.

        Both ends must be symbol boundaries (0, an odd offset, or the length)
        and lie within the buffer.

        Example:
            >>> zs = ZalgoString('Zalgo')
            >>> zs.get(slice(0, 3)) == 'E\\u033a'
            True
            >>> zs.get(slice(0, 2)) is None
            True
        """
        start, stop = self._resolve(index)
        if not (0 <= start <= stop <= len(self._buf)):
            return None
        if not (self._is_boundary(start) and self._is_boundary(stop)):
            return None
        return self._buf[start:stop].decode('utf-8')

    def get_unchecked(self, index: slice) -> str:
        """Slice without boundary checks; the caller guarantees alignment."""
        start, stop = self._resolve(index)
        return self._buf[start:stop].decode('utf-8')

    def __getitem__(self, index: slice) -> str:
        result = self.get(index)
        if result is None:
            raise IndexError(f'byte range {index.start}:{index.stop} is out of bounds '
                             f'or not on a symbol boundary')
        return result

    # Mutation

    def _grow(self, additional: int) -> None:
        needed = len(self._buf) + additional
        if needed > self._capacity:
            self._capacity = max(needed, 2 * self._capacity)

    def push_zalgo_str(self, other: 'ZalgoString') -> None:
        """Append the combining marks of another ZalgoString."""
        self._grow(len(other._buf) - 1)
        self._buf += other._buf[1:]

    def push_str(self, text) -> None:
        """Encode text and append it.

        Raises:
            EncodeError: With an index relative to ``text``. Nothing is
                appended in that case.
        """
        marks = encode_to_bytes(text)[1:]
        self._grow(len(marks))
        self._buf += marks

    def push(self, char) -> None:
        """Encode and append a single character (or byte value)."""
        if isinstance(char, int):
            char = bytes((char,))
        if len(char) != 1:
            raise ValueError(f'expected a single character, got {len(char)}')
        self.push_str(char)

    def truncate(self, new_decoded_len: int) -> None:
        """Keep only the first ``new_decoded_len`` decoded characters.

        Has no effect if the string is already that short. Capacity is kept.
        """
        if new_decoded_len < 0:
            raise ValueError('new length must be non-negative')
        if new_decoded_len < self.decoded_len():
            del self._buf[2 * new_decoded_len + 1:]

    def clear(self) -> None:
        """Remove every combining mark, leaving only the anchor."""
        del self._buf[1:]

    def reserve(self, additional: int) -> None:
        """Make room for at least ``additional`` more encoded bytes."""
        self._grow(additional)

    def reserve_exact(self, additional: int) -> None:
        """Make room for exactly ``additional`` more encoded bytes."""
        self._capacity = max(self._capacity, len(self._buf) + additional)

    def copy(self) -> 'ZalgoString':
        return self.from_encoded_unchecked(bytes(self._buf))

    __copy__ = copy

    # Operators

    def __add__(self, other):
        if not isinstance(other, ZalgoString):
            return NotImplemented
        result = self.copy()
        result.push_zalgo_str(other)
        return result

    def __iadd__(self, other):
        if not isinstance(other, ZalgoString):
            return NotImplemented
        self.push_zalgo_str(other)
        return self

    def __eq__(self, other):
        if isinstance(other, ZalgoString):
            return self._buf == other._buf
        if isinstance(other, str):
            # Equal iff encoding other reproduces this buffer.
            return self.decoded_len() == len(other) and self.into_decoded_string() == other
        return NotImplemented

    def __lt__(self, other):
        if not isinstance(other, ZalgoString):
            return NotImplemented
        return self._buf < other._buf

    def __hash__(self):
        # Consistent with equality against the decoded str.
        return hash(self.into_decoded_string())

    def __len__(self):
        return len(self._buf)

    def __bool__(self):
        return not self.is_empty()

    def __str__(self):
        return self.as_str()

    def __bytes__(self):
        return self.as_bytes()

    def __repr__(self):
        return f'{type(self).__name__}({self.into_decoded_string()!r})'

    def __reduce__(self):
        return (type(self).from_encoded, (bytes(self._buf),))

    def bytes(self):
        """The encoded bytes, as a restartable iterable of ints."""
        return bytes(self._buf)
