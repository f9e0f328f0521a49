"""Running zalgo-encoded Python source.

Two ways to ship encoded code:

* ``wrap_python`` produces a standalone one-liner that decodes and executes
  its payload with nothing but the Python builtins.
* ``zalgo_embed`` decodes an encoded literal in the calling program and runs
  it as if it had been written there. An expression is evaluated and its
  value returned; anything else is executed as statements.

Decoding and compilation both happen before any of the decoded code runs, so
a bad literal is reported as a DecodeError or SyntaxError up front.
"""

import inspect
import re
from typing import Optional

from .errors import MalformedEncodingError
from .transform import decode, encode

EMBED_FILENAME = '<zalgo_embed>'

# The decoder inlines decode_byte_pair() over the UTF-8 bytes of the literal.
WRAP_TEMPLATE = ("b='{encoded}'.encode();exec(''.join(chr(((h<<6&64|c&63)+22)%133+10)"
                 "for h,c in zip(b[1::2],b[2::2])))")

_WRAPPED_LITERAL = re.compile(r"b='([\x20-\x7e][\u0300-\u036f]*)'")


def wrap_python(source: str) -> str:
    """Encode Python source into a self-decoding Python program.

    Raises:
        EncodeError: If the source contains tabs, carriage returns or
            non-ASCII characters.
    """
    return WRAP_TEMPLATE.format(encoded=encode(source))


def unwrap_python(wrapped: str) -> str:
    """Recover the source from the output of :func:`wrap_python`.

    Raises:
        MalformedEncodingError: If no encoded literal is found.
        DecodeError: If the literal does not decode.
    """
    match = _WRAPPED_LITERAL.search(wrapped)
    if match is None:
        raise MalformedEncodingError(0, 'no wrapped zalgo literal found')
    return decode(match.group(1))


def load_source(content: str) -> str:
    """Decode the contents of either a wrapped program or a bare encoded file."""
    if _WRAPPED_LITERAL.search(content):
        return unwrap_python(content)
    return decode(content.strip('\r\n'))


def _compile(source: str, mode: str):
    if mode == 'auto':
        try:
            return compile(source, EMBED_FILENAME, 'eval'), 'eval'
        except SyntaxError:
            mode = 'exec'
    if mode not in ('exec', 'eval'):
        raise ValueError(f"mode must be 'exec', 'eval' or 'auto', got {mode!r}")
    return compile(source, EMBED_FILENAME, mode), mode


def compile_embedded(encoded, mode: str = 'exec'):
    """Decode an encoded literal and compile it to a code object.

    Args:
        encoded: The encoded grapheme cluster.
        mode: 'exec' for statements, 'eval' for a single expression, or
            'auto' to pick 'eval' when the source parses as an expression.

    Raises:
        DecodeError: If the literal can not be decoded.
        SyntaxError: If the decoded source does not compile.
    """
    return _compile(decode(encoded), mode)[0]


def zalgo_embed(encoded, namespace: Optional[dict] = None):
    """Decode and run an encoded literal in the caller's context.

    Without a namespace, expressions see the caller's globals and locals and
    statements are executed in the caller's globals, so functions and classes
    they define become available there.

    Example:
        >>> zalgo_embed(encode('def add(x, y): return x + y'))
        >>> add(10, 20)
        30
        >>> x, y = 20, -10
        >>> zalgo_embed(encode('x + y'))
        10

    Returns:
        The value of the expression, or None for statements.
    """
    code, mode = _compile(decode(encoded), 'auto')

    if namespace is None:
        frame = inspect.currentframe().f_back
        try:
            global_ns, local_ns = frame.f_globals, frame.f_locals
        finally:
            del frame
    else:
        global_ns = local_ns = namespace

    if mode == 'eval':
        return eval(code, global_ns, local_ns)
    exec(code, global_ns)
    return None
