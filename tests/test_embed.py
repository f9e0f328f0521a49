import pytest

from zalgo_codec.core.embed import (
    compile_embedded,
    load_source,
    unwrap_python,
    wrap_python,
    zalgo_embed,
)
from zalgo_codec.core.errors import DecodeError, EncodeError, MalformedEncodingError
from zalgo_codec.core.transform import encode


def test_embed_function_into_namespace():
    namespace = {}
    result = zalgo_embed(encode('def add(x, y):\n    return x + y\n'), namespace)
    assert result is None
    assert namespace['add'](10, 20) == 30


def test_embed_expression_sees_caller_locals():
    x = 20
    y = -10
    assert encode('x + y') == 'E\u0358\u0300\u030b\u0300\u0359'
    assert zalgo_embed(encode('x + y')) == x + y


def test_embed_statements_into_caller_globals():
    zalgo_embed(encode('def _embedded_mul(a, b):\n    return a * b\n'))
    try:
        assert globals()['_embedded_mul'](6, 7) == 42
    finally:
        del globals()['_embedded_mul']


def test_decode_failure_happens_before_running():
    namespace = {}
    with pytest.raises(DecodeError):
        zalgo_embed('E\u0360', namespace)
    assert namespace == {}


def test_compile_embedded_modes():
    code = compile_embedded(encode('1 + 2'), mode='eval')
    assert eval(code) == 3
    code = compile_embedded(encode('value = 7'))
    namespace = {}
    exec(code, namespace)
    assert namespace['value'] == 7
    assert compile_embedded(encode('3'), mode='auto').co_filename == '<zalgo_embed>'
    with pytest.raises(SyntaxError):
        compile_embedded(encode('def'))
    with pytest.raises(ValueError):
        compile_embedded(encode('1'), mode='single-ish')


def test_wrap_python_runs(capsys):
    wrapped = wrap_python("print('He comes')")
    assert wrapped.startswith("b='E")
    exec(wrapped, {})
    assert capsys.readouterr().out == 'He comes\n'


def test_wrap_python_rejects_tabs():
    with pytest.raises(EncodeError):
        wrap_python('if True:\n\tpass\n')


def test_unwrap_python():
    source = 'for i in range(3):\n    print(i)\n'
    assert unwrap_python(wrap_python(source)) == source
    with pytest.raises(MalformedEncodingError):
        unwrap_python("print('not wrapped')")


def test_load_source():
    source = 'answer = 42\n'
    assert load_source(wrap_python(source)) == source
    assert load_source(encode(source) + '\n') == source
