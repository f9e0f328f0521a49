import json

import pytest

from zalgo_codec.adapters import serde
from zalgo_codec.core.errors import DecodeError, EmptyInputError, InvalidCharacterError, MalformedEncodingError
from zalgo_codec.core.zalgo_string import ZalgoString

from .conftest import ZALGO


def test_to_dict():
    assert serde.to_dict(ZalgoString('Zalgo')) == {'encoded': ZALGO, 'len': 11}


def test_json_round_trip():
    zs = ZalgoString('Zalgo, He comes!')
    text = serde.dumps(zs)
    assert json.loads(text)['len'] == zs.len()
    assert serde.loads(text) == zs


def test_from_dict_without_length():
    assert serde.from_dict({'encoded': ZALGO}) == 'Zalgo'


def test_from_dict_revalidates():
    with pytest.raises(MalformedEncodingError):
        serde.from_dict({'encoded': ZALGO, 'len': 12})
    with pytest.raises(InvalidCharacterError):
        serde.from_dict({'encoded': 'E\u0360', 'len': 3})
    with pytest.raises(EmptyInputError):
        serde.from_dict({'encoded': '', 'len': 0})
    with pytest.raises(MalformedEncodingError):
        serde.from_dict({'encoded': 'Zalgo', 'len': 5})
    with pytest.raises(KeyError):
        serde.from_dict({'len': 1})


def test_from_dict_rejects_foreign_anchor():
    with pytest.raises(MalformedEncodingError):
        serde.from_dict({'encoded': 'A\u0321', 'len': 3})
    with pytest.raises(MalformedEncodingError):
        serde.loads('{"encoded": "A\\u0321", "len": 3}')


def test_loads_rejects_non_objects():
    with pytest.raises(DecodeError):
        serde.loads('["E"]')
