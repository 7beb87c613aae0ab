import gzip
import json
import string
import zlib
from urllib.parse import parse_qs

import pytest

from tradex.model import OptionParameter
from tradex.util import (
    Values,
    flate_uncompress,
    float_to_string,
    generate_order_client_id,
    gzip_uncompress,
    merge_option_params,
    values_to_json,
)


def test_values_set_replaces_and_add_appends():
    params = Values()
    params.add("k", "1")
    params.add("k", "2")
    assert params["k"] == ["1", "2"]
    params.set("k", "3")
    assert params["k"] == ["3"]
    assert params.get("k") == "3"


def test_values_get_missing_is_empty():
    assert Values().get("missing") == ""


def test_values_delete():
    params = Values({"a": "1", "b": "2"})
    params.delete("a")
    assert "a" not in params
    assert list(params) == ["b"]


def test_values_encode_sorted_and_escaped():
    params = Values()
    params.set("b", "x y")
    params.set("a", "1")
    assert params.encode() == "a=1&b=x+y"


def test_values_encode_round_trip():
    params = Values()
    params.set("symbol", "BTC/USDT")
    params.add("list", "a&b")
    params.add("list", "c=d")
    decoded = parse_qs(params.encode())
    assert decoded == {"symbol": ["BTC/USDT"], "list": ["a&b", "c=d"]}


def test_values_empty_encode():
    assert Values().encode() == ""


@pytest.mark.parametrize(
    "value,precision,expected",
    [(1.23456, 2, "1.23"), (100.0, 2, "100")],
)
def test_float_to_string_values(value, precision, expected):
    assert float_to_string(value, precision) == expected


@pytest.mark.parametrize("value", [0.1, 12.5, 3.14159265, 1000.0, 0.000123])
@pytest.mark.parametrize("precision", [0, 2, 5, 8])
def test_float_to_string_invariants(value, precision):
    result = float_to_string(value, precision)
    if "." in result:
        assert not result.endswith("0")
        assert len(result.split(".")[1]) <= precision
    assert abs(float(result) - value) <= 0.5 * 10 ** (-precision) + 1e-12


def test_values_to_json_single_and_multi():
    params = Values()
    params.set("a", "1")
    params.add("b", "2")
    params.add("b", "3")
    assert json.loads(values_to_json(params)) == {"a": "1", "b": ["2", "3"]}


def test_values_to_json_escapes_html():
    params = Values({"q": "a<b&c"})
    encoded = values_to_json(params)
    assert b"<" not in encoded and b"&" not in encoded
    assert json.loads(encoded) == {"q": "a<b&c"}


def test_gzip_round_trip():
    assert gzip_uncompress(gzip.compress(b"payload")) == b"payload"


def test_gzip_invalid():
    with pytest.raises(ValueError):
        gzip_uncompress(b"not gzip")


def test_flate_round_trip():
    compressor = zlib.compressobj(wbits=-zlib.MAX_WBITS)
    data = compressor.compress(b"payload") + compressor.flush()
    assert flate_uncompress(data) == b"payload"


def test_flate_invalid():
    with pytest.raises(ValueError):
        flate_uncompress(b"\xff\xff\xff")


def test_generate_order_client_id_shape():
    first = generate_order_client_id(20)
    second = generate_order_client_id(20)
    assert len(first) == 20
    assert first[:5] == second[:5]
    assert all(c in string.hexdigits for c in first[5:])
    assert first != second


def test_generate_order_client_id_too_large():
    with pytest.raises(ValueError):
        generate_order_client_id(40)


def test_merge_option_params_overrides():
    params = Values({"limit": "100"})
    merge_option_params(params, OptionParameter("limit", "5"), OptionParameter("from", "x"))
    assert params.get("limit") == "5"
    assert params.get("from") == "x"