import base64

import pytest

from tonic.jsonutil import MarshalError, marshal, marshal_indent, unmarshal


def test_marshal_escapes_html():
    data = {"foo": "bar", "html": "<b>"}
    assert marshal(data) == b'{"foo":"bar","html":"\\u003cb\\u003e"}'


def test_marshal_without_html_escaping():
    data = {"foo": "bar", "html": "<b>"}
    assert marshal(data, escape_html=False) == b'{"foo":"bar","html":"<b>"}'


def test_marshal_list_of_maps():
    data = [{"foo": "bar"}, {"bar": "foo"}]
    assert marshal(data) == b'[{"foo":"bar"},{"bar":"foo"}]'


def test_marshal_float():
    assert marshal(3.1415926) == b"3.1415926"


def test_marshal_keeps_non_ascii_text():
    encoded = marshal({"lang": "GO语言"})
    assert "GO语言" in encoded.decode("utf-8")
    assert unmarshal(encoded) == {"lang": "GO语言"}


def test_marshal_sorts_keys():
    encoded = marshal({"b": 1, "a": 2, "c": 3})
    assert list(unmarshal(encoded)) == ["a", "b", "c"]


def test_marshal_indent():
    data = {"foo": "bar", "bar": "foo"}
    assert marshal_indent(data, "", "    ") == b'{\n    "bar": "foo",\n    "foo": "bar"\n}'


def test_marshal_indent_with_prefix():
    assert marshal_indent({"a": 1}, ">", "  ") == b'{\n>  "a": 1\n>}'


def test_marshal_indent_round_trip():
    data = {"x": [1, 2, {"y": None}], "z": "<tag>"}
    assert unmarshal(marshal_indent(data, "", "\t")) == data


def test_line_separators_always_escaped():
    assert marshal("\u2028", escape_html=False) == b'"\\u2028"'
    assert b"\xe2\x80\xa9" not in marshal("\u2029")


def test_bytes_encoded_as_base64():
    decoded = unmarshal(marshal(b"hello"))
    assert base64.b64decode(decoded) == b"hello"


@pytest.mark.parametrize("value", [object(), {1, 2}, float("nan"), float("inf")])
def test_unsupported_values_raise(value):
    with pytest.raises(MarshalError):
        marshal(value)


def test_marshal_indent_unsupported_raises():
    with pytest.raises(MarshalError):
        marshal_indent(object(), "", "  ")


def test_circular_reference_raises():
    data = []
    data.append(data)
    with pytest.raises(MarshalError):
        marshal(data)


def test_round_trip():
    data = {"n": 1, "f": 2.5, "s": "text & <more>", "l": [True, False, None]}
    assert unmarshal(marshal(data)) == data
    assert unmarshal(marshal(data).decode()) == data


def test_unmarshal_invalid_raises():
    with pytest.raises(MarshalError):
        unmarshal(b"{not json")