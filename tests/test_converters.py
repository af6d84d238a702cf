import pytest
from hal_toolkit.core.converters import (
    EachConverter,
    FunctionConverter,
    IdentityConverter,
    UrlIdConverter,
    ValueConverter,
    is_value_converter,
    parse_id_from_href,
)


def test_identity_converter_passes_values_through():
    conv = IdentityConverter()
    value = {"nested": [1, 2]}
    assert conv.decode(value) is value
    assert conv.encode(value) is value
    assert isinstance(conv, ValueConverter)


def test_function_converter():
    conv = FunctionConverter(decode=str.upper, encode=str.lower)
    assert conv.decode("abc") == "ABC"
    assert conv.encode("ABC") == "abc"
    assert is_value_converter(conv)


def test_each_converter_maps_items():
    conv = EachConverter(UrlIdConverter("http://example.com/projects/{id}"))
    assert conv.decode(
        ["http://example.com/projects/1", "http://example.com/projects/2"]
    ) == [1, 2]
    assert conv.encode([3]) == ["http://example.com/projects/3"]


def test_url_id_converter():
    conv = UrlIdConverter("http://example.com/people/{id}")
    assert conv.decode("http://example.com/people/84") == 84
    assert conv.decode("http://example.com/people/84/") == 84
    assert conv.encode(84) == "http://example.com/people/84"

    with pytest.raises(ValueError):
        conv.decode("http://example.com/people/jane")


def test_parse_id_from_href_various():
    assert parse_id_from_href("/api/v3/work_packages/42") == 42
    assert parse_id_from_href("/api/v3/projects/100/") == 100
    assert parse_id_from_href("/api/v3/items/not-an-int") is None
    assert parse_id_from_href(None) is None
    assert parse_id_from_href("") is None


def test_is_value_converter_rejects_incomplete_objects():
    assert not is_value_converter(object())
    assert not is_value_converter(IdentityConverter)
