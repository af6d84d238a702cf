"""
Value converters translate between HAL values and application values.

A converter is anything with `decode(hal_value)` and `encode(app_value)`.
The transcoder never calls a converter with None, so converters only see
present values. Exceptions raised by a converter are not caught.
"""

from __future__ import annotations

from typing import Any, Callable, Iterable, List, Optional, Protocol, runtime_checkable

import uritemplate


@runtime_checkable
class ValueConverter(Protocol):
    def decode(self, hal_value: Any) -> Any:
        """Returns the application representation of a HAL value."""
        ...

    def encode(self, app_value: Any) -> Any:
        """Returns the HAL representation of an application value."""
        ...


class IdentityConverter:
    def decode(self, hal_value: Any) -> Any:
        return hal_value

    def encode(self, app_value: Any) -> Any:
        return app_value

    def __repr__(self) -> str:
        return "IdentityConverter()"


IDENTITY = IdentityConverter()


class FunctionConverter:
    """Builds a converter from a pair of plain callables."""

    def __init__(self, decode: Callable[[Any], Any], encode: Callable[[Any], Any]):
        self._decode = decode
        self._encode = encode

    def decode(self, hal_value: Any) -> Any:
        return self._decode(hal_value)

    def encode(self, app_value: Any) -> Any:
        return self._encode(app_value)


class EachConverter:
    """Applies an item converter to every element of a sequence (for `links`)."""

    def __init__(self, item_converter: ValueConverter):
        self.item_converter = item_converter

    def decode(self, hal_value: Iterable[Any]) -> List[Any]:
        return [self.item_converter.decode(item) for item in hal_value]

    def encode(self, app_value: Iterable[Any]) -> List[Any]:
        return [self.item_converter.encode(item) for item in app_value]


def parse_id_from_href(href: Optional[str]) -> Optional[int]:
    """
    Extracts the ID from a RESTful URL.
    Example: '/api/v3/work_packages/42' -> 42
    """
    if not href:
        return None
    try:
        # Splits by '/' and takes the last non-empty segment
        return int(href.strip("/").split("/")[-1])
    except (ValueError, IndexError):
        return None


class UrlIdConverter:
    """
    Maps resource URLs to integer ids and back.

    `template` is a URI template with an `{id}` variable, e.g.
    'http://example.com/people/{id}'. Decoding a URL whose last segment is not
    an integer raises ValueError.
    """

    def __init__(self, template: str):
        self.template = template

    def decode(self, hal_value: str) -> int:
        resource_id = parse_id_from_href(hal_value)
        if resource_id is None:
            raise ValueError(f"No integer id at the end of {hal_value!r}")
        return resource_id

    def encode(self, app_value: Any) -> str:
        return uritemplate.expand(self.template, id=str(app_value))


def is_value_converter(candidate: Any) -> bool:
    # A converter class has unbound decode/encode; an instance is required
    if isinstance(candidate, type):
        return False
    return callable(getattr(candidate, "decode", None)) and callable(
        getattr(candidate, "encode", None)
    )


__all__ = [
    "ValueConverter",
    "IdentityConverter",
    "IDENTITY",
    "FunctionConverter",
    "EachConverter",
    "UrlIdConverter",
    "parse_id_from_href",
    "is_value_converter",
]
