"""
In-memory HAL document: plain properties plus links.

Embedded resources are held as links whose `target` is the embedded
Document, so link lookups see both sections. Documents are never mutated;
`put_*` return a new Document.
"""

from __future__ import annotations

import json
from types import MappingProxyType
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Union

from .errors import HalParseError
from .link import (
    Link,
    expand_curie,
    from_embedded,
    from_links_entry,
    target_url,
    to_links_entry,
)

LINKS_KEY = "_links"
EMBEDDED_KEY = "_embedded"
CURIES_REL = "curies"

_MISSING = object()


def _fallback(default: Any, default_factory: Optional[Callable[[], Any]]) -> Any:
    return default_factory() if default_factory is not None else default


def _as_list(value: Any) -> List[Any]:
    return list(value) if isinstance(value, list) else [value]


def _section(data: Mapping[str, Any], key: str) -> Mapping[str, Any]:
    section = data.get(key) or {}
    if not isinstance(section, Mapping):
        raise HalParseError(
            f"Expected {key} to be a JSON object, got {type(section).__name__}"
        )
    return section


class Document:
    def __init__(
        self,
        properties: Optional[Mapping[str, Any]] = None,
        links: Optional[Mapping[str, Iterable[Link]]] = None,
    ):
        self._properties: Dict[str, Any] = dict(properties or {})
        # Plain links before embedded ones, the order to_dict/from_dict preserve
        self._links: Dict[str, List[Link]] = {
            rel: sorted(rel_links, key=lambda link: link.is_embedded)
            for rel, rel_links in (links or {}).items()
        }

    # --- Parsing / serialization ------------------------------------------ #

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Document":
        if not isinstance(data, Mapping):
            raise HalParseError(
                f"Expected a JSON object for a HAL document, got {type(data).__name__}"
            )

        links: Dict[str, List[Link]] = {}
        for rel, entries in _section(data, LINKS_KEY).items():
            links.setdefault(rel, []).extend(
                from_links_entry(rel, entry) for entry in _as_list(entries)
            )
        for rel, docs in _section(data, EMBEDDED_KEY).items():
            links.setdefault(rel, []).extend(
                from_embedded(rel, cls.from_dict(doc)) for doc in _as_list(docs)
            )

        properties = {
            k: v for k, v in data.items() if k not in (LINKS_KEY, EMBEDDED_KEY)
        }
        return cls(properties, links)

    @classmethod
    def from_json(cls, text: Union[str, bytes]) -> "Document":
        try:
            data = json.loads(text)
        except ValueError as exc:
            raise HalParseError(f"Invalid JSON: {exc}") from exc
        return cls.from_dict(data)

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = dict(self._properties)
        links: Dict[str, Any] = {}
        embedded: Dict[str, Any] = {}

        for rel, rel_links in self._links.items():
            plain = [to_links_entry(link) for link in rel_links if not link.is_embedded]
            nested = [link.target.to_dict() for link in rel_links if link.is_embedded]
            if plain:
                links[rel] = plain if len(plain) > 1 or rel == CURIES_REL else plain[0]
            if nested:
                embedded[rel] = nested if len(nested) > 1 else nested[0]

        if links:
            out[LINKS_KEY] = links
        if embedded:
            out[EMBEDDED_KEY] = embedded
        return out

    def to_json(self, **kwargs: Any) -> str:
        return json.dumps(self.to_dict(), **kwargs)

    # --- Properties -------------------------------------------------------- #

    @property
    def properties(self) -> Mapping[str, Any]:
        return MappingProxyType(self._properties)

    def get_property(
        self,
        name: str,
        default: Any = None,
        *,
        default_factory: Optional[Callable[[], Any]] = None,
    ) -> Any:
        """Returns the property, or the default (factory only called on absence)."""
        value = self._properties.get(name, _MISSING)
        if value is _MISSING:
            return _fallback(default, default_factory)
        return value

    def put_property(self, name: str, value: Any) -> "Document":
        properties = dict(self._properties)
        properties[name] = value
        return Document(properties, self._links)

    # --- Links ------------------------------------------------------------- #

    @property
    def rels(self) -> List[str]:
        return list(self._links)

    def namespaces(self) -> Dict[str, str]:
        """CURIE prefix -> URI template, from the `curies` links."""
        return {
            link.name: link.target_url
            for link in self._links.get(CURIES_REL, [])
            if link.name and link.target_url
        }

    def get_links(self, rel: str) -> List[Link]:
        """
        Links whose rel matches, either literally or after CURIE expansion.
        Example: 'app:manager' and 'http://ex.com/rels/manager' find the same links.
        """
        namespaces = self.namespaces()
        return [
            link
            for rel_links in self._links.values()
            for link in rel_links
            if any(variant.rel == rel for variant in expand_curie(link, namespaces))
        ]

    def link_target(
        self,
        rel: str,
        default: Any = None,
        *,
        default_factory: Optional[Callable[[], Any]] = None,
        vars: Optional[Mapping[str, Any]] = None,
    ) -> Any:
        for url in self._targets(rel, vars):
            return url
        return _fallback(default, default_factory)

    def link_targets(
        self,
        rel: str,
        default: Any = None,
        *,
        default_factory: Optional[Callable[[], Any]] = None,
        vars: Optional[Mapping[str, Any]] = None,
    ) -> Any:
        targets = list(self._targets(rel, vars))
        return targets if targets else _fallback(default, default_factory)

    def _targets(self, rel: str, vars: Optional[Mapping[str, Any]]) -> Iterable[str]:
        for link in self.get_links(rel):
            url = target_url(link, vars)
            if url is not None:
                yield url

    def put_link(
        self,
        rel: str,
        target: Union[str, "Document"],
        *,
        templated: bool = False,
        name: Optional[str] = None,
    ) -> "Document":
        """
        Adds a link (or, given a Document, an embedded resource) under `rel`.
        Links already present under `rel` are kept; embedded resources are
        listed after plain links.
        """
        if isinstance(target, Document):
            link = from_embedded(rel, target)
        else:
            link = Link(rel=rel, target_url=target, templated=templated, name=name)

        links = dict(self._links)
        links[rel] = [*links.get(rel, []), link]
        return Document(self._properties, links)

    def embedded(self, rel: str) -> List["Document"]:
        return [link.target for link in self.get_links(rel) if link.is_embedded]

    def url(self, default: Any = None) -> Any:
        """This document's canonical URL (its `self` link)."""
        return self.link_target("self", default)

    # --- Dunder ------------------------------------------------------------ #

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Document):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Document(url={self.url()!r}, rels={self.rels!r})"


__all__ = ["Document", "LINKS_KEY", "EMBEDDED_KEY", "CURIES_REL"]
