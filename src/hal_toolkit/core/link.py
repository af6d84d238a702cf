"""
Links: directed references from one resource to another.

They come from the `_links` section of a HAL document, or are derived from
the resources in its `_embedded` section.
"""

from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional

import uritemplate
from pydantic import BaseModel, ConfigDict, Field, model_validator

from .errors import MalformedLinkError


class Link(BaseModel):
    rel: str
    target_url: Optional[str] = None
    templated: bool = False
    name: Optional[str] = None
    title: Optional[str] = None
    # Embedded Document this link was derived from, if any
    target: Optional[Any] = Field(default=None, repr=False)

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    @model_validator(mode="after")
    def check_templated_has_href(self) -> "Link":
        if self.templated and self.target_url is None:
            raise ValueError(f"templated link {self.rel!r} has no href")
        return self

    @property
    def is_embedded(self) -> bool:
        return self.target is not None


def from_links_entry(rel: str, fragment: Mapping[str, Any]) -> Link:
    """
    Build a link from one `_links` entry.
    Example: from_links_entry('self', {'href': 'http://x'})
    """
    try:
        href = fragment["href"]
    except (KeyError, TypeError) as exc:
        raise MalformedLinkError(rel, fragment) from exc
    if not isinstance(href, str):
        raise MalformedLinkError(rel, fragment)

    return Link(
        rel=rel,
        target_url=href,
        templated=bool(fragment.get("templated", False)),
        name=fragment.get("name"),
        title=fragment.get("title"),
    )


def from_embedded(rel: str, embedded_doc: Any) -> Link:
    """
    Build a link to an embedded document. The target URL is the embedded
    document's own self link, or None when it has none.
    """
    return Link(
        rel=rel,
        target_url=embedded_doc.url(),
        templated=False,
        target=embedded_doc,
    )


def target_url(
    link: Link, vars: Optional[Mapping[str, Any]] = None
) -> Optional[str]:
    """
    Returns the URL the link points at, expanding templated links with `vars`.
    Returns None if the link is anonymous.
    """
    if link.templated:
        return uritemplate.expand(link.target_url, dict(vars or {}))
    if link.target_url is None:
        return None
    return link.target_url


def _rel_variations(namespaces: Mapping[str, str], rel: str) -> List[str]:
    prefix, sep, local = rel.partition(":")
    if not sep:
        return [rel]

    template = namespaces.get(prefix)
    if template is None:
        return [rel]
    return [rel, uritemplate.expand(template, rel=local)]


def expand_curie(link: Link, namespaces: Mapping[str, str]) -> List[Link]:
    """
    Expands a CURIE'd rel against a namespace table (prefix -> URI template).

    Returns the link itself followed by its fully-qualified variant when the
    prefix is known; otherwise just the link. Unknown prefixes are not errors.
    """
    variations = _rel_variations(namespaces, link.rel)
    return [link] + [link.model_copy(update={"rel": rel}) for rel in variations[1:]]


def to_links_entry(link: Link) -> Dict[str, Any]:
    """Inverse of from_links_entry: the `_links` fragment for a link."""
    fragment: Dict[str, Any] = {"href": link.target_url}
    if link.templated:
        fragment["templated"] = True
    if link.name is not None:
        fragment["name"] = link.name
    if link.title is not None:
        fragment["title"] = link.title
    return fragment


__all__ = [
    "Link",
    "from_links_entry",
    "from_embedded",
    "target_url",
    "expand_curie",
    "to_links_entry",
]
