import pytest
from hal_toolkit.core.document import Document
from hal_toolkit.core.errors import MalformedLinkError
from hal_toolkit.core.link import (
    Link,
    expand_curie,
    from_embedded,
    from_links_entry,
    target_url,
    to_links_entry,
)
from pydantic import ValidationError

NAMESPACES = {"app": "http://ex.com/rels/{rel}"}


def test_from_links_entry_defaults():
    link = from_links_entry("self", {"href": "http://x"})
    assert link.rel == "self"
    assert link.target_url == "http://x"
    assert link.templated is False
    assert link.name is None
    assert link.target is None
    assert not link.is_embedded


def test_from_links_entry_reads_optional_fields():
    link = from_links_entry(
        "app:project",
        {"href": "/projects{?id}", "templated": True, "name": "p", "title": "Projects"},
    )
    assert link.templated is True
    assert link.name == "p"
    assert link.title == "Projects"


def test_from_links_entry_without_href_raises():
    with pytest.raises(MalformedLinkError) as exc:
        from_links_entry("self", {"title": "no target"})

    assert exc.value.rel == "self"
    assert isinstance(exc.value, KeyError)
    assert "self" in str(exc.value)


def test_from_embedded_uses_embedded_self_url():
    embedded = Document.from_dict(
        {"city": "Denver", "_links": {"self": {"href": "http://ex.com/offices/7"}}}
    )
    link = from_embedded("office", embedded)

    assert link.rel == "office"
    assert link.target_url == "http://ex.com/offices/7"
    assert link.templated is False
    assert link.target is embedded
    assert link.is_embedded


def test_from_embedded_without_self_is_anonymous():
    link = from_embedded("office", Document.from_dict({"city": "Denver"}))
    assert link.target_url is None
    assert target_url(link) is None


def test_target_url_expands_templates():
    link = Link(rel="orders", target_url="/orders{?id}", templated=True)
    assert target_url(link, {"id": 5}) == "/orders?id=5"
    assert target_url(link) == "/orders"
    assert target_url(link, {"id": "a b"}) == "/orders?id=a%20b"


def test_target_url_plain_link_is_verbatim():
    link = Link(rel="self", target_url="http://x/{not-a-template}")
    assert target_url(link) == "http://x/{not-a-template}"
    assert target_url(link, {"id": 5}) == "http://x/{not-a-template}"


def test_target_url_anonymous_returns_none():
    assert target_url(Link(rel="self")) is None


def test_templated_link_needs_href():
    with pytest.raises(ValidationError):
        Link(rel="search", templated=True)


def test_links_are_immutable():
    link = Link(rel="self", target_url="http://x")
    with pytest.raises(ValidationError):
        link.rel = "other"  # type: ignore[misc]


def test_expand_curie_known_prefix():
    link = Link(rel="app:manager", target_url="http://ex.com/people/84", name="boss")
    expanded = expand_curie(link, NAMESPACES)

    assert [l.rel for l in expanded] == ["app:manager", "http://ex.com/rels/manager"]
    assert expanded[0] is link
    assert expanded[1].target_url == link.target_url
    assert expanded[1].name == "boss"
    # original untouched
    assert link.rel == "app:manager"


def test_expand_curie_plain_rel():
    link = Link(rel="self", target_url="http://x")
    assert expand_curie(link, {}) == [link]
    assert expand_curie(link, NAMESPACES) == [link]


def test_expand_curie_unknown_prefix_is_not_an_error():
    link = Link(rel="app:manager", target_url="http://x")
    assert [l.rel for l in expand_curie(link, {})] == ["app:manager"]
    assert [l.rel for l in expand_curie(link, {"other": "http://o/{rel}"})] == [
        "app:manager"
    ]


def test_expand_curie_splits_on_first_colon_only():
    link = Link(rel="app:a:b", target_url="http://x")
    assert [l.rel for l in expand_curie(link, NAMESPACES)] == [
        "app:a:b",
        "http://ex.com/rels/a%3Ab",
    ]


def test_to_links_entry_omits_defaults():
    assert to_links_entry(Link(rel="self", target_url="http://x")) == {"href": "http://x"}
    assert to_links_entry(
        Link(rel="s", target_url="/s{?q}", templated=True, name="n", title="t")
    ) == {"href": "/s{?q}", "templated": True, "name": "n", "title": "t"}


@pytest.mark.parametrize(
    "fragment",
    [{"href": None}, {"href": None, "templated": True}, {"href": 42}],
)
def test_from_links_entry_rejects_missing_or_non_string_href(fragment):
    with pytest.raises(MalformedLinkError):
        from_links_entry("self", fragment)
