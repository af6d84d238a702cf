"""
Declarative, bidirectional mapping between HAL documents and param maps.

Given a document like

    {
      "name": "Jane Doe",
      "mailingAddress": "123 Main St",
      "_links": {
        "app:department": {"href": "http://example.com/dept/42"},
        "app:manager": {"href": "http://example.com/people/84"}
      }
    }

a transcoder for it is defined once:

    person = (
        TranscoderBuilder()
        .property("name")
        .property("mailingAddress", param="address")
        .link("app:department", param="department_url")
        .link("app:manager", param="manager_id",
              value_converter=UrlIdConverter("http://example.com/people/{id}"))
        .build()
    )

    person.decode(doc)
    # {'name': 'Jane Doe', 'address': '123 Main St',
    #  'department_url': 'http://example.com/dept/42', 'manager_id': 84}

    person.encode({'name': 'Jane Doe', 'manager_id': 84})  # -> Document

Rules run in declaration order, both ways.
"""

from __future__ import annotations

import logging
from collections.abc import Hashable, Mapping, Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Tuple, Type, TypeVar, Union

from pydantic import BaseModel, ValidationError

from .converters import IDENTITY, ValueConverter, is_value_converter
from .document import Document
from .errors import TranscoderDefinitionError, TranscoderModelValidationError
from .params import ParamPath, get_param, normalize_param_path, put_param

log = logging.getLogger("hal_toolkit.core.transcoder")

M = TypeVar("M", bound=BaseModel)

Params = Dict[Any, Any]
Extractor = Callable[[Document, Params], Params]
Injector = Callable[[Document, Params], Document]


class RuleKind(str, Enum):
    PROPERTY = "property"
    LINK = "link"
    LINKS = "links"


def decode_value(raw_value: Any, converter: ValueConverter) -> Any:
    if raw_value is None:
        return None
    return converter.decode(raw_value)


def encode_value(app_value: Any, converter: ValueConverter) -> Any:
    if app_value is None:
        return None
    return converter.encode(app_value)


@dataclass(frozen=True)
class TranscoderRule:
    kind: RuleKind
    source: str
    param_path: ParamPath
    converter: ValueConverter = IDENTITY

    def read(self, doc: Document) -> Any:
        if self.kind is RuleKind.PROPERTY:
            return doc.get_property(self.source)
        if self.kind is RuleKind.LINK:
            return doc.link_target(self.source)
        return doc.link_targets(self.source)

    def write(self, doc: Document, hal_value: Any) -> Document:
        if hal_value is None:
            return doc
        if self.kind is RuleKind.PROPERTY:
            return doc.put_property(self.source, hal_value)
        if self.kind is RuleKind.LINK:
            return doc.put_link(self.source, hal_value)

        if isinstance(hal_value, (str, bytes)) or not isinstance(hal_value, Sequence):
            raise TypeError(
                f"links rule {self.source!r} expects a sequence of targets, "
                f"got {type(hal_value).__name__}"
            )
        for target in hal_value:
            doc = doc.put_link(self.source, target)
        return doc

    def extract(self, doc: Document, params: Params) -> Params:
        value = decode_value(self.read(doc), self.converter)
        return put_param(value, params, self.param_path)

    def inject(self, doc: Document, params: Params) -> Document:
        value = encode_value(get_param(params, self.param_path), self.converter)
        return self.write(doc, value)


class Transcoder:
    """An immutable, ordered set of rules. Safe to share between callers."""

    def __init__(self, rules: Sequence[TranscoderRule] = ()):
        self._rules: Tuple[TranscoderRule, ...] = tuple(rules)

    @property
    def rules(self) -> Tuple[TranscoderRule, ...]:
        return self._rules

    @property
    def extractors(self) -> Tuple[Extractor, ...]:
        return tuple(rule.extract for rule in self._rules)

    @property
    def injectors(self) -> Tuple[Injector, ...]:
        return tuple(rule.inject for rule in self._rules)

    def decode(
        self, doc: Document, initial_params: Optional[Mapping[Any, Any]] = None
    ) -> Params:
        """
        Returns the params extracted from `doc`, merged over `initial_params`.
        Values absent from the document leave the initial params untouched.
        """
        params: Params = dict(initial_params or {})
        for extract in self.extractors:
            params = extract(doc, params)
        return params

    def encode(
        self, params: Mapping[Any, Any], initial_doc: Optional[Document] = None
    ) -> Document:
        """
        Returns `initial_doc` (default: an empty Document) with the values in
        `params` written into it. Absent params are not written at all.
        """
        doc = initial_doc if initial_doc is not None else Document()
        for inject in self.injectors:
            doc = inject(doc, params)
        return doc

    def decode_model(
        self,
        model: Type[M],
        doc: Document,
        initial_params: Optional[Mapping[Any, Any]] = None,
    ) -> M:
        params = self.decode(doc, initial_params)
        try:
            return model.model_validate(params)
        except ValidationError as exc:
            raise TranscoderModelValidationError(
                f"Decoded params did not match model {model.__name__}: {exc}"
            ) from exc

    def __len__(self) -> int:
        return len(self._rules)

    def __repr__(self) -> str:
        return f"Transcoder(rules={len(self._rules)})"


class TranscoderBuilder:
    """
    Collects rules in declaration order.
    Options for every rule:
      - param: the key, or list of keys, locating the value in the params.
        Defaults to the property name / rel.
      - value_converter: a ValueConverter. Defaults to identity.
    """

    def __init__(self, base: Optional[Transcoder] = None):
        self._rules: List[TranscoderRule] = list(base.rules) if base else []

    def _add(
        self,
        kind: RuleKind,
        source: str,
        param: Union[Hashable, Sequence[Hashable], None],
        value_converter: Optional[ValueConverter],
    ) -> "TranscoderBuilder":
        if not isinstance(source, str) or not source:
            raise TranscoderDefinitionError(
                f"{kind.value} rule needs a non-empty name, got {source!r}"
            )

        converter = value_converter if value_converter is not None else IDENTITY
        if isinstance(converter, type):
            raise TranscoderDefinitionError(
                f"{kind.value} rule {source!r}: pass an instance of "
                f"{converter.__name__}, not the class"
            )
        if not is_value_converter(converter):
            raise TranscoderDefinitionError(
                f"{kind.value} rule {source!r}: {converter!r} has no decode/encode"
            )

        path = normalize_param_path(source if param is None else param)
        self._rules.append(TranscoderRule(kind, source, path, converter))
        return self

    def property(
        self,
        name: str,
        *,
        param: Union[Hashable, Sequence[Hashable], None] = None,
        value_converter: Optional[ValueConverter] = None,
    ) -> "TranscoderBuilder":
        """Maps the HAL property `name`."""
        return self._add(RuleKind.PROPERTY, name, param, value_converter)

    def link(
        self,
        rel: str,
        *,
        param: Union[Hashable, Sequence[Hashable], None] = None,
        value_converter: Optional[ValueConverter] = None,
    ) -> "TranscoderBuilder":
        """Maps the target URL of the (first) `rel` link."""
        return self._add(RuleKind.LINK, rel, param, value_converter)

    def links(
        self,
        rel: str,
        *,
        param: Union[Hashable, Sequence[Hashable], None] = None,
        value_converter: Optional[ValueConverter] = None,
    ) -> "TranscoderBuilder":
        """
        Maps every `rel` link target as a list. The converter sees the whole
        list; wrap an item converter in EachConverter to convert per target.
        """
        return self._add(RuleKind.LINKS, rel, param, value_converter)

    def build(self) -> Transcoder:
        transcoder = Transcoder(self._rules)
        log.debug(
            "Built transcoder with %d rules: %s",
            len(transcoder),
            ", ".join(f"{r.kind.value}:{r.source}" for r in transcoder.rules),
            extra={"rules": len(transcoder)},
        )
        return transcoder


__all__ = [
    "RuleKind",
    "TranscoderRule",
    "Transcoder",
    "TranscoderBuilder",
    "decode_value",
    "encode_value",
]
