"""Reading and placing values at nested key paths in a parameter map."""

from __future__ import annotations

from collections.abc import Hashable, Mapping
from typing import Any, Dict, Sequence, Tuple, Union

from .errors import ParamPathConflictError, TranscoderDefinitionError

ParamPath = Tuple[Hashable, ...]


def normalize_param_path(param: Union[Hashable, Sequence[Hashable]]) -> ParamPath:
    """
    Wraps a bare key into a one-element path.
    Example: 'address' -> ('address',); ['a', 'b'] -> ('a', 'b')
    """
    if isinstance(param, (list, tuple)):
        path = tuple(param)
    else:
        path = (param,)

    if not path:
        raise TranscoderDefinitionError("param path must contain at least one key")
    for key in path:
        if key is None or not isinstance(key, Hashable):
            raise TranscoderDefinitionError(f"invalid param key {key!r} in {param!r}")
    return path


def get_param(params: Mapping[Any, Any], path: ParamPath) -> Any:
    """Returns the value at `path`, or None when any step is missing."""
    current: Any = params
    for key in path:
        if not isinstance(current, Mapping):
            return None
        current = current.get(key)
        if current is None:
            return None
    return current


def put_param(value: Any, params: Mapping[Any, Any], path: ParamPath) -> Dict[Any, Any]:
    """
    Returns a copy of `params` with `value` placed at `path`.

    None is absence: params come back unchanged. Missing intermediate
    containers are created; existing ones are copied and kept, so sibling
    keys survive. Only the containers along `path` are copied.
    """
    if value is None:
        return params  # type: ignore[return-value]

    root: Dict[Any, Any] = dict(params)
    container = root
    for depth, key in enumerate(path[:-1]):
        existing = container.get(key)
        if existing is None:
            child: Dict[Any, Any] = {}
        elif isinstance(existing, Mapping):
            child = dict(existing)
        else:
            raise ParamPathConflictError(path, path[: depth + 1], existing)
        container[key] = child
        container = child

    container[path[-1]] = value
    return root


__all__ = ["ParamPath", "normalize_param_path", "get_param", "put_param"]
