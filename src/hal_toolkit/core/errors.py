from __future__ import annotations

from typing import Any, Dict, Optional


class HalError(Exception):
    """Base error for everything raised by hal_toolkit."""


class MalformedLinkError(HalError, KeyError):
    """A `_links` entry is missing its `href`."""

    def __init__(self, rel: str, fragment: Any):
        super().__init__(f"Link {rel!r} has no href: {fragment!r}")
        self.rel = rel
        self.fragment = fragment

    def __str__(self) -> str:
        # KeyError would repr() the message otherwise
        return str(self.args[0])


class TranscoderDefinitionError(HalError, ValueError):
    """A transcoder rule was registered with invalid options."""


class ParamPathConflictError(HalError, TypeError):
    def __init__(self, path: tuple, blocked_at: tuple, value: Any):
        super().__init__(
            f"Cannot place value at {'.'.join(map(str, path))}: "
            f"{'.'.join(map(str, blocked_at))} holds {type(value).__name__}, "
            "not a mapping"
        )
        self.path = path
        self.blocked_at = blocked_at


class TranscoderModelValidationError(HalError):
    pass


class HalClientError(HalError):
    """Base error for HTTP client failures."""


class HalHTTPError(HalClientError):
    def __init__(
        self,
        *,
        status_code: int,
        method: str,
        url: str,
        message: str,
        response_json: Optional[Dict[str, Any]] = None,
        response_text: Optional[str] = None,
    ):
        super().__init__(f"{status_code} {method} {url}: {message}")
        self.status_code = status_code
        self.method = method
        self.url = url
        self.response_json = response_json
        self.response_text = response_text


class HalParseError(HalError, ValueError):
    """A response body or JSON text is not a HAL document."""


class NoSuchLinkError(HalClientError):
    def __init__(self, rel: str, reason: str = "no such link"):
        super().__init__(f"Cannot follow {rel!r}: {reason}")
        self.rel = rel


__all__ = [
    "HalError",
    "MalformedLinkError",
    "TranscoderDefinitionError",
    "ParamPathConflictError",
    "TranscoderModelValidationError",
    "HalClientError",
    "HalHTTPError",
    "HalParseError",
    "NoSuchLinkError",
]
