"""Pure HAL core: links, documents and transcoders. No I/O."""

from .converters import (
    EachConverter,
    FunctionConverter,
    IdentityConverter,
    UrlIdConverter,
    ValueConverter,
    parse_id_from_href,
)
from .document import Document
from .errors import (
    HalClientError,
    HalError,
    HalHTTPError,
    HalParseError,
    MalformedLinkError,
    NoSuchLinkError,
    ParamPathConflictError,
    TranscoderDefinitionError,
    TranscoderModelValidationError,
)
from .link import Link, expand_curie, from_embedded, from_links_entry, target_url
from .logging import LogfmtFormatter, setup_logging
from .observability import log_event
from .params import get_param, normalize_param_path, put_param
from .transcoder import RuleKind, Transcoder, TranscoderBuilder, TranscoderRule

__all__ = [
    # Links
    "Link",
    "from_links_entry",
    "from_embedded",
    "target_url",
    "expand_curie",
    # Documents
    "Document",
    # Transcoders
    "Transcoder",
    "TranscoderBuilder",
    "TranscoderRule",
    "RuleKind",
    "get_param",
    "put_param",
    "normalize_param_path",
    # Converters
    "ValueConverter",
    "IdentityConverter",
    "FunctionConverter",
    "EachConverter",
    "UrlIdConverter",
    "parse_id_from_href",
    # Exceptions
    "HalError",
    "MalformedLinkError",
    "TranscoderDefinitionError",
    "ParamPathConflictError",
    "TranscoderModelValidationError",
    "HalClientError",
    "HalHTTPError",
    "HalParseError",
    "NoSuchLinkError",
    # Logging
    "setup_logging",
    "LogfmtFormatter",
    "log_event",
]
