"""hal_toolkit package exports."""

from .client import HAL_MEDIA_TYPE, HalClient
from .config import ClientSettings, create_client_from_env, load_env_config
from .core import (
    Document,
    EachConverter,
    FunctionConverter,
    HalClientError,
    HalError,
    HalHTTPError,
    HalParseError,
    IdentityConverter,
    Link,
    LogfmtFormatter,
    MalformedLinkError,
    NoSuchLinkError,
    ParamPathConflictError,
    RuleKind,
    Transcoder,
    TranscoderBuilder,
    TranscoderDefinitionError,
    TranscoderModelValidationError,
    TranscoderRule,
    UrlIdConverter,
    ValueConverter,
    expand_curie,
    from_embedded,
    from_links_entry,
    log_event,
    setup_logging,
    target_url,
)

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
    # Converters
    "ValueConverter",
    "IdentityConverter",
    "FunctionConverter",
    "EachConverter",
    "UrlIdConverter",
    # Client
    "HalClient",
    "HAL_MEDIA_TYPE",
    "ClientSettings",
    "load_env_config",
    "create_client_from_env",
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
