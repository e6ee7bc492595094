"""HTTP interop for structured errors.

Decoding JSON requests, responding with JSON values and errors, building
URLs and calling other services all raise or consume ``Error`` values.
"""

from .client import AsyncHttpClient, HttpClient
from .decoder import (
    REQUEST_ENTITY_TOO_LARGE,
    UNSUPPORTED_MEDIA_TYPE,
    Decoder,
    DecoderMiddleware,
    JSONDecoder,
    Validator,
    validating_decoder_middleware,
)
from .responder import JSON_CONTENT_TYPE, JSONResponder
from .server import create_app, json_body, register_error_handlers
from .url_builder import URLBuilder, URLBuilderSource, new_url_builder_source

__all__ = [
    "AsyncHttpClient",
    "Decoder",
    "DecoderMiddleware",
    "HttpClient",
    "JSONDecoder",
    "JSONResponder",
    "JSON_CONTENT_TYPE",
    "REQUEST_ENTITY_TOO_LARGE",
    "UNSUPPORTED_MEDIA_TYPE",
    "URLBuilder",
    "URLBuilderSource",
    "Validator",
    "create_app",
    "json_body",
    "new_url_builder_source",
    "register_error_handlers",
    "validating_decoder_middleware",
]
