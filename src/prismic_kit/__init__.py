"""Async client for the prismic.io content repository API."""

from prismic_kit.api import Api, logging_sink, noop_logger
from prismic_kit.cache import InMemoryCache, default_cache
from prismic_kit.errors import (
    ApiError,
    ApiParseError,
    AuthorizationNeeded,
    ErrorKind,
    InvalidToken,
    UnexpectedError,
)
from prismic_kit.fetch import close_http_client, http_client
from prismic_kit.models import (
    ApiData,
    Document,
    Experiment,
    Experiments,
    Form,
    FormField,
    Proxy,
    Ref,
    SearchResponse,
    Variation,
)
from prismic_kit.search import Predicate, SearchForm

__all__ = [
    # Entry point
    "Api",
    "noop_logger",
    "logging_sink",
    # Cache
    "InMemoryCache",
    "default_cache",
    # Errors
    "ApiError",
    "ApiParseError",
    "AuthorizationNeeded",
    "ErrorKind",
    "InvalidToken",
    "UnexpectedError",
    # Transport
    "close_http_client",
    "http_client",
    # Models
    "ApiData",
    "Document",
    "Experiment",
    "Experiments",
    "Form",
    "FormField",
    "Proxy",
    "Ref",
    "SearchResponse",
    "Variation",
    # Queries
    "Predicate",
    "SearchForm",
]
