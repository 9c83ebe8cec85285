"""Parsers for the API document and form query responses."""

from prismic_kit.parsers.api_document import parse_api_data
from prismic_kit.parsers.search import parse_search_response

__all__ = [
    "parse_api_data",
    "parse_search_response",
]
