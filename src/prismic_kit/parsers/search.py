"""Decoding of form query responses."""

from typing import Any

from pydantic import ValidationError

from prismic_kit.errors import ApiParseError
from prismic_kit.models import SearchResponse


def parse_search_response(body: Any) -> SearchResponse:
    """Decode a form query response into a ``SearchResponse``."""
    try:
        return SearchResponse.model_validate(body)
    except ValidationError as e:
        raise ApiParseError(f"Error while parsing search response: {e}", body) from e
