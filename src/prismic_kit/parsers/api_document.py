"""Decoding of the repository's root API document."""

from typing import Any

from pydantic import ValidationError

from prismic_kit.errors import ApiParseError
from prismic_kit.models import ApiData


def _describe(error: ValidationError) -> str:
    first = error.errors()[0]
    location = ".".join(str(part) for part in first["loc"]) or "<document>"
    return f"{location}: {first['msg']} ({error.error_count()} errors)"


def parse_api_data(document: Any) -> ApiData:
    """
    Decode raw API document JSON into an ``ApiData``.

    ``isMasterRef`` and ``multiple`` default to false and ``experiments`` to an
    empty configuration. Every other top-level field is required.

    Raises:
        ApiParseError: If a required field is missing or has the wrong type.
            The raw input is kept on ``ApiParseError.document``.
    """
    try:
        return ApiData.model_validate(document)
    except ValidationError as e:
        raise ApiParseError(
            f"Error while parsing API document: {_describe(e)}", document
        ) from e
