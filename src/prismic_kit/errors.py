"""Errors raised while bootstrapping and querying a repository."""

from enum import Enum
from typing import Any, Optional


class ErrorKind(str, Enum):
    AUTHORIZATION_NEEDED = "authorization_needed"
    INVALID_TOKEN = "invalid_token"
    UNEXPECTED = "unexpected"
    PARSE = "parse"


class ApiError(Exception):
    """
    Base error for the client.

    ``kind`` tags the variant so callers can branch on it instead of on the
    exception class. ``oauth_url`` is the continuation URL for the two
    authorization kinds and ``None`` otherwise.
    """

    kind: ErrorKind = ErrorKind.UNEXPECTED

    def __init__(self, message: str, oauth_url: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.oauth_url = oauth_url

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.message!r}, oauth_url={self.oauth_url!r})"


class AuthorizationNeeded(ApiError):
    """The repository is private and no access token was provided."""

    kind = ErrorKind.AUTHORIZATION_NEEDED

    def __init__(self, message: str, url: str):
        super().__init__(message, url)


class InvalidToken(ApiError):
    """The provided access token was rejected or has expired."""

    kind = ErrorKind.INVALID_TOKEN

    def __init__(self, message: str, url: str):
        super().__init__(message, url)


class UnexpectedError(ApiError):
    kind = ErrorKind.UNEXPECTED


class ApiParseError(ApiError):
    """The API document could not be decoded."""

    kind = ErrorKind.PARSE

    def __init__(self, message: str, document: Any = None):
        super().__init__(message)
        self.document = document
