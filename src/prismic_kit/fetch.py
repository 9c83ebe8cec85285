"""HTTP client and API document fetch utilities."""

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Optional
from urllib.parse import urlencode

import httpx

from prismic_kit.config import settings
from prismic_kit.errors import (
    ApiParseError,
    AuthorizationNeeded,
    InvalidToken,
    UnexpectedError,
)
from prismic_kit.models import Proxy

logger = logging.getLogger(__name__)

ACCEPT_JSON = {"Accept": "application/json"}

_http_client: Optional[httpx.AsyncClient] = None
_http_client_loop: Optional[asyncio.AbstractEventLoop] = None


def build_http_client(proxy: Optional[Proxy] = None) -> httpx.AsyncClient:
    """Create an AsyncClient configured from the current settings."""
    return httpx.AsyncClient(
        timeout=httpx.Timeout(
            settings.request_timeout,
            connect=settings.connect_timeout,
            read=settings.idle_timeout,
            pool=settings.idle_timeout,
        ),
        limits=httpx.Limits(max_connections=settings.max_connections),
        follow_redirects=True,
        headers={"User-Agent": settings.user_agent},
        proxy=proxy.url if proxy is not None else None,
    )


def get_http_client() -> httpx.AsyncClient:
    """
    Return the shared client for the running event loop.

    The client's connection pool belongs to the loop it was first used on,
    so a new client is built whenever the running loop changes.
    """
    global _http_client, _http_client_loop
    loop = asyncio.get_running_loop()
    if _http_client is None or _http_client.is_closed or _http_client_loop is not loop:
        _http_client = build_http_client()
        _http_client_loop = loop
    return _http_client


async def close_http_client() -> None:
    """Close the shared client and release its connections."""
    global _http_client, _http_client_loop
    if _http_client is not None:
        await _http_client.aclose()
        _http_client = None
        _http_client_loop = None


@asynccontextmanager
async def http_client(proxy: Optional[Proxy] = None) -> AsyncIterator[httpx.AsyncClient]:
    """Scoped client that is closed on exit."""
    client = build_http_client(proxy)
    try:
        yield client
    finally:
        await client.aclose()


def build_api_url(endpoint: str, access_token: Optional[str] = None) -> str:
    """Append the access token to the endpoint as a query parameter."""
    if access_token is None:
        return endpoint
    separator = "&" if "?" in endpoint else "?"
    return endpoint + separator + urlencode({"access_token": access_token})


async def _send(
    client: httpx.AsyncClient, url: str, params: Optional[dict] = None
) -> httpx.Response:
    try:
        return await asyncio.wait_for(
            client.get(url, params=params, headers=ACCEPT_JSON),
            settings.request_timeout,
        )
    except (httpx.TimeoutException, asyncio.TimeoutError) as e:
        raise UnexpectedError(f"Timeout fetching {url}") from e
    except httpx.HTTPError as e:
        raise UnexpectedError(f"Error fetching {url}: {e}") from e


async def http_get(
    url: str,
    params: Optional[dict] = None,
    proxy: Optional[Proxy] = None,
    client: Optional[httpx.AsyncClient] = None,
) -> httpx.Response:
    """
    GET ``url`` accepting JSON.

    An explicit ``client`` is used as-is. Otherwise a proxy gets a short-lived
    client of its own and everything else goes through the shared client.
    """
    if client is None and proxy is not None:
        async with http_client(proxy) as proxied:
            return await _send(proxied, url, params)
    return await _send(client or get_http_client(), url, params)


async def fetch_json(
    url: str,
    params: Optional[dict] = None,
    proxy: Optional[Proxy] = None,
    client: Optional[httpx.AsyncClient] = None,
) -> Any:
    """Fetch a JSON document, failing on any non-200 status."""
    response = await http_get(url, params=params, proxy=proxy, client=client)
    if response.status_code != 200:
        raise UnexpectedError(
            f"Got an HTTP error {response.status_code} ({response.reason_phrase})"
        )
    return response.json()


def _oauth_initiate(response: httpx.Response) -> Optional[str]:
    try:
        body = response.json()
    except ValueError:
        return None
    if isinstance(body, dict) and isinstance(body.get("oauth_initiate"), str):
        return body["oauth_initiate"]
    return None


async def fetch_api_document(
    url: str,
    access_token: Optional[str] = None,
    proxy: Optional[Proxy] = None,
    client: Optional[httpx.AsyncClient] = None,
) -> Any:
    """
    Fetch the raw API document at ``url``.

    ``url`` already carries the access token, if any; ``access_token`` is only
    used to tell a rejected token apart from a missing one on a 401.

    Raises:
        InvalidToken: 401 with an OAuth URL while a token was supplied.
        AuthorizationNeeded: 401 with an OAuth URL and no token.
        UnexpectedError: Any other failure.
    """
    response = await http_get(url, proxy=proxy, client=client)
    logger.debug("GET %s -> %s", url, response.status_code)

    if response.status_code == 200:
        try:
            return response.json()
        except ValueError as e:
            raise ApiParseError(f"API document at {url} is not valid JSON", response.text) from e

    if response.status_code == 401:
        oauth_url = _oauth_initiate(response)
        if oauth_url is None:
            raise UnexpectedError("Authorization error, but no URL was provided")
        if access_token is not None:
            raise InvalidToken(
                "The provided access token is either invalid or expired", oauth_url
            )
        raise AuthorizationNeeded(
            "You need to provide an access token to access this repository", oauth_url
        )

    raise UnexpectedError(
        f"Got an HTTP error {response.status_code} ({response.reason_phrase})"
    )
