"""
High-level entry point for talking to a prismic.io repository.
"""

import logging
from typing import Callable, Optional

import httpx

from prismic_kit.cache import InMemoryCache, default_cache
from prismic_kit.config import settings
from prismic_kit.errors import UnexpectedError
from prismic_kit.fetch import build_api_url, fetch_api_document, fetch_json
from prismic_kit.models import ApiData, Document, Experiment, Experiments, Proxy, Ref
from prismic_kit.parsers import parse_api_data
from prismic_kit.search import Predicate, SearchForm

log = logging.getLogger(__name__)

Logger = Callable[[str, str], None]
LinkResolver = Callable[[Document], str]


def noop_logger(level: str, message: str) -> None:
    """Default sink: discard everything."""


_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}


def logging_sink(target: logging.Logger) -> Logger:
    """Adapt a stdlib logger to the ``(level, message)`` sink signature."""

    def sink(level: str, message: str) -> None:
        target.log(_LEVELS.get(level.lower(), logging.INFO), message)

    return sink


class Api:
    """
    Handle on a repository's API document.

    Build one with ``await Api.get(endpoint)``. The views below are derived
    from the document on every access; the document itself never changes.
    """

    def __init__(
        self,
        data: ApiData,
        access_token: Optional[str] = None,
        proxy: Optional[Proxy] = None,
        cache: InMemoryCache = default_cache,
        logger: Logger = noop_logger,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self._data = data
        self._access_token = access_token
        self._proxy = proxy
        self._cache = cache
        self._logger = logger
        self._client = client

    @classmethod
    async def get(
        cls,
        endpoint: str,
        access_token: Optional[str] = None,
        proxy: Optional[Proxy] = None,
        cache: InMemoryCache = default_cache,
        logger: Logger = noop_logger,
        client: Optional[httpx.AsyncClient] = None,
    ) -> "Api":
        """
        Fetch (or reuse from ``cache``) the API document at ``endpoint``.

        The cache key is the full request URL, so each access token is cached
        separately.

        Raises:
            AuthorizationNeeded: The repository is private and no token was given.
            InvalidToken: The token was rejected or has expired.
            UnexpectedError: Any other HTTP or transport failure.
            ApiParseError: The document could not be decoded.
        """
        url = build_api_url(endpoint, access_token)
        document = await cache.get_or_set(
            url,
            settings.api_ttl,
            lambda: fetch_api_document(url, access_token, proxy, client),
        )
        data = parse_api_data(document)
        logger("debug", f"Loaded API document from {endpoint}")
        return cls(data, access_token, proxy, cache, logger, client)

    @property
    def data(self) -> ApiData:
        return self._data

    @property
    def access_token(self) -> Optional[str]:
        return self._access_token

    @property
    def proxy(self) -> Optional[Proxy]:
        return self._proxy

    @property
    def cache(self) -> InMemoryCache:
        return self._cache

    @property
    def logger(self) -> Logger:
        return self._logger

    @property
    def client(self) -> Optional[httpx.AsyncClient]:
        return self._client

    @property
    def refs(self) -> dict[str, Ref]:
        """Refs keyed by label; the first ref with a given label wins."""
        refs: dict[str, Ref] = {}
        for ref in self._data.refs:
            refs.setdefault(ref.label, ref)
        return refs

    @property
    def bookmarks(self) -> dict[str, str]:
        return self._data.bookmarks

    @property
    def types(self) -> dict[str, str]:
        return self._data.types

    @property
    def tags(self) -> list[str]:
        return self._data.tags

    @property
    def forms(self) -> dict[str, SearchForm]:
        """Forms bound to this Api, pre-filled with their default values."""
        return {
            name: SearchForm(self, form, form.default_data)
            for name, form in self._data.forms.items()
        }

    def form(self, name: str) -> SearchForm:
        form = self._data.forms.get(name)
        if form is None:
            raise UnexpectedError(f"Unknown form {name}")
        return SearchForm(self, form, form.default_data)

    @property
    def master(self) -> Ref:
        masters = [ref for ref in self._data.refs if ref.is_master_ref]
        if not masters:
            raise UnexpectedError("no master reference found")
        if len(masters) > 1:
            raise UnexpectedError("multiple master references found")
        return masters[0]

    @property
    def experiments(self) -> Experiments:
        return self._data.experiments

    @property
    def experiment(self) -> Optional[Experiment]:
        """The current running experiment, if any."""
        return self._data.experiments.current

    @property
    def oauth_initiate_endpoint(self) -> str:
        return self._data.oauth_initiate

    @property
    def oauth_token_endpoint(self) -> str:
        return self._data.oauth_token

    async def preview_session(
        self, token: str, link_resolver: LinkResolver, default_url: str
    ) -> str:
        """
        Return the URL to redirect to for previewing a change.

        Args:
            token: Preview token received from the repository (a URL).
            link_resolver: Builds a site URL for a document.
            default_url: Returned whenever the preview cannot be resolved,
                usually the home page of the site.

        Returns:
            The resolved URL of the previewed document, or ``default_url``.
        """
        try:
            token_json = await fetch_json(token, proxy=self.proxy, client=self.client)
            main_document_id = token_json["mainDocument"]
            response = await (
                self.form("everything")
                .query(Predicate.at("document.id", main_document_id))
                .ref(token)
                .submit()
            )
            return link_resolver(response.results[0])
        except Exception as e:
            log.debug("Preview %s failed", token, exc_info=True)
            self.logger("warn", f"Preview {token} fell back to {default_url}: {e!r}")
            return default_url

    def __repr__(self) -> str:
        return f"Api(refs={list(self.refs)!r}, forms={list(self._data.forms)!r})"
