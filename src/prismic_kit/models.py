"""
Data models for the prismic.io API document.
"""

from datetime import datetime
from typing import Any, Optional
from urllib.parse import quote

from pydantic import BaseModel, ConfigDict, Field


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)


# --- API Document Models ---

class Ref(_Frozen):
    """
    A fixed point in the repository history.

    The ref must be provided when querying any resource other than the API
    document, so that a given URL always returns the same results.
    """
    id: str
    ref: str = Field(description="Opaque version token used in queries")
    label: str = Field(description="Human-readable name")
    is_master_ref: bool = Field(default=False, alias="isMasterRef")
    scheduled_at: Optional[datetime] = Field(default=None, alias="scheduledAt")


class FormField(_Frozen):
    """Metadata for one form parameter."""
    type: str
    multiple: bool = False
    default: Optional[str] = None


class Form(_Frozen):
    """A named query template exposed by the API document."""
    name: Optional[str] = None
    method: str
    rel: Optional[str] = None
    enctype: str
    action: str = Field(description="Target URL of the form")
    fields: dict[str, FormField]

    @property
    def default_data(self) -> dict[str, list[str]]:
        """Initial query parameters, one entry per field that has a default."""
        return {
            name: [field.default]
            for name, field in self.fields.items()
            if field.default is not None
        }


class Variation(_Frozen):
    id: str
    ref: str
    label: str


class Experiment(_Frozen):
    """An A/B test configured in the repository."""
    id: str
    google_id: Optional[str] = Field(default=None, alias="googleId")
    name: str
    variations: list[Variation] = Field(default_factory=list)


class Experiments(_Frozen):
    draft: list[Experiment] = Field(default_factory=list)
    running: list[Experiment] = Field(default_factory=list)

    @property
    def current(self) -> Optional[Experiment]:
        """The first running experiment, if any."""
        return self.running[0] if self.running else None


class ApiData(_Frozen):
    """The root API document of a repository."""
    refs: list[Ref]
    bookmarks: dict[str, str]
    types: dict[str, str]
    tags: list[str]
    forms: dict[str, Form]
    oauth_initiate: str
    oauth_token: str
    experiments: Experiments = Field(default_factory=Experiments)

    @property
    def oauth_endpoints(self) -> tuple[str, str]:
        return self.oauth_initiate, self.oauth_token


# --- Transport Models ---

class Proxy(_Frozen):
    """An HTTP proxy the client should route requests through."""
    host: str
    port: int
    scheme: str = "http"
    user: Optional[str] = None
    password: Optional[str] = None

    @property
    def url(self) -> str:
        auth = ""
        if self.user is not None:
            auth = quote(self.user, safe="")
            if self.password is not None:
                auth += ":" + quote(self.password, safe="")
            auth += "@"
        return f"{self.scheme}://{auth}{self.host}:{self.port}"


# --- Search Result Models ---

class Document(_Frozen):
    """A document returned by a form query."""
    id: str
    uid: Optional[str] = None
    type: str
    href: Optional[str] = None
    tags: list[str] = Field(default_factory=list)
    slugs: list[str] = Field(default_factory=list)
    data: dict[str, Any] = Field(default_factory=dict)

    @property
    def slug(self) -> str:
        return self.slugs[0] if self.slugs else "-"


class SearchResponse(_Frozen):
    """One page of form query results."""
    page: int = 1
    results_per_page: int = 0
    total_results_size: int = 0
    total_pages: int = 0
    next_page: Optional[str] = None
    prev_page: Optional[str] = None
    results: list[Document] = Field(default_factory=list)
