"""Form queries against a repository ref."""

import json
from typing import TYPE_CHECKING, Any, Union

from prismic_kit.errors import UnexpectedError
from prismic_kit.fetch import fetch_json
from prismic_kit.models import Form, Ref, SearchResponse
from prismic_kit.parsers import parse_search_response

if TYPE_CHECKING:
    from prismic_kit.api import Api


class Predicate:
    """A single query predicate, e.g. ``[:d = at(document.id, "X")]``."""

    def __init__(self, operator: str, path: str, *args: Any):
        self.operator = operator
        self.path = path
        self.args = args

    @classmethod
    def at(cls, path: str, value: str) -> "Predicate":
        return cls("at", path, value)

    @property
    def q(self) -> str:
        values = ", ".join(json.dumps(arg) for arg in self.args)
        return f"[:d = {self.operator}({self.path}, {values})]"

    def __repr__(self) -> str:
        return f"Predicate({self.q!r})"


class SearchForm:
    """
    A form bound to an ``Api``, with the query parameters collected so far.

    Every setter returns a new ``SearchForm``; the original is left untouched.
    """

    def __init__(self, api: "Api", form: Form, data: dict[str, list[str]]):
        self.api = api
        self.form = form
        self.data = data

    def set(self, field: str, value: Any) -> "SearchForm":
        """Set a field, appending when the field accepts multiple values."""
        descriptor = self.form.fields.get(field)
        if descriptor is None:
            raise UnexpectedError(f"Unknown field {field}")
        value = str(value)
        data = dict(self.data)
        data[field] = [*data.get(field, []), value] if descriptor.multiple else [value]
        return SearchForm(self.api, self.form, data)

    def ref(self, ref: Union[Ref, str]) -> "SearchForm":
        return self.set("ref", ref.ref if isinstance(ref, Ref) else ref)

    def query(self, *predicates: Predicate) -> "SearchForm":
        return self.set("q", "[" + "".join(p.q for p in predicates) + "]")

    def page_size(self, size: int) -> "SearchForm":
        return self.set("pageSize", size)

    def page(self, page: int) -> "SearchForm":
        return self.set("page", page)

    async def submit(self) -> SearchResponse:
        """Run the query and decode the first page of results."""
        if "ref" not in self.data:
            raise UnexpectedError("A ref must be set before submitting a form")
        if self.form.method.upper() != "GET":
            raise UnexpectedError(f"Form type not supported: {self.form.method}")

        params = dict(self.data)
        if self.api.access_token is not None:
            params["access_token"] = [self.api.access_token]

        body = await fetch_json(
            self.form.action, params=params, proxy=self.api.proxy, client=self.api.client
        )
        return parse_search_response(body)
