"""
Tests for form queries.

Run with: pytest tests/test_search.py -v
"""

import asyncio

import httpx
import pytest

from conftest import SEARCH_URL, mock_client
from prismic_kit import Api, Predicate, UnexpectedError
from prismic_kit.models import ApiData, Ref


def test_predicate_at():
    assert Predicate.at("document.id", "doc1").q == '[:d = at(document.id, "doc1")]'


def test_query_wraps_predicates(api_document):
    form = Api(ApiData.model_validate(api_document)).form("everything")
    form = form.query(Predicate.at("document.type", "article"), Predicate.at("document.id", "x"))

    assert form.data["q"] == [
        '[[:d = at(document.type, "article")][:d = at(document.id, "x")]]'
    ]


def test_setters_return_new_forms(api_document):
    original = Api(ApiData.model_validate(api_document)).form("everything")
    updated = original.page_size(50).page(2)

    assert original.data == {"page": ["1"], "pageSize": ["20"]}
    assert updated.data == {"page": ["2"], "pageSize": ["50"]}


def test_multiple_field_appends(api_document):
    form = Api(ApiData.model_validate(api_document)).form("blog")
    form = form.query(Predicate.at("document.tags", "Macaron"))

    assert len(form.data["q"]) == 2


def test_ref_accepts_ref_or_string(api_document):
    api = Api(ApiData.model_validate(api_document))

    assert api.form("everything").ref(api.master).data["ref"] == ["UlfoxUnM08QWYXdl"]
    assert api.form("everything").ref("preview-token").data["ref"] == ["preview-token"]
    assert isinstance(api.master, Ref)


def test_unknown_field_is_rejected(api_document):
    form = Api(ApiData.model_validate(api_document)).form("everything")

    with pytest.raises(UnexpectedError, match="Unknown field"):
        form.set("orderings", "[my.article.date]")


def test_submit_requires_ref(api_document):
    form = Api(ApiData.model_validate(api_document)).form("everything")

    with pytest.raises(UnexpectedError):
        asyncio.run(form.submit())


def test_submit_sends_data_and_token(api_document):
    seen = {}

    def handler(request):
        seen["url"] = str(request.url).split("?")[0]
        seen["params"] = request.url.params
        return httpx.Response(
            200,
            json={"page": 1, "total_results_size": 1, "results": [{"id": "doc1", "type": "article"}]},
        )

    async def run():
        async with mock_client(handler) as client:
            api = Api(ApiData.model_validate(api_document), access_token="secret", client=client)
            return await api.form("everything").ref(api.master).submit()

    response = asyncio.run(run())

    assert seen["url"] == SEARCH_URL
    assert seen["params"]["ref"] == "UlfoxUnM08QWYXdl"
    assert seen["params"]["access_token"] == "secret"
    assert seen["params"]["pageSize"] == "20"
    assert [d.id for d in response.results] == ["doc1"]
