"""Shared fixtures: a sample API document and mock HTTP clients."""

import copy

import httpx
import pytest

ENDPOINT = "https://repo.example.io/api"
SEARCH_URL = "https://repo.example.io/api/documents/search"

API_DOCUMENT = {
    "refs": [
        {"id": "master", "ref": "UlfoxUnM08QWYXdl", "label": "Master", "isMasterRef": True},
        {
            "id": "release-1",
            "ref": "UlfoxUnM0wkXYXbm",
            "label": "Summer release",
            "scheduledAt": 1405987200000,
        },
    ],
    "bookmarks": {"about": "Ue0EDd_mqb8Dhk3j"},
    "types": {"article": "Article", "blog-post": "Blog post"},
    "tags": ["Featured", "Macaron"],
    "forms": {
        "everything": {
            "method": "GET",
            "enctype": "application/x-www-form-urlencoded",
            "action": SEARCH_URL,
            "fields": {
                "ref": {"type": "String", "multiple": False},
                "q": {"type": "String", "multiple": True},
                "page": {"type": "Integer", "default": "1"},
                "pageSize": {"type": "Integer", "default": "20"},
            },
        },
        "blog": {
            "name": "Blog posts",
            "method": "GET",
            "rel": "collection",
            "enctype": "application/x-www-form-urlencoded",
            "action": SEARCH_URL,
            "fields": {
                "ref": {"type": "String"},
                "q": {"type": "String", "multiple": True, "default": '[[:d = any(document.type, ["blog-post"])]]'},
            },
        },
    },
    "oauth_initiate": "https://repo.example.io/auth",
    "oauth_token": "https://repo.example.io/auth/token",
    "experiments": {
        "draft": [],
        "running": [
            {
                "id": "xp1",
                "googleId": "_UQtin7EQAOH5M34RQq6Dg",
                "name": "Homepage banner",
                "variations": [
                    {"id": "v1", "ref": "VDUBBawGAKoGelsX", "label": "Base"},
                    {"id": "v2", "ref": "VDUUmHIKAZQKk9uq", "label": "Variation 1"},
                ],
            }
        ],
    },
}


@pytest.fixture
def api_document() -> dict:
    """A fresh, mutable copy of the sample API document."""
    return copy.deepcopy(API_DOCUMENT)


def mock_client(handler) -> httpx.AsyncClient:
    """AsyncClient whose requests are answered by ``handler``."""
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))
