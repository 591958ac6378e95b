"""Integration tests for keyword endpoints."""
import httpx
import pytest
from httpx import AsyncClient

from adapters.keywords.dataforseo_adapter import DataForSEOAdapter
import services.suggestion_service as suggestion_service

pytestmark = pytest.mark.asyncio


def provider_body(keywords):
    return {
        "status_code": 20000,
        "status_message": "Ok.",
        "tasks": [
            {
                "result": [
                    {
                        "keyword": kw,
                        "keyword_info": {"search_volume": 100, "cpc": 0.5, "competition_level": "LOW"},
                    }
                    for kw in keywords
                ]
            }
        ],
    }


class ProviderStub:
    """In-process stand-in for the DataForSEO HTTP API."""

    def __init__(self):
        self.requests = []
        self.status = 200
        self.body = provider_body(["seo tools", "seo blog"])

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return httpx.Response(self.status, json=self.body)


@pytest.fixture
def provider(monkeypatch) -> ProviderStub:
    """Route DataForSEO traffic to a ProviderStub."""
    stub = ProviderStub()

    def factory(**kwargs):
        return DataForSEOAdapter(transport=httpx.MockTransport(stub), **kwargs)

    monkeypatch.setattr(suggestion_service, "DataForSEOAdapter", factory)
    return stub


class TestCreateKeyword:
    """Tests for POST /keywords."""

    async def test_create_keyword(self, async_client: AsyncClient, auth_headers: dict):
        response = await async_client.post(
            "/api/keywords", headers=auth_headers, json={"phrase": "  SEO  "}
        )

        assert response.status_code == 201
        data = response.json()
        assert data["phrase"] == "SEO"
        assert data["normalized"] == "seo"
        assert data["source"] == "manual"
        assert data["searchVolume"] is None
        assert "createdAt" in data

    async def test_duplicate_keyword_conflicts(self, async_client: AsyncClient, auth_headers: dict):
        await async_client.post("/api/keywords", headers=auth_headers, json={"phrase": "SEO"})

        response = await async_client.post(
            "/api/keywords", headers=auth_headers, json={"phrase": "seo"}
        )

        assert response.status_code == 409
        assert response.json()["code"] == "DUPLICATE_KEYWORD_NORMALIZED"

    async def test_meaningless_phrase_rejected(self, async_client: AsyncClient, auth_headers: dict):
        response = await async_client.post(
            "/api/keywords", headers=auth_headers, json={"phrase": "!!!"}
        )

        assert response.status_code == 400
        assert response.json()["code"] == "INVALID_KEYWORD_PHRASE"

    async def test_too_long_phrase_rejected(self, async_client: AsyncClient, auth_headers: dict):
        response = await async_client.post(
            "/api/keywords", headers=auth_headers, json={"phrase": "a" * 101}
        )

        assert response.status_code == 400
        assert response.json()["code"] == "VALIDATION_ERROR"

    async def test_requires_authentication(self, async_client: AsyncClient):
        response = await async_client.post("/api/keywords", json={"phrase": "seo"})

        assert response.status_code == 401
        assert response.json()["code"] == "UNAUTHORIZED"

    async def test_invalid_token(self, async_client: AsyncClient):
        response = await async_client.get(
            "/api/keywords", headers={"Authorization": "Bearer not-a-jwt"}
        )

        assert response.status_code == 401


class TestListKeywords:
    """Tests for GET /keywords."""

    async def test_list_with_search_and_pagination(self, async_client: AsyncClient, auth_headers: dict):
        for phrase in ["react hooks", "React Router", "vue"]:
            await async_client.post("/api/keywords", headers=auth_headers, json={"phrase": phrase})

        response = await async_client.get(
            "/api/keywords", headers=auth_headers, params={"query": "react", "limit": 1}
        )

        assert response.status_code == 200
        data = response.json()
        assert data["total"] == 2
        assert data["page"] == 1
        assert data["limit"] == 1
        assert data["hasMore"] is True
        assert len(data["items"]) == 1

    async def test_keywords_are_shared_between_users(
        self, async_client: AsyncClient, auth_headers: dict, other_auth_headers: dict
    ):
        await async_client.post("/api/keywords", headers=auth_headers, json={"phrase": "shared"})

        response = await async_client.get("/api/keywords", headers=other_auth_headers)

        assert response.json()["total"] == 1

    @pytest.mark.parametrize("params", [{"limit": 101}, {"limit": 0}, {"page": 0}])
    async def test_invalid_paging(self, async_client: AsyncClient, auth_headers: dict, params):
        response = await async_client.get("/api/keywords", headers=auth_headers, params=params)

        assert response.status_code == 400
        assert response.json()["code"] == "VALIDATION_ERROR"


class TestBulkCreateKeywords:
    """Tests for POST /keywords/bulk."""

    async def test_bulk_create_skips_duplicates(self, async_client: AsyncClient, auth_headers: dict):
        response = await async_client.post(
            "/api/keywords/bulk",
            headers=auth_headers,
            json={"phrases": ["React", "react", "Vue"]},
        )

        assert response.status_code == 201
        data = response.json()
        assert data["created"] == 2
        assert data["skipped"] == 1
        assert {k["normalized"] for k in data["keywords"]} == {"react", "vue"}
        assert all(k["source"] == "external" for k in data["keywords"])

    async def test_bulk_all_invalid(self, async_client: AsyncClient, auth_headers: dict):
        response = await async_client.post(
            "/api/keywords/bulk", headers=auth_headers, json={"phrases": ["???", "..."]}
        )

        assert response.status_code == 400
        assert response.json()["code"] == "KEYWORD_BULK_INSERT_ERROR"

    async def test_bulk_too_many(self, async_client: AsyncClient, auth_headers: dict):
        response = await async_client.post(
            "/api/keywords/bulk",
            headers=auth_headers,
            json={"phrases": [f"kw {i}" for i in range(51)]},
        )

        assert response.status_code == 400


class TestKeywordSuggestions:
    """Tests for POST /keywords/suggestions."""

    async def test_fetch_then_cached(
        self, async_client: AsyncClient, auth_headers: dict, provider
    ):
        payload = {"seeds": ["seo", "blog"], "limit": 10}

        first = await async_client.post("/api/keywords/suggestions", headers=auth_headers, json=payload)
        second = await async_client.post(
            "/api/keywords/suggestions", headers=auth_headers, json={"seeds": ["seo"]}
        )

        assert first.status_code == 200
        data = first.json()
        assert data["cached"] is False
        assert data["cacheExpiresAt"]
        assert [s["keyword"] for s in data["suggestions"]] == ["seo tools", "seo blog"]
        assert data["suggestions"][0]["searchVolume"] == 100
        assert data["suggestions"][0]["competition"] == "LOW"

        assert second.status_code == 200
        assert second.json()["cached"] is True
        assert len(provider.requests) == 1

    async def test_force_refresh(self, async_client: AsyncClient, auth_headers: dict, provider):
        payload = {"seeds": ["seo"]}
        await async_client.post("/api/keywords/suggestions", headers=auth_headers, json=payload)

        response = await async_client.post(
            "/api/keywords/suggestions",
            headers=auth_headers,
            json={**payload, "forceRefresh": True},
        )

        assert response.json()["cached"] is False
        assert len(provider.requests) == 2

    async def test_provider_credentials_rejected(
        self, async_client: AsyncClient, auth_headers: dict, provider
    ):
        provider.status = 401

        response = await async_client.post(
            "/api/keywords/suggestions", headers=auth_headers, json={"seeds": ["seo"]}
        )

        assert response.status_code == 401
        assert response.json()["code"] == "DATAFORSEO_INVALID_CREDENTIALS"

    async def test_provider_rate_limited(
        self, async_client: AsyncClient, auth_headers: dict, provider
    ):
        provider.status = 429

        response = await async_client.post(
            "/api/keywords/suggestions", headers=auth_headers, json={"seeds": ["seo"]}
        )

        assert response.status_code == 429
        assert response.json()["code"] == "DATAFORSEO_RATE_LIMIT"

    @pytest.mark.parametrize(
        "payload",
        [
            {"seeds": []},
            {"seeds": ["a", "b", "c", "d", "e", "f"]},
            {"seeds": ["   "]},
            {"seeds": ["seo"], "limit": 101},
        ],
    )
    async def test_invalid_request(self, async_client: AsyncClient, auth_headers: dict, payload):
        response = await async_client.post(
            "/api/keywords/suggestions", headers=auth_headers, json=payload
        )

        assert response.status_code == 400
        assert response.json()["code"] == "VALIDATION_ERROR"

    async def test_endpoint_is_rate_limited(
        self, async_client: AsyncClient, auth_headers: dict, provider
    ):
        for _ in range(10):
            response = await async_client.post(
                "/api/keywords/suggestions", headers=auth_headers, json={"seeds": ["seo"]}
            )
            assert response.status_code == 200

        response = await async_client.post(
            "/api/keywords/suggestions", headers=auth_headers, json={"seeds": ["seo"]}
        )

        assert response.status_code == 429
        assert response.json()["code"] == "RATE_LIMITED"
