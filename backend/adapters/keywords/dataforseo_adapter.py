"""
DataForSEO Labs adapter for keyword suggestions.

Calls the Google keyword-suggestions "live" endpoint with Basic auth and a
bounded timeout, and maps provider failures onto the application's
suggestion errors.
"""

import base64
import logging
from typing import Any, Dict, List, Optional

import httpx

from core.domain.keywords import SuggestionItem
from core.errors import (
    SuggestionInvalidCredentialsError,
    SuggestionProviderError,
    SuggestionRateLimitedError,
    SuggestionTimeoutError,
)

logger = logging.getLogger(__name__)

KEYWORD_SUGGESTIONS_PATH = "/v3/dataforseo_labs/google/keyword_suggestions/live"

# Body-level status code DataForSEO uses for "Ok."
DATAFORSEO_OK = 20000


class DataForSEOAdapter:
    """
    Keyword-research client.

    One instance may be reused for several calls; use it as an async context
    manager or call ``close()`` when done.
    """

    def __init__(
        self,
        login: str,
        password: str,
        base_url: str = "https://api.dataforseo.com",
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize the adapter.

        Args:
            login: DataForSEO API login
            password: DataForSEO API password
            base_url: API root
            timeout: Request timeout in seconds (default: 30)
            transport: Optional httpx transport, used by tests
        """
        self.login = login
        self.password = password
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    def _get_client(self) -> httpx.AsyncClient:
        """Get or create the async HTTP client with auth headers."""
        if self._client is None:
            credentials = f"{self.login}:{self.password}"
            encoded_credentials = base64.b64encode(credentials.encode()).decode()

            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                headers={
                    "Authorization": f"Basic {encoded_credentials}",
                    "Content-Type": "application/json",
                },
                timeout=self.timeout,
                transport=self._transport,
            )

        return self._client

    async def close(self):
        """Close the HTTP client connection."""
        if self._client:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    def _handle_response(self, response: httpx.Response) -> Dict[str, Any]:
        """
        Classify the HTTP response and return the parsed body.

        Raises:
            SuggestionInvalidCredentialsError: On HTTP 401
            SuggestionRateLimitedError: On HTTP 429
            SuggestionProviderError: Any other failure status, or a body-level error
        """
        if response.status_code == 401:
            logger.error("DataForSEO authentication failed: invalid credentials")
            raise SuggestionInvalidCredentialsError()

        if response.status_code == 429:
            logger.warning("DataForSEO rate limit exceeded")
            raise SuggestionRateLimitedError()

        if not response.is_success:
            logger.error("DataForSEO API error: HTTP %s", response.status_code)
            raise SuggestionProviderError(
                f"DataForSEO API error: {response.reason_phrase or response.status_code}"
            )

        try:
            body = response.json()
        except ValueError as e:
            logger.error("Failed to parse DataForSEO response: %s", e)
            raise SuggestionProviderError("Invalid JSON response from DataForSEO")

        if body.get("status_code") != DATAFORSEO_OK:
            message = body.get("status_message") or "DataForSEO API failed"
            logger.error("DataForSEO API error [%s]: %s", body.get("status_code"), message)
            raise SuggestionProviderError(message)

        return body

    @staticmethod
    def _parse_items(body: Dict[str, Any]) -> List[SuggestionItem]:
        tasks = body.get("tasks") or []
        results = (tasks[0].get("result") if tasks else None) or []

        suggestions = []
        for item in results:
            if not item or not item.get("keyword"):
                continue
            info = item.get("keyword_info") or {}
            competition = info.get("competition_level") or info.get("competition")
            suggestions.append(
                SuggestionItem(
                    keyword=item["keyword"],
                    search_volume=info.get("search_volume"),
                    cpc=info.get("cpc"),
                    competition=str(competition) if competition is not None else None,
                )
            )
        return suggestions

    async def fetch_suggestions(
        self,
        seeds: List[str],
        language_name: str,
        location_code: int,
        limit: int = 25,
    ) -> List[SuggestionItem]:
        """
        Fetch keyword suggestions for the given seed terms.

        Returns:
            Suggestions in provider order

        Raises:
            SuggestionTimeoutError: If the provider does not answer within the timeout
            SuggestionError subclasses: See ``_handle_response``
        """
        payload = [
            {
                "keyword": ", ".join(seeds),
                "language_name": language_name,
                "location_code": location_code,
                "limit": limit,
            }
        ]

        try:
            client = self._get_client()
            response = await client.post(KEYWORD_SUGGESTIONS_PATH, json=payload)
        except httpx.TimeoutException as e:
            logger.error("DataForSEO request timeout after %ss: %s", self.timeout, e)
            raise SuggestionTimeoutError()
        except httpx.HTTPError as e:
            logger.error("DataForSEO request failed: %s", e)
            raise SuggestionProviderError("Unexpected error calling DataForSEO")

        body = self._handle_response(response)
        suggestions = self._parse_items(body)
        logger.info("DataForSEO returned %d suggestions", len(suggestions))
        return suggestions
