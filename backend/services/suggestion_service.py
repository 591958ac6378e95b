"""
Keyword suggestion fetching, cache first.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import List, Optional

from adapters.keywords.dataforseo_adapter import DataForSEOAdapter
from core.domain.keywords import SuggestionItem
from core.errors import SuggestionError, SuggestionTimeoutError
from services.context import RequestContext
from services.suggestion_cache import SuggestionCache


class SuggestionFetchState(str, Enum):
    IDLE = "idle"
    FETCHING = "fetching"
    SUCCEEDED = "succeeded"
    FAILED = "failed"
    TIMED_OUT = "timed_out"


@dataclass
class SuggestionResult:
    suggestions: List[SuggestionItem]
    cached: bool
    cache_expires_at: Optional[datetime]


class SuggestionService:
    """
    Fetches keyword suggestions for seed terms.

    Fresh cache entries are served without calling the provider unless a
    refresh is forced. A successful provider response is written back to
    the cache; a failed write is logged and does not fail the request.
    """

    def __init__(
        self,
        ctx: RequestContext,
        adapter: Optional[DataForSEOAdapter] = None,
        cache: Optional[SuggestionCache] = None,
    ):
        self.ctx = ctx
        self.logger = ctx.logger
        self.cache = cache or SuggestionCache(ctx)
        self._adapter = adapter
        self.state = SuggestionFetchState.IDLE

    def _get_adapter(self) -> DataForSEOAdapter:
        if self._adapter is None:
            settings = self.ctx.settings
            self._adapter = DataForSEOAdapter(
                login=settings.dataforseo_login or "",
                password=settings.dataforseo_password or "",
                base_url=settings.dataforseo_base_url,
                timeout=settings.dataforseo_timeout,
            )
        return self._adapter

    async def fetch_suggestions(
        self,
        seeds: List[str],
        language_name: str = "Korean",
        location_code: int = 2410,
        limit: int = 25,
        force_refresh: bool = False,
    ) -> SuggestionResult:
        """
        Suggestions for ``seeds`` in the given locale.

        Raises:
            SuggestionError subclasses: On provider failure or timeout
        """
        if not force_refresh:
            entry = await self.cache.get(seeds, language_name, location_code)
            if entry:
                self.logger.info("Returning cached keyword suggestions")
                self.state = SuggestionFetchState.SUCCEEDED
                return SuggestionResult(
                    suggestions=entry.suggestions,
                    cached=True,
                    cache_expires_at=entry.expires_at,
                )

        self.logger.info(
            "Fetching suggestions from DataForSEO",
            extra={"seeds": seeds, "language_name": language_name, "location_code": location_code},
        )
        self.state = SuggestionFetchState.FETCHING
        adapter = self._get_adapter()
        try:
            suggestions = await adapter.fetch_suggestions(
                seeds, language_name, location_code, limit
            )
        except SuggestionTimeoutError:
            self.state = SuggestionFetchState.TIMED_OUT
            raise
        except SuggestionError:
            self.state = SuggestionFetchState.FAILED
            raise
        finally:
            await adapter.close()

        self.state = SuggestionFetchState.SUCCEEDED

        write = await self.cache.put(seeds, language_name, location_code, suggestions)
        if not write.ok:
            self.logger.warning("Failed to cache keyword suggestions: %s", write.error)

        return SuggestionResult(
            suggestions=suggestions,
            cached=False,
            cache_expires_at=write.expires_at,
        )
