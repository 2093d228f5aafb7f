"""
Public news facade composing the location source, fetch pipeline and cache.

Every operation resolves to a renderable result. Degradation (no location,
upstream outage) is reported through the ``source`` and ``note`` fields,
never by raising into the caller.
"""
from __future__ import annotations

import logging
from typing import List, Optional

from civicfeed.core.cache import NewsCache
from civicfeed.core.classifier import is_civic_relevant
from civicfeed.errors import LocationError
from civicfeed.models import AggregateResult, Article
from civicfeed.sources.geo import GeoSource
from civicfeed.sources.pipeline import PLACEHOLDER_TAG, FetchPipeline
from civicfeed.sources.placeholder import PLACEHOLDER_LOCATION, placeholder_news

logger = logging.getLogger(__name__)

DEGRADED_NOTE = "Using local news due to API unavailability"


def select_top_news(news: List[Article], limit: int) -> List[Article]:
    """
    Civic-relevant articles first, padded with the remaining ones.

    Args:
        news: Articles in relevance order
        limit: Maximum number of items to return

    Returns:
        At most ``limit`` articles, and no fewer than ``min(limit, len(news))``
    """
    if limit <= 0:
        return []
    civic = [article for article in news if is_civic_relevant(article)]
    if len(civic) >= limit:
        return civic[:limit]
    general = [article for article in news if not is_civic_relevant(article)]
    return (civic + general)[:limit]


class NewsAggregator:
    def __init__(
        self,
        pipeline: FetchPipeline,
        cache: NewsCache,
        geo: Optional[GeoSource] = None,
        default_location: str = "India",
    ) -> None:
        self._pipeline = pipeline
        self._cache = cache
        self._geo = geo
        self._default_location = default_location

    async def _resolve_location(self) -> str:
        if self._geo is None:
            return self._default_location
        try:
            fix = await self._geo.get_exact_fix()
        except LocationError as e:
            logger.info("Location unavailable (%s), using %s", e.message, self._default_location)
            return self._default_location
        except Exception:
            logger.exception("Location lookup failed unexpectedly, using %s", self._default_location)
            return self._default_location

        try:
            label = await self._geo.get_place_label(fix)
        except Exception:
            logger.exception("Reverse geocoding failed, using %s", self._default_location)
            return self._default_location
        return label or self._default_location

    async def get_location_news(self) -> AggregateResult:
        """Fresh fetch: bust the cache, resolve location, run the pipeline, memoize."""
        self._cache.invalidate()
        location = await self._resolve_location()

        try:
            fetched = await self._pipeline.fetch_articles(location)
        except Exception:
            logger.exception("News pipeline failed unexpectedly, using placeholder news")
            result = AggregateResult(
                news=placeholder_news(self._pipeline.clock()),
                source=PLACEHOLDER_TAG,
                location=PLACEHOLDER_LOCATION,
                note=DEGRADED_NOTE,
            )
        else:
            result = AggregateResult(
                news=fetched.articles,
                source=fetched.source,
                location=location,
                note=DEGRADED_NOTE if fetched.is_placeholder else None,
            )

        self._cache.put(result)
        logger.info("Fetched %d articles from %s for %s", len(result.news), result.source, result.location)
        return result

    async def get_top_news(self, limit: int = 10) -> AggregateResult:
        result = await self.get_location_news()
        top = select_top_news(result.news, limit)
        logger.debug("Returning %d top news (requested %d)", len(top), limit)
        return AggregateResult(news=top, source=result.source, location=result.location, note=result.note)

    async def get_news_by_category(self, category: str) -> AggregateResult:
        """Filter the last aggregate by case-insensitive category name."""
        result = self._cache.get() or await self.get_location_news()
        category = category.strip()
        wanted = category.lower()
        news = [article for article in result.news if article.category.value.lower() == wanted]
        return AggregateResult(
            news=news,
            source=result.source,
            location=result.location,
            note=result.note,
            category=category,
        )

    def cached_news(self) -> Optional[AggregateResult]:
        return self._cache.get()

    def clear_cache(self) -> None:
        self._cache.invalidate()
