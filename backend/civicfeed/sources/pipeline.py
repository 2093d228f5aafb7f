"""
Sequential multi-tier fetch pipeline.

Tiers are tried one at a time, in list order; the first tier that yields at
least one usable article wins. When every tier fails the static placeholder
set is returned, so the pipeline never surfaces a hard failure.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, List, Optional, Sequence

from civicfeed.errors import EmptyResult, UpstreamError
from civicfeed.models import Article
from civicfeed.sources.newsapi import FetchTier, NewsApiClient, to_articles
from civicfeed.sources.placeholder import placeholder_news
from civicfeed.utils import now_utc

logger = logging.getLogger(__name__)

PLACEHOLDER_TAG = "placeholder"


@dataclass
class PipelineResult:
    articles: List[Article]
    source: str

    @property
    def is_placeholder(self) -> bool:
        return self.source == PLACEHOLDER_TAG


class FetchPipeline:
    def __init__(
        self,
        client: NewsApiClient,
        tiers: Sequence[FetchTier],
        max_articles: int = 15,
        clock: Callable[[], datetime] = now_utc,
    ) -> None:
        self._client = client
        self._tiers = list(tiers)
        self._max_articles = max_articles
        self._clock = clock

    @property
    def tiers(self) -> List[FetchTier]:
        return list(self._tiers)

    @property
    def clock(self) -> Callable[[], datetime]:
        return self._clock

    async def _attempt(self, tier: FetchTier, location_hint: Optional[str]) -> List[Article]:
        response = await self._client.fetch(tier)
        articles = to_articles(response.articles, self._clock(), self._max_articles, location_hint)
        if not articles:
            raise EmptyResult(tier.name)
        return articles

    async def try_next(
        self,
        tiers: Sequence[FetchTier],
        location_hint: Optional[str] = None,
    ) -> Optional[PipelineResult]:
        """
        Evaluate ``tiers`` in order.

        Returns:
            Result of the first successful tier, or None when all are exhausted
        """
        for tier in tiers:
            logger.info("Trying %s", tier.source_tag)
            try:
                articles = await self._attempt(tier, location_hint)
            except UpstreamError as e:
                logger.warning("Tier %s failed: %s", tier.source_tag, e.message)
                continue
            logger.info("%s succeeded with %d articles", tier.source_tag, len(articles))
            return PipelineResult(articles=articles, source=tier.source_tag)
        return None

    async def fetch_articles(self, location_hint: Optional[str] = None) -> PipelineResult:
        result = await self.try_next(self._tiers, location_hint)
        if result is not None:
            return result

        logger.warning("All %d fetch tiers failed, returning placeholder news", len(self._tiers))
        return PipelineResult(articles=placeholder_news(self._clock()), source=PLACEHOLDER_TAG)
