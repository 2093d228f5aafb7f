"""Shared fixtures: a fake NewsAPI upstream and service builders."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Tuple

import httpx
import pytest

from civicfeed.config import Settings
from civicfeed.core.cache import NewsCache
from civicfeed.services.aggregator import NewsAggregator
from civicfeed.sources.geo import GeoSource
from civicfeed.sources.newsapi import NewsApiClient, build_default_tiers
from civicfeed.sources.pipeline import FetchPipeline

FIXED_NOW = datetime(2024, 3, 1, 12, 0, tzinfo=timezone.utc)

PRIMARY = "headlines:in"
CIVIC = "search:civic"
REGIONAL = "search:India"
GENERAL = "search:news"
TECHNOLOGY = "search:technology"
US_HEADLINES = "headlines:us"


def raw_article(
    title: str = "Metro line extension opens",
    description: str = "The new stretch adds six stations to the network.",
    image: Optional[str] = "https://img.example.com/a.jpg",
    source: Optional[str] = "City Times",
    url: Optional[str] = "https://news.example.com/a",
    published_at: str = "2024-03-01T10:00:00Z",
) -> Dict[str, Any]:
    return {
        "title": title,
        "description": description,
        "urlToImage": image,
        "url": url,
        "author": "Staff",
        "publishedAt": published_at,
        "source": {"id": None, "name": source},
    }


def ok_body(articles: List[Dict[str, Any]]) -> Dict[str, Any]:
    return {"status": "ok", "totalResults": len(articles), "articles": articles}


def tier_key(request: httpx.Request) -> str:
    params = request.url.params
    if request.url.path.endswith("/top-headlines"):
        return f"headlines:{params['country']}"
    query = params["q"]
    return "search:civic" if " OR " in query else f"search:{query}"


class FakeUpstream:
    """Answers NewsAPI requests per tier; unknown tiers get a 503.

    ``responses`` maps a tier key to ``(status_code, json_body)``.
    """

    def __init__(self, responses: Optional[Dict[str, Tuple[int, Any]]] = None) -> None:
        self.responses = dict(responses or {})
        self.calls: List[str] = []
        self.requests: List[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        key = tier_key(request)
        self.calls.append(key)
        self.requests.append(request)
        status_code, body = self.responses.get(key, (503, {"status": "error", "message": "unavailable"}))
        return httpx.Response(status_code, json=body)

    def ok(self, key: str, articles: List[Dict[str, Any]]) -> "FakeUpstream":
        self.responses[key] = (200, ok_body(articles))
        return self

    def fail_all(self) -> "FakeUpstream":
        self.responses.clear()
        return self


@pytest.fixture
def settings() -> Settings:
    return Settings(_env_file=None, NEWS_API_KEY="test-key")


@pytest.fixture
def upstream() -> FakeUpstream:
    return FakeUpstream()


@pytest.fixture
def news_client(upstream: FakeUpstream, settings: Settings) -> NewsApiClient:
    http_client = httpx.AsyncClient(transport=httpx.MockTransport(upstream))
    return NewsApiClient(http_client, settings.NEWS_API_URL, settings.NEWS_API_KEY)


@pytest.fixture
def pipeline(news_client: NewsApiClient, settings: Settings) -> FetchPipeline:
    return FetchPipeline(
        news_client,
        build_default_tiers(settings),
        max_articles=settings.NEWS_MAX_ARTICLES,
        clock=lambda: FIXED_NOW,
    )


@pytest.fixture
def cache() -> NewsCache:
    return NewsCache(ttl_seconds=30 * 60)


@pytest.fixture
def make_aggregator(pipeline: FetchPipeline, cache: NewsCache):
    def _make(geo: Optional[GeoSource] = None) -> NewsAggregator:
        return NewsAggregator(pipeline, cache, geo=geo, default_location="India")

    return _make
