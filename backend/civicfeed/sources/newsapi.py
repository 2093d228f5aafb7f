"""
NewsAPI v2 client: request building, one-shot response validation and
mapping of raw upstream articles to classified Articles.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Literal, Optional

import httpx
from pydantic import BaseModel, ValidationError

from civicfeed.config import CIVIC_QUERY_TERMS, Settings
from civicfeed.core.classifier import classify, estimate_read_time, prioritize
from civicfeed.errors import (
    EmptyResult,
    UpstreamApiError,
    UpstreamHttpError,
    UpstreamParseError,
)
from civicfeed.models import Article
from civicfeed.utils import (
    clean_text,
    extract_domain_from_url,
    generate_id,
    normalize_text,
    parse_utc_datetime,
)

logger = logging.getLogger(__name__)


# --- Wire format -----------------------------------------------------------

class RawSource(BaseModel):
    id: Optional[str] = None
    name: Optional[str] = None


class RawArticle(BaseModel):
    title: Optional[str] = None
    description: Optional[str] = None
    urlToImage: Optional[str] = None
    url: Optional[str] = None
    author: Optional[str] = None
    publishedAt: Optional[str] = None
    source: Optional[RawSource] = None


class NewsApiResponse(BaseModel):
    status: Literal["ok", "error"]
    totalResults: int = 0
    articles: List[RawArticle] = []
    code: Optional[str] = None
    message: Optional[str] = None


def parse_response(tier: str, payload: Any) -> NewsApiResponse:
    """
    Validate an upstream JSON body once, at the API boundary.

    Raises:
        UpstreamParseError: body does not match the documented shape
        UpstreamApiError: body is well-formed but reports ``status: "error"``
    """
    try:
        response = NewsApiResponse.model_validate(payload)
    except ValidationError as e:
        raise UpstreamParseError(tier, f"unexpected response shape: {e.error_count()} error(s)") from e

    if response.status != "ok":
        raise UpstreamApiError(tier, response.message)
    return response


# --- Tiers -----------------------------------------------------------------

@dataclass(frozen=True)
class FetchTier:
    """One fetch strategy: an endpoint plus its query parameters."""

    name: str
    endpoint: Literal["top-headlines", "everything"]
    params: Dict[str, Any] = field(default_factory=dict)
    is_primary: bool = False

    @property
    def source_tag(self) -> str:
        return "primary" if self.is_primary else f"fallback:{self.name}"


def _search(name: str, query: str, page_size: int) -> FetchTier:
    return FetchTier(
        name=name,
        endpoint="everything",
        params={"q": query, "language": "en", "sortBy": "publishedAt", "pageSize": page_size},
    )


def build_default_tiers(settings: Settings) -> List[FetchTier]:
    """Primary headlines, then the civic search, then the generic fallbacks, in order."""
    page_size = settings.NEWS_PAGE_SIZE
    return [
        FetchTier(
            name="headlines",
            endpoint="top-headlines",
            params={"country": settings.NEWS_COUNTRY, "pageSize": page_size},
            is_primary=True,
        ),
        _search("civic", " OR ".join(CIVIC_QUERY_TERMS), page_size),
        _search("regional", settings.NEWS_REGION_QUERY, page_size),
        _search("general", "news", page_size),
        _search("technology", "technology", page_size),
        FetchTier(
            name=f"{settings.NEWS_FALLBACK_COUNTRY}-headlines",
            endpoint="top-headlines",
            params={"country": settings.NEWS_FALLBACK_COUNTRY, "pageSize": page_size},
        ),
    ]


# --- Mapping ---------------------------------------------------------------

def is_usable(raw: RawArticle) -> bool:
    return bool(clean_text(raw.title) and clean_text(raw.description) and clean_text(raw.urlToImage))


def to_article(raw: RawArticle, index: int, fetched_at: datetime, location: Optional[str]) -> Article:
    """Classify one usable upstream article."""
    headline = normalize_text(raw.title)
    summary = normalize_text(raw.description)
    content = f"{headline} {summary}"
    source_name = clean_text(raw.source.name if raw.source else None)

    return Article(
        id=generate_id("newsapi", str(index), raw.url or headline, fetched_at.isoformat()),
        headline=headline,
        summary=summary,
        source=source_name or extract_domain_from_url(raw.url) or "News Source",
        category=classify(content),
        priority=prioritize(content),
        published_at=parse_utc_datetime(raw.publishedAt),
        read_time_minutes=estimate_read_time(summary),
        image_url=clean_text(raw.urlToImage),
        url=raw.url,
        author=raw.author,
        location=location,
    )


def to_articles(
    raws: List[RawArticle],
    fetched_at: datetime,
    limit: int,
    location: Optional[str] = None,
) -> List[Article]:
    """Filter, classify and truncate, keeping the upstream order."""
    usable = [raw for raw in raws if is_usable(raw)]
    return [to_article(raw, i, fetched_at, location) for i, raw in enumerate(usable[:limit])]


# --- Client ----------------------------------------------------------------

class NewsApiClient:
    """Thin async wrapper over the two NewsAPI endpoints the pipeline uses."""

    def __init__(self, client: httpx.AsyncClient, base_url: str, api_key: str) -> None:
        self._client = client
        self._base_url = base_url.rstrip("/")
        self._api_key = api_key

    async def fetch(self, tier: FetchTier) -> NewsApiResponse:
        """
        Run one tier's request.

        Raises:
            UpstreamHttpError: transport failure or non-2xx status
            UpstreamParseError / UpstreamApiError: see ``parse_response``
            EmptyResult: the upstream returned no articles
        """
        url = f"{self._base_url}/{tier.endpoint}"
        params = {**tier.params, "apiKey": self._api_key}

        try:
            r = await self._client.get(url, params=params, headers={"Accept": "application/json"})
        except httpx.HTTPError as e:
            raise UpstreamHttpError(tier.name, None, type(e).__name__) from e

        if not r.is_success:
            raise UpstreamHttpError(tier.name, r.status_code, r.reason_phrase)

        try:
            payload = r.json()
        except ValueError as e:
            raise UpstreamParseError(tier.name, "response body is not JSON") from e

        response = parse_response(tier.name, payload)
        if not response.articles:
            raise EmptyResult(tier.name)

        logger.info("%s returned %d articles (totalResults=%d)", tier.source_tag, len(response.articles), response.totalResults)
        return response
