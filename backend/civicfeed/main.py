"""
Main FastAPI application and routing layer.
"""
from __future__ import annotations

import logging

import httpx
from fastapi import Depends, FastAPI, Query, Request, Response, status
from fastapi.middleware.cors import CORSMiddleware

from civicfeed.config import Settings, settings
from civicfeed.core import privacy
from civicfeed.core.cache import NewsCache
from civicfeed.models import AggregateResult, LocationFix, ReducedLocation
from civicfeed.schemas import (
    CategoryNewsResponse,
    LocationNewsResponse,
    NewsArticle,
    ReduceLocationRequest,
    ReducedLocationOut,
    ServiceAreaRequest,
    ServiceAreaResponse,
    TierDescriptionOut,
    TierDescriptionsResponse,
    TierPolicyResponse,
    TopNewsResponse,
    ValidateLocationRequest,
    ValidationOut,
)
from civicfeed.services.aggregator import NewsAggregator
from civicfeed.sources.geo import GeoSource, StaticLocationProvider
from civicfeed.sources.newsapi import NewsApiClient, build_default_tiers
from civicfeed.sources.pipeline import FetchPipeline
from civicfeed.utils import now_utc

logging.basicConfig(level=settings.LOG_LEVEL, format=settings.LOG_FORMAT)
logger = logging.getLogger(__name__)


def build_aggregator(config: Settings, http_client: httpx.AsyncClient) -> NewsAggregator:
    """Wire the pipeline, cache and location source from configuration."""
    client = NewsApiClient(http_client, config.NEWS_API_URL, config.NEWS_API_KEY)
    pipeline = FetchPipeline(client, build_default_tiers(config), max_articles=config.NEWS_MAX_ARTICLES)
    cache = NewsCache(ttl_seconds=config.NEWS_CACHE_TTL_SECONDS)
    geo = GeoSource(StaticLocationProvider.from_settings(config))
    return NewsAggregator(pipeline, cache, geo=geo, default_location=config.DEFAULT_LOCATION_LABEL)


def _articles(result: AggregateResult) -> list[NewsArticle]:
    return [NewsArticle.from_article(article) for article in result.news]


# Initialize FastAPI app
app = FastAPI(
    title="Civic News API",
    version="0.1.0",
    description="Location-aware civic news aggregation with privacy-preserving location reduction",
)


@app.on_event("startup")
async def startup() -> None:
    """Create the shared HTTP client and the news aggregator."""
    if not settings.NEWS_API_KEY:
        logger.warning("NEWS_API_KEY is not set; upstream calls will fail over to placeholder news")
    app.state.http_client = httpx.AsyncClient(timeout=settings.NEWS_HTTP_TIMEOUT_SECONDS)
    app.state.aggregator = build_aggregator(settings, app.state.http_client)


@app.on_event("shutdown")
async def shutdown() -> None:
    client = getattr(app.state, "http_client", None)
    if client is not None:
        await client.aclose()


def get_aggregator(request: Request) -> NewsAggregator:
    return request.app.state.aggregator


# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ALLOW_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {
        "status": "ok",
        "as_of": now_utc().isoformat(),
        "service": "civic-news-api",
    }


@app.get("/news/top", response_model=TopNewsResponse)
async def get_top_news(
    limit: int = Query(10, ge=1, le=50, description="Maximum number of articles"),
    aggregator: NewsAggregator = Depends(get_aggregator),
):
    result = await aggregator.get_top_news(limit)
    return TopNewsResponse(success=result.success, news=_articles(result), source=result.source)


@app.get("/news/location", response_model=LocationNewsResponse, response_model_exclude_none=True)
async def get_location_news(aggregator: NewsAggregator = Depends(get_aggregator)):
    result = await aggregator.get_location_news()
    return LocationNewsResponse(
        success=result.success,
        news=_articles(result),
        source=result.source,
        location=result.location,
        note=result.note,
    )


@app.get("/news/category/{category}", response_model=CategoryNewsResponse)
async def get_news_by_category(category: str, aggregator: NewsAggregator = Depends(get_aggregator)):
    result = await aggregator.get_news_by_category(category)
    return CategoryNewsResponse(
        success=result.success,
        news=_articles(result),
        source=result.source,
        category=result.category or category,
    )


@app.delete("/news/cache", status_code=status.HTTP_204_NO_CONTENT)
async def clear_cache(aggregator: NewsAggregator = Depends(get_aggregator)):
    aggregator.clear_cache()
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@app.post("/location/reduce", response_model=ReducedLocationOut)
async def reduce_location(body: ReduceLocationRequest):
    """Reduce an exact fix to the requested precision tier."""
    fix = LocationFix(**body.fix.model_dump())
    return ReducedLocationOut.model_validate(privacy.reduce(fix, body.tier))


@app.get("/location/recommended-tier", response_model=TierPolicyResponse)
async def get_recommended_tier(
    report_category: str = Query(..., min_length=1, description="Report category, e.g. pothole"),
):
    urgency = privacy.urgency_of(report_category)
    return TierPolicyResponse(
        report_category=report_category,
        tier=privacy.recommended_tier(report_category),
        urgency=urgency,
        permission_message=privacy.permission_message(urgency),
    )


@app.post("/location/validate", response_model=ValidationOut)
async def validate_location(body: ValidateLocationRequest):
    location = ReducedLocation(**body.location.model_dump())
    return ValidationOut.model_validate(privacy.validate(location, body.report_category))


@app.get("/location/tiers", response_model=TierDescriptionsResponse)
async def get_tier_descriptions():
    return TierDescriptionsResponse(
        tiers={
            tier: TierDescriptionOut.model_validate(description)
            for tier, description in privacy.TIER_DESCRIPTIONS.items()
        }
    )


@app.post("/location/service-area", response_model=ServiceAreaResponse)
async def check_service_area(body: ServiceAreaRequest):
    return ServiceAreaResponse(
        within_service_area=privacy.is_within_service_area(body.latitude, body.longitude)
    )


if __name__ == "__main__":
    # For development
    import uvicorn
    uvicorn.run("civicfeed.main:app", host="0.0.0.0", port=settings.PORT, reload=True)
