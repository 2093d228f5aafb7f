# civicfeed/schemas.py
from __future__ import annotations

from datetime import datetime
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from civicfeed.models import Article, Category, PrecisionTier, Priority
from civicfeed.utils import format_time_ago


class NewsArticle(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    headline: str
    summary: str
    source: str
    category: Category
    priority: Priority
    published_at: datetime
    read_time_minutes: int = Field(ge=1)
    time_ago: str = ""
    image_url: Optional[str] = None
    url: Optional[str] = None
    author: Optional[str] = None
    location: Optional[str] = None
    is_synthetic: bool = False

    @classmethod
    def from_article(cls, article: Article) -> "NewsArticle":
        item = cls.model_validate(article)
        item.time_ago = format_time_ago(article.published_at)
        return item


class TopNewsResponse(BaseModel):
    success: bool
    news: List[NewsArticle]
    source: str


class LocationNewsResponse(TopNewsResponse):
    location: str
    note: Optional[str] = None


class CategoryNewsResponse(TopNewsResponse):
    category: str


class LocationFixIn(BaseModel):
    latitude: float = Field(ge=-90, le=90)
    longitude: float = Field(ge=-180, le=180)
    accuracy_meters: float = Field(ge=0)
    timestamp: datetime
    altitude: Optional[float] = None
    heading: Optional[float] = None
    speed: Optional[float] = None


class ReduceLocationRequest(BaseModel):
    fix: LocationFixIn
    tier: PrecisionTier


class ReducedLocationOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    latitude: float
    longitude: float
    accuracy_meters: float
    tier: PrecisionTier
    timestamp: datetime
    original_accuracy_meters: Optional[float] = None
    description: str = ""


class ValidateLocationRequest(BaseModel):
    location: ReducedLocationOut
    report_category: str = Field(..., min_length=1)


class ValidationOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    is_valid: bool
    is_accurate: bool
    recommended_tier: PrecisionTier
    current_tier: PrecisionTier
    message: str


class TierPolicyResponse(BaseModel):
    report_category: str
    tier: PrecisionTier
    urgency: str
    permission_message: str


class TierDescriptionOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    title: str
    description: str
    accuracy: str
    usage: str


class TierDescriptionsResponse(BaseModel):
    tiers: Dict[PrecisionTier, TierDescriptionOut]


class ServiceAreaRequest(BaseModel):
    latitude: float
    longitude: float


class ServiceAreaResponse(BaseModel):
    within_service_area: bool
