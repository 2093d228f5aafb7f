"""
File: civicfeed/models.py
Internal data structures shared by the fetch pipeline, cache and privacy layer.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import List, Optional


class Category(str, Enum):
    EMERGENCY = "Emergency"
    TRANSPORTATION = "Transportation"
    TRAFFIC = "Traffic"
    WEATHER = "Weather"
    INFRASTRUCTURE = "Infrastructure"
    HEALTH = "Health"
    ENVIRONMENT = "Environment"
    PUBLIC_SAFETY = "Public Safety"
    EDUCATION = "Education"
    CIVIC_SERVICES = "Civic Services"
    UTILITIES = "Utilities"
    TECHNOLOGY = "Technology"
    SOCIAL_WELFARE = "Social Welfare"
    SECURITY = "Security"


class Priority(str, Enum):
    URGENT = "urgent"
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class PrecisionTier(str, Enum):
    EXACT = "exact"
    STREET = "street"
    AREA = "area"


@dataclass
class Article:
    """Unified representation of a news item as handed to callers."""

    # Identity & content
    id: str
    headline: str
    summary: str
    source: str
    category: Category
    priority: Priority
    published_at: datetime
    read_time_minutes: int = 1

    image_url: Optional[str] = None
    url: Optional[str] = None
    author: Optional[str] = None
    location: Optional[str] = None

    # True for placeholder records not sourced from a live upstream call
    is_synthetic: bool = False


@dataclass
class AggregateResult:
    news: List[Article]
    source: str  # "primary" | "fallback:<name>" | "placeholder"
    location: str
    success: bool = True
    note: Optional[str] = None
    category: Optional[str] = None


@dataclass(frozen=True)
class LocationFix:
    latitude: float
    longitude: float
    accuracy_meters: float
    timestamp: datetime
    altitude: Optional[float] = None
    heading: Optional[float] = None
    speed: Optional[float] = None


@dataclass(frozen=True)
class ReducedLocation:
    latitude: float
    longitude: float
    accuracy_meters: float
    tier: PrecisionTier
    timestamp: datetime
    original_accuracy_meters: Optional[float] = None
    description: str = ""


@dataclass(frozen=True)
class ValidationResult:
    is_accurate: bool
    recommended_tier: PrecisionTier
    current_tier: PrecisionTier
    message: str
    # Validation annotates only; a report is never rejected
    is_valid: bool = True


@dataclass(frozen=True)
class TierDescription:
    title: str
    description: str
    accuracy: str
    usage: str


__all__ = [
    "AggregateResult",
    "Article",
    "Category",
    "LocationFix",
    "PrecisionTier",
    "Priority",
    "ReducedLocation",
    "TierDescription",
    "ValidationResult",
]
