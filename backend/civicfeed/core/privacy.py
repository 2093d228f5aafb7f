"""
Geo-privacy transformation for civic reports.

An exact fix is reduced to one of three precision tiers before it is attached
to a report. Which tier a report *should* use is decided by a policy keyed on
the report category; a second, independent table buckets categories by
urgency and only selects the wording of the location-permission prompt.
The two tables deliberately use different category sets.
"""
from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Dict, Optional

from civicfeed.config import SERVICE_AREA_BOUNDS
from civicfeed.models import (
    LocationFix,
    PrecisionTier,
    ReducedLocation,
    TierDescription,
    ValidationResult,
)


@dataclass(frozen=True)
class TierSpec:
    decimals: Optional[int]  # None keeps full precision
    radius_m: float
    justification: str


EXACT_MIN_RADIUS_M = 5.0

TIER_SPECS: Dict[PrecisionTier, TierSpec] = {
    PrecisionTier.EXACT: TierSpec(None, EXACT_MIN_RADIUS_M, "Exact coordinates for urgent infrastructure issue"),
    PrecisionTier.STREET: TierSpec(4, 25.0, "Street-level accuracy for general complaints"),
    PrecisionTier.AREA: TierSpec(3, 150.0, "Neighborhood-level for privacy protection"),
}

# Largest radius still considered accurate enough for a recommended tier
MAX_ACCEPTABLE_RADIUS_M: Dict[PrecisionTier, float] = {
    PrecisionTier.EXACT: 10.0,
    PrecisionTier.STREET: 50.0,
    PrecisionTier.AREA: 200.0,
}

EXACT_TIER_CATEGORIES = frozenset(
    {
        "fire_hazard",
        "electrical_danger",
        "sewage_overflow",
        "water_main_break",
        "structural_damage",
        "hazardous_material",
    }
)
STREET_TIER_CATEGORIES = frozenset(
    {
        "pothole",
        "broken_streetlight",
        "traffic_signal",
        "road_damage",
        "garbage_collection",
        "noise_complaint",
        "illegal_parking",
        "others",
    }
)

URGENT_CATEGORIES = frozenset({"fire_hazard", "electrical_danger", "sewage_overflow"})
SAFETY_CATEGORIES = frozenset({"pothole", "broken_streetlight", "traffic_signal"})

PERMISSION_MESSAGES: Dict[str, str] = {
    "urgent": (
        "For urgent infrastructure issues (near hospitals/schools), we need exact location "
        "to prioritize emergency response."
    ),
    "safety": (
        "For safety-related complaints, precise location helps connect you with the right "
        "emergency services."
    ),
    "general": (
        "Location helps us route your complaint to the correct municipal office and calculate "
        "priority based on nearby facilities."
    ),
    "privacy": (
        "We only use location to improve civic services. You can choose street-level accuracy "
        "instead of exact coordinates."
    ),
}

TIER_DESCRIPTIONS: Dict[PrecisionTier, TierDescription] = {
    PrecisionTier.EXACT: TierDescription(
        title="Exact Location",
        description="Precise coordinates (±5-10m) for urgent infrastructure issues",
        accuracy="Highest",
        usage="Emergency situations, critical infrastructure problems",
    ),
    PrecisionTier.STREET: TierDescription(
        title="Street-Level",
        description="Street-level accuracy (±25m) for general civic complaints",
        accuracy="High",
        usage="Most civic complaints, routine maintenance issues",
    ),
    PrecisionTier.AREA: TierDescription(
        title="Neighborhood",
        description="Area-level location (±150m) for privacy protection",
        accuracy="Medium",
        usage="Privacy-conscious reporting, general area issues",
    ),
}


def round_coordinate(value: float, decimals: int) -> float:
    """
    Round a coordinate half away from zero on its decimal representation.

    Working on ``repr`` rather than binary floats keeps the operation
    idempotent: an already-rounded value quantizes to itself.
    """
    quantum = Decimal(1).scaleb(-decimals)
    return float(Decimal(repr(value)).quantize(quantum, rounding=ROUND_HALF_UP))


def reduce(fix: LocationFix | ReducedLocation, tier: PrecisionTier) -> ReducedLocation:
    """
    Reduce a fix to the given precision tier.

    Args:
        fix: Exact fix, or a location that was already reduced
        tier: Target precision tier

    Returns:
        ReducedLocation with rounded coordinates and the tier's nominal radius
    """
    tier = PrecisionTier(tier)
    spec = TIER_SPECS[tier]
    accuracy = fix.accuracy_meters
    original = getattr(fix, "original_accuracy_meters", None)
    if original is None:
        original = accuracy

    if spec.decimals is None:
        latitude, longitude = fix.latitude, fix.longitude
        radius = max(EXACT_MIN_RADIUS_M, float(accuracy))
    else:
        latitude = round_coordinate(fix.latitude, spec.decimals)
        longitude = round_coordinate(fix.longitude, spec.decimals)
        radius = spec.radius_m

    return ReducedLocation(
        latitude=latitude,
        longitude=longitude,
        accuracy_meters=radius,
        tier=tier,
        timestamp=fix.timestamp,
        original_accuracy_meters=original,
        description=spec.justification,
    )


def recommended_tier(report_category: str) -> PrecisionTier:
    """Precision policy: hazards need exact coordinates, everything else street level."""
    if report_category in EXACT_TIER_CATEGORIES:
        return PrecisionTier.EXACT
    if report_category in STREET_TIER_CATEGORIES:
        return PrecisionTier.STREET
    return PrecisionTier.STREET


def urgency_of(report_category: str) -> str:
    """Bucket a report category for the permission prompt: urgent, safety or general."""
    if report_category in URGENT_CATEGORIES:
        return "urgent"
    if report_category in SAFETY_CATEGORIES:
        return "safety"
    return "general"


def permission_message(urgency: str) -> str:
    return PERMISSION_MESSAGES.get(urgency, PERMISSION_MESSAGES["general"])


def validate(location: ReducedLocation, report_category: str) -> ValidationResult:
    """
    Compare a reduced location's radius against what the policy recommends.

    The result only annotates the report; it never rejects it.
    """
    recommended = recommended_tier(report_category)
    is_accurate = location.accuracy_meters <= MAX_ACCEPTABLE_RADIUS_M[recommended]
    if is_accurate:
        message = "Location accuracy is sufficient for this complaint type"
    else:
        message = f"Consider using {recommended.value} precision for better service"

    return ValidationResult(
        is_accurate=is_accurate,
        recommended_tier=recommended,
        current_tier=location.tier,
        message=message,
    )


def is_within_service_area(latitude: float, longitude: float) -> bool:
    bounds = SERVICE_AREA_BOUNDS
    return (
        bounds["south"] <= latitude <= bounds["north"]
        and bounds["west"] <= longitude <= bounds["east"]
    )


def describe_tier(tier: PrecisionTier | str) -> TierDescription:
    try:
        return TIER_DESCRIPTIONS[PrecisionTier(tier)]
    except ValueError:
        return TIER_DESCRIPTIONS[PrecisionTier.STREET]
