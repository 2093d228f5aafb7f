"""
Device location wrapper.

GeoSource classifies why an exact fix could not be obtained; surfacing the
remediation (open settings, ask again) is left to the caller.
"""
from __future__ import annotations

import asyncio
import logging
from typing import Optional, Protocol

from civicfeed.config import LOCATION_MAXIMUM_AGE_SECONDS, LOCATION_TIMEOUT_SECONDS, Settings
from civicfeed.core.privacy import recommended_tier, reduce
from civicfeed.errors import LocationTimeout, PermissionDenied, ServiceDisabled
from civicfeed.models import LocationFix, PrecisionTier, ReducedLocation
from civicfeed.utils import now_utc

logger = logging.getLogger(__name__)

GRANTED = "granted"


class LocationProvider(Protocol):
    """Port to the platform location API."""

    async def services_enabled(self) -> bool: ...

    async def permission_status(self) -> str: ...

    async def request_permission(self) -> str: ...

    async def current_position(self, maximum_age_seconds: float) -> LocationFix: ...

    async def place_name(self, fix: LocationFix) -> Optional[str]: ...


class StaticLocationProvider:
    """Provider backed by configured coordinates.

    With no coordinates configured it behaves like a device whose location
    services are switched off.
    """

    def __init__(
        self,
        latitude: Optional[float],
        longitude: Optional[float],
        accuracy_meters: float = 10.0,
        place: Optional[str] = None,
    ) -> None:
        self._latitude = latitude
        self._longitude = longitude
        self._accuracy = accuracy_meters
        self._place = place

    @classmethod
    def from_settings(cls, settings: Settings) -> "StaticLocationProvider":
        return cls(
            settings.DEVICE_LATITUDE,
            settings.DEVICE_LONGITUDE,
            settings.DEVICE_ACCURACY_METERS,
            settings.DEVICE_PLACE_NAME,
        )

    async def services_enabled(self) -> bool:
        return self._latitude is not None and self._longitude is not None

    async def permission_status(self) -> str:
        return GRANTED

    async def request_permission(self) -> str:
        return GRANTED

    async def current_position(self, maximum_age_seconds: float) -> LocationFix:
        return LocationFix(
            latitude=self._latitude,
            longitude=self._longitude,
            accuracy_meters=self._accuracy,
            timestamp=now_utc(),
        )

    async def place_name(self, fix: LocationFix) -> Optional[str]:
        return self._place


class GeoSource:
    def __init__(
        self,
        provider: LocationProvider,
        timeout_seconds: float = LOCATION_TIMEOUT_SECONDS,
        maximum_age_seconds: float = LOCATION_MAXIMUM_AGE_SECONDS,
    ) -> None:
        self._provider = provider
        self._timeout = timeout_seconds
        self._maximum_age = maximum_age_seconds

    async def _ensure_permission(self) -> None:
        if await self._provider.permission_status() == GRANTED:
            return
        # exactly one request before giving up
        if await self._provider.request_permission() != GRANTED:
            raise PermissionDenied()

    async def get_exact_fix(self) -> LocationFix:
        """
        Read a single high-accuracy fix.

        Raises:
            ServiceDisabled: platform location is switched off
            PermissionDenied: foreground access not granted after one request
            LocationTimeout: no fix within the bounded wait
        """
        if not await self._provider.services_enabled():
            raise ServiceDisabled()

        await self._ensure_permission()

        try:
            return await asyncio.wait_for(
                self._provider.current_position(self._maximum_age),
                timeout=self._timeout,
            )
        except asyncio.TimeoutError as e:
            raise LocationTimeout(self._timeout) from e

    async def get_place_label(self, fix: LocationFix) -> Optional[str]:
        return await self._provider.place_name(fix)

    async def get_reduced_fix(
        self,
        tier: Optional[PrecisionTier] = None,
        report_category: str = "others",
    ) -> ReducedLocation:
        """Exact fix reduced to ``tier``, or to the policy tier for ``report_category``."""
        fix = await self.get_exact_fix()
        target = tier or recommended_tier(report_category)
        logger.debug("Reducing fix to %s precision for %s", target.value, report_category)
        return reduce(fix, target)
