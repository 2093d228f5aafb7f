"""Tests for GeoSource failure classification."""

from __future__ import annotations

import asyncio
from datetime import datetime, timezone
from unittest.mock import AsyncMock

import pytest

from civicfeed.errors import LocationTimeout, PermissionDenied, ServiceDisabled
from civicfeed.models import LocationFix, PrecisionTier
from civicfeed.sources.geo import GeoSource, StaticLocationProvider

FIX = LocationFix(
    latitude=28.613939,
    longitude=77.209023,
    accuracy_meters=8.0,
    timestamp=datetime(2024, 3, 1, 9, 0, tzinfo=timezone.utc),
)


def _provider(enabled=True, status="granted", requested="granted", fix=FIX, place="New Delhi"):
    provider = AsyncMock()
    provider.services_enabled.return_value = enabled
    provider.permission_status.return_value = status
    provider.request_permission.return_value = requested
    provider.current_position.return_value = fix
    provider.place_name.return_value = place
    return provider


@pytest.mark.asyncio
async def test_returns_fix_with_max_age():
    provider = _provider()
    fix = await GeoSource(provider).get_exact_fix()

    assert fix == FIX
    provider.current_position.assert_awaited_once_with(10.0)
    provider.request_permission.assert_not_awaited()


@pytest.mark.asyncio
async def test_services_disabled():
    provider = _provider(enabled=False)
    with pytest.raises(ServiceDisabled) as exc:
        await GeoSource(provider).get_exact_fix()
    assert exc.value.remediation == "open_settings"
    provider.permission_status.assert_not_awaited()


@pytest.mark.asyncio
async def test_permission_requested_exactly_once_then_denied():
    provider = _provider(status="undetermined", requested="denied")
    with pytest.raises(PermissionDenied) as exc:
        await GeoSource(provider).get_exact_fix()
    assert exc.value.remediation == "request_permission"
    assert provider.request_permission.await_count == 1
    provider.current_position.assert_not_awaited()


@pytest.mark.asyncio
async def test_permission_granted_on_request():
    provider = _provider(status="undetermined", requested="granted")
    assert await GeoSource(provider).get_exact_fix() == FIX


@pytest.mark.asyncio
async def test_timeout():
    async def never(maximum_age_seconds):
        await asyncio.sleep(10)

    provider = _provider()
    provider.current_position.side_effect = never

    with pytest.raises(LocationTimeout):
        await GeoSource(provider, timeout_seconds=0.01).get_exact_fix()


@pytest.mark.asyncio
async def test_reduced_fix_uses_policy_tier():
    geo = GeoSource(_provider())
    reduced = await geo.get_reduced_fix(report_category="pothole")
    assert reduced.tier == PrecisionTier.STREET
    assert (reduced.latitude, reduced.longitude) == (28.6139, 77.209)

    exact = await geo.get_reduced_fix(report_category="fire_hazard")
    assert exact.tier == PrecisionTier.EXACT


@pytest.mark.asyncio
async def test_static_provider_without_coordinates_is_disabled():
    geo = GeoSource(StaticLocationProvider(None, None))
    with pytest.raises(ServiceDisabled):
        await geo.get_exact_fix()


@pytest.mark.asyncio
async def test_static_provider_from_settings(settings):
    settings.DEVICE_LATITUDE = 18.5204
    settings.DEVICE_LONGITUDE = 73.8567
    settings.DEVICE_PLACE_NAME = "Pune"
    geo = GeoSource(StaticLocationProvider.from_settings(settings))

    fix = await geo.get_exact_fix()
    assert (fix.latitude, fix.longitude) == (18.5204, 73.8567)
    assert await geo.get_place_label(fix) == "Pune"
