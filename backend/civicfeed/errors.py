"""
Error taxonomy for location acquisition and upstream news fetching.
"""
from __future__ import annotations

from typing import Optional


class CivicFeedError(Exception):
    """Base exception for all service errors."""

    def __init__(self, message: str = "A civic feed error occurred"):
        self.message = message
        super().__init__(self.message)


# --- Location tier ---------------------------------------------------------

class LocationError(CivicFeedError):
    """Raised when an exact fix cannot be obtained.

    ``remediation`` names the action the caller should offer the user.
    """

    remediation: str = "open_settings"


class ServiceDisabled(LocationError):
    """Raised when the platform location subsystem is switched off."""

    def __init__(self):
        super().__init__("Location services are disabled on this device. Please enable them in Settings.")


class PermissionDenied(LocationError):
    """Raised when foreground location access was not granted."""

    remediation = "request_permission"

    def __init__(self):
        super().__init__("Location permission denied. Please enable location access in Settings.")


class LocationTimeout(LocationError):
    """Raised when no fix arrives within the bounded wait."""

    def __init__(self, timeout_seconds: float):
        self.timeout_seconds = timeout_seconds
        super().__init__(f"No location fix obtained within {timeout_seconds:g}s")


# --- News tier -------------------------------------------------------------

class UpstreamError(CivicFeedError):
    """Raised when a single fetch tier fails; the pipeline advances on it."""

    def __init__(self, tier: str, message: str):
        self.tier = tier
        super().__init__(f"[{tier}] {message}")


class UpstreamHttpError(UpstreamError):
    """Non-2xx response or transport failure."""

    def __init__(self, tier: str, status_code: Optional[int], detail: str = ""):
        self.status_code = status_code
        reason = f"HTTP {status_code}" if status_code is not None else "transport error"
        super().__init__(tier, f"{reason} {detail}".strip())


class UpstreamApiError(UpstreamError):
    """Upstream body reported ``status: "error"``."""

    def __init__(self, tier: str, api_message: Optional[str]):
        self.api_message = api_message
        super().__init__(tier, f"NewsAPI error: {api_message or 'Unknown error'}")


class UpstreamParseError(UpstreamError):
    """Upstream body did not match the documented response shape."""


class EmptyResult(UpstreamError):
    """Tier succeeded but produced no usable articles."""

    def __init__(self, tier: str):
        super().__init__(tier, "no usable articles")
