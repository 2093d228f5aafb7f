"""
Shared utility functions for the civic news service.
"""
from __future__ import annotations

import re
from datetime import datetime, timezone
from hashlib import sha256
from typing import Optional
from urllib.parse import urlparse

import tldextract
from dateutil import parser as dateparser

# Bundled public suffix snapshot only; no network lookups
_extract_tld = tldextract.TLDExtract(suffix_list_urls=())


def now_utc() -> datetime:
    """
    Get current UTC datetime with timezone information.

    Returns:
        Current UTC datetime
    """
    return datetime.now(timezone.utc)


def normalize_text(text: str | None) -> str:
    """
    Normalize whitespace in text content.

    Args:
        text: Input text string (can be None)

    Returns:
        Normalized text with single spaces and trimmed edges
    """
    if not text:
        return ""
    return re.sub(r"\s+", " ", text).strip()


def clean_text(text: Optional[str]) -> str:
    """
    Clean and normalize text content.

    Args:
        text: Raw text string or None

    Returns:
        Cleaned text string, empty string if input is None
    """
    if not text:
        return ""
    return text.strip()


def parse_utc_datetime(date_string: Optional[str]) -> datetime:
    """
    Parse a date string and convert to UTC datetime.

    Args:
        date_string: Date string in various formats, or None

    Returns:
        UTC datetime object, or current UTC time if input is None/empty/unparseable
    """
    if not date_string:
        return now_utc()

    try:
        parsed_date = dateparser.parse(date_string)
    except (ValueError, OverflowError):
        return now_utc()

    if parsed_date.tzinfo:
        return parsed_date.astimezone(timezone.utc)
    return parsed_date.replace(tzinfo=timezone.utc)


def extract_domain_from_url(url: str | None) -> str:
    """
    Extract the main domain from a URL.

    Args:
        url: Full URL string

    Returns:
        Normalized domain name in lowercase, empty string if none
    """
    if not url:
        return ""
    try:
        extracted = _extract_tld(url)
        domain = f"{extracted.domain}.{extracted.suffix}" if extracted.suffix else extracted.domain
        return domain.lower()
    except Exception:
        return urlparse(url).netloc.lower()


def generate_id(*parts: str) -> str:
    """
    Generate a deterministic short ID from multiple string parts.

    Args:
        *parts: Variable number of string arguments

    Returns:
        16-character hexadecimal string
    """
    key = "|".join(parts).encode("utf-8")
    return sha256(key).hexdigest()[:16]


def format_time_ago(published_at: datetime, now: datetime | None = None) -> str:
    """Render a publication instant as "12m ago", "3h ago" or "2d ago"."""
    now = now or now_utc()
    minutes = max(0, int((now - published_at).total_seconds() // 60))
    if minutes < 60:
        return f"{minutes}m ago"
    if minutes < 1440:
        return f"{minutes // 60}h ago"
    return f"{minutes // 1440}d ago"
