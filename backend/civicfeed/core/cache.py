"""
Single-slot, time-boxed memo of the last aggregate result.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Callable, Optional

from civicfeed.models import AggregateResult
from civicfeed.utils import now_utc

logger = logging.getLogger(__name__)


@dataclass
class CacheEntry:
    payload: AggregateResult
    fetched_at: datetime


class NewsCache:
    """Holds at most one AggregateResult for the whole process.

    The slot is not keyed by request parameters: whatever was fetched last is
    what ``get`` returns until it expires or is invalidated.
    """

    def __init__(self, ttl_seconds: float, clock: Callable[[], datetime] = now_utc) -> None:
        self._ttl = timedelta(seconds=ttl_seconds)
        self._clock = clock
        self._entry: Optional[CacheEntry] = None

    def get(self) -> Optional[AggregateResult]:
        entry = self._entry
        if entry is None:
            return None
        if self._clock() - entry.fetched_at > self._ttl:
            logger.debug("Cached aggregate expired (fetched at %s)", entry.fetched_at.isoformat())
            return None
        return entry.payload

    def put(self, result: AggregateResult) -> None:
        self._entry = CacheEntry(payload=result, fetched_at=self._clock())

    def invalidate(self) -> None:
        self._entry = None
        logger.debug("News cache cleared")
