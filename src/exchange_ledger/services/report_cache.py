"""Invalidate-on-write cache for assembled reports."""

import logging
import threading
import time
from collections import OrderedDict
from datetime import date
from typing import Callable, Optional

from exchange_ledger.domain.views import ExchangeReport

logger = logging.getLogger(__name__)

CacheKey = tuple[Optional[str], Optional[date], Optional[date]]


class ReportCache:
    """
    Reports keyed by (currency_code, from_date, to_date).

    Entries live until the write flow calls invalidate(). Writes made
    behind the service's back are picked up once ttl_seconds has passed,
    when a TTL is set. At most max_entries windows are kept; the least
    recently used goes first. Safe to share between request threads.
    """

    def __init__(
        self,
        max_entries: int = 256,
        ttl_seconds: Optional[float] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self._max_entries = max(max_entries, 1)
        self._ttl = ttl_seconds
        self._clock = clock
        self._entries: "OrderedDict[CacheKey, tuple[float, ExchangeReport]]" = OrderedDict()
        self._lock = threading.Lock()

    def get(self, key: CacheKey) -> Optional[ExchangeReport]:
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            stored_at, report = entry
            if self._ttl is not None and self._clock() - stored_at >= self._ttl:
                del self._entries[key]
                return None
            self._entries.move_to_end(key)
            return report

    def put(self, key: CacheKey, report: ExchangeReport) -> None:
        with self._lock:
            self._entries[key] = (self._clock(), report)
            self._entries.move_to_end(key)
            while len(self._entries) > self._max_entries:
                self._entries.popitem(last=False)

    def invalidate(self, currency_code: Optional[str] = None) -> int:
        """
        Drop cached reports affected by a write and return how many went.

        With a currency code, that currency's windows and every
        all-currency window go; without one, everything goes.
        """
        with self._lock:
            if currency_code is None:
                dropped = len(self._entries)
                self._entries.clear()
            else:
                code = currency_code.strip().upper()
                stale = [key for key in self._entries if key[0] in (None, code)]
                for key in stale:
                    del self._entries[key]
                dropped = len(stale)
        logger.debug("Invalidated %d cached reports for %s", dropped, currency_code or "all currencies")
        return dropped

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
