"""Deduplication engine combining URL normalization and a Bloom filter."""

from __future__ import annotations

import threading
from dataclasses import dataclass

from kaka.bloom import BloomFilter
from kaka.normalizer import UrlNormalizer


@dataclass(frozen=True)
class EngineStatsSnapshot:
    """Immutable snapshot of engine statistics."""

    total_checked: int
    duplicates_found: int
    urls_inserted: int


class DeduplicationEngine:
    """Normalizes URLs and tracks which have been seen."""

    def __init__(self, capacity: int, fp_rate: float) -> None:
        self.bloom = BloomFilter(capacity, fp_rate)
        self.normalizer = UrlNormalizer()
        self._lock = threading.Lock()
        self._total_checked = 0
        self._duplicates_found = 0
        self._urls_inserted = 0

    def check_and_insert(self, url: str) -> bool:
        """Return True if the URL was already seen, else record it and return False."""
        with self._lock:
            self._total_checked += 1
        normalized = self.normalizer.normalize(url)
        with self._lock:
            if self.bloom.contains(normalized):
                self._duplicates_found += 1
                return True
            self.bloom.insert(normalized)
            self._urls_inserted += 1
            return False

    def is_duplicate(self, url: str) -> bool:
        """Check whether a URL was seen, without recording it."""
        return self.bloom.contains(self.normalizer.normalize(url))

    def stats(self) -> EngineStatsSnapshot:
        """Return a snapshot of the counters."""
        with self._lock:
            return EngineStatsSnapshot(self._total_checked, self._duplicates_found, self._urls_inserted)