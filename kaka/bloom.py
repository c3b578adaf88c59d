"""Bloom filter for approximate set membership with no false negatives."""

from __future__ import annotations

import hashlib
import math
import os

_MASK64 = (1 << 64) - 1


class BloomFilter:
    """Probabilistic set: never reports a false negative."""

    def __init__(self, capacity: int, fp_rate: float) -> None:
        if capacity <= 0:
            raise ValueError("capacity must be positive")
        if not 0.0 < fp_rate < 1.0:
            raise ValueError("fp_rate must lie strictly between 0 and 1")
        ln2 = math.log(2)
        self._size = math.ceil(-capacity * math.log(fp_rate) / (ln2 * ln2))
        self.num_hashes = math.ceil(self._size / capacity * ln2)
        self._bits = bytearray((self._size + 7) // 8)
        self._key = os.urandom(16)
        self.items_inserted = 0

    def __len__(self) -> int:
        return self._size

    def _positions(self, value: str):
        h1 = int.from_bytes(
            hashlib.blake2b(value.encode("utf-8"), digest_size=8, key=self._key).digest(), "little"
        )
        h2 = int.from_bytes(
            hashlib.blake2b(h1.to_bytes(8, "little"), digest_size=8, key=self._key).digest(), "little"
        )
        for i in range(self.num_hashes):
            yield ((h1 + i * h2) & _MASK64) % self._size

    def insert(self, value: str) -> None:
        """Add a value to the set."""
        for index in self._positions(value):
            self._bits[index >> 3] |= 1 << (index & 7)
        self.items_inserted += 1

    def contains(self, value: str) -> bool:
        """Return False if definitely absent, True if possibly present."""
        return all(self._bits[index >> 3] & (1 << (index & 7)) for index in self._positions(value))

    def __contains__(self, value: str) -> bool:
        return self.contains(value)

    def false_positive_rate(self) -> float:
        """Estimate the current false positive rate."""
        k = self.num_hashes
        return (1.0 - math.exp(-k * self.items_inserted / self._size)) ** k