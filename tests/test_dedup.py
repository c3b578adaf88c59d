import pytest

from kaka.dedup import DeduplicationEngine
from kaka.urls import UrlParseError


def test_duplicate_detection_accuracy():
    engine = DeduplicationEngine(10_000, 0.01)
    accepted = sum(not engine.check_and_insert(f"https://example.com/page{i}") for i in range(10_000))
    assert accepted > 9_500


def test_normalization_effectiveness():
    engine = DeduplicationEngine(1_000, 0.01)
    assert engine.check_and_insert("http://example.com?a=1&b=2") is False
    assert engine.is_duplicate("http://www.example.com/?b=2&a=1") is True


def test_is_duplicate_does_not_insert():
    engine = DeduplicationEngine(1_000, 0.01)
    engine.is_duplicate("https://example.com/x")
    assert engine.stats().urls_inserted == 0
    assert engine.check_and_insert("https://example.com/x") is False
    assert engine.check_and_insert("https://example.com/x") is True


def test_mixed_workload_stats():
    engine = DeduplicationEngine(1_000, 0.01)
    injected = 0
    for i in range(1_000):
        url = f"https://example.com/item{i}"
        engine.check_and_insert(url)
        if i % 10 < 3:
            engine.check_and_insert(url)
            injected += 1
    stats = engine.stats()
    assert stats.duplicates_found >= injected
    assert stats.total_checked == 1_000 + injected
    assert stats.urls_inserted + stats.duplicates_found == stats.total_checked


def test_invalid_url_counts_but_raises():
    engine = DeduplicationEngine(100, 0.01)
    with pytest.raises(UrlParseError):
        engine.check_and_insert("not a url")
    assert engine.stats().total_checked == 1
    assert engine.stats().urls_inserted == 0