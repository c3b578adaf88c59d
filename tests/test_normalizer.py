import pytest

from kaka.normalizer import UrlNormalizer
from kaka.urls import UrlParseError


@pytest.fixture
def n():
    return UrlNormalizer()


def test_scheme_normalization(n):
    assert n.normalize("HTTP://example.com") == "http://example.com/"


def test_host_normalization(n):
    assert n.normalize("HTTP://WWW.Example.COM") == "http://example.com/"


def test_port_normalization(n):
    assert n.normalize("http://example.com:80") == "http://example.com/"
    assert n.normalize("http://example.com:8080") == "http://example.com/"


def test_path_normalization(n):
    assert n.normalize("https://example.com/Path") == "https://example.com/Path"
    assert n.normalize("https://example.com/path/") == "https://example.com/path"


def test_query_parameter_handling(n):
    assert n.normalize("https://example.com/?b=2&a=1") == "https://example.com/?a=1&b=2"
    assert n.normalize("https://example.com/?utm_source=google&q=test") == "https://example.com/?q=test"


def test_fragment_removal(n):
    assert n.normalize("https://example.com/page#section") == "https://example.com/page"


def test_complex_url_normalization(n):
    url = "HTTPS://WWW.Example.com:443/Path/../Page?b=2&utm_source=google&a=1#section"
    assert n.normalize(url) == "https://example.com/Page?a=1&b=2"


def test_unicode_and_idn(n):
    assert n.normalize("https://münchen.de") == "https://xn--mnchen-3ya.de/"


def test_youtube_domain_rule_is_non_destructive(n):
    n.add_domain_rule(
        "youtube.com",
        lambda url: "&".join(f"{k}={v}" for k, v in url.query_pairs() if k == "v"),
    )
    url = "https://www.youtube.com/watch?v=abc123&feature=share&t=30"
    assert n.normalize(url) == "https://youtube.com/watch?feature=share&t=30&v=abc123"


def test_domain_rule_applies_on_exact_domain(n):
    n.add_domain_rule("youtube.com", lambda url: url.path)
    assert n.normalize("https://youtube.com/watch?v=abc123") == "/watch"


def test_added_tracking_param_is_removed(n):
    n.add_tracking_param("session")
    assert n.normalize("https://example.com/?session=1&q=test") == "https://example.com/?q=test"


def test_port_kept_when_configured(n):
    n.config.remove_default_port = False
    assert n.normalize("http://example.com:8080/x") == "http://example.com:8080/x"


def test_malformed_urls_return_error(n):
    with pytest.raises(UrlParseError):
        n.normalize("not a url")


def test_bench_query_heavy_url(n):
    url = "https://example.com/search?q=rust&b=2&a=1&utm_campaign=test7&utm_source=google&ref=home"
    assert n.normalize(url) == "https://example.com/search?a=1&b=2&q=rust"


def test_normalize_is_idempotent(n):
    once = n.normalize("HTTPS://WWW.Example.com:443/Path/../Page7?b=2&utm_source=google&a=1#section")
    assert n.normalize(once) == once