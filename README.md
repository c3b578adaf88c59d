# kaka

URL normalization and deduplication for web crawlers.

kaka puts URLs into a canonical form and checks them against a Bloom filter.
The result is that URLs which differ only in case, a leading `www.`, the port,
the fragment, trailing slashes, tracking parameters or query order are
treated as the same URL.

## Installation

```
pip install .
```

There are no runtime dependencies. To run the tests:

```
pip install ".[test]"
pytest
```

## Deduplication

```python
from kaka.dedup import DeduplicationEngine

engine = DeduplicationEngine(capacity=10_000, fp_rate=0.01)

engine.check_and_insert("https://www.Example.com/page?b=2&a=1")   # False: new, now recorded
engine.check_and_insert("https://example.com/page?a=1&b=2#top")   # True: seen before
engine.is_duplicate("https://example.com/other")                  # False unless a false positive

stats = engine.stats()
print(stats.total_checked, stats.duplicates_found, stats.urls_inserted)
```

`check_and_insert` counts every call in `total_checked`, even when parsing
fails. `is_duplicate` only looks up a URL and does not record it or change
the counters. `stats()` returns an `EngineStatsSnapshot`, a frozen
dataclass. The counters are updated under a lock.

The engine's `normalizer` and `bloom` attributes give access to the
`UrlNormalizer` and `BloomFilter` it uses.

If a URL cannot be parsed, `kaka.urls.UrlParseError` is raised. This is a
subclass of `ValueError`.

## Normalization

```python
from kaka.normalizer import UrlNormalizer

n = UrlNormalizer()
n.normalize("HTTPS://WWW.Example.com:443/Path/../Page?b=2&utm_source=google&a=1#section")
# 'https://example.com/Page?a=1&b=2'
```

With the default settings the normalizer does the following:

- lowercases the scheme and host, and converts international domain names to
  punycode (`https://münchen.de` becomes `https://xn--mnchen-3ya.de/`)
- resolves `.` and `..` path segments
- removes a leading `www.` from the host
- drops the port and the fragment
- removes trailing slashes from the path, and uses `/` for an empty path
- removes tracking parameters: `utm_source`, `utm_medium`, `utm_campaign`,
  `utm_content`, `utm_term`, `fbclid`, `gclid`, `msclkid`, `_ga`, `_gl`,
  `mc_cid`, `mc_eid`, `ref` and `referrer`
- sorts the remaining query parameters and writes them out decoded as
  `key=value` pairs joined with `&`

Path case is kept as it is.

You can add more parameters to strip:

```python
n.add_tracking_param("session")
```

A domain rule replaces the whole normalization for one host. The rule gets a
`kaka.urls.ParsedUrl` and returns the string to use:

```python
n.add_domain_rule("example.org", lambda url: url.path)
n.normalize("https://example.org/a/b?x=1")   # '/a/b'
```

Rules are looked up by the exact parsed host, so a rule for `example.org`
does not match `www.example.org`. Hosts that are IP addresses never match a
rule.

`n.config` is a `NormalizerConfig` dataclass. These flags take effect:

- `lowercase_hostname`
- `remove_www`
- `remove_default_port`: set it to `False` to keep a port that is not the
  scheme's default
- `sort_query_params`

## URL parsing

```python
from kaka.urls import parse_url

url = parse_url("HTTP://Example.COM:8080/a/./b?q=1&r=two#frag")
url.scheme          # 'http'
url.host            # 'example.com'
url.port            # 8080 (None for the scheme's default port)
url.path            # '/a/b'
url.query_pairs()   # [('q', '1'), ('r', 'two')]
url.domain()        # 'example.com' (None for IP addresses)
str(url)            # 'http://example.com:8080/a/b?q=1&r=two#frag'
```

Only absolute URLs are accepted.

## Bloom filter

```python
from kaka.bloom import BloomFilter

bloom = BloomFilter(capacity=1000, fp_rate=0.01)
bloom.insert("https://example.com/1")
"https://example.com/1" in bloom          # True
bloom.contains("https://example.com/2")   # False unless a false positive
bloom.false_positive_rate()               # estimate for the items inserted so far
```

The bit array size and the number of hash functions (`num_hashes`) are
derived from `capacity` and `fp_rate`. `len(bloom)` gives the number of bits
and `items_inserted` the number of insertions. `capacity` must be positive
and `fp_rate` must lie strictly between 0 and 1. Otherwise `ValueError` is
raised.

A Bloom filter never gives a false negative. False positives can happen, at
about the configured rate. Each filter picks a random hash key, so filters
cannot be merged or compared with one another.

## What kaka does not do

kaka detects only exact duplicates after normalization. It does not compute
similarity fingerprints for near-duplicate URLs. It has no command-line tool.
Everything is kept in memory, so the filter cannot be saved or shared between
processes.