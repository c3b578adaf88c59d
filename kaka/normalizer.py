"""URL canonicalization before deduplication."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable

from kaka.urls import ParsedUrl, parse_url

DomainRule = Callable[[ParsedUrl], str]

DEFAULT_TRACKING_PARAMS = (
    "utm_source",
    "utm_medium",
    "utm_campaign",
    "utm_content",
    "utm_term",
    "fbclid",
    "gclid",
    "msclkid",
    "_ga",
    "_gl",
    "mc_cid",
    "mc_eid",
    "ref",
    "referrer",
)


@dataclass
class NormalizerConfig:
    """Flags controlling normalization."""

    lowercase_scheme: bool = True
    remove_www: bool = True
    remove_default_port: bool = True
    sort_query_params: bool = True
    remove_fragment: bool = True
    lowercase_hostname: bool = True


@dataclass
class UrlNormalizer:
    """Converts URLs into a canonical string form."""

    config: NormalizerConfig = field(default_factory=NormalizerConfig)
    tracking_params: set[str] = field(default_factory=lambda: set(DEFAULT_TRACKING_PARAMS))
    domain_rules: dict[str, DomainRule] = field(default_factory=dict)

    def __init__(self) -> None:
        self.config = NormalizerConfig()
        self.tracking_params = set(DEFAULT_TRACKING_PARAMS)
        self.domain_rules = {}

    def normalize(self, url: str) -> str:
        """Return the canonical form; raises UrlParseError on bad input."""
        parsed = parse_url(url)
        rule = self.domain_rules.get(parsed.domain() or "")
        if rule is not None:
            return rule(parsed)

        out = f"{parsed.scheme}://"
        if parsed.host is not None:
            host = parsed.host
            if self.config.lowercase_hostname:
                host = host.lower()
            if self.config.remove_www and host.startswith("www."):
                host = host[4:]
            out += host
        if not self.config.remove_default_port and parsed.port is not None:
            out += f":{parsed.port}"

        out += parsed.path.rstrip("/") or "/"

        if parsed.query is not None:
            params = [(k, v) for k, v in parsed.query_pairs() if k not in self.tracking_params]
            if self.config.sort_query_params:
                params.sort()
            if params:
                out += "?" + "&".join(f"{k}={v}" for k, v in params)
        return out

    def add_tracking_param(self, param: str) -> None:
        """Register a query parameter to strip."""
        self.tracking_params.add(param)

    def add_domain_rule(self, domain: str, rule: DomainRule) -> None:
        """Register a function producing the canonical form for a domain."""
        self.domain_rules[domain] = rule