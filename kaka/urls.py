"""A small URL parser producing canonical components for normalization and hashing."""

from __future__ import annotations

import re
from dataclasses import dataclass
from urllib.parse import parse_qsl, quote, unquote

DEFAULT_PORTS = {"http": 80, "https": 443, "ws": 80, "wss": 443, "ftp": 21}
SPECIAL_SCHEMES = frozenset(DEFAULT_PORTS) | {"file"}

_SCHEME_RE = re.compile(r"^([A-Za-z][A-Za-z0-9+.\-]*):")
_IPV4_RE = re.compile(r"^\d{1,3}(\.\d{1,3}){3}$")
_FORBIDDEN_HOST_CHARS = frozenset(" #%/:<>?@[\\]^|")
_PATH_SAFE = "/%:@!$&'()*+,;=-._~"
_QUERY_SAFE = _PATH_SAFE + "?"
_FRAGMENT_SAFE = _QUERY_SAFE + "#[]"


class UrlParseError(ValueError):
    """Raised when text cannot be parsed as an absolute URL."""


@dataclass(frozen=True)
class ParsedUrl:
    """Canonical components of an absolute URL."""

    scheme: str
    host: str | None
    port: int | None
    path: str
    query: str | None
    fragment: str | None

    def domain(self) -> str | None:
        """Return the host if it is a domain name, not an IP address."""
        if not self.host or self.host.startswith("[") or _IPV4_RE.match(self.host):
            return None
        return self.host

    def query_pairs(self) -> list[tuple[str, str]]:
        """Decode the query as form-encoded key/value pairs."""
        if not self.query:
            return []
        return parse_qsl(self.query, keep_blank_values=True)

    def __str__(self) -> str:
        out = f"{self.scheme}:"
        if self.host is not None:
            out += "//" + self.host
            if self.port is not None:
                out += f":{self.port}"
        out += self.path
        if self.query is not None:
            out += "?" + self.query
        if self.fragment is not None:
            out += "#" + self.fragment
        return out


def _normalize_path(path: str) -> str:
    segments: list[str] = []
    parts = path.split("/")[1:]
    for position, segment in enumerate(parts):
        last = position == len(parts) - 1
        lowered = segment.lower()
        if lowered in (".", "%2e"):
            if last:
                segments.append("")
        elif lowered in ("..", ".%2e", "%2e.", "%2e%2e"):
            if segments:
                segments.pop()
            if last:
                segments.append("")
        else:
            segments.append(segment)
    return "/" + "/".join(segments)


def _parse_host(raw: str, special: bool) -> str:
    if raw.startswith("["):
        if not raw.endswith("]"):
            raise UrlParseError("invalid IPv6 address")
        return raw.lower()
    host = unquote(raw)
    if any(ch in _FORBIDDEN_HOST_CHARS for ch in host):
        raise UrlParseError(f"invalid host: {raw!r}")
    if not special:
        return quote(raw, safe="%!$&'()*+,;=-._~")
    host = host.lower()
    if not host.isascii():
        try:
            host = host.encode("idna").decode("ascii")
        except UnicodeError as exc:
            raise UrlParseError(f"invalid international domain name: {raw!r}") from exc
    return host


def parse_url(text: str) -> ParsedUrl:
    """Parse an absolute URL, raising UrlParseError on failure."""
    text = text.strip("".join(chr(c) for c in range(0x21)))
    text = re.sub(r"[\t\n\r]", "", text)
    match = _SCHEME_RE.match(text)
    if not match:
        raise UrlParseError("relative URL without a base")
    scheme = match.group(1).lower()
    rest = text[match.end():]
    special = scheme in SPECIAL_SCHEMES

    rest, hash_sign, fragment = rest.partition("#")
    rest, question, query = rest.partition("?")
    if special:
        rest = rest.replace("\\", "/")

    host: str | None = None
    port: int | None = None
    if special or rest.startswith("//"):
        if special and scheme != "file":
            rest = rest.lstrip("/")
        else:
            rest = rest[2:] if rest.startswith("//") else rest
        slash = rest.find("/")
        authority, path = (rest, "") if slash < 0 else (rest[:slash], rest[slash:])
        hostport = authority.rpartition("@")[2]
        if hostport.startswith("["):
            end = hostport.find("]")
            raw_host, port_text = hostport[: end + 1], hostport[end + 1:]
            if port_text and not port_text.startswith(":"):
                raise UrlParseError("invalid IPv6 address")
            port_text = port_text[1:]
        else:
            raw_host, _, port_text = hostport.partition(":")
        if port_text:
            if not port_text.isdigit() or int(port_text) > 65535:
                raise UrlParseError(f"invalid port: {port_text!r}")
            port = int(port_text)
            if DEFAULT_PORTS.get(scheme) == port:
                port = None
        if not raw_host and special and scheme != "file":
            raise UrlParseError("empty host")
        host = _parse_host(raw_host, special) if raw_host else ""
        path = quote(path, safe=_PATH_SAFE)
        path = _normalize_path(path) if (special or path) else path
        if special and not path:
            path = "/"
    else:
        path = quote(rest, safe=_PATH_SAFE)

    return ParsedUrl(
        scheme=scheme,
        host=host,
        port=port,
        path=path,
        query=quote(query, safe=_QUERY_SAFE) if question else None,
        fragment=quote(fragment, safe=_FRAGMENT_SAFE) if hash_sign else None,
    )