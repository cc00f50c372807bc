"""Tiny URL decomposition used to build the request line and DNS target."""

from __future__ import annotations

import ipaddress
from dataclasses import dataclass

from .errors import ParseUrlError


DEFAULT_PORT = 80


@dataclass(frozen=True, slots=True)
class ParsedUrl:
    host: str
    port: int
    path: tuple[str, ...]
    query: str | None = None
    subdomain: str | None = None
    domain: str | None = None
    top_level_domain: str | None = None

    @property
    def target(self) -> str:
        """Request target as written on the request line."""
        path = "/".join(self.path) or "/"
        if self.query:
            return f"{path}?{self.query}"
        return path

    @property
    def dns_target(self) -> str:
        """``host:port`` handed to the resolver."""
        if self.subdomain and self.domain and self.top_level_domain:
            return f"{self.subdomain}.{self.domain}.{self.top_level_domain}:{self.port}"
        return f"{self.host}:{self.port}"


def _split_host(host: str) -> tuple[str | None, str | None, str | None]:
    try:
        ipaddress.ip_address(host)
    except ValueError:
        pass
    else:
        return None, None, None

    labels = host.split(".")
    if len(labels) < 3:
        return None, None, None
    return ".".join(labels[:-2]), labels[-2], labels[-1]


def parse_url(raw: str) -> ParsedUrl:
    """
    Decompose ``raw`` into host, port, path segments and query.

    Accepts ``http://host[:port][/path][?query]`` or the same without a scheme.
    Path segments keep the leading empty segment so joining them with ``/``
    restores the absolute path.
    """
    rest = raw.strip()
    scheme, sep, after = rest.partition("://")
    if sep:
        if scheme.lower() != "http":
            raise ParseUrlError(raw, f"unsupported scheme {scheme!r}")
        rest = after

    rest, _, _fragment = rest.partition("#")
    rest, has_query, query = rest.partition("?")

    slash = rest.find("/")
    if slash == -1:
        authority, path = rest, ""
    else:
        authority, path = rest[:slash], rest[slash:]

    if "@" in authority:
        raise ParseUrlError(raw, "userinfo is not supported")

    host, has_port, port_text = authority.partition(":")
    if not host:
        raise ParseUrlError(raw, "missing host")

    if has_port:
        if not (port_text.isascii() and port_text.isdigit()):
            raise ParseUrlError(raw, "invalid port")
        port = int(port_text)
        if not 0 < port < 65536:
            raise ParseUrlError(raw, "port out of range")
    else:
        port = DEFAULT_PORT

    host = host.lower()
    subdomain, domain, tld = _split_host(host)
    return ParsedUrl(
        host=host,
        port=port,
        path=tuple(path.split("/")) if path else (),
        query=query if has_query else None,
        subdomain=subdomain,
        domain=domain,
        top_level_domain=tld,
    )
