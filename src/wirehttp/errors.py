"""Errors raised by the request pipeline.

Every failure surfaces as a subclass of :class:`RequestError`, so callers can
catch the whole family or match on a specific kind.
"""

from __future__ import annotations


class RequestError(Exception):
    """Base class for every failure of a request round trip."""
    pass


class ParseUrlError(RequestError):
    """The URL cannot be decomposed into the host/port/path a request needs."""

    def __init__(self, url: str, detail: str = "failed to parse url"):
        super().__init__(f"{detail}: {url!r}")
        self.url = url


class ParseHeaderError(RequestError):
    """A malformed status line or header line."""

    def __init__(self, line: str):
        super().__init__(f"failed to parse header: {line!r}")
        self.line = line


class NoAddressFound(RequestError):
    """DNS lookup produced no IPv4 candidate."""

    def __init__(self, target: str):
        super().__init__(f"failed to find any IPv4 address for {target!r}")
        self.target = target


class ConnectionError(RequestError):
    """Transport failure while connecting, writing or reading."""

    def __init__(self, message: str, cause: BaseException | None = None):
        super().__init__(message)
        self.cause = cause


class IncompleteRead(ConnectionError):
    """The peer closed the stream before the declared body arrived."""

    def __init__(self, expected: int, received: int):
        super().__init__(f"connection closed after {received} of {expected} body bytes")
        self.expected = expected
        self.received = received


class RequestTimeout(ConnectionError):
    """A configured connect or read deadline expired."""
    pass


class TruncatedResponseError(RequestError):
    """The stream ended inside the header block (strict mode only)."""

    def __init__(self, line: str):
        super().__init__(f"response truncated inside header block: {line!r}")
        self.line = line


class Utf8DecodeError(RequestError):
    """The response body is not valid UTF-8."""

    def __init__(self, content: bytes, reason: str):
        super().__init__(f"response body is not valid utf-8: {reason}")
        self.content = content
