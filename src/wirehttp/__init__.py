"""Minimal HTTP/1.1 client on raw AnyIO sockets."""

from .config import ClientConfig
from .request import Method, Request
from .response import HttpVersion, Response
from .decoder import DecodePhase, ResponseDecoder
from .reader import StreamReader
from .url import ParsedUrl, parse_url
from .transport import open_connection, resolve_address
from .client import send, send_all
from .errors import (
    RequestError,
    ParseUrlError,
    ParseHeaderError,
    NoAddressFound,
    ConnectionError,
    IncompleteRead,
    RequestTimeout,
    TruncatedResponseError,
    Utf8DecodeError,
)

__all__ = [
    # Configuration
    "ClientConfig",
    # Messages
    "Method",
    "Request",
    "HttpVersion",
    "Response",
    # Protocol
    "DecodePhase",
    "ResponseDecoder",
    "StreamReader",
    "ParsedUrl",
    "parse_url",
    # Transport
    "resolve_address",
    "open_connection",
    "send",
    "send_all",
    # Errors
    "RequestError",
    "ParseUrlError",
    "ParseHeaderError",
    "NoAddressFound",
    "ConnectionError",
    "IncompleteRead",
    "RequestTimeout",
    "TruncatedResponseError",
    "Utf8DecodeError",
]
