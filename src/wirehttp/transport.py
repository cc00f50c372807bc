"""Address resolution and connection establishment over AnyIO sockets."""

from __future__ import annotations

import logging
import socket

import anyio
from anyio.abc import SocketStream

from .errors import ConnectionError, NoAddressFound, ParseUrlError, RequestTimeout


logger = logging.getLogger(__name__)

Address = tuple[str, int]


def _split_target(target: str) -> Address:
    host, sep, port = target.rpartition(":")
    if not sep or not host or not (port.isascii() and port.isdigit()):
        raise ParseUrlError(target, "dns target must be host:port")
    return host, int(port)


async def resolve_address(target: str) -> Address:
    """
    Resolve ``host:port`` to the first IPv4 socket address.

    Raises NoAddressFound when the lookup fails or yields only non-IPv4 entries.
    """
    host, port = _split_target(target)
    try:
        infos = await anyio.getaddrinfo(host, port, type=socket.SOCK_STREAM)
    except socket.gaierror as e:
        raise NoAddressFound(target) from e

    for family, _type, _proto, _canonname, sockaddr in infos:
        if family == socket.AF_INET:
            address = (str(sockaddr[0]), int(sockaddr[1]))
            logger.debug("resolved %s to %s:%d", target, *address)
            return address
    raise NoAddressFound(target)


async def open_connection(address: Address, timeout: float | None = None) -> SocketStream:
    """Open one TCP stream to ``address``."""
    host, port = address
    try:
        with anyio.fail_after(timeout):
            stream = await anyio.connect_tcp(host, port)
    except TimeoutError as e:
        raise RequestTimeout(f"connect to {host}:{port} timed out after {timeout}s", e) from e
    except OSError as e:
        raise ConnectionError(f"failed to connect to {host}:{port}: {e}", e) from e
    logger.debug("connected to %s:%d", host, port)
    return stream


async def write_request(stream: SocketStream, payload: bytes) -> None:
    try:
        await stream.send(payload)
    except (anyio.BrokenResourceError, anyio.ClosedResourceError, OSError) as e:
        raise ConnectionError(f"failed to write request: {e!r}", e) from e
