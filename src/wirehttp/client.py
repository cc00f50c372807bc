"""Request round trips: resolve, connect, write, decode."""

from __future__ import annotations

import logging
import time
from typing import Sequence

import anyio

from .config import ClientConfig
from .decoder import ResponseDecoder
from .errors import RequestError
from .reader import StreamReader
from .request import Request
from .response import Response
from .transport import open_connection, resolve_address, write_request
from .url import parse_url


logger = logging.getLogger(__name__)


async def send(request: Request, config: ClientConfig | None = None) -> Response:
    """
    Send ``request`` over a fresh connection and decode the reply.

    The connection is closed once decoding finishes or fails. Any failure is
    raised as a :class:`~wirehttp.errors.RequestError` subclass; on success
    ``request.elapsed`` holds the round-trip time in seconds.
    """
    config = config or ClientConfig()
    started = time.perf_counter()

    url = parse_url(request.url)
    payload = request.encode(url)

    address = await resolve_address(url.dns_target)
    stream = await open_connection(address, timeout=config.connect_timeout)
    async with stream:
        await write_request(stream, payload)
        logger.debug("sent %d bytes for %r", len(payload), request)

        reader = StreamReader(stream, timeout=config.read_timeout, chunk_size=config.chunk_size)
        decoder = ResponseDecoder(
            reader,
            max_line_bytes=config.max_line_bytes,
            strict_headers=config.strict_headers,
        )
        response = await decoder.decode()

    request.elapsed = time.perf_counter() - started
    logger.debug("%r -> %r in %.3fs", request, response, request.elapsed)
    return response


async def send_all(
    requests: Sequence[Request],
    config: ClientConfig | None = None,
) -> list[Response | RequestError]:
    """
    Send every request concurrently, one connection each.

    Results come back in input order: the Response, or the RequestError that
    request failed with. Other exceptions propagate and cancel the rest.
    """
    results: list[Response | RequestError | None] = [None] * len(requests)

    async def _one(index: int, request: Request) -> None:
        try:
            results[index] = await send(request, config)
        except RequestError as e:
            logger.debug("%r failed: %s", request, e)
            results[index] = e

    async with anyio.create_task_group() as tg:
        for index, request in enumerate(requests):
            tg.start_soon(_one, index, request)

    return results  # type: ignore[return-value]
