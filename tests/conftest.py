"""Shared fixtures: scripted byte streams and a loopback HTTP server."""

from __future__ import annotations

from contextlib import asynccontextmanager
from dataclasses import dataclass, field

import anyio
import pytest
from anyio.abc import ByteReceiveStream, SocketAttribute, SocketStream
from typing_extensions import override

from wirehttp import StreamReader


@pytest.fixture
def anyio_backend():
    return "asyncio"


class ScriptedStream(ByteReceiveStream):
    """Receive stream that hands out pre-recorded chunks, then ends."""

    def __init__(self, chunks: list[bytes]):
        self._chunks = list(chunks)
        self.closed = False

    @override
    async def receive(self, max_bytes: int = 65536) -> bytes:
        if not self._chunks:
            raise anyio.EndOfStream
        chunk = self._chunks.pop(0)
        if len(chunk) > max_bytes:
            self._chunks.insert(0, chunk[max_bytes:])
            chunk = chunk[:max_bytes]
        return chunk

    @override
    async def aclose(self) -> None:
        self.closed = True


@pytest.fixture
def reader_for():
    """Build a StreamReader over raw bytes, split into the given chunk sizes."""

    def _make(data: bytes, *, chunk: int | None = None, **kwargs) -> StreamReader:
        if chunk is None:
            chunks = [data] if data else []
        else:
            chunks = [data[i:i + chunk] for i in range(0, len(data), chunk)]
        return StreamReader(ScriptedStream(chunks), **kwargs)

    return _make


async def _read_request(stream: SocketStream) -> bytes:
    buf = bytearray()
    while b"\r\n\r\n" not in buf:
        try:
            buf.extend(await stream.receive(4096))
        except anyio.EndOfStream:
            return bytes(buf)

    head, _, body = bytes(buf).partition(b"\r\n\r\n")
    length = 0
    for line in head.split(b"\r\n")[1:]:
        key, _, value = line.partition(b":")
        if key.strip().lower() == b"content-length":
            length = int(value.strip())
    while len(body) < length:
        try:
            body += await stream.receive(length - len(body))
        except anyio.EndOfStream:
            break
    return head + b"\r\n\r\n" + body


@dataclass
class CannedServer:
    port: int
    requests: list[bytes] = field(default_factory=list)

    def url(self, path: str = "/") -> str:
        return f"http://127.0.0.1:{self.port}{path}"


@asynccontextmanager
async def _canned_server(reply: bytes | None):
    """
    Serve ``reply`` to every connection after reading one request.

    ``reply=None`` never answers, for exercising read deadlines.
    """
    listener = await anyio.create_tcp_listener(local_host="127.0.0.1")
    server = CannedServer(port=listener.extra(SocketAttribute.local_port))

    async def handle(stream: SocketStream) -> None:
        async with stream:
            server.requests.append(await _read_request(stream))
            if reply is None:
                await anyio.sleep_forever()
            await stream.send(reply)

    async def serve() -> None:
        async with listener:
            await listener.serve(handle)

    async with anyio.create_task_group() as tg:
        tg.start_soon(serve)
        yield server
        tg.cancel_scope.cancel()


@pytest.fixture
def canned_server():
    return _canned_server
