"""Buffered reads over an AnyIO byte stream."""

from __future__ import annotations

import anyio
from anyio.abc import ByteReceiveStream

from .errors import ConnectionError, ParseHeaderError, RequestTimeout


class StreamReader:
    """
    Line and exact-length reads on top of ``stream.receive()``.

    Bytes received past the current line stay buffered for the next read, so
    the body can follow the header block in the same chunk.
    """

    def __init__(
        self,
        stream: ByteReceiveStream,
        *,
        timeout: float | None = None,
        chunk_size: int = 4096,
    ):
        self._stream = stream
        self._timeout = timeout
        self._chunk_size = chunk_size
        self._buf = bytearray()
        self._eof = False

    @property
    def at_eof(self) -> bool:
        return self._eof and not self._buf

    async def _fill(self) -> bool:
        """Receive one more chunk. Returns False once the stream has ended."""
        if self._eof:
            return False
        try:
            with anyio.fail_after(self._timeout):
                chunk = await self._stream.receive(self._chunk_size)
        except anyio.EndOfStream:
            chunk = b""
        except TimeoutError as e:
            raise RequestTimeout(f"read timed out after {self._timeout}s", e) from e
        except (anyio.BrokenResourceError, anyio.ClosedResourceError, OSError) as e:
            raise ConnectionError(f"failed to read response: {e!r}", e) from e

        if not chunk:
            self._eof = True
            return False
        self._buf.extend(chunk)
        return True

    def _take(self, n: int) -> bytes:
        data = bytes(self._buf[:n])
        del self._buf[:n]
        return data

    async def read_line(self, max_bytes: int) -> bytes:
        """
        Read through the next ``\\n``, delimiter included.

        At end of stream the remaining bytes are returned without a delimiter
        (possibly ``b""``). A line longer than ``max_bytes`` is a parse error.
        """
        start = 0
        while True:
            idx = self._buf.find(b"\n", start)
            if idx != -1:
                if idx + 1 > max_bytes:
                    raise ParseHeaderError(self._take(max_bytes).decode("iso-8859-1") + "...")
                return self._take(idx + 1)
            if len(self._buf) > max_bytes:
                raise ParseHeaderError(self._take(max_bytes).decode("iso-8859-1") + "...")
            start = len(self._buf)
            if not await self._fill():
                return self._take(len(self._buf))

    async def read_exact(self, n: int) -> bytes:
        """Read ``n`` bytes, or fewer if the stream ends first."""
        while len(self._buf) < n:
            if not await self._fill():
                break
        return self._take(min(n, len(self._buf)))
