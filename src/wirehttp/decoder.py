"""Three-phase HTTP/1.1 response decoder.

The status line comes first, then header lines up to a blank line, then a
body framed by Content-Length. The body length is only known once the header
block has been consumed, so the phases run strictly in order and never go
back.
"""

from __future__ import annotations

import logging
import re
from enum import Enum, auto

from .errors import IncompleteRead, ParseHeaderError, TruncatedResponseError, Utf8DecodeError
from .reader import StreamReader
from .response import Response


logger = logging.getLogger(__name__)

_ASCII_WS = " \t\n\f\r"
_ASCII_WS_RUN = re.compile(f"[{_ASCII_WS}]+")


class DecodePhase(Enum):
    STATUS_LINE = auto()
    HEADERS = auto()
    BODY = auto()
    DONE = auto()
    FAILED = auto()


_NEXT_PHASE = {
    DecodePhase.STATUS_LINE: DecodePhase.HEADERS,
    DecodePhase.HEADERS: DecodePhase.BODY,
    DecodePhase.BODY: DecodePhase.DONE,
}


class ResponseDecoder:
    """
    Decode one response from a :class:`StreamReader`.

    Each ``read_*`` method is one phase and must be called in order;
    :meth:`decode` runs all three. The first error moves the decoder to
    ``FAILED`` and no further phase may run.
    """

    def __init__(
        self,
        reader: StreamReader,
        *,
        max_line_bytes: int = 64 * 1024,
        strict_headers: bool = False,
    ):
        self._reader = reader
        self._max_line_bytes = max_line_bytes
        self._strict_headers = strict_headers
        self.phase = DecodePhase.STATUS_LINE
        self.response = Response()

    def _enter(self, phase: DecodePhase) -> None:
        if self.phase is not phase:
            raise RuntimeError(f"cannot run {phase.name} while decoder is in {self.phase.name}")

    async def _run(self, phase: DecodePhase, step) -> None:
        self._enter(phase)
        try:
            await step()
        except BaseException:
            self.phase = DecodePhase.FAILED
            raise
        self.phase = _NEXT_PHASE[phase]

    async def decode(self) -> Response:
        await self.read_status_line()
        await self.read_headers()
        await self.read_body()
        return self.response

    async def read_status_line(self) -> None:
        await self._run(DecodePhase.STATUS_LINE, self._status_line)

    async def read_headers(self) -> None:
        await self._run(DecodePhase.HEADERS, self._headers)

    async def read_body(self) -> None:
        await self._run(DecodePhase.BODY, self._body)

    async def _status_line(self) -> None:
        raw = (await self._reader.read_line(self._max_line_bytes)).decode("iso-8859-1")
        pieces = _ASCII_WS_RUN.split(raw.strip(_ASCII_WS), maxsplit=2)
        if len(pieces) < 3:
            raise ParseHeaderError(raw)

        version, status, reason = pieces
        self.response.set_version(version)
        self.response.set_status_code(status)
        self.response.reason = reason.rstrip(_ASCII_WS)
        logger.debug("status line: %s %d %s", version, self.response.status_code, self.response.reason)

    async def _headers(self) -> None:
        while True:
            line = await self._reader.read_line(self._max_line_bytes)
            if line == b"\r\n":
                break
            if not line.endswith(b"\n"):
                if self._strict_headers:
                    raise TruncatedResponseError(line.decode("iso-8859-1"))
                if len(line) < 2:
                    logger.warning("stream ended inside header block, treating it as complete")
            # short read or a bare "\n" closes the block
            if len(line) < 2:
                break

            text = line.decode("iso-8859-1")
            key, sep, value = text.partition(":")
            if not sep:
                raise ParseHeaderError(text)
            self.response.add_header(key.strip(), value)

    async def _body(self) -> None:
        length = self.response.content_length
        if length == 0:
            return

        content = await self._reader.read_exact(length)
        if len(content) < length:
            raise IncompleteRead(length, len(content))
        try:
            body = content.decode("utf-8")
        except UnicodeDecodeError as e:
            raise Utf8DecodeError(content, str(e)) from e
        self.response.content = content
        self.response.body = body
        logger.debug("read %d body bytes", length)
