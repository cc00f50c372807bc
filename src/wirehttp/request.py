"""Outbound request and its HTTP/1.1 wire encoding."""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING

from typing_extensions import Self

from .url import ParsedUrl, parse_url

if TYPE_CHECKING:
    from .config import ClientConfig
    from .response import Response


class Method(Enum):
    GET = "GET"
    POST = "POST"


class Request:
    """
    A single GET or POST, configured by chaining and sent once.

    Header keys are lowercased on insert, so ``Content-Length`` and
    ``content-length`` name the same header and the last write wins.
    """

    def __init__(
        self,
        url: str,
        method: Method = Method.GET,
        *,
        headers: dict[str, str] | None = None,
        body: bytes | str = b"",
    ):
        self.url = url
        self.method = method
        self.headers: dict[str, str] = {}
        self.body = b""
        self.elapsed: float | None = None
        for key, value in (headers or {}).items():
            self.add_header(key, value)
        self.set_body(body)

    def __repr__(self) -> str:
        return f"<Request [{self.method.value} {self.url}]>"

    def add_header(self, key: str, value: str) -> Self:
        self.headers[key.lower()] = value
        return self

    def remove_header(self, key: str) -> Self:
        self.headers.pop(key.lower(), None)
        return self

    def set_body(self, body: bytes | str) -> Self:
        self.body = body.encode("utf-8") if isinstance(body, str) else bytes(body)
        return self

    def encode(self, url: ParsedUrl | None = None) -> bytes:
        """
        Serialize to the exact bytes written on the connection.

        A missing ``content-length`` header is synthesized from the body
        length and emitted after the caller's headers. Raises ParseUrlError
        before producing anything if the URL does not parse.
        """
        if url is None:
            url = parse_url(self.url)

        headers = dict(self.headers)
        headers.setdefault("content-length", str(len(self.body)))

        start = f"{self.method.value} {url.target} HTTP/1.1\r\n"
        head = "".join(f"{k}: {v}\r\n" for k, v in headers.items())
        return (start + head + "\r\n").encode("utf-8") + self.body

    async def send(self, config: ClientConfig | None = None) -> Response:
        """Run the round trip; see :func:`wirehttp.client.send`."""
        from .client import send

        return await send(self, config)
