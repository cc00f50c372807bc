"""Structured HTTP/1.1 response populated by the decoder."""

from __future__ import annotations

import re
from enum import Enum


_STATUS_MIN = -(2**15)
_STATUS_MAX = 2**15 - 1
_STATUS_RE = re.compile(r"[+-]?[0-9]+")


class HttpVersion(Enum):
    UNKNOWN = "UNKNOWN"
    HTTP_1_0 = "HTTP/1.0"
    HTTP_1_1 = "HTTP/1.1"

    @classmethod
    def parse(cls, token: str) -> "HttpVersion":
        for version in (cls.HTTP_1_0, cls.HTTP_1_1):
            if token == version.value:
                return version
        return cls.UNKNOWN


class Response:
    """
    Status line, headers and body of one response.

    Headers keep the case they arrived with. ``content_length`` follows the
    last ``Content-Length`` header (any casing) whose value parses as a
    non-negative integer; it is only ever changed through :meth:`add_header`.
    """

    def __init__(self):
        self.version: HttpVersion = HttpVersion.UNKNOWN
        self.status_code: int = 0
        self.reason: str = ""
        self.headers: dict[str, str] = {}
        self.content: bytes = b""
        self.body: str = ""
        self._content_length = 0

    def __repr__(self) -> str:
        return f"<Response [{self.status_code} {self.reason}]>"

    @property
    def content_length(self) -> int:
        return self._content_length

    def set_version(self, token: str) -> None:
        self.version = HttpVersion.parse(token)

    def set_status_code(self, token: str) -> None:
        """Non-numeric or out-of-range codes leave the status untouched."""
        token = token.strip()
        if not _STATUS_RE.fullmatch(token):
            return
        code = int(token)
        if _STATUS_MIN <= code <= _STATUS_MAX:
            self.status_code = code

    def add_header(self, key: str, value: str) -> None:
        value = value.strip()
        if key.lower() == "content-length" and value.isascii() and value.isdigit():
            self._content_length = int(value)
        self.headers[key] = value

    def get_header(self, name: str, default: str | None = None) -> str | None:
        """Case-insensitive lookup; the last matching header wins."""
        name = name.lower()
        found = default
        for key, value in self.headers.items():
            if key.lower() == name:
                found = value
        return found

    def to_wire_bytes(self) -> bytes:
        """Serialize back to the on-the-wire form the decoder accepts."""
        head = [f"{self.version.value} {self.status_code} {self.reason}\r\n"]
        head.extend(f"{k}: {v}\r\n" for k, v in self.headers.items())
        head.append("\r\n")
        return "".join(head).encode("iso-8859-1") + self.content
