"""Shared constants, enumerations and helpers for the HTTP server."""

from __future__ import annotations

import enum
import os
import re
from email.utils import formatdate

HTTP_PORT = 27015
MAX_SOCKETS = 60
IO_BUF = 1024
IDLE_TIMEOUT = 120
WEBROOT = "./wwwroot"

_HEADER_END = b"\r\n\r\n"
_CONTENT_LENGTH = b"Content-Length:"
_DIGIT = re.compile(rb"[0-9]")
_DIGITS = re.compile(rb"[0-9]+")


class HttpMethod(enum.Enum):
    """Request methods the server knows about."""

    NONE = enum.auto()
    OPTIONS = enum.auto()
    GET = enum.auto()
    HEAD = enum.auto()
    POST = enum.auto()
    PUT = enum.auto()
    DELETE = enum.auto()
    TRACE = enum.auto()


class RecvState(enum.Enum):
    """Receive side state of a connection."""

    EMPTY = enum.auto()
    LISTEN = enum.auto()
    RECEIVE = enum.auto()
    IDLE = enum.auto()


class SendState(enum.Enum):
    """Send side state of a connection."""

    EMPTY = enum.auto()
    IDLE = enum.auto()
    SEND = enum.auto()


_METHODS = {
    "GET": HttpMethod.GET,
    "HEAD": HttpMethod.HEAD,
    "POST": HttpMethod.POST,
    "PUT": HttpMethod.PUT,
    "DELETE": HttpMethod.DELETE,
    "OPTIONS": HttpMethod.OPTIONS,
    "TRACE": HttpMethod.TRACE,
}


def http_date(when: float | None = None) -> str:
    """Return an RFC 1123 date for ``when`` (seconds since the epoch), default now."""
    return formatdate(when, usegmt=True)


def to_method(token: str) -> HttpMethod:
    """Map a request-line token to an :class:`HttpMethod`; unknown gives ``NONE``."""
    return _METHODS.get(token, HttpMethod.NONE)


def request_complete(buf: bytes) -> bool:
    """Tell whether ``buf`` holds the full headers and the announced body.

    Raises ``ValueError`` when a Content-Length header carries no number.
    """
    hdr = buf.find(_HEADER_END)
    if hdr == -1:
        return False
    need = hdr + len(_HEADER_END)
    cl = buf.find(_CONTENT_LENGTH)
    if cl != -1 and cl < hdr:
        digit = _DIGIT.search(buf, cl + len(_CONTENT_LENGTH))
        if digit is None:
            raise ValueError("Content-Length header has no value")
        need += int(_DIGITS.match(buf, digit.start()).group())
    return len(buf) >= need


def load_file(path: str | os.PathLike) -> bytes:
    """Read a whole file as bytes; raises ``OSError`` if it cannot be read."""
    with open(path, "rb") as handle:
        return handle.read()