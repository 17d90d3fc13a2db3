"""One client connection and the request handling behind it."""

from __future__ import annotations

import os
import socket
import sys
import time

from .common import (
    IDLE_TIMEOUT,
    IO_BUF,
    WEBROOT,
    HttpMethod,
    RecvState,
    SendState,
    load_file,
    request_complete,
    to_method,
)

_HEADER_END = b"\r\n\r\n"
_ALLOW = "OPTIONS, GET, HEAD, POST, PUT, DELETE, TRACE"


class ConnectionClosed(Exception):
    """The peer closed the connection or a socket call failed."""


class ResponseSent(Exception):
    """The whole response has been written; the connection is finished."""


def _status(code: int, message: str) -> bytes:
    return f"HTTP/1.1 {code} {message}\r\nContent-Length: 0\r\n\r\n".encode()


def _request_line(request: bytes) -> tuple[str, str]:
    tokens = request.decode("latin-1").split(maxsplit=2)
    method = tokens[0] if tokens else ""
    uri = tokens[1] if len(tokens) > 1 else ""
    return method, uri


def _body(request: bytes) -> bytes:
    pos = request.find(_HEADER_END)
    return b"" if pos == -1 else request[pos + len(_HEADER_END):]


def _query_params(query: str) -> dict[str, str]:
    params: dict[str, str] = {}
    for pair in query.split("&"):
        key, eq, value = pair.partition("=")
        if eq:
            params[key] = value
    return params


def _readable(path: str) -> bool:
    try:
        with open(path, "rb"):
            return True
    except OSError:
        return False


def _get_head(request: bytes, root: str, send_body: bool) -> bytes:
    _, uri = _request_line(request)
    path, qmark, query = uri.partition("?")
    params = _query_params(query) if qmark else {}
    if path == "/":
        path = "/index.html"
    if ".." in path:
        return _status(400, "Bad Request")

    file = root + path
    lang = params.get("lang")
    if lang is not None:
        ext = file.rfind(".")
        if ext != -1:
            alt = f"{file[:ext]}.{lang}.html"
            if _readable(alt):
                file = alt

    try:
        body = load_file(file)
    except OSError:
        return _status(404, "Not Found")

    length = len(body) if send_body else 0
    head = f"HTTP/1.1 200 OK\r\nContent-Length: {length}\r\n\r\n".encode()
    return head + body if send_body else head


def _post(request: bytes) -> bytes:
    body = _body(request).decode("utf-8", errors="replace")
    print(f"POST body: [{body}]", file=sys.stdout, flush=True)
    return _status(200, "OK")


def _put(request: bytes, root: str) -> bytes:
    _, uri = _request_line(request)
    if ".." in uri:
        return _status(400, "Bad Request")
    path = "/index.html" if uri == "/" else uri
    file = root + path
    existed = os.path.exists(file)
    try:
        with open(file, "wb") as handle:
            handle.write(_body(request))
    except OSError:
        return _status(500, "Internal Server Error")
    if existed:
        head = "HTTP/1.1 200 OK\r\n"
    else:
        head = f"HTTP/1.1 201 Created\r\nLocation: {path}\r\n"
    return (head + "Content-Length: 0\r\n\r\n").encode()


def _delete(request: bytes, root: str) -> bytes:
    _, uri = _request_line(request)
    if ".." in uri:
        return _status(400, "Bad Request")
    path = "/index.html" if uri == "/" else uri
    file = root + path
    if not os.path.exists(file):
        return _status(404, "Not Found")
    try:
        if os.path.isdir(file):
            os.rmdir(file)
        else:
            os.remove(file)
    except OSError:
        return _status(500, "Internal Server Error")
    return _status(204, "No Content")


def _options() -> bytes:
    return (
        f"HTTP/1.1 200 OK\r\nAllow: {_ALLOW}\r\nContent-Length: 0\r\n\r\n"
    ).encode()


def _trace(request: bytes) -> bytes:
    head = (
        "HTTP/1.1 200 OK\r\n"
        "Content-Type: message/http\r\n"
        f"Content-Length: {len(request)}\r\n\r\n"
    ).encode()
    return head + request


def build_response(request: bytes, webroot: str | os.PathLike = WEBROOT) -> bytes:
    """Handle a complete request against ``webroot`` and return the response bytes."""
    root = os.fspath(webroot)
    method = to_method(_request_line(request)[0])
    if method is HttpMethod.OPTIONS:
        return _options()
    if method is HttpMethod.GET:
        return _get_head(request, root, send_body=True)
    if method is HttpMethod.HEAD:
        return _get_head(request, root, send_body=False)
    if method is HttpMethod.POST:
        return _post(request)
    if method is HttpMethod.PUT:
        return _put(request, root)
    if method is HttpMethod.DELETE:
        return _delete(request, root)
    if method is HttpMethod.TRACE:
        return _trace(request)
    return _status(501, "Not Implemented")


class Connection:
    """A non-blocking client socket that reads one request and writes its response."""

    def __init__(self, sock: socket.socket, webroot: str | os.PathLike = WEBROOT):
        self.sock = sock
        self.webroot = webroot
        self.recv_state = RecvState.RECEIVE
        self.send_state = SendState.IDLE
        self.method = HttpMethod.NONE
        self.last_activity = time.time()
        self.request = bytearray()
        self.response = b""
        sock.setblocking(False)

    def fileno(self) -> int:
        """Return the socket's file descriptor, so the object can be selected on."""
        return self.sock.fileno()

    def recv_chunk(self) -> None:
        """Read what is available; once the request is whole, prepare the response."""
        try:
            data = self.sock.recv(IO_BUF)
        except OSError as exc:
            raise ConnectionClosed(str(exc)) from exc
        if not data:
            raise ConnectionClosed("peer closed the connection")
        self.request += data
        self.last_activity = time.time()
        if request_complete(bytes(self.request)):
            request = bytes(self.request)
            self.method = to_method(_request_line(request)[0])
            self.response = build_response(request, self.webroot)
            self.recv_state = RecvState.IDLE
            self.send_state = SendState.SEND

    def send_chunk(self) -> None:
        """Write up to one buffer of the response; raise ``ResponseSent`` when done."""
        chunk = self.response[:IO_BUF]
        try:
            sent = self.sock.send(chunk)
        except OSError as exc:
            raise ConnectionClosed(str(exc)) from exc
        if sent <= 0:
            raise ConnectionClosed("nothing could be sent")
        self.response = self.response[sent:]
        self.last_activity = time.time()
        if not self.response:
            raise ResponseSent()

    def idle_too_long(self, now: float) -> bool:
        """Tell whether more than the idle timeout has passed since the last activity."""
        return now - self.last_activity > IDLE_TIMEOUT

    def close(self) -> None:
        """Close the underlying socket."""
        self.sock.close()