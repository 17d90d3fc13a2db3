"""A single-threaded HTTP server multiplexing its connections with ``select``."""

from __future__ import annotations

import argparse
import os
import select
import socket
import time

from .common import HTTP_PORT, WEBROOT, RecvState, SendState
from .connection import Connection

_BACKLOG = 5


class Server:
    """Listens on a TCP port and serves every connection from one loop."""

    def __init__(
        self,
        host: str = "0.0.0.0",
        port: int = HTTP_PORT,
        webroot: str | os.PathLike = WEBROOT,
    ):
        self.webroot = webroot
        self._conns: list[Connection] = []
        self._listener = socket.socket(socket.AF_INET, socket.SOCK_STREAM, socket.IPPROTO_TCP)
        try:
            self._listener.bind((host, port))
            self._listener.listen(_BACKLOG)
            self._listener.setblocking(False)
        except OSError:
            self._listener.close()
            raise

    @property
    def address(self) -> tuple[str, int]:
        """The host and port the server listens on."""
        return self._listener.getsockname()[:2]

    @property
    def connections(self) -> tuple[Connection, ...]:
        """The connections currently open."""
        return tuple(self._conns)

    def _accept_new(self) -> None:
        try:
            sock, _ = self._listener.accept()
        except OSError:
            return
        self._conns.append(Connection(sock, self.webroot))

    def poll(self, timeout: float | None = None) -> None:
        """Wait up to ``timeout`` seconds for activity and serve it once."""
        readers = [self._listener] + [
            c for c in self._conns if c.recv_state is RecvState.RECEIVE
        ]
        writers = [c for c in self._conns if c.send_state is SendState.SEND]
        readable, writable, _ = select.select(readers, writers, [], timeout)

        dropped: set[int] = set()

        def drop(conn: Connection) -> None:
            dropped.add(id(conn))
            conn.close()

        if self._listener in readable:
            self._accept_new()

        for conn in readable:
            if conn is self._listener or conn.recv_state is not RecvState.RECEIVE:
                continue
            try:
                conn.recv_chunk()
            except Exception:
                drop(conn)

        for conn in writable:
            if id(conn) in dropped or conn.send_state is not SendState.SEND:
                continue
            try:
                conn.send_chunk()
            except Exception:
                drop(conn)

        now = time.time()
        for conn in self._conns:
            if id(conn) not in dropped and conn.idle_too_long(now):
                drop(conn)

        self._conns = [c for c in self._conns if id(c) not in dropped]

    def run(self) -> None:
        """Serve forever."""
        while True:
            self.poll(None)

    def close(self) -> None:
        """Close every connection and the listening socket."""
        for conn in self._conns:
            conn.close()
        self._conns.clear()
        self._listener.close()

    def __enter__(self) -> Server:
        return self

    def __exit__(self, *args) -> None:
        self.close()


def main(argv: list[str] | None = None) -> int:
    """Start the HTTP server from the command line."""
    parser = argparse.ArgumentParser(prog="selecthttpd", description="Serve files over HTTP.")
    parser.add_argument("--host", default="0.0.0.0", help="address to listen on")
    parser.add_argument("--port", type=int, default=HTTP_PORT, help="port to listen on")
    parser.add_argument("--webroot", default=WEBROOT, help="directory holding the files")
    args = parser.parse_args(argv)

    try:
        server = Server(args.host, args.port, args.webroot)
    except OSError as exc:
        parser.exit(1, f"selecthttpd: cannot listen: {exc}\n")
    with server:
        try:
            server.run()
        except KeyboardInterrupt:
            pass
    return 0