"""An interactive TCP client that asks a server for the time."""

from __future__ import annotations

import argparse
import socket
import sys
from typing import TextIO

from .common import HTTP_PORT

_RECV_SIZE = 255
_MENU = (
    "\nPlease choose an option:\n"
    "1 - Get current time.\n"
    "2 - Get current time in seconds.\n"
    "3 - Exit.\n"
    ">> "
)
_COMMANDS = {1: "TimeString", 2: "SecondsSince1970", 3: "Exit"}


def command_for_option(option: int) -> str:
    """Return the message sent for a menu option; raises ``ValueError`` if unknown."""
    try:
        return _COMMANDS[option]
    except KeyError:
        raise ValueError(f"unknown option: {option}") from None


def run_client(
    host: str = "127.0.0.1",
    port: int = HTTP_PORT,
    stdin: TextIO | None = None,
    stdout: TextIO | None = None,
) -> None:
    """Connect, then send the commands chosen on ``stdin`` until the user exits.

    Socket errors propagate as ``OSError``.
    """
    stdin = sys.stdin if stdin is None else stdin
    stdout = sys.stdout if stdout is None else stdout

    with socket.create_connection((host, port)) as sock:
        while True:
            stdout.write(_MENU)
            stdout.flush()
            line = stdin.readline()
            if not line:
                stdout.write("Time Client: Closing Connection.\n")
                return
            try:
                option = int(line.strip())
                command = command_for_option(option)
            except ValueError:
                continue

            data = command.encode("ascii")
            sock.sendall(data)
            stdout.write(
                f'Time Client: Sent: {len(data)}/{len(data)} bytes of "{command}" message.\n'
            )

            if option == 3:
                stdout.write("Time Client: Closing Connection.\n")
                return

            reply = sock.recv(_RECV_SIZE)
            if not reply:
                stdout.write("Server closed the connection\n")
                return
            text = reply.decode("utf-8", errors="replace")
            stdout.write(f'Time Client: Received: {len(reply)} bytes of "{text}" message.\n')


def main(argv: list[str] | None = None) -> int:
    """Run the interactive client from the command line."""
    parser = argparse.ArgumentParser(prog="selecthttpd-client", description="Ask a server for the time.")
    parser.add_argument("--host", default="127.0.0.1", help="server address")
    parser.add_argument("--port", type=int, default=HTTP_PORT, help="server port")
    args = parser.parse_args(argv)
    try:
        run_client(args.host, args.port)
    except OSError as exc:
        print(f"Time Client: Error: {exc}", file=sys.stderr)
        return 1
    return 0