import io
import socket
import threading

import pytest

from selecthttpd.client import command_for_option, main, run_client


class _FakeServer:
    def __init__(self, replies, close_after_first=False):
        self.replies = replies
        self.close_after_first = close_after_first
        self.received = []
        self.listener = socket.socket()
        self.listener.bind(("127.0.0.1", 0))
        self.listener.listen(1)
        self.port = self.listener.getsockname()[1]
        self.thread = threading.Thread(target=self._serve, daemon=True)
        self.thread.start()

    def _serve(self):
        conn, _ = self.listener.accept()
        with conn:
            conn.settimeout(5)
            while True:
                data = conn.recv(1024)
                if not data:
                    break
                self.received.append(data)
                if self.close_after_first:
                    break
                if data in self.replies:
                    conn.sendall(self.replies[data])
                if data == b"Exit":
                    break
        self.listener.close()

    def join(self):
        self.thread.join(timeout=5)


@pytest.mark.parametrize(
    "option, command",
    [(1, "TimeString"), (2, "SecondsSince1970"), (3, "Exit")],
)
def test_command_for_option(option, command):
    assert command_for_option(option) == command


def test_unknown_option_raises():
    with pytest.raises(ValueError):
        command_for_option(4)


def test_time_request_and_exit():
    server = _FakeServer({b"TimeString": b"noon"})
    out = io.StringIO()
    run_client("127.0.0.1", server.port, io.StringIO("1\n3\n"), out)
    server.join()
    assert server.received == [b"TimeString", b"Exit"]
    text = out.getvalue()
    assert 'bytes of "TimeString" message.' in text
    assert '"noon" message.' in text
    assert text.rstrip().endswith("Time Client: Closing Connection.")


def test_invalid_option_sends_nothing():
    server = _FakeServer({})
    out = io.StringIO()
    run_client("127.0.0.1", server.port, io.StringIO("7\nabc\n3\n"), out)
    server.join()
    assert server.received == [b"Exit"]
    assert out.getvalue().count("Please choose an option:") == 3


def test_seconds_request_received():
    server = _FakeServer({b"SecondsSince1970": b"12345"})
    out = io.StringIO()
    run_client("127.0.0.1", server.port, io.StringIO("2\n3\n"), out)
    server.join()
    assert server.received[0] == b"SecondsSince1970"
    assert '"12345" message.' in out.getvalue()


def test_server_closing_connection_is_reported():
    server = _FakeServer({}, close_after_first=True)
    out = io.StringIO()
    run_client("127.0.0.1", server.port, io.StringIO("1\n3\n"), out)
    server.join()
    assert "Server closed the connection" in out.getvalue()
    assert server.received == [b"TimeString"]


def test_main_reports_connection_failure():
    listener = socket.socket()
    listener.bind(("127.0.0.1", 0))
    port = listener.getsockname()[1]
    listener.close()
    assert main(["--host", "127.0.0.1", "--port", str(port)]) == 1