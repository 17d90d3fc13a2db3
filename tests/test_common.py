import re

import pytest

from selecthttpd.common import (
    HttpMethod,
    http_date,
    load_file,
    request_complete,
    to_method,
)


@pytest.mark.parametrize(
    "token, expected",
    [
        ("GET", HttpMethod.GET),
        ("HEAD", HttpMethod.HEAD),
        ("POST", HttpMethod.POST),
        ("PUT", HttpMethod.PUT),
        ("DELETE", HttpMethod.DELETE),
        ("OPTIONS", HttpMethod.OPTIONS),
        ("TRACE", HttpMethod.TRACE),
    ],
)
def test_to_method_known(token, expected):
    assert to_method(token) is expected


@pytest.mark.parametrize("token", ["get", "PATCH", "", "CONNECT"])
def test_to_method_unknown(token):
    assert to_method(token) is HttpMethod.NONE


def test_request_incomplete_without_header_end():
    assert request_complete(b"GET / HTTP/1.1\r\nHost: x\r\n") is False


def test_request_complete_without_body():
    assert request_complete(b"GET / HTTP/1.1\r\nHost: x\r\n\r\n") is True


def test_request_waits_for_body():
    head = b"POST / HTTP/1.1\r\nContent-Length: 5\r\n\r\n"
    assert request_complete(head + b"abc") is False
    assert request_complete(head + b"abcde") is True
    assert request_complete(head + b"abcdefg") is True


def test_content_length_in_body_is_ignored():
    buf = b"POST / HTTP/1.1\r\n\r\nContent-Length: 50"
    assert request_complete(buf) is True


def test_content_length_without_value_raises():
    with pytest.raises(ValueError):
        request_complete(b"POST / HTTP/1.1\r\nContent-Length: \r\n\r\n")


def test_http_date_epoch():
    assert http_date(0) == "Thu, 01 Jan 1970 00:00:00 GMT"


def test_http_date_known_instant():
    assert http_date(1_000_000_000) == "Sun, 09 Sep 2001 01:46:40 GMT"


def test_http_date_now_shape():
    value = http_date()
    pattern = r"[A-Z][a-z]{2}, \d{2} [A-Z][a-z]{2} \d{4} \d{2}:\d{2}:\d{2} GMT"
    assert len(value) == 29
    assert value[-4:] == " GMT"
    assert re.fullmatch(pattern, value) is not None


def test_load_file_round_trip(tmp_path):
    data = bytes(range(256))
    target = tmp_path / "blob.bin"
    target.write_bytes(data)
    assert load_file(target) == data


def test_load_file_missing(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_file(tmp_path / "absent.html")