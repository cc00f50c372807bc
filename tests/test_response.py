"""Tests for the Response model."""

from wirehttp import HttpVersion, Response


def test_version_tokens():
    assert HttpVersion.parse("HTTP/1.0") is HttpVersion.HTTP_1_0
    assert HttpVersion.parse("HTTP/1.1") is HttpVersion.HTTP_1_1
    assert HttpVersion.parse("HTTP/2") is HttpVersion.UNKNOWN


def test_status_code_parsing_is_lenient():
    resp = Response()
    resp.set_status_code("abc")
    assert resp.status_code == 0

    resp.set_status_code("404")
    assert resp.status_code == 404

    # out of 16-bit range leaves the previous value
    resp.set_status_code("70000")
    assert resp.status_code == 404


def test_content_length_tracks_last_valid_header_any_casing():
    resp = Response()
    assert resp.content_length == 0

    resp.add_header("Content-Length", " 12 ")
    assert resp.content_length == 12
    assert resp.headers["Content-Length"] == "12"

    resp.add_header("CONTENT-LENGTH", "5")
    assert resp.content_length == 5

    resp.add_header("content-length", "-3")
    resp.add_header("content-length", "five")
    assert resp.content_length == 5


def test_headers_keep_original_case_and_lookup_ignores_it():
    resp = Response()
    resp.add_header("X-Request-Id", "abc")

    assert list(resp.headers) == ["X-Request-Id"]
    assert resp.get_header("x-request-id") == "abc"
    assert resp.get_header("missing", "fallback") == "fallback"


def test_to_wire_bytes_layout():
    resp = Response()
    resp.set_version("HTTP/1.1")
    resp.set_status_code("200")
    resp.reason = "OK"
    resp.add_header("Content-Length", "2")
    resp.content = b"hi"
    resp.body = "hi"

    assert resp.to_wire_bytes() == b"HTTP/1.1 200 OK\r\nContent-Length: 2\r\n\r\nhi"


def test_status_code_token_must_be_plain_digits():
    for token, expected in [("2_00", 0), (" 200 ", 200), ("+201", 201), ("-1", -1), ("２００", 0)]:
        resp = Response()
        resp.set_status_code(token)
        assert resp.status_code == expected, token
