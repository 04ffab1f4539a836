"""Unit tests for request-line decoding."""

import logging

import pytest

from jserver.domain.errors import RequestLineError
from jserver.domain.http_types import Method, RequestLine
from jserver.pipeline.request_line import decode_method, decode_request_line


@pytest.mark.parametrize("method", [method.value for method in Method])
def test_every_recognized_method_decodes(method):
    """Each enumerated method is accepted verbatim."""

    line = decode_request_line(f"{method} /path HTTP/1.1")
    assert line.method is Method(method)


def test_decoding_is_lossless():
    """Target and version are the exact input substrings."""

    line = decode_request_line("POST /a/b?c=d&e=%20f HTTP/10.25")
    assert line == RequestLine(Method.POST, "/a/b?c=d&e=%20f", "HTTP/10.25")


def test_target_is_not_validated():
    """Any run of non-space characters is an acceptable target."""

    assert decode_request_line("GET * HTTP/1.1").target == "*"
    assert decode_request_line("GET ../../etc HTTP/1.0").target == "../../etc"


@pytest.mark.parametrize(
    "line",
    [
        "",
        "GET",
        "GET /",
        "GET / HTTP/1.1 extra",
        "GET  / HTTP/1.1",
        "get / HTTP/1.1",
        "PATCH / HTTP/1.1",
        "GET / HTTP/1",
        "GET / http/1.1",
        "GET / HTTP/1.x",
        "GET / HTTP/1.1\n",
    ],
)
def test_malformed_request_lines_raise(line):
    """Missing fields, unknown methods and bad versions are rejected."""

    with pytest.raises(RequestLineError):
        decode_request_line(line)


def test_decode_method_chains_value_error():
    """Unknown method errors keep their cause for inspection."""

    with pytest.raises(RequestLineError) as excinfo:
        decode_method("BREW")
    assert isinstance(excinfo.value.__cause__, ValueError)


@pytest.mark.parametrize("target", ["/caf\xa0", "/a\x1fb", "/a\x85b", "/tab\there"])
def test_target_may_hold_any_non_space_character(target):
    """Only SP separates fields, so other whitespace stays in the target."""

    line = decode_request_line(f"GET {target} HTTP/1.1")
    assert line.target == target


def test_wrong_case_method_is_logged_before_rejection(caplog):
    """A known method sent in lower case is rejected and noted at DEBUG."""

    caplog.set_level(logging.DEBUG, logger="jserver")
    with pytest.raises(RequestLineError):
        decode_method("get")
    record = next(
        r
        for r in caplog.records
        if getattr(r, "event", None) == "method_case_mismatch"
    )
    assert record.method == "get"


def test_unknown_method_is_not_logged_as_case_mismatch(caplog):
    """Tokens outside the method set raise without the case note."""

    caplog.set_level(logging.DEBUG, logger="jserver")
    with pytest.raises(RequestLineError):
        decode_method("BREW")
    assert not [
        r for r in caplog.records if getattr(r, "event", None) == "method_case_mismatch"
    ]
