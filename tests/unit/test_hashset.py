"""Unit tests for the recognized-name sets."""

from jserver.domain.hashset import NameSet
from jserver.domain.http_types import RECOGNIZED_HEADERS, RECOGNIZED_METHODS, Method


def test_name_set_keeps_first_insertion_order_and_drops_duplicates():
    """Duplicates collapse onto their first position."""

    names = NameSet("GET", "POST", "GET", "PUT")
    assert list(names) == ["GET", "POST", "PUT"]
    assert len(names) == 3


def test_contains_is_case_sensitive():
    """Membership compares names exactly."""

    names = NameSet("Host", "Accept")
    assert names.contains("Host")
    assert "Accept" in names
    assert not names.contains("host")
    assert 42 not in names


def test_joined_uses_separator():
    """Formatting joins names in insertion order."""

    names = NameSet("GET", "POST")
    assert names.joined() == "GET,POST"
    assert names.joined("|") == "GET|POST"


def test_alternation_pattern_ignores_case_by_default():
    """The alternation pattern matches whole names in any case."""

    pattern = NameSet("GET", "POST").alternation_pattern()
    assert pattern.match("get")
    assert pattern.match("pOsT")
    assert not pattern.match("GETX")
    assert not pattern.match("PUT")


def test_alternation_pattern_can_be_case_sensitive():
    """Case-sensitive patterns reject other casings."""

    pattern = NameSet("GET").alternation_pattern(case_insensitive=False)
    assert pattern.match("GET")
    assert not pattern.match("get")


def test_alternation_pattern_escapes_metacharacters():
    """Names are matched literally."""

    pattern = NameSet("Content-MD5", "a.b").alternation_pattern()
    assert pattern.match("a.b")
    assert not pattern.match("axb")


def test_recognized_methods_mirror_method_enum():
    """Every enumerated method is a recognized method."""

    assert list(RECOGNIZED_METHODS) == [method.value for method in Method]
    assert RECOGNIZED_METHODS.contains("CONNECT")


def test_recognized_headers_include_entity_and_request_headers():
    """The recognized header set covers the standard names."""

    assert RECOGNIZED_HEADERS.contains("Content-Length")
    assert RECOGNIZED_HEADERS.contains("Host")
    assert RECOGNIZED_HEADERS.contains("Cache-Control")
    assert not RECOGNIZED_HEADERS.contains("X-Custom")
