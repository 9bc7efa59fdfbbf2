"""Tests for urlparts.components - leaf URL components."""

import pytest

from urlparts.components import AuthInfo, Fragment, Host, Path, Query, Scheme, split_host_port
from urlparts.encoding import RFC1738


class TestScheme:
    def test_lowercased(self):
        assert str(Scheme("HTTPS")) == "https"

    def test_parse_strips_delimiters(self):
        assert Scheme.parse("http://").name == "http"

    def test_equals_string(self):
        assert Scheme("ftp") == "ftp"


class TestAuthInfo:
    def test_user_and_password(self):
        assert str(AuthInfo("user", "p@ss")) == "user:p%40ss@"

    def test_user_only(self):
        assert str(AuthInfo("anon")) == "anon@"

    def test_password_only(self):
        assert str(AuthInfo("", "secret")) == ":secret@"

    def test_empty(self):
        assert str(AuthInfo()) == ""

    def test_parse(self):
        auth = AuthInfo.parse("u%40x:pw@")
        assert auth.user == "u@x"
        assert auth.password == "pw"


class TestHost:
    @pytest.mark.parametrize(
        "raw,name,port",
        [
            ("example.com", "example.com", None),
            ("example.com:8080", "example.com", 8080),
            ("[::1]:8080", "[::1]", 8080),
            ("[::1]", "[::1]", None),
            ("example.com:", "example.com", None),
        ],
    )
    def test_parse(self, raw, name, port):
        host = Host.parse(raw)
        assert host.name == name
        assert host.port == port

    def test_str_with_port(self):
        assert str(Host("example.com", 81)) == "example.com:81"

    def test_non_numeric_port_kept_as_text(self):
        host = Host("example.com", "abc")
        assert host.port == "abc"
        assert str(host) == "example.com:abc"

    def test_set_port(self):
        host = Host("example.com")
        host.set_port("443")
        assert host.port == 443
        host.set_port("")
        assert host.port is None

    def test_copy_is_independent(self):
        host = Host("a.com")
        clone = host.copy()
        clone.name = "b.com"
        assert host.name == "a.com"


class TestSplitHostPort:
    def test_bare_ipv6_without_closing_bracket(self):
        assert split_host_port("[::1") == ("[::1", None)


class TestPath:
    @pytest.mark.parametrize("raw", ["/a/b", "a/b", "/a/b/", "/", "", "a", "//a"])
    def test_str_round_trip(self, raw):
        assert str(Path(raw)) == raw

    def test_leading_slash(self):
        assert Path("/a").has_leading_slash()
        assert not Path("a").has_leading_slash()

    def test_segments_are_decoded(self):
        path = Path("/a%20b/c%2Fd")
        assert path.segments == ["a b", "c/d"]
        assert str(path) == "/a%20b/c%2Fd"

    def test_plus_is_literal(self):
        assert Path("/a+b").segments == ["a+b"]
        assert str(Path("/a+b")) == "/a+b"

    def test_rfc1738_encoder(self):
        path = Path("/a%20b")
        path.set_encoder(RFC1738)
        assert str(path) == "/a+b"

    def test_append(self):
        assert str(Path("/a").append("b c")) == "/a/b%20c"

    def test_copy_is_independent(self):
        path = Path("/a")
        clone = path.copy()
        clone.append("b")
        assert str(path) == "/a"
        assert str(clone) == "/a/b"


class TestQuery:
    def test_leading_question_mark(self):
        q = Query("?a=1")
        assert q["a"] == "1"
        assert str(q) == "?a=1"

    def test_empty_value_keeps_equals(self):
        assert str(Query({"a": ""})) == "?a="

    def test_slash_and_colon_left_literal(self):
        assert str(Query({"next": "/a:b"})) == "?next=/a:b"

    def test_equals_string(self):
        assert Query("a=1") == "?a=1"


class TestFragment:
    def test_bare_anchor(self):
        assert str(Fragment("#top")) == "#top"

    def test_without_hash(self):
        assert str(Fragment("section.2")) == "#section.2"

    def test_empty_value_is_bare_key(self):
        assert str(Fragment({"a": ""})) == "#a"

    def test_route_like_fragment(self):
        assert str(Fragment("/users/1")) == "#/users/1"
