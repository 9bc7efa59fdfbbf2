"""Tests for urlparts.context - request context."""

import pytest

from urlparts.context import RequestContext
from urlparts.url import Url


class TestScheme:
    """Test scheme selection priority."""

    def test_default_http(self):
        assert RequestContext(host="example.com").scheme == "http"

    def test_https_flag_wins(self):
        ctx = RequestContext(host="example.com", https=True, forwarded_proto="http")
        assert ctx.scheme == "https"

    @pytest.mark.parametrize("proto", ["https", "HTTPS", "https, http", " https "])
    def test_forwarded_https(self, proto):
        assert RequestContext(host="example.com", forwarded_proto=proto).scheme == "https"

    def test_forwarded_http(self):
        assert RequestContext(host="example.com", forwarded_proto="http").scheme == "http"


class TestFromEnviron:
    """Test building from a WSGI environ."""

    def test_request_uri_and_host(self):
        ctx = RequestContext.from_environ(
            {"HTTP_HOST": "example.com", "REQUEST_URI": "/a?b=1", "HTTPS": "on"}
        )
        assert ctx.host == "example.com"
        assert ctx.uri == "/a?b=1"
        assert ctx.https is True

    def test_fallback_to_server_name_and_path_info(self):
        ctx = RequestContext.from_environ(
            {
                "SERVER_NAME": "example.com",
                "SERVER_PORT": "8080",
                "PATH_INFO": "/a b",
                "QUERY_STRING": "x=1",
                "wsgi.url_scheme": "http",
            }
        )
        assert ctx.host == "example.com:8080"
        assert ctx.uri == "/a%20b?x=1"
        assert ctx.https is False

    def test_default_port_dropped(self):
        ctx = RequestContext.from_environ({"SERVER_NAME": "example.com", "SERVER_PORT": "443", "wsgi.url_scheme": "https"})
        assert ctx.host == "example.com"
        assert ctx.uri == "/"
        assert ctx.https is True

    def test_forwarded_header(self):
        ctx = RequestContext.from_environ(
            {"HTTP_HOST": "example.com", "HTTP_X_FORWARDED_PROTO": "https"}
        )
        assert ctx.forwarded_proto == "https"
        assert ctx.scheme == "https"

    def test_current_url_from_environ(self):
        environ = {
            "HTTP_HOST": "example.com",
            "SCRIPT_NAME": "/app",
            "PATH_INFO": "/users/1",
            "QUERY_STRING": "tab=posts",
        }
        url = Url.current(RequestContext.from_environ(environ))
        assert str(url) == "http://example.com/app/users/1?tab=posts"
