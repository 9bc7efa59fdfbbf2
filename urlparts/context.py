from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import Any, Mapping, Optional
from urllib.parse import quote

logger = logging.getLogger(__name__)


def _default_port(scheme: str) -> str:
    return "443" if scheme == "https" else "80"


@dataclass
class RequestContext:
    """What the server knows about the request being handled."""

    host: str
    uri: str = "/"
    https: bool = False
    forwarded_proto: Optional[str] = None

    @property
    def scheme(self) -> str:
        if self.https:
            return "https"
        # "https, http" when several proxies are chained
        proto = (self.forwarded_proto or "").split(",", 1)[0].strip().lower()
        if proto == "https":
            logger.debug("Using https from forwarded proto %r", self.forwarded_proto)
            return "https"
        return "http"

    @classmethod
    def from_environ(cls, environ: Mapping[str, Any]) -> "RequestContext":
        """Build from a WSGI environ dict."""
        https = (
            str(environ.get("HTTPS", "")).lower() in ("on", "1", "true")
            or environ.get("wsgi.url_scheme") == "https"
        )

        host = environ.get("HTTP_HOST") or ""
        if not host:
            host = environ.get("SERVER_NAME", "")
            port = str(environ.get("SERVER_PORT", "") or "")
            if port and port != _default_port("https" if https else "http"):
                host = f"{host}:{port}"

        uri = environ.get("REQUEST_URI") or ""
        if not uri:
            # PEP 3333 hands the path over as latin-1 decoded text
            path = environ.get("SCRIPT_NAME", "") + environ.get("PATH_INFO", "")
            uri = quote(path.encode("latin-1"), safe="/:@!$&'()*+,;=") or "/"
            qs = environ.get("QUERY_STRING", "")
            if qs:
                uri += "?" + qs

        return cls(
            host=host,
            uri=uri,
            https=https,
            forwarded_proto=environ.get("HTTP_X_FORWARDED_PROTO"),
        )
