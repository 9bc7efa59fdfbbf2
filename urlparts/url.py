from __future__ import annotations
import logging
import re
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Mapping, Optional, Tuple, Union
from urllib.parse import SplitResult, unquote, urlsplit

from urlparts.components import AuthInfo, Fragment, Host, Path, Query, Scheme, split_host_port
from urlparts.encoding import ENCODERS

if TYPE_CHECKING:
    from urlparts.context import RequestContext

logger = logging.getLogger(__name__)

# generic scheme://authority/path?query#fragment split, brackets not checked
URL_RE = re.compile(r"^(?:([^:/?#]+):)?(?://([^/?#]*))?([^?#]*)(?:\?([^#]*))?(?:#(.*))?$", re.S)


@dataclass
class UrlParts:
    scheme: Optional[str] = None
    user: Optional[str] = None
    password: Optional[str] = None
    host: Optional[str] = None
    port: Optional[str] = None
    path: Optional[str] = None
    query: Optional[str] = None
    fragment: Optional[str] = None


def _urlsplit(raw: str) -> SplitResult:
    try:
        return urlsplit(raw)
    except ValueError:
        # bad brackets in the host, keep it as text
        logger.debug("Splitting %r by hand", raw)
        m = URL_RE.match(raw)
        scheme, netloc, path, query, fragment = (g or "" for g in m.groups())
        return SplitResult(scheme.lower(), netloc, path, query, fragment)


def split_url(raw: str) -> UrlParts:
    """Split a URL string into its raw pieces; missing pieces are None."""
    p = _urlsplit(raw)
    parts = UrlParts(
        scheme=p.scheme or None,
        path=p.path or None,
        query=p.query or None,
        fragment=p.fragment or None,
    )

    if p.netloc:
        userinfo, at, hostport = p.netloc.rpartition("@")
        if at:
            user, colon, password = userinfo.partition(":")
            parts.user = unquote(user)
            parts.password = unquote(password) if colon else None
        host, port = split_host_port(hostport)
        parts.host = host or None
        parts.port = port

    return parts


class Url:
    """
    A URL held as six optional component slots.

    Reading a slot through its property creates an empty component on first
    access and keeps it, so ``url.query["a"] = "1"`` sticks. The string form
    is rebuilt from the slots every time.
    """

    def __init__(self, url: Optional[str] = None) -> None:
        self._scheme: Optional[Scheme] = None
        self._auth_info: Optional[AuthInfo] = None
        self._host: Optional[Host] = None
        self._path: Optional[Path] = None
        self._query: Optional[Query] = None
        self._fragment: Optional[Fragment] = None
        self._schemeless = False
        self._encoder: Optional[str] = None

        if url:
            self._load(url)

    @classmethod
    def parse(cls, raw: str) -> "Url":
        return cls(raw)

    def _load(self, url: str) -> None:
        parts = split_url(url)

        if parts.scheme is not None:
            self.set_scheme(Scheme(parts.scheme))
        elif url.startswith("//"):
            self.make_schemeless()

        if parts.user is not None or parts.password is not None:
            self.set_auth_info(AuthInfo(parts.user or "", parts.password or ""))

        if parts.host is not None:
            self.set_host(Host(parts.host, parts.port))

        if parts.path is not None:
            self.set_path(Path(parts.path))

        if parts.query is not None:
            self.set_query(Query(parts.query))

        if parts.fragment is not None:
            self.set_fragment(Fragment(parts.fragment))

    # schemeless mode

    def make_schemeless(self) -> "Url":
        self._schemeless = True
        return self

    @property
    def is_schemeless(self) -> bool:
        return self._schemeless

    # setters

    def set_scheme(self, scheme: Union[Scheme, str, None]) -> "Url":
        if scheme is not None and not isinstance(scheme, Scheme):
            scheme = Scheme.parse(scheme)
        self._scheme = scheme
        self._schemeless = scheme is None or not str(scheme)
        return self

    def set_auth_info(self, auth_info: Union[AuthInfo, str, Tuple[str, str], None]) -> "Url":
        if isinstance(auth_info, tuple):
            auth_info = AuthInfo(*auth_info)
        elif isinstance(auth_info, str):
            auth_info = AuthInfo.parse(auth_info)
        self._auth_info = auth_info
        return self

    def set_host(self, host: Union[Host, str, None]) -> "Url":
        if isinstance(host, str):
            host = Host.parse(host)
        self._host = host
        return self

    def set_path(self, path: Union[Path, str, None]) -> "Url":
        if isinstance(path, str):
            path = Path(path)
        self._path = self._adopt(path)
        return self

    def set_query(self, query: Union[Query, str, Mapping[str, Any], None]) -> "Url":
        if query is not None and not isinstance(query, Query):
            query = Query(query)
        self._query = self._adopt(query)
        return self

    def set_fragment(self, fragment: Union[Fragment, str, Mapping[str, Any], None]) -> "Url":
        if fragment is not None and not isinstance(fragment, Fragment):
            fragment = Fragment(fragment)
        self._fragment = fragment
        return self

    def set_encoder(self, encoder: Optional[str]) -> "Url":
        """Use ``encoder`` for the query and path, now and for later slots."""
        if encoder is not None and encoder not in ENCODERS:
            raise ValueError(f"Unknown encoder: {encoder!r}")
        self._encoder = encoder
        for component in (self._query, self._path):
            if component is not None:
                component.set_encoder(encoder)
        return self

    def _adopt(self, component):
        if component is not None and self._encoder is not None:
            component.set_encoder(self._encoder)
        return component

    def set_uri(self, uri: str) -> "Url":
        """Replace the path, query and fragment, keeping scheme, auth and host."""
        parts = split_url(uri)
        if parts.path is not None:
            self.set_path(parts.path)
        if parts.query is not None:
            self.set_query(parts.query)
        if parts.fragment is not None:
            self.set_fragment(parts.fragment)
        return self

    # getters, created on first access

    @property
    def scheme(self) -> Scheme:
        if self._scheme is None:
            self._scheme = Scheme()
        return self._scheme

    @scheme.setter
    def scheme(self, value: Union[Scheme, str, None]) -> None:
        self.set_scheme(value)

    @property
    def auth_info(self) -> AuthInfo:
        if self._auth_info is None:
            self._auth_info = AuthInfo()
        return self._auth_info

    @auth_info.setter
    def auth_info(self, value: Union[AuthInfo, str, Tuple[str, str], None]) -> None:
        self.set_auth_info(value)

    @property
    def host(self) -> Host:
        if self._host is None:
            self._host = Host()
        return self._host

    @host.setter
    def host(self, value: Union[Host, str, None]) -> None:
        self.set_host(value)

    @property
    def path(self) -> Path:
        if self._path is None:
            self._path = self._adopt(Path())
        return self._path

    @path.setter
    def path(self, value: Union[Path, str, None]) -> None:
        self.set_path(value)

    @property
    def query(self) -> Query:
        if self._query is None:
            self._query = self._adopt(Query())
        return self._query

    @query.setter
    def query(self, value: Union[Query, str, Mapping[str, Any], None]) -> None:
        self.set_query(value)

    @property
    def fragment(self) -> Fragment:
        if self._fragment is None:
            self._fragment = Fragment()
        return self._fragment

    @fragment.setter
    def fragment(self, value: Union[Fragment, str, Mapping[str, Any], None]) -> None:
        self.set_fragment(value)

    # copying

    def copy(self) -> "Url":
        clone = type(self)()
        clone._schemeless = self._schemeless
        clone._encoder = self._encoder
        for attr in ("_scheme", "_auth_info", "_host", "_path", "_query", "_fragment"):
            component = getattr(self, attr)
            setattr(clone, attr, None if component is None else component.copy())
        return clone

    def __copy__(self) -> "Url":
        return self.copy()

    def __deepcopy__(self, memo: dict) -> "Url":
        return self.copy()

    # string form

    def to_string(self) -> str:
        out = []
        has_host = self._host is not None

        if has_host:
            if self._schemeless:
                out.append("//")
            elif self._scheme is not None and str(self._scheme):
                out.append(f"{self._scheme}://")

        if self._auth_info is not None:
            out.append(str(self._auth_info))

        if has_host:
            out.append(str(self._host))

        if self._path is not None:
            path = str(self._path)
            if has_host and not self._path.has_leading_slash():
                out.append("/")
            out.append(path)

        if self._query is not None:
            out.append(str(self._query))

        if self._fragment is not None:
            out.append(str(self._fragment))

        return "".join(out)

    __str__ = to_string

    def equals(self, other: object) -> bool:
        return self.to_string() == str(other)

    def __eq__(self, other: object) -> bool:
        return self.equals(other)

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Url({self.to_string()!r})"

    @classmethod
    def current(cls, context: "RequestContext") -> "Url":
        """Build the URL of the request described by ``context``."""
        url = cls(context.uri)
        url.set_host(context.host)
        url.set_scheme(context.scheme)
        logger.debug("Current URL %s (scheme from context: %s)", url, context.scheme)
        return url
