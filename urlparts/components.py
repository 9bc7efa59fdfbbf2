from __future__ import annotations
from dataclasses import dataclass, replace
from typing import List, Optional, Tuple, Union
from urllib.parse import quote, unquote

from urlparts.encoding import RFC3986, Encodable
from urlparts.pairs import Pairs


def split_host_port(hostport: str) -> Tuple[str, Optional[str]]:
    # "[::1]:8080" keeps its brackets
    if hostport.startswith("["):
        end = hostport.find("]")
        if end == -1:
            return hostport, None
        host, rest = hostport[: end + 1], hostport[end + 1 :]
        if rest.startswith(":") and len(rest) > 1:
            return host, rest[1:]
        return host, None

    host, colon, port = hostport.rpartition(":")
    if not colon:
        return hostport, None
    return host, port or None


class Component:
    """Shared behaviour: equality is string equality."""

    def __eq__(self, other: object) -> bool:
        if isinstance(other, (Component, str)):
            return str(self) == str(other)
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]


@dataclass(eq=False)
class Scheme(Component):
    name: str = ""

    def __post_init__(self) -> None:
        self.name = (self.name or "").lower()

    @classmethod
    def parse(cls, raw: str) -> "Scheme":
        return cls(raw.rstrip(":/"))

    def copy(self) -> "Scheme":
        return replace(self)

    def __str__(self) -> str:
        return self.name


@dataclass(eq=False)
class AuthInfo(Component):
    user: str = ""
    password: str = ""

    def __post_init__(self) -> None:
        self.user = self.user or ""
        self.password = self.password or ""

    @classmethod
    def parse(cls, raw: str) -> "AuthInfo":
        raw = raw[:-1] if raw.endswith("@") else raw
        user, _, password = raw.partition(":")
        return cls(unquote(user), unquote(password))

    def copy(self) -> "AuthInfo":
        return replace(self)

    def __str__(self) -> str:
        if not self.user and not self.password:
            return ""
        out = quote(self.user, safe="")
        if self.password:
            out += ":" + quote(self.password, safe="")
        return out + "@"


@dataclass(eq=False)
class Host(Component):
    name: str = ""
    port: Optional[Union[int, str]] = None

    def __post_init__(self) -> None:
        self.name = self.name or ""
        self.set_port(self.port)

    @classmethod
    def parse(cls, raw: str) -> "Host":
        name, port = split_host_port(raw)
        return cls(name, port)

    def set_port(self, port: Optional[Union[int, str]]) -> None:
        if port is None or port == "":
            self.port = None
        elif isinstance(port, int) or str(port).isdigit():
            self.port = int(port)
        else:
            # not a number, kept as opaque text
            self.port = str(port)

    def copy(self) -> "Host":
        return replace(self)

    def __str__(self) -> str:
        if self.port is None:
            return self.name
        return f"{self.name}:{self.port}"


class Path(Encodable, Component):
    """Slash-separated path, stored as decoded segments."""

    encoder = RFC3986
    value_safe = "!$&'()*+,;=:@"

    def __init__(self, path: str = "") -> None:
        self.segments: List[str] = []
        self.leading_slash = False
        self.trailing_slash = False
        self.load(path)

    @classmethod
    def parse(cls, raw: str) -> "Path":
        return cls(raw)

    def load(self, path: str) -> None:
        path = path or ""
        segs = path.split("/") if path else []
        self.leading_slash = path.startswith("/")
        if self.leading_slash:
            segs = segs[1:]
        self.trailing_slash = bool(segs) and segs[-1] == "" and path != "/"
        if segs and segs[-1] == "":
            segs = segs[:-1]
        self.segments = [self.decode(s) for s in segs]

    def has_leading_slash(self) -> bool:
        return self.leading_slash

    def append(self, segment: str) -> "Path":
        self.segments.append(segment)
        return self

    def copy(self) -> "Path":
        clone = Path()
        clone.__dict__.update(self.__dict__)
        clone.segments = list(self.segments)
        return clone

    def __str__(self) -> str:
        body = "/".join(self.encode(s) for s in self.segments)
        out = ("/" if self.leading_slash else "") + body
        if self.trailing_slash and body:
            out += "/"
        return out

    def __repr__(self) -> str:
        return f"Path({str(self)!r})"


class Query(Pairs, Component):
    """``?a=1&b[]=2`` - form encoded, empty values keep their ``=``."""

    separator = "?"
    assign_if_empty = True
    value_safe = "/:"


class Fragment(Pairs, Component):
    """``#key`` or ``#a=1&b=2`` - empty values render as the bare key."""

    encoder = RFC3986
    separator = "#"
    assign_if_empty = False
    key_safe = "/?:@!$'()*,;"
    value_safe = "/?:@!$'()*,;="
