"""
Pairs - ordered key/value container behind query-like URL components.

Values are either a single string or a list of strings (``key[]`` tokens).
"""

from __future__ import annotations
import logging
from typing import Any, Dict, Iterator, List, Mapping, Optional, Set, Tuple, Union
from urllib.parse import unquote_plus

from urlparts.encoding import Encodable

logger = logging.getLogger(__name__)

Value = Union[str, List[str]]


class InvalidInput(TypeError):
    """A pairs container was built from something other than a string or a mapping."""


def _fold_key(key: str) -> str:
    # form decoding folds "." and " " in the base name to "_"
    key = key.lstrip(" ")
    base, bracket, rest = key.partition("[")
    base = base.replace(".", "_").replace(" ", "_")
    if bracket and "]" not in rest:
        # an unclosed "[" is folded too
        bracket = "_"
    return base + bracket + rest


def parse_form(raw: str) -> Dict[str, Value]:
    """
    Decode ``a=1&b[]=2&b[]=3`` into ``{"a": "1", "b": ["2", "3"]}``.

    Later scalars overwrite earlier ones. Tokens without ``=`` get an empty
    value; tokens with an empty key are dropped.
    """
    data: Dict[str, Value] = {}
    for token in raw.split("&"):
        if not token:
            continue

        k, _, v = token.partition("=")
        k = unquote_plus(k)
        v = unquote_plus(v)

        is_list = k.endswith("[]")
        if is_list:
            k = k[:-2]
        k = _fold_key(k)
        if not k:
            logger.debug("Dropping pair with empty key: %r", token)
            continue

        if is_list:
            current = data.get(k)
            if not isinstance(current, list):
                current = []
                data[k] = current
            current.append(v)
        else:
            data[k] = v

    return data


def _scalar(value: Any) -> str:
    return "" if value is None else str(value)


def _normalize(value: Any) -> Value:
    if isinstance(value, (list, tuple)):
        return [_scalar(v) for v in value]
    return _scalar(value)


class Pairs(Encodable):
    """Ordered key -> value mapping with a string form like ``?a=1&b[]=2``.

    ``separator`` is the leading character of the string form, stripped on
    parse. ``assign_if_empty`` decides whether an empty value still renders
    its ``=``.
    """

    separator: str = ""
    assign_if_empty: bool = False

    def __init__(self, source: Union[str, Mapping[str, Any], "Pairs", None] = None) -> None:
        self._pairs: Dict[str, Value] = {}
        if source is None:
            return

        if isinstance(source, Pairs):
            pairs: Mapping[str, Any] = source.to_dict()
        elif isinstance(source, str):
            pairs = self._parse(source)
        elif isinstance(source, Mapping):
            pairs = source
        else:
            raise InvalidInput(
                f"{type(self).__name__} needs a string or a mapping, got {type(source).__name__}"
            )

        for key, value in pairs.items():
            self.set(key, value)

    @classmethod
    def parse(cls, raw: str) -> "Pairs":
        return cls(raw)

    def _parse(self, raw: str) -> Dict[str, Value]:
        if self.separator and raw.startswith(self.separator):
            raw = raw[len(self.separator):]

        # exact key text before decoding, to undo "." -> "_" folding
        raw_keys: Set[str] = {token.partition("=")[0] for token in raw.split("&")}

        out: Dict[str, Value] = {}
        for key, value in parse_form(raw).items():
            repaired = key.replace("_", ".")
            if repaired != key and repaired in raw_keys:
                logger.debug("Repaired key %r -> %r", key, repaired)
                key = repaired
            out[key] = value
        return out

    # mutation

    def set(self, key: str, value: Any) -> "Pairs":
        self._pairs[str(key)] = _normalize(value)
        return self

    def remove(self, key: str) -> "Pairs":
        self._pairs.pop(key, None)
        return self

    def merge(self, other: Union["Pairs", Mapping[str, Any]]) -> "Pairs":
        if isinstance(other, Pairs):
            other = other.to_dict()
        for key, value in other.items():
            self.set(key, value)
        return self

    # access

    def get(self, key: str, default: Optional[Value] = None) -> Optional[Value]:
        return self._pairs.get(key, default)

    def items(self) -> List[Tuple[str, Value]]:
        return list(self._pairs.items())

    def keys(self) -> List[str]:
        return list(self._pairs)

    def to_dict(self) -> Dict[str, Value]:
        return {k: list(v) if isinstance(v, list) else v for k, v in self._pairs.items()}

    def copy(self) -> "Pairs":
        clone = type(self).__new__(type(self))
        clone.__dict__.update(self.__dict__)
        clone._pairs = self.to_dict()
        return clone

    def __getitem__(self, key: str) -> Optional[Value]:
        return self._pairs.get(key)

    def __setitem__(self, key: str, value: Any) -> None:
        self.set(key, value)

    def __delitem__(self, key: str) -> None:
        self.remove(key)

    def __contains__(self, key: object) -> bool:
        return key in self._pairs

    def __iter__(self) -> Iterator[str]:
        return iter(self._pairs)

    def __len__(self) -> int:
        return len(self._pairs)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Pairs):
            return self._pairs == other._pairs
        if isinstance(other, Mapping):
            return self._pairs == {k: _normalize(v) for k, v in other.items()}
        if isinstance(other, str):
            return str(self) == other
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]

    # string form

    @staticmethod
    def _token(name: str, value: str, force: bool) -> str:
        if value or force:
            return f"{name}={value}"
        return name

    def __str__(self) -> str:
        force = self.assign_if_empty
        tokens: List[str] = []
        for key, value in self._pairs.items():
            name = self.encode(key, is_key=True)
            if isinstance(value, list):
                tokens.extend(self._token(f"{name}[]", self.encode(v), force) for v in value)
            else:
                tokens.append(self._token(name, self.encode(value), force))

        if not tokens:
            return ""
        return self.separator + "&".join(tokens)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._pairs!r})"
