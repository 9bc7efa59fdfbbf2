from __future__ import annotations
from typing import Optional
from urllib.parse import quote, quote_plus, unquote, unquote_plus

RFC1738 = "rfc1738"  # form style, space -> "+"
RFC3986 = "rfc3986"  # raw style, space -> "%20"
ENCODERS = (RFC1738, RFC3986)

DEFAULT_ENCODER = RFC1738


def encode_component(value: str, encoder: str, safe: str = "") -> str:
    if encoder == RFC3986:
        return quote(value, safe=safe)
    # a literal "+" would read back as a space
    return quote_plus(value, safe=safe.replace("+", ""))


def decode_component(value: str, encoder: str) -> str:
    if encoder == RFC3986:
        return unquote(value)
    return unquote_plus(value)


class Encodable:
    """Mixin for components that percent-encode their pieces on output.

    Subclasses pick a default rule through ``encoder`` and widen the set of
    characters left literal through ``key_safe`` / ``value_safe``.
    """

    encoder: str = DEFAULT_ENCODER
    key_safe: str = ""
    value_safe: str = ""

    def set_encoder(self, encoder: Optional[str]) -> None:
        if encoder is None:
            encoder = type(self).encoder
        if encoder not in ENCODERS:
            raise ValueError(f"Unknown encoder: {encoder!r}")
        self.encoder = encoder

    def encode(self, value: str, is_key: bool = False) -> str:
        safe = self.key_safe if is_key else self.value_safe
        return encode_component(str(value), self.encoder, safe)

    def decode(self, value: str) -> str:
        return decode_component(value, self.encoder)
