"""Struct tag parsing and mapping key naming.

A struct tag is a Go string literal attached to a field. Its decoded
content is a list of space-separated key:"value" pairs:

  `json:"name,omitempty" db:"user_name"`

  - lookup(tag, "json") -> ("name,omitempty", True)
  - lookup(tag, "xml")  -> ("", False)

Mapping keys are field identifiers with only the first character
lowercased:

  UserID -> userID
  id     -> id
"""

from __future__ import annotations

import re

_SIMPLE_ESCAPES: dict[str, str] = {
    "a": "\a",
    "b": "\b",
    "f": "\f",
    "n": "\n",
    "r": "\r",
    "t": "\t",
    "v": "\v",
    "\\": "\\",
    "'": "'",
    '"': '"',
}

_ESCAPE = re.compile(
    r"\\(?:(?P<simple>[abfnrtv\\'\"])"
    r"|x(?P<hex>[0-9a-fA-F]{2})"
    r"|(?P<oct>[0-7]{3})"
    r"|u(?P<u4>[0-9a-fA-F]{4})"
    r"|U(?P<u8>[0-9a-fA-F]{8}))"
)


def _escape_value(m: re.Match[str], quote: str) -> tuple[int, bool]:
    """Return the value of one escape and whether it is a raw byte."""
    simple = m.group("simple")
    if simple:
        if simple in "'\"" and simple != quote:
            raise ValueError("unknown escape sequence")
        return ord(_SIMPLE_ESCAPES[simple]), False
    if m.group("hex"):
        return int(m.group("hex"), 16), True
    if m.group("oct"):
        value = int(m.group("oct"), 8)
        if value > 0xFF:
            raise ValueError(f"octal escape value > 255: {value}")
        return value, True
    code = int(m.group("u4") or m.group("u8"), 16)
    if code > 0x10FFFF or 0xD800 <= code <= 0xDFFF:
        raise ValueError("escape sequence is invalid Unicode code point")
    return code, False


def _decode_interpreted(body: str) -> str:
    """Decode the inside of a double-quoted Go string literal."""
    out = bytearray()
    i = 0
    while i < len(body):
        ch = body[i]
        if ch == '"' or ch == "\n":
            raise ValueError(f"invalid character {ch!r} in string literal")
        if ch != "\\":
            out += ch.encode("utf-8")
            i += 1
            continue
        m = _ESCAPE.match(body, i)
        if not m:
            raise ValueError("unknown escape sequence")
        value, is_byte = _escape_value(m, '"')
        if is_byte:
            out.append(value)
        else:
            out += chr(value).encode("utf-8")
        i = m.end()
    # \x and octal escapes are raw bytes and may not form valid UTF-8;
    # stray bytes come back as lone surrogates U+DC80..U+DCFF
    return out.decode("utf-8", errors="surrogateescape")


def _decode_rune(body: str) -> str:
    """Decode the inside of a single-quoted Go rune literal."""
    if len(body) == 1 and body not in "'\\\n":
        return body
    m = _ESCAPE.fullmatch(body)
    if not m:
        raise ValueError("illegal rune literal")
    return chr(_escape_value(m, "'")[0])


def unquote(literal: str) -> str:
    """Decode a Go literal: raw (`...`) or interpreted ("...") string, or rune ('.')."""
    if len(literal) < 2 or literal[0] != literal[-1]:
        raise ValueError(f"not a string literal: {literal!r}")
    quote = literal[0]
    body = literal[1:-1]
    if quote == "`":
        if "`" in body:
            raise ValueError("backquote inside raw string literal")
        return body.replace("\r", "")
    if quote == '"':
        return _decode_interpreted(body)
    if quote == "'":
        return _decode_rune(body)
    raise ValueError(f"not a string literal: {literal!r}")


def lookup(tag: str, key: str) -> tuple[str, bool]:
    """Return the value for ``key`` in a decoded struct tag.

    The second element is False when the key is absent. Parsing stops
    silently at the first malformed pair.
    """
    while tag:
        i = 0
        while i < len(tag) and tag[i] == " ":
            i += 1
        tag = tag[i:]
        if not tag:
            break

        # name: printable, non-space, not ':' or '"'
        i = 0
        while i < len(tag) and tag[i] > " " and tag[i] not in ':"\x7f':
            i += 1
        if i == 0 or i + 1 >= len(tag) or tag[i] != ":" or tag[i + 1] != '"':
            break
        name = tag[:i]
        tag = tag[i + 1:]

        i = 1
        while i < len(tag) and tag[i] != '"':
            if tag[i] == "\\":
                i += 1
            i += 1
        if i >= len(tag):
            break
        quoted = tag[:i + 1]
        tag = tag[i + 1:]

        if name == key:
            try:
                return unquote(quoted), True
            except ValueError:
                break
    return "", False


def get(tag: str, key: str) -> str:
    """Return the value for ``key`` in a decoded struct tag, or ''."""
    return lookup(tag, key)[0]


def lower_first(name: str) -> str:
    """Lowercase the first character of an identifier, keep the rest."""
    return name[:1].lower() + name[1:]
