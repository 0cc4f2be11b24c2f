"""Reader for the Erlang term syntax used by ``.app`` manifests.

Only literal data is supported: atoms, strings, numbers, characters, lists
(improper ones included), tuples, binaries and maps. Each term file holds a
single term terminated by a full stop.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Final

_TOKEN_RE: Final = re.compile(
    r"""
    (?P<skip>\s+|%[^\n]*)
  | (?P<string>"(?:[^"\\]|\\.)*")
  | (?P<quoted_atom>'(?:[^'\\]|\\.)*')
  | (?P<char>\$(?:\\(?:x\{[0-9a-fA-F]+\}|x[0-9a-fA-F]{2}|[0-7]{1,3}|\^.|.)|.))
  | (?P<number>-?\d+\#[0-9a-zA-Z]+|-?\d+\.\d+(?:[eE][+-]?\d+)?|-?\d+)
  | (?P<atom>[a-z][A-Za-z0-9_@]*)
  | (?P<punct><<|>>|=>|[{}\[\],.#|:/-])
    """,
    re.VERBOSE | re.DOTALL,
)

_SIMPLE_ESCAPES: Final[dict[str, str]] = {
    "b": "\b",
    "d": "\x7f",
    "e": "\x1b",
    "f": "\f",
    "n": "\n",
    "r": "\r",
    "s": " ",
    "t": "\t",
    "v": "\v",
}

_ESCAPE_RE: Final = re.compile(r"\\(x\{[0-9a-fA-F]+\}|x[0-9a-fA-F]{2}|[0-7]{1,3}|\^.|.)", re.DOTALL)


class TermSyntaxError(ValueError):
    """Raised when a term file cannot be parsed."""


class Atom(str):
    """An Erlang atom; compares equal to its name."""

    __slots__ = ()

    def __repr__(self) -> str:
        return f"Atom({str.__repr__(self)})"


@dataclass(frozen=True, slots=True)
class ImproperList:
    """A list whose tail is not a list, such as ``[a | b]``."""

    items: tuple[object, ...]
    tail: object


@dataclass(frozen=True, slots=True)
class _Token:
    kind: str
    text: str
    offset: int


def _unescape(body: str) -> str:
    def replace(match: re.Match[str]) -> str:
        escape = match.group(1)
        if escape.startswith("x{"):
            return chr(int(escape[2:-1], 16))
        if escape.startswith("x") and len(escape) == 3:
            return chr(int(escape[1:], 16))
        if escape[0] in "01234567":
            return chr(int(escape, 8))
        if escape.startswith("^"):
            return chr(ord(escape[1]) % 32)
        return _SIMPLE_ESCAPES.get(escape, escape)

    return _ESCAPE_RE.sub(replace, body)


def _number(text: str) -> int | float:
    if "#" in text:
        base, digits = text.split("#", 1)
        sign = -1 if base.startswith("-") else 1
        return sign * int(digits, int(base.lstrip("-")))
    if "." in text:
        return float(text)
    return int(text)


def _tokenize(text: str) -> list[_Token]:
    tokens: list[_Token] = []
    position = 0
    while position < len(text):
        match = _TOKEN_RE.match(text, position)
        if match is None:
            raise TermSyntaxError(f"unexpected character {text[position]!r} at offset {position}")
        kind = match.lastgroup
        if kind is None:  # pragma: no cover - every alternative is named
            raise TermSyntaxError(f"unexpected input at offset {position}")
        if kind != "skip":
            tokens.append(_Token(kind=kind, text=match.group(), offset=position))
        position = match.end()
    return tokens


class _Parser:
    def __init__(self, tokens: list[_Token]) -> None:
        self._tokens = tokens
        self._index = 0

    def _peek(self) -> _Token | None:
        return self._tokens[self._index] if self._index < len(self._tokens) else None

    def _next(self) -> _Token:
        token = self._peek()
        if token is None:
            raise TermSyntaxError("unexpected end of input")
        self._index += 1
        return token

    def _expect(self, text: str) -> None:
        token = self._next()
        if token.kind != "punct" or token.text != text:
            raise TermSyntaxError(f"expected {text!r} at offset {token.offset}, got {token.text!r}")

    def _at(self, text: str) -> bool:
        token = self._peek()
        return token is not None and token.kind == "punct" and token.text == text

    def parse_file(self) -> object:
        term = self.term()
        self._expect(".")
        trailing = self._peek()
        if trailing is not None:
            raise TermSyntaxError(f"unexpected {trailing.text!r} at offset {trailing.offset}")
        return term

    def term(self) -> object:
        token = self._next()
        match token.kind:
            case "atom":
                return Atom(token.text)
            case "quoted_atom":
                return Atom(_unescape(token.text[1:-1]))
            case "string":
                value = _unescape(token.text[1:-1])
                # adjacent string literals are concatenated
                while (following := self._peek()) is not None and following.kind == "string":
                    self._index += 1
                    value += _unescape(following.text[1:-1])
                return value
            case "char":
                return ord(_unescape(token.text[1:]))
            case "number":
                return _number(token.text)
            case "punct":
                return self._compound(token)
            case _:  # pragma: no cover - token kinds are exhaustive
                raise TermSyntaxError(f"unexpected {token.text!r} at offset {token.offset}")

    def _compound(self, token: _Token) -> object:
        match token.text:
            case "{":
                return tuple(self._sequence("}"))
            case "[":
                return self._list()
            case "<<":
                return self._binary()
            case "#":
                self._expect("{")
                return self._map()
            case _:
                raise TermSyntaxError(f"unexpected {token.text!r} at offset {token.offset}")

    def _sequence(self, closing: str) -> list[object]:
        items: list[object] = []
        if self._at(closing):
            self._index += 1
            return items
        while True:
            items.append(self.term())
            if self._at(","):
                self._index += 1
                continue
            self._expect(closing)
            return items

    def _list(self) -> list[object] | ImproperList:
        items: list[object] = []
        if self._at("]"):
            self._index += 1
            return items
        while True:
            items.append(self.term())
            if self._at(","):
                self._index += 1
                continue
            if self._at("|"):
                self._index += 1
                tail = self.term()
                self._expect("]")
                if isinstance(tail, list):
                    return [*items, *tail]
                if isinstance(tail, ImproperList):
                    return ImproperList((*items, *tail.items), tail.tail)
                return ImproperList(tuple(items), tail)
            self._expect("]")
            return items

    def _binary(self) -> str | bytes:
        """Read ``<<...>>``; text-only binaries that are valid UTF-8 become ``str``."""

        data = bytearray()
        textual = True
        if self._at(">>"):
            self._index += 1
            return ""
        while True:
            value = self.term()
            size = self._segment_size()
            kinds = self._segment_types()
            # UTF-16 and UTF-32 segments stay raw bytes
            textual = textual and isinstance(value, str) and kinds.isdisjoint(_WIDE_ENCODINGS)
            data += _encode_segment(value, size, kinds)
            if self._at(","):
                self._index += 1
                continue
            self._expect(">>")
            break
        if textual:
            try:
                return data.decode("utf-8")
            except UnicodeDecodeError:
                pass
        return bytes(data)

    def _segment_size(self) -> int | None:
        if not self._at(":"):
            return None
        self._index += 1
        token = self._next()
        if token.kind != "number" or not token.text.isdigit():
            raise TermSyntaxError(f"expected segment size at offset {token.offset}")
        return int(token.text)

    def _segment_types(self) -> frozenset[str]:
        if not self._at("/"):
            return frozenset()
        self._index += 1
        kinds: list[str] = []
        while True:
            token = self._next()
            if token.kind != "atom":
                raise TermSyntaxError(f"expected segment type at offset {token.offset}")
            kinds.append(token.text)
            if not self._at("-"):
                return frozenset(kinds)
            self._index += 1

    def _map(self) -> dict[object, object]:
        entries: dict[object, object] = {}
        if self._at("}"):
            self._index += 1
            return entries
        while True:
            key = self.term()
            self._expect("=>")
            entries[_hashable(key)] = self.term()
            if self._at(","):
                self._index += 1
                continue
            self._expect("}")
            return entries


_TEXT_ENCODINGS: Final[dict[str, str]] = {
    "utf8": "utf-8",
    "utf16": "utf-16-be",
    "utf32": "utf-32-be",
}
_SEGMENT_MODIFIERS: Final = frozenset({"big", "signed", "unsigned", "integer", "binary", "bytes"})
_WIDE_ENCODINGS: Final = frozenset({"utf16", "utf32"})


def _encode_segment(value: object, size: int | None, kinds: frozenset[str]) -> bytes:
    encodings = [_TEXT_ENCODINGS[kind] for kind in kinds if kind in _TEXT_ENCODINGS]
    unsupported = kinds - _SEGMENT_MODIFIERS - frozenset(_TEXT_ENCODINGS)
    if unsupported or len(encodings) > 1:
        raise TermSyntaxError(f"unsupported binary segment type {'-'.join(sorted(kinds))}")
    if isinstance(value, str):
        if encodings:
            return value.encode(encodings[0])
        # without a type each character is one byte
        return bytes(ord(char) & 0xFF for char in value)
    if isinstance(value, bytes) and size is None:
        return value
    if isinstance(value, int):
        if encodings:
            return chr(value).encode(encodings[0])
        bits = 8 if size is None else size
        if bits % 8:
            raise TermSyntaxError(f"unsupported segment size {bits}")
        length = bits // 8
        return (value % (1 << bits)).to_bytes(length, "big") if length else b""
    raise TermSyntaxError(f"unsupported binary segment {value!r}")


def _hashable(value: object) -> object:
    if isinstance(value, list):
        return tuple(_hashable(item) for item in value)
    if isinstance(value, dict):
        raise TermSyntaxError("map keys must not be maps")
    return value


def parse_term(text: str) -> object:
    """Parse a file containing exactly one term ending in ``.``."""

    return _Parser(_tokenize(text)).parse_file()


__all__ = ["Atom", "ImproperList", "TermSyntaxError", "parse_term"]
