# stlcodec/tokenizer.py
"""
Lexer for ASCII STL.

Tokens are whitespace-delimited runs. Keywords are recognized in any case,
numeric runs are validated and converted to float32, and the rest of the
line after `solid` / `endsolid` becomes a single NAME token (names may
contain spaces). Anything else is a WORD and is left to the parser to
reject.

`Tokenizer` is a re-iterable view over the input: each `iter()` starts a
fresh lazy scan from the first byte.
"""
from __future__ import annotations

import enum
import re
from dataclasses import dataclass
from typing import Iterator, Optional, Union

import numpy as np

from .errors import MalformedNumberError


class TokenKind(enum.Enum):
    SOLID = "solid"
    FACET = "facet"
    NORMAL = "normal"
    OUTER = "outer"
    LOOP = "loop"
    VERTEX = "vertex"
    ENDLOOP = "endloop"
    ENDFACET = "endfacet"
    ENDSOLID = "endsolid"
    NUMBER = "number"
    NAME = "name"
    WORD = "word"


KEYWORDS = {
    k.value.encode("ascii"): k
    for k in TokenKind
    if k not in (TokenKind.NUMBER, TokenKind.NAME, TokenKind.WORD)
}

_RUN = re.compile(rb"\S+")
_NUMBER = re.compile(rb"[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?")
_SPECIAL = re.compile(rb"[+-]?(?:inf|infinity|nan)", re.IGNORECASE)
_NUMBER_START = b"+-.0123456789"
# rest of the current line, leading blanks skipped
_LINE_TAIL = re.compile(rb"[ \t\x0b\x0c]*([^\r\n]*)")
# a name stops short of the first facet/endsolid keyword on its line
_NAME_STOP = re.compile(rb"(?<!\S)(?:facet|endsolid)(?!\S)", re.IGNORECASE)


@dataclass(frozen=True)
class Token:
    kind: TokenKind
    text: str
    offset: int
    line: int
    column: int
    value: Optional[float] = None

    def describe(self) -> str:
        if self.kind is TokenKind.NAME:
            return f"name {self.text!r}"
        return repr(self.text)


def _to_float32(text: bytes) -> np.float32:
    with np.errstate(over="ignore"):
        return np.float32(float(text))


class Tokenizer:
    """Lazy, restartable token stream over an ASCII STL document."""

    def __init__(self, source: Union[bytes, bytearray, memoryview, str]) -> None:
        if isinstance(source, str):
            source = source.encode("utf-8")
        self.source = bytes(source)

    def __iter__(self) -> Iterator[Token]:
        return self._scan()

    def _scan(self) -> Iterator[Token]:
        src = self.source
        line = 1
        line_start = 0
        seen = 0  # newlines counted up to here
        pos = 0

        while True:
            m = _RUN.search(src, pos)
            if m is None:
                return
            start, end = m.span()
            nl = src.count(b"\n", seen, start)
            if nl:
                line += nl
                line_start = src.rfind(b"\n", seen, start) + 1
            seen = start
            column = start - line_start + 1
            raw = m.group()
            pos = end

            kind = KEYWORDS.get(raw.lower())
            if kind is not None:
                yield Token(kind, raw.decode("ascii"), start, line, column)
                if kind in (TokenKind.SOLID, TokenKind.ENDSOLID):
                    tail = _LINE_TAIL.match(src, end)
                    name_start = tail.start(1)
                    stop = _NAME_STOP.search(src, name_start, tail.end(1))
                    name_end = tail.end(1) if stop is None else stop.start()
                    name = src[name_start:name_end].rstrip()
                    if name:
                        yield Token(TokenKind.NAME, name.decode("utf-8", errors="replace"),
                                    name_start, line, name_start - line_start + 1)
                    pos = name_end
                continue

            if raw[0] in _NUMBER_START:
                if _NUMBER.fullmatch(raw) or _SPECIAL.fullmatch(raw):
                    yield Token(TokenKind.NUMBER, raw.decode("ascii"), start, line, column,
                                _to_float32(raw))
                    continue
                raise MalformedNumberError(raw.decode("utf-8", errors="replace"),
                                           offset=start, line=line, column=column)

            if _SPECIAL.fullmatch(raw):
                yield Token(TokenKind.NUMBER, raw.decode("ascii"), start, line, column,
                            _to_float32(raw))
                continue

            yield Token(TokenKind.WORD, raw.decode("utf-8", errors="replace"), start, line, column)


def tokenize(source: Union[bytes, bytearray, memoryview, str]) -> Tokenizer:
    return Tokenizer(source)
