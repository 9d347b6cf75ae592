# stlcodec/ascii.py
"""
ASCII STL reader and writer.

Reading is a single pass over the token stream driven by an explicit state
table:

    START        solid [name]              -> HEADER         (ExpectedSolid)
    HEADER       facet | endsolid [name]   -> FACET_NORMAL / DONE (UnexpectedToken)
    FACET_NORMAL normal nx ny nz           -> OUTER_LOOP     (ExpectedNormal)
    OUTER_LOOP   outer loop                -> VERTEX         (ExpectedLoop)
    VERTEX       vertex x y z  (x3)        -> END_LOOP       (ExpectedVertex)
    END_LOOP     endloop                   -> END_FACET      (ExpectedEndLoop)
    END_FACET    endfacet                  -> HEADER         (ExpectedEndFacet)
    DONE         end of input                                (TrailingContent)

The first violation stops the parse. Running out of tokens anywhere but in
DONE raises UnexpectedEofError.

Writing uses one space of indentation per nesting level and formats every
number with `format_float` (shortest float32 round-trip form), so
encode -> decode -> encode is byte-stable:

    solid cube
     facet normal 0 0 1
      outer loop
       vertex 0 0 0
       vertex 1 0 0
       vertex 0 1 0
      endloop
     endfacet
    endsolid cube
"""
from __future__ import annotations

import enum
from typing import Callable, Dict, Iterator, List, Optional, Type, Union

import numpy as np

from .errors import (
    ExpectedEndFacetError,
    ExpectedEndLoopError,
    ExpectedLoopError,
    ExpectedNormalError,
    ExpectedSolidError,
    ExpectedVertexError,
    TrailingContentError,
    UnexpectedEofError,
    UnexpectedTokenError,
)
from .geometry import Triangle, Vector3
from .mesh import AsciiHeader, Mesh
from .tokenizer import Token, TokenKind, Tokenizer

Text = Union[str, bytes, bytearray, memoryview]


class State(enum.Enum):
    START = "Start"
    HEADER = "Header"
    FACET_NORMAL = "FacetNormal"
    OUTER_LOOP = "OuterLoop"
    VERTEX = "Vertex"
    END_LOOP = "EndLoop"
    END_FACET = "EndFacet"
    DONE = "Done"


# ---------------
# Number format
# ---------------

def format_float(value: float) -> str:
    """Shortest decimal string that reads back as the same float32.

    Positional for zero and 1e-4 <= |v| < 1e16, scientific otherwise;
    trailing zeros and a bare trailing point are dropped ("1", "0.5",
    "1e+20", "-0"). Non-finite values print as nan / inf / -inf.
    """
    f = np.float32(value)
    if not np.isfinite(f):
        if np.isnan(f):
            return "nan"
        return "inf" if f > 0 else "-inf"
    a = abs(float(f))
    if a == 0.0 or 1e-4 <= a < 1e16:
        return np.format_float_positional(f, unique=True, trim="-")
    return np.format_float_scientific(f, unique=True, trim="-")


def _format_vec(v: Vector3) -> str:
    return " ".join(format_float(c) for c in v)


# ---------------
# Parser
# ---------------

class _Parser:
    """One-shot state machine over a token stream."""

    def __init__(self, tokenizer: Tokenizer) -> None:
        self.source = tokenizer.source
        self.tokens: Iterator[Token] = iter(tokenizer)
        self.state = State.START
        self.name = ""
        self.triangles: List[Triangle] = []
        # facet under construction
        self.normal: Optional[Vector3] = None
        self.vertices: List[Vector3] = []

        self.handlers: Dict[State, Callable[[Token], State]] = {
            State.START: self._start,
            State.HEADER: self._header,
            State.FACET_NORMAL: self._facet_normal,
            State.OUTER_LOOP: self._outer_loop,
            State.VERTEX: self._vertex,
            State.END_LOOP: self._end_loop,
            State.END_FACET: self._end_facet,
            State.DONE: self._done,
        }

    def run(self) -> Mesh:
        for tok in self.tokens:
            self.state = self.handlers[self.state](tok)
        if self.state is not State.DONE:
            self._eof()
        return Mesh(self.triangles, AsciiHeader(self.name))

    # ---- helpers ----
    def _next(self) -> Token:
        tok = next(self.tokens, None)
        if tok is None:
            self._eof()
        return tok

    def _eof(self) -> None:
        src = self.source
        end = len(src)
        raise UnexpectedEofError(f"input ended while parsing ({self._production()})",
                                 offset=end, line=src.count(b"\n") + 1,
                                 column=end - (src.rfind(b"\n") + 1) + 1,
                                 state=self.state.value)

    def _production(self) -> str:
        if self.state is State.VERTEX:
            return f"vertex {len(self.vertices) + 1} of 3"
        return self.state.value

    def _fail(self, cls: Type[UnexpectedTokenError], expected: str, tok: Token) -> UnexpectedTokenError:
        state = self.state.value
        if self.state is State.VERTEX:
            state = f"Vertex({len(self.vertices) + 1})"
        return cls(f"expected {expected}, found {tok.describe()}", found=tok.text,
                   offset=tok.offset, line=tok.line, column=tok.column, state=state)

    def _expect(self, kind: TokenKind, cls: Type[UnexpectedTokenError], expected: str,
                tok: Optional[Token] = None) -> Token:
        if tok is None:
            tok = self._next()
        if tok.kind is not kind:
            raise self._fail(cls, expected, tok)
        return tok

    def _triple(self, cls: Type[UnexpectedTokenError], expected: str) -> Vector3:
        values = []
        for _ in range(3):
            tok = self._expect(TokenKind.NUMBER, cls, expected)
            values.append(tok.value)
        return Vector3(*values)

    # ---- transitions ----
    def _start(self, tok: Token) -> State:
        self._expect(TokenKind.SOLID, ExpectedSolidError, "'solid'", tok)
        return State.HEADER

    def _header(self, tok: Token) -> State:
        # NAME only ever directly follows `solid`
        if tok.kind is TokenKind.NAME:
            self.name = tok.text
            return State.HEADER
        if tok.kind is TokenKind.FACET:
            return State.FACET_NORMAL
        if tok.kind is TokenKind.ENDSOLID:
            return State.DONE
        raise self._fail(UnexpectedTokenError, "'facet' or 'endsolid'", tok)

    def _facet_normal(self, tok: Token) -> State:
        self._expect(TokenKind.NORMAL, ExpectedNormalError, "'normal'", tok)
        self.normal = self._triple(ExpectedNormalError, "normal component")
        return State.OUTER_LOOP

    def _outer_loop(self, tok: Token) -> State:
        self._expect(TokenKind.OUTER, ExpectedLoopError, "'outer loop'", tok)
        self._expect(TokenKind.LOOP, ExpectedLoopError, "'loop'")
        self.vertices = []
        return State.VERTEX

    def _vertex(self, tok: Token) -> State:
        self._expect(TokenKind.VERTEX, ExpectedVertexError, "'vertex'", tok)
        self.vertices.append(self._triple(ExpectedVertexError, "vertex coordinate"))
        if len(self.vertices) < 3:
            return State.VERTEX
        return State.END_LOOP

    def _end_loop(self, tok: Token) -> State:
        self._expect(TokenKind.ENDLOOP, ExpectedEndLoopError, "'endloop'", tok)
        return State.END_FACET

    def _end_facet(self, tok: Token) -> State:
        self._expect(TokenKind.ENDFACET, ExpectedEndFacetError, "'endfacet'", tok)
        self.triangles.append(Triangle(self.normal, tuple(self.vertices)))
        self.normal = None
        self.vertices = []
        return State.HEADER

    def _done(self, tok: Token) -> State:
        if tok.kind is TokenKind.NAME:
            return State.DONE
        raise TrailingContentError(f"unexpected {tok.describe()} after 'endsolid'",
                                   offset=tok.offset, line=tok.line, column=tok.column,
                                   state=State.DONE.value)


def decode_ascii(text: Text) -> Mesh:
    """Parse an ASCII STL document (str or bytes) into a Mesh."""
    return _Parser(Tokenizer(text)).run()


# ---------------
# Writer
# ---------------

def encode_ascii(mesh: Mesh) -> str:
    name = mesh.header.as_name()
    head = f"solid {name}" if name else "solid"
    tail = f"endsolid {name}" if name else "endsolid"

    lines = [head]
    for t in mesh.triangles:
        lines.append(f" facet normal {_format_vec(t.normal)}")
        lines.append("  outer loop")
        for v in t.vertices:
            lines.append(f"   vertex {_format_vec(v)}")
        lines.append("  endloop")
        lines.append(" endfacet")
    lines.append(tail)
    return "\n".join(lines) + "\n"
