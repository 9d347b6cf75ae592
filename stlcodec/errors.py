# stlcodec/errors.py
"""
Exceptions raised by the STL codec.

Decode errors carry the position at which the input stopped making sense:
a byte `offset` for both encodings, plus `line`/`column` for ASCII input
and the parser `state` that rejected it. A failed decode never yields a
partially built mesh.
"""
from __future__ import annotations

from typing import Optional


class StlError(ValueError):
    """Base class for every codec error."""

    kind = "StlError"


class DecodeError(StlError):
    kind = "DecodeError"

    def __init__(
        self,
        message: str,
        *,
        offset: Optional[int] = None,
        line: Optional[int] = None,
        column: Optional[int] = None,
        state: Optional[str] = None,
    ) -> None:
        self.message = message
        self.offset = offset
        self.line = line
        self.column = column
        self.state = state
        super().__init__(self._describe())

    def _describe(self) -> str:
        where = []
        if self.line is not None:
            where.append(f"line {self.line}, column {self.column}")
        if self.offset is not None:
            where.append(f"byte {self.offset}")
        if self.state is not None:
            where.append(f"state {self.state}")
        if not where:
            return f"{self.kind}: {self.message}"
        return f"{self.kind} at {', '.join(where)}: {self.message}"


class TruncatedError(DecodeError):
    """Fewer bytes than the binary layout requires."""

    kind = "Truncated"

    def __init__(self, message: str, *, offset: int, expected: int, available: int) -> None:
        self.expected = expected
        self.available = available
        super().__init__(message, offset=offset)


class MalformedNumberError(DecodeError):
    kind = "MalformedNumber"

    def __init__(self, text: str, *, offset: int, line: int, column: int) -> None:
        self.text = text
        super().__init__(f"malformed numeric literal {text!r}", offset=offset, line=line, column=column)


class UnexpectedTokenError(DecodeError):
    """Grammar violation. Subclasses name the production that was expected."""

    kind = "UnexpectedToken"

    def __init__(self, message: str, *, found: str, offset: int, line: int, column: int,
                 state: str) -> None:
        self.found = found
        super().__init__(message, offset=offset, line=line, column=column, state=state)


class ExpectedSolidError(UnexpectedTokenError):
    kind = "ExpectedSolid"


class ExpectedNormalError(UnexpectedTokenError):
    kind = "ExpectedNormal"


class ExpectedLoopError(UnexpectedTokenError):
    kind = "ExpectedLoop"


class ExpectedVertexError(UnexpectedTokenError):
    kind = "ExpectedVertex"


class ExpectedEndLoopError(UnexpectedTokenError):
    kind = "ExpectedEndLoop"


class ExpectedEndFacetError(UnexpectedTokenError):
    kind = "ExpectedEndFacet"


class UnexpectedEofError(DecodeError):
    """Input ended in the middle of a production."""

    kind = "UnexpectedEof"


class TrailingContentError(DecodeError):
    kind = "TrailingContent"


class EncodeError(StlError):
    kind = "EncodeError"


class CountOverflowError(EncodeError):
    kind = "CountOverflow"

    def __init__(self, count: int) -> None:
        self.count = count
        super().__init__(f"{self.kind}: {count} triangles do not fit the 32-bit count field")
