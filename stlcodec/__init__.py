"""
stlcodec: read and write STL triangle meshes, binary and ASCII.

    from stlcodec import decode, encode, Format

    mesh = decode(data)                  # bytes in, either encoding
    text = encode(mesh, Format.ASCII)    # bytes out
"""
import logging

from .ascii import decode_ascii, encode_ascii, format_float
from .binary import decode_binary, encode_binary
from .codec import Format, decode, encode, sniff
from .errors import (
    CountOverflowError,
    DecodeError,
    EncodeError,
    ExpectedEndFacetError,
    ExpectedEndLoopError,
    ExpectedLoopError,
    ExpectedNormalError,
    ExpectedSolidError,
    ExpectedVertexError,
    MalformedNumberError,
    StlError,
    TrailingContentError,
    TruncatedError,
    UnexpectedEofError,
    UnexpectedTokenError,
)
from .geometry import Triangle, Vector3, vec3
from .io import load, save
from .mesh import AsciiHeader, BinaryHeader, Mesh
from .tokenizer import Token, TokenKind, Tokenizer, tokenize

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "0.1.0"
