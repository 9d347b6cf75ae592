# stlcodec/codec.py
"""
Format detection and dispatch.

A buffer is treated as ASCII only when, after leading whitespace, it starts
with `solid` followed by whitespace AND its length does not match the
binary layout (84 + 50 * declared count). Binary headers are free text and
often start with "solid", so the prefix alone decides nothing.
"""
from __future__ import annotations

import enum
from typing import Union

from .ascii import decode_ascii, encode_ascii
from .binary import DATA_OFFSET, Buffer, declared_count, decode_binary, encode_binary, expected_size
from .errors import DecodeError
from .mesh import Mesh

_WHITESPACE = b" \t\n\r\x0b\x0c"


class Format(enum.Enum):
    BINARY = "binary"
    ASCII = "ascii"

    @classmethod
    def parse(cls, value: Union["Format", str]) -> "Format":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise ValueError(f"Unknown STL format: {value!r} (use 'binary' or 'ascii')") from None


def _starts_with_solid(data: bytes) -> bool:
    body = data.lstrip(_WHITESPACE)
    return body[:5].lower() == b"solid" and len(body) > 5 and body[5] in _WHITESPACE


def _matches_binary_layout(data: bytes) -> bool:
    return len(data) >= DATA_OFFSET and len(data) == expected_size(declared_count(data))


def sniff(data: Buffer) -> Format:
    data = bytes(data)
    if _starts_with_solid(data) and not _matches_binary_layout(data):
        return Format.ASCII
    return Format.BINARY


def decode(data: Buffer) -> Mesh:
    """Decode an STL buffer of either encoding.

    ASCII-looking input that fails to parse is retried as binary (this
    recovers binary files whose header starts with "solid" and which carry
    trailing bytes). If that fails too, the binary error is raised.
    """
    data = bytes(data)
    if sniff(data) is Format.BINARY:
        return decode_binary(data)
    try:
        return decode_ascii(data)
    except DecodeError as ascii_error:
        try:
            return decode_binary(data)
        except DecodeError as binary_error:
            raise binary_error from ascii_error


def encode(mesh: Mesh, fmt: Union[Format, str] = Format.BINARY) -> bytes:
    fmt = Format.parse(fmt)
    if fmt is Format.ASCII:
        return encode_ascii(mesh).encode("utf-8")
    return encode_binary(mesh)
