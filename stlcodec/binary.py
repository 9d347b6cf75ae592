# stlcodec/binary.py
"""
Binary STL: an 80-byte header, a little-endian u32 triangle count, then one
50-byte record per triangle:

    offset  size  field
    0       12    normal (3 x f32)
    12      36    vertices (9 x f32)
    48      2     attribute (u16)

Records are (de)serialized in bulk through a packed numpy structured dtype,
so float32 bit patterns are copied, never re-rounded.
"""
from __future__ import annotations

import struct
from typing import Union

import numpy as np

from .errors import CountOverflowError, TruncatedError
from .geometry import Triangle, Vector3
from .mesh import HEADER_SIZE, BinaryHeader, Mesh

COUNT_SIZE = 4
RECORD_SIZE = 50
DATA_OFFSET = HEADER_SIZE + COUNT_SIZE
MAX_COUNT = 0xFFFFFFFF

RECORD_DTYPE = np.dtype([
    ("normal", "<f4", (3,)),
    ("vertices", "<f4", (3, 3)),
    ("attribute", "<u2"),
])

Buffer = Union[bytes, bytearray, memoryview]


def declared_count(data: Buffer) -> int:
    """Triangle count stored at bytes 80..83. The buffer must hold at least 84 bytes."""
    return struct.unpack_from("<I", data, HEADER_SIZE)[0]


def expected_size(count: int) -> int:
    return DATA_OFFSET + count * RECORD_SIZE


def decode_binary(data: Buffer) -> Mesh:
    """Decode a binary STL buffer.

    Raises TruncatedError when the buffer is shorter than the header or than
    the declared number of records. Bytes after the last record are ignored.
    """
    size = len(data)
    if size < DATA_OFFSET:
        raise TruncatedError(
            f"binary STL needs at least {DATA_OFFSET} bytes for header and count, got {size}",
            offset=size, expected=DATA_OFFSET, available=size,
        )

    header = BinaryHeader(bytes(data[:HEADER_SIZE]))
    count = declared_count(data)

    complete = (size - DATA_OFFSET) // RECORD_SIZE
    if complete < count:
        offset = expected_size(complete)
        raise TruncatedError(
            f"record {complete} of {count} needs {RECORD_SIZE} bytes, only {size - offset} remain",
            offset=offset, expected=expected_size(count), available=size,
        )

    triangles = []
    if count:
        records = np.frombuffer(data, dtype=RECORD_DTYPE, count=count, offset=DATA_OFFSET)
        # iterating float32 arrays yields float32 scalars: bit patterns are copied, not widened
        normals = records["normal"].copy()
        vertices = records["vertices"].copy()
        attributes = records["attribute"].tolist()
        triangles = [
            Triangle(Vector3(*n), (Vector3(*v[0]), Vector3(*v[1]), Vector3(*v[2])), a)
            for n, v, a in zip(normals, vertices, attributes)
        ]
    return Mesh(triangles, header)


def encode_binary(mesh: Mesh) -> bytes:
    """Encode a mesh as binary STL.

    The header comes from `mesh.header.as_binary()`, so a mesh decoded from an
    ASCII file gets its solid name as header text.
    """
    count = len(mesh.triangles)
    if count > MAX_COUNT:
        raise CountOverflowError(count)

    records = np.zeros(count, dtype=RECORD_DTYPE)
    if count:
        # float32 components are stored verbatim, so the bits that were read are the bits written
        records["normal"] = np.array([t.normal for t in mesh.triangles], dtype=np.float32)
        records["vertices"] = np.array([t.vertices for t in mesh.triangles], dtype=np.float32)
        records["attribute"] = [t.attribute for t in mesh.triangles]

    out = bytearray()
    out += mesh.header.as_binary()
    out += struct.pack("<I", count)
    out += records.tobytes()
    return bytes(out)
