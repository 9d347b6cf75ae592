"""Shared test helpers that do not depend on the codec."""
import struct
from typing import Iterable, Sequence, Tuple

Vec = Tuple[float, float, float]


def pack_binary_stl(header: bytes, triangles: Iterable[Tuple[Vec, Sequence[Vec], int]],
                    count: int = None) -> bytes:
    """Build a binary STL by hand, independent of the codec."""
    triangles = list(triangles)
    data = bytearray()
    data.extend(header.ljust(80, b"\0"))
    data.extend(struct.pack("<I", len(triangles) if count is None else count))
    for normal, verts, attr in triangles:
        data.extend(struct.pack("<3f", *normal))
        for v in verts:
            data.extend(struct.pack("<3f", *v))
        data.extend(struct.pack("<H", attr))
    return bytes(data)
