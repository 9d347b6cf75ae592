# stlcodec/mesh.py
"""
Mesh container and the two header flavours.

A binary STL opens with 80 opaque bytes, an ASCII STL with a free-text name
on the `solid` line. `Mesh` keeps whichever one it was decoded with, so a
same-format round trip reproduces it exactly.
"""
from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Iterator, List, Optional, Sequence, Tuple, Union

from .geometry import Triangle, Vector3, vec3

HEADER_SIZE = 80

Range = Tuple[float, float]


# ------------
# Header info
# ------------

_NAME_STOP = re.compile(r"(?<![^ \t\n\r\x0b\x0c])(?:facet|endsolid)(?![^ \t\n\r\x0b\x0c])", re.IGNORECASE)


def _clean_name(name: str) -> str:
    # A name has to live on the `solid` line and ends before any facet/endsolid word.
    name = name.replace("\r", " ").replace("\n", " ")
    stop = _NAME_STOP.search(name)
    if stop is not None:
        name = name[:stop.start()]
    return name.strip(" \t\x0b\x0c")


@dataclass(frozen=True)
class BinaryHeader:
    """The opaque 80-byte block at the start of a binary STL."""

    data: bytes = bytes(HEADER_SIZE)

    def __post_init__(self) -> None:
        data = bytes(self.data)
        if len(data) > HEADER_SIZE:
            raise ValueError(f"binary header is limited to {HEADER_SIZE} bytes (got {len(data)})")
        object.__setattr__(self, "data", data.ljust(HEADER_SIZE, b"\0"))

    @classmethod
    def from_text(cls, text: str) -> "BinaryHeader":
        return cls(text.encode("utf-8")[:HEADER_SIZE])

    def as_binary(self) -> bytes:
        return self.data

    def as_name(self) -> str:
        return _clean_name(self.data.decode("utf-8", errors="replace").rstrip("\0"))


@dataclass(frozen=True)
class AsciiHeader:
    """The name following `solid` in an ASCII STL."""

    name: str = ""

    def __post_init__(self) -> None:
        object.__setattr__(self, "name", _clean_name(self.name))

    def as_binary(self) -> bytes:
        return BinaryHeader.from_text(self.name).data

    def as_name(self) -> str:
        return self.name


HeaderInfo = Union[BinaryHeader, AsciiHeader]


# --------------
# Mesh container
# --------------

@dataclass
class Mesh:
    """Header plus triangles in file order.

    The header records which encoding the mesh came from; encoding to the
    other format converts it (the 80-byte block becomes a name and back),
    which is the only information lost in a cross-format round trip.
    """

    triangles: List[Triangle] = field(default_factory=list)
    header: HeaderInfo = field(default_factory=AsciiHeader)

    @property
    def name(self) -> str:
        return self.header.as_name()

    def __len__(self) -> int:
        return len(self.triangles)

    def __iter__(self) -> Iterator[Triangle]:
        return iter(self.triangles)

    def append(self, triangle: Triangle) -> "Mesh":
        self.triangles.append(triangle)
        return self

    def copy(self) -> "Mesh":
        return Mesh(self.triangles.copy(), self.header)

    # ---- composition ----
    def merge(self, other: "Mesh") -> "Mesh":
        self.triangles.extend(other.triangles)
        return self

    def __add__(self, other: "Mesh") -> "Mesh":
        return self.copy().merge(other)

    # ---- analysis ----
    def dimension_range(self) -> Optional[Tuple[Range, Range, Range]]:
        """Per-axis (min, max) over all vertices, or None for an empty mesh.

        Normals are not part of the extent.
        """
        if not self.triangles:
            return None
        xs = [v[0] for t in self.triangles for v in t.vertices]
        ys = [v[1] for t in self.triangles for v in t.vertices]
        zs = [v[2] for t in self.triangles for v in t.vertices]
        return (min(xs), max(xs)), (min(ys), max(ys)), (min(zs), max(zs))

    def bounds(self) -> Optional[Tuple[Vector3, Vector3]]:
        rng = self.dimension_range()
        if rng is None:
            return None
        (x0, x1), (y0, y1), (z0, z1) = rng
        return Vector3(x0, y0, z0), Vector3(x1, y1, z1)

    # ---- construction ----
    @classmethod
    def from_faces(cls, vertices: Sequence[Sequence[float]], faces: Sequence[Tuple[int, int, int]],
                   name: str = "") -> "Mesh":
        """Flatten an indexed mesh (shared vertices + index triples) into facets.

        Normals are computed per face from the winding.
        """
        verts = [vec3(*v) for v in vertices]
        tris = [Triangle.from_vertices(verts[a], verts[b], verts[c]) for a, b, c in faces]
        return cls(tris, AsciiHeader(name))
