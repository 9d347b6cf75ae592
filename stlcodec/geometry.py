# stlcodec/geometry.py
"""
Geometry primitives shared by both STL encodings.

Every coordinate stored in a Vector3 is a numpy float32 scalar. Use `vec3()`
to build one from arbitrary numbers: it rounds each component to single
precision once and keeps existing float32 values untouched, so decoded bit
patterns (NaN payloads included) reach the encoder unchanged.
"""
from __future__ import annotations

import math
import operator
from dataclasses import dataclass
from typing import Iterable, NamedTuple, Tuple

import numpy as np


class Vector3(NamedTuple):
    x: float
    y: float
    z: float


Edge = Tuple[Vector3, Vector3]


def _f32(value) -> np.float32:
    # float32 scalars are kept as-is so NaN payloads (signalling bit included) survive
    if type(value) is np.float32:
        return value
    with np.errstate(over="ignore"):
        return np.float32(value)


def vec3(x: float, y: float, z: float) -> Vector3:
    """Build a Vector3 with every component stored as a numpy float32."""
    return Vector3(_f32(x), _f32(y), _f32(z))


def as_vec3(v: Iterable[float]) -> Vector3:
    x, y, z = v
    return vec3(x, y, z)


# -----------------------------
# Small vector utilities
# -----------------------------

def v_add(a: Vector3, b: Vector3) -> Vector3:
    return vec3(a[0] + b[0], a[1] + b[1], a[2] + b[2])


def v_sub(a: Vector3, b: Vector3) -> Vector3:
    return vec3(a[0] - b[0], a[1] - b[1], a[2] - b[2])


def v_scale(a: Vector3, s: float) -> Vector3:
    return vec3(a[0] * s, a[1] * s, a[2] * s)


def v_dot(a: Vector3, b: Vector3) -> float:
    return a[0] * b[0] + a[1] * b[1] + a[2] * b[2]


def v_cross(a: Vector3, b: Vector3) -> Vector3:
    return vec3(
        a[1] * b[2] - a[2] * b[1],
        a[2] * b[0] - a[0] * b[2],
        a[0] * b[1] - a[1] * b[0],
    )


def v_len(a: Vector3) -> float:
    return math.sqrt(v_dot(a, a))


def v_norm(a: Vector3) -> Vector3:
    l = v_len(a)
    if l == 0.0:
        return vec3(0.0, 0.0, 0.0)
    return vec3(a[0] / l, a[1] / l, a[2] / l)


def face_normal(a: Vector3, b: Vector3, c: Vector3) -> Vector3:
    """Unit normal of the triangle (a, b, c) by the right-hand rule.

    Degenerate triangles get the zero vector, which is what most STL
    writers emit for them.
    """
    # Computed in double precision, rounded once at the end.
    ax, ay, az = (float(p) for p in a)
    ab = (float(b[0]) - ax, float(b[1]) - ay, float(b[2]) - az)
    ac = (float(c[0]) - ax, float(c[1]) - ay, float(c[2]) - az)
    n = (
        ab[1] * ac[2] - ab[2] * ac[1],
        ab[2] * ac[0] - ab[0] * ac[2],
        ab[0] * ac[1] - ab[1] * ac[0],
    )
    l = math.sqrt(n[0] * n[0] + n[1] * n[1] + n[2] * n[2])
    if l == 0.0 or not math.isfinite(l):
        return vec3(0.0, 0.0, 0.0)
    return vec3(n[0] / l, n[1] / l, n[2] / l)


# --------
# Triangle
# --------

@dataclass(frozen=True)
class Triangle:
    """One STL facet.

    - normal: facet normal as stored in the file (never recomputed)
    - vertices: exactly three corners; order encodes the winding
    - attribute: the 16-bit "attribute byte count" slot of binary STL,
      passed through untouched (always 0 for ASCII input)
    """

    normal: Vector3
    vertices: Tuple[Vector3, Vector3, Vector3]
    attribute: int = 0

    def __post_init__(self) -> None:
        verts = tuple(as_vec3(v) for v in self.vertices)
        if len(verts) != 3:
            raise ValueError(f"A triangle needs exactly 3 vertices (got {len(verts)})")
        try:
            attribute = operator.index(self.attribute)
        except TypeError:
            raise ValueError(f"attribute must be an integer (got {self.attribute!r})") from None
        if not 0 <= attribute <= 0xFFFF:
            raise ValueError(f"attribute must fit in 16 bits (got {self.attribute})")
        object.__setattr__(self, "normal", as_vec3(self.normal))
        object.__setattr__(self, "vertices", verts)
        object.__setattr__(self, "attribute", attribute)

    @classmethod
    def from_vertices(cls, a: Iterable[float], b: Iterable[float], c: Iterable[float],
                      attribute: int = 0) -> "Triangle":
        va, vb, vc = as_vec3(a), as_vec3(b), as_vec3(c)
        return cls(face_normal(va, vb, vc), (va, vb, vc), attribute)

    def edges(self) -> Tuple[Edge, Edge, Edge]:
        v0, v1, v2 = self.vertices
        return ((v0, v1), (v1, v2), (v2, v0))
