# stlcodec/io.py
"""File helpers around the in-memory codec."""
from __future__ import annotations

import logging
import os
from typing import Optional, Union

from .codec import Format, decode, encode, sniff
from .mesh import BinaryHeader, Mesh

logger = logging.getLogger(__name__)

PathLike = Union[str, "os.PathLike[str]"]


def default_format(mesh: Mesh) -> Format:
    """The encoding a mesh came from, judged by its header kind."""
    return Format.BINARY if isinstance(mesh.header, BinaryHeader) else Format.ASCII


def load(path: PathLike) -> Mesh:
    with open(path, "rb") as f:
        data = f.read()
    logger.debug("Read %d bytes from %s, looks %s", len(data), path, sniff(data).value)
    mesh = decode(data)
    logger.info("Loaded %d triangles from %s", len(mesh), path)
    return mesh


def save(path: PathLike, mesh: Mesh, fmt: Optional[Union[Format, str]] = None) -> Format:
    """Write `mesh` to `path`. Returns the format that was written."""
    target = default_format(mesh) if fmt is None else Format.parse(fmt)
    data = encode(mesh, target)
    with open(path, "wb") as f:
        f.write(data)
    logger.info("Saved %d triangles to %s (%s, %d bytes)", len(mesh), path, target.value, len(data))
    return target
