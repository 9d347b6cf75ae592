# stlcodec/cli.py
from __future__ import annotations

import argparse
import logging
from typing import List, Optional, Sequence

from .codec import Format
from .errors import StlError
from .io import default_format, load, save
from .logging_config import setup_logging
from .mesh import AsciiHeader, BinaryHeader, Mesh

logger = logging.getLogger(__name__)

_DEF_HELP = """
Examples:
  python -m stlcodec part.stl                      # print a summary
  python -m stlcodec part.stl --out part_ascii.stl --ascii
  python -m stlcodec scan.stl --out scan_bin.stl --binary --name "scan 03"
"""


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="stlcodec", description="stlcodec: read, inspect and convert STL files",
                                epilog=_DEF_HELP, formatter_class=argparse.RawTextHelpFormatter)
    p.add_argument("input", help="STL file to read (binary or ASCII, detected automatically)")
    p.add_argument("--out", help="Write the mesh to this path instead of printing a summary")
    fmt = p.add_mutually_exclusive_group()
    fmt.add_argument("--ascii", action="store_true", help="Force ASCII STL output")
    fmt.add_argument("--binary", action="store_true", help="Force binary STL output")
    p.add_argument("--name", help="Replace the solid name / header text")
    p.add_argument("--verbose", "-v", action="store_true", help="Log debug output")
    p.add_argument("--log-file", help="Also write log records to this file")
    return p


def summarize(mesh: Mesh, source_format: Format) -> List[str]:
    lines = [
        f"format:    {source_format.value}",
        f"name:      {mesh.name}",
        f"triangles: {len(mesh)}",
    ]
    rng = mesh.dimension_range()
    if rng is not None:
        for axis, (lo, hi) in zip("xyz", rng):
            lines.append(f"{axis}:         {float(lo):g} .. {float(hi):g}")
    return lines


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = _build_parser().parse_args(argv)
    setup_logging(args.verbose, args.log_file)

    try:
        mesh = load(args.input)
    except (OSError, StlError) as exc:
        raise SystemExit(f"stlcodec: cannot read {args.input}: {exc}") from exc

    source_format = default_format(mesh)

    if args.name is not None:
        if isinstance(mesh.header, BinaryHeader):
            mesh.header = BinaryHeader.from_text(args.name)
        else:
            mesh.header = AsciiHeader(args.name)

    if args.out is None:
        print("\n".join(summarize(mesh, source_format)))
        return 0

    if args.ascii:
        target = Format.ASCII
    elif args.binary:
        target = Format.BINARY
    else:
        target = source_format

    try:
        save(args.out, mesh, target)
    except (OSError, StlError) as exc:
        raise SystemExit(f"stlcodec: cannot write {args.out}: {exc}") from exc
    logger.debug("Converted %s (%s) -> %s (%s)", args.input, source_format.value, args.out, target.value)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
