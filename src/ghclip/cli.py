#!/usr/bin/env python3
"""
Command-line driver for ghclip boolean operations.

Usage:
    ghclip OPERATION INPUT [--config FILE] [--epsilon E] [--exact]
           [--validate] [--format yaml|json] [--dxf OUT] [-v]

INPUT is a YAML (or JSON) document holding two point lists::

    source: [[0, 0], [4, 0], [4, 4], [0, 4]]
    clip:   [[2, 2], [6, 2], [6, 6], [2, 6]]

Example:
    ghclip union squares.yaml --format json --dxf union.dxf
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from ghclip.clipper import OPERATIONS, ClipResult, boolean
from ghclip.errors import ClipError
from ghclip.options import ClipOptions, default_options, load_options

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ghclip",
        description="Union, intersection or difference of two simple polygons.")
    parser.add_argument("operation", choices=sorted(OPERATIONS), help="Boolean operation.")
    parser.add_argument("input", type=Path, help="YAML/JSON file with 'source' and 'clip' point lists.")
    parser.add_argument("--config", type=Path, help="YAML options file (overrides GHCLIP_CONFIG).")
    parser.add_argument("--epsilon", type=float, help="Determinant and equality tolerance.")
    parser.add_argument("--exact", action="store_true", help="Evaluate intersections with mpmath.")
    parser.add_argument("--validate", action="store_true", help="Reject degenerate polygons.")
    parser.add_argument("--format", choices=("yaml", "json"), default="yaml", help="Output format.")
    parser.add_argument("--dxf", type=Path, help="Also write the result contours to this DXF file.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging.")
    return parser


def _options(args: argparse.Namespace) -> ClipOptions:
    opts = load_options(args.config) if args.config else default_options()
    changes: Dict[str, Any] = {}
    if args.epsilon is not None:
        changes["epsilon"] = args.epsilon
    if args.exact:
        changes["exact"] = True
    if args.validate:
        changes["validate"] = True
    return opts.replace(**changes) if changes else opts


def _load_input(path: Path):
    with open(path, "r", encoding="utf-8") as fp:
        data = yaml.safe_load(fp)
    if not isinstance(data, dict) or "source" not in data or "clip" not in data:
        raise ValueError(f"{path}: expected a mapping with 'source' and 'clip' point lists")
    return data["source"], data["clip"]


def result_to_dict(result: ClipResult) -> Dict[str, Any]:
    return {
        "operation": result.operation,
        "relation": result.relation.value,
        "complete": result.complete,
        "crossings": result.crossings,
        "contours": [[[x, y] for x, y in pts] for pts in result.point_sequences()],
    }


def main(argv: Optional[list[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING,
                        format="%(levelname)s %(name)s: %(message)s")

    try:
        opts = _options(args)
        source, clip_poly = _load_input(args.input)
        result = boolean(args.operation, source, clip_poly, opts)
    except (ClipError, ValueError, OSError, yaml.YAMLError) as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        return 1

    payload = result_to_dict(result)
    if args.format == "json":
        print(json.dumps(payload, indent=2))
    else:
        print(yaml.safe_dump(payload, sort_keys=False), end="")

    if args.dxf:
        from ghclip.dxf import write_dxf
        written = write_dxf(result, args.dxf)
        logger.info("DXF written to %s", written)
    return 0


if __name__ == "__main__":
    sys.exit(main())
