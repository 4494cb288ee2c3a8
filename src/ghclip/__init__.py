# -*- coding: utf-8 -*-
from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("ghclip")
except PackageNotFoundError:  # pragma: no cover - handled when package not installed
    __version__ = "unknown"

## Greiner-Hormann polygon clipping
from ghclip.errors import ClipError, InvalidPolygon, OptionsError
from ghclip.options import ClipOptions, default_options, load_options
from ghclip.segment import Intersection, intersect
from ghclip.vertex import Vertex
from ghclip.polygon import Polygon, point_in_polygon, signed_area
from ghclip.clipper import (
    ClipResult,
    Relation,
    boolean,
    clip,
    difference,
    intersection,
    union,
)
from ghclip.validate import CheckResult, check_polygon, validate_polygon

__all__ = [
    'ClipError',
    'InvalidPolygon',
    'OptionsError',
    'ClipOptions',
    'default_options',
    'load_options',
    'Intersection',
    'intersect',
    'Vertex',
    'Polygon',
    'point_in_polygon',
    'signed_area',
    'ClipResult',
    'Relation',
    'boolean',
    'clip',
    'difference',
    'intersection',
    'union',
    'CheckResult',
    'check_polygon',
    'validate_polygon',
]
