"""Exceptions raised by ghclip.

The clipping algorithm itself never raises: parallel or collinear
segments are reported through :attr:`ghclip.segment.Intersection.valid`
and non-crossing inputs through :attr:`ghclip.clipper.ClipResult.relation`.
These exceptions belong to the layers around it (validation and
configuration).
"""

from typing import Iterable, List


class ClipError(Exception):
    """Base exception for ghclip errors."""


class InvalidPolygon(ClipError, ValueError):
    """A polygon failed pre-validation.

    ``problems`` lists every defect found, one human-readable string per
    defect, in the order they were detected.
    """

    def __init__(self, problems: Iterable[str], name: str = 'polygon'):
        self.problems: List[str] = list(problems)
        self.name = name
        super().__init__(f"invalid {name}: " + "; ".join(self.problems))


class OptionsError(ClipError, ValueError):
    """Bad clipping configuration (unknown key or out-of-range value)."""


__all__ = [
    'ClipError',
    'InvalidPolygon',
    'OptionsError',
]
