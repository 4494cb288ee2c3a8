"""Clipping configuration.

The defaults reproduce exact arithmetic: a zero determinant is the only
"parallel" case and vertex equality is exact coordinate equality.  A
non-zero ``epsilon`` trades that parity for robustness near degenerate
geometry, and ``exact`` evaluates the segment predicate with mpmath.

Configuration can come from three places, in priority order:

    1. An explicit ``ClipOptions`` passed to an operation
    2. The YAML file named by the ``GHCLIP_CONFIG`` environment variable
    3. The built-in defaults

Example YAML file::

    ghclip:
      epsilon: 1.0e-9
      exact: true
      precision: 60
"""

from __future__ import annotations

import dataclasses
import math
import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Any, Mapping, Optional

import yaml

from ghclip.errors import OptionsError

__all__ = [
    "GHCLIP_CONFIG",
    "ClipOptions",
    "load_options",
    "default_options",
    "resolve_options",
    "clear_cache",
]

# Environment variable naming a YAML configuration file
GHCLIP_CONFIG = "GHCLIP_CONFIG"


@dataclass(frozen=True)
class ClipOptions:
    """Tolerance and precision settings for a clip operation."""

    epsilon: float = 0.0
    exact: bool = False
    precision: int = 50
    validate: bool = False

    def __post_init__(self):
        if isinstance(self.epsilon, bool) or not isinstance(self.epsilon, (int, float)):
            raise OptionsError(f"epsilon must be a number, got {self.epsilon!r}")
        if not math.isfinite(self.epsilon) or self.epsilon < 0:
            raise OptionsError(f"epsilon must be finite and non-negative, got {self.epsilon!r}")
        if isinstance(self.precision, bool) or not isinstance(self.precision, int):
            raise OptionsError(f"precision must be an integer, got {self.precision!r}")
        if self.precision < 15:
            raise OptionsError(f"precision must be at least 15 digits, got {self.precision}")
        for name in ("exact", "validate"):
            if not isinstance(getattr(self, name), bool):
                raise OptionsError(f"{name} must be true or false, got {getattr(self, name)!r}")
        object.__setattr__(self, "epsilon", float(self.epsilon))

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "ClipOptions":
        """Build options from a plain mapping, rejecting unknown keys."""
        if not isinstance(data, Mapping):
            raise OptionsError(f"expected a mapping of options, got {type(data).__name__}")
        known = {f.name for f in dataclasses.fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise OptionsError(f"unknown option(s): {', '.join(map(str, unknown))}")
        return cls(**dict(data))

    def replace(self, **changes: Any) -> "ClipOptions":
        return dataclasses.replace(self, **changes)

    def as_dict(self) -> dict:
        return dataclasses.asdict(self)


def load_options(path: Path | str) -> ClipOptions:
    """Load options from a YAML file.

    The options may sit at the document root or under a ``ghclip`` key.
    An empty file yields the defaults.
    """
    path = Path(path).expanduser()
    if not path.exists():
        raise FileNotFoundError(f"ghclip config not found: {path}")
    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}

    if not isinstance(data, dict):
        raise OptionsError(f"Invalid config format in {path}: expected mapping at root")
    if "ghclip" in data:
        data = data["ghclip"] or {}
    return ClipOptions.from_mapping(data)


@lru_cache(maxsize=None)
def default_options() -> ClipOptions:
    """Return the process-wide default options.

    Reads the file named by ``GHCLIP_CONFIG`` on first use. Call
    :func:`clear_cache` after changing the variable or the file.
    """
    env_path = os.environ.get(GHCLIP_CONFIG)
    if env_path and env_path.strip():
        return load_options(env_path.strip())
    return ClipOptions()


def resolve_options(options: Optional[ClipOptions]) -> ClipOptions:
    if options is None:
        return default_options()
    if not isinstance(options, ClipOptions):
        raise OptionsError(f"expected ClipOptions, got {type(options).__name__}")
    return options


def clear_cache() -> None:
    """Forget the cached default options."""
    default_options.cache_clear()
