"""Exception types raised by the sketchboard core."""
from __future__ import annotations


class SketchboardError(Exception):
    """Base class for every error raised by sketchboard."""


class UnrecognisedTypeError(SketchboardError, TypeError):
    """An element or tool reached a dispatch point that has no case for it.

    This signals a missing case in the code, not a user mistake, so callers
    should let it propagate.
    """

    def __init__(self, value: object):
        self.value = value
        super().__init__(f"Type not recognised: {value!r}")


class MalformedElementError(SketchboardError, ValueError):
    """An element violates a structural invariant (e.g. a pencil without points)."""


class InterchangeError(SketchboardError, ValueError):
    """An import payload could not be parsed or contains unknown records."""


class ConfigError(SketchboardError, ValueError):
    """The configuration file exists but cannot be used."""


__all__ = [
    "SketchboardError",
    "UnrecognisedTypeError",
    "MalformedElementError",
    "InterchangeError",
    "ConfigError",
]
