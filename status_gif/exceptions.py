"""
Exception hierarchy for status-gif.

Everything raised on purpose inherits from StatusGifError so the CLI can
report the whole family with a single except clause. Input problems also
subclass ValueError, matching how bad sizes and colors were reported before.
"""

from __future__ import annotations

import enum


class StatusGifError(Exception):
    """Base exception for all status-gif errors."""


class ConfigError(StatusGifError, ValueError):
    """Raised when the canvas size or border is unusable."""


class ParseErrorKind(enum.Enum):
    """Why a pattern string was rejected."""
    UNKNOWN_COLOR = "unknown_color"
    MALFORMED_PAIR_COUNT = "malformed_pair_count"
    BAD_DURATION = "bad_duration"


class PatternError(StatusGifError, ValueError):
    """Raised when a pattern string does not parse."""

    def __init__(self, message: str, kind: ParseErrorKind, token: str = "") -> None:
        super().__init__(message)
        self.kind = kind
        self.token = token


class EncodeError(StatusGifError):
    """Raised when the GIF encoder rejects the frames or cannot write them."""


class BuilderInvariantError(StatusGifError):
    """Raised when a palette map has gaps or misplaced reserved slots."""
