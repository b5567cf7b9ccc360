"""
Pattern parsing and palette construction.

A pattern is a whitespace separated list of ``<color> <duration>`` pairs,
e.g. ``"red 50 redoff 50"``. Durations are in hundredths of a second, the
unit GIF frame delays are stored in.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, List, Sequence, Tuple

from .exceptions import BuilderInvariantError, ParseErrorKind, PatternError

logger = logging.getLogger(__name__)

Color = Tuple[int, int, int, int]

BACKGROUND = "white"
BORDER = "black"

# yellow and yellowoff are cyan.
COLORS: Dict[str, Color] = {
    "white": (255, 255, 255, 255),
    "black": (0, 0, 0, 255),
    "red": (255, 0, 0, 255),
    "redoff": (127, 0, 0, 255),
    "green": (0, 255, 0, 255),
    "greenoff": (0, 127, 0, 255),
    "blue": (0, 0, 255, 255),
    "blueoff": (0, 0, 127, 255),
    "yellow": (0, 255, 255, 255),
    "yellowoff": (0, 127, 127, 255),
}

DEFAULT_PATTERN = "red 50 redoff 50 red 50 redoff 50 red 50 redoff 500"


@dataclass(frozen=True)
class Frame:
    """One animation step: palette index of the circle and its delay."""

    index: int
    duration: int  # hundredths of a second


def new_palette_map() -> Dict[str, int]:
    """Return a palette map holding only the reserved background and border slots."""
    return {BACKGROUND: 0, BORDER: 1}


def parse_duration(text: str, strict: bool = True) -> int:
    """Parse a non-negative decimal duration.

    In lenient mode anything unparseable becomes 0 instead of raising.
    """
    if text.isascii() and text.isdigit():
        return int(text)
    if not strict:
        logger.debug("Treating malformed duration %r as 0", text)
        return 0
    raise PatternError(
        f"Invalid duration: {text!r}. Use a non-negative whole number of 1/100 seconds.",
        ParseErrorKind.BAD_DURATION,
        text,
    )


def parse_pattern(text: str, strict: bool = True) -> Tuple[List[Frame], Dict[str, int]]:
    """
    Parse a pattern string into frames and the palette map they index into.

    Args:
        text: Pairs of color name and duration, separated by whitespace
        strict: Reject malformed durations instead of treating them as 0

    Returns:
        The frames in pattern order and the name -> palette index map.
        Names get indices in first-seen order after the reserved white (0)
        and black (1) slots.
    """
    tokens = text.split()
    if len(tokens) % 2:
        raise PatternError(
            f"Pattern must be '<color> <duration>' pairs, got {len(tokens)} tokens.",
            ParseErrorKind.MALFORMED_PAIR_COUNT,
            tokens[-1],
        )

    palette_map = new_palette_map()
    frames: List[Frame] = []
    for name, duration_text in zip(tokens[0::2], tokens[1::2]):
        if name not in COLORS:
            raise PatternError(
                f"Unknown color: {name!r}. Choose from: {', '.join(COLORS)}.",
                ParseErrorKind.UNKNOWN_COLOR,
                name,
            )
        duration = parse_duration(duration_text, strict)
        if name not in palette_map:
            palette_map[name] = len(palette_map)
        frames.append(Frame(index=palette_map[name], duration=duration))

    logger.debug("Parsed %d frames, palette map %s", len(frames), palette_map)
    return frames, palette_map


def pattern_durations(frames: Sequence[Frame]) -> List[int]:
    """Return the frame delays in pattern order."""
    return [frame.duration for frame in frames]


def build_palette(palette_map: Dict[str, int]) -> List[Color]:
    """Materialize the palette map into colors ordered by palette index."""
    slots: List[str | None] = [None] * len(palette_map)
    for name, index in palette_map.items():
        if not 0 <= index < len(slots) or slots[index] is not None:
            raise BuilderInvariantError(f"Palette index {index} for {name!r} is out of place.")
        slots[index] = name

    if slots[:2] != [BACKGROUND, BORDER]:
        raise BuilderInvariantError(
            f"Palette must start with {BACKGROUND!r} and {BORDER!r}, got {slots[:2]}."
        )
    names = [name for name in slots if name is not None]
    if len(names) != len(slots):
        raise BuilderInvariantError("Palette map leaves unassigned indices.")
    return [COLORS[name] for name in names]


def flatten_palette(palette: Sequence[Color]) -> List[int]:
    """Flatten RGBA colors into the RGB list Image.putpalette expects."""
    flat: List[int] = []
    for r, g, b, _ in palette:
        flat.extend((r, g, b))
    return flat
