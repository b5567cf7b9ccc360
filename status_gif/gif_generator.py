"""
Core GIF generation logic for blinking status indicators.

Draws a filled circle with a black ring on a white square canvas once, then
emits one palette-indexed frame per pattern step with the circle interior
set to that step's color.
"""

from __future__ import annotations

import enum
import logging
import math
from dataclasses import dataclass, field
from io import BytesIO
from pathlib import Path
from typing import BinaryIO, List, Sequence, Tuple

from PIL import GifImagePlugin, Image

from .exceptions import ConfigError, EncodeError
from .pattern import DEFAULT_PATTERN, Color, Frame, build_palette, flatten_palette, parse_pattern

logger = logging.getLogger(__name__)

BORDER_THICKNESS = 10


@dataclass(frozen=True)
class Config:
    """Configuration for a single generator run."""

    outfile: str = "status.gif"
    pattern: str = DEFAULT_PATTERN
    size: int = 500
    border: int = 25
    strict_durations: bool = True


DEFAULT_CONFIG = Config()


class PixelClass(enum.IntEnum):
    """Mask value of a canvas pixel."""
    OUTSIDE = 0
    BORDER = 1
    INTERIOR = 2


@dataclass(frozen=True)
class CanvasSpec:
    """Square canvas with the circle's bounding box inset by ``margin``."""

    size: int
    margin: int

    @property
    def center(self) -> Tuple[int, int]:
        return self.size // 2, self.size // 2

    @property
    def radius(self) -> int:
        return (self.size - 2 * self.margin) // 2

    @property
    def border_thickness(self) -> int:
        return BORDER_THICKNESS


@dataclass
class Animation:
    """Frames ready for encoding. Delays are in hundredths of a second."""

    frames: List[Image.Image] = field(default_factory=list)
    delays: List[int] = field(default_factory=list)
    loop: int = 0


def validate_canvas(size: int, border: int) -> CanvasSpec:
    """Check the canvas size and border and return the canvas they describe."""
    if size < 0 or border < 0:
        raise ConfigError(f"Size and border must not be negative. Got size={size}, border={border}.")
    if size <= 2 * border:
        raise ConfigError(
            f"Size must be larger than twice the border. Got size={size}, border={border}."
        )
    return CanvasSpec(size=size, margin=border)


def classify_pixel(canvas: CanvasSpec, x: int, y: int) -> PixelClass:
    """Classify one pixel against the circle and its ring."""
    low = canvas.margin
    # The last row and column are never drawn on.
    high = min(canvas.size - canvas.margin, canvas.size - 1)
    if not (low <= x < high and low <= y < high):
        return PixelClass.OUTSIDE

    cx, cy = canvas.center
    distance = int(math.sqrt((x - cx) * (x - cx) + (y - cy) * (y - cy)))
    if distance > canvas.radius:
        return PixelClass.OUTSIDE
    if distance > canvas.radius - canvas.border_thickness:
        return PixelClass.BORDER
    return PixelClass.INTERIOR


def rasterize_mask(canvas: CanvasSpec) -> bytearray:
    """
    Classify every pixel of the canvas.

    Returns:
        Row-major PixelClass values, ``size * size`` bytes long
    """
    size = canvas.size
    mask = bytearray(size * size)
    low = canvas.margin
    high = min(size - canvas.margin, size - 1)
    for y in range(low, high):
        row = y * size
        for x in range(low, high):
            mask[row + x] = classify_pixel(canvas, x, y)
    return mask


def compose_frame(
    mask: bytes,
    canvas: CanvasSpec,
    interior_index: int,
    flat_palette: Sequence[int],
) -> Image.Image:
    """Create one palette image from the mask with the given interior color."""
    lookup = bytes([0, 1, interior_index]) + bytes(253)
    frame = Image.frombytes("P", (canvas.size, canvas.size), bytes(mask).translate(lookup))
    frame.putpalette(flat_palette)
    return frame


def compose_frames(
    mask: bytes,
    canvas: CanvasSpec,
    frames: Sequence[Frame],
    palette: Sequence[Color],
) -> List[Image.Image]:
    """Create one palette image per pattern frame, all sharing the same palette."""
    flat_palette = flatten_palette(palette)
    return [compose_frame(mask, canvas, frame.index, flat_palette) for frame in frames]


def build_animation(config: Config) -> Animation:
    """Run the pattern through parsing, rasterizing and composing."""
    canvas = validate_canvas(config.size, config.border)
    frames, palette_map = parse_pattern(config.pattern, strict=config.strict_durations)
    palette = build_palette(palette_map)
    mask = rasterize_mask(canvas)
    logger.debug(
        "Canvas %dx%d, radius %d, %d colors, %d frames",
        canvas.size, canvas.size, canvas.radius, len(palette), len(frames),
    )
    return Animation(
        frames=compose_frames(mask, canvas, frames, palette),
        delays=[frame.duration for frame in frames],
        loop=0,
    )


def check_animation(animation: Animation) -> None:
    """Reject animations the GIF encoder cannot write."""
    if not animation.frames:
        raise EncodeError("Pattern produced no frames; nothing to encode.")
    if len(animation.frames) != len(animation.delays):
        raise EncodeError(
            f"Got {len(animation.frames)} frames but {len(animation.delays)} delays."
        )


def encode_animation(animation: Animation, sink: BinaryIO) -> None:
    """
    Write the animation to ``sink`` as a looping GIF.

    Every frame is written on its own, full size and in pattern order, so
    repeated colors keep one frame each. The palette of the first frame is
    the global color table shared by all frames. Pillow takes durations in
    milliseconds and stores them as hundredths of a second, so the delays
    are scaled by ten. Disposal 1 makes Pillow emit a graphic control block
    even for zero delays.
    """
    check_animation(animation)
    info = {
        "loop": animation.loop,
        "duration": animation.delays[0] * 10,
        "optimize": False,
    }
    try:
        header, _ = GifImagePlugin.getheader(animation.frames[0].copy(), info=info)
        for block in header:
            sink.write(block)
        for frame, delay in zip(animation.frames, animation.delays):
            for block in GifImagePlugin.getdata(frame, duration=delay * 10, disposal=1):
                sink.write(block)
        sink.write(b";")
    except (OSError, ValueError) as exc:
        raise EncodeError(f"Failed to encode GIF: {exc}") from exc


def write_gif(animation: Animation, output_path: Path) -> Path:
    """Encode the animation into ``output_path``, overwriting any existing file."""
    check_animation(animation)
    sink = open(output_path, "wb")
    try:
        encode_animation(animation, sink)
    finally:
        try:
            sink.close()
        except OSError as exc:
            logger.error("Failed to close output file %s: %s", output_path, exc)
    return output_path


def generate_gif(config: Config) -> bytes:
    """Generate the status GIF described by ``config`` and return its bytes."""
    output = BytesIO()
    encode_animation(build_animation(config), output)
    return output.getvalue()
