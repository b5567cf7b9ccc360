"""
status-gif: blinking status indicator GIFs.
Parses a color/duration pattern and renders a bordered circle animation.
"""

__version__ = "0.1.0"

from .exceptions import (
    BuilderInvariantError,
    ConfigError,
    EncodeError,
    ParseErrorKind,
    PatternError,
    StatusGifError,
)
from .pattern import (
    COLORS,
    DEFAULT_PATTERN,
    Frame,
    build_palette,
    parse_pattern,
    pattern_durations,
)
from .gif_generator import (
    Animation,
    CanvasSpec,
    Config,
    DEFAULT_CONFIG,
    PixelClass,
    build_animation,
    classify_pixel,
    compose_frames,
    encode_animation,
    generate_gif,
    rasterize_mask,
    validate_canvas,
    write_gif,
)

__all__ = [
    "Animation",
    "BuilderInvariantError",
    "COLORS",
    "CanvasSpec",
    "Config",
    "ConfigError",
    "DEFAULT_CONFIG",
    "DEFAULT_PATTERN",
    "EncodeError",
    "Frame",
    "ParseErrorKind",
    "PatternError",
    "PixelClass",
    "StatusGifError",
    "build_animation",
    "build_palette",
    "classify_pixel",
    "compose_frames",
    "encode_animation",
    "generate_gif",
    "parse_pattern",
    "pattern_durations",
    "rasterize_mask",
    "validate_canvas",
    "write_gif",
]
