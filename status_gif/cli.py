import argparse
import logging
import sys
from dataclasses import replace
from pathlib import Path
from typing import Iterable

from . import __version__
from .exceptions import StatusGifError
from .gif_generator import DEFAULT_CONFIG, Config, build_animation, write_gif


def parse_arguments(argv: Iterable[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="status-gif",
        description=(
            "Create a blinking status indicator GIF: a bordered circle whose "
            "color follows a timed pattern."
        ),
    )
    parser.add_argument(
        "-o", "--outfile",
        type=str,
        default=DEFAULT_CONFIG.outfile,
        help=f"Output GIF path, overwritten if it exists (default: {DEFAULT_CONFIG.outfile}).",
    )
    parser.add_argument(
        "-p", "--pattern",
        type=str,
        default=DEFAULT_CONFIG.pattern,
        help=(
            "Color pattern '<color> <1/100th seconds> ...' "
            f"(default: '{DEFAULT_CONFIG.pattern}')."
        ),
    )
    parser.add_argument(
        "-s", "--size",
        type=int,
        default=DEFAULT_CONFIG.size,
        help=f"Image size in pixels, size x size (default: {DEFAULT_CONFIG.size}).",
    )
    parser.add_argument(
        "-b", "--border",
        type=int,
        default=DEFAULT_CONFIG.border,
        help=f"Margin in pixels around the circle (default: {DEFAULT_CONFIG.border}).",
    )
    parser.add_argument(
        "--lenient",
        action="store_true",
        help="Treat malformed durations as 0 instead of failing.",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Log palette and frame details.",
    )
    parser.add_argument("--version", action="version", version=f"status-gif {__version__}")
    return parser.parse_args(argv)


def config_from_arguments(args: argparse.Namespace) -> Config:
    return replace(
        DEFAULT_CONFIG,
        outfile=args.outfile,
        pattern=args.pattern,
        size=args.size,
        border=args.border,
        strict_durations=not args.lenient,
    )


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def main(argv: Iterable[str]) -> int:
    args = parse_arguments(argv)
    configure_logging(args.verbose)
    try:
        config = config_from_arguments(args)
        animation = build_animation(config)
        output_path = write_gif(animation, Path(config.outfile))
        print(f"Created GIF with {len(animation.frames)} frames at {output_path}")
        return 0
    except StatusGifError as gif_err:
        print(f"Error: {gif_err}", file=sys.stderr)
    except OSError as io_err:
        print(f"Error: {io_err}", file=sys.stderr)
    except Exception as unexpected_err:  # noqa: BLE001
        print(f"Unexpected error: {unexpected_err}", file=sys.stderr)
    return 1


def cli_entry() -> None:
    sys.exit(main(sys.argv[1:]))
