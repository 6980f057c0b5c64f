"""Rotate or flip a PPM image, optionally timing the work."""

from __future__ import annotations

import re
import sys
from collections import deque
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from typing import Optional

from .a2methods import A2Methods, BlockedMethods, PlainMethods
from .cputiming import CPUTimer
from .pnm import PIXEL_SIZE, PnmBadFormat, Pixmap, read_ppm, write_ppm

PROG = "ppmtrans"
USAGE = (
    f"Usage: {PROG} [-rotate <angle>] [-{{row,col,block}}-major] "
    "[-time time_file] [filename]"
)

ROTATIONS = (0, 90, 180, 270)
FLIPS = ("horizontal", "vertical")

_LAYOUTS: dict[str, tuple[type[A2Methods], str, str]] = {
    "-row-major": (PlainMethods, "map_row_major", "row-major"),
    "-col-major": (PlainMethods, "map_col_major", "column-major"),
    "-block-major": (BlockedMethods, "map_block_major", "block-major"),
}

Move = Callable[[int, int, int, int], tuple[int, int]]

_MOVES: dict[object, Move] = {
    90: lambda col, row, width, height: (height - row - 1, col),
    180: lambda col, row, width, height: (width - col - 1, height - row - 1),
    270: lambda col, row, width, height: (row, width - col - 1),
    "horizontal": lambda col, row, width, height: (width - col - 1, row),
    "vertical": lambda col, row, width, height: (col, height - row - 1),
}

_LEADING_INT = re.compile(r"\s*[+-]?\d+")


class UsageError(Exception):
    """Raised for a bad command line; ``show_usage`` asks for the usage text."""

    def __init__(self, message: str = "", show_usage: bool = True) -> None:
        super().__init__(message)
        self.show_usage = show_usage


@dataclass
class Options:
    """What the command line asks for."""

    rotation: int = 0
    flip: Optional[str] = None
    methods: A2Methods = field(default_factory=PlainMethods)
    map_name: str = "map_default"
    time_file: Optional[str] = None
    filename: Optional[str] = None


def _parse_rotation(text: str) -> int:
    match = _LEADING_INT.match(text)
    value = int(match.group()) if match else 0
    rest = text[match.end():] if match else text
    if value not in ROTATIONS:
        raise UsageError("Rotation must be 0, 90 180 or 270")
    if rest:
        raise UsageError()
    return value


def parse_args(argv: Sequence[str]) -> Options:
    """Turn the arguments after the program name into ``Options``."""
    options = Options()
    remaining = deque(argv)
    while remaining:
        arg = remaining.popleft()
        if arg in _LAYOUTS:
            table, map_name, what = _LAYOUTS[arg]
            methods = table()
            if not methods.supports(map_name):
                raise UsageError(
                    f"{PROG} does not support {what} mapping", show_usage=False
                )
            options.methods, options.map_name = methods, map_name
        elif arg == "-rotate":
            if not remaining:
                raise UsageError()
            options.rotation = _parse_rotation(remaining.popleft())
        elif arg == "-flip":
            if not remaining:
                raise UsageError()
            value = remaining.popleft()
            if value not in FLIPS:
                raise UsageError("Flip must be 'horizontal' or 'vertical'")
            options.flip = value
        elif arg == "-time":
            if not remaining:
                raise UsageError()
            options.time_file = remaining.popleft()
        elif arg.startswith("-"):
            raise UsageError(f"{PROG}: unknown option '{arg}'")
        elif remaining:
            raise UsageError("Too many arguments")
        else:
            options.filename = arg
    if options.rotation != 0 and options.flip is not None:
        raise UsageError("Too many arguments", show_usage=False)
    return options


def transform_image(
    image: Pixmap,
    methods: A2Methods,
    map_name: str,
    rotation: int,
    flip: Optional[str],
) -> Pixmap:
    """Return ``image`` rotated by ``rotation`` degrees or flipped.

    The source pixels are visited with the mapping ``map_name`` of
    ``methods``.  With no rotation and no flip the image itself is returned.
    """
    if rotation not in ROTATIONS:
        raise ValueError(f"rotation must be one of {ROTATIONS} (got {rotation})")
    if flip is not None and flip not in FLIPS:
        raise ValueError(f"flip must be one of {FLIPS} (got {flip!r})")
    if rotation != 0 and flip is not None:
        raise ValueError("cannot rotate and flip at once")
    if rotation == 0 and flip is None:
        return image
    if not methods.supports(map_name):
        raise ValueError(f"{type(methods).__name__} does not support {map_name}")

    width, height = image.width, image.height
    new_width, new_height = (height, width) if rotation in (90, 270) else (width, height)
    target = methods.new_with_blocksize(
        new_width, new_height, PIXEL_SIZE, methods.blocksize(image.pixels)
    )
    move = _MOVES[flip if flip is not None else rotation]

    def place(col: int, row: int, _array: object, value: object) -> None:
        target[move(col, row, width, height)] = value

    getattr(methods, map_name)(image.pixels, place)
    return Pixmap(new_width, new_height, image.denominator, target, methods)


def _read(options: Options) -> Pixmap:
    if options.filename is None:
        return read_ppm(sys.stdin.buffer, options.methods)
    with open(options.filename, "rb") as stream:
        return read_ppm(stream, options.methods)


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the command; return the process exit status."""
    args = sys.argv[1:] if argv is None else list(argv)
    try:
        options = parse_args(args)
    except UsageError as err:
        if str(err):
            print(err, file=sys.stderr)
        if err.show_usage:
            print(USAGE, file=sys.stderr)
        return 1

    try:
        image = _read(options)
    except PnmBadFormat as err:
        print(f"{PROG}: {err}", file=sys.stderr)
        return 1
    except OSError:
        print("cannot open file", file=sys.stderr)
        return 1

    with CPUTimer() as timer:
        result = transform_image(
            image, options.methods, options.map_name, options.rotation, options.flip
        )

    if result is not image and options.time_file is not None:
        pixel_count = image.width * image.height
        per_pixel = timer.elapsed / pixel_count if pixel_count else 0.0
        with open(options.time_file, "a", encoding="utf-8") as log:
            log.write(f"Time taken per pixel {per_pixel:.0f} nanoseconds\n")

    out = sys.stdout.buffer
    write_ppm(out, result)
    out.flush()
    return 0