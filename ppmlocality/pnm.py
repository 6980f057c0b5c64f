"""Reading and writing portable anymap images as grids of RGB pixels."""

from __future__ import annotations

import struct
from dataclasses import dataclass
from itertools import product
from typing import Any, BinaryIO, Iterator

from .a2methods import A2Methods

PIXEL_SIZE = 12
"""Nominal size in bytes of one pixel: three unsigned integers."""

_WHITESPACE = b" \t\n\v\f\r"
_MAX_DENOMINATOR = 65535


class PnmBadFormat(ValueError):
    """Raised when the input is not a proper PNM file."""


@dataclass(frozen=True)
class Rgb:
    """A coloured pixel whose channels are scaled by the image denominator."""

    red: int
    green: int
    blue: int


@dataclass
class Pixmap:
    """An image: its size, denominator and a 2D array of ``Rgb`` pixels.

    ``methods`` is the method table that operates on ``pixels``.
    """

    width: int
    height: int
    denominator: int
    pixels: Any
    methods: A2Methods


class _Scanner:
    """Pulls whitespace-separated header tokens out of raw PNM bytes."""

    def __init__(self, data: bytes, pos: int) -> None:
        self.data = data
        self.pos = pos

    def skip_space(self) -> None:
        data = self.data
        while self.pos < len(data):
            byte = data[self.pos]
            if byte in _WHITESPACE:
                self.pos += 1
            elif byte == ord("#"):
                end = data.find(b"\n", self.pos)
                self.pos = len(data) if end < 0 else end + 1
            else:
                break

    def integer(self, what: str) -> int:
        self.skip_space()
        start = self.pos
        while self.pos < len(self.data) and self.data[self.pos : self.pos + 1].isdigit():
            self.pos += 1
        if start == self.pos:
            raise PnmBadFormat(f"expected {what} at byte {start}")
        return int(self.data[start : self.pos])

    def bit(self) -> int:
        self.skip_space()
        if self.pos >= len(self.data):
            raise PnmBadFormat("image data ends early")
        byte = self.data[self.pos]
        if byte not in b"01":
            raise PnmBadFormat(f"bad bit at byte {self.pos}")
        self.pos += 1
        return byte - ord("0")

    def raster(self) -> bytes:
        if self.pos >= len(self.data) or self.data[self.pos] not in _WHITESPACE:
            raise PnmBadFormat("missing whitespace before image data")
        return self.data[self.pos + 1 :]


def _binary_samples(raster: bytes, count: int, maxval: int) -> list[int]:
    width = 1 if maxval < 256 else 2
    needed = count * width
    if len(raster) < needed:
        raise PnmBadFormat("image data ends early")
    if width == 1:
        return list(raster[:needed])
    return list(struct.unpack(f">{count}H", raster[:needed]))


def _packed_bits(raster: bytes, width: int, height: int) -> list[int]:
    row_bytes = (width + 7) // 8
    if len(raster) < row_bytes * height:
        raise PnmBadFormat("image data ends early")
    return [
        (raster[row * row_bytes + col // 8] >> (7 - col % 8)) & 1
        for row in range(height)
        for col in range(width)
    ]


def _pixels(kind: int, scanner: _Scanner, width: int, height: int,
            maxval: int) -> Iterator[Rgb]:
    count = width * height
    if kind in (1, 4):
        bits = ([scanner.bit() for _ in range(count)] if kind == 1
                else _packed_bits(scanner.raster(), width, height))
        for bit in bits:
            level = 0 if bit else 1
            yield Rgb(level, level, level)
        return

    channels = 3 if kind in (3, 6) else 1
    if kind in (2, 3):
        samples = [scanner.integer("sample") for _ in range(count * channels)]
    else:
        samples = _binary_samples(scanner.raster(), count * channels, maxval)
    if any(sample > maxval for sample in samples):
        raise PnmBadFormat(f"sample exceeds maximum value {maxval}")
    if channels == 1:
        for gray in samples:
            yield Rgb(gray, gray, gray)
    else:
        values = iter(samples)
        for red, green, blue in zip(values, values, values):
            yield Rgb(red, green, blue)


def read_ppm(stream: BinaryIO, methods: A2Methods) -> Pixmap:
    """Read a PNM image from a binary stream into an array made by ``methods``.

    Bitmaps and graymaps are converted to colour.  Raises ``PnmBadFormat``
    when the stream does not hold a proper PNM file.
    """
    data = stream.read()
    if not isinstance(data, (bytes, bytearray)):
        raise TypeError("read_ppm needs a binary stream")
    data = bytes(data)
    if len(data) < 2 or data[0] != ord("P") or data[1] not in b"123456":
        raise PnmBadFormat("not a PNM file")
    kind = data[1] - ord("0")
    scanner = _Scanner(data, 2)
    width = scanner.integer("width")
    height = scanner.integer("height")
    if kind in (1, 4):
        maxval = 1
    else:
        maxval = scanner.integer("maximum value")
        if not 1 <= maxval <= _MAX_DENOMINATOR:
            raise PnmBadFormat(f"maximum value {maxval} is out of range")

    pixels = methods.new(width, height, PIXEL_SIZE)
    cells = product(range(height), range(width))
    for (row, col), pixel in zip(cells, _pixels(kind, scanner, width, height, maxval)):
        pixels[col, row] = pixel
    return Pixmap(width, height, maxval, pixels, methods)


def write_ppm(stream: BinaryIO, pixmap: Pixmap) -> None:
    """Write ``pixmap`` to a binary stream as a raw (P6) pixmap."""
    if pixmap.width == 0 or pixmap.height == 0:
        raise ValueError("cannot write an empty pixmap")
    maxval = pixmap.denominator
    if not 1 <= maxval <= _MAX_DENOMINATOR:
        raise ValueError(f"denominator {maxval} is out of range")
    samples = [
        channel
        for row in range(pixmap.height)
        for col in range(pixmap.width)
        for channel in _channels(pixmap.pixels[col, row])
    ]
    if any(not 0 <= sample <= maxval for sample in samples):
        raise ValueError(f"pixel channel outside 0..{maxval}")
    code = "B" if maxval < 256 else "H"
    stream.write(f"P6\n{pixmap.width} {pixmap.height}\n{maxval}\n".encode("ascii"))
    stream.write(struct.pack(f">{len(samples)}{code}", *samples))


def _channels(pixel: Rgb) -> tuple[int, int, int]:
    return pixel.red, pixel.green, pixel.blue