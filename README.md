# ppmlocality

Rotate and flip PNM images while choosing how the pixels are stored and
visited. Pixels can be kept in a plain 2D array (`UArray2`), which stores
them row after row. They can also be kept in a blocked 2D array
(`UArray2b`), which stores square blocks of cells together. The source
pixels can be visited in row-major, column-major or block-major order. You
can then measure how memory locality affects the CPU time a transformation
takes.

## Installation

```
pip install .
```

To install with the test dependencies:

```
pip install .[test]
```

## Command line

```
ppmtrans [-rotate <angle>] [-flip horizontal|vertical]
         [-{row,col,block}-major] [-time time_file] [filename]
```

- `-rotate` takes 0, 90, 180 or 270 degrees. The default is 0.
- `-flip` takes `horizontal` or `vertical`. It cannot be combined with a rotation other than 0.
- `-row-major` and `-col-major` store the pixels in a plain array and visit them in that order.
- `-block-major` stores the pixels in a blocked array and visits them one block at a time.
- With none of the three order options, the plain array's default order (row-major) is used.
- `-time` appends one line to the named file: `Time taken per pixel N nanoseconds`. N is CPU time. Nothing is appended when the image is neither rotated nor flipped.
- `filename` names the input image. Without it, the image is read from standard input.

Input may be any PNM format, P1 to P6. Bitmaps and graymaps are converted to colour.

The result is always written to standard output as a binary (P6) pixmap.

If the arguments are bad, the command prints a message and the usage line to standard error. The exit status is 1. It also exits with status 1 when the input cannot be opened or is not a PNM file.

Example:

```
ppmtrans -rotate 90 -block-major -time timings.txt photo.ppm > rotated.ppm
```

## Library use

### The arrays

`ppmlocality.uarray2.UArray2(width, height, size)` and
`ppmlocality.uarray2b.UArray2b(width, height, size, blocksize)` work the same way:

- Cells are addressed as `array[col, row]` and start out as `None`.
- An index out of bounds raises `IndexError`.
- Bad sizes raise `ValueError`.
- `width`, `height` and `size` are read-only properties. `UArray2b` also has `blocksize`.

`UArray2` can be traversed two ways:

- `row_major()` and `col_major()` yield `(col, row, value)` tuples.
- `map_row_major(apply)` and `map_col_major(apply)` call `apply(col, row, array, value)` for each cell.

`UArray2b` can be traversed one block at a time:

- `block_major()` yields the cells, finishing each block before the next.
- `map(apply)` calls `apply(col, row, array, value)` for each cell in that order.
- `UArray2b.new_64k_block(width, height, size)` picks the largest block that fits in 64 KB.

```python
from ppmlocality.uarray2b import UArray2b

blocked = UArray2b(5, 4, 4, 2)
blocked[2, 3] = 42
for col, row, value in blocked.block_major():
    ...
```

### Method tables

`ppmlocality.a2methods` has `PlainMethods` and `BlockedMethods`, both built on `A2Methods`. They let code create and traverse either kind of array through one interface:

- `new`, `new_with_blocksize` and `blocksize` create arrays and report their block size.
- `supports(name)` tells whether a table offers a mapping.
- `map_default` and `small_map_default` visit every cell in the table's preferred order. The small variants call `apply(value)` only.

The mappings each table offers:

- `PlainMethods`: `map_row_major`, `map_col_major`, `small_map_row_major` and `small_map_col_major`.
- `BlockedMethods`: `map_block_major` and `small_map_block_major`.

### Images and transformations

`ppmlocality.pnm` handles reading and writing:

- `read_ppm(stream, methods)` reads a binary stream into a `Pixmap` of `Rgb` pixels. It raises `PnmBadFormat` when the stream does not hold a PNM file.
- `write_ppm(stream, pixmap)` writes a P6 pixmap.

`ppmlocality.ppmtrans.transform_image(image, methods, map_name, rotation, flip)` returns a rotated or flipped copy. With rotation 0 and no flip it returns the image itself.

```python
from ppmlocality.a2methods import BlockedMethods
from ppmlocality.pnm import read_ppm, write_ppm
from ppmlocality.ppmtrans import transform_image

methods = BlockedMethods()
with open("photo.ppm", "rb") as source:
    image = read_ppm(source, methods)
rotated = transform_image(image, methods, "map_block_major", 180, None)
with open("rotated.ppm", "wb") as target:
    write_ppm(target, rotated)
```

`ppmlocality.ppmtrans.parse_args(argv)` turns command-line arguments into `Options`. It raises `UsageError` on bad input.

### Timing

`ppmlocality.cputiming.CPUTimer` measures process CPU time in nanoseconds:

- Call `start()`, then `stop()`. `stop()` returns a float.
- Or use it as a context manager and read `elapsed` afterwards.

## What it does not do

The package only rotates by multiples of 90 degrees and flips. It has no transpose and no other image operations. It always writes binary P6 output; it cannot write plain-text or grayscale formats.