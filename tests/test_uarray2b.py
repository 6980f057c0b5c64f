import pytest

from ppmlocality.uarray2b import UArray2b


def test_64k_block_case_from_source():
    width, height = 5, 4
    array = UArray2b.new_64k_block(width, height, 4)
    for row in range(height):
        for col in range(width):
            array[col, row] = row * col
    seen = []
    array.map(lambda col, row, a, value: seen.append((col, row, value)))
    assert len(seen) == width * height
    assert all(value == col * row for col, row, value in seen)
    # one block covers the whole array, so the order is row-major
    assert [(c, r) for c, r, _ in seen] == [
        (c, r) for r in range(height) for c in range(width)
    ]


def test_64k_blocksize_values():
    assert UArray2b.new_64k_block(5, 4, 4).blocksize == 128
    assert UArray2b.new_64k_block(5, 4, 1).blocksize == 256
    assert UArray2b.new_64k_block(5, 4, 64 * 1024).blocksize == 1
    assert UArray2b.new_64k_block(5, 4, 64 * 1024 + 1).blocksize == 1


def test_dimensions_are_kept():
    array = UArray2b(13, 15, 4, 4)
    assert (array.width, array.height, array.size, array.blocksize) == (13, 15, 4, 4)


def test_round_trip_with_partial_blocks():
    array = UArray2b(13, 15, 4, 4)
    for col in range(13):
        for row in range(15):
            array[col, row] = 1000 * col + row
    for col in range(13):
        for row in range(15):
            assert array[col, row] == 1000 * col + row


def test_set_values_from_test_program():
    array = UArray2b(4, 6, 4, 3)
    array[2, 2] = 6
    assert array[2, 2] == 6


def test_block_major_order():
    array = UArray2b(3, 3, 4, 2)
    order = [(c, r) for c, r, _ in array.block_major()]
    assert order == [
        (0, 0), (1, 0), (0, 1), (1, 1),
        (2, 0), (2, 1),
        (0, 2), (1, 2),
        (2, 2),
    ]


def test_map_visits_each_cell_once():
    array = UArray2b(7, 5, 4, 3)
    for col in range(7):
        for row in range(5):
            array[col, row] = (col, row)
    seen = []
    array.map(lambda col, row, a, value: seen.append((a is array, value == (col, row), (col, row))))
    assert all(same and match for same, match, _ in seen)
    assert sorted(cell for _, _, cell in seen) == [
        (c, r) for c in range(7) for r in range(5)
    ]


@pytest.mark.parametrize("args", [(2, 2, 4, 0), (-1, 2, 4, 2), (2, -1, 4, 2), (2, 2, 0, 2)])
def test_bad_construction_raises(args):
    with pytest.raises(ValueError):
        UArray2b(*args)


@pytest.mark.parametrize("index", [(5, 0), (0, 4), (-1, 0), (0, -1)])
def test_out_of_bounds_raises(index):
    array = UArray2b(5, 4, 4, 2)
    for col in range(5):
        for row in range(4):
            array[col, row] = 10 * col + row
    with pytest.raises(IndexError):
        array[index]
    with pytest.raises(IndexError):
        array[index] = 0
    assert sorted(value for _, _, value in array.block_major()) == sorted(
        10 * col + row for col in range(5) for row in range(4)
    )