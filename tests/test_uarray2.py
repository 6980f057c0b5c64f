import pytest

from ppmlocality.uarray2 import UArray2


def filled(width, height):
    array = UArray2(width, height, 4)
    for row in range(height):
        for col in range(width):
            array[col, row] = 1000 * col + row
    return array


def test_dimensions_are_kept():
    array = UArray2(13, 15, 4)
    assert (array.width, array.height, array.size) == (13, 15, 4)
    assert len(array) == 13 * 15


def test_set_and_get_round_trip():
    array = UArray2(13, 15, 4)
    array[2, 1] = 99
    array[3, 3] = 88
    array[10, 10] = 77
    assert array[2, 1] == 99
    assert array[3, 3] == 88
    assert array[10, 10] == 77


def test_every_cell_holds_its_own_value():
    array = filled(13, 15)
    for row in range(15):
        for col in range(13):
            assert array[col, row] == 1000 * col + row


def test_new_cells_are_empty():
    array = UArray2(3, 2, 8)
    assert all(value is None for _, _, value in array.row_major())


def test_row_major_order():
    array = filled(4, 3)
    visited = [(col, row) for col, row, _ in array.row_major()]
    assert visited == sorted(visited, key=lambda cell: (cell[1], cell[0]))
    assert len(visited) == 12


def test_col_major_order():
    array = filled(4, 3)
    visited = [(col, row) for col, row, _ in array.col_major()]
    assert visited == sorted(visited)
    assert len(visited) == 12


def test_map_row_major_counts_in_order():
    array = UArray2(13, 15, 4)
    counter = 1
    for row in range(15):
        for col in range(13):
            array[col, row] = counter
            counter += 1
    seen = []
    array.map_row_major(lambda col, row, a, value: seen.append(value))
    assert seen == list(range(1, 13 * 15 + 1))


def test_map_col_major_passes_array_and_values():
    array = filled(3, 5)
    calls = []
    array.map_col_major(lambda col, row, a, value: calls.append((col, row, a, value)))
    assert all(a is array and value == array[col, row] for col, row, a, value in calls)
    assert [(c, r) for c, r, _, _ in calls] == [(c, r) for c, r, _ in array.col_major()]


def test_empty_array_visits_nothing():
    array = UArray2(0, 5, 4)
    seen = []
    array.map_row_major(lambda *args: seen.append(args))
    assert seen == []


@pytest.mark.parametrize("args", [(-1, 2, 4), (2, -1, 4), (2, 2, 0)])
def test_bad_construction_raises(args):
    with pytest.raises(ValueError):
        UArray2(*args)


@pytest.mark.parametrize("index", [(3, 0), (0, 2), (-1, 0), (0, -1)])
def test_out_of_bounds_raises(index):
    array = filled(3, 2)
    before = list(array.row_major())
    with pytest.raises(IndexError):
        array[index]
    with pytest.raises(IndexError):
        array[index] = 1
    assert list(array.row_major()) == before
    assert [value for _, _, value in array.row_major()] == [0, 1000, 2000, 1, 1001, 2001]