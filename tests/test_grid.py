import numpy as np
import pytest

from shadowcast.grid import Grid


def test_negative_dimensions_raise():
    with pytest.raises(ValueError):
        Grid(-1, 3)
    with pytest.raises(ValueError):
        Grid(3, -1)


def test_zero_sized_grid_allowed():
    grid = Grid(0, 0)
    assert grid.shape == (0, 0)
    assert grid.extract_attributes(lambda c: c, dtype=bool).shape == (0, 0)


def test_shape_is_height_by_width():
    grid = Grid(4, 2, fill_value=0, dtype=np.int32)
    assert grid.width == 4
    assert grid.height == 2
    assert grid.shape == (2, 4)


def test_numeric_grid_defaults_to_zero():
    grid = Grid(2, 2, dtype=np.int16)
    assert grid.get(1, 1) == 0


def test_get_and_set_use_xy():
    grid = Grid(3, 2)
    grid.set(2, 1, "x")
    assert grid.get(2, 1) == "x"
    assert grid.data[1, 2] == "x"
    assert grid.get(0, 0) is None


def test_out_of_bounds_access_raises():
    grid = Grid(2, 2)
    with pytest.raises(IndexError):
        grid.get(2, 0)
    with pytest.raises(IndexError):
        grid.set(-1, 0, "x")


def test_tuple_cells_are_not_broadcast():
    cell = (1, False, ".")
    grid = Grid(3, 2, fill_value=cell)
    assert grid.get(2, 1) == cell
    grid.fill((0, False, "#"), x=1, y=0, width=1, height=2)
    assert grid.get(1, 0) == (0, False, "#")
    assert grid.get(1, 1) == (0, False, "#")
    assert grid.get(0, 0) == cell


def test_fill_region_is_clipped():
    grid = Grid(4, 4, fill_value=0, dtype=np.int8)
    grid.fill(7, x=2, y=2, width=10, height=10)
    expected = np.zeros((4, 4), dtype=np.int8)
    expected[2:, 2:] = 7
    assert np.array_equal(grid.data, expected)

    grid.fill(9, x=10, y=10, width=2, height=2)
    assert np.array_equal(grid.data, expected)

    grid.fill(1)
    assert (grid.data == 1).all()


def test_extract_and_fill_attributes():
    grid = Grid(3, 2, fill_value=(True, False))
    grid.set(1, 0, (False, False))

    transparent = grid.extract_attributes(lambda cell: cell[0], dtype=bool)
    assert transparent.dtype == np.bool_
    assert transparent.tolist() == [[True, False, True], [True, True, True]]

    grid.fill_attributes(~transparent, lambda cell, flag: (cell[0], bool(flag)))
    assert grid.get(1, 0) == (False, True)
    assert grid.get(0, 0) == (True, False)


def test_fill_attributes_shape_mismatch():
    grid = Grid(3, 2)
    with pytest.raises(ValueError):
        grid.fill_attributes(np.zeros((3, 2)), lambda cell, value: value)


def test_data_view_is_read_only():
    grid = Grid(2, 2, fill_value=0, dtype=np.int8)
    with pytest.raises(ValueError):
        grid.data[0, 0] = 1


def test_set_data_replaces_contents():
    grid = Grid(2, 2, fill_value=0, dtype=np.int8)
    grid.set_data(np.array([[1, 2], [3, 4]]))
    assert grid.get(1, 0) == 2
    with pytest.raises(ValueError):
        grid.set_data(np.zeros((3, 3)))
