import numpy as np
import pytest

from ctphantom import GeometryViolationError, check_fov, image_geometry
from ctphantom.parameters import shepp_logan_3d_parameters


def test_ellipsoid_inside_all_axes_passes(grid20):
    # grid points span [-9.5, 9.5] on every axis
    assert check_fov(grid20, [[1, -1, 2, 5, 6, 7, 0, 0, 1]]) is True


def test_x_extent_beyond_max_fails(grid20):
    with pytest.raises(GeometryViolationError, match="x range"):
        check_fov(grid20, [[5, 0, 0, 5, 1, 1, 0, 0, 1]])


@pytest.mark.parametrize("row, axis", [
    ([-6, 0, 0, 4, 1, 1, 0, 0, 1], "x"),
    ([0, 9, 0, 1, 0.6, 1, 0, 0, 1], "y"),
    ([0, 0, -8, 1, 1, 2, 0, 0, 1], "z"),
])
def test_each_axis_checked_independently(grid20, row, axis):
    with pytest.raises(GeometryViolationError, match=f"{axis} range"):
        check_fov(grid20, [row])


def test_fails_on_first_violation(grid20):
    params = [
        [0, 0, 0, 1, 1, 1, 0, 0, 1],
        [0, 0, 0, 20, 1, 1, 0, 0, 1],
        [0, 0, 0, 1, 1, 30, 0, 0, 1],
    ]
    with pytest.raises(GeometryViolationError, match="ellipsoid 1 exceeds fov: x"):
        check_fov(grid20, params)


def test_touching_the_last_grid_point_passes(grid20):
    assert check_fov(grid20, [[0, 0, 0, 9.5, 9.5, 9.5, 0, 0, 1]])


def test_offset_grid_shifts_bounds():
    ig = image_geometry(20, offset_x=2.0)
    # x grid points span [-11.5, 7.5]
    assert check_fov(ig, [[-6, 0, 0, 5, 1, 1, 0, 0, 1]])
    with pytest.raises(GeometryViolationError):
        check_fov(ig, [[4, 0, 0, 4, 1, 1, 0, 0, 1]])


@pytest.mark.parametrize("archetype", ["zhu", "kak"])
def test_shepp_logan_fits_its_own_fov(small_zhu_grid, archetype):
    params = shepp_logan_3d_parameters(*small_zhu_grid.fovs, archetype)
    assert check_fov(small_zhu_grid, params)


def test_is_also_a_value_error(grid20):
    with pytest.raises(ValueError):
        check_fov(grid20, np.array([[0, 0, 0, 100, 1, 1, 0, 0, 1]]))
