import math

import numpy as np
import pytest

from ctphantom import image_geometry


def brute_force_phantom(geometry, params):
    """Sum of density times voxel-center membership, straight from the definition."""
    xx, yy, zz = np.meshgrid(geometry.x, geometry.y, geometry.z, indexing="ij")
    phantom = np.zeros(geometry.dims, dtype=np.float64)
    for cx, cy, cz, rx, ry, rz, azim, _, value in np.asarray(params, dtype=np.float64):
        cos_a, sin_a = math.cos(math.radians(azim)), math.sin(math.radians(azim))
        xs, ys, zs = xx - cx, yy - cy, zz - cz
        xr = cos_a * xs + sin_a * ys
        yr = -sin_a * xs + cos_a * ys
        phantom += value * ((xr / rx) ** 2 + (yr / ry) ** 2 + (zs / rz) ** 2 <= 1)
    return phantom


def radius_from_center(geometry):
    """Distance of every voxel center from the physical origin."""
    xx, yy, zz = np.meshgrid(geometry.x, geometry.y, geometry.z, indexing="ij")
    return np.sqrt(xx ** 2 + yy ** 2 + zz ** 2)


@pytest.fixture
def grid20():
    return image_geometry(20)


@pytest.fixture
def small_zhu_grid():
    return image_geometry(32, nz=16, dz=2.0)


@pytest.fixture
def sphere5():
    return np.array([[0, 0, 0, 5, 5, 5, 0, 0, 1]], dtype=np.float64)


@pytest.fixture
def brute_force():
    return brute_force_phantom


@pytest.fixture
def center_radius():
    return radius_from_center
