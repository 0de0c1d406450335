import numpy as np
import pytest
import torch

from ctphantom import (
    Archetype,
    EllipsoidSpec,
    InvalidEnumError,
    InvalidParameterError,
    ShapeError,
    archetype_parameters,
    image_geometry,
    shepp_logan_3d_parameters,
    spheroid_parameters,
)
from ctphantom.parameters import as_parameter_table


@pytest.mark.parametrize("archetype, n_rows", [("zhu", 12), ("kak", 10), (Archetype.ZHU, 12)])
def test_shepp_logan_table_sizes(archetype, n_rows):
    params = shepp_logan_3d_parameters(2.0, 2.0, 2.0, archetype)
    assert params.shape == (n_rows, 9)


@pytest.mark.parametrize("archetype", ["zhu", "kak"])
def test_shepp_logan_scaling_is_linear_per_axis(archetype):
    unit = shepp_logan_3d_parameters(2.0, 2.0, 2.0, archetype)
    scaled = shepp_logan_3d_parameters(300.0, 200.0, 50.0, archetype)
    np.testing.assert_allclose(scaled[:, [0, 3]], unit[:, [0, 3]] * 150.0)
    np.testing.assert_allclose(scaled[:, [1, 4]], unit[:, [1, 4]] * 100.0)
    np.testing.assert_allclose(scaled[:, [2, 5]], unit[:, [2, 5]] * 25.0)
    # angles and densities are not scaled
    np.testing.assert_array_equal(scaled[:, 6:], unit[:, 6:])


def test_shepp_logan_builder_returns_fresh_copies():
    first = shepp_logan_3d_parameters(2.0, 2.0, 2.0)
    first[:] = 0
    second = shepp_logan_3d_parameters(2.0, 2.0, 2.0)
    assert second[0, 8] == 2.0


@pytest.mark.parametrize("tag", ["e3d", "shepp_logan", "", Archetype.SPHEROID])
def test_shepp_logan_rejects_other_tags(tag):
    with pytest.raises(InvalidEnumError):
        shepp_logan_3d_parameters(2.0, 2.0, 2.0, tag)


def test_spheroid_parameters():
    params = spheroid_parameters(64.0, 32.0, 16.0, 1.0, 0.5, 2.0)
    np.testing.assert_array_equal(params, [[0, 0, 0, 31.0, 15.5, 6.0, 0, 0, 1]])


def test_archetype_parameters_use_geometry_fov():
    ig = image_geometry(40, nz=10, dz=2.0)
    np.testing.assert_allclose(
        archetype_parameters(ig, "kak"), shepp_logan_3d_parameters(40.0, 40.0, 20.0, "kak")
    )
    np.testing.assert_allclose(
        archetype_parameters(ig, Archetype.SPHEROID), [[0, 0, 0, 19.0, 19.0, 8.0, 0, 0, 1]]
    )


@pytest.mark.parametrize("tag", ["e3d", "bogus"])
def test_archetype_parameters_unknown_or_unimplemented(tag):
    with pytest.raises(InvalidEnumError):
        archetype_parameters(image_geometry(8), tag)


def test_as_parameter_table_accepts_specs_tensors_and_rows():
    spec = EllipsoidSpec(1, 2, 3, 4, 5, 6, 30, 0, -0.5)
    assert spec.center == (1, 2, 3)
    assert spec.radii == (4, 5, 6)
    from_specs = as_parameter_table([spec, EllipsoidSpec(0, 0, 0, 1, 1, 1)])
    assert from_specs.shape == (2, 9)
    assert from_specs[1, 8] == 1.0

    from_tensor = as_parameter_table(torch.tensor([list(spec)], dtype=torch.float32))
    np.testing.assert_allclose(from_tensor, [list(spec)])

    from_row = as_parameter_table(list(spec))
    assert from_row.shape == (1, 9)

    assert as_parameter_table([]).shape == (0, 9)


def test_as_parameter_table_does_not_alias_input():
    params = np.array([[0, 0, 0, 1, 1, 1, 0, 0, 1.0]])
    table = as_parameter_table(params)
    table[0, 8] = 5.0
    assert params[0, 8] == 1.0


@pytest.mark.parametrize("shape", [(3, 8), (2, 10), (9,) * 3])
def test_as_parameter_table_wrong_columns(shape):
    with pytest.raises(ShapeError):
        as_parameter_table(np.ones(shape))


def test_as_parameter_table_ragged_rows():
    with pytest.raises(ShapeError):
        as_parameter_table([[0, 0, 0, 1, 1, 1, 0, 0, 1], [0, 0, 0]])


@pytest.mark.parametrize("radii", [(0, 1, 1), (1, -2, 1), (1, 1, 0)])
def test_as_parameter_table_non_positive_radius(radii):
    with pytest.raises(InvalidParameterError, match="radius"):
        as_parameter_table([[0, 0, 0, *radii, 0, 0, 1]])


def test_as_parameter_table_non_finite():
    with pytest.raises(InvalidParameterError):
        as_parameter_table([[0, 0, np.nan, 1, 1, 1, 0, 0, 1]])
