"""Ellipsoid parameter tables.

This module defines the row type :class:`EllipsoidSpec`, conversion and
validation of user-supplied parameter tables, and the builders for the named
phantom archetypes (3D Shepp-Logan variants and a simple spheroid).

A parameter table is a ``(N, 9)`` float64 array with columns::

    [cx, cy, cz, rx, ry, rz, azimuth_deg, polar_deg, density]
"""

import logging
from enum import Enum
from typing import NamedTuple, Tuple

import numpy as np
import torch

from .constants import _COORD_DTYPE, _N_COLUMNS
from .exceptions import InvalidEnumError, InvalidParameterError, ShapeError

logger = logging.getLogger(__name__)


# ============================================================================
# Row Type
# ============================================================================

class EllipsoidSpec(NamedTuple):
    """One ellipsoid: center, radii (physical units), angles (degrees), density."""

    cx: float
    cy: float
    cz: float
    rx: float
    ry: float
    rz: float
    azimuth_deg: float = 0.0
    polar_deg: float = 0.0
    density: float = 1.0

    @property
    def center(self) -> Tuple[float, float, float]:
        return (self.cx, self.cy, self.cz)

    @property
    def radii(self) -> Tuple[float, float, float]:
        return (self.rx, self.ry, self.rz)


class Archetype(str, Enum):
    """Named phantom parameter tables."""

    ZHU = "zhu"
    KAK = "kak"
    E3D = "e3d"
    SPHEROID = "spheroid"

    @classmethod
    def parse(cls, tag):
        """Return the :class:`Archetype` for ``tag``, raising ``InvalidEnumError`` if unknown."""
        try:
            return cls(tag)
        except ValueError:
            raise InvalidEnumError(
                f"unknown phantom archetype {tag!r}; expected one of "
                f"{[a.value for a in cls]}"
            ) from None


# ============================================================================
# Literal Tables (fractions of the half field of view)
# ============================================================================

# Kak & Slaney, "Principles of Computerized Tomographic Imaging", values kept
# as published including the suspected typos.
_KAK = np.array([
    [0,      0,      0,      0.69,   0.92,  0.9,   0,  0,  2.0],
    [0,      0,      0,      0.6624, 0.874, 0.88,  0,  0, -0.98],
    [-0.22,  0,     -0.25,   0.41,   0.16,  0.21,  0,  0, -0.98],
    [0.22,   0,     -0.25,   0.31,   0.11,  0.22,  72, 0, -0.02],
    [0,      0.1,   -0.25,   0.046,  0.046, 0.046, 0,  0,  0.02],
    [0,      0.1,   -0.25,   0.046,  0.046, 0.046, 0,  0,  0.02],
    [-0.8,  -0.65,  -0.25,   0.046,  0.023, 0.02,  0,  0,  0.01],
    [0.06,  -0.065, -0.25,   0.046,  0.023, 0.02,  90, 0,  0.01],
    [0.06,  -0.105,  0.625,  0.56,   0.04,  0.1,   90, 0,  0.02],
    [0,      0.1,   -0.625,  0.056,  0.056, 0.1,   0,  0, -0.02],
], dtype=_COORD_DTYPE)

# Corrected 3D Shepp-Logan values from Lei Zhu (Stanford).
_ZHU = np.array([
    [0,      0,       0,       0.69,   0.92,  0.9,   0,   0,  2.0],
    [0,     -0.0184,  0,       0.6624, 0.874, 0.88,  0,   0, -0.98],
    [-0.22,  0,      -0.25,    0.41,   0.16,  0.21, -72,  0, -0.02],
    [0.22,   0,      -0.25,    0.31,   0.11,  0.22,  72,  0, -0.02],
    [0,      0.35,   -0.25,    0.21,   0.25,  0.35,  0,   0,  0.01],
    [0,      0.1,    -0.25,    0.046,  0.046, 0.046, 0,   0,  0.01],
    [-0.08, -0.605,  -0.25,    0.046,  0.023, 0.02,  0,   0,  0.01],
    [0,     -0.1,    -0.25,    0.046,  0.046, 0.046, 0,   0,  0.01],
    [0,     -0.605,  -0.25,    0.023,  0.023, 0.023, 0,   0,  0.01],
    [0.06,  -0.605,  -0.25,    0.046,  0.023, 0.02, -90,  0,  0.01],
    [0.06,  -0.105,   0.0625,  0.056,  0.04,  0.1,  -90,  0,  0.02],
    [0,      0.1,     0.625,   0.056,  0.056, 0.1,   0,   0, -0.02],
], dtype=_COORD_DTYPE)

_SHEPP_LOGAN_TABLES = {
    Archetype.ZHU: _ZHU,
    Archetype.KAK: _KAK,
}


# ============================================================================
# Table Builders
# ============================================================================

def shepp_logan_3d_parameters(xfov, yfov, zfov, archetype=Archetype.ZHU):
    """3D Shepp-Logan parameter table scaled to a field of view.

    The literal tables are in fractions of the half field of view; columns
    ``cx, rx`` are multiplied by ``xfov / 2``, ``cy, ry`` by ``yfov / 2`` and
    ``cz, rz`` by ``zfov / 2``.

    Parameters
    ----------
    xfov, yfov, zfov : float
        Field of view along each axis, in physical units.
    archetype : Archetype or str, optional
        ``"zhu"`` (default) or ``"kak"``.

    Returns
    -------
    numpy.ndarray
        Parameter table, shape ``(N, 9)``.

    Raises
    ------
    InvalidEnumError
        For ``"e3d"`` (not available) or any unknown tag.

    Examples
    --------
    >>> shepp_logan_3d_parameters(2.0, 2.0, 2.0, "kak").shape
    (10, 9)
    """
    archetype = Archetype.parse(archetype)
    if archetype not in _SHEPP_LOGAN_TABLES:
        raise InvalidEnumError(f"no 3D Shepp-Logan parameters for archetype {archetype.value!r}")
    params = _SHEPP_LOGAN_TABLES[archetype].copy()
    params[:, [0, 3]] *= xfov / 2
    params[:, [1, 4]] *= yfov / 2
    params[:, [2, 5]] *= zfov / 2
    return params


def spheroid_parameters(xfov, yfov, zfov, dx, dy, dz):
    """Single ellipsoid at the origin filling the field of view less one voxel.

    Returns
    -------
    numpy.ndarray
        Parameter table, shape ``(1, 9)``, radii ``(xfov/2 - dx, yfov/2 - dy,
        zfov/2 - dz)``, no rotation, density 1.
    """
    return np.array(
        [[0, 0, 0, xfov / 2 - dx, yfov / 2 - dy, zfov / 2 - dz, 0, 0, 1]],
        dtype=_COORD_DTYPE,
    )


def archetype_parameters(geometry, archetype=Archetype.ZHU):
    """Parameter table of a named archetype for an image geometry.

    Parameters
    ----------
    geometry : ImageGeometry
        Supplies the field of view (and voxel spacing for ``"spheroid"``).
    archetype : Archetype or str, optional
        One of ``"zhu"`` (default), ``"kak"``, ``"spheroid"``.

    Returns
    -------
    numpy.ndarray
        Parameter table, shape ``(N, 9)``.

    Raises
    ------
    InvalidEnumError
        For ``"e3d"`` or an unknown tag.
    """
    archetype = Archetype.parse(archetype)
    xfov, yfov, zfov = geometry.fovs
    if archetype in (Archetype.ZHU, Archetype.KAK):
        return shepp_logan_3d_parameters(xfov, yfov, zfov, archetype)
    if archetype is Archetype.SPHEROID:
        return spheroid_parameters(xfov, yfov, zfov, geometry.dx, geometry.dy, geometry.dz)
    raise InvalidEnumError(f"phantom archetype {archetype.value!r} is not implemented")


# ============================================================================
# Validation
# ============================================================================

def as_parameter_table(params):
    """Convert a user-supplied parameter table to a validated float64 array.

    Parameters
    ----------
    params : array-like, torch.Tensor or sequence of EllipsoidSpec
        Table of shape ``(N, 9)``. A single row of 9 values is accepted as a
        one-row table.

    Returns
    -------
    numpy.ndarray
        New array of shape ``(N, 9)``; the input is never aliased.

    Raises
    ------
    ShapeError
        If the table does not have exactly 9 columns.
    InvalidParameterError
        If a value is not finite or a radius is not positive.
    """
    if isinstance(params, torch.Tensor):
        params = params.detach().cpu().numpy()
    try:
        table = np.array(params, dtype=_COORD_DTYPE)
    except ValueError as exc:
        raise ShapeError(f"ellipsoid parameter table is not a numeric (N, {_N_COLUMNS}) array") from exc
    if table.ndim == 1 and table.size == _N_COLUMNS:
        table = table.reshape(1, _N_COLUMNS)
    elif table.ndim == 1 and table.size == 0:
        table = table.reshape(0, _N_COLUMNS)
    if table.ndim != 2 or table.shape[1] != _N_COLUMNS:
        raise ShapeError(
            f"ellipsoid parameter table must have shape (N, {_N_COLUMNS}), got {table.shape}"
        )
    if not np.all(np.isfinite(table)):
        raise InvalidParameterError("ellipsoid parameters must be finite")
    bad = np.flatnonzero(np.any(table[:, 3:6] <= 0, axis=1))
    if bad.size:
        raise InvalidParameterError(
            f"ellipsoid {bad[0]} has non-positive radius {tuple(table[bad[0], 3:6])}"
        )
    logger.debug("Validated parameter table with %d ellipsoids", table.shape[0])
    return table
