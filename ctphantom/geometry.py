"""Image grid geometry for phantom voxelization.

This module provides :class:`ImageGeometry`, the description of a discrete 3D
image grid (size, voxel spacing and fractional-voxel offsets), together with
the coordinate mapping shared by every voxelization strategy and the FOV
validator.
"""

from dataclasses import dataclass, replace
from typing import Optional, Tuple

import numpy as np

from .constants import _COORD_DTYPE, _EPSILON


# ============================================================================
# Coordinate Mapping
# ============================================================================

def grid_axis(n, d, offset=0.0, over=1):
    """Physical coordinates of the grid points along one axis.

    Grid index ``i`` maps to ``(i - (n - 1) / 2 - offset) * d``. With an
    oversampling factor ``over`` the axis is refined to ``n * over`` points at
    pitch ``d / over``, each group of ``over`` points centered on the voxel it
    subdivides.

    Parameters
    ----------
    n : int
        Number of grid points (voxels) along the axis.
    d : float
        Voxel spacing, in physical units. May be negative.
    offset : float, optional
        Center offset in fractions of a voxel (default: 0.0).
    over : int, optional
        Oversampling factor (default: 1).

    Returns
    -------
    numpy.ndarray
        Coordinates, shape ``(n * over,)``, dtype float64.

    Examples
    --------
    >>> grid_axis(4, 1.0)
    array([-1.5, -0.5,  0.5,  1.5])
    >>> grid_axis(2, 1.0, over=2)
    array([-0.75, -0.25,  0.25,  0.75])
    """
    w = (n * over - 1) / 2 + offset * over
    return (np.arange(n * over, dtype=_COORD_DTYPE) - w) * d / over


# ============================================================================
# Image Geometry
# ============================================================================

@dataclass(frozen=True)
class ImageGeometry:
    """Discrete 3D image grid.

    Parameters
    ----------
    nx, ny, nz : int
        Number of voxels along each axis.
    dx, dy, dz : float
        Voxel spacing along each axis, in physical units.
    offset_x, offset_y, offset_z : float
        Grid center offsets, in fractions of a voxel.

    Notes
    -----
    Use :func:`image_geometry` for the usual defaults (cubic grid, isotropic
    spacing, field-of-view based spacing).
    """

    nx: int
    ny: int
    nz: int
    dx: float = 1.0
    dy: float = 1.0
    dz: float = 1.0
    offset_x: float = 0.0
    offset_y: float = 0.0
    offset_z: float = 0.0

    def __post_init__(self):
        for name in ("nx", "ny", "nz"):
            n = getattr(self, name)
            if isinstance(n, bool) or int(n) != n or n < 1:
                raise ValueError(f"{name} must be a positive integer, got {n}")
            # frozen dataclass: normalize through object.__setattr__
            object.__setattr__(self, name, int(n))
        for name in ("dx", "dy", "dz"):
            if not abs(getattr(self, name)) > _EPSILON:
                raise ValueError(f"{name} must be nonzero, got {getattr(self, name)}")

    @property
    def dims(self) -> Tuple[int, int, int]:
        return (self.nx, self.ny, self.nz)

    @property
    def spacing(self) -> Tuple[float, float, float]:
        return (self.dx, self.dy, self.dz)

    @property
    def offsets(self) -> Tuple[float, float, float]:
        return (self.offset_x, self.offset_y, self.offset_z)

    @property
    def fovs(self) -> Tuple[float, float, float]:
        """Field of view ``n * |d|`` along each axis."""
        return (self.nx * abs(self.dx), self.ny * abs(self.dy), self.nz * abs(self.dz))

    @property
    def x(self):
        return grid_axis(self.nx, self.dx, self.offset_x)

    @property
    def y(self):
        return grid_axis(self.ny, self.dy, self.offset_y)

    @property
    def z(self):
        return grid_axis(self.nz, self.dz, self.offset_z)

    def axes(self, over=1):
        """Return the (optionally oversampled) ``x``, ``y`` and ``z`` coordinate axes."""
        return tuple(
            grid_axis(n, d, offset, over)
            for n, d, offset in zip(self.dims, self.spacing, self.offsets)
        )

    def bounds(self):
        """Return ``((xmin, xmax), (ymin, ymax), (zmin, zmax))`` of the grid points."""
        return tuple((float(a.min()), float(a.max())) for a in self.axes())

    def z_slice(self, iz):
        """Single-slice geometry holding slice ``iz`` at its physical z position.

        Parameters
        ----------
        iz : int
            Slice index, ``0 <= iz < nz``.

        Returns
        -------
        ImageGeometry
            Geometry with ``nz == 1`` whose only z coordinate equals ``self.z[iz]``.
        """
        if not 0 <= iz < self.nz:
            raise IndexError(f"slice index {iz} out of range for nz={self.nz}")
        return replace(self, nz=1, offset_z=(self.nz - 1) / 2 + self.offset_z - iz)

    def down(self, factor):
        """Down-sample the grid by an integer factor.

        Voxel counts are floor-divided, spacings multiplied and offsets divided
        by ``factor``, so the field of view is preserved when ``n`` is a
        multiple of ``factor``.

        Examples
        --------
        >>> image_geometry(512, nz=64, dz=0.625, fov=500).down(8).dims
        (64, 64, 8)
        """
        if int(factor) != factor or factor < 1:
            raise ValueError(f"down-sampling factor must be a positive integer, got {factor}")
        factor = int(factor)
        return ImageGeometry(
            nx=max(self.nx // factor, 1),
            ny=max(self.ny // factor, 1),
            nz=max(self.nz // factor, 1),
            dx=self.dx * factor,
            dy=self.dy * factor,
            dz=self.dz * factor,
            offset_x=self.offset_x / factor,
            offset_y=self.offset_y / factor,
            offset_z=self.offset_z / factor,
        )


def image_geometry(nx, ny=None, nz=None, dx=1.0, dy=None, dz=None,
                   offset_x=0.0, offset_y=0.0, offset_z=0.0,
                   fov: Optional[float] = None, zfov: Optional[float] = None):
    """Build an :class:`ImageGeometry` with the customary defaults.

    Parameters
    ----------
    nx : int
        Number of voxels along x.
    ny, nz : int, optional
        Number of voxels along y and z (default: ``nx``).
    dx : float, optional
        Voxel spacing along x (default: 1.0).
    dy, dz : float, optional
        Voxel spacing along y and z (default: ``dx``).
    offset_x, offset_y, offset_z : float, optional
        Center offsets in fractions of a voxel (default: 0.0).
    fov : float, optional
        Transaxial field of view. Overrides ``dx`` and ``dy`` with ``fov / nx``
        and ``fov / ny``.
    zfov : float, optional
        Axial field of view. Overrides ``dz`` with ``zfov / nz``.

    Returns
    -------
    ImageGeometry

    Examples
    --------
    >>> ig = image_geometry(64, nz=32, dz=2.0)
    >>> ig.fovs
    (64.0, 64.0, 64.0)
    """
    ny = nx if ny is None else ny
    nz = nx if nz is None else nz
    if fov is not None:
        dx = fov / nx
        dy = fov / ny
    dy = dx if dy is None else dy
    dz = dx if dz is None else dz
    if zfov is not None:
        dz = zfov / nz
    return ImageGeometry(
        nx=int(nx), ny=int(ny), nz=int(nz),
        dx=float(dx), dy=float(dy), dz=float(dz),
        offset_x=float(offset_x), offset_y=float(offset_y), offset_z=float(offset_z),
    )
