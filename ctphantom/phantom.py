"""Ellipsoid phantom generation.

This module contains the phantom driver :func:`generate_phantom`, which
validates the parameter table and options, optionally checks the field of
view, runs the selected voxelization strategy and returns the accumulated
volume, plus thin adapters that build an :class:`ImageGeometry` from grid
sizes and delegate to it.
"""

import logging
from dataclasses import dataclass

import numpy as np

from .constants import DEFAULT_DEVICE, DEFAULT_MODE, DEFAULT_OVERSAMPLE
from .exceptions import UnsupportedFeatureError
from .fov import check_fov as _check_fov
from .geometry import image_geometry
from .parameters import Archetype, archetype_parameters, as_parameter_table
from .voxelizers import Mode, get_strategy

logger = logging.getLogger(__name__)


# ============================================================================
# Options
# ============================================================================

@dataclass(frozen=True)
class PhantomOptions:
    """Validated options of :func:`generate_phantom`.

    Parameters
    ----------
    oversample : int
        Oversampling factor, ``>= 1``.
    check_fov : bool
        Raise if any ellipsoid extends beyond the grid.
    mode : Mode or str
        ``"slow"``, ``"fast"`` or ``"lowmem"``.
    show_mem : bool
        Log memory / edge-voxel statistics.
    density_scale : float
        Factor applied to the density column (e.g. 1000 for HU-like values).
    return_params : bool
        Also return the (scaled) parameter table.
    device : str or torch.device
        Device of the returned volume.
    """

    oversample: int = DEFAULT_OVERSAMPLE
    check_fov: bool = False
    mode: Mode = Mode(DEFAULT_MODE)
    show_mem: bool = False
    density_scale: float = 1.0
    return_params: bool = False
    device: str = DEFAULT_DEVICE

    def __post_init__(self):
        if isinstance(self.oversample, bool) or int(self.oversample) != self.oversample \
                or self.oversample < 1:
            raise ValueError(f"oversample must be a positive integer, got {self.oversample}")
        if not np.isfinite(self.density_scale):
            raise ValueError(f"density_scale must be finite, got {self.density_scale}")
        # frozen dataclass: normalize through object.__setattr__
        object.__setattr__(self, "oversample", int(self.oversample))
        object.__setattr__(self, "mode", Mode.parse(self.mode))


# ============================================================================
# Phantom Driver
# ============================================================================

def generate_phantom(geometry, parameters=Archetype.ZHU, **options):
    """Generate an ellipsoid phantom volume.

    Parameters
    ----------
    geometry : ImageGeometry
        Image grid of the phantom.
    parameters : Archetype, str or array-like, optional
        Either an archetype tag (``"zhu"`` (default), ``"kak"``, ``"spheroid"``)
        scaled to the field of view of ``geometry``, or an explicit parameter
        table of shape ``(N, 9)`` with columns ``[cx, cy, cz, rx, ry, rz,
        azimuth_deg, polar_deg, density]`` in physical units. ``None`` selects
        ``"zhu"``.
    **options
        Fields of :class:`PhantomOptions`: ``oversample``, ``check_fov``,
        ``mode``, ``show_mem``, ``density_scale``, ``return_params``,
        ``device``.

    Returns
    -------
    phantom : torch.Tensor
        Volume of shape ``(nx, ny, nz)``, dtype float32. Each voxel holds the
        sum over ellipsoids of density times the fraction of the voxel inside
        the ellipsoid.
    params : numpy.ndarray
        The density-scaled parameter table, only if ``return_params=True``.

    Raises
    ------
    ShapeError
        If the table does not have 9 columns.
    InvalidEnumError
        For an unknown ``mode`` or archetype (including ``"e3d"``).
    InvalidParameterError
        If a value is not finite or a radius is not positive, including
        archetype tables on a grid too small to hold them.
    UnsupportedFeatureError
        If any ellipsoid has a nonzero polar angle.
    GeometryViolationError
        If ``check_fov=True`` and an ellipsoid exceeds the grid.

    Examples
    --------
    >>> ig = image_geometry(64, nz=32)
    >>> phantom = generate_phantom(ig, "zhu", density_scale=1000)
    >>> phantom.shape
    torch.Size([64, 64, 32])
    """
    opts = PhantomOptions(**options)

    if parameters is None:
        parameters = Archetype.ZHU
    if isinstance(parameters, (str, Archetype)):
        parameters = archetype_parameters(geometry, parameters)
    params = as_parameter_table(parameters)

    polar = np.flatnonzero(params[:, 7] != 0)
    if polar.size:
        raise UnsupportedFeatureError(
            f"ellipsoid {polar[0]} has polar angle {params[polar[0], 7]} deg; "
            "polar rotation is not implemented"
        )

    params[:, 8] *= opts.density_scale

    if opts.check_fov:
        _check_fov(geometry, params)

    voxelize = get_strategy(opts.mode)
    logger.debug(
        "Voxelizing %d ellipsoids on %s grid (mode=%s, oversample=%d)",
        params.shape[0], geometry.dims, opts.mode.value, opts.oversample,
    )
    phantom = voxelize(
        geometry, params, opts.oversample,
        show_mem=opts.show_mem, device=opts.device,
    )

    if opts.return_params:
        return phantom, params
    return phantom


# ============================================================================
# Convenience Adapters
# ============================================================================

def phantom_from_spacing(nx, dx, parameters, **options):
    """Phantom on an ``nx``-cubed grid with isotropic voxel size ``dx``."""
    return generate_phantom(image_geometry(nx, dx=dx), parameters, **options)


def phantom_from_size(nx, parameters, **options):
    """Phantom on an ``nx``-cubed grid with unit voxel size."""
    return phantom_from_spacing(nx, 1.0, parameters, **options)


def phantom_from_grid(nx, ny=None, dx=1.0, nz=None, parameters=Archetype.ZHU, **options):
    """Phantom on an ``nx`` x ``ny`` x ``nz`` grid, ``"zhu"`` by default.

    ``ny`` and ``nz`` default to ``nx``.
    """
    return generate_phantom(image_geometry(nx, ny=ny, nz=nz, dx=dx), parameters, **options)
