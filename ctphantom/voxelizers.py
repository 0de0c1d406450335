"""Voxelization strategies for ellipsoid phantoms.

This module contains the three host-side voxelization strategies. Each takes
an image geometry and a parameter table and returns the weighted
sum of ellipsoid memberships as a float32 torch tensor of shape
``(nx, ny, nz)``:

- ``slow``: exhaustive sampling on a grid refined by ``over`` in every axis,
  block-averaged back to the image grid.
- ``fast``: interior / exterior / edge classification on the image grid,
  with sub-voxel sampling of edge voxels only.
- ``lowmem``: ``fast`` applied one z-slice at a time.
"""

import logging
from enum import Enum

import numpy as np
import torch

from .constants import _COORD_DTYPE, _DTYPE
from .exceptions import InvalidEnumError
from .kernels import _ellipsoid_fraction_kernel
from .parameters import as_parameter_table
from .rotation import azimuth_trig, inside_ellipsoid, rotate3
from .utils import DeviceManager, _block_average, _nbytes, _sub_voxel_offsets

logger = logging.getLogger(__name__)


class Mode(str, Enum):
    """Voxelization strategy selector."""

    SLOW = "slow"
    FAST = "fast"
    LOWMEM = "lowmem"

    @classmethod
    def parse(cls, mode):
        """Return the :class:`Mode` for ``mode``, raising ``InvalidEnumError`` if unknown."""
        try:
            return cls(mode)
        except ValueError:
            raise InvalidEnumError(
                f"unknown voxelization mode {mode!r}; expected one of {[m.value for m in cls]}"
            ) from None


# ============================================================================
# Oversampled Strategy
# ============================================================================

def voxelize_oversampled(geometry, params, over=1, show_mem=False, device="cpu"):
    """Voxelize ellipsoids by brute-force sampling of a refined grid.

    Every voxel is subdivided into ``over**3`` sub-voxels whose centers are
    tested exactly against each ellipsoid; the refined volume is then
    block-averaged back to the image grid.

    Parameters
    ----------
    geometry : ImageGeometry
        Image grid.
    params : array-like
        Parameter table, shape ``(N, 9)``, checked with
        :func:`~ctphantom.parameters.as_parameter_table`.
    over : int, optional
        Oversampling factor (default: 1).
    show_mem : bool, optional
        Log the size of the refined working buffer (default: False).
    device : str or torch.device, optional
        Device on which the volume is computed and returned (default: 'cpu').

    Returns
    -------
    torch.Tensor
        Phantom volume, shape ``(nx, ny, nz)``, dtype float32.

    Notes
    -----
    With ``over == 1`` each voxel value is exactly the sum of the densities of
    the ellipsoids containing its center. Memory and time grow as ``over**3``.
    """
    device = DeviceManager.resolve(device)
    params = as_parameter_table(params)
    refined_shape = tuple(n * over for n in geometry.dims)
    if show_mem:
        logger.info(
            "slow: refined grid %s, %.1f MB per buffer",
            refined_shape, _nbytes(refined_shape, _DTYPE) / 2**20,
        )

    # Broadcastable refined axes: x -> (X, 1, 1), y -> (1, Y, 1), z -> (1, 1, Z)
    x, y, z = (torch.from_numpy(a).to(device) for a in geometry.axes(over))
    x = x[:, None, None]
    y = y[None, :, None]
    z = z[None, None, :]

    phantom = torch.zeros(refined_shape, dtype=torch.float32, device=device)
    for cx, cy, cz, rx, ry, rz, azim, polar, value in params.tolist():
        xr, yr, zr = rotate3(x - cx, y - cy, z - cz, azim, polar)
        member = inside_ellipsoid(xr, yr, zr, rx, ry, rz)
        phantom += value * member.to(torch.float32)

    return _block_average(phantom, over)


# ============================================================================
# Analytic-Edge Strategy
# ============================================================================

def voxelize_analytic_edge(geometry, params, over=1, show_mem=False, device="cpu"):
    """Voxelize ellipsoids with interior / exterior / edge classification.

    Voxels entirely inside an ellipsoid get weight 1, voxels entirely outside
    get 0, and only the remaining edge voxels are sampled at ``over**3``
    sub-voxel positions to estimate their partial-volume fraction.

    Parameters
    ----------
    geometry : ImageGeometry
        Image grid.
    params : array-like
        Parameter table, shape ``(N, 9)``, checked with
        :func:`~ctphantom.parameters.as_parameter_table`.
    over : int, optional
        Sub-voxel samples per axis for edge voxels (default: 1, which reduces
        the estimate to a voxel-center test).
    show_mem : bool, optional
        Log the edge-voxel fraction of each ellipsoid (default: False).
    device : str or torch.device, optional
        Device of the returned volume (default: 'cpu').

    Returns
    -------
    torch.Tensor
        Phantom volume, shape ``(nx, ny, nz)``, dtype float32.
    """
    device = DeviceManager.resolve(device)
    params = as_parameter_table(params)
    x, y, z = geometry.axes()
    hx, hy, hz = (abs(d) / 2 for d in geometry.spacing)
    xf, yf, zf = _sub_voxel_offsets(over, geometry.dx, geometry.dy, geometry.dz)

    phantom = np.zeros(geometry.dims, dtype=_DTYPE)
    gray = np.empty(geometry.dims, dtype=_COORD_DTYPE)
    n_vox = gray.size
    for ip, (cx, cy, cz, rx, ry, rz, azim, polar, value) in enumerate(params.tolist()):
        cos_a, sin_a = azimuth_trig(azim, polar)
        n_edge = _ellipsoid_fraction_kernel(
            x, y, z,
            cx, cy, cz, rx, ry, rz,
            cos_a, sin_a,
            hx, hy, hz,
            xf, yf, zf,
            gray,
        )
        if show_mem:
            logger.info(
                "fast: ellipsoid %d edge fraction %.4f = %d/%d",
                ip, n_edge / n_vox, n_edge, n_vox,
            )
        phantom += _DTYPE(value) * gray.astype(_DTYPE)

    return DeviceManager.from_numpy(phantom, device)


# ============================================================================
# Slice-wise Strategy
# ============================================================================

def voxelize_slicewise(geometry, params, over=1, show_mem=False, device="cpu"):
    """Analytic-edge voxelization performed one z-slice at a time.

    Peak working memory is bounded by a single slice. Results are identical
    to :func:`voxelize_analytic_edge`.

    Parameters
    ----------
    geometry : ImageGeometry
        Image grid.
    params : array-like
        Parameter table, shape ``(N, 9)``, checked with
        :func:`~ctphantom.parameters.as_parameter_table`.
    over : int, optional
        Sub-voxel samples per axis for edge voxels (default: 1).
    show_mem : bool, optional
        Log edge statistics for the first slice only (default: False).
    device : str or torch.device, optional
        Device of the returned volume (default: 'cpu').

    Returns
    -------
    torch.Tensor
        Phantom volume, shape ``(nx, ny, nz)``, dtype float32.
    """
    device = DeviceManager.resolve(device)
    params = as_parameter_table(params)
    phantom = torch.zeros(geometry.dims, dtype=torch.float32, device=device)
    for iz in range(geometry.nz):
        phantom[:, :, iz] = voxelize_analytic_edge(
            geometry.z_slice(iz), params, over,
            show_mem=show_mem and iz == 0, device=device,
        )[:, :, 0]
    return phantom


_STRATEGIES = {
    Mode.SLOW: voxelize_oversampled,
    Mode.FAST: voxelize_analytic_edge,
    Mode.LOWMEM: voxelize_slicewise,
}


def get_strategy(mode):
    """Return the voxelization function registered for ``mode``.

    Raises
    ------
    InvalidEnumError
        If ``mode`` is not a known :class:`Mode`.
    """
    return _STRATEGIES[Mode.parse(mode)]
