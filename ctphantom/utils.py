"""Utility classes and helper functions for the ctphantom package.

This module provides device management for the returned torch volumes,
sub-voxel sample offsets, block averaging of oversampled volumes and
memory reporting helpers.
"""

import numpy as np
import torch

from .constants import _COORD_DTYPE


# ============================================================================
# Device Management Utilities
# ============================================================================

class DeviceManager:
    """Utilities for placing phantom volumes on torch devices."""

    @staticmethod
    def resolve(device):
        """Normalize a device specification.

        Parameters
        ----------
        device : str or torch.device or None
            Requested device. ``None`` means CPU.

        Returns
        -------
        torch.device

        Examples
        --------
        >>> DeviceManager.resolve('cpu')
        device(type='cpu')
        """
        return torch.device("cpu") if device is None else torch.device(device)

    @staticmethod
    def from_numpy(array, device, dtype=torch.float32):
        """Copy a NumPy array to a torch tensor of ``dtype`` on ``device``.

        The returned tensor never shares memory with ``array``.
        """
        return torch.tensor(array, dtype=dtype, device=device)


# ============================================================================
# Sub-voxel Sampling
# ============================================================================

def _sub_voxel_offsets(over, dx, dy, dz):
    """Offsets of the ``over**3`` regular sub-voxel samples of one voxel.

    Offsets along each axis are ``(k - (over - 1) / 2) / over * d`` for
    ``k = 0 .. over - 1``, i.e. the centers of the sub-voxels.

    Parameters
    ----------
    over : int
        Oversampling factor.
    dx, dy, dz : float
        Voxel spacing.

    Returns
    -------
    xf, yf, zf : numpy.ndarray
        Flattened offsets, each of shape ``(over**3,)``.

    Examples
    --------
    >>> xf, yf, zf = _sub_voxel_offsets(2, 1.0, 1.0, 1.0)
    >>> xf
    array([-0.25, -0.25, -0.25, -0.25,  0.25,  0.25,  0.25,  0.25])
    """
    tmp = (np.arange(over, dtype=_COORD_DTYPE) - (over - 1) / 2) / over
    xf, yf, zf = np.meshgrid(tmp * dx, tmp * dy, tmp * dz, indexing="ij")
    return (
        np.ascontiguousarray(xf.ravel()),
        np.ascontiguousarray(yf.ravel()),
        np.ascontiguousarray(zf.ravel()),
    )


# ============================================================================
# Volume Reduction
# ============================================================================

def _block_average(volume, over):
    """Average non-overlapping ``over**3`` blocks of an oversampled volume.

    Parameters
    ----------
    volume : torch.Tensor
        Volume of shape ``(nx * over, ny * over, nz * over)``.
    over : int
        Oversampling factor.

    Returns
    -------
    torch.Tensor
        Volume of shape ``(nx, ny, nz)``. ``volume`` itself when ``over == 1``.
    """
    if over == 1:
        return volume
    nx, ny, nz = (s // over for s in volume.shape)
    return volume.reshape(nx, over, ny, over, nz, over).mean(dim=(1, 3, 5))


def _nbytes(shape, dtype):
    """Size in bytes of an array of ``shape`` and numpy ``dtype``."""
    return int(np.prod(shape, dtype=np.int64)) * np.dtype(dtype).itemsize
