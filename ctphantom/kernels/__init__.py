"""JIT kernels for ellipsoid voxelization.

This subpackage contains the Numba kernels used by the analytic-edge and
slice-wise voxelization strategies.
"""

from .ellipsoid import (
    _ellipsoid_fraction_kernel,
)

__all__ = [
    '_ellipsoid_fraction_kernel',
]
