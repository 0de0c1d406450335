"""JIT kernel for analytic-edge ellipsoid voxelization.

This module contains the Numba kernel that classifies every voxel of a grid
as interior, exterior or edge with respect to one ellipsoid, and estimates
the partial-volume fraction of the edge voxels by sub-voxel sampling.
"""

import math

from ..constants import _JIT_DECORATOR


# ============================================================================
# Analytic-Edge Fraction Kernel
# ============================================================================

@_JIT_DECORATOR
def _ellipsoid_fraction_kernel(
    x, y, z,
    cx, cy, cz, rx, ry, rz,
    cos_a, sin_a,
    hx, hy, hz,
    xf, yf, zf,
    fraction
):
    """Compute the fraction of every voxel lying inside one ellipsoid.

    Parameters
    ----------
    x, y, z : numpy.ndarray
        Voxel center coordinates along each axis (float64).
    cx, cy, cz : float
        Ellipsoid center.
    rx, ry, rz : float
        Ellipsoid radii (all positive).
    cos_a, sin_a : float
        Cosine and sine of the azimuth angle.
    hx, hy, hz : float
        Voxel half-extents ``|d| / 2``.
    xf, yf, zf : numpy.ndarray
        Sub-voxel sample offsets, shape ``(over**3,)``, relative to the voxel
        center in the grid frame.
    fraction : numpy.ndarray
        Output array, shape ``(len(x), len(y), len(z))``. Every element is
        overwritten.

    Returns
    -------
    int
        Number of edge voxels.

    Notes
    -----
    A voxel lies in the ball of radius ``hh = sqrt(hx^2 + hy^2 + hz^2)``
    around its center whatever the rotation, and that ball lies in the cube
    of half-side ``hh``. The classification is:
      - Interior: all 8 cube corners strictly inside (convexity), fraction 1.
      - Exterior: quadratic form at the center above ``(1 + hh / min(r))^2``.
        Any point within ``hh`` of the ellipsoid lies inside the ellipsoid
        scaled by ``1 + hh / min(r)``, so the voxel misses it, fraction 0.
      - Edge: otherwise, fraction is the mean membership of the samples.
    """
    hh = math.sqrt(hx * hx + hy * hy + hz * hz)
    outer = 1.0 + hh / min(rx, min(ry, rz))
    outer2 = outer * outer
    n_sub = xf.shape[0]
    n_edge = 0

    for ix in range(x.shape[0]):
        xs = x[ix] - cx
        for iy in range(y.shape[0]):
            ys = y[iy] - cy
            # Rotate voxel center into the ellipsoid frame
            xr = cos_a * xs + sin_a * ys
            yr = -sin_a * xs + cos_a * ys
            for iz in range(z.shape[0]):
                zr = z[iz] - cz

                # === INTERIOR TEST: 8 corners of the bounding cube ===
                inside = True
                for corner in range(8):
                    xo = xr + (hh if corner & 1 else -hh)
                    yo = yr + (hh if corner & 2 else -hh)
                    zo = zr + (hh if corner & 4 else -hh)
                    if (xo / rx) ** 2 + (yo / ry) ** 2 + (zo / rz) ** 2 >= 1.0:
                        inside = False
                        break
                if inside:
                    fraction[ix, iy, iz] = 1.0
                    continue

                # === EXTERIOR TEST: scaled quadratic form at the center ===
                q = (xr / rx) ** 2 + (yr / ry) ** 2 + (zr / rz) ** 2
                if q > outer2:
                    fraction[ix, iy, iz] = 0.0
                    continue

                # === EDGE: average membership of the sub-voxel samples ===
                n_edge += 1
                count = 0
                for k in range(n_sub):
                    px = xs + xf[k]
                    py = ys + yf[k]
                    pz = zr + zf[k]
                    pxr = cos_a * px + sin_a * py
                    pyr = -sin_a * px + cos_a * py
                    if (pxr / rx) ** 2 + (pyr / ry) ** 2 + (pz / rz) ** 2 <= 1.0:
                        count += 1
                fraction[ix, iy, iz] = count / n_sub

    return n_edge
