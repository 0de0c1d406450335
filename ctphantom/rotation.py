"""Rotation of grid coordinates into an ellipsoid's local frame.

Only rotation about the z-axis (azimuth) is implemented. A nonzero polar
angle is rejected rather than ignored.
"""

import math

from .exceptions import UnsupportedFeatureError


def azimuth_trig(azimuth_deg, polar_deg=0.0):
    """Validated cosine and sine of an azimuth angle given in degrees.

    Parameters
    ----------
    azimuth_deg : float
        Rotation about the z-axis, in degrees.
    polar_deg : float, optional
        Rotation about the second axis, in degrees. Must be 0.

    Returns
    -------
    cos_a : float
    sin_a : float

    Raises
    ------
    UnsupportedFeatureError
        If ``polar_deg`` is nonzero.
    """
    if polar_deg != 0:
        raise UnsupportedFeatureError(
            f"polar rotation is not implemented (polar angle {polar_deg} deg); "
            "only rotation about the z-axis is supported"
        )
    azim = math.radians(azimuth_deg)
    return math.cos(azim), math.sin(azim)


def rotate3(x, y, z, azimuth_deg, polar_deg=0.0):
    """Rotate center-relative coordinates into the ellipsoid frame.

    Works on Python scalars, numpy arrays and torch tensors alike; the inputs
    only need to broadcast against each other.

    Parameters
    ----------
    x, y, z : float, numpy.ndarray or torch.Tensor
        Coordinates relative to the ellipsoid center.
    azimuth_deg : float
        Rotation about the z-axis, in degrees.
    polar_deg : float, optional
        Must be 0.

    Returns
    -------
    xr, yr, zr
        ``xr = cos(a) x + sin(a) y``, ``yr = -sin(a) x + cos(a) y``, ``zr = z``.

    Raises
    ------
    UnsupportedFeatureError
        If ``polar_deg`` is nonzero.

    Examples
    --------
    >>> rotate3(1.0, 0.0, 2.0, 90.0)  # doctest: +ELLIPSIS
    (6.1...e-17, -1.0, 2.0)
    """
    cos_a, sin_a = azimuth_trig(azimuth_deg, polar_deg)
    xr = cos_a * x + sin_a * y
    yr = -sin_a * x + cos_a * y
    return xr, yr, z


def inside_ellipsoid(xr, yr, zr, rx, ry, rz):
    """Quadratic-form membership test ``(xr/rx)^2 + (yr/ry)^2 + (zr/rz)^2 <= 1``."""
    return (xr / rx) ** 2 + (yr / ry) ** 2 + (zr / rz) ** 2 <= 1
