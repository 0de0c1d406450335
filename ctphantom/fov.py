"""Field-of-view validation of ellipsoid parameter tables."""

import logging

from .exceptions import GeometryViolationError
from .parameters import as_parameter_table

logger = logging.getLogger(__name__)

_AXES = ("x", "y", "z")


def check_fov(geometry, params):
    """Check that every ellipsoid lies within the grid's physical extent.

    For each ellipsoid and each axis independently, ``c + r`` must not exceed
    the largest grid coordinate and ``c - r`` must not fall below the
    smallest. Validation stops at the first violation.

    Parameters
    ----------
    geometry : ImageGeometry
        Image grid.
    params : array-like
        Parameter table, shape ``(N, 9)``.

    Returns
    -------
    bool
        ``True`` when every ellipsoid fits.

    Raises
    ------
    GeometryViolationError
        On the first ellipsoid that extends beyond the grid along any axis.
    """
    table = as_parameter_table(params)
    bounds = geometry.bounds()
    for ip, row in enumerate(table):
        for axis, (lo, hi), c, r in zip(_AXES, bounds, row[0:3], row[3:6]):
            if c + r > hi or c - r < lo:
                raise GeometryViolationError(
                    f"ellipsoid {ip} exceeds fov: {axis} range [{lo}, {hi}], "
                    f"c{axis}={c}, r{axis}={r}"
                )
    logger.debug("All %d ellipsoids within fov %s", table.shape[0], bounds)
    return True
