# ctphantom/__init__.py
"""ctphantom - Ellipsoid Phantom Volumes for Tomography.

Voxelizes weighted superpositions of ellipsoids (3D Shepp-Logan variants and
simple spheroids) on a discrete image grid, for testing tomographic
reconstruction algorithms.
"""

from .exceptions import (
    PhantomError,
    ShapeError,
    InvalidEnumError,
    GeometryViolationError,
    InvalidParameterError,
    UnsupportedFeatureError,
)

from .geometry import (
    ImageGeometry,
    image_geometry,
    grid_axis,
)

from .rotation import (
    rotate3,
    inside_ellipsoid,
)

from .parameters import (
    Archetype,
    EllipsoidSpec,
    archetype_parameters,
    shepp_logan_3d_parameters,
    spheroid_parameters,
)

from .fov import check_fov

from .voxelizers import (
    Mode,
    voxelize_oversampled,
    voxelize_analytic_edge,
    voxelize_slicewise,
)

from .phantom import (
    PhantomOptions,
    generate_phantom,
    phantom_from_spacing,
    phantom_from_size,
    phantom_from_grid,
)

from .logging_config import setup_logging

__version__ = '0.1.0'

__all__ = [
    'PhantomError',
    'ShapeError',
    'InvalidEnumError',
    'GeometryViolationError',
    'InvalidParameterError',
    'UnsupportedFeatureError',
    'ImageGeometry',
    'image_geometry',
    'grid_axis',
    'rotate3',
    'inside_ellipsoid',
    'Archetype',
    'EllipsoidSpec',
    'archetype_parameters',
    'shepp_logan_3d_parameters',
    'spheroid_parameters',
    'check_fov',
    'Mode',
    'voxelize_oversampled',
    'voxelize_analytic_edge',
    'voxelize_slicewise',
    'PhantomOptions',
    'generate_phantom',
    'phantom_from_spacing',
    'phantom_from_size',
    'phantom_from_grid',
    'setup_logging',
]
