"""Exceptions raised by ctphantom.

Every exception derives from :class:`PhantomError` and from the builtin
exception a caller would otherwise expect, so ``except ValueError`` keeps
working for invalid inputs.
"""


class PhantomError(Exception):
    """Base class for all phantom generation errors."""


class ShapeError(PhantomError, ValueError):
    """Ellipsoid parameter table does not have exactly 9 columns."""


class InvalidEnumError(PhantomError, ValueError):
    """Unknown voxelization mode or phantom archetype."""


class GeometryViolationError(PhantomError, ValueError):
    """An ellipsoid extends beyond the field of view of the image grid."""


class InvalidParameterError(PhantomError, ValueError):
    """An ellipsoid parameter has an invalid value (e.g. non-positive radius)."""


class UnsupportedFeatureError(PhantomError, NotImplementedError):
    """Requested configuration is not implemented (e.g. polar rotation)."""
