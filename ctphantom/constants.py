"""Global constants and configuration for the ctphantom package.

This module defines core constants used throughout ctphantom, including data
types, numerical precision parameters, the JIT decorator shared by the
voxelization kernels, and default values for phantom generation options.
"""

import numpy as np
from numba import njit

# ---------------------------------------------------------------------------
# Data Types and Numerical Constants
# ---------------------------------------------------------------------------

_DTYPE = np.float32
"""Data type of the generated phantom volume (numpy.float32)."""

_COORD_DTYPE = np.float64
"""Data type for grid coordinates and membership tests (numpy.float64)."""

_EPSILON = _COORD_DTYPE(1e-12)
"""Small epsilon value for numerical comparisons of physical coordinates."""

_N_COLUMNS = 9
"""Number of scalar fields in one row of an ellipsoid parameter table."""

# ---------------------------------------------------------------------------
# Phantom Generation Defaults
# ---------------------------------------------------------------------------

DEFAULT_OVERSAMPLE = 1
"""Default oversampling factor (1 means no sub-voxel refinement)."""

DEFAULT_MODE = "slow"
"""Default voxelization strategy."""

DEFAULT_DEVICE = "cpu"
"""Default torch device of the returned phantom volume."""

# ---------------------------------------------------------------------------
# JIT Decorators
# ---------------------------------------------------------------------------

# No fastmath here: membership tests compare quadratic forms against 1 and
# must agree bit-for-bit with the vectorized torch path.
_JIT_DECORATOR = njit(cache=True)
"""Numba CPU JIT decorator used by the voxelization kernels."""
