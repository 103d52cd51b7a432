"""
Steering laws for the finite burn.

The burn direction is chosen each tick by one of a small, closed set of
steering modes. Dispatch is a plain if/elif over the enum; there is no class
hierarchy.
"""

from enum import Enum
from typing import Optional

import numpy as np

from . import constants as C
from .utils import unit_vector


class SteeringMode(Enum):
    FIXED = "fixed"                  # hold the heading captured at burn start
    PERPENDICULAR = "perpendicular"  # perpendicular to the radius line
    TANGENT = "tangent"              # along the current velocity


class BurnMode(Enum):
    IMPULSE_TRAIN = "impulse_train"          # discrete velocity kicks every tick
    CONTINUOUS_THRUST = "continuous_thrust"  # persistent engine thrust axis


def compute_tangent_direction(v: np.ndarray) -> np.ndarray:
    """Unit vector along the current velocity."""
    return unit_vector(v)


def compute_perpendicular_direction(r: np.ndarray,
                                    reference_axis: np.ndarray = C.Z_AXIS) -> np.ndarray:
    """
    In-plane direction perpendicular to the radius line.

    burn_dir = axis x r_hat

    With the reference axis along the orbit normal this is the local
    horizontal, oriented prograde for orbits that circulate about +axis.

    Args:
        r: Position vector (km)
        reference_axis: Fixed out-of-plane axis

    Returns:
        Unit vector orthogonal to r, or zeros if r is zero or parallel to
        the reference axis
    """
    radial = unit_vector(r)
    return unit_vector(np.cross(np.asarray(reference_axis, dtype=float), radial))


def compute_burn_direction(mode: SteeringMode, r: np.ndarray, v: np.ndarray,
                           initial_direction: Optional[np.ndarray] = None,
                           reference_axis: np.ndarray = C.Z_AXIS) -> np.ndarray:
    """
    Compute the steering direction for the active mode.

    Args:
        mode: Active steering mode
        r: Current position (km)
        v: Current velocity (km/s)
        initial_direction: Unit velocity captured at burn start (FIXED only)
        reference_axis: Out-of-plane axis (PERPENDICULAR only)

    Returns:
        Unit direction vector (zeros when undefined)

    Raises:
        ValueError: For FIXED mode without a captured direction, or an
            unknown mode
    """
    if mode is SteeringMode.TANGENT:
        return compute_tangent_direction(v)
    elif mode is SteeringMode.PERPENDICULAR:
        return compute_perpendicular_direction(r, reference_axis)
    elif mode is SteeringMode.FIXED:
        if initial_direction is None:
            raise ValueError("FIXED steering requires the direction captured at burn start")
        return np.array(initial_direction, dtype=float)
    raise ValueError(f"Unknown steering mode: {mode}")
