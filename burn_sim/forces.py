"""
Finite-Burn Simulation - Force Computations

Central-body point-mass gravity. Forces are expressed per unit mass
(accelerations) since vehicle mass is constant.
"""

import numpy as np

from . import constants as C


def compute_gravity_acceleration(r: np.ndarray, mu: float = C.MU_EARTH) -> np.ndarray:
    """
    Compute central gravitational acceleration.

        a = -mu * r / ||r||^3

    Args:
        r: Position vector (km)
        mu: Gravitational parameter (km^3/s^2)

    Returns:
        Acceleration vector (km/s^2)
    """
    r_norm = np.linalg.norm(r)
    if r_norm < C.ZERO_TOLERANCE:
        return np.zeros(3)
    return -mu * r / r_norm**3
