"""
Finite-Burn Simulation - Dynamics Equations

Translational equations of motion:
    r_dot = v
    v_dot = a_grav(r) + a_thrust
"""

import numpy as np

from . import constants as C
from .forces import compute_gravity_acceleration


def state_derivative_vector(y: np.ndarray, t: float,
                            thrust_accel: np.ndarray = None,
                            mu: float = C.MU_EARTH) -> np.ndarray:
    """
    Compute dy/dt for the flat state vector [r(3), v(3)].

    Thrust acceleration is held constant across the integration step.

    Args:
        y: State vector
        t: Current time (unused, kept for integrator symmetry)
        thrust_accel: Engine acceleration in inertial frame (km/s^2)
        mu: Gravitational parameter

    Returns:
        Derivative vector [v, a]
    """
    r = y[0:3]
    v = y[3:6]
    a = compute_gravity_acceleration(r, mu)
    if thrust_accel is not None:
        a = a + thrust_accel
    return np.concatenate([v, a])
