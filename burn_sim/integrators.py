"""
Finite-Burn Simulation - Numerical Integration

This module implements the fixed-step RK4 (and Euler, for comparison)
integrators for the translational state.
"""

import numpy as np

from . import constants as C
from .state import BodyState
from .dynamics import state_derivative_vector


def _validate_inputs(dt: float, thrust_accel: np.ndarray):
    if dt <= 0:
        raise ValueError(f"Time step dt must be positive, got {dt}")
    if thrust_accel is not None:
        if thrust_accel.shape != (3,):
            raise ValueError(f"Thrust acceleration must have shape (3,), got {thrust_accel.shape}")
        if np.any(np.isnan(thrust_accel)):
            raise ValueError("Thrust acceleration contains NaN values")


def rk4_step(state: BodyState, dt: float, thrust_accel: np.ndarray = None,
             mu: float = C.MU_EARTH) -> BodyState:
    """
    Perform a single RK4 integration step.

    The RK4 method computes:
    k1 = f(t, y)
    k2 = f(t + dt/2, y + dt/2 * k1)
    k3 = f(t + dt/2, y + dt/2 * k2)
    k4 = f(t + dt, y + dt * k3)
    y_new = y + dt/6 * (k1 + 2*k2 + 2*k3 + k4)

    Args:
        state: Current state
        dt: Time step (s)
        thrust_accel: Engine acceleration (km/s^2), None when coasting
        mu: Gravitational parameter

    Returns:
        New state after integration

    Raises:
        ValueError: If dt <= 0 or thrust_accel has wrong shape
    """
    _validate_inputs(dt, thrust_accel)

    t = state.t
    y = state.to_vector()

    k1 = state_derivative_vector(y, t, thrust_accel, mu)
    k2 = state_derivative_vector(y + 0.5 * dt * k1, t + 0.5 * dt, thrust_accel, mu)
    k3 = state_derivative_vector(y + 0.5 * dt * k2, t + 0.5 * dt, thrust_accel, mu)
    k4 = state_derivative_vector(y + dt * k3, t + dt, thrust_accel, mu)

    y_new = y + (dt / 6.0) * (k1 + 2*k2 + 2*k3 + k4)
    return BodyState.from_vector(y_new, t + dt)


def euler_step(state: BodyState, dt: float, thrust_accel: np.ndarray = None,
               mu: float = C.MU_EARTH) -> BodyState:
    """
    Perform a single Euler integration step.

    This is a first-order method, primarily for testing/comparison.
    """
    _validate_inputs(dt, thrust_accel)

    t = state.t
    y = state.to_vector()
    dy = state_derivative_vector(y, t, thrust_accel, mu)
    return BodyState.from_vector(y + dt * dy, t + dt)


def integrate(state: BodyState, dt: float, thrust_accel: np.ndarray = None,
              method: str = 'rk4', mu: float = C.MU_EARTH) -> BodyState:
    """
    Integrate the state forward by one timestep.

    Args:
        state: Current state
        dt: Time step (s)
        thrust_accel: Engine acceleration (km/s^2)
        method: Integration method ('rk4' or 'euler')
        mu: Gravitational parameter

    Returns:
        New state after integration
    """
    if method == 'rk4':
        return rk4_step(state, dt, thrust_accel, mu)
    elif method == 'euler':
        return euler_step(state, dt, thrust_accel, mu)
    else:
        raise ValueError(f"Unknown integration method: {method}")
