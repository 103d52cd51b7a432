"""
Finite-Burn Simulation - Utility Functions

Shared vector helpers used by guidance, orbit and planning code.
"""

import numpy as np

from . import constants as C


def unit_vector(vec: np.ndarray) -> np.ndarray:
    """
    Normalize a vector.

    Returns the zero vector when the input norm is below ZERO_TOLERANCE, so
    callers can detect an undefined direction without producing NaN.
    """
    vec = np.asarray(vec, dtype=float)
    norm = np.linalg.norm(vec)
    if norm < C.ZERO_TOLERANCE:
        return np.zeros(3)
    return vec / norm


def wrap_angle(angle: float) -> float:
    """Wrap an angle to [-pi, pi)."""
    return float((angle + np.pi) % (2.0 * np.pi) - np.pi)
