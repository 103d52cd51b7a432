"""
Finite-Burn Simulation - Validation Checks

This module implements numerical sanity checks:
- Finite command and state vectors
- Position above the central body's centre
- Specific orbital energy conservation while coasting
"""

import numpy as np
from typing import Optional

from . import constants as C


class ValidationError(Exception):
    """Raised when a numerical validation check fails."""
    pass


def check_vector_finite(vec: np.ndarray, name: str = "vector") -> bool:
    """
    Verify a vector contains only finite values.

    Returns:
        True if valid, raises ValidationError otherwise
    """
    vec = np.asarray(vec, dtype=float)
    if not np.all(np.isfinite(vec)):
        raise ValidationError(f"{name} contains non-finite values: {vec}")
    return True


def check_position_valid(r: np.ndarray, min_radius: float = C.ZERO_TOLERANCE) -> bool:
    """
    Check that position is away from the central body's centre.

    Returns:
        True if valid, raises ValidationError otherwise
    """
    check_vector_finite(r, "position")
    r_norm = np.linalg.norm(r)
    if r_norm < min_radius:
        raise ValidationError(
            f"Position too close to central body: |r| = {r_norm:.6e} km"
        )
    return True


def compute_specific_energy(r: np.ndarray, v: np.ndarray, mu: float = C.MU_EARTH) -> float:
    """
    Compute specific mechanical energy.

    E = |v|^2 / 2 - mu / |r|

    Returns:
        Specific energy (km^2/s^2), 0.0 at the singular origin
    """
    r_norm = np.linalg.norm(r)
    if r_norm < C.ZERO_TOLERANCE:
        return 0.0
    return float(0.5 * np.dot(v, v) - mu / r_norm)


def validate_energy_conservation(E_current: float, E_previous: float,
                                 tolerance: Optional[float] = None) -> dict:
    """
    Compare energies across a coast arc.

    Args:
        E_current: Specific energy now
        E_previous: Specific energy at the previous check
        tolerance: Allowed relative drift

    Returns:
        Dict with 'valid', 'dE' and 'relative_error'
    """
    if tolerance is None:
        tolerance = C.ENERGY_TOLERANCE

    dE = E_current - E_previous
    scale = max(abs(E_previous), C.ZERO_TOLERANCE)
    relative_error = abs(dE) / scale
    return {
        'valid': relative_error <= tolerance,
        'dE': dE,
        'relative_error': relative_error,
    }
