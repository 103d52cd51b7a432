"""
Finite-Burn Simulation - Type Definitions

TypedDict definitions for structured per-tick return values.
"""

from typing import Optional, TypedDict

import numpy as np
from numpy.typing import NDArray


class BurnStepOutput(TypedDict):
    """Return type of FiniteBurnController.update()."""
    tick: int  # Tick index within the session (0 = warm-up)
    phase: str  # IDLE, BURNING or DONE after this tick
    command: str  # 'none', 'impulse' or 'thrust_axis'
    burn_direction: Optional[NDArray[np.float64]]  # Unit steering direction, None if no command
    impulse_magnitude: float  # Velocity kick applied this tick (km/s)
    total_impulse: float  # Cumulative impulse for the session (km/s)
    apogee_radius: Optional[float]  # Snapshot apogee (km), None when not refreshed
    eccentricity: Optional[float]  # Snapshot eccentricity, None when not refreshed
    phase_angle: Optional[float]  # Snapshot phase angle (rad), None when not refreshed
