"""
Constant-acceleration engine model for continuous-thrust burns.

The thrust axis follows the exhaust convention: the axis points along the
plume, so the vehicle accelerates along -axis.
"""

from dataclasses import dataclass
import numpy as np

from . import constants as C
from .utils import unit_vector


@dataclass
class EngineModel:
    """Engine on/off state, thrust axis and delivered delta-V bookkeeping."""
    acceleration: float = C.ENGINE_ACCELERATION  # km/s^2, mass is constant
    thrust_axis: np.ndarray = None
    enabled: bool = False
    delivered_delta_v: float = 0.0

    def __post_init__(self):
        if self.acceleration < 0.0:
            raise ValueError(f"Engine acceleration must be non-negative, got {self.acceleration}")
        if self.thrust_axis is None:
            self.thrust_axis = np.array([0.0, 0.0, -1.0], dtype=float)
        else:
            self.thrust_axis = np.asarray(self.thrust_axis, dtype=float)

    def set_engine(self, enabled: bool):
        self.enabled = bool(enabled)

    def set_thrust_axis(self, axis: np.ndarray):
        """Set the exhaust axis (normalized). A zero axis is rejected."""
        axis = unit_vector(axis)
        if not np.any(axis):
            raise ValueError("Thrust axis must be non-zero")
        self.thrust_axis = axis

    def thrust_acceleration(self) -> np.ndarray:
        """Inertial acceleration produced by the engine (km/s^2)."""
        if not self.enabled:
            return np.zeros(3)
        return -self.acceleration * self.thrust_axis

    def record_burn(self, dt: float):
        """Accumulate delta-V delivered over one step while firing."""
        if self.enabled:
            self.delivered_delta_v += self.acceleration * dt
