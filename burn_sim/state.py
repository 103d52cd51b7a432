"""
Finite-Burn Simulation - Body State Vector

This module defines the translational state of a single body. Attitude and
mass are not modelled: burns are treated as pure velocity changes.
"""

from dataclasses import dataclass, field
import numpy as np


@dataclass
class BodyState:
    """
    Translational state of one body in the central-body inertial frame.

    Attributes:
        r: Position vector (km) [3]
        v: Velocity vector (km/s) [3]
        t: Simulation time (s)
    """

    r: np.ndarray = field(default_factory=lambda: np.zeros(3))
    v: np.ndarray = field(default_factory=lambda: np.zeros(3))
    t: float = 0.0

    def __post_init__(self):
        """Ensure arrays are numpy arrays with correct dtype."""
        self.r = np.asarray(self.r, dtype=np.float64)
        self.v = np.asarray(self.v, dtype=np.float64)

    def copy(self) -> 'BodyState':
        """Create a deep copy of the state."""
        return BodyState(r=self.r.copy(), v=self.v.copy(), t=self.t)

    def to_vector(self) -> np.ndarray:
        """Convert state to a flat numpy array [r, v]."""
        return np.concatenate([self.r, self.v])

    @classmethod
    def from_vector(cls, vec: np.ndarray, t: float) -> 'BodyState':
        """
        Create a BodyState from a flat numpy array.

        Args:
            vec: State vector [r(3), v(3)]
            t: Current simulation time
        """
        return cls(r=vec[0:3].copy(), v=vec[3:6].copy(), t=t)

    @property
    def radius(self) -> float:
        """Distance from the central body (km)."""
        return float(np.linalg.norm(self.r))

    @property
    def speed(self) -> float:
        """Magnitude of velocity (km/s)."""
        return float(np.linalg.norm(self.v))

    def __str__(self) -> str:
        return (
            f"BodyState(t={self.t:.2f}s, "
            f"r={self.radius:.2f}km, "
            f"v={self.speed:.4f}km/s)"
        )
