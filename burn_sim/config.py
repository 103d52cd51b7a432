"""
Finite-Burn Simulation - Configuration

This module provides a BurnConfig dataclass for dependency injection,
allowing different experiment parameters to be passed without modifying
global constants.
"""

from dataclasses import dataclass
from typing import Optional, Tuple

import numpy as np

from . import constants as C
from .guidance import BurnMode, SteeringMode


class ConfigurationError(ValueError):
    """Raised when the experiment is configured with invalid or missing inputs."""
    pass


@dataclass(frozen=True)
class BurnConfig:
    """
    Immutable configuration for one finite-burn experiment.

    Using frozen=True ensures configs cannot be accidentally modified.
    Create new configs via dataclass replace() if needed.

    Section grouping:
      1. Simulation timing
      2. Target orbit
      3. Burn
      4. Scenario
      5. Misc
    """

    # ── 1. Simulation timing ─────────────────────────────────────────────
    dt: float = C.DT
    max_time: float = C.MAX_TIME
    time_scale: float = C.TIME_SCALE  # sim seconds per world second
    integration_method: str = "rk4"

    # ── 2. Target orbit ──────────────────────────────────────────────────
    target_orbit_radius: float = C.TARGET_ORBIT_RADIUS
    apogee_tolerance: float = C.APOGEE_TOLERANCE

    # ── 3. Burn ──────────────────────────────────────────────────────────
    steering_mode: SteeringMode = SteeringMode.PERPENDICULAR
    burn_mode: BurnMode = BurnMode.IMPULSE_TRAIN
    # None -> use the planner's burn duration hint
    burn_duration_world_seconds: Optional[float] = C.BURN_DURATION
    engine_acceleration: float = C.ENGINE_ACCELERATION
    reference_axis: Tuple[float, float, float] = (0.0, 0.0, 1.0)
    warmup_ticks: int = C.WARMUP_TICKS

    # ── 4. Scenario ──────────────────────────────────────────────────────
    initial_orbit_radius: float = C.INITIAL_ORBIT_RADIUS
    mu: float = C.MU_EARTH
    include_reference: bool = True

    # ── 5. Misc ──────────────────────────────────────────────────────────
    energy_check_interval: int = C.ENERGY_CHECK_INTERVAL
    verbose: bool = True

    def __post_init__(self):
        # Accept enum values given as strings (CLI, sweeps)
        try:
            object.__setattr__(self, 'steering_mode', SteeringMode(self.steering_mode))
            object.__setattr__(self, 'burn_mode', BurnMode(self.burn_mode))
        except ValueError as e:
            raise ConfigurationError(str(e)) from e
        object.__setattr__(self, 'reference_axis',
                           tuple(float(x) for x in self.reference_axis))

        if not self.dt > 0.0:
            raise ConfigurationError(f"dt must be positive, got {self.dt}")
        if not self.max_time > 0.0:
            raise ConfigurationError(f"max_time must be positive, got {self.max_time}")
        if not self.time_scale > 0.0:
            raise ConfigurationError(f"time_scale must be positive, got {self.time_scale}")
        if self.integration_method not in ("rk4", "euler"):
            raise ConfigurationError(
                f"Unknown integration method: {self.integration_method}")
        if not self.target_orbit_radius > 0.0:
            raise ConfigurationError(
                f"target_orbit_radius must be positive, got {self.target_orbit_radius}")
        if not self.apogee_tolerance >= 0.0:
            raise ConfigurationError(
                f"apogee_tolerance must be non-negative, got {self.apogee_tolerance}")
        if (self.burn_duration_world_seconds is not None
                and not self.burn_duration_world_seconds > 0.0):
            raise ConfigurationError(
                "burn_duration_world_seconds must be positive, "
                f"got {self.burn_duration_world_seconds}")
        if not self.engine_acceleration >= 0.0:
            raise ConfigurationError(
                f"engine_acceleration must be non-negative, got {self.engine_acceleration}")
        if len(self.reference_axis) != 3 or np.linalg.norm(self.reference_axis) < C.ZERO_TOLERANCE:
            raise ConfigurationError(
                f"reference_axis must be a non-zero 3-vector, got {self.reference_axis}")
        if self.warmup_ticks < 0:
            raise ConfigurationError(f"warmup_ticks must be >= 0, got {self.warmup_ticks}")
        if not self.initial_orbit_radius > 0.0:
            raise ConfigurationError(
                f"initial_orbit_radius must be positive, got {self.initial_orbit_radius}")
        if not self.mu > 0.0:
            raise ConfigurationError(f"mu must be positive, got {self.mu}")
        if self.energy_check_interval < 1:
            raise ConfigurationError(
                f"energy_check_interval must be >= 1, got {self.energy_check_interval}")

    @property
    def reference_axis_vector(self) -> np.ndarray:
        """Unit reference axis as a numpy array."""
        axis = np.array(self.reference_axis, dtype=float)
        return axis / np.linalg.norm(axis)


def create_default_config() -> BurnConfig:
    """Create a BurnConfig with default values from constants."""
    return BurnConfig()


def create_test_config(dt: float = 1.0, max_time: float = 3000.0,
                       **overrides) -> BurnConfig:
    """Create a fast config suitable for testing.

    Any keyword arg accepted by BurnConfig can be passed as an override.
    """
    defaults = dict(dt=dt, max_time=max_time, verbose=False)
    defaults.update(overrides)
    return BurnConfig(**defaults)
