"""
Impulsive Hohmann transfer planning.

Provides the ideal delta-V against which the finite burn is measured and
the maneuvers flown by the impulsive reference vehicle.
"""

from dataclasses import dataclass, field
import logging
from typing import List, Optional

import numpy as np

from . import constants as C
from .orbit import compute_orbit_snapshot
from .utils import unit_vector

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Maneuver:
    """One impulsive burn."""
    delta_v: float                 # magnitude (km/s)
    velocity_change: np.ndarray    # inertial vector (km/s)
    time_offset: float = 0.0       # seconds after the plan was made
    label: str = ""


@dataclass(frozen=True)
class TransferPlan:
    """Ordered maneuvers plus an optional suggested burn duration (world seconds)."""
    maneuvers: List[Maneuver] = field(default_factory=list)
    burn_duration_hint: Optional[float] = None

    @property
    def delta_v(self) -> float:
        """Magnitude of the first maneuver, 0.0 when there is nothing to do."""
        if not self.maneuvers:
            return 0.0
        return self.maneuvers[0].delta_v

    @property
    def is_empty(self) -> bool:
        return not self.maneuvers


def compute_hohmann_transfer(r1: float, r2: float, mu: float = C.MU_EARTH) -> dict:
    """
    Analytical Hohmann transfer between circular radii r1 and r2.

        a_t = (r1 + r2) / 2
        dv1 = |sqrt(mu (2/r1 - 1/a_t)) - sqrt(mu/r1)|
        dv2 = |sqrt(mu/r2) - sqrt(mu (2/r2 - 1/a_t))|
        T   = pi sqrt(a_t^3 / mu)

    Returns:
        Dict with a_transfer, v1, v2, v_transfer_departure, v_transfer_arrival,
        dv1, dv2, dv_total, transfer_time
    """
    if r1 <= 0.0 or r2 <= 0.0:
        raise ValueError(f"Radii must be positive, got r1={r1}, r2={r2}")

    a_t = 0.5 * (r1 + r2)
    v1 = np.sqrt(mu / r1)
    v2 = np.sqrt(mu / r2)
    v_dep = np.sqrt(mu * (2.0 / r1 - 1.0 / a_t))
    v_arr = np.sqrt(mu * (2.0 / r2 - 1.0 / a_t))
    dv1 = abs(v_dep - v1)
    dv2 = abs(v2 - v_arr)

    return {
        'a_transfer': float(a_t),
        'v1': float(v1),
        'v2': float(v2),
        'v_transfer_departure': float(v_dep),
        'v_transfer_arrival': float(v_arr),
        'dv1': float(dv1),
        'dv2': float(dv2),
        'dv_total': float(dv1 + dv2),
        'transfer_time': float(np.pi * np.sqrt(a_t**3 / mu)),
    }


class HohmannPlanner:
    """
    Plans an apogee-raising Hohmann transfer from the body's current state.

    The departure burn is taken at the current radius: the velocity is set
    to the transfer-ellipse periapsis speed along the local horizontal, so
    any radial velocity is also removed.
    """

    def __init__(self, physics, mu: float = C.MU_EARTH,
                 burn_duration_hint: Optional[float] = None):
        self.physics = physics
        self.mu = mu
        self.burn_duration_hint = burn_duration_hint

    def plan_transfer(self, body: str, target_radius: float) -> TransferPlan:
        r = self.physics.get_position(body)
        v = self.physics.get_velocity(body)

        snapshot = compute_orbit_snapshot(r, v, self.mu)
        if snapshot.apogee_radius >= target_radius:
            logger.info(f"No transfer needed for {body}: apogee "
                        f"{snapshot.apogee_radius:.3f} km >= target {target_radius:.3f} km")
            return TransferPlan(maneuvers=[], burn_duration_hint=self.burn_duration_hint)

        r1 = float(np.linalg.norm(r))
        transfer = compute_hohmann_transfer(r1, target_radius, self.mu)

        # Local horizontal, prograde
        radial = unit_vector(r)
        normal = unit_vector(np.cross(r, v))
        if not np.any(normal):
            normal = C.Z_AXIS
        horizontal = unit_vector(np.cross(normal, radial))

        departure_dv = transfer['v_transfer_departure'] * horizontal - v
        # At apoapsis the velocity is anti-parallel to the departure horizontal
        arrival_dv = -transfer['dv2'] * horizontal

        maneuvers = [
            Maneuver(delta_v=float(np.linalg.norm(departure_dv)),
                     velocity_change=departure_dv,
                     time_offset=0.0,
                     label="departure"),
            Maneuver(delta_v=transfer['dv2'],
                     velocity_change=arrival_dv,
                     time_offset=transfer['transfer_time'],
                     label="circularize"),
        ]
        return TransferPlan(maneuvers=maneuvers, burn_duration_hint=self.burn_duration_hint)
