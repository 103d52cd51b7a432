"""
Finite-Burn Simulation - Two-Body World

Owns the named bodies, advances them with a fixed step around a single
central body, and exposes the state-query and actuator operations used by
the burn controller:

    get_position / get_velocity / get_physical_time
    apply_impulse
    set_thrust_axis / set_engine_enabled / engine_delta_v

Bodies are referred to by name.
"""

from dataclasses import dataclass
import logging
from typing import Dict, List, Optional

import numpy as np

from . import constants as C
from .actuator import EngineModel
from .integrators import integrate
from .state import BodyState
from .validation import check_vector_finite

logger = logging.getLogger(__name__)


@dataclass
class Body:
    """A point-mass vehicle and its optional engine."""
    name: str
    state: BodyState
    engine: Optional[EngineModel] = None


class World:
    """
    Fixed-step point-mass propagator around a central body at the origin.
    """

    def __init__(self, dt: float = C.DT, mu: float = C.MU_EARTH,
                 method: str = 'rk4', t0: float = 0.0):
        if dt <= 0:
            raise ValueError(f"Time step dt must be positive, got {dt}")
        self.dt = float(dt)
        self.mu = float(mu)
        self.method = method
        self.time = float(t0)
        self.step_count = 0
        self._bodies: Dict[str, Body] = {}

    # ------------------------------------------------------------------
    # Bodies
    # ------------------------------------------------------------------

    def add_body(self, name: str, r: np.ndarray, v: np.ndarray,
                 engine: Optional[EngineModel] = None) -> str:
        if name in self._bodies:
            raise ValueError(f"Body already exists: {name}")
        state = BodyState(r=r, v=v, t=self.time)
        check_vector_finite(state.r, f"{name} position")
        check_vector_finite(state.v, f"{name} velocity")
        self._bodies[name] = Body(name=name, state=state, engine=engine)
        logger.debug(f"Added body {name}: {state}")
        return name

    def body_names(self) -> List[str]:
        return list(self._bodies)

    def get_body(self, name: str) -> Body:
        try:
            return self._bodies[name]
        except KeyError:
            raise KeyError(f"Unknown body: {name}") from None

    def get_state(self, name: str) -> BodyState:
        return self.get_body(name).state.copy()

    # ------------------------------------------------------------------
    # State queries
    # ------------------------------------------------------------------

    def get_position(self, name: str) -> np.ndarray:
        return self.get_body(name).state.r.copy()

    def get_velocity(self, name: str) -> np.ndarray:
        return self.get_body(name).state.v.copy()

    def get_physical_time(self) -> float:
        return self.time

    # ------------------------------------------------------------------
    # Actuation
    # ------------------------------------------------------------------

    def apply_impulse(self, name: str, delta_v: np.ndarray):
        """Instantaneous velocity change (km/s)."""
        delta_v = np.asarray(delta_v, dtype=float)
        check_vector_finite(delta_v, "impulse")
        body = self.get_body(name)
        body.state.v = body.state.v + delta_v

    def _engine(self, name: str) -> EngineModel:
        engine = self.get_body(name).engine
        if engine is None:
            raise ValueError(f"Body {name} has no engine")
        return engine

    def set_thrust_axis(self, name: str, axis: np.ndarray):
        check_vector_finite(axis, "thrust axis")
        self._engine(name).set_thrust_axis(axis)

    def set_engine_enabled(self, name: str, enabled: bool):
        self._engine(name).set_engine(enabled)

    def engine_delta_v(self, name: str) -> float:
        """Total delta-V the body's engine has delivered (0 without engine)."""
        engine = self.get_body(name).engine
        return engine.delivered_delta_v if engine is not None else 0.0

    def is_thrusting(self) -> bool:
        return any(b.engine is not None and b.engine.enabled for b in self._bodies.values())

    # ------------------------------------------------------------------
    # Propagation
    # ------------------------------------------------------------------

    def step(self):
        """Advance every body by one fixed step."""
        for body in self._bodies.values():
            thrust = None
            if body.engine is not None and body.engine.enabled:
                thrust = body.engine.thrust_acceleration()
            body.state = integrate(body.state, self.dt, thrust,
                                   method=self.method, mu=self.mu)
            if body.engine is not None:
                body.engine.record_burn(self.dt)
        self.time += self.dt
        self.step_count += 1
