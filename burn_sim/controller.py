"""
Finite-burn guidance controller.

Spreads the impulsive Hohmann departure delta-V over the configured burn
duration and steers it tick by tick until the apogee reaches the target
radius.

Lifecycle:
  - __init__ receives the configuration and every collaborator (validated
    eagerly, a missing collaborator is a configuration error)
  - start() creates a fresh BurnSession in the IDLE phase
  - update() is called once per fixed tick

State machine:

    IDLE ──(warm-up tick elapsed)──> BURNING ──(target / hyperbolic /
                                               degenerate / cancel)──> DONE

Within one tick the snapshot refresh precedes the termination check, which
precedes any steering command. Nothing is commanded once DONE.
"""

from dataclasses import dataclass
from enum import Enum, auto
import logging
from typing import Optional

import numpy as np

from . import constants as C
from .config import BurnConfig, ConfigurationError
from .guidance import BurnMode, compute_burn_direction
from .orbit import OrbitSnapshot
from .types import BurnStepOutput
from .utils import unit_vector
from .validation import check_vector_finite

logger = logging.getLogger(__name__)


class MissingCollaboratorError(ConfigurationError):
    """Raised when a required collaborator is absent or incomplete."""
    pass


class BurnPhase(Enum):
    IDLE = auto()      # started, waiting out the warm-up tick
    BURNING = auto()   # actively steering
    DONE = auto()      # terminal


class BurnOutcome(Enum):
    TARGET_REACHED = auto()
    HYPERBOLIC = auto()
    DEGENERATE_PLAN = auto()
    CANCELLED = auto()


class CancellationToken:
    """External stop request, checked at the top of every tick."""

    def __init__(self):
        self._cancelled = False
        self._reason: Optional[str] = None

    def cancel(self, reason: str = "cancelled"):
        if not self._cancelled:
            self._cancelled = True
            self._reason = reason

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    @property
    def reason(self) -> Optional[str]:
        return self._reason


# Methods each collaborator must provide
_REQUIRED_METHODS = {
    'physics': ('get_position', 'get_velocity', 'get_physical_time'),
    'snapshot_provider': ('orbit_snapshot',),
    'planner': ('plan_transfer',),
    'actuator': ('apply_impulse', 'set_thrust_axis', 'set_engine_enabled'),
    'time_scale': ('world_seconds_to_sim_time', 'sim_time_to_world_seconds'),
}

# Extra actuator methods needed in continuous-thrust mode
_ENGINE_METHODS = ('engine_delta_v',)


@dataclass
class BurnCollaborators:
    """The external services the controller talks to."""
    physics: object = None
    snapshot_provider: object = None
    planner: object = None
    actuator: object = None
    time_scale: object = None

    def validate(self, require_engine: bool = False):
        """
        Fail fast on a missing or incomplete collaborator.

        Args:
            require_engine: Also require the engine bookkeeping used by
                continuous-thrust burns

        Raises:
            MissingCollaboratorError
        """
        for name, methods in _REQUIRED_METHODS.items():
            if name == 'actuator' and require_engine:
                methods = methods + _ENGINE_METHODS
            obj = getattr(self, name)
            if obj is None:
                raise MissingCollaboratorError(f"Missing collaborator: {name}")
            missing = [m for m in methods if not callable(getattr(obj, m, None))]
            if missing:
                raise MissingCollaboratorError(
                    f"Collaborator {name} does not provide: {', '.join(missing)}")


@dataclass(frozen=True)
class BurnPlan:
    """Delta-V budget for one session, fixed at the first active tick."""
    delta_v: float          # total ideal delta-V (km/s)
    target_radius: float    # km
    burn_duration: float    # simulation time (s)
    step_duration: float    # simulation time per tick (s)

    @property
    def is_degenerate(self) -> bool:
        return not self.delta_v > 0.0

    @property
    def num_impulses(self) -> float:
        """Effective tick count, never below one."""
        if self.step_duration <= 0.0:
            return 1.0
        return max(self.burn_duration / self.step_duration, 1.0)

    @property
    def impulse_magnitude(self) -> float:
        """Per-tick velocity kick (km/s)."""
        if self.is_degenerate:
            return 0.0
        return self.delta_v / self.num_impulses


@dataclass
class BurnSession:
    """Mutable state of one guidance run."""
    tick: int = 0
    plan: Optional[BurnPlan] = None
    start_time: Optional[float] = None
    initial_direction: Optional[np.ndarray] = None
    total_impulse: float = 0.0
    done: bool = False
    outcome: Optional[BurnOutcome] = None
    engine_engaged: bool = False
    engine_dv_baseline: float = 0.0
    commands_issued: int = 0
    steering_warned: bool = False


@dataclass(frozen=True)
class BurnReport:
    """Performance summary produced when the session ends."""
    outcome: BurnOutcome
    elapsed_sim_time: float
    elapsed_world_time: float
    total_impulse: float
    phase_angle: float
    apogee_radius: float
    eccentricity: float
    ticks: int
    planned_delta_v: float
    commands_issued: int = 0

    @property
    def success(self) -> bool:
        return self.outcome is BurnOutcome.TARGET_REACHED

    @property
    def hyperbolic(self) -> bool:
        return self.outcome is BurnOutcome.HYPERBOLIC

    def summary(self) -> str:
        return (f"{self.outcome.name}: sim time={self.elapsed_sim_time:.2f}s "
                f"world time={self.elapsed_world_time:.2f}s "
                f"total impulse={self.total_impulse:.6f} km/s "
                f"(planned {self.planned_delta_v:.6f}) "
                f"phase angle={np.degrees(self.phase_angle):.4f} deg "
                f"apogee={self.apogee_radius:.3f} km e={self.eccentricity:.6f}")


class FiniteBurnController:
    """
    Per-tick finite-burn guidance for one vehicle.

    Args:
        config: Experiment configuration (steering/burn mode, target, tolerance)
        body: Name of the vehicle being steered
        collaborators: Physics queries, snapshot provider, planner, actuator,
            time scale
        reference: Optional one-shot impulsive transfer, fired on the first
            active tick
        cancel_token: Optional external cancellation token
    """

    def __init__(self, config: BurnConfig, body: str,
                 collaborators: BurnCollaborators,
                 reference=None,
                 cancel_token: Optional[CancellationToken] = None):
        if config is None:
            raise ConfigurationError("A BurnConfig is required")
        if not body:
            raise ConfigurationError("A vehicle name is required")
        if collaborators is None:
            raise MissingCollaboratorError("Missing collaborators")
        collaborators.validate(
            require_engine=config.burn_mode is BurnMode.CONTINUOUS_THRUST)
        if reference is not None and not callable(getattr(reference, 'run', None)):
            raise MissingCollaboratorError("Reference runner does not provide: run")

        self.config = config
        self.body = body
        self.collaborators = collaborators
        self.reference = reference
        self.cancel_token = cancel_token or CancellationToken()
        self.session: Optional[BurnSession] = None
        self.report: Optional[BurnReport] = None

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def start(self):
        """Begin a new session at tick 0."""
        self.session = BurnSession()
        self.report = None
        logger.debug(f"Burn session started for {self.body}: "
                     f"steering={self.config.steering_mode.value} "
                     f"mode={self.config.burn_mode.value}")

    def cancel(self, reason: str = "cancelled"):
        self.cancel_token.cancel(reason)

    @property
    def phase(self) -> BurnPhase:
        s = self.session
        if s is not None and s.done:
            return BurnPhase.DONE
        if s is None or s.plan is None:
            return BurnPhase.IDLE
        return BurnPhase.BURNING

    @property
    def is_done(self) -> bool:
        return self.phase is BurnPhase.DONE

    # ------------------------------------------------------------------
    # Per-tick update
    # ------------------------------------------------------------------

    def update(self) -> BurnStepOutput:
        """
        Advance the controller by one tick.

        Raises:
            RuntimeError: If start() has not been called
        """
        s = self.session
        if s is None:
            raise RuntimeError("start() must be called before update()")
        if s.done:
            return self._output(s.tick)

        tick = s.tick
        if self.cancel_token.cancelled:
            snapshot = self._refresh_snapshot()
            self._finish(BurnOutcome.CANCELLED, snapshot)
            s.tick += 1
            return self._output(tick, snapshot)

        if tick < self.config.warmup_ticks:
            s.tick += 1
            return self._output(tick)

        if s.plan is None:
            self._initialize()

        snapshot = self._refresh_snapshot()
        outcome = self._check_termination(snapshot, s.plan)
        if outcome is not None:
            self._finish(outcome, snapshot)
            out = self._output(tick, snapshot)
        else:
            out = self._command(tick, snapshot)
        s.tick += 1
        return out

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _refresh_snapshot(self) -> OrbitSnapshot:
        return self.collaborators.snapshot_provider.orbit_snapshot(self.body)

    def _total_impulse(self) -> float:
        """Delta-V spent so far: the accumulated kicks, or the engine's delta-V since burn start."""
        s = self.session
        if self.config.burn_mode is BurnMode.CONTINUOUS_THRUST and s.start_time is not None:
            return self.collaborators.actuator.engine_delta_v(self.body) - s.engine_dv_baseline
        return s.total_impulse

    def _initialize(self):
        s = self.session
        cfg = self.config
        physics = self.collaborators.physics

        transfer = self.collaborators.planner.plan_transfer(self.body, cfg.target_orbit_radius)
        delta_v = float(transfer.delta_v)
        if not np.isfinite(delta_v) or delta_v < 0.0:
            logger.warning(f"Planner returned invalid dV={delta_v}; treating plan as degenerate")
            delta_v = 0.0

        duration_world = cfg.burn_duration_world_seconds
        if duration_world is None:
            duration_world = getattr(transfer, 'burn_duration_hint', None)
        if duration_world is None:
            raise ConfigurationError(
                "No burn duration configured and the planner provided no hint")
        burn_duration = self.collaborators.time_scale.world_seconds_to_sim_time(duration_world)

        plan = BurnPlan(
            delta_v=delta_v,
            target_radius=cfg.target_orbit_radius,
            burn_duration=burn_duration,
            step_duration=cfg.dt,
        )
        s.plan = plan
        logger.info(f"Transfer impulse dV={plan.delta_v:.6f} "
                    f"burn impulse={plan.impulse_magnitude:.6e} "
                    f"numImpulse={plan.num_impulses:.1f}")
        if plan.is_degenerate:
            logger.warning("Degenerate transfer plan (no delta-V); "
                           "session ends at the next termination check")

        s.initial_direction = unit_vector(physics.get_velocity(self.body))
        s.start_time = physics.get_physical_time()

        # The engine is engaged with the first thrust-axis command
        if cfg.burn_mode is BurnMode.CONTINUOUS_THRUST:
            s.engine_dv_baseline = self.collaborators.actuator.engine_delta_v(self.body)

        if self.reference is not None:
            self.reference.run()

    def _check_termination(self, snapshot: OrbitSnapshot,
                           plan: BurnPlan) -> Optional[BurnOutcome]:
        if snapshot.eccentricity > C.HYPERBOLIC_ECCENTRICITY:
            return BurnOutcome.HYPERBOLIC
        # Accept anything within tolerance below the target, never require overshoot
        if snapshot.apogee_radius >= plan.target_radius - self.config.apogee_tolerance:
            return BurnOutcome.TARGET_REACHED
        if plan.is_degenerate:
            return BurnOutcome.DEGENERATE_PLAN
        return None

    def _steering_direction(self) -> np.ndarray:
        physics = self.collaborators.physics
        return compute_burn_direction(
            self.config.steering_mode,
            physics.get_position(self.body),
            physics.get_velocity(self.body),
            initial_direction=self.session.initial_direction,
            reference_axis=self.config.reference_axis_vector,
        )

    def _command(self, tick: int, snapshot: OrbitSnapshot) -> BurnStepOutput:
        s = self.session
        direction = self._steering_direction()
        if not np.any(direction):
            if not s.steering_warned:
                logger.warning(f"Steering direction undefined at tick {tick}; "
                               "no command issued until it is defined")
                s.steering_warned = True
            else:
                logger.debug(f"Steering direction undefined at tick {tick}")
            return self._output(tick, snapshot)

        actuator = self.collaborators.actuator
        if self.config.burn_mode is BurnMode.IMPULSE_TRAIN:
            magnitude = s.plan.impulse_magnitude
            impulse = magnitude * direction
            check_vector_finite(impulse, "impulse")
            actuator.apply_impulse(self.body, impulse)
            s.total_impulse += magnitude
            command = 'impulse'
        elif self.config.burn_mode is BurnMode.CONTINUOUS_THRUST:
            magnitude = 0.0
            axis = -direction
            check_vector_finite(axis, "thrust axis")
            actuator.set_thrust_axis(self.body, axis)
            if not s.engine_engaged:
                actuator.set_engine_enabled(self.body, True)
                s.engine_engaged = True
            command = 'thrust_axis'
        else:
            raise ValueError(f"Unknown burn mode: {self.config.burn_mode}")

        s.commands_issued += 1
        return self._output(tick, snapshot, command=command,
                            direction=direction, impulse=magnitude)

    def _finish(self, outcome: BurnOutcome, snapshot: OrbitSnapshot):
        s = self.session
        physics = self.collaborators.physics
        actuator = self.collaborators.actuator

        s.done = True
        s.outcome = outcome

        elapsed = 0.0
        if s.start_time is not None:
            elapsed = physics.get_physical_time() - s.start_time
        elapsed_world = self.collaborators.time_scale.sim_time_to_world_seconds(elapsed)

        total = self._total_impulse()

        if s.engine_engaged:
            actuator.set_engine_enabled(self.body, False)
            s.engine_engaged = False

        self.report = BurnReport(
            outcome=outcome,
            elapsed_sim_time=float(elapsed),
            elapsed_world_time=float(elapsed_world),
            total_impulse=float(total),
            phase_angle=float(snapshot.phase_angle),
            apogee_radius=float(snapshot.apogee_radius),
            eccentricity=float(snapshot.eccentricity),
            ticks=s.tick,
            planned_delta_v=s.plan.delta_v if s.plan is not None else 0.0,
            commands_issued=s.commands_issued,
        )

        if outcome is BurnOutcome.TARGET_REACHED:
            logger.info(f"Reached target orbit. Sim time={elapsed:.2f}s "
                        f"burn time={elapsed_world:.2f}s total impulse={total:.6f} "
                        f"phase offset={snapshot.phase_angle:.6f}")
        elif outcome is BurnOutcome.HYPERBOLIC:
            logger.warning(f"Orbit became hyperbolic (e={snapshot.eccentricity:.6f}) "
                           f"after {elapsed:.2f}s, total impulse={total:.6f}")
        elif outcome is BurnOutcome.DEGENERATE_PLAN:
            logger.warning(f"Burn ended with degenerate plan: apogee "
                           f"{snapshot.apogee_radius:.3f} km, target {s.plan.target_radius:.3f} km")
        else:
            logger.warning(f"Burn cancelled ({self.cancel_token.reason}) after {elapsed:.2f}s")

    def _output(self, tick: int, snapshot: Optional[OrbitSnapshot] = None,
                command: str = 'none', direction: Optional[np.ndarray] = None,
                impulse: float = 0.0) -> BurnStepOutput:
        return BurnStepOutput(
            tick=tick,
            phase=self.phase.name,
            command=command,
            burn_direction=direction,
            impulse_magnitude=impulse,
            total_impulse=self._total_impulse(),
            apogee_radius=snapshot.apogee_radius if snapshot is not None else None,
            eccentricity=snapshot.eccentricity if snapshot is not None else None,
            phase_angle=snapshot.phase_angle if snapshot is not None else None,
        )
