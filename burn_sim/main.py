"""
Finite-Burn Simulation - Main Entry Point

This module runs one finite-burn experiment:
- Two vehicles on the same circular parking orbit
- The spaceship raises its apogee with the finite-burn controller
- The control ship flies the impulsive Hohmann departure burn
- Per-tick data logging and a comparison of the two at burn end

Execution order per tick:
    controller.update()  (snapshot -> termination check -> command)
    log
    world.step()

Coordinate frame: central-body inertial, orbit plane = XY, motion about +Z.
"""

import csv
import logging
import os
import time
from dataclasses import dataclass, field
from typing import List, Optional

import numpy as np

from . import constants as C
from .actuator import EngineModel
from .config import BurnConfig, create_default_config
from .controller import (
    BurnCollaborators,
    BurnReport,
    CancellationToken,
    FiniteBurnController,
)
from .orbit import OrbitSnapshot, OrbitSnapshotProvider, circular_velocity
from .planner import HohmannPlanner
from .reference import ReferenceTransferRunner
from .scaler import TimeScale
from .utils import wrap_angle
from .validation import compute_specific_energy, validate_energy_conservation
from .world import World

# Configure module logger
logger = logging.getLogger(__name__)


@dataclass
class BurnLog:
    """Container for logged per-tick data."""
    time: List[float] = field(default_factory=list)
    phase: List[str] = field(default_factory=list)
    apogee: List[float] = field(default_factory=list)          # km
    eccentricity: List[float] = field(default_factory=list)
    phase_angle: List[float] = field(default_factory=list)     # rad
    radius: List[float] = field(default_factory=list)          # km
    speed: List[float] = field(default_factory=list)           # km/s
    total_impulse: List[float] = field(default_factory=list)   # km/s
    position_x: List[float] = field(default_factory=list)
    position_y: List[float] = field(default_factory=list)
    position_z: List[float] = field(default_factory=list)
    reference_x: List[float] = field(default_factory=list)
    reference_y: List[float] = field(default_factory=list)
    reference_z: List[float] = field(default_factory=list)

    def append(self, world: World, output: dict, ship: str, reference: Optional[str]):
        """Log data from the current tick."""
        state = world.get_state(ship)
        self.time.append(world.get_physical_time())
        self.phase.append(output['phase'])
        self.apogee.append(np.nan if output['apogee_radius'] is None else output['apogee_radius'])
        self.eccentricity.append(np.nan if output['eccentricity'] is None else output['eccentricity'])
        self.phase_angle.append(np.nan if output['phase_angle'] is None else output['phase_angle'])
        self.radius.append(state.radius)
        self.speed.append(state.speed)
        self.total_impulse.append(output['total_impulse'])
        self.position_x.append(float(state.r[0]))
        self.position_y.append(float(state.r[1]))
        self.position_z.append(float(state.r[2]))
        if reference is not None:
            r_ref = world.get_position(reference)
            self.reference_x.append(float(r_ref[0]))
            self.reference_y.append(float(r_ref[1]))
            self.reference_z.append(float(r_ref[2]))

    def __len__(self) -> int:
        return len(self.time)

    def to_csv(self, filename: str):
        """Write logged per-tick data to CSV for offline analysis."""
        os.makedirs(os.path.dirname(filename) or '.', exist_ok=True)
        header = [
            'time', 'phase', 'apogee_km', 'eccentricity', 'phase_angle_rad',
            'radius_km', 'speed_kms', 'total_impulse_kms',
            'pos_x', 'pos_y', 'pos_z',
        ]
        has_reference = len(self.reference_x) == len(self.time) and len(self.time) > 0
        if has_reference:
            header += ['ref_x', 'ref_y', 'ref_z']

        with open(filename, 'w', newline='') as fh:
            writer = csv.writer(fh)
            writer.writerow(header)
            for i in range(len(self.time)):
                row = [
                    self.time[i], self.phase[i], self.apogee[i], self.eccentricity[i],
                    self.phase_angle[i], self.radius[i], self.speed[i], self.total_impulse[i],
                    self.position_x[i], self.position_y[i], self.position_z[i],
                ]
                if has_reference:
                    row += [self.reference_x[i], self.reference_y[i], self.reference_z[i]]
                writer.writerow(row)


@dataclass
class ExperimentResult:
    """Outcome of one finite-burn experiment."""
    config: BurnConfig
    report: BurnReport
    log: BurnLog
    final_snapshot: OrbitSnapshot
    reference_snapshot: Optional[OrbitSnapshot] = None
    wall_time_s: float = 0.0

    @property
    def phase_offset(self) -> Optional[float]:
        """Burn phase angle minus reference phase angle, wrapped to [-pi, pi) (rad)."""
        if self.reference_snapshot is None:
            return None
        return wrap_angle(self.final_snapshot.phase_angle - self.reference_snapshot.phase_angle)

    @property
    def phase_offset_deg(self) -> Optional[float]:
        offset = self.phase_offset
        return None if offset is None else float(np.degrees(offset))

    @property
    def delta_v_penalty(self) -> float:
        """Finite-burn impulse in excess of the ideal impulsive delta-V (km/s)."""
        return self.report.total_impulse - self.report.planned_delta_v


def create_world(config: BurnConfig) -> World:
    """
    Build the two-vehicle world on a circular orbit in the XY plane.

    Both vehicles start at (r0, 0, 0) moving along +Y. The spaceship
    carries the engine used in continuous-thrust mode.
    """
    world = World(dt=config.dt, mu=config.mu, method=config.integration_method)
    r0 = np.array([config.initial_orbit_radius, 0.0, 0.0])
    v0 = np.array([0.0, circular_velocity(config.initial_orbit_radius, config.mu), 0.0])

    world.add_body(C.SPACESHIP, r0, v0,
                   engine=EngineModel(acceleration=config.engine_acceleration))
    if config.include_reference:
        world.add_body(C.REFERENCE_SHIP, r0, v0)
    return world


def create_collaborators(world: World, config: BurnConfig) -> BurnCollaborators:
    """Wire the world into the controller's collaborator set."""
    return BurnCollaborators(
        physics=world,
        snapshot_provider=OrbitSnapshotProvider(world, config.mu),
        planner=HohmannPlanner(world, config.mu),
        actuator=world,
        time_scale=TimeScale(config.time_scale),
    )


def run_burn_experiment(config: Optional[BurnConfig] = None,
                        verbose: Optional[bool] = None) -> ExperimentResult:
    """
    Run one finite-burn experiment to completion.

    Args:
        config: BurnConfig instance. If None a default is created.
        verbose: Print progress. Overrides config.verbose if given.

    Returns:
        ExperimentResult
    """
    if config is None:
        config = create_default_config()
    if verbose is None:
        verbose = config.verbose

    world = create_world(config)
    collaborators = create_collaborators(world, config)

    reference = None
    reference_name = None
    if config.include_reference:
        reference_name = C.REFERENCE_SHIP
        reference = ReferenceTransferRunner(reference_name, collaborators.planner,
                                            world, config.target_orbit_radius)

    token = CancellationToken()
    controller = FiniteBurnController(config, C.SPACESHIP, collaborators,
                                      reference=reference, cancel_token=token)
    log = BurnLog()

    logger.info(f"Starting burn experiment: dt={config.dt}s, max_time={config.max_time}s, "
                f"steering={config.steering_mode.value}, mode={config.burn_mode.value}")

    if verbose:
        print("\n" + "=" * 80)
        print(f"FINITE BURN EXPERIMENT | dt={config.dt}s | steering={config.steering_mode.value} "
              f"| mode={config.burn_mode.value}")
        print("=" * 80)
        print(f"{'Time (s)':^10} | {'Apogee (km)':^12} | {'Ecc':^10} | {'dV (km/s)':^12} | {'Phase':<10}")
        print("-" * 80)

    start_time = time.time()
    E_prev = compute_specific_energy(world.get_position(C.SPACESHIP),
                                     world.get_velocity(C.SPACESHIP), config.mu)
    coasting_since_check = True
    last_print_time = -np.inf

    controller.start()
    while True:
        if world.get_physical_time() >= config.max_time and not controller.is_done:
            token.cancel(f"Maximum simulation time reached: {config.max_time}s")

        output = controller.update()
        log.append(world, output, C.SPACESHIP, reference_name)

        if controller.is_done:
            break

        if output['command'] != 'none' or world.is_thrusting():
            coasting_since_check = False

        world.step()

        if world.step_count % config.energy_check_interval == 0:
            E_current = compute_specific_energy(world.get_position(C.SPACESHIP),
                                                world.get_velocity(C.SPACESHIP), config.mu)
            if coasting_since_check:
                _validate_energy(E_current, E_prev, world.get_physical_time())
            E_prev = E_current
            coasting_since_check = not world.is_thrusting()

        if verbose and output['apogee_radius'] is not None \
                and world.get_physical_time() - last_print_time >= 60.0:
            _print_status(world.get_physical_time(), output)
            last_print_time = world.get_physical_time()

    elapsed = time.time() - start_time
    report = controller.report
    final_snapshot = collaborators.snapshot_provider.orbit_snapshot(C.SPACESHIP)
    reference_snapshot = None
    if reference_name is not None:
        reference_snapshot = collaborators.snapshot_provider.orbit_snapshot(reference_name)

    result = ExperimentResult(
        config=config,
        report=report,
        log=log,
        final_snapshot=final_snapshot,
        reference_snapshot=reference_snapshot,
        wall_time_s=elapsed,
    )
    _log_completion(result, world.step_count, verbose)
    return result


def _validate_energy(E_current: float, E_prev: float, t: float):
    """Helper to validate and log energy conservation over a coast arc."""
    energy_result = validate_energy_conservation(E_current, E_prev)
    if not energy_result['valid']:
        logger.warning(f"Energy drift at t={t:.1f}s: "
                       f"relative_error={energy_result['relative_error']:.2e}, "
                       f"dE={energy_result['dE']:.2e} km^2/s^2")


def _print_status(t: float, output: dict):
    """Print a formatted status row."""
    msg = (f"{t:10.1f} | {output['apogee_radius']:12.3f} | "
           f"{output['eccentricity']:10.6f} | {output['total_impulse']:12.6f} | "
           f"{output['phase']:<10}")
    print(msg)
    logger.debug(msg)


def _log_completion(result: ExperimentResult, steps: int, verbose: bool):
    """Log and print the experiment summary."""
    report = result.report
    logger.info(f"Burn experiment complete: {steps} steps in {result.wall_time_s:.2f}s")
    logger.info(f"Result: {report.summary()}")

    if verbose:
        print("-" * 80)
        print("BURN COMPLETED" if report.success else f"BURN ENDED: {report.outcome.name}")
        print("-" * 80)
        print(f"Burn Time (sim):   {report.elapsed_sim_time:.2f} s")
        print(f"Burn Time (world): {report.elapsed_world_time:.2f} s")
        print(f"Total Impulse:     {report.total_impulse * 1000:.3f} m/s")
        print(f"Ideal dV:          {report.planned_delta_v * 1000:.3f} m/s")
        print(f"Final Apogee:      {report.apogee_radius:.3f} km")
        print(f"Eccentricity:      {report.eccentricity:.6f}")
        if result.phase_offset_deg is not None:
            print(f"Phase Offset:      {result.phase_offset_deg:.4f} deg")
        print("-" * 80)
        print(f"Steps:       {steps:,}")
        print(f"Wall Time:   {result.wall_time_s:.2f} s")
        print("=" * 80)
