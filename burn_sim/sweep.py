"""
Finite-Burn Simulation - Steering Strategy Sweep

Runs the burn experiment for every combination of steering mode, burn mode
and burn duration, and collects the delta-V, time and phase-offset
statistics used to compare strategies.
"""

import itertools
import logging
import time
from dataclasses import dataclass, field, replace
from typing import Callable, List, Optional, Sequence

import numpy as np

from .config import BurnConfig, create_default_config
from .guidance import BurnMode, SteeringMode
from .validation import ValidationError

logger = logging.getLogger(__name__)


@dataclass
class SweepRunResult:
    """Result from a single strategy run."""
    run_index: int
    steering_mode: str
    burn_mode: str
    burn_duration: float
    outcome: str
    total_impulse: float = 0.0
    planned_delta_v: float = 0.0
    delta_v_penalty: float = 0.0
    elapsed_sim_time: float = 0.0
    phase_offset_deg: float = 0.0
    final_apogee: float = 0.0

    @property
    def success(self) -> bool:
        return self.outcome == "TARGET_REACHED"


@dataclass
class SweepResults:
    """Aggregated results from a strategy sweep."""
    runs: List[SweepRunResult] = field(default_factory=list)
    config: Optional[BurnConfig] = None
    wall_time_s: float = 0.0

    @property
    def n_runs(self) -> int:
        return len(self.runs)

    def successful_runs(self) -> List[SweepRunResult]:
        return [r for r in self.runs if r.success]

    def get_statistic(self, attr: str) -> dict:
        """Compute mean/std/min/max for a scalar attribute across successful runs."""
        values = [getattr(r, attr) for r in self.successful_runs() if hasattr(r, attr)]
        if not values:
            return {'mean': 0, 'std': 0, 'min': 0, 'max': 0}
        arr = np.array(values)
        return {
            'mean': float(np.mean(arr)),
            'std': float(np.std(arr)),
            'min': float(np.min(arr)),
            'max': float(np.max(arr)),
        }

    def best(self, attr: str = 'total_impulse') -> Optional[SweepRunResult]:
        """Successful run with the smallest |attr|."""
        runs = self.successful_runs()
        if not runs:
            return None
        return min(runs, key=lambda r: abs(getattr(r, attr)))

    def summary(self) -> str:
        """Return a formatted summary table."""
        lines = [f"Strategy sweep: {self.n_runs} runs in {self.wall_time_s:.1f}s",
                 f"  {'steering':<14}{'mode':<19}{'burn (s)':>9}{'dV (m/s)':>11}"
                 f"{'penalty':>10}{'phase (deg)':>13}  outcome"]
        for r in self.runs:
            lines.append(f"  {r.steering_mode:<14}{r.burn_mode:<19}{r.burn_duration:>9.1f}"
                         f"{r.total_impulse * 1000:>11.3f}{r.delta_v_penalty * 1000:>10.3f}"
                         f"{r.phase_offset_deg:>13.4f}  {r.outcome}")
        return '\n'.join(lines)


def run_strategy_sweep(base_config: BurnConfig = None,
                       steering_modes: Sequence[SteeringMode] = tuple(SteeringMode),
                       burn_modes: Sequence[BurnMode] = tuple(BurnMode),
                       burn_durations: Optional[Sequence[float]] = None,
                       run_function: Callable = None,
                       verbose: bool = True) -> SweepResults:
    """
    Run the experiment for each strategy combination.

    Args:
        base_config: Base configuration; modes and duration are replaced per run
        steering_modes: Steering modes to try
        burn_modes: Burn modes to try
        burn_durations: Burn durations (world seconds); defaults to the
            base config's duration
        run_function: Callable(config) -> ExperimentResult. If None, uses
            run_burn_experiment from main.
        verbose: Print progress

    Returns:
        SweepResults with per-run data
    """
    if base_config is None:
        base_config = create_default_config()
    if burn_durations is None:
        burn_durations = [base_config.burn_duration_world_seconds]

    if run_function is None:
        from .main import run_burn_experiment

        def run_function(cfg):
            return run_burn_experiment(cfg, verbose=False)

    results = SweepResults(config=base_config)
    start = time.time()
    combos = list(itertools.product(steering_modes, burn_modes, burn_durations))

    for i, (steering, mode, duration) in enumerate(combos):
        steering = SteeringMode(steering)
        mode = BurnMode(mode)
        cfg = replace(base_config, steering_mode=steering, burn_mode=mode,
                      burn_duration_world_seconds=duration, verbose=False)
        try:
            result = run_function(cfg)
            report = result.report
            offset = result.phase_offset_deg
            run_result = SweepRunResult(
                run_index=i,
                steering_mode=steering.value,
                burn_mode=mode.value,
                burn_duration=float(duration),
                outcome=report.outcome.name,
                total_impulse=report.total_impulse,
                planned_delta_v=report.planned_delta_v,
                delta_v_penalty=report.total_impulse - report.planned_delta_v,
                elapsed_sim_time=report.elapsed_sim_time,
                phase_offset_deg=offset if offset is not None else 0.0,
                final_apogee=report.apogee_radius,
            )
        except (ValidationError, ValueError) as e:
            logger.error(f"Sweep run {i} ({steering.value}/{mode.value}/{duration}s) failed: {e}")
            run_result = SweepRunResult(
                run_index=i,
                steering_mode=steering.value,
                burn_mode=mode.value,
                burn_duration=float(duration),
                outcome=f"ERROR: {e}",
            )

        results.runs.append(run_result)

        if verbose:
            elapsed = time.time() - start
            print(f"  Sweep run {i+1}/{len(combos)} ({elapsed:.1f}s): "
                  f"{run_result.steering_mode}/{run_result.burn_mode} -> {run_result.outcome}")

    results.wall_time_s = time.time() - start

    if verbose:
        print(results.summary())

    return results
