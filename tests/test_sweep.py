from unittest.mock import MagicMock

import pytest

from burn_sim.config import create_test_config
from burn_sim.controller import BurnOutcome
from burn_sim.guidance import BurnMode, SteeringMode
from burn_sim.sweep import SweepResults, SweepRunResult, run_strategy_sweep


def fake_result(total_impulse, outcome=BurnOutcome.TARGET_REACHED, offset=0.5):
    result = MagicMock()
    result.report.outcome = outcome
    result.report.total_impulse = total_impulse
    result.report.planned_delta_v = 0.6
    result.report.elapsed_sim_time = 600.0
    result.report.apogee_radius = 9999.5
    result.phase_offset_deg = offset
    return result


def test_sweep_runs_every_combination():
    seen = []

    def run(cfg):
        seen.append((cfg.steering_mode, cfg.burn_mode, cfg.burn_duration_world_seconds))
        return fake_result(0.6 + 0.01 * len(seen))

    results = run_strategy_sweep(create_test_config(), burn_durations=[300.0, 600.0],
                                 run_function=run, verbose=False)
    assert results.n_runs == len(SteeringMode) * len(BurnMode) * 2
    assert len(set(seen)) == results.n_runs
    assert all(isinstance(s, SteeringMode) for s, _, _ in seen)
    assert results.runs[0].delta_v_penalty == pytest.approx(0.01)


def test_sweep_accepts_mode_strings():
    run = MagicMock(return_value=fake_result(0.61))
    results = run_strategy_sweep(create_test_config(), steering_modes=["tangent"],
                                 burn_modes=["impulse_train"], run_function=run, verbose=False)
    assert results.n_runs == 1
    cfg = run.call_args[0][0]
    assert cfg.steering_mode is SteeringMode.TANGENT
    assert cfg.verbose is False


def test_sweep_records_failed_runs():
    def run(cfg):
        if cfg.steering_mode is SteeringMode.FIXED:
            raise ValueError("boom")
        return fake_result(0.62)

    results = run_strategy_sweep(create_test_config(), burn_modes=[BurnMode.IMPULSE_TRAIN],
                                 run_function=run, verbose=False)
    failed = [r for r in results.runs if not r.success]
    assert len(failed) == 1
    assert failed[0].outcome.startswith("ERROR")
    assert len(results.successful_runs()) == 2


def test_statistics_and_best():
    results = SweepResults(runs=[
        SweepRunResult(0, "fixed", "impulse_train", 600.0, "TARGET_REACHED", total_impulse=0.70),
        SweepRunResult(1, "tangent", "impulse_train", 600.0, "TARGET_REACHED", total_impulse=0.64),
        SweepRunResult(2, "fixed", "continuous_thrust", 600.0, "CANCELLED", total_impulse=0.10),
    ])
    stats = results.get_statistic('total_impulse')
    assert stats['min'] == pytest.approx(0.64)
    assert stats['max'] == pytest.approx(0.70)
    assert results.best().steering_mode == "tangent"
    assert "CANCELLED" in results.summary()


def test_empty_statistics():
    results = SweepResults()
    assert results.get_statistic('total_impulse') == {'mean': 0, 'std': 0, 'min': 0, 'max': 0}
    assert results.best() is None


@pytest.mark.slow
def test_sweep_with_physics():
    results = run_strategy_sweep(create_test_config(), verbose=False)
    assert results.n_runs == 6
    assert len(results.successful_runs()) >= 4
    best = results.best()
    assert best.steering_mode in ("perpendicular", "tangent")
