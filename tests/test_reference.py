import numpy as np
import pytest

from burn_sim.orbit import circular_velocity, compute_orbit_snapshot
from burn_sim.planner import HohmannPlanner, compute_hohmann_transfer
from burn_sim.reference import ReferenceTransferRunner
from burn_sim.world import World

from conftest import FakePlanner, RecordingActuator


def test_runs_exactly_once():
    planner = FakePlanner(delta_v=0.5)
    actuator = RecordingActuator()
    runner = ReferenceTransferRunner("control", planner, actuator, 10000.0)

    maneuver = runner.run()
    assert maneuver is not None
    assert runner.executed
    assert runner.run() is None
    assert runner.run() is None
    assert len(actuator.impulses) == 1
    assert len(planner.calls) == 1
    np.testing.assert_allclose(actuator.impulses[0], [0.0, 0.5, 0.0])


def test_empty_plan_applies_nothing():
    actuator = RecordingActuator()
    runner = ReferenceTransferRunner("control", FakePlanner(empty=True), actuator, 10000.0)
    assert runner.run() is None
    assert runner.executed
    assert actuator.impulses == []


def test_reference_reaches_target_apogee():
    world = World(dt=1.0)
    world.add_body("control", [7000.0, 0.0, 0.0], [0.0, circular_velocity(7000.0), 0.0])
    runner = ReferenceTransferRunner("control", HohmannPlanner(world), world, 10000.0)
    maneuver = runner.run()

    assert maneuver.delta_v == pytest.approx(compute_hohmann_transfer(7000.0, 10000.0)['dv1'])
    snap = compute_orbit_snapshot(world.get_position("control"), world.get_velocity("control"))
    assert snap.apogee_radius == pytest.approx(10000.0)
