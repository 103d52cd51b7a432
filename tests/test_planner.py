import numpy as np
import pytest

from burn_sim import constants as C
from burn_sim.orbit import circular_velocity, compute_orbit_snapshot
from burn_sim.planner import HohmannPlanner, TransferPlan, compute_hohmann_transfer
from burn_sim.world import World


def make_world(radius=7000.0):
    world = World(dt=1.0)
    world.add_body("ship", [radius, 0.0, 0.0], [0.0, circular_velocity(radius), 0.0])
    return world


def test_hohmann_leo_to_geo():
    r_e = 6378.137
    out = compute_hohmann_transfer(r_e + 400.0, r_e + 35786.0)
    assert out['dv_total'] == pytest.approx(3.85, abs=0.1)
    assert out['transfer_time'] / 3600.0 == pytest.approx(5.3, abs=0.2)


def test_hohmann_7000_to_10000():
    out = compute_hohmann_transfer(7000.0, 10000.0)
    v1 = np.sqrt(C.MU_EARTH / 7000.0)
    expected = v1 * (np.sqrt(2 * 10000.0 / 17000.0) - 1.0)
    assert out['dv1'] == pytest.approx(expected)
    assert out['a_transfer'] == 8500.0


def test_hohmann_rejects_bad_radius():
    with pytest.raises(ValueError):
        compute_hohmann_transfer(0.0, 10000.0)


def test_planner_departure_reaches_target_apogee():
    world = make_world()
    plan = HohmannPlanner(world).plan_transfer("ship", 10000.0)

    assert len(plan.maneuvers) == 2
    assert plan.delta_v == pytest.approx(compute_hohmann_transfer(7000.0, 10000.0)['dv1'])
    departure = plan.maneuvers[0]
    np.testing.assert_allclose(departure.velocity_change / departure.delta_v, [0.0, 1.0, 0.0], atol=1e-12)

    v_new = world.get_velocity("ship") + departure.velocity_change
    snap = compute_orbit_snapshot(world.get_position("ship"), v_new)
    assert snap.apogee_radius == pytest.approx(10000.0)


def test_planner_second_maneuver_circularizes():
    world = make_world()
    plan = HohmannPlanner(world).plan_transfer("ship", 10000.0)
    arrival = plan.maneuvers[1]
    assert arrival.label == "circularize"
    assert arrival.time_offset == pytest.approx(compute_hohmann_transfer(7000.0, 10000.0)['transfer_time'])
    np.testing.assert_allclose(arrival.velocity_change / arrival.delta_v, [0.0, -1.0, 0.0], atol=1e-12)


def test_planner_no_maneuver_when_target_reached():
    world = make_world(radius=10000.0)
    plan = HohmannPlanner(world, burn_duration_hint=120.0).plan_transfer("ship", 9000.0)
    assert plan.is_empty
    assert plan.delta_v == 0.0
    assert plan.burn_duration_hint == 120.0


def test_empty_transfer_plan_defaults():
    plan = TransferPlan()
    assert plan.is_empty
    assert plan.delta_v == 0.0
    assert plan.burn_duration_hint is None
