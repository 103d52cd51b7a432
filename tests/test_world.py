import numpy as np
import pytest

from burn_sim.actuator import EngineModel
from burn_sim.orbit import circular_velocity, compute_orbit_snapshot
from burn_sim.validation import ValidationError
from burn_sim.world import World


@pytest.fixture
def world():
    w = World(dt=1.0)
    vc = circular_velocity(7000.0)
    w.add_body("ship", [7000.0, 0.0, 0.0], [0.0, vc, 0.0], engine=EngineModel(acceleration=1e-3))
    w.add_body("control", [7000.0, 0.0, 0.0], [0.0, vc, 0.0])
    return w


def test_bodies_and_queries(world):
    assert world.body_names() == ["ship", "control"]
    np.testing.assert_array_equal(world.get_position("ship"), [7000.0, 0.0, 0.0])
    assert world.get_physical_time() == 0.0
    with pytest.raises(KeyError):
        world.get_position("nobody")


def test_duplicate_body_rejected(world):
    with pytest.raises(ValueError):
        world.add_body("ship", [7000.0, 0.0, 0.0], [0.0, 1.0, 0.0])


def test_queries_return_copies(world):
    r = world.get_position("ship")
    r[0] = 0.0
    assert world.get_position("ship")[0] == 7000.0


def test_step_advances_time(world):
    world.step()
    world.step()
    assert world.get_physical_time() == 2.0
    assert world.step_count == 2
    assert world.get_state("ship").t == 2.0


def test_apply_impulse_changes_velocity_immediately(world):
    v0 = world.get_velocity("ship")
    world.apply_impulse("ship", [0.0, 0.1, 0.0])
    np.testing.assert_allclose(world.get_velocity("ship") - v0, [0.0, 0.1, 0.0])
    np.testing.assert_array_equal(world.get_position("ship"), [7000.0, 0.0, 0.0])


def test_apply_non_finite_impulse_rejected(world):
    with pytest.raises(ValidationError):
        world.apply_impulse("ship", [np.nan, 0.0, 0.0])


def test_engine_control_requires_engine(world):
    with pytest.raises(ValueError):
        world.set_engine_enabled("control", True)
    with pytest.raises(ValueError):
        world.set_thrust_axis("control", [1.0, 0.0, 0.0])
    assert world.engine_delta_v("control") == 0.0


def test_continuous_thrust_along_steering_direction(world):
    # Exhaust points backwards so the ship speeds up
    world.set_thrust_axis("ship", [0.0, -1.0, 0.0])
    world.set_engine_enabled("ship", True)
    assert world.is_thrusting()
    for _ in range(60):
        world.step()
    world.set_engine_enabled("ship", False)
    assert not world.is_thrusting()

    ship = world.get_state("ship")
    control = world.get_state("control")
    assert ship.speed > control.speed
    assert world.engine_delta_v("ship") == pytest.approx(0.06)
    snap = compute_orbit_snapshot(ship.r, ship.v)
    assert snap.apogee_radius > 7000.0 + 50.0


def test_engine_off_leaves_orbits_identical(world):
    for _ in range(10):
        world.step()
    np.testing.assert_allclose(world.get_position("ship"), world.get_position("control"))
    assert world.engine_delta_v("ship") == 0.0
