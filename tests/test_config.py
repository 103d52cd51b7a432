"""Tests for config module."""
import pytest
from dataclasses import replace

from burn_sim import config
from burn_sim import constants as C
from burn_sim.guidance import BurnMode, SteeringMode


def test_burn_config_defaults():
    """Test that default config uses constants values."""
    cfg = config.BurnConfig()
    assert cfg.dt == C.DT
    assert cfg.max_time == C.MAX_TIME
    assert cfg.apogee_tolerance == C.APOGEE_TOLERANCE
    assert cfg.target_orbit_radius == C.TARGET_ORBIT_RADIUS
    assert cfg.burn_duration_world_seconds == C.BURN_DURATION
    assert cfg.steering_mode is SteeringMode.PERPENDICULAR
    assert cfg.burn_mode is BurnMode.IMPULSE_TRAIN
    assert cfg.warmup_ticks == 1


def test_burn_config_frozen():
    """Test that config is immutable (frozen)."""
    cfg = config.BurnConfig()
    with pytest.raises(Exception):  # FrozenInstanceError
        cfg.dt = 0.5


def test_mode_strings_are_coerced():
    cfg = config.BurnConfig(steering_mode="tangent", burn_mode="continuous_thrust")
    assert cfg.steering_mode is SteeringMode.TANGENT
    assert cfg.burn_mode is BurnMode.CONTINUOUS_THRUST


def test_replace_revalidates():
    cfg = config.BurnConfig()
    assert replace(cfg, steering_mode="fixed").steering_mode is SteeringMode.FIXED
    with pytest.raises(config.ConfigurationError):
        replace(cfg, dt=-1.0)


@pytest.mark.parametrize('overrides', [
    dict(steering_mode="sideways"),
    dict(burn_mode="warp"),
    dict(dt=0.0),
    dict(max_time=-1.0),
    dict(time_scale=0.0),
    dict(integration_method="leapfrog"),
    dict(target_orbit_radius=0.0),
    dict(apogee_tolerance=-0.1),
    dict(burn_duration_world_seconds=0.0),
    dict(engine_acceleration=-1.0),
    dict(reference_axis=(0.0, 0.0, 0.0)),
    dict(reference_axis=(1.0, 0.0)),
    dict(warmup_ticks=-1),
    dict(initial_orbit_radius=-7000.0),
    dict(mu=0.0),
    dict(energy_check_interval=0),
])
def test_invalid_values_raise(overrides):
    with pytest.raises(config.ConfigurationError):
        config.BurnConfig(**overrides)


def test_configuration_error_is_value_error():
    assert issubclass(config.ConfigurationError, ValueError)


def test_burn_duration_may_defer_to_planner():
    cfg = config.BurnConfig(burn_duration_world_seconds=None)
    assert cfg.burn_duration_world_seconds is None


def test_reference_axis_vector_normalized():
    cfg = config.BurnConfig(reference_axis=(0.0, 0.0, 2.0))
    assert list(cfg.reference_axis_vector) == [0.0, 0.0, 1.0]


def test_create_default_config():
    cfg = config.create_default_config()
    assert isinstance(cfg, config.BurnConfig)
    assert cfg.dt == C.DT


def test_create_test_config():
    cfg = config.create_test_config()
    assert cfg.dt == 1.0
    assert cfg.verbose is False


def test_create_test_config_custom():
    cfg = config.create_test_config(dt=0.5, max_time=50.0, apogee_tolerance=0.0)
    assert cfg.dt == 0.5
    assert cfg.max_time == 50.0
    assert cfg.apogee_tolerance == 0.0
