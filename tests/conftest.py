"""Shared fakes for controller tests."""
from unittest.mock import MagicMock

import numpy as np
import pytest

from burn_sim.config import create_test_config
from burn_sim.controller import BurnCollaborators, FiniteBurnController
from burn_sim.orbit import OrbitSnapshot
from burn_sim.planner import Maneuver, TransferPlan
from burn_sim.scaler import TimeScale


def make_snapshot(apogee, eccentricity=0.1, phase_angle=0.0):
    return OrbitSnapshot(apogee_radius=apogee, eccentricity=eccentricity,
                         phase_angle=phase_angle, perigee_radius=7000.0,
                         semi_major_axis=0.5 * (apogee + 7000.0), inclination=0.0)


class FakePhysics:
    """Static position/velocity with a clock advanced by the test."""

    def __init__(self, r=(7000.0, 0.0, 0.0), v=(0.0, 7.5, 0.0), t=0.0):
        self.r = np.array(r, dtype=float)
        self.v = np.array(v, dtype=float)
        self.t = t

    def get_position(self, body):
        return self.r.copy()

    def get_velocity(self, body):
        return self.v.copy()

    def get_physical_time(self):
        return self.t


class ScriptedSnapshotProvider:
    """Returns the scripted snapshots in order, repeating the last one."""

    def __init__(self, snapshots):
        self.snapshots = list(snapshots)
        self.calls = 0

    def orbit_snapshot(self, body):
        snap = self.snapshots[min(self.calls, len(self.snapshots) - 1)]
        self.calls += 1
        return snap


class LinearApogeeProvider:
    """Apogee grows linearly with the impulse the actuator has applied."""

    def __init__(self, actuator, start=7000.0, gain=6.5, eccentricity=0.1):
        self.actuator = actuator
        self.start = start
        self.gain = gain
        self.eccentricity = eccentricity

    def orbit_snapshot(self, body):
        return make_snapshot(self.start + self.gain * self.actuator.applied,
                             self.eccentricity)


class FakePlanner:
    def __init__(self, delta_v=500.0, burn_duration_hint=None, empty=False):
        self.delta_v = delta_v
        self.burn_duration_hint = burn_duration_hint
        self.empty = empty
        self.calls = []

    def plan_transfer(self, body, target_radius):
        self.calls.append((body, target_radius))
        if self.empty:
            return TransferPlan([], burn_duration_hint=self.burn_duration_hint)
        maneuver = Maneuver(delta_v=self.delta_v,
                            velocity_change=np.array([0.0, self.delta_v, 0.0]))
        return TransferPlan([maneuver], burn_duration_hint=self.burn_duration_hint)


class RecordingActuator:
    """Records every actuator call."""

    def __init__(self):
        self.impulses = []
        self.thrust_axes = []
        self.engine_calls = []
        self.applied = 0.0
        self.engine_dv = 0.0
        self.calls = []

    def apply_impulse(self, body, delta_v):
        delta_v = np.asarray(delta_v, dtype=float)
        self.impulses.append(delta_v)
        self.calls.append('apply_impulse')
        self.applied += float(np.linalg.norm(delta_v))

    def set_thrust_axis(self, body, axis):
        self.thrust_axes.append(np.asarray(axis, dtype=float))
        self.calls.append('set_thrust_axis')

    def set_engine_enabled(self, body, enabled):
        self.engine_calls.append(enabled)
        self.calls.append('set_engine_enabled')

    def engine_delta_v(self, body):
        return self.engine_dv

    @property
    def command_count(self):
        return len(self.impulses) + len(self.thrust_axes)


class ImpulseOnlyActuator:
    """Implements only the impulse and engine-switch commands."""

    def __init__(self):
        self.impulses = []

    def apply_impulse(self, body, delta_v):
        self.impulses.append(np.asarray(delta_v, dtype=float))

    def set_thrust_axis(self, body, axis):
        pass

    def set_engine_enabled(self, body, enabled):
        pass


@pytest.fixture
def physics():
    return FakePhysics()


@pytest.fixture
def actuator():
    return RecordingActuator()


@pytest.fixture
def make_controller(physics, actuator):
    """Factory: build and start a controller around fakes."""

    def _make(snapshot_provider, planner=None, reference=None, **overrides):
        overrides.setdefault('dt', 0.1)
        overrides.setdefault('burn_duration_world_seconds', 600.0)
        overrides.setdefault('target_orbit_radius', 10000.0)
        overrides.setdefault('apogee_tolerance', 1.0)
        config = create_test_config(**overrides)
        collaborators = BurnCollaborators(
            physics=physics,
            snapshot_provider=snapshot_provider,
            planner=planner or FakePlanner(),
            actuator=actuator,
            time_scale=TimeScale(1.0),
        )
        controller = FiniteBurnController(config, "ship", collaborators, reference=reference)
        controller.start()
        return controller

    return _make


@pytest.fixture
def mock_reference():
    return MagicMock()
