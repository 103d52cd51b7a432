"""
Conversion between world (wall-clock mission) seconds and simulation time.

Burn durations are configured in world seconds; the integrator and the
controller work in simulation time. Only reporting converts back.
"""

from . import constants as C


class TimeScale:
    """Linear world <-> simulation time mapping."""

    def __init__(self, sim_seconds_per_world_second: float = C.TIME_SCALE):
        if not sim_seconds_per_world_second > 0.0:
            raise ValueError(
                f"Time scale must be positive, got {sim_seconds_per_world_second}"
            )
        self.sim_seconds_per_world_second = float(sim_seconds_per_world_second)

    def world_seconds_to_sim_time(self, seconds: float) -> float:
        return seconds * self.sim_seconds_per_world_second

    def sim_time_to_world_seconds(self, sim_time: float) -> float:
        return sim_time / self.sim_seconds_per_world_second

    def __repr__(self) -> str:
        return f"TimeScale({self.sim_seconds_per_world_second})"
