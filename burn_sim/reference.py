"""
Impulsive reference transfer.

Flies the ideal Hohmann departure burn on the control vehicle as a single
instantaneous velocity change, so the finite burn can be compared against
it.
"""

import logging
from typing import Optional

from .planner import Maneuver
from .validation import check_vector_finite

logger = logging.getLogger(__name__)


class ReferenceTransferRunner:
    """Exactly-once impulsive transfer on a secondary vehicle."""

    def __init__(self, body: str, planner, actuator, target_radius: float):
        self.body = body
        self.planner = planner
        self.actuator = actuator
        self.target_radius = target_radius
        self.executed = False
        self.maneuver: Optional[Maneuver] = None

    def run(self) -> Optional[Maneuver]:
        """
        Apply the full departure delta-V once.

        Returns:
            The applied maneuver on the first call; None on later calls or
            when the planner has nothing to do
        """
        if self.executed:
            return None
        self.executed = True

        plan = self.planner.plan_transfer(self.body, self.target_radius)
        if plan.is_empty:
            logger.info(f"Reference transfer for {self.body}: no maneuver required")
            return None

        maneuver = plan.maneuvers[0]
        check_vector_finite(maneuver.velocity_change, "reference impulse")
        self.actuator.apply_impulse(self.body, maneuver.velocity_change)
        self.maneuver = maneuver
        logger.info(f"Reference transfer for {self.body}: applied dV={maneuver.delta_v:.6f} km/s")
        return maneuver
