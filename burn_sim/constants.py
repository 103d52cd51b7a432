"""
Finite-Burn Simulation - Physical Constants and Scenario Defaults

This module defines the physical constants, default timing, and default
scenario parameters used throughout the simulation.

Units: kilometres, kilometres per second, seconds.
"""

import numpy as np

# =============================================================================
# EARTH PARAMETERS
# =============================================================================

# Gravitational parameter (km^3/s^2)
MU_EARTH = 398600.4418

# Earth mean radius (km)
R_EARTH = 6371.0

# =============================================================================
# SIMULATION TIMING
# =============================================================================

# Fixed integration step (s of simulation time)
DT = 0.1

# Maximum simulation time before the session is cancelled (s)
MAX_TIME = 7200.0

# Simulation seconds per world second (1.0 = real time)
TIME_SCALE = 1.0

# Ticks to wait after start() before the first real action
WARMUP_TICKS = 1

# =============================================================================
# BURN PARAMETERS
# =============================================================================

# Burn duration in world seconds (spread of the impulsive delta-V)
BURN_DURATION = 600.0

# Apogee acceptance band below the target radius (km)
APOGEE_TOLERANCE = 1.0

# Eccentricity above which the orbit is treated as escaping
HYPERBOLIC_ECCENTRICITY = 1.0

# Constant engine acceleration for continuous thrust (km/s^2), mass is fixed
ENGINE_ACCELERATION = 1.0e-3

# Out-of-plane reference axis used by perpendicular steering
Z_AXIS = np.array([0.0, 0.0, 1.0])

# =============================================================================
# DEFAULT SCENARIO
# =============================================================================

# Circular parking orbit radius (km)
INITIAL_ORBIT_RADIUS = 7000.0

# Target apogee radius (km)
TARGET_ORBIT_RADIUS = 10000.0

# Vehicle names
SPACESHIP = "spaceship"
REFERENCE_SHIP = "spaceship_impulse"

# =============================================================================
# NUMERICS
# =============================================================================

ZERO_TOLERANCE = 1e-10

# Relative energy drift allowed between coast checks
ENERGY_TOLERANCE = 1e-6

# Ticks between energy conservation checks
ENERGY_CHECK_INTERVAL = 100
