"""
Finite-Burn Apogee Raise Simulation Package

Spreads the impulsive Hohmann departure burn over a finite burn, steers it
with a selectable law, and compares the result with a vehicle that flies
the ideal impulsive transfer.

Modules:
    - constants: Physical constants and scenario defaults
    - config: Experiment configuration
    - state: Body state vector
    - scaler: World/simulation time conversion
    - forces, dynamics, integrators: Two-body propagation
    - actuator: Constant-acceleration engine model
    - world: Named bodies, stepping, impulses and engine control
    - orbit: Orbit snapshot (apogee, eccentricity, phase angle)
    - planner: Hohmann transfer planning
    - guidance: Steering laws
    - controller: Finite-burn guidance state machine
    - reference: Impulsive reference transfer
    - validation: Numerical checks
    - main: Experiment runner
    - sweep: Steering strategy sweep
"""

from .config import BurnConfig, ConfigurationError, create_default_config, create_test_config
from .controller import (
    BurnCollaborators,
    BurnOutcome,
    BurnPhase,
    BurnPlan,
    BurnReport,
    BurnSession,
    CancellationToken,
    FiniteBurnController,
    MissingCollaboratorError,
)
from .guidance import BurnMode, SteeringMode
from .main import ExperimentResult, run_burn_experiment

__version__ = "0.1.0"

__all__ = [
    'BurnConfig',
    'ConfigurationError',
    'create_default_config',
    'create_test_config',
    'BurnCollaborators',
    'BurnOutcome',
    'BurnPhase',
    'BurnPlan',
    'BurnReport',
    'BurnSession',
    'CancellationToken',
    'FiniteBurnController',
    'MissingCollaboratorError',
    'BurnMode',
    'SteeringMode',
    'ExperimentResult',
    'run_burn_experiment',
]
