"""
Lander Descent Simulation Package

A planar simulation of a twin-nozzle lander descending through a viscous,
turbulent atmosphere, with a fitness function for scoring landings and an
evaluator for scoring controllers over repeated trials.

Modules:
    - constants: Physical constants, lander parameters and fitness weights
    - config: Run configuration (timestep, pacing, trials, seeding)
    - environment: Planet gravity, viscosity and turbulence
    - specs: Static lander specification
    - state: Mutable vehicle state and immutable snapshots
    - mass: Fuel consumption and effective thrust
    - dynamics: Drag, terminal velocity and thrust resolution
    - integrators: Explicit Euler step
    - control: Observation, ControlPolicy protocol and stock policies
    - validation: Thrust command checks and error types
    - vehicle: The lander and its run loop
    - fitness: Landing score
    - evaluator: Multi-trial controller evaluation
    - telemetry: Trajectory logging
    - plotting: Trajectory plots
    - cli: Command-line entry point
"""

from .config import SimulationConfig, create_default_config, create_test_config
from .control import (
    ControlPolicy,
    ControllerError,
    Observation,
    ThrustCommand,
    FunctionPolicy,
    ZeroThrustPolicy,
    ConstantThrustPolicy,
    BrakingProfilePolicy,
    SteeringBalancePolicy,
    create_policy,
)
from .environment import Environment, create_mars_environment, create_calm_environment
from .evaluator import Evaluator, EvaluationResults, TrialResult, evaluate
from .fitness import compute_fitness, fitness_breakdown
from .specs import VehicleSpecification, create_mars_lander_specs
from .state import VehicleState, VehicleSnapshot
from .telemetry import TrajectoryLog
from .validation import ValidationError, LifecycleError
from .vehicle import Vehicle, RunStatus

__version__ = "1.0.0"
__author__ = "Lander Simulation Team"

__all__ = [
    'SimulationConfig',
    'create_default_config',
    'create_test_config',
    'ControlPolicy',
    'ControllerError',
    'Observation',
    'ThrustCommand',
    'FunctionPolicy',
    'ZeroThrustPolicy',
    'ConstantThrustPolicy',
    'BrakingProfilePolicy',
    'SteeringBalancePolicy',
    'create_policy',
    'Environment',
    'create_mars_environment',
    'create_calm_environment',
    'Evaluator',
    'EvaluationResults',
    'TrialResult',
    'evaluate',
    'compute_fitness',
    'fitness_breakdown',
    'VehicleSpecification',
    'create_mars_lander_specs',
    'VehicleState',
    'VehicleSnapshot',
    'TrajectoryLog',
    'ValidationError',
    'LifecycleError',
    'Vehicle',
    'RunStatus',
]
