"""
Lander Descent Simulation - Control Policies

This module defines the contract between the simulator and a controller:
- Observation of the lander in controller units (degrees for angles)
- ThrustCommand (left, right) in Newtons
- ControlPolicy protocol and ControllerError
- Stock policies: free fall, constant thrust, braking profile with PD
  attitude hold, and a steering balance wrapper
"""

import math
from dataclasses import dataclass
from typing import Callable, NamedTuple, Optional, Protocol, runtime_checkable

import numpy as np

from . import constants as C
from .dynamics import drag_coefficient
from .environment import Environment
from .mass import is_fuel_exhausted
from .specs import VehicleSpecification
from .state import VehicleState


class ControllerError(Exception):
    """Raised if anything goes wrong with a lander controller."""
    pass


@dataclass(frozen=True)
class Observation:
    """
    What a controller can see of the lander.

    Attributes:
        height: Distance above ground (m)
        speed_y: Rate of descent (m/s), negative when climbing
        location: Distance left (-ve) or right (+ve) of the target (m)
        speed_x: Speed left or right (m/s)
        rotation: Angle of rotation (degrees)
        rotation_speed: How fast the lander is spinning (degrees/s)
        fuel: Fuel left (kg)
    """
    height: float
    speed_y: float
    location: float
    speed_x: float
    rotation: float
    rotation_speed: float
    fuel: float

    @classmethod
    def from_state(cls, state: VehicleState) -> 'Observation':
        """Build an observation from the current vehicle state."""
        return cls(
            height=state.height,
            speed_y=state.speed_y,
            location=state.location,
            speed_x=state.speed_x,
            rotation=math.degrees(state.rotation),
            rotation_speed=math.degrees(state.rotation_speed),
            fuel=state.fuel,
        )


class ThrustCommand(NamedTuple):
    """Requested thrust per nozzle (N)."""
    left: float
    right: float


@runtime_checkable
class ControlPolicy(Protocol):
    """Anything that decides thrust from an observation."""

    def get_thrust(self, observation: Observation) -> ThrustCommand:
        """
        Args:
            observation: Current lander state

        Returns:
            (left thrust in N, right thrust in N)

        Raises:
            ControllerError: If no decision can be made this step
        """
        ...


class FunctionPolicy:
    """Adapter turning a plain callable into a ControlPolicy."""

    def __init__(self, func: Callable[[Observation], tuple], name: Optional[str] = None):
        self.func = func
        self.name = name or getattr(func, '__name__', 'function')

    def get_thrust(self, observation: Observation) -> ThrustCommand:
        result = self.func(observation)
        try:
            left, right = result
            return ThrustCommand(float(left), float(right))
        except (TypeError, ValueError) as e:
            raise ControllerError(
                f"Policy '{self.name}' returned {result!r}, expected (left, right)"
            ) from e

    def __repr__(self) -> str:
        return f"FunctionPolicy({self.name})"


class ZeroThrustPolicy:
    """Free fall: never fires the engines."""

    def get_thrust(self, observation: Observation) -> ThrustCommand:
        return ThrustCommand(0.0, 0.0)


class ConstantThrustPolicy:
    """Holds one thrust pair for the whole run."""

    def __init__(self, left: float, right: float):
        if left < 0.0 or right < 0.0:
            raise ValueError(f"Thrust must be non-negative, got ({left}, {right})")
        self.command = ThrustCommand(float(left), float(right))

    def get_thrust(self, observation: Observation) -> ThrustCommand:
        return self.command


class BrakingProfilePolicy:
    """
    Descent-rate tracker with PD attitude hold.

    The target descent speed follows a constant-deceleration profile,
    v* = max(v_floor, sqrt(2 a h)). Total thrust cancels gravity and drag and
    adds a proportional correction on the speed error, so the closed loop obeys
    v̇ ≈ -k (v - v*). Differential thrust comes from a PD law on attitude:
    right-biased thrust spins the lander anti-clockwise, so a positive rotation
    is corrected with more thrust on the left.
    """

    def __init__(self, environment: Environment, specs: VehicleSpecification,
                 braking_deceleration: float = 10.0,
                 speed_gain: float = 5.0,
                 touchdown_speed: Optional[float] = None,
                 kp_attitude: float = 4.0,
                 kd_attitude: float = 4.0):
        """
        Args:
            environment: The planet
            specs: The lander
            braking_deceleration: Deceleration of the target profile (m/s^2)
            speed_gain: Speed-tracking gain k (1/s)
            touchdown_speed: Floor of the target speed (m/s), defaults to half
                the safe landing speed
            kp_attitude: Attitude proportional gain (1/s^2)
            kd_attitude: Attitude rate gain (1/s)
        """
        self.gravity = environment.gravity
        self.drag = drag_coefficient(environment, specs)
        self.empty_mass = specs.empty_mass
        self.max_thrust = specs.max_thrust

        self.braking_deceleration = braking_deceleration
        self.speed_gain = speed_gain
        if touchdown_speed is None:
            touchdown_speed = 0.5 * specs.safe_landing_speed
        self.touchdown_speed = touchdown_speed
        self.kp_attitude = kp_attitude
        self.kd_attitude = kd_attitude

    def target_speed(self, height: float) -> float:
        """Descent speed the profile asks for at this height (m/s)."""
        return max(self.touchdown_speed,
                   math.sqrt(2.0 * self.braking_deceleration * max(height, 0.0)))

    def get_thrust(self, observation: Observation) -> ThrustCommand:
        # already going up, or nothing left to burn
        if observation.speed_y < 0.0 or is_fuel_exhausted(observation.fuel):
            return ThrustCommand(0.0, 0.0)

        mass = self.empty_mass + observation.fuel
        error = observation.speed_y - self.target_speed(observation.height)

        total = mass * (self.gravity + self.speed_gain * error) - self.drag * observation.speed_y
        total = float(np.clip(total, 0.0, 2.0 * self.max_thrust))

        rotation = math.radians(observation.rotation)
        rotation_speed = math.radians(observation.rotation_speed)
        angular_accel = -(self.kp_attitude * rotation + self.kd_attitude * rotation_speed)
        differential = mass * C.RR2 * angular_accel

        left = float(np.clip(0.5 * (total - differential), 0.0, self.max_thrust))
        right = float(np.clip(0.5 * (total + differential), 0.0, self.max_thrust))
        return ThrustCommand(left, right)


class SteeringBalancePolicy:
    """
    A very rough steering add-on for another policy.

    Re-splits the wrapped policy's total thrust 49/51 towards the target when
    the lander is more than `deadband` metres off-site.
    """

    def __init__(self, inner: ControlPolicy, max_thrust: float,
                 deadband: float = 0.1, bias: float = 0.01):
        self.inner = inner
        self.max_thrust = max_thrust
        self.deadband = deadband
        self.bias = bias

    def get_thrust(self, observation: Observation) -> ThrustCommand:
        left, right = self.inner.get_thrust(observation)
        total = left + right

        balance = 0.5
        if observation.location > self.deadband:
            balance = 0.5 - self.bias
        elif observation.location < -self.deadband:
            balance = 0.5 + self.bias

        return ThrustCommand(min(balance * total, self.max_thrust),
                             min((1.0 - balance) * total, self.max_thrust))


def create_policy(name: str, environment: Environment,
                  specs: VehicleSpecification) -> ControlPolicy:
    """
    Build a stock policy by name.

    Args:
        name: 'zero', 'braking' or 'steering'

    Returns:
        A ControlPolicy
    """
    if name == 'zero':
        return ZeroThrustPolicy()
    if name == 'braking':
        return BrakingProfilePolicy(environment, specs)
    if name == 'steering':
        return SteeringBalancePolicy(BrakingProfilePolicy(environment, specs),
                                     specs.max_thrust)
    raise ValueError(f"Unknown policy: {name}")
