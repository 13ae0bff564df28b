"""
Lander Descent Simulation - Vehicle State

This module defines the mutable state of one lander run and the immutable
snapshot handed to observers. The state is only ever written by the owning
Vehicle's integration step; everybody else reads snapshots.
"""

from dataclasses import dataclass, asdict, fields
import math

import numpy as np


def wrap_angle(angle: float) -> float:
    """Wrap an angle in radians into (-pi, pi].

    Raises:
        ValueError: If the angle is infinite or NaN
    """
    if not math.isfinite(angle):
        raise ValueError(f"Cannot wrap non-finite angle {angle}")
    angle = math.remainder(angle, 2.0 * math.pi)
    if angle <= -math.pi:
        angle = math.pi
    return angle


@dataclass
class VehicleState:
    """
    State vector for one lander run.

    Attributes:
        height: Height above ground (m), 0 means touchdown
        speed_y: Vertical speed towards the surface (m/s)
        location: Lateral offset from the target, left (-ve) or right (+ve) (m)
        speed_x: Lateral speed towards the right (m/s)
        rotation: Attitude, anti-clockwise (rad)
        rotation_speed: Angular rate (rad/s)
        fuel: Fuel remaining (kg)
        thrust_left: Left nozzle thrust setting (N)
        thrust_right: Right nozzle thrust setting (N)
        t: Simulated time since reset (s)
        steps: Completed integration steps since reset
    """
    height: float = 0.0
    speed_y: float = 0.0
    location: float = 0.0
    speed_x: float = 0.0
    rotation: float = 0.0
    rotation_speed: float = 0.0
    fuel: float = 0.0
    thrust_left: float = 0.0
    thrust_right: float = 0.0
    t: float = 0.0
    steps: int = 0

    def copy(self) -> 'VehicleState':
        """Create a copy of the state."""
        return VehicleState(**asdict(self))

    def snapshot(self) -> 'VehicleSnapshot':
        """Freeze the current values for readers outside the run loop."""
        return VehicleSnapshot(**asdict(self))

    @property
    def speed(self) -> float:
        """Resultant speed (m/s)."""
        return math.hypot(self.speed_x, self.speed_y)

    @property
    def landed(self) -> bool:
        return self.height == 0.0

    def __str__(self) -> str:
        """Human-readable state summary."""
        return (
            f"VehicleState(t={self.t:.2f}s, "
            f"h={self.height:.1f}m, "
            f"vy={self.speed_y:.2f}m/s, "
            f"x={self.location:.2f}m, "
            f"fuel={self.fuel:.2f}kg)"
        )


@dataclass(frozen=True)
class VehicleSnapshot:
    """Immutable view of a VehicleState taken at one instant."""
    height: float
    speed_y: float
    location: float
    speed_x: float
    rotation: float
    rotation_speed: float
    fuel: float
    thrust_left: float
    thrust_right: float
    t: float
    steps: int

    @property
    def speed(self) -> float:
        """Resultant speed (m/s)."""
        return math.hypot(self.speed_x, self.speed_y)

    @property
    def landed(self) -> bool:
        return self.height == 0.0

    @property
    def wrapped_rotation(self) -> float:
        """Rotation normalised into (-pi, pi]."""
        return wrap_angle(self.rotation)

    def to_vector(self) -> np.ndarray:
        """Flatten to [height, speed_y, location, speed_x, rotation,
        rotation_speed, fuel, thrust_left, thrust_right, t]."""
        return np.array([getattr(self, f.name) for f in fields(self)
                         if f.name != 'steps'], dtype=np.float64)
