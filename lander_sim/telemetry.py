"""
Lander Descent Simulation - Trajectory Logging

A TrajectoryLog is a vehicle observer that records the snapshot handed out
after every step, for plotting and for comparing runs.
"""

from dataclasses import dataclass, field
from typing import List

import numpy as np

from .state import VehicleSnapshot


@dataclass
class TrajectoryLog:
    """Container for logged simulation data."""
    time: List[float] = field(default_factory=list)
    height: List[float] = field(default_factory=list)
    speed_y: List[float] = field(default_factory=list)
    location: List[float] = field(default_factory=list)
    speed_x: List[float] = field(default_factory=list)
    rotation_deg: List[float] = field(default_factory=list)
    rotation_speed_deg: List[float] = field(default_factory=list)
    fuel: List[float] = field(default_factory=list)
    thrust_left: List[float] = field(default_factory=list)
    thrust_right: List[float] = field(default_factory=list)
    landed: bool = False

    def append(self, snapshot: VehicleSnapshot) -> None:
        """Log data from current timestep."""
        self.time.append(snapshot.t)
        self.height.append(snapshot.height)
        self.speed_y.append(snapshot.speed_y)
        self.location.append(snapshot.location)
        self.speed_x.append(snapshot.speed_x)
        self.rotation_deg.append(float(np.degrees(snapshot.rotation)))
        self.rotation_speed_deg.append(float(np.degrees(snapshot.rotation_speed)))
        self.fuel.append(snapshot.fuel)
        self.thrust_left.append(snapshot.thrust_left)
        self.thrust_right.append(snapshot.thrust_right)

    def on_step_completed(self, landed: bool, snapshot: VehicleSnapshot) -> None:
        self.append(snapshot)
        self.landed = landed

    def clear(self) -> None:
        """Drop all samples, e.g. between runs."""
        for values in (self.time, self.height, self.speed_y, self.location,
                       self.speed_x, self.rotation_deg, self.rotation_speed_deg,
                       self.fuel, self.thrust_left, self.thrust_right):
            values.clear()
        self.landed = False

    def __len__(self) -> int:
        return len(self.time)

    def to_array(self) -> np.ndarray:
        """Stack the samples as rows of [t, height, speed_y, location,
        speed_x, rotation_deg, rotation_speed_deg, fuel, thrust_left,
        thrust_right]."""
        return np.column_stack([
            self.time, self.height, self.speed_y, self.location, self.speed_x,
            self.rotation_deg, self.rotation_speed_deg, self.fuel,
            self.thrust_left, self.thrust_right,
        ]) if self.time else np.zeros((0, 10))
