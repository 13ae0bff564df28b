"""
Lander Descent Simulation - Vehicle Specification

Static parameters of a lander. A specification is immutable and shared
read-only by every Vehicle and every run built from it.
"""

from dataclasses import dataclass, fields

from . import constants as C
from .validation import check_positive


@dataclass(frozen=True)
class VehicleSpecification:
    """
    Specifications for a lander.

    Attributes:
        empty_mass: Dry mass (kg)
        fuel_capacity: Full tank (kg)
        burn_rate: Fuel burned per unit impulse (kg/(N.s)) = 1 / exhaust velocity
        max_thrust: Thrust ceiling of each nozzle (N)
        radius: Body radius used for Stokes drag (m)
        start_height: Height at the start of a run (m)
        safe_landing_speed: Touchdown speed survived without damage (m/s)
    """
    empty_mass: float
    fuel_capacity: float
    burn_rate: float
    max_thrust: float
    radius: float
    start_height: float
    safe_landing_speed: float

    def __post_init__(self):
        for f in fields(self):
            value = float(getattr(self, f.name))
            check_positive(f.name, value)
            object.__setattr__(self, f.name, value)

    @property
    def full_mass(self) -> float:
        """Mass with a full tank (kg)."""
        return self.empty_mass + self.fuel_capacity


def create_mars_lander_specs() -> VehicleSpecification:
    """
    Create specs for a Mars lander.

    Returns:
        The default Mars lander specification
    """
    return VehicleSpecification(
        empty_mass=C.LANDER_EMPTY_MASS,
        fuel_capacity=C.LANDER_FUEL_CAPACITY,
        burn_rate=C.LANDER_BURN_RATE,
        max_thrust=C.LANDER_MAX_THRUST,
        radius=C.LANDER_RADIUS,
        start_height=C.LANDER_START_HEIGHT,
        safe_landing_speed=C.LANDER_SAFE_LANDING_SPEED,
    )
