"""
Lander Descent Simulation - Fuel consumption and mass computations.
"""

from typing import Tuple

from .specs import VehicleSpecification


def compute_fuel_used(thrust_total: float, dt: float, burn_rate: float,
                      fuel: float) -> float:
    """
    Fuel burned over one step, clamped to what is left in the tank.

    Neglects the possibility that landing occurs during the step; with a small
    timestep that should not matter much.
    """
    return min(fuel, thrust_total * dt * burn_rate)


def compute_effective_thrust(thrust_left: float, thrust_right: float,
                             fuel_used: float, dt: float,
                             burn_rate: float) -> Tuple[float, float]:
    """
    Thrust actually realised for the fuel burned this step.

    When the tank runs dry mid-step both channels are scaled down by the same
    ratio, so the engines throttle down rather than cutting off abruptly.

    Returns:
        (effective_left, effective_right) in N
    """
    thrust_total = thrust_left + thrust_right
    if thrust_total <= 0.0:
        return 0.0, 0.0

    effective_total = fuel_used / (dt * burn_rate)
    scale = effective_total / thrust_total
    return scale * thrust_left, scale * thrust_right


def vehicle_mass(specs: VehicleSpecification, fuel: float) -> float:
    """Total mass (kg) for the given fuel load."""
    return specs.empty_mass + fuel


def is_fuel_exhausted(fuel: float) -> bool:
    """True once the tank is empty."""
    return fuel <= 0.0


def get_fuel_fraction(specs: VehicleSpecification, fuel: float) -> float:
    """Fraction of the tank remaining, in [0, 1]."""
    return max(0.0, min(1.0, fuel / specs.fuel_capacity))
