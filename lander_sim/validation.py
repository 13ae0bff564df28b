"""
Lander Descent Simulation - Validation Checks

This module implements the boundary checks of the simulation:
- Thrust command acceptance (bounds, landed / out-of-fuel lockout)
- Planet and vehicle parameter invariants
- Lifecycle misuse errors

Thrust commands are rejected by returning False. Invalid parameters raise
ValidationError.
"""

import math


class ValidationError(Exception):
    """Raised when a physical parameter or initial condition is invalid."""
    pass


class LifecycleError(Exception):
    """Raised when a run is started or reconfigured in an invalid state."""
    pass


def is_thrust_command_valid(left: float, right: float, max_thrust: float,
                            fuel: float, height: float) -> bool:
    """
    Decide whether a thrust pair may be applied.

    Once the lander is out of fuel or on the ground only (0, 0) is accepted.
    Otherwise each channel must lie in [0, max_thrust].

    Args:
        left: Requested left thrust (N)
        right: Requested right thrust (N)
        max_thrust: Per-nozzle thrust ceiling (N)
        fuel: Fuel remaining (kg)
        height: Height above ground (m)

    Returns:
        True if the command can be applied
    """
    if fuel == 0.0 or height == 0.0:
        return left == 0.0 and right == 0.0

    # NaN fails every comparison, so test for the accepted range explicitly
    return (0.0 <= left <= max_thrust) and (0.0 <= right <= max_thrust)


def check_positive(name: str, value: float) -> bool:
    """
    Check that a parameter is a finite, strictly positive number.

    Returns:
        True if valid, raises ValidationError otherwise
    """
    if not math.isfinite(value) or value <= 0.0:
        raise ValidationError(f"{name} must be finite and positive, got {value}")
    return True


def check_non_negative(name: str, value: float) -> bool:
    """
    Check that a parameter is a finite, non-negative number.

    Returns:
        True if valid, raises ValidationError otherwise
    """
    if not math.isfinite(value) or value < 0.0:
        raise ValidationError(f"{name} must be finite and non-negative, got {value}")
    return True


def check_initial_conditions(height: float, fuel: float, fuel_capacity: float) -> bool:
    """
    Check constructor overrides for a lander.

    Args:
        height: Initial height (m)
        fuel: Initial fuel (kg)
        fuel_capacity: Tank capacity (kg)

    Returns:
        True if valid, raises ValidationError otherwise
    """
    check_non_negative("height", height)
    check_non_negative("fuel", fuel)
    if fuel > fuel_capacity:
        raise ValidationError(
            f"Initial fuel exceeds capacity: fuel = {fuel:.2f} kg, "
            f"capacity = {fuel_capacity:.2f} kg"
        )
    return True
