"""
Lander Descent Simulation - Dynamics Equations

This module implements the planar point-mass force model:
- Gravity: v̇_y = g (towards the surface)
- Stokes drag: F = 6 π r η v, applied to both speed components
- Turbulence: impulse / m on both speed components
- Thrust: differential thrust spins the lander, the common component
  (smaller channel doubled) pushes along the current attitude
"""

from typing import NamedTuple

import numpy as np

from . import constants as C
from .environment import Environment
from .specs import VehicleSpecification


class ThrustResolution(NamedTuple):
    """Split of a thrust pair into spin and push."""
    angular_acceleration: float  # rad/s^2, anti-clockwise positive
    translational_thrust: float  # N along the lander axis


def terminal_velocity(environment: Environment, specs: VehicleSpecification) -> float:
    """
    Calculate the terminal velocity of a full lander on this planet.

    v_t = 0.5 (m_empty + m_fuel) g / (6 π r η)

    Args:
        environment: The planet being landed on
        specs: Lander specification

    Returns:
        Terminal velocity in m/s
    """
    return (0.5 * specs.full_mass * environment.gravity
            / (C.STOKES_FACTOR * specs.radius * environment.viscosity))


def drag_coefficient(environment: Environment, specs: VehicleSpecification) -> float:
    """Stokes drag coefficient 6 π r η (N.s/m)."""
    return C.STOKES_FACTOR * specs.radius * environment.viscosity


def compute_drag_deceleration(speed: float, mass: float, coefficient: float) -> float:
    """
    Deceleration from Stokes drag (m/s^2), same sign as speed.

    Rotation is not damped by the atmosphere.
    """
    return coefficient * speed / mass


def resolve_thrust(effective_left: float, effective_right: float,
                   mass: float) -> ThrustResolution:
    """
    Resolve an asymmetric thrust pair into rotation and translation.

    Right-biased thrust spins the lander anti-clockwise. Only the common part of
    the two channels (twice the smaller one) produces net push; the difference
    purely spins the vehicle.

    Args:
        effective_left: Realised left thrust (N)
        effective_right: Realised right thrust (N)
        mass: Current vehicle mass (kg)

    Returns:
        ThrustResolution with angular acceleration and translational thrust
    """
    if effective_right >= effective_left:
        rotation_thrust = effective_right - effective_left
        return ThrustResolution(rotation_thrust / (mass * C.RR2), 2.0 * effective_left)

    rotation_thrust = effective_left - effective_right
    return ThrustResolution(-rotation_thrust / (mass * C.RR2), 2.0 * effective_right)


def thrust_acceleration(thrust: float, rotation: float, mass: float) -> np.ndarray:
    """
    Acceleration [a_x, a_y] produced by translational thrust along the attitude.

    Both components are subtracted from the speeds: thrust opposes descent when
    upright and pushes left (-x) when rotated anti-clockwise.
    """
    return thrust * np.array([np.sin(rotation), np.cos(rotation)]) / mass
