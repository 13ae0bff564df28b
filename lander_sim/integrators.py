"""
Lander Descent Simulation - Numerical Integration

This module implements the explicit Euler step for the lander. The order of
operations is fixed; reproducibility of a trajectory depends on it:

1. fuel burned and effective thrust
2. height (touchdown clamp)
3. location and rotation from pre-step speeds
4. mass from pre-burn fuel
5. gravity, drag, turbulence
6. thrust spin and push
7. fuel decrement (flame-out clamp)
"""

from typing import NamedTuple, Tuple

from .environment import Environment
from .specs import VehicleSpecification
from .state import VehicleState
from .dynamics import (
    drag_coefficient,
    compute_drag_deceleration,
    resolve_thrust,
    thrust_acceleration,
)
from .mass import (
    compute_fuel_used,
    compute_effective_thrust,
    is_fuel_exhausted,
    vehicle_mass,
)


class StepResult(NamedTuple):
    """Outcome of one integration step."""
    state: VehicleState
    fuel_used: float
    effective_thrust: Tuple[float, float]
    turbulence: Tuple[float, float]


def euler_step(state: VehicleState, specs: VehicleSpecification,
               environment: Environment, dt: float) -> StepResult:
    """
    Perform a single explicit Euler step.

    A lander already on the ground is returned unchanged and no turbulence is
    drawn.

    Args:
        state: Current state
        specs: Lander specification
        environment: Planet (its turbulence memory is advanced)
        dt: Time step (s)

    Returns:
        StepResult with the new state

    Raises:
        ValueError: If dt <= 0
    """
    if dt <= 0:
        raise ValueError(f"Time step dt must be positive, got {dt}")

    s = state.copy()
    if s.height <= 0.0:
        return StepResult(s, 0.0, (0.0, 0.0), (0.0, 0.0))

    # 1. Fuel and effective thrust
    fuel_used = compute_fuel_used(s.thrust_left + s.thrust_right, dt,
                                  specs.burn_rate, s.fuel)
    eff_left, eff_right = compute_effective_thrust(
        s.thrust_left, s.thrust_right, fuel_used, dt, specs.burn_rate
    )

    # 2. Height
    s.height = s.height - s.speed_y * dt
    if s.height <= 0.0:
        s.height = 0.0  # landed
        s.thrust_left = 0.0
        s.thrust_right = 0.0

    # 3. Location and rotation (pre-step speeds)
    s.location = s.location + s.speed_x * dt
    s.rotation = s.rotation + s.rotation_speed * dt

    # 4. Mass - neglect fuel burned in this step, should be small
    mass = vehicle_mass(specs, s.fuel)

    # 5. Gravity, friction with atmosphere (Stokes' law), turbulence
    s.speed_y += dt * environment.gravity

    k = drag_coefficient(environment, specs)
    s.speed_x -= dt * compute_drag_deceleration(s.speed_x, mass, k)
    s.speed_y -= dt * compute_drag_deceleration(s.speed_y, mass, k)

    ti = environment.sample_turbulent_impulse()
    s.speed_x += dt * ti[0] / mass
    s.speed_y += dt * ti[1] / mass

    # 6. Thrust
    resolution = resolve_thrust(eff_left, eff_right, mass)
    s.rotation_speed += dt * resolution.angular_acceleration
    ax, ay = thrust_acceleration(resolution.translational_thrust, s.rotation, mass)
    s.speed_y -= dt * float(ay)
    s.speed_x -= dt * float(ax)

    # 7. Fuel remaining
    s.fuel = s.fuel - fuel_used
    if is_fuel_exhausted(s.fuel):
        # out of fuel - shut off rocket
        s.thrust_left = 0.0
        s.thrust_right = 0.0

    s.t += dt
    s.steps += 1

    return StepResult(s, fuel_used, (eff_left, eff_right), ti)


def integrate(state: VehicleState, specs: VehicleSpecification,
              environment: Environment, dt: float, method: str = 'euler') -> StepResult:
    """
    Integrate the state forward by one timestep.

    Only the explicit Euler scheme is supported; the fitness of existing
    controllers depends on its exact trajectories.
    """
    if method == 'euler':
        return euler_step(state, specs, environment, dt)
    raise ValueError(f"Unknown integration method: {method}")
